# services/identity_service.py
"""
Public identifier allocation.

Public ids are random version-4 UUIDs built from CSPRNG bytes. They are
unrelated to the internal sequential id, so they cannot be enumerated.
"""
import secrets
import uuid
from typing import Callable, Optional


def allocate_public_id(random_bytes: Callable[[int], bytes] = secrets.token_bytes) -> str:
     """Mint a new public identifier (canonical lowercase UUID string)."""
     return str(uuid.UUID(bytes=random_bytes(16), version=4))


def normalize_public_id(value: Optional[str]) -> Optional[str]:
     """
     Canonical form of a caller-supplied public id.

     Returns None for anything that is not a UUID, so malformed and
     unknown ids end up on the same lookup-miss path.
     """
     if not value:
          return None
     try:
          return str(uuid.UUID(value.strip()))
     except (ValueError, AttributeError):
          return None
