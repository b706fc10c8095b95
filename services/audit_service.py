# services/audit_service.py
from typing import Optional

from sqlalchemy.orm import Session

from models import AuditLog

INVOICE_CREATED = "INVOICE_CREATED"
INVOICE_REVOKED = "INVOICE_REVOKED"


def log_audit(
     db: Session,
     actor_id: Optional[int],
     action: str,
     entity: Optional[str] = None,
     entity_ref: Optional[str] = None,
     payload: Optional[dict] = None,
) -> AuditLog:
     """Append an audit row to the current transaction; the caller commits."""
     entry = AuditLog(
          actor_id=actor_id,
          action=action,
          entity=entity,
          entity_ref=entity_ref,
          payload=payload,
     )
     db.add(entry)
     return entry
