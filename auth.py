# auth.py
"""
Caller identity for authenticated routes.

Tokens are issued by the surrounding authentication layer; this module
only decodes them. Identity is handed to the services explicitly.
"""
from datetime import datetime, timedelta, timezone
from typing import Any, Dict

from fastapi import Depends, HTTPException, Request, status
from jose import JWTError, jwt

from config import JWT_ALGORITHM, JWT_EXPIRE_MIN, JWT_SECRET


def create_access_token(data: Dict[str, Any], expires_minutes: int = JWT_EXPIRE_MIN) -> str:
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + timedelta(minutes=expires_minutes)
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, JWT_SECRET, algorithm=JWT_ALGORITHM)


# Token Auth Dependency
def verify_token(request: Request) -> dict:
    auth = request.headers.get("Authorization")
    if not auth or not auth.startswith("Bearer "):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing token")
    token = auth.split(" ", 1)[1]
    try:
        payload = jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
        return payload
    except JWTError:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Invalid token")


def get_caller_id(token: dict = Depends(verify_token)) -> int:
    """Identity of the authenticated caller (the token's ``id`` claim)."""
    user_id = token.get("id")
    try:
        return int(user_id)
    except (TypeError, ValueError):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token payload")
