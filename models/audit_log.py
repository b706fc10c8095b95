# models/audit_log.py
"""
AuditLog model - append-only trail of integrity events.

Rows are written in the same transaction as the change they describe
(invoice issued, invoice revoked) and are never updated or deleted.
"""
from sqlalchemy import Column, Integer, String, DateTime, JSON, ForeignKey, func
from .base import Base


class AuditLog(Base):

     id = Column(Integer, primary_key=True, autoincrement=True)
     actor_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)

     action = Column(String(64), nullable=False)      # e.g. "INVOICE_CREATED", "INVOICE_REVOKED"
     entity = Column(String(64), nullable=True)       # e.g. "invoice"
     entity_ref = Column(String(64), nullable=True, index=True)  # public id of the entity

     payload = Column(JSON, nullable=True)

     created_at = Column(DateTime, server_default=func.now(), nullable=False)

     def __repr__(self):
          return f"<AuditLog(id={self.id}, action='{self.action}', entity_ref='{self.entity_ref}')>"
