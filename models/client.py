# models/client.py
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from .base import Base


class Client(Base):
     """
     Client model - the billed party of an invoice.

     Clients stay editable; invoices keep their own snapshot of the
     client name, so edits here never touch issued invoices.
     """
     id = Column(Integer, primary_key=True, autoincrement=True)
     issuer_id = Column(
          Integer,
          ForeignKey("users.id", ondelete="CASCADE"),
          nullable=False,
          index=True
     )

     name = Column(String(255), nullable=False)
     email = Column(String(255), nullable=True)
     gstin = Column(String(32), nullable=True)
     phone = Column(String(50), nullable=True)

     # Timestamps
     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

     # Relationships
     issuer = relationship("User", back_populates="clients")
     invoices = relationship("Invoice", back_populates="client")

     def __repr__(self):
          return f"<Client(id={self.id}, name='{self.name}')>"
