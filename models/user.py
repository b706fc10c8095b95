# models/user.py
from sqlalchemy import Column, Integer, String, DateTime, func
from sqlalchemy.orm import relationship
from .base import Base


class User(Base):
     """
     User model - issuer profile.

     Accounts are provisioned by the surrounding authentication system;
     this service only reads them to resolve the issuer display name.
     """
     id = Column(Integer, primary_key=True, autoincrement=True)
     email = Column(String(255), unique=True, nullable=False, index=True)
     first_name = Column(String(100), nullable=False)
     last_name = Column(String(100), nullable=False)
     business_name = Column(String(255), nullable=True)
     created_at = Column(DateTime, server_default=func.now(), nullable=False)

     # Relationships
     clients = relationship("Client", back_populates="issuer")
     invoices = relationship("Invoice", back_populates="issuer", foreign_keys="Invoice.issuer_id")

     @property
     def display_name(self) -> str:
          """Name shown on verification results."""
          if self.business_name:
               return self.business_name
          return f"{self.first_name} {self.last_name}"

     def __repr__(self):
          return f"<User(id={self.id}, email='{self.email}')>"
