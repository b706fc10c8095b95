# schemas/client.py
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict


class ClientCreate(BaseModel):
     name: str = Field(..., min_length=1, max_length=255)
     email: Optional[str] = Field(None, max_length=255)
     gstin: Optional[str] = Field(None, max_length=32)
     phone: Optional[str] = Field(None, max_length=50)


class ClientUpdate(BaseModel):
     """Only provided fields are updated."""
     name: Optional[str] = Field(None, min_length=1, max_length=255)
     email: Optional[str] = Field(None, max_length=255)
     gstin: Optional[str] = Field(None, max_length=32)
     phone: Optional[str] = Field(None, max_length=50)


class ClientResponse(BaseModel):
     id: int
     name: str
     email: Optional[str] = None
     gstin: Optional[str] = None
     phone: Optional[str] = None
     created_at: Optional[datetime] = None
     updated_at: Optional[datetime] = None

     model_config = ConfigDict(from_attributes=True)
