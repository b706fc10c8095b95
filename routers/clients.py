# routers/clients.py
"""
Client API routes (issuer-scoped).

Editing a client never changes issued invoices: each invoice keeps the
client name it was issued with.
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from auth import get_caller_id
from database import get_session
from models import Client
from schemas.client import ClientCreate, ClientUpdate, ClientResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/clients", tags=["clients"])


def _get_own_client(db: Session, caller_id: int, client_id: int) -> Client:
     client = db.get(Client, client_id)
     if client is None or client.issuer_id != caller_id:
          raise HTTPException(
               status_code=status.HTTP_404_NOT_FOUND,
               detail=f"Client with ID {client_id} not found"
          )
     return client


@router.post(
     "",
     response_model=ClientResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Create a client"
)
def create_client(
     client_data: ClientCreate,
     db: Session = Depends(get_session),
     caller_id: int = Depends(get_caller_id),
):
     client = Client(issuer_id=caller_id, **client_data.model_dump())
     db.add(client)
     db.commit()
     db.refresh(client)
     return client


@router.get(
     "",
     response_model=List[ClientResponse],
     summary="List the caller's clients"
)
def list_clients(
     db: Session = Depends(get_session),
     caller_id: int = Depends(get_caller_id),
):
     stmt = select(Client).where(Client.issuer_id == caller_id).order_by(Client.name)
     return db.execute(stmt).scalars().all()


@router.get(
     "/{client_id}",
     response_model=ClientResponse,
     summary="Get client by ID"
)
def get_client(
     client_id: int,
     db: Session = Depends(get_session),
     caller_id: int = Depends(get_caller_id),
):
     return _get_own_client(db, caller_id, client_id)


@router.put(
     "/{client_id}",
     response_model=ClientResponse,
     summary="Update client"
)
def update_client(
     client_id: int,
     client_data: ClientUpdate,
     db: Session = Depends(get_session),
     caller_id: int = Depends(get_caller_id),
):
     """Only provided fields will be updated."""
     client = _get_own_client(db, caller_id, client_id)

     for field, value in client_data.model_dump(exclude_unset=True).items():
          setattr(client, field, value)

     db.commit()
     db.refresh(client)
     return client


@router.delete(
     "/{client_id}",
     summary="Delete client"
)
def delete_client(
     client_id: int,
     db: Session = Depends(get_session),
     caller_id: int = Depends(get_caller_id),
):
     """Issued invoices keep their client name snapshot and stay verifiable."""
     client = _get_own_client(db, caller_id, client_id)
     db.delete(client)
     db.commit()
     logger.info("Client %s deleted by user %s", client_id, caller_id)
     return {"message": "Client deleted successfully"}
