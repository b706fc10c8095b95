# database.py
"""
SQLAlchemy database connection and session management.

This module provides:
- Database engine configuration (MS SQL Server in production, SQLite in tests)
- Session factory for dependency injection
- Connection utilities

Usage:
     from database import get_session, engine

     # In FastAPI routes:
     @router.get("/items")
     def get_items(db: Session = Depends(get_session)):
          return db.query(Item).all()
     """
import logging
from typing import Generator

from sqlalchemy import create_engine, text
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import QueuePool

from config import DATABASE_URL, SQL_ECHO

logger = logging.getLogger(__name__)


def _engine_options(url: str) -> dict:
     """Pool settings only apply to server databases; SQLite manages its own."""
     if url.startswith("sqlite"):
          return {"connect_args": {"check_same_thread": False}}
     return {
          "poolclass": QueuePool,
          "pool_size": 5,
          "max_overflow": 10,
          "pool_timeout": 30,
          "pool_recycle": 1800,  # Recycle connections after 30 minutes
          "pool_pre_ping": True,
     }


# Create SQLAlchemy engine
engine = create_engine(
     DATABASE_URL,
     echo=SQL_ECHO,  # Log SQL if SQL_ECHO=true
     **_engine_options(DATABASE_URL),
)

# Session factory
SessionLocal = sessionmaker(
     bind=engine,
     autocommit=False,
     autoflush=False,
     expire_on_commit=False,
)


def get_session() -> Generator[Session, None, None]:
     """
     FastAPI dependency that provides a database session.

     Services commit their own units of work; anything left pending when
     the request fails is rolled back here.

     Yields:
          Session: SQLAlchemy database session
     """
     session = SessionLocal()
     try:
          yield session
          session.commit()
     except Exception:
          session.rollback()
          raise
     finally:
          session.close()


def check_connection() -> bool:
     """
     Test database connectivity.

     Returns:
          bool: True if connection successful, False otherwise
     """
     try:
          with engine.connect() as conn:
               conn.execute(text("SELECT 1"))
          return True
     except Exception:
          logger.exception("Database connection check failed")
          return False
