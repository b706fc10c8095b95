# config.py
import os
from pathlib import Path
from urllib.parse import quote_plus

from dotenv import load_dotenv

# Load .env from project root
BASE_DIR = Path(__file__).resolve().parent
load_dotenv(BASE_DIR / ".env")


def _build_mssql_url() -> str:
    safe_user = quote_plus(os.getenv("DB_USER") or "")
    safe_pass = quote_plus(os.getenv("DB_PASS") or "")
    server = os.getenv("DB_SERVER")
    port = os.getenv("DB_PORT", "1433")
    name = os.getenv("DB_NAME")
    return f"mssql+pymssql://{safe_user}:{safe_pass}@{server}:{port}/{name}"


# Database
DATABASE_URL = os.getenv("DATABASE_URL") or _build_mssql_url()
SQL_ECHO = os.getenv("SQL_ECHO", "false").lower() == "true"

# Auth
JWT_SECRET = os.getenv("JWT_SECRET", "CHANGE_ME_SECRET")
JWT_ALGORITHM = "HS256"
JWT_EXPIRE_MIN = int(os.getenv("JWT_EXPIRE_MIN", "720"))

# HTTP
CORS_ORIGINS = [o for o in os.getenv("CORS_ORIGINS", "").split(",") if o]
PORT = int(os.getenv("PORT", "10000"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
