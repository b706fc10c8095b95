import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import CORS_ORIGINS, LOG_LEVEL, PORT
from database import check_connection
from routers import clients_router, invoices_router, verification_router

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# App instance
app = FastAPI(title="Invoice Integrity Service", version="1.0.0")

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Public verification first so /api/invoices/verify/... is never taken for an invoice route
app.include_router(verification_router)
app.include_router(invoices_router)
app.include_router(clients_router)


@app.get("/api/health")
def health():
    database_ok = check_connection()
    return {"status": "ok" if database_ok else "degraded", "database": database_ok}


# Internal error fallback
@app.middleware("http")
async def internal_error_middleware(request: Request, call_next):
    try:
        return await call_next(request)
    except Exception:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})


if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=PORT, reload=True)
