# routers/errors.py
from fastapi import HTTPException, status

from services.exceptions import (
     AlreadyRevoked,
     Forbidden,
     InvalidArgument,
     InvalidContent,
     InvoiceIntegrityError,
     InvoiceNotFound,
     StoreUnavailable,
)

_STATUS_CODES = {
     InvalidContent: status.HTTP_422_UNPROCESSABLE_CONTENT,
     InvoiceNotFound: status.HTTP_404_NOT_FOUND,
     Forbidden: status.HTTP_403_FORBIDDEN,
     InvalidArgument: status.HTTP_400_BAD_REQUEST,
     AlreadyRevoked: status.HTTP_409_CONFLICT,
     StoreUnavailable: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def to_http_exception(exc: InvoiceIntegrityError) -> HTTPException:
     """Surface a service error as a distinct status with a machine-readable code."""
     status_code = _STATUS_CODES.get(type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)
     return HTTPException(
          status_code=status_code,
          detail={"code": exc.code, "message": exc.message},
     )
