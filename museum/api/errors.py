# museum/api/errors.py
from fastapi import HTTPException

from museum.domain.errors import (
    ConcurrencyConflict,
    FieldValidationError,
    MissingCartToken,
)

# wyjatki domenowe tlumaczone na odpowiedzi HTTP w routerach
DOMAIN_ERRORS = (PermissionError, LookupError, ValueError, ConcurrencyConflict)


def http_error(exc: Exception) -> HTTPException:
    if isinstance(exc, PermissionError):
        return HTTPException(status_code=403, detail=str(exc))
    if isinstance(exc, LookupError):
        return HTTPException(status_code=404, detail=str(exc))
    if isinstance(exc, MissingCartToken):
        return HTTPException(status_code=400, detail=str(exc))
    if isinstance(exc, FieldValidationError):
        return HTTPException(
            status_code=422,
            detail={"message": str(exc), "errors": exc.errors},
        )
    if isinstance(exc, ConcurrencyConflict):
        return HTTPException(status_code=409, detail=str(exc))
    return HTTPException(status_code=422, detail=str(exc))
