"""
➡️ But : Définir la taxonomie d'erreurs métier et les convertir en réponses JSON.

Les services lèvent ces exceptions (jamais de HTTPException dans la couche métier),
register_exception_handlers(app) les traduit en codes HTTP :

ValidationFailed / InvalidCredentials → 422 (détail par champ)
Unauthenticated → 401
Forbidden / AccountDeactivated → 403
NotFound → 404
TransactionFailed → 500 (transaction annulée, cause exposée pour diagnostic)
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AppError(Exception):
    status_code: int = status.HTTP_400_BAD_REQUEST
    default_message: str = "Bad request"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {"status": "error", "message": self.message}


class ValidationFailed(AppError):
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    default_message = "Validation failed"

    def __init__(self, errors: Dict[str, List[str]], message: Optional[str] = None):
        super().__init__(message)
        self.errors = errors

    @classmethod
    def single(cls, field: str, msg: str) -> "ValidationFailed":
        return cls({field: [msg]})

    @classmethod
    def reject_nulls(cls, data: Dict[str, Any], fields) -> None:
        """Lève si un champ obligatoire est envoyé explicitement à null."""
        missing = [f for f in fields if f in data and data[f] is None]
        if missing:
            raise cls({f: [f"The {f.replace('_', ' ')} field is required."] for f in missing})

    def to_dict(self) -> Dict[str, Any]:
        return {"status": "error", "message": self.message, "errors": self.errors}


class InvalidCredentials(ValidationFailed):
    def __init__(self):
        # Même message que l'email existe ou non
        super().__init__({"email": ["The provided credentials are incorrect."]})


class Unauthenticated(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthenticated."


class Forbidden(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Unauthorized. You do not have the required role to access this resource."


class AccountDeactivated(Forbidden):
    default_message = "Your account has been deactivated. Please contact the administrator."


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"

    @classmethod
    def resource(cls, name: str) -> "NotFound":
        return cls(f"{name} not found")


class TransactionFailed(AppError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Operation failed"

    def __init__(self, message: Optional[str] = None, *, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause

    def to_dict(self) -> Dict[str, Any]:
        body = super().to_dict()
        body["error"] = str(self.cause) if self.cause else None
        return body


# -----------------------------
# Handlers FastAPI
# -----------------------------

def _field_errors(exc: RequestValidationError) -> Dict[str, List[str]]:
    errors: Dict[str, List[str]] = {}
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        field = loc[-1] if loc else "body"
        errors.setdefault(field, []).append(err.get("msg", "Invalid value"))
    return errors


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if isinstance(exc, TransactionFailed):
        logger.error("%s %s: %s (%s)", request.method, request.url.path, exc.message, exc.cause)
    elif isinstance(exc, Forbidden):
        logger.warning("%s %s denied: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=ValidationFailed(_field_errors(exc)).to_dict(),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"status": "error", "message": "Internal server error", "error": str(exc)},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
