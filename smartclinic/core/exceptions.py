"""
Error taxonomy for the clinic services.

Services raise these directly; being HTTPException subclasses, FastAPI turns
them into responses with the matching status code and a ``detail`` message.
"""
from fastapi import HTTPException, status


class ClinicError(HTTPException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Internal server error"

    def __init__(self, detail: str | None = None, headers: dict | None = None):
        super().__init__(
            status_code=self.status_code,
            detail=detail or self.default_detail,
            headers=headers,
        )


class BadRequest(ClinicError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Bad request"


class Unauthorized(ClinicError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Could not validate credentials"

    def __init__(self, detail: str | None = None):
        super().__init__(detail, headers={"WWW-Authenticate": "Bearer"})


class Forbidden(ClinicError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Not authorized"


class NotFound(ClinicError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"


class Conflict(ClinicError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Conflict"


class InternalError(ClinicError):
    """Response for storage failures, built by the SQLAlchemyError handler in main."""
