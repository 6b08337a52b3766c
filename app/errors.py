"""
Error taxonomy and FastAPI exception handlers.

Every error response has the shape {"error": "<message>"}. Domain errors carry
their own status code and user-safe message. Database and unexpected errors are
logged server side with their traceback and answered with a generic 500.
"""

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.utils.logger import logger


class JobBoardError(Exception):
    """Base class for errors that map directly to an HTTP response"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "An unexpected error occurred"

    def __init__(self, message: str = None):
        if message:
            self.message = message
        super().__init__(self.message)


class ValidationError(JobBoardError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid request"


class Unauthenticated(JobBoardError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Not authenticated"


class UserNotFound(JobBoardError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "User not found"


class InvalidCredentials(JobBoardError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Invalid email or password"


class Forbidden(JobBoardError):
    status_code = status.HTTP_403_FORBIDDEN
    message = "Access denied"


class NotFound(JobBoardError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Not found"


class DuplicateEmail(JobBoardError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Email already registered"


class DuplicateApplication(JobBoardError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "You have already applied to this job"


class VacancyFull(JobBoardError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "All vacancies have already been filled"


class InfrastructureError(JobBoardError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "A database error occurred"


class AuthInfrastructureError(InfrastructureError):
    message = "Authentication error"


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _format_validation_errors(exc: RequestValidationError) -> str:
    """Collapse pydantic errors into one readable line"""
    parts = []
    for error in exc.errors():
        # Drop the leading "body"/"query"/"path" location segment
        loc = [str(p) for p in error.get("loc", ())[1:]]
        field = ".".join(loc)
        parts.append(f"{field}: {error['msg']}" if field else error["msg"])
    return "; ".join(parts) or "Invalid request"


def setup_error_handlers(app):
    """Register exception handlers on the FastAPI application"""

    @app.exception_handler(JobBoardError)
    async def job_board_error_handler(request: Request, exc: JobBoardError):
        if exc.status_code >= 500:
            logger.error(
                f"{type(exc).__name__}: {request.method} {request.url.path} - {exc.message}",
                exc_info=exc if exc.__cause__ is not None else None,
            )
        else:
            logger.warning(
                f"{type(exc).__name__}: {request.method} {request.url.path} - {exc.message}"
            )
        return _error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        message = _format_validation_errors(exc)
        logger.warning(f"Validation error: {request.method} {request.url.path} - {message}")
        return _error_response(status.HTTP_400_BAD_REQUEST, message)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return _error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(SQLAlchemyError)
    async def database_exception_handler(request: Request, exc: SQLAlchemyError):
        logger.error(
            f"Database error: {request.method} {request.url.path} - {type(exc).__name__}",
            exc_info=exc,
        )
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, InfrastructureError.message)

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.error(
            f"Unhandled exception: {request.method} {request.url.path} - {type(exc).__name__}",
            exc_info=exc,
        )
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, JobBoardError.message)
