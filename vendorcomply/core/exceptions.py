"""Application-level exceptions and FastAPI exception handlers."""


from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

class AppException(Exception):
    """Base application exception."""

    def __init__(self, message: str, status_code: int = 500, code: str = "INTERNAL_ERROR"):
        self.message = message
        self.status_code = status_code
        self.code = code
        super().__init__(message)

class NotFoundError(AppException):
    def __init__(self, entity: str, entity_id: str | None = None):
        msg = f"{entity} not found" if not entity_id else f"{entity} '{entity_id}' not found"
        super().__init__(msg, status_code=404, code="NOT_FOUND")

class ForbiddenError(AppException):
    def __init__(self, message: str = "Access denied"):
        super().__init__(message, status_code=403, code="FORBIDDEN")

class UnauthorizedError(AppException):
    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, status_code=401, code="UNAUTHORIZED")

class InvalidStateError(AppException):
    """A lifecycle transition was attempted from a state that does not allow it."""

    def __init__(self, message: str):
        super().__init__(message, status_code=409, code="INVALID_STATE")

class ValidationError(AppException):
    """Malformed or inconsistent input. ``field`` names the offending camelCase field."""

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        super().__init__(message, status_code=422, code="VALIDATION_ERROR")

class PlanLimitError(AppException):
    """The organization's plan does not allow creating another resource of this kind."""

    def __init__(self, resource: str, limit: int):
        self.resource = resource
        self.limit = limit
        super().__init__(
            f"Plan limit reached: at most {limit} {resource}s. Upgrade your plan to add more.",
            status_code=402,
            code="PLAN_LIMIT_REACHED",
        )

class PortalLinkError(AppException):
    """Unknown or expired portal token. Both cases produce the same response."""

    def __init__(self):
        super().__init__("Invalid or expired portal link", status_code=404, code="NOT_FOUND")

class FileRejectedError(AppException):
    """The uploaded file is empty, too large or of an unsupported type."""

    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message, status_code=status_code, code="FILE_REJECTED")

# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------

def _error_body(code: str, message: str, fields: dict[str, str] | None = None) -> dict:
    body: dict = {"code": code, "message": message}
    if fields:
        body["fields"] = fields
    return {"error": body}

def register_exception_handlers(app: FastAPI) -> None:
    """Attach all custom exception handlers to the FastAPI app."""

    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
        fields = None
        if isinstance(exc, ValidationError) and exc.field:
            fields = {exc.field: exc.message}
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.code, exc.message, fields),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        fields = {
            ".".join(str(p) for p in err["loc"] if p != "body"): err["msg"]
            for err in exc.errors()
        }
        return JSONResponse(
            status_code=422,
            content=_error_body("VALIDATION_ERROR", "Invalid request data", fields),
        )

    @app.exception_handler(404)
    async def not_found_handler(request: Request, exc: Exception) -> JSONResponse:
        return JSONResponse(
            status_code=404,
            content=_error_body("NOT_FOUND", "Resource not found"),
        )

    @app.exception_handler(500)
    async def internal_error_handler(request: Request, exc: Exception) -> JSONResponse:
        return JSONResponse(
            status_code=500,
            content=_error_body("INTERNAL_ERROR", "An unexpected error occurred"),
        )
