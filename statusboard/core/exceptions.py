from fastapi import Request
from fastapi.responses import JSONResponse


class StatusPageError(Exception):
    """Base exception for status page API errors."""

    def __init__(
        self,
        code: str,
        message: str,
        status: int = 500,
        details: dict | None = None,
    ):
        self.code = code
        self.message = message
        self.status = status
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        result = {
            "error": {
                "code": self.code,
                "message": self.message,
                "status": self.status,
            }
        }
        if self.details:
            result["error"]["details"] = self.details
        return result


class InvalidRequestError(StatusPageError):
    def __init__(self, message: str = "Invalid request parameters.", code: str = "invalid_request", details: dict | None = None):
        super().__init__(code=code, message=message, status=400, details=details)


class AggregationError(StatusPageError):
    def __init__(self, message: str = "Failed to check services.", details: dict | None = None):
        super().__init__(code="aggregation_failed", message=message, status=500, details=details)


class IncidentParseError(StatusPageError):
    """Raised by the incident parser. Never crosses the repository boundary."""

    def __init__(self, message: str = "Malformed incident document.", details: dict | None = None):
        super().__init__(code="incident_parse_error", message=message, status=500, details=details)


async def status_error_handler(request: Request, exc: StatusPageError) -> JSONResponse:
    """Global exception handler for StatusPageError and subclasses."""
    return JSONResponse(status_code=exc.status, content=exc.to_dict())
