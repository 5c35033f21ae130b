# payroll_api/common/errors.py
from sqlalchemy.exc import IntegrityError
from werkzeug.exceptions import HTTPException

from payroll_api.common.http import fail


class APIError(Exception):
    """Base API error; carries the HTTP status and an optional field payload."""
    code = "API_ERROR"
    status_code = 400

    def __init__(self, message, code=None, status_code=None, payload=None):
        super().__init__(message)
        self.message = message
        if code: self.code = code
        if status_code: self.status_code = status_code
        self.payload = payload


class ValidationError(APIError):
    """Malformed or out-of-range input (day index, code, amounts, period)."""
    code = "VALIDATION_ERROR"
    status_code = 400

    def __init__(self, message, fields=None):
        super().__init__(message, payload=fields)
        self.fields = fields or {}


class InvalidPeriodError(ValidationError):
    code = "INVALID_PERIOD"


class NotFoundError(APIError):
    code = "NOT_FOUND"
    status_code = 404


class ConflictError(APIError):
    code = "CONFLICT"
    status_code = 409


class PersistenceError(APIError):
    """Backend call failed. Never retried; the message stays opaque."""
    code = "PERSISTENCE_ERROR"
    status_code = 500


def register_error_handlers(app):
    @app.errorhandler(APIError)
    def _api_error(e: APIError):
        if e.status_code >= 500:
            app.logger.error("%s: %s", e.code, e.message)
        return fail(e.message, status=e.status_code, code=e.code, errors=e.payload)

    @app.errorhandler(HTTPException)
    def _http(e: HTTPException):
        return fail(e.description or e.name, status=e.code or 500)

    @app.errorhandler(IntegrityError)
    def _dup(e: IntegrityError):
        return fail("Duplicate or FK constraint failed", status=409, code="CONSTRAINT_ERROR")

    @app.errorhandler(Exception)
    def _500(e: Exception):
        app.logger.exception(e)
        return fail("Internal server error", status=500)
