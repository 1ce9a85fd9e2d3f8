from __future__ import annotations

from flask import Flask
from werkzeug.exceptions import HTTPException

from ..core.exceptions import (
    AlreadyPaidError,
    AuthorizationError,
    NotFoundError,
    PayrollLockedError,
    PersistenceError,
    ValidationError,
)
from .http import fail


def register_error_handlers(app: Flask) -> None:
    """Map domain and persistence errors to JSON responses."""

    @app.errorhandler(ValidationError)
    def _validation(e: ValidationError):
        return fail(str(e), status=400, code="VALIDATION_ERROR")

    @app.errorhandler(PayrollLockedError)
    def _locked(e: PayrollLockedError):
        return fail(str(e), status=400, code="PAYROLL_LOCKED")

    @app.errorhandler(AuthorizationError)
    def _forbidden(e: AuthorizationError):
        return fail(str(e), status=403, code="FORBIDDEN")

    @app.errorhandler(NotFoundError)
    def _not_found(e: NotFoundError):
        return fail(str(e), status=404, code="NOT_FOUND")

    @app.errorhandler(AlreadyPaidError)
    def _already_paid(e: AlreadyPaidError):
        return fail(str(e), status=409, code="ALREADY_PAID")

    @app.errorhandler(PersistenceError)
    def _persistence(e: PersistenceError):
        app.logger.error("Persistence failure: %s", e)
        return fail("Database is unavailable, please retry", status=503, code="PERSISTENCE_ERROR")

    @app.errorhandler(HTTPException)
    def _http(e: HTTPException):
        return fail(e.description or e.name, status=e.code or 500)

    @app.errorhandler(Exception)
    def _unhandled(e: Exception):
        app.logger.exception(e)
        return fail("Internal server error", status=500)
