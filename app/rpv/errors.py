"""
Application error taxonomy and the Flask handlers that turn each error into a
response. JSON for API-style calls, rendered pages for browser GETs.
"""
from __future__ import annotations

from flask import Flask, g, jsonify, render_template, request
from sqlalchemy.exc import SQLAlchemyError

GENERIC_STORE_MESSAGE = "Something went wrong while talking to the database. Please try again."


class RPVError(Exception):
    """Base class for errors that map to an HTTP status."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(RPVError):
    """Missing or malformed form fields, password policy violations."""

    status_code = 400


class AuthError(RPVError):
    """Bad credentials. Same message whatever the cause."""

    status_code = 401


class ForbiddenError(RPVError):
    """Authenticated, but the session role does not allow the operation."""

    status_code = 403


class StoreError(RPVError):
    """Any failure from the relational store. The cause is logged, never echoed."""

    status_code = 500

    def __init__(self, message: str = GENERIC_STORE_MESSAGE):
        super().__init__(message)


def wants_json() -> bool:
    if request.method != "GET":
        return True
    if request.is_json:
        return True
    best = request.accept_mimetypes.best_match(["application/json", "text/html"])
    return best == "application/json" and request.accept_mimetypes[best] > request.accept_mimetypes["text/html"]


def _error_response(message: str, status: int):
    if wants_json():
        return jsonify({"success": False, "message": message}), status
    template = f"errors/{status}.html" if status in (400, 403) else "errors/500.html"
    return render_template(template, message=message), status


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(RPVError)
    def _rpv_error(e: RPVError):  # type: ignore[no-redef]
        if isinstance(e, ForbiddenError):
            app.logger.warning("Forbidden: %s path=%s request_id=%s", e.message, request.path, getattr(g, "request_id", None))
        return _error_response(e.message, e.status_code)

    @app.errorhandler(SQLAlchemyError)
    def _store_failure(e: SQLAlchemyError):  # type: ignore[no-redef]
        app.logger.exception("Database failure (request_id=%s)", getattr(g, "request_id", None))
        s = getattr(g, "db_session", None)
        if s is not None:
            s.rollback()
        err = StoreError()
        return _error_response(err.message, err.status_code)

    @app.errorhandler(404)
    def _err_404(e):  # type: ignore[no-redef]
        if wants_json():
            return jsonify({"success": False, "message": "Not found."}), 404
        return render_template("errors/404.html"), 404

    @app.errorhandler(500)
    def _err_500(e):  # type: ignore[no-redef]
        app.logger.exception("Unhandled 500 (request_id=%s)", getattr(g, "request_id", None))
        return _error_response("An unexpected error occurred.", 500)
