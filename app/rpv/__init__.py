import logging
from datetime import timedelta

from flask import Flask, g, request, session
from dotenv import load_dotenv

from app.rpv.config import load_config
from app.rpv.constants import UNGUARDED_PREFIXES
from app.rpv.db import dispose_engine_on_fork, init_db, teardown_db_session
from app.rpv.errors import register_error_handlers
from app.rpv.routes import bp as routes_bp
from app.rpv.auth import bp as auth_bp, load_current_session
from app.rpv.sessions import SessionStore
from app.rpv.modules.owner_directory.admin import bp as owner_directory_bp
from app.rpv.modules.schedules.admin import bp as schedules_bp
from app.rpv.modules.member_requests.admin import bp as member_requests_bp


def create_app() -> Flask:
    load_dotenv()
    app = Flask(__name__, template_folder="templates", static_folder="static")
    app.config.from_mapping(load_config())
    app.logger.setLevel(app.config.get("LOG_LEVEL") or "INFO")

    ttl = timedelta(hours=app.config["SESSION_TTL_HOURS"])
    app.config["PERMANENT_SESSION_LIFETIME"] = ttl
    # One store per process; sessions do not survive a restart.
    app.extensions["rpv_session_store"] = SessionStore(ttl=ttl)

    app.before_request(load_current_session)

    # CSRF protection (minimal)
    from app.rpv.errors import ValidationError
    from app.rpv.security import ensure_csrf_token, validate_csrf

    @app.context_processor
    def _inject_globals() -> dict:
        return {
            "csrf_token": ensure_csrf_token(),
            "current_session": getattr(g, "current_session", None),
        }

    @app.template_filter("dateformat")
    def _dateformat_filter(value, format: str = "%Y-%m-%d") -> str:
        if value is None:
            return "—"
        if hasattr(value, "strftime"):
            return value.strftime(format)
        return str(value)

    @app.before_request
    def _csrf_guard():
        if request.path.startswith(UNGUARDED_PREFIXES):
            return None
        ensure_csrf_token()
        session.permanent = True
        if request.method in ("POST", "PUT", "PATCH", "DELETE"):
            # Login, logout and registration pass through.
            if (request.endpoint or "").startswith("auth."):
                return None
            # Anonymous requests fall through to require_login's redirect.
            if getattr(g, "current_session", None) is None:
                return None
            if not validate_csrf(request):
                raise ValidationError("CSRF token missing or invalid.")
        return None

    # Production guardrails (fail fast with clear logs)
    env = (app.config.get("ENV") or "").strip().lower()
    if env in ("prod", "production"):
        if str(app.config["DATABASE_URL"]).startswith("sqlite"):
            raise RuntimeError("DATABASE_URL (or DB_HOST) must point at Postgres in production (not sqlite).")
        if not app.config.get("SECRET_KEY") or str(app.config["SECRET_KEY"]) in ("", "change-me"):
            raise RuntimeError("SECRET_KEY must be set to a strong value in production (not default).")

    init_db(app)
    dispose_engine_on_fork(app)

    app.register_blueprint(routes_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(owner_directory_bp)
    app.register_blueprint(schedules_bp)
    app.register_blueprint(member_requests_bp)

    app.teardown_appcontext(teardown_db_session)
    register_error_handlers(app)

    logging.getLogger(__name__).info("create_app() complete; app ready to serve")

    return app
