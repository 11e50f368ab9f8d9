import logging
import uuid
from datetime import timedelta

from flask import Flask, g, render_template, request, session
from dotenv import load_dotenv

from app.dashboard.config import load_config
from app.dashboard.constants import DATA_SOURCES
from app.dashboard.routes import bp as routes_bp
from app.dashboard.modules.customers.admin import bp as customers_bp
from app.dashboard.modules.shops.admin import bp as shops_bp


def create_app() -> Flask:
    load_dotenv()
    app = Flask(__name__, template_folder="templates")
    app.config.from_mapping(load_config())
    app.config["PERMANENT_SESSION_LIFETIME"] = timedelta(hours=8)
    app.config["SESSION_REFRESH_EACH_REQUEST"] = True
    app.logger.setLevel(app.config.get("LOG_LEVEL") or "INFO")

    from app.dashboard.security import ensure_csrf_token, validate_csrf

    @app.context_processor
    def _inject_csrf() -> dict:
        return {"csrf_token": ensure_csrf_token()}

    @app.before_request
    def _assign_request_id():
        if not getattr(g, "request_id", None):
            g.request_id = uuid.uuid4().hex

    @app.before_request
    def _csrf_guard():
        if request.path.startswith(("/static/", "/health", "/healthz")):
            return None
        ensure_csrf_token()
        session.permanent = True
        if request.method in ("POST", "PUT", "PATCH", "DELETE"):
            if not validate_csrf(request):
                app.logger.warning("CSRF check failed (request_id=%s)", g.request_id)
                return render_template("errors/400.html", message="CSRF token missing or invalid."), 400

    # Production guardrails (fail fast with clear logs)
    env = (app.config.get("ENV") or "").strip().lower()
    if env in ("prod", "production"):
        if not app.config.get("SECRET_KEY") or str(app.config["SECRET_KEY"]) in ("", "change-me"):
            raise RuntimeError("SECRET_KEY must be set to a strong value in production (not default).")
    if app.config.get("DATA_SOURCE") not in DATA_SOURCES:
        if env in ("prod", "production"):
            raise RuntimeError(f"DATA_SOURCE must be one of: {', '.join(DATA_SOURCES)}")
        app.logger.warning("Unknown DATA_SOURCE %r; falling back to fixtures", app.config.get("DATA_SOURCE"))
        app.config["DATA_SOURCE"] = "fixture"

    app.register_blueprint(routes_bp)
    app.register_blueprint(customers_bp, url_prefix="/admin")
    app.register_blueprint(shops_bp, url_prefix="/admin")

    @app.errorhandler(404)
    def _err_404(e):  # type: ignore[no-redef]
        return render_template("errors/404.html"), 404

    @app.errorhandler(500)
    def _err_500(e):  # type: ignore[no-redef]
        app.logger.exception("Unhandled 500 (request_id=%s)", getattr(g, "request_id", None))
        return render_template("errors/500.html"), 500

    logging.getLogger(__name__).info("create_app() complete; app ready to serve")

    return app
