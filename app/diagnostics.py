# app/diagnostics.py
import logging
import uuid

from flask import g, request
from flask.signals import got_request_exception


def configure_logging(app):
    level = getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO)
    app.logger.setLevel(level)


def install_request_trace(app):
    log = app.logger or logging.getLogger("app")

    @app.before_request
    def _trace_in():
        if request.endpoint in ("static", "scene_bp.gallery_file"):
            return
        g.reqid = str(uuid.uuid4())[:8]
        log.info(
            "[%s] → %s %s ep=%s args=%s",
            g.reqid, request.method, request.path, request.endpoint, dict(request.args),
        )

    @app.after_request
    def _trace_out(resp):
        rid = getattr(g, "reqid", None)
        if rid is None:
            return resp
        loc = resp.headers.get("Location", "")
        if loc:
            log.info("[%s] ← %s redirect to %s", rid, resp.status, loc)
        else:
            log.info("[%s] ← %s", rid, resp.status)
        return resp

    def _on_exception(sender, exception, **extra):
        log.exception("[%s] exception raised: %s", getattr(g, "reqid", "????"), exception)

    got_request_exception.connect(_on_exception, app)
