# app/scene/routes.py
from flask import Blueprint, current_app, render_template, request, send_from_directory, url_for

from .classifier import format_countdown, format_local_date
from .state import build_page_state

scene_bp = Blueprint("scene_bp", __name__)


@scene_bp.app_template_filter("countdown")
def _countdown_filter(seconds):
    return format_countdown(int(seconds or 0))


@scene_bp.app_template_filter("local_date")
def _local_date_filter(zoned):
    return format_local_date(zoned) if zoned else ""


@scene_bp.get("/")
def today():
    state = build_page_state(request.remote_addr, request.args.get("force"))
    stats_endpoint = current_app.config.get("STATS_ENDPOINT") or url_for("stats_bp.ingest")
    status = 503 if state.status == "error" else 200
    return render_template("scene/today.html", state=state, stats_endpoint=stats_endpoint), status


@scene_bp.get("/ai/<path:filename>")
def gallery_file(filename):
    resp = send_from_directory(current_app.config["GALLERY_DIR"], filename)
    if filename == current_app.config["GALLERY_MANIFEST"]:
        resp.headers["Cache-Control"] = "no-store"
    return resp
