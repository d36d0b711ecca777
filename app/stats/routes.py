# app/stats/routes.py
from flask import (
    Blueprint, current_app, make_response, redirect, render_template,
    request, session, url_for,
)
from flask_login import current_user, login_user, logout_user
from sqlalchemy.exc import SQLAlchemyError

from app.extensions import csrf, db
from app.services.stats_users import authenticate, ensure_default_stats_user
from app.services.visit_stats import build_summary
from .forms import StatsLoginForm
from .ingest import extract_visit_fields, record_visit

stats_bp = Blueprint("stats_bp", __name__)

ALLOWED_METHODS = "POST, OPTIONS"
LOGIN_ERROR = "Invalid username or password."


def _with_cors(resp):
    resp.headers["Access-Control-Allow-Origin"] = current_app.config["STATS_ALLOWED_ORIGIN"]
    resp.headers["Access-Control-Allow-Methods"] = ALLOWED_METHODS
    resp.headers["Access-Control-Allow-Headers"] = "Content-Type"
    resp.headers["Access-Control-Max-Age"] = "86400"
    resp.headers["Vary"] = "Origin"
    return resp


def _plain(body: str, status: int):
    resp = make_response(body, status)
    resp.mimetype = "text/plain"
    return resp


# ---- ingest -----------------------------------------------------------------
@stats_bp.app_errorhandler(405)
def method_not_allowed(err):
    # the router rejects other methods before ingest() runs
    if request.path != "/stats":
        return err
    resp = make_response("", 405)
    resp.headers["Allow"] = ALLOWED_METHODS
    return _with_cors(resp)


@stats_bp.route("/stats", methods=["POST", "OPTIONS"])
@csrf.exempt
def ingest():
    if request.method == "OPTIONS":
        return _with_cors(make_response("", 204))

    data = request.get_json(force=True, silent=True)
    if not isinstance(data, dict):
        return _with_cors(_plain("JSON inválido.", 400))

    fields = extract_visit_fields(data)
    try:
        record_visit(fields, request.remote_addr, request.headers.get("User-Agent"))
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("Stats insert failed")
        return _with_cors(_plain("Error en el servidor.", 500))

    return _with_cors(make_response("", 204))


# ---- dashboard --------------------------------------------------------------
@stats_bp.route("/stats/dashboard", methods=["GET", "POST"])
def dashboard():
    try:
        ensure_default_stats_user()
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("Stats user bootstrap failed")
        return render_template("stats/unavailable.html"), 500

    if request.args.get("logout"):
        logout_user()
        session.clear()
        return redirect(url_for("stats_bp.dashboard"))

    form = StatsLoginForm()
    login_error = None

    if request.method == "POST":
        if form.validate_on_submit():
            user = authenticate(form.username.data, form.password.data)
            if user is not None:
                session.clear()
                login_user(user)
                current_app.logger.info("Stats login ok for %r", user.username)
                return redirect(url_for("stats_bp.dashboard"))
        current_app.logger.warning("Stats login failed for %r", (form.username.data or "")[:64])
        login_error = LOGIN_ERROR
        if current_user.is_authenticated:
            logout_user()
            session.clear()

    if not current_user.is_authenticated:
        return render_template("stats/login.html", form=form, login_error=login_error)

    try:
        summary = build_summary()
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("Stats aggregation failed")
        return render_template("stats/unavailable.html"), 500

    return render_template("stats/dashboard.html", summary=summary, username=current_user.username)
