# app/__init__.py

from flask import Flask
from jinja2 import select_autoescape
from werkzeug.middleware.proxy_fix import ProxyFix

from app.extensions import csrf, db, login_manager, migrate


def create_app(test_config=None):
    app = Flask(
        __name__,
        instance_relative_config=True,
        template_folder="../templates",
        static_folder="../static",
    )

    # 1) Base config object (config.py at project root)
    app.config.from_object("config.Config")

    # 2) Instance overrides (instance/config.py) – safe if missing
    app.config.from_pyfile("config.py", silent=True)

    # 3) Environment overrides (e.g., FLASK_SQLALCHEMY_DATABASE_URI)
    app.config.from_prefixed_env()

    # 4) Explicit overrides (tests)
    if test_config:
        app.config.from_mapping(test_config)

    if not app.config.get("SQLALCHEMY_DATABASE_URI"):
        raise RuntimeError("DATABASE_URL is not set – a SQL database is required.")

    from app.diagnostics import configure_logging, install_request_trace
    configure_logging(app)

    # 5) Init extensions AFTER config
    db.init_app(app)
    migrate.init_app(app, db)
    csrf.init_app(app)
    login_manager.init_app(app)

    from app.gallery.manifest import init_gallery
    init_gallery(app)

    app.jinja_env.autoescape = select_autoescape(["html", "htm", "xml"])

    hops = int(app.config.get("PROXY_FIX_X_FOR") or 0)
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=hops, x_proto=1, x_host=1)

    install_request_trace(app)

    @login_manager.user_loader
    def load_user(user_id: str):
        from app.models.auth import StatsUser
        try:
            return db.session.get(StatsUser, int(user_id))
        except (TypeError, ValueError):
            return None

    @app.route("/healthz")
    def healthz():
        return "ok", 200

    # 6) Blueprints
    from app.scene.routes import scene_bp
    from app.stats.routes import stats_bp

    app.register_blueprint(scene_bp)
    app.register_blueprint(stats_bp)

    from app.cli import register_cli
    register_cli(app)

    # 7) Create tables
    with app.app_context():
        from app import models  # noqa: F401  (register tables on db.metadata)
        db.create_all()

    return app
