# config.py
import os
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

load_dotenv(find_dotenv(), override=False)  # picks up your .env locally


# ---- base directories -------------------------------------------------------
BASE_DIR = Path(__file__).resolve().parent

# public gallery root; images live under <GALLERY_DIR>/friday, <GALLERY_DIR>/not-friday
DEFAULT_GALLERY_DIR = BASE_DIR / "static" / "ai"


# ---- tiny helpers -----------------------------------------------------------
def _to_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return str(value).strip().lower() in {"1", "true", "yes", "on", "y"}


def _normalize_db_url(raw: str | None) -> str:
    """
    Render/Heroku hand out postgres://; SQLAlchemy wants postgresql+psycopg2://
    """
    url = (raw or "").strip()
    if url.startswith("postgres://"):
        url = url.replace("postgres://", "postgresql+psycopg2://", 1)
    return url


def _hemisphere(value: str | None) -> str:
    v = (value or "").strip().lower()
    return v if v in ("north", "south") else "north"


# ----------------------------------------------------------------------------
class Config:
    """
    Base configuration loaded by the app factory via:
      app.config.from_object("config.Config")
    """

    # ------------ Core / Security ------------
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

    # ------------ Database ------------
    # create_app refuses to start without one
    SQLALCHEMY_DATABASE_URI = _normalize_db_url(os.getenv("DATABASE_URL"))
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {"pool_pre_ping": True}

    # ------------ Visit stats ------------
    # only origin allowed to POST /stats from a browser
    STATS_ALLOWED_ORIGIN = os.getenv("STATS_ALLOWED_ORIGIN", "https://esvierneshoy.com")
    # where the page beacon posts; empty -> this app's /stats
    STATS_ENDPOINT = os.getenv("STATS_ENDPOINT", "")

    # First login for the dashboard. Inserted once, the first time the dashboard
    # is opened with an empty stats_users table.
    STATS_DEFAULT_USER = os.getenv("STATS_DEFAULT_USER", "admin")
    STATS_DEFAULT_PASSWORD = os.getenv("STATS_DEFAULT_PASSWORD", "")

    # ------------ Gallery ------------
    HEMISPHERE_DEFAULT = _hemisphere(os.getenv("HEMISPHERE_DEFAULT"))
    GALLERY_DIR = os.getenv("GALLERY_DIR", str(DEFAULT_GALLERY_DIR))
    GALLERY_MANIFEST = os.getenv("GALLERY_MANIFEST", "gallery-manifest.json")

    # ------------ Timezone lookup ------------
    TIMEZONE_LOOKUP_URL = os.getenv("TIMEZONE_LOOKUP_URL", "https://ipapi.co")
    TIMEZONE_LOOKUP_TIMEOUT = float(os.getenv("TIMEZONE_LOOKUP_TIMEOUT", "3"))

    # ------------ Proxy / Cookies ------------
    # number of reverse proxies allowed to set X-Forwarded-For
    PROXY_FIX_X_FOR = int(os.getenv("PROXY_FIX_X_FOR", "0"))

    SESSION_COOKIE_SAMESITE = "Lax"
    SESSION_COOKIE_SECURE = _to_bool(os.getenv("SESSION_COOKIE_SECURE"), default=False)
    SESSION_COOKIE_HTTPONLY = True

    PREFERRED_URL_SCHEME = os.getenv("PREFERRED_URL_SCHEME", "http")
