# app/stats/__init__.py
from .routes import stats_bp

__all__ = ["stats_bp"]
