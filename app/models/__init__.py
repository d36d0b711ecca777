# app/models/__init__.py
from .auth import StatsUser
from .visit import FORCED_MODES, VisitLog

__all__ = ["StatsUser", "VisitLog", "FORCED_MODES"]
