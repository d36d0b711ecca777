# app/scene/__init__.py
from .classifier import Classification, Scene, classify, format_countdown, season_for
from .state import ErrorState, ReadyState, build_page_state
from .timezone import resolve_timezone

__all__ = [
    "Classification", "Scene", "classify", "format_countdown", "season_for",
    "ErrorState", "ReadyState", "build_page_state", "resolve_timezone",
]
