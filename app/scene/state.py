# app/scene/state.py
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, Union

from flask import current_app

from app.gallery.manifest import ManifestError, current_manifest
from .classifier import Classification, classify
from .timezone import resolve_timezone

MANIFEST_ERROR_MESSAGE = "No se pudo cargar la galería. Inténtalo más tarde."


@dataclass
class ErrorState:
    message: str
    status: str = field(default="error", init=False)


@dataclass
class ReadyState:
    classification: Classification
    status: str = field(default="ready", init=False)


PageState = Union[ErrorState, ReadyState]


def build_page_state(remote_addr: Optional[str], force_param: Optional[str],
                     now: Optional[datetime] = None, rng=None) -> PageState:
    """Manifest first, then the visitor's zone, then classify. Runs once per page view."""
    try:
        manifest = current_manifest()
    except ManifestError as exc:
        current_app.logger.error("Gallery manifest unavailable: %s", exc)
        return ErrorState(message=MANIFEST_ERROR_MESSAGE)

    tz_name = resolve_timezone(remote_addr)
    hemisphere = manifest.hemisphere_default or current_app.config.get("HEMISPHERE_DEFAULT", "north")

    result = classify(
        now or datetime.now(timezone.utc),
        tz_name,
        hemisphere,
        force_param,
        manifest,
        rng=rng,
    )
    return ReadyState(classification=result)
