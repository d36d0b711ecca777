# app/gallery/manifest.py
import json
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from flask import current_app

# manifest key -> directory name under the gallery root
MOODS = {"friday": "friday", "notFriday": "not-friday"}
SEASONS = ("winter", "spring", "summer", "autumn")


class ManifestError(Exception):
    """The gallery manifest is missing, unreadable or has the wrong shape."""


@dataclass
class MoodImages:
    base: List[str] = field(default_factory=list)
    seasons: Dict[str, List[str]] = field(default_factory=lambda: {s: [] for s in SEASONS})

    def pool(self, season: str) -> List[str]:
        """Season images when there are any, else the base images."""
        seasonal = self.seasons.get(season) or []
        return seasonal if seasonal else self.base


@dataclass
class GalleryManifest:
    friday: MoodImages
    notFriday: MoodImages
    hemisphere_default: Optional[str] = None
    generated_at: Optional[str] = None

    def mood(self, key: str) -> MoodImages:
        if key not in MOODS:
            raise KeyError(key)
        return getattr(self, key)

    @classmethod
    def from_dict(cls, data) -> "GalleryManifest":
        if not isinstance(data, dict):
            raise ManifestError("manifest root must be an object")

        moods = {}
        for key in MOODS:
            raw = data.get(key)
            if not isinstance(raw, dict):
                raise ManifestError(f"manifest is missing mood {key!r}")
            base = _string_list(raw.get("base", []), f"{key}.base")
            raw_seasons = raw.get("seasons", {})
            if not isinstance(raw_seasons, dict):
                raise ManifestError(f"{key}.seasons must be an object")
            seasons = {
                s: _string_list(raw_seasons.get(s, []), f"{key}.seasons.{s}")
                for s in SEASONS
            }
            moods[key] = MoodImages(base=base, seasons=seasons)

        hemisphere = data.get("hemisphereDefault")
        if hemisphere not in ("north", "south"):
            hemisphere = None

        generated = data.get("generatedAt")
        return cls(
            friday=moods["friday"],
            notFriday=moods["notFriday"],
            hemisphere_default=hemisphere,
            generated_at=generated if isinstance(generated, str) else None,
        )


def _string_list(value, where: str) -> List[str]:
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ManifestError(f"{where} must be a list of strings")
    return list(value)


def load_manifest(path) -> GalleryManifest:
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ManifestError(f"cannot read {path}: {exc}") from exc
    try:
        data = json.loads(raw)
    except ValueError as exc:
        raise ManifestError(f"invalid JSON in {path}: {exc}") from exc
    return GalleryManifest.from_dict(data)


class ManifestCache:
    """
    Holds the manifest for one app. Loaded on first use and kept for the life
    of the process; a failed load is not remembered, so the next request
    retries (e.g. after `flask gallery build`).
    """

    def __init__(self, path):
        self.path = Path(path)
        self._manifest: Optional[GalleryManifest] = None
        self._lock = threading.Lock()

    def get(self) -> GalleryManifest:
        if self._manifest is None:
            with self._lock:
                if self._manifest is None:
                    self._manifest = load_manifest(self.path)
        return self._manifest

    def reset(self) -> None:
        with self._lock:
            self._manifest = None


def init_gallery(app) -> ManifestCache:
    gallery_dir = Path(app.config["GALLERY_DIR"])
    cache = ManifestCache(gallery_dir / app.config["GALLERY_MANIFEST"])
    app.extensions["gallery_manifest"] = cache
    return cache


def current_manifest() -> GalleryManifest:
    return current_app.extensions["gallery_manifest"].get()
