# app/gallery/__init__.py
from .manifest import (
    MOODS, SEASONS, GalleryManifest, ManifestCache, ManifestError,
    MoodImages, init_gallery, load_manifest,
)
from .builder import build_manifest, write_manifest

__all__ = [
    "MOODS", "SEASONS", "GalleryManifest", "ManifestCache", "ManifestError",
    "MoodImages", "init_gallery", "load_manifest",
    "build_manifest", "write_manifest",
]
