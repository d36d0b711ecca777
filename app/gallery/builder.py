# app/gallery/builder.py
"""
Build-time gallery index.

Walks <root>/friday and <root>/not-friday (plus their winter/spring/summer/autumn
subfolders) and writes gallery-manifest.json next to them. The page reads that
file at runtime; nothing else writes it.
"""
import json
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import List

from .manifest import MOODS, SEASONS

IMAGE_RE = re.compile(r"\.(png|jpe?g|webp|gif)$", re.IGNORECASE)

# images are served under /ai/<path relative to the gallery root>
URL_PREFIX = "/ai"


def collect_images(directory: Path, root: Path) -> List[str]:
    """Immediate image files of `directory` as public URLs, sorted. Missing dir -> []."""
    if not directory.is_dir():
        return []
    urls = []
    for entry in directory.iterdir():
        if entry.is_file() and IMAGE_RE.search(entry.name):
            rel = entry.relative_to(root).as_posix()
            urls.append(f"{URL_PREFIX}/{rel}")
    return sorted(urls)


def build_manifest(root, hemisphere: str = "north") -> dict:
    root = Path(root)
    manifest = {
        "generatedAt": datetime.now(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z"),
        "hemisphereDefault": hemisphere,
    }
    for key, dirname in MOODS.items():
        mood_dir = root / dirname
        manifest[key] = {
            "base": collect_images(mood_dir, root),
            "seasons": {s: collect_images(mood_dir / s, root) for s in SEASONS},
        }
    return manifest


def write_manifest(root, out=None, hemisphere: str = "north") -> Path:
    root = Path(root)
    out = Path(out) if out else root / "gallery-manifest.json"
    manifest = build_manifest(root, hemisphere=hemisphere)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(json.dumps(manifest, indent=2) + "\n", encoding="utf-8")
    return out
