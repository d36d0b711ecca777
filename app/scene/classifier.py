# app/scene/classifier.py
import random
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone as dt_timezone
from typing import Optional
from zoneinfo import ZoneInfo

from app.gallery.manifest import GalleryManifest

FRIDAY = 4  # datetime.weekday(): Monday=0

FORCE_MODES = ("friday", "no")

_NORTH_SEASONS = {
    12: "winter", 1: "winter", 2: "winter",
    3: "spring", 4: "spring", 5: "spring",
    6: "summer", 7: "summer", 8: "summer",
    9: "autumn", 10: "autumn", 11: "autumn",
}
_OPPOSITE = {"winter": "summer", "summer": "winter", "spring": "autumn", "autumn": "spring"}

FALLBACK_IMAGES = {
    "friday": "/ai/latest-fiesta.jpg",
    "notFriday": "/ai/latest-work.jpg",
}

SEASON_LABELS = {
    "winter": "invierno",
    "spring": "primavera",
    "summer": "verano",
    "autumn": "otoño",
}

WEEKDAY_NAMES = ["lunes", "martes", "miércoles", "jueves", "viernes", "sábado", "domingo"]
MONTH_NAMES = [
    "enero", "febrero", "marzo", "abril", "mayo", "junio",
    "julio", "agosto", "septiembre", "octubre", "noviembre", "diciembre",
]


@dataclass
class Scene:
    url: str
    season_key: str
    season_label: str
    gallery_count: int
    source: str  # 'local-gallery' | 'fallback'


@dataclass
class Classification:
    timezone: str
    is_friday: bool
    forced_mode: Optional[str]
    season: str
    weekday_name: str
    local_date: datetime
    seconds_until_friday: int
    scene: Scene

    @property
    def mood(self) -> str:
        return "friday" if self.is_friday else "notFriday"

    def beacon_payload(self) -> dict:
        """Body the page posts to /stats. is_friday is the displayed value."""
        return {
            "timezone": self.timezone,
            "isFriday": self.is_friday,
            "forcedMode": self.forced_mode,
            "season": self.season,
        }


# ---- pieces -----------------------------------------------------------------
def normalize_force(value: Optional[str]) -> Optional[str]:
    return value if value in FORCE_MODES else None


def season_for(month: int, hemisphere: str = "north") -> str:
    """month is 1..12."""
    season = _NORTH_SEASONS[month]
    if hemisphere == "south":
        return _OPPOSITE[season]
    return season


def zoned_now(now: datetime, tz_name: str) -> datetime:
    """The instant `now` as wall-clock time in `tz_name` (aware)."""
    if now.tzinfo is None:
        now = now.replace(tzinfo=dt_timezone.utc)
    return now.astimezone(ZoneInfo(tz_name))


def seconds_until_friday(zoned: datetime) -> int:
    """Seconds from `zoned` to the coming Friday 00:00 in the same zone. 0 on a Friday."""
    days = (FRIDAY - zoned.weekday()) % 7
    target_day = zoned.date() + timedelta(days=days)
    midnight = datetime(target_day.year, target_day.month, target_day.day, tzinfo=zoned.tzinfo)
    delta = midnight.astimezone(dt_timezone.utc) - zoned.astimezone(dt_timezone.utc)
    return max(0, int(delta.total_seconds()))


def pick_scene(manifest: GalleryManifest, mood: str, season: str, rng=None) -> Scene:
    rng = rng or random
    pool = manifest.mood(mood).pool(season)
    if pool:
        url, source = rng.choice(pool), "local-gallery"
    else:
        url, source = FALLBACK_IMAGES[mood], "fallback"
    return Scene(
        url=url,
        season_key=season,
        season_label=SEASON_LABELS[season],
        gallery_count=len(pool),
        source=source,
    )


# ---- entry point ------------------------------------------------------------
def classify(
    now: datetime,
    timezone: str,
    hemisphere: str,
    force_param: Optional[str],
    manifest: GalleryManifest,
    rng=None,
) -> Classification:
    zoned = zoned_now(now, timezone)
    forced = normalize_force(force_param)

    actual_friday = zoned.weekday() == FRIDAY
    if forced == "friday":
        is_friday = True
    elif forced == "no":
        is_friday = False
    else:
        is_friday = actual_friday

    season = season_for(zoned.month, hemisphere)
    mood = "friday" if is_friday else "notFriday"
    scene = pick_scene(manifest, mood, season, rng=rng)

    countdown = 0 if forced == "friday" else seconds_until_friday(zoned)

    return Classification(
        timezone=timezone,
        is_friday=is_friday,
        forced_mode=forced,
        season=season,
        weekday_name=WEEKDAY_NAMES[zoned.weekday()].capitalize(),
        local_date=zoned,
        seconds_until_friday=countdown,
        scene=scene,
    )


# ---- display helpers --------------------------------------------------------
_UNITS = (
    (86400, "día", "días"),
    (3600, "hora", "horas"),
    (60, "minuto", "minutos"),
)


def format_countdown(total_seconds: int) -> str:
    if total_seconds <= 0:
        return "menos de un minuto"

    parts = []
    remaining = total_seconds
    for size, singular, plural in _UNITS:
        value = remaining // size
        if value > 0:
            parts.append(f"{value} {singular if value == 1 else plural}")
            remaining -= value * size
        if len(parts) == 2:
            break

    if not parts:
        return "menos de un minuto"
    return " y ".join(parts)


def format_local_date(zoned: datetime) -> str:
    """e.g. 'viernes, 3 de mayo de 2024, 10:05'"""
    return (
        f"{WEEKDAY_NAMES[zoned.weekday()]}, {zoned.day} de {MONTH_NAMES[zoned.month - 1]} "
        f"de {zoned.year}, {zoned:%H:%M}"
    )
