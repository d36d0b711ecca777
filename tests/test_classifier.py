# tests/test_classifier.py
import random
from datetime import datetime, timezone

import pytest

from app.gallery.manifest import GalleryManifest
from app.scene.classifier import (
    FALLBACK_IMAGES, classify, format_countdown, format_local_date,
    pick_scene, season_for, seconds_until_friday, zoned_now,
)
from tests.conftest import MANIFEST

NORTH = {
    1: "winter", 2: "winter", 3: "spring", 4: "spring", 5: "spring", 6: "summer",
    7: "summer", 8: "summer", 9: "autumn", 10: "autumn", 11: "autumn", 12: "winter",
}
SOUTH = {m: {"winter": "summer", "summer": "winter", "spring": "autumn", "autumn": "spring"}[s]
         for m, s in NORTH.items()}

WEDNESDAY = datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc)
FRIDAY = datetime(2024, 5, 3, 10, 0, tzinfo=timezone.utc)


@pytest.fixture
def manifest():
    return GalleryManifest.from_dict(MANIFEST)


def empty_manifest():
    empty = {"base": [], "seasons": {}}
    return GalleryManifest.from_dict({"friday": empty, "notFriday": empty})


@pytest.mark.parametrize("month", range(1, 13))
def test_season_table(month):
    assert season_for(month, "north") == NORTH[month]
    assert season_for(month, "south") == SOUTH[month]


def test_zoned_now_uses_wall_clock_of_zone():
    # Thursday 23:30 UTC is already Friday 01:30 in Madrid (CEST)
    instant = datetime(2024, 5, 2, 23, 30, tzinfo=timezone.utc)
    madrid = zoned_now(instant, "Europe/Madrid")
    assert (madrid.year, madrid.month, madrid.day, madrid.hour, madrid.minute) == (2024, 5, 3, 1, 30)
    assert madrid.weekday() == 4


def test_friday_depends_on_zone(manifest):
    instant = datetime(2024, 5, 2, 23, 30, tzinfo=timezone.utc)
    assert classify(instant, "Europe/Madrid", "north", None, manifest).is_friday is True
    assert classify(instant, "UTC", "north", None, manifest).is_friday is False


def test_natural_classification(manifest):
    result = classify(WEDNESDAY, "UTC", "north", None, manifest)
    assert result.is_friday is False
    assert result.forced_mode is None
    assert result.season == "spring"
    assert result.weekday_name == "Miércoles"
    # Wednesday 10:00 -> Friday 00:00 is 38 hours
    assert result.seconds_until_friday == 38 * 3600


def test_countdown_in_zone(manifest):
    # 12:00 Wednesday in Madrid -> 36 hours to Friday midnight there
    result = classify(WEDNESDAY, "Europe/Madrid", "north", None, manifest)
    assert result.seconds_until_friday == 36 * 3600


def test_countdown_across_dst_change():
    # Saturday 2024-03-30 12:00 CET; clocks go forward on the 31st
    zoned = zoned_now(datetime(2024, 3, 30, 11, 0, tzinfo=timezone.utc), "Europe/Madrid")
    assert seconds_until_friday(zoned) == 5 * 86400 + 11 * 3600


def test_countdown_is_zero_on_friday(manifest):
    result = classify(FRIDAY, "UTC", "north", None, manifest)
    assert result.is_friday is True
    assert result.seconds_until_friday == 0


@pytest.mark.parametrize("instant", [WEDNESDAY, FRIDAY, datetime(2024, 12, 29, 8, tzinfo=timezone.utc)])
def test_force_friday(manifest, instant):
    result = classify(instant, "America/New_York", "north", "friday", manifest)
    assert result.is_friday is True
    assert result.forced_mode == "friday"
    assert result.seconds_until_friday == 0


@pytest.mark.parametrize("instant", [WEDNESDAY, FRIDAY])
def test_force_no(manifest, instant):
    result = classify(instant, "UTC", "north", "no", manifest)
    assert result.is_friday is False
    assert result.forced_mode == "no"


def test_unknown_force_value_is_ignored(manifest):
    result = classify(WEDNESDAY, "UTC", "north", "yes please", manifest)
    assert result.forced_mode is None
    assert result.is_friday is False


def test_season_pool_wins_over_base(manifest):
    rng = random.Random(7)
    seen = {pick_scene(manifest, "friday", "summer", rng=rng).url for _ in range(200)}
    assert seen == {"/ai/friday/summer/a.jpg", "/ai/friday/summer/b.jpg"}


def test_base_pool_when_season_empty(manifest):
    scene = pick_scene(manifest, "friday", "winter")
    assert scene.url == "/ai/friday/c.jpg"
    assert scene.source == "local-gallery"
    assert scene.gallery_count == 1


def test_fallback_when_everything_empty():
    manifest = empty_manifest()
    for mood in ("friday", "notFriday"):
        scene = pick_scene(manifest, mood, "summer")
        assert scene.url == FALLBACK_IMAGES[mood]
        assert scene.source == "fallback"
        assert scene.gallery_count == 0


def test_southern_hemisphere_picks_opposite_season(manifest):
    # May in the south is autumn; notFriday has no autumn images -> base pool
    result = classify(WEDNESDAY, "Australia/Sydney", "south", None, manifest)
    assert result.season == "autumn"
    assert result.scene.url == "/ai/not-friday/work.jpg"
    assert result.scene.season_label == "otoño"


def test_beacon_payload_reports_displayed_value(manifest):
    result = classify(WEDNESDAY, "UTC", "north", "friday", manifest)
    assert result.beacon_payload() == {
        "timezone": "UTC",
        "isFriday": True,
        "forcedMode": "friday",
        "season": "spring",
    }


@pytest.mark.parametrize("seconds, text", [
    (0, "menos de un minuto"),
    (59, "menos de un minuto"),
    (60, "1 minuto"),
    (3600 + 120, "1 hora y 2 minutos"),
    (2 * 86400 + 3 * 3600 + 59 * 60, "2 días y 3 horas"),
    (86400 + 30, "1 día"),
])
def test_format_countdown(seconds, text):
    assert format_countdown(seconds) == text


def test_format_local_date():
    zoned = zoned_now(FRIDAY, "Europe/Madrid")
    assert format_local_date(zoned) == "viernes, 3 de mayo de 2024, 12:00"
