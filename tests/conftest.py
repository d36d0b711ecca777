# tests/conftest.py
import json

import pytest

from app import create_app
from app.extensions import db

MANIFEST = {
    "generatedAt": "2024-05-01T00:00:00Z",
    "hemisphereDefault": "north",
    "friday": {
        "base": ["/ai/friday/c.jpg"],
        "seasons": {"winter": [], "spring": [], "summer": ["/ai/friday/summer/a.jpg", "/ai/friday/summer/b.jpg"], "autumn": []},
    },
    "notFriday": {
        "base": ["/ai/not-friday/work.jpg"],
        "seasons": {"winter": [], "spring": ["/ai/not-friday/spring/rain.jpg"], "summer": [], "autumn": []},
    },
}


@pytest.fixture
def gallery_dir(tmp_path):
    d = tmp_path / "ai"
    d.mkdir()
    (d / "gallery-manifest.json").write_text(json.dumps(MANIFEST), encoding="utf-8")
    return d


@pytest.fixture
def app(tmp_path, gallery_dir):
    app = create_app({
        "TESTING": True,
        "SECRET_KEY": "test-secret",
        "SQLALCHEMY_DATABASE_URI": f"sqlite:///{tmp_path / 'stats.db'}",
        "SQLALCHEMY_ENGINE_OPTIONS": {},
        "WTF_CSRF_ENABLED": False,
        "STATS_ALLOWED_ORIGIN": "https://esvierneshoy.test",
        "STATS_DEFAULT_USER": "admin",
        "STATS_DEFAULT_PASSWORD": "cambia-esto-ya",
        "GALLERY_DIR": str(gallery_dir),
        "TIMEZONE_LOOKUP_URL": "https://tz.example.test",
    })
    yield app
    with app.app_context():
        db.session.remove()
        db.engine.dispose()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def ctx(app):
    with app.app_context():
        yield
