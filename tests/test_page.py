# tests/test_page.py
import pytest


@pytest.fixture(autouse=True)
def madrid(monkeypatch):
    monkeypatch.setattr("app.scene.state.resolve_timezone", lambda addr: "Europe/Madrid")


def test_forced_friday_page(client):
    resp = client.get("/?force=friday")
    html = resp.get_data(as_text=True)
    assert resp.status_code == 200
    assert "¡Sí!" in html
    assert "Modo forzado: viernes" in html
    assert "Europe/Madrid" in html
    assert "para el viernes" not in html
    # beacon posts to this app's ingest endpoint
    assert '"/stats"' in html
    assert '"forcedMode": "friday"' in html


def test_forced_no_page(client):
    html = client.get("/?force=no").get_data(as_text=True)
    assert "¡No!" in html
    assert "Modo forzado: no viernes" in html
    assert "para el viernes" in html
    assert "/ai/not-friday/" in html


def test_configured_stats_endpoint(app, client):
    app.config["STATS_ENDPOINT"] = "https://stats.example.test/stats"
    html = client.get("/").get_data(as_text=True)
    assert '"https://stats.example.test/stats"' in html


def test_missing_manifest_renders_error_state(app, client, gallery_dir):
    (gallery_dir / "gallery-manifest.json").unlink()
    app.extensions["gallery_manifest"].reset()
    resp = client.get("/")
    html = resp.get_data(as_text=True)
    assert resp.status_code == 503
    assert "No se pudo cargar la galería" in html
    assert "sendBeacon" not in html


def test_malformed_manifest_renders_error_state(app, client, gallery_dir):
    (gallery_dir / "gallery-manifest.json").write_text('{"friday": 1}', encoding="utf-8")
    app.extensions["gallery_manifest"].reset()
    assert client.get("/").status_code == 503


def test_healthz(client):
    assert client.get("/healthz").data == b"ok"
