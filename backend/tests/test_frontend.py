"""Static front-end serving with index.html fallback; /health."""
import pytest


@pytest.fixture
def frontend_dir(test_settings):
    d = test_settings.frontend_dir
    d.mkdir(parents=True)
    (d / "index.html").write_text("<html>entry</html>", encoding="utf-8")
    (d / "script.js").write_text("const API_URL = '/api';", encoding="utf-8")
    return d


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"


def test_root_serves_index(client, frontend_dir):
    r = client.get("/")
    assert r.status_code == 200
    assert "entry" in r.text


def test_existing_asset_served(client, frontend_dir):
    r = client.get("/script.js")
    assert r.status_code == 200
    assert "API_URL" in r.text


def test_unknown_path_falls_back_to_index(client, frontend_dir):
    r = client.get("/verify?token=abc")
    assert r.status_code == 200
    assert "entry" in r.text
    assert "entry" in client.get("/some/deep/route").text


def test_unknown_api_path_is_json_404(client, frontend_dir):
    r = client.get("/api/nope")
    assert r.status_code == 404
    assert r.json() == {"message": "Not found"}


def test_no_frontend_installed_404(client):
    r = client.get("/")
    assert r.status_code == 404
