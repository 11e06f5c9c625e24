from fastapi.testclient import TestClient

from ingres_api.app.config import Settings
from ingres_api.app import deps
from ingres_api.app.deps import build_chat_service
from ingres_api.app.main import create_app


def test_blank_env_values_are_unset(monkeypatch):
    monkeypatch.setenv("SUPABASE_URL", "")
    monkeypatch.setenv("OLLAMA_API_KEY", "  ")
    monkeypatch.setenv("LOG_DIR", "")

    settings = Settings(_env_file=None)

    assert settings.SUPABASE_URL is None
    assert settings.OLLAMA_API_KEY is None
    assert settings.LOG_DIR is None
    assert settings.PORT == 3000
    assert settings.KNOWLEDGE_TABLE == "ingres_data"


def test_static_frontend_is_served_next_to_api(tmp_path, service):
    (tmp_path / "ingres.html").write_text("<h1>INGRES</h1>", encoding="utf-8")
    settings = Settings(_env_file=None, LOG_DIR=None, STATIC_DIR=tmp_path)

    with TestClient(create_app(settings=settings, chat_service=service)) as client:
        page = client.get("/ingres.html")
        health = client.get("/api/health")

    assert page.status_code == 200
    assert "INGRES" in page.text
    assert health.text == "OK"


def test_cors_allows_any_origin_by_default(client):
    resp = client.options(
        "/api/chat",
        headers={"Origin": "http://example.org", "Access-Control-Request-Method": "POST"},
    )

    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] == "*"


def test_unconfigured_lookup_degrades_to_plain_prompt(settings):
    service = build_chat_service(settings)
    assert service.lookup_context("Mohanlalganj") == ""
    service.close()


def test_app_without_injected_service_builds_its_own(settings):
    with TestClient(create_app(settings=settings)) as client:
        assert client.get("/api/health").text == "OK"


def test_index_html_is_served_at_root(tmp_path, service):
    (tmp_path / "index.html").write_text("<h1>INGRES home</h1>", encoding="utf-8")
    settings = Settings(_env_file=None, LOG_DIR=None, STATIC_DIR=tmp_path)

    with TestClient(create_app(settings=settings, chat_service=service)) as client:
        resp = client.get("/")

    assert resp.status_code == 200
    assert "INGRES home" in resp.text


def test_shutdown_closes_both_http_clients(settings, monkeypatch):
    service = build_chat_service(settings)
    monkeypatch.setattr(deps, "build_chat_service", lambda settings: service)

    with TestClient(create_app(settings=settings)):
        assert not service.knowledge.http.is_closed
        assert not service.llm._client.is_closed

    assert service.knowledge.http.is_closed
    assert service.llm._client.is_closed
