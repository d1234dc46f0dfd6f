import httpx
import pytest
from fastapi.testclient import TestClient

from api.app import create_app
from core.services.caption_service import CaptionService

from conftest import html_response

OG_HTML = '<meta property="og:description" content="Hello &amp; welcome">'


@pytest.fixture
def client_for(settings, make_transport):
    def factory(handler):
        recorder = make_transport(handler)
        app = create_app(settings, service=CaptionService(settings, transport=recorder.transport))
        return TestClient(app), recorder

    return factory


def test_health(client_for):
    client, _ = client_for(lambda request: html_response(""))
    for path in ("/health", "/api/health"):
        response = client.get(path)
        assert response.status_code == 200
        assert response.json()["status"] == "OK"


def test_extract_caption_success(client_for):
    client, recorder = client_for(lambda request: html_response(OG_HTML))

    response = client.post("/api/extract-caption", json={"url": "https://www.instagram.com/p/ABC123xyz/"})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["caption"] == "Hello & welcome"
    assert "error" not in body
    assert recorder.calls == 1


def test_extract_caption_unprefixed_route(client_for):
    client, _ = client_for(lambda request: html_response(OG_HTML))
    response = client.post("/extract-caption", json={"url": "https://www.instagram.com/p/ABC123xyz/"})
    assert response.json()["caption"] == "Hello & welcome"


def test_invalid_url_is_400_without_network(client_for):
    client, recorder = client_for(lambda request: html_response(OG_HTML))

    response = client.post("/api/extract-caption", json={"url": "not-a-url"})

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Invalid Instagram URL"}
    assert recorder.calls == 0


def test_missing_url_is_400(client_for):
    client, recorder = client_for(lambda request: html_response(OG_HTML))

    assert client.post("/api/extract-caption", json={}).json() == {"success": False, "error": "URL is required"}
    assert client.post("/api/extract-caption").status_code == 400
    assert recorder.calls == 0


def test_malformed_body_is_400(client_for):
    client, _ = client_for(lambda request: html_response(OG_HTML))

    response = client.post("/api/extract-caption", json={"url": 123})

    assert response.status_code == 400
    assert response.json()["success"] is False


def test_fetch_timeout_is_500(client_for):
    def handler(request):
        raise httpx.ConnectTimeout("timed out", request=request)

    client, recorder = client_for(handler)

    response = client.post("/api/extract-caption", json={"url": "https://instagram.com/reel/XYZ/"})

    assert response.status_code == 500
    body = response.json()
    assert body["success"] is False
    assert "timed out" in body["error"]
    assert recorder.calls == 2


def test_static_root_page(settings, tmp_path):
    static = tmp_path / "public"
    static.mkdir()
    (static / "index.html").write_text("<h1>extractor</h1>", encoding="utf-8")
    app = create_app(settings.model_copy(update={"static_dir": static}))

    client = TestClient(app)

    assert "extractor" in client.get("/").text
    assert client.get("/api/health").json()["status"] == "OK"


def test_lone_surrogate_caption_serializes(client_for):
    body = '{"items": [{"caption": {"text": "hi \\ud83d there"}}]}'
    client, _ = client_for(
        lambda request: httpx.Response(200, text=body, headers={"Content-Type": "application/json"})
    )

    response = client.post("/api/extract-caption", json={"url": "https://www.instagram.com/p/ABC123xyz/"})

    assert response.status_code == 200
    assert response.json()["success"] is True
    assert response.json()["caption"] == "hi \ufffd there"
