import httpx
import pytest

from adapters.http_client import build_async_client, fetch_text
from core.domain.errors import FetchError
from core.domain.profiles import get_profile

from conftest import html_response


@pytest.mark.asyncio
async def test_fetch_text_sends_profile_headers(settings, make_transport):
    recorder = make_transport(lambda request: html_response("<html>ok</html>"))

    body = await fetch_text(
        "https://www.instagram.com/p/ABC/",
        settings=settings,
        profile=get_profile("mobile_safari"),
        transport=recorder.transport,
    )

    assert body == "<html>ok</html>"
    assert recorder.calls == 1
    sent = recorder.requests[0].headers
    assert "iPhone" in sent["User-Agent"]
    assert sent["Referer"] == "https://www.instagram.com/"
    assert sent["Accept-Language"] == "en-US,en;q=0.9"


@pytest.mark.asyncio
async def test_fetch_text_non_2xx_is_fetch_error(settings, make_transport):
    recorder = make_transport(lambda request: html_response("nope", status_code=404))

    with pytest.raises(FetchError) as info:
        await fetch_text("https://www.instagram.com/p/ABC/", settings=settings, transport=recorder.transport)

    assert info.value.http_status == 404
    assert "404" in info.value.message
    assert recorder.calls == 1


@pytest.mark.asyncio
async def test_fetch_text_timeout_is_fetch_error(settings, make_transport):
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    recorder = make_transport(handler)

    with pytest.raises(FetchError) as info:
        await fetch_text("https://www.instagram.com/p/ABC/", settings=settings, transport=recorder.transport)

    assert "timed out" in info.value.message
    assert info.value.url == "https://www.instagram.com/p/ABC/"


@pytest.mark.asyncio
async def test_fetch_text_connection_error_is_fetch_error(settings, make_transport):
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(FetchError, match="^Network error while fetching the post$"):
        await fetch_text("https://www.instagram.com/p/ABC/", settings=settings, transport=make_transport(handler).transport)


@pytest.mark.asyncio
async def test_build_async_client_uses_settings_timeout(settings):
    custom = settings.model_copy(update={"http_timeout_seconds": 3.5})
    async with build_async_client(custom, extra_headers={"X-Test": "1"}) as client:
        assert client.timeout.read == 3.5
        assert client.headers["X-Test"] == "1"
        assert client.headers["Accept-Language"] == "en-US,en;q=0.5"
