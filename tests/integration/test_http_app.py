"""HTTP-level tests for the Starlette app, run in-process via ASGITransport."""

from __future__ import annotations

import html

import httpx
import respx

from htmlpreview import __version__
from htmlpreview.fetcher import encode_uri_component
from htmlpreview.models.params import DEFAULT_CORS_PROXY
from htmlpreview.rendering import SANDBOX_POLICY
from htmlpreview.transformer import VIEWPORT_META

VIEW_URL = "https://github.com/acme/widgets/blob/main/index.html"
RAW_URL = "https://raw.githubusercontent.com/acme/widgets/main/index.html"
RELAYED = DEFAULT_CORS_PROXY + encode_uri_component(RAW_URL)

_PAGE = "<html><head><title>Widgets</title></head><body><h1>Widgets</h1></body></html>"


def _srcdoc(page: str) -> str:
    start = page.index('srcdoc="') + len('srcdoc="')
    return html.unescape(page[start : page.index('"', start)])


# ---------------------------------------------------------------------------
# GET /
# ---------------------------------------------------------------------------


class TestPreviewPage:
    async def test_no_query_shows_form(self, web_client: httpx.AsyncClient) -> None:
        response = await web_client.get("/")
        assert response.status_code == 200
        assert 'id="previewform"' in response.text
        assert "http://testserver/?url=" in response.text
        assert "<iframe" not in response.text

    async def test_missing_url_shows_form_and_error(self, web_client: httpx.AsyncClient) -> None:
        response = await web_client.get("/", params={"theme": "dark"})
        assert response.status_code == 400
        assert 'id="previewform"' in response.text
        assert "Missing required parameter" in response.text
        assert "<iframe" not in response.text

    @respx.mock
    async def test_preview_rendered_in_sandboxed_frame(
        self, web_client: httpx.AsyncClient
    ) -> None:
        respx.get(RELAYED).mock(return_value=httpx.Response(200, text=_PAGE))

        response = await web_client.get("/", params={"url": VIEW_URL})

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert f'sandbox="{SANDBOX_POLICY}"' in response.text
        document = _srcdoc(response.text)
        assert document.startswith("<html><head>" + VIEWPORT_META)
        assert "<h1>Widgets</h1>" in document

    @respx.mock
    async def test_unsandboxed_and_sized(self, web_client: httpx.AsyncClient) -> None:
        respx.get(RELAYED).mock(return_value=httpx.Response(200, text=_PAGE))

        response = await web_client.get(
            "/",
            params={"url": VIEW_URL, "sandbox": "false", "width": "640", "scale": "2"},
        )

        assert response.status_code == 200
        assert "sandbox=" not in response.text
        assert "width: 640px" in response.text
        assert "transform: scale(2)" in response.text

    @respx.mock
    async def test_dark_theme_served_from_cache_once(
        self, web_client: httpx.AsyncClient
    ) -> None:
        raw = "https://bitbucket.org/acme/widgets/raw/main/notes.html"
        route = respx.get(DEFAULT_CORS_PROXY + encode_uri_component(raw)).mock(
            return_value=httpx.Response(200, text=_PAGE)
        )
        path = "/?url=https://bitbucket.org/acme/widgets/src/main/notes.html&theme=dark"

        first = await web_client.get(path)
        second = await web_client.get(path)

        assert route.call_count == 1
        assert first.text == second.text
        assert _srcdoc(second.text).count("background-color: #222") == 1

    @respx.mock
    async def test_fetch_error_rendered_inline(self, web_client: httpx.AsyncClient) -> None:
        respx.get(RELAYED).mock(return_value=httpx.Response(404))

        response = await web_client.get("/", params={"url": VIEW_URL})

        assert response.status_code == 502
        assert "Error fetching content: HTTP error! status: 404" in response.text
        assert "<iframe" not in response.text

    async def test_invalid_url_rendered_inline(self, web_client: httpx.AsyncClient) -> None:
        response = await web_client.get("/", params={"url": "nonsense"})
        assert response.status_code == 400
        assert "Invalid URL provided in parameter" in response.text


# ---------------------------------------------------------------------------
# GET /api/normalize
# ---------------------------------------------------------------------------


class TestNormalizeEndpoint:
    async def test_forge_url(self, web_client: httpx.AsyncClient) -> None:
        response = await web_client.get("/api/normalize", params={"url": VIEW_URL})
        assert response.status_code == 200
        assert response.json() == {
            "url": VIEW_URL,
            "raw_url": RAW_URL,
            "software": "GitHub",
            "host": "github.com",
        }

    async def test_unknown_host(self, web_client: httpx.AsyncClient) -> None:
        url = "https://cdn.test/demo.html?v=1"
        response = await web_client.get("/api/normalize", params={"url": url})
        body = response.json()
        assert body["raw_url"] == url
        assert body["software"] == "Unknown"
        assert body["host"] == "Unknown"

    async def test_missing_url_error_envelope(self, web_client: httpx.AsyncClient) -> None:
        response = await web_client.get("/api/normalize")
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "MISSING_URL"

    async def test_invalid_url_error_envelope(self, web_client: httpx.AsyncClient) -> None:
        response = await web_client.get("/api/normalize", params={"url": "nope"})
        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "INVALID_URL"
        assert error["suggestion"]


# ---------------------------------------------------------------------------
# GET /api/health
# ---------------------------------------------------------------------------


class TestHealth:
    @respx.mock
    async def test_reports_cache_size(self, web_client: httpx.AsyncClient) -> None:
        respx.get(RELAYED).mock(return_value=httpx.Response(200, text=_PAGE))
        await web_client.get("/", params={"url": VIEW_URL})

        response = await web_client.get("/api/health")

        assert response.json() == {
            "status": "ok",
            "version": __version__,
            "cache_entries": 1,
        }
