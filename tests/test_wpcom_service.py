import httpx
import pytest

from typeahead.models.schemas import SearchRequest
from typeahead.services.errors import MalformedResponseError, SearchBackendError
from typeahead.services.wpcom_service import WpcomSearchService


class FakeResponse:
    def __init__(self, payload, error: Exception = None, status_code: int = 200):
        self._payload = payload
        self._error = error
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self._error:
            raise self._error

    def json(self):
        return self._payload


def _stub_client(monkeypatch, response, calls):
    class StubClient:
        def __init__(self, *args, **kwargs):
            calls["client_kwargs"] = kwargs

        async def __aenter__(self):
            return self

        async def __aexit__(self, exc_type, exc, tb):
            return False

        async def post(self, url, json=None):
            calls["url"] = url
            calls["json"] = json
            if isinstance(response, Exception):
                raise response
            return response

        async def get(self, url):
            calls["get_url"] = url
            if isinstance(response, Exception):
                raise response
            return response

    monkeypatch.setattr(httpx, "AsyncClient", StubClient)


def _service():
    return WpcomSearchService(
        api_url="https://api.example/rest/v1/", site_id="42", match_fields=["title^5"], timeout=5.0
    )


@pytest.mark.asyncio
async def test_search_posts_query_and_parses_hits(monkeypatch):
    calls = {}
    payload = {
        "results": {
            "hits": [
                {"fields": {"title": "Soup", "url": "example.com/?p=3", "post_type": "recipe", "slug": "soup"}}
            ]
        }
    }
    _stub_client(monkeypatch, FakeResponse(payload), calls)

    records = await _service().search(SearchRequest(keyword="soup", post_types=["post", "recipe"]))

    assert calls["url"] == "https://api.example/rest/v1/sites/42/search"
    assert calls["json"]["size"] == 20
    assert calls["json"]["query"]["multi_match"]["query"] == "soup"
    assert calls["json"]["filter"] == {"and": [{"terms": {"post_type": ["post", "recipe"]}}]}
    assert calls["client_kwargs"] == {"timeout": 5.0}
    assert records[0].permalink() == "http://example.com/recipe/soup/"


@pytest.mark.asyncio
async def test_http_error_becomes_backend_error(monkeypatch):
    request = httpx.Request("POST", "https://api.example/rest/v1/sites/42/search")
    error = httpx.HTTPStatusError("server error", request=request, response=httpx.Response(500, request=request))
    _stub_client(monkeypatch, FakeResponse({}, error=error), {})

    with pytest.raises(SearchBackendError, match="WordPress.com search error"):
        await _service().search(SearchRequest(keyword="soup"))


@pytest.mark.asyncio
async def test_missing_results_is_malformed(monkeypatch):
    _stub_client(monkeypatch, FakeResponse({"found": 0}), {})

    with pytest.raises(MalformedResponseError):
        await _service().search(SearchRequest(keyword="soup"))


@pytest.mark.asyncio
async def test_is_available_false_on_connect_error(monkeypatch):
    _stub_client(monkeypatch, httpx.ConnectError("refused"), {})
    assert await _service().is_available() is False


@pytest.mark.asyncio
async def test_is_available_checks_site(monkeypatch):
    calls = {}
    _stub_client(monkeypatch, FakeResponse({"ID": 42}), calls)

    assert await _service().is_available() is True
    assert calls["get_url"] == "https://api.example/rest/v1/sites/42"
