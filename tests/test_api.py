import pytest
from fastapi.testclient import TestClient

from conftest import StubSearchService
from typeahead.config.settings import settings
from typeahead.main import app
from typeahead.services.container import container
from typeahead.services.errors import SearchBackendError


@pytest.fixture
def stub_service(records):
    original = container.search_service
    stub = StubSearchService({"soup": records})
    container.override_search_service(stub)
    yield stub
    container.override_search_service(original)


@pytest.fixture
def client(stub_service, monkeypatch):
    monkeypatch.setattr(settings, "debounce_ms", 0)
    return TestClient(app)


def test_root_describes_api(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.json()["endpoints"]["autocomplete"] == "/api/autocomplete/ws"


def test_search_returns_records(client, stub_service):
    response = client.post("/api/search", json={"keyword": "soup", "post_types": ["post"], "size": 5})

    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 3
    assert [record["title"] for record in body["records"]] == ["Tomato soup", "Soup dumplings", "Pea soup"]
    assert stub_service.requests[0].size == 5


def test_search_rejects_oversized_request(client):
    response = client.post("/api/search", json={"keyword": "soup", "size": 500})
    assert response.status_code == 422


def test_search_backend_failure_is_500(client, stub_service):
    stub_service.error = SearchBackendError("connection refused")

    response = client.post("/api/search", json={"keyword": "soup"})

    assert response.status_code == 500
    assert response.json()["detail"] == "Search error: connection refused"


def test_health_reports_backend(client):
    response = client.get("/api/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "OK"
    assert body["backend"] == "stub"
    assert body["available"] is True


def test_websocket_session_search_navigate_select(client):
    with client.websocket_connect("/api/autocomplete/ws") as ws:
        assert ws.receive_json() == {"type": "list", "value": "", "visible": False, "active_index": None, "rows": []}

        ws.send_json({"event": "keyup", "value": "soup"})
        shown = ws.receive_json()
        assert shown["visible"] is True
        assert [row["label"] for row in shown["rows"]] == ["Tomato soup", "Soup dumplings", "Pea soup"]
        assert shown["rows"][0]["permalink"] == "http://example.com/tomato-soup/"

        ws.send_json({"event": "keydown", "key": "ArrowDown"})
        assert ws.receive_json()["active_index"] == 0

        ws.send_json({"event": "keydown", "key": 13})
        messages = [ws.receive_json() for _ in range(2)]

    assert messages[0] == {"type": "list", "value": "Tomato soup", "visible": False, "active_index": None, "rows": []}
    assert messages[1]["type"] == "select"
    assert messages[1]["label"] == "Tomato soup"
    assert messages[1]["permalink"] == "http://example.com/tomato-soup/"


def test_websocket_click_selects_row(client):
    with client.websocket_connect("/api/autocomplete/ws") as ws:
        ws.receive_json()
        ws.send_json({"event": "keyup", "value": "soup"})
        ws.receive_json()

        ws.send_json({"event": "click", "index": 2})
        messages = [ws.receive_json() for _ in range(2)]

    assert messages[1]["type"] == "select"
    assert messages[1]["record"]["slug"] == "pea-soup"
    assert messages[0]["visible"] is False


def test_websocket_invalid_messages_get_errors(client):
    with client.websocket_connect("/api/autocomplete/ws") as ws:
        ws.receive_json()

        ws.send_json({"event": "paste"})
        assert ws.receive_json()["type"] == "error"

        ws.send_json({"event": "click", "index": 0})
        assert ws.receive_json() == {"type": "error", "detail": "No row at index 0"}

        ws.send_text("not json")
        assert ws.receive_json() == {"type": "error", "detail": "Messages must be JSON"}
