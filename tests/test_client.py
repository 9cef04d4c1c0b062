import io
import threading

import pytest
import requests

from partasala_api.config import Settings
from partasala_api.scraper.client import HTTP_STATUS, NETWORK, TIMEOUT, FetchError, HttpClient

URL = "https://partasala.is/bilaflokkur/audi/"


def _response(status_code: int, body: str = "", reason: str = "OK") -> requests.Response:
    response = requests.Response()
    response.status_code = status_code
    response.reason = reason
    response.url = URL
    response.encoding = "utf-8"
    response._content = body.encode("utf-8")
    response.raw = io.BytesIO(response._content)
    return response


def _client(monkeypatch: pytest.MonkeyPatch, outcome) -> tuple[HttpClient, list[dict]]:
    client = HttpClient(Settings(request_timeout_seconds=10.0, user_agent="TestAgent/1.0"))
    calls: list[dict] = []

    def fake_get(url, **kwargs):
        calls.append({"url": url, **kwargs})
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    monkeypatch.setattr(client._session, "get", fake_get)
    return client, calls


def test_fetch_parses_page_and_sends_user_agent_and_timeout(monkeypatch: pytest.MonkeyPatch) -> None:
    client, calls = _client(monkeypatch, _response(200, "<html><body><h1>Bílar</h1></body></html>"))

    soup = client.fetch(URL)

    assert soup.find("h1").get_text() == "Bílar"
    assert calls[0]["url"] == URL
    assert calls[0]["headers"] == {"User-Agent": "TestAgent/1.0"}
    assert calls[0]["timeout"] == 10.0


def test_fetch_non_200_is_http_status_error(monkeypatch: pytest.MonkeyPatch) -> None:
    client, _ = _client(monkeypatch, _response(404, "gone", reason="Not Found"))

    with pytest.raises(FetchError) as exc_info:
        client.fetch(URL)

    assert exc_info.value.kind == HTTP_STATUS
    assert exc_info.value.status_code == 404
    assert exc_info.value.reason == "Not Found"
    assert str(exc_info.value) == "status code error: 404 Not Found"


def test_fetch_other_2xx_status_is_not_success(monkeypatch: pytest.MonkeyPatch) -> None:
    client, _ = _client(monkeypatch, _response(204, reason="No Content"))

    with pytest.raises(FetchError) as exc_info:
        client.fetch(URL)

    assert exc_info.value.status_code == 204


def test_fetch_timeout(monkeypatch: pytest.MonkeyPatch) -> None:
    client, _ = _client(monkeypatch, requests.ReadTimeout("read timed out"))

    with pytest.raises(FetchError) as exc_info:
        client.fetch(URL)

    assert exc_info.value.kind == TIMEOUT
    assert exc_info.value.status_code is None
    assert exc_info.value.url == URL


def test_fetch_connect_timeout_counts_as_timeout(monkeypatch: pytest.MonkeyPatch) -> None:
    client, _ = _client(monkeypatch, requests.ConnectTimeout("connect timed out"))

    with pytest.raises(FetchError) as exc_info:
        client.fetch(URL)

    assert exc_info.value.kind == TIMEOUT


def test_fetch_network_error_keeps_cause(monkeypatch: pytest.MonkeyPatch) -> None:
    cause = requests.ConnectionError("Failed to resolve 'partasala.is'")
    client, _ = _client(monkeypatch, cause)

    with pytest.raises(FetchError) as exc_info:
        client.fetch(URL)

    assert exc_info.value.kind == NETWORK
    assert exc_info.value.__cause__ is cause
    assert "Failed to resolve" in str(exc_info.value)


def test_fetch_malformed_html_does_not_raise(monkeypatch: pytest.MonkeyPatch) -> None:
    client, _ = _client(monkeypatch, _response(200, "<div><a href='/bilaflokkur/x/'>X<div></span>"))

    soup = client.fetch(URL)

    assert soup.find("a")["href"] == "/bilaflokkur/x/"


def test_fetch_streams_body_within_overall_deadline(monkeypatch: pytest.MonkeyPatch) -> None:
    client, calls = _client(monkeypatch, _response(200, "<h1>Hægt</h1>"))
    ticks = iter([0.0, 10.5])
    monkeypatch.setattr("partasala_api.scraper.client.monotonic", lambda: next(ticks))

    with pytest.raises(FetchError) as exc_info:
        client.fetch(URL)

    assert calls[0]["stream"] is True
    assert exc_info.value.kind == TIMEOUT


def test_fetch_decodes_declared_encoding(monkeypatch: pytest.MonkeyPatch) -> None:
    response = _response(200)
    response.encoding = "windows-1252"
    response._content = "<h1>Bílaskrá</h1>".encode("windows-1252")
    response.raw = io.BytesIO(response._content)
    client, _ = _client(monkeypatch, response)

    soup = client.fetch(URL)

    assert soup.find("h1").get_text() == "Bílaskrá"


def test_each_thread_gets_its_own_session() -> None:
    client = HttpClient(Settings())
    main_session = client._session
    seen: list[object] = []

    worker = threading.Thread(target=lambda: seen.append(client._session))
    worker.start()
    worker.join()

    assert client._session is main_session
    assert seen[0] is not main_session
    client.close()
