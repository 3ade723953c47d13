import asyncio
import json

import aiohttp
import pytest

from slack_sweeper.api.client import SlackAPIClient
from slack_sweeper.api.rate_limiter import AdaptiveRateLimiter
from slack_sweeper.exceptions import InvalidResponseError, SlackAPIError
from tests.conftest import FakeResponse, FakeSession


def _client(*responses):
    session = FakeSession(responses)
    limiter = AdaptiveRateLimiter(calls_per_second=1000)
    return SlackAPIClient("xoxb-test", rate_limiter=limiter, session=session), session


def test_api_call_posts_form_with_token():
    client, session = _client(FakeResponse(payload={"ok": True, "members": []}))

    asyncio.run(client.list_users())

    method, url, data = session.requests[0]
    assert method == "POST"
    assert url == "https://slack.com/api/users.list"
    assert data == {"token": "xoxb-test", "count": "500"}


def test_list_channels_excludes_members():
    client, session = _client(FakeResponse(payload={"ok": True, "channels": []}))

    asyncio.run(client.list_channels())

    assert session.requests[0][2]["exclude_members"] == "true"


def test_list_files_sends_window_and_page():
    client, session = _client(FakeResponse(payload={"ok": True, "files": []}))

    asyncio.run(client.list_files(page=3, ts_to=12345, count=50))

    assert session.requests[0][2] == {
        "token": "xoxb-test",
        "ts_from": "0",
        "ts_to": "12345",
        "count": "50",
        "page": "3",
    }


def test_delete_file_sends_file_id():
    client, session = _client(FakeResponse(payload={"ok": True}))

    asyncio.run(client.delete_file("F123"))

    assert session.requests[0][1].endswith("/files.delete")
    assert session.requests[0][2]["file"] == "F123"


def test_not_ok_response_raises_slack_api_error():
    client, _ = _client(FakeResponse(payload={"ok": False, "error": "file_not_found"}))

    with pytest.raises(SlackAPIError) as excinfo:
        asyncio.run(client.delete_file("F1"))
    assert excinfo.value.error == "file_not_found"
    assert excinfo.value.method == "files.delete"


def test_http_error_propagates():
    client, _ = _client(FakeResponse(status=500))

    with pytest.raises(aiohttp.ClientError):
        asyncio.run(client.list_users())


def test_truncated_body_propagates():
    client, _ = _client(FakeResponse(json_error=aiohttp.ClientPayloadError("not json")))

    with pytest.raises(aiohttp.ClientError):
        asyncio.run(client.list_users())


def test_rate_limited_call_slows_down_pacing():
    client, _ = _client(FakeResponse(status=429, headers={"Retry-After": "30"}))

    with pytest.raises(aiohttp.ClientError):
        asyncio.run(client.list_users())
    assert client._rate_limiter.rate == pytest.approx(1 / 30)


def test_close_closes_session():
    client, session = _client()
    asyncio.run(client.close())
    assert session.closed


def test_unparseable_json_body_raises_invalid_response_error():
    client, _ = _client(
        FakeResponse(json_error=json.JSONDecodeError("Expecting value", "<html>", 0))
    )

    with pytest.raises(InvalidResponseError) as excinfo:
        asyncio.run(client.delete_file("F1"))
    assert excinfo.value.method == "files.delete"


@pytest.mark.parametrize("payload", [["not", "an", "object"], "ok", None])
def test_non_object_json_body_raises_invalid_response_error(payload):
    client, _ = _client(FakeResponse(payload=payload))

    with pytest.raises(InvalidResponseError):
        asyncio.run(client.list_users())


def test_lazy_session_keeps_aiohttp_default_timeout():
    from aiohttp.client import DEFAULT_TIMEOUT

    client = SlackAPIClient("xoxb-test")

    async def open_and_close():
        await client._initialize_session()
        timeout = client._session.timeout
        await client.close()
        return timeout

    assert asyncio.run(open_and_close()) == DEFAULT_TIMEOUT
