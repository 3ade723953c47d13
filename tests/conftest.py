import math

import aiohttp
import pytest

from slack_sweeper.models.config import SweepConfig

NOW = 1_700_000_000
DAY = 86400


def make_file(file_id, *, age_days=200, user="U1", name="report.pdf", channels=("C1",), link=True):
    return {
        "id": file_id,
        "timestamp": NOW - age_days * DAY,
        "user": user,
        "name": name,
        "channels": list(channels),
        "url_private_download": f"https://files.slack.com/{file_id}/download" if link else "",
    }


class FakeSlackClient:
    """Stands in for SlackAPIClient and records every call in order."""

    def __init__(
        self,
        files=None,
        pages=None,
        users=None,
        channels=None,
        users_error=None,
        channels_error=None,
        page_errors=None,
        delete_errors=None,
    ):
        self.files = files or []
        self.pages = pages
        self.users = users if users is not None else {"U1": "alice", "U2": "bob"}
        self.channels = channels if channels is not None else {"C1": "general", "C2": "random"}
        self.users_error = users_error
        self.channels_error = channels_error
        self.page_errors = page_errors or {}
        self.delete_errors = delete_errors or {}
        self.calls = []
        self.closed = False

    @property
    def page_requests(self):
        return [call for call in self.calls if call[0] == "files.list"]

    @property
    def deletes(self):
        return [call[1] for call in self.calls if call[0] == "files.delete"]

    async def list_users(self):
        self.calls.append(("users.list",))
        if self.users_error:
            raise self.users_error
        return {"ok": True, "members": [{"id": k, "name": v} for k, v in self.users.items()]}

    async def list_channels(self):
        self.calls.append(("channels.list",))
        if self.channels_error:
            raise self.channels_error
        return {"ok": True, "channels": [{"id": k, "name": v} for k, v in self.channels.items()]}

    async def list_files(self, page, ts_to, ts_from=0, count=50):
        self.calls.append(("files.list", page, ts_to))
        if page in self.page_errors:
            raise self.page_errors[page]
        if self.pages is not None:
            return self.pages[page - 1]
        matching = [f for f in self.files if ts_from <= f["timestamp"] <= ts_to]
        start = (page - 1) * count
        return {
            "ok": True,
            "files": matching[start:start + count],
            "paging": {"count": count, "total": len(matching), "page": page, "pages": math.ceil(len(matching) / count)},
        }

    async def delete_file(self, file_id):
        self.calls.append(("files.delete", file_id))
        if file_id in self.delete_errors:
            raise self.delete_errors[file_id]
        return {"ok": True}

    async def close(self):
        self.closed = True


class FakeDownloader:
    """Writes a small payload instead of hitting the network."""

    def __init__(self, token="xoxb-test", fail_on=(), calls=None):
        self.token = token
        self.fail_on = set(fail_on)
        self.calls = calls if calls is not None else []
        self.closed = False

    async def download_file(self, url, destination_path):
        self.calls.append(("download", url))
        if url in self.fail_on:
            from slack_sweeper.exceptions import DownloadError

            raise DownloadError(f"Could not download '{destination_path.name}': boom")
        destination_path.write_bytes(b"payload")
        return 7

    async def close(self):
        self.closed = True


class FakeContent:
    def __init__(self, chunks, error=None):
        self._chunks = chunks
        self._error = error

    async def iter_chunked(self, size):
        for chunk in self._chunks:
            yield chunk
        if self._error:
            raise self._error


class FakeResponse:
    def __init__(self, status=200, payload=None, chunks=(), headers=None, json_error=None, stream_error=None):
        self.status = status
        self._payload = payload
        self._json_error = json_error
        self.headers = headers or {}
        self.content = FakeContent(list(chunks), stream_error)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False

    def raise_for_status(self):
        if self.status >= 400:
            raise aiohttp.ClientError(f"HTTP {self.status}")

    async def json(self):
        if self._json_error:
            raise self._json_error
        return self._payload


class FakeSession:
    """Minimal aiohttp.ClientSession replacement that replays canned responses."""

    def __init__(self, responses):
        self._responses = list(responses)
        self.requests = []
        self.closed = False

    def _next(self):
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def post(self, url, data=None):
        self.requests.append(("POST", url, data))
        return self._next()

    def get(self, url, headers=None, allow_redirects=True):
        self.requests.append(("GET", url, headers))
        return self._next()

    async def close(self):
        self.closed = True


@pytest.fixture
def config_factory(tmp_path):
    def factory(**overrides):
        options = {"token": "xoxb-test", "destination": tmp_path / "archive"}
        options.update(overrides)
        return SweepConfig(**options)

    return factory
