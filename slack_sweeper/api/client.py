"""
Async client for the handful of Slack Web API methods the sweep relies on.
"""

import asyncio
import logging
import time
from typing import Any, Dict, Optional

import aiohttp

from slack_sweeper.exceptions import InvalidResponseError, SlackAPIError

from .rate_limiter import AdaptiveRateLimiter

log = logging.getLogger(__name__)


class SlackAPIClient:
    """
    Thin async client for the Slack Web API.

    Every method is a form-encoded POST carrying the token in the body. Calls
    are awaited one at a time by the callers; nothing here issues requests in
    parallel.
    """

    BASE_URL = "https://slack.com/api/"
    DIRECTORY_LIMIT = 500

    def __init__(
        self,
        token: str,
        rate_limiter: Optional[AdaptiveRateLimiter] = None,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        """
        Args:
            token: Slack API token used for every call.
            rate_limiter: Pacing for outgoing calls. A default one is created if omitted.
            session: Pre-built session, mainly for tests. Created lazily otherwise.
        """
        self.token = token
        self._rate_limiter = rate_limiter or AdaptiveRateLimiter()
        self._session = session

    async def _initialize_session(self) -> None:
        """Ensures an active aiohttp session is available."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                headers={"User-Agent": "slack-sweeper"}
            )

    async def close(self) -> None:
        """Gracefully closes the aiohttp session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def api_call(self, method: str, **fields: Any) -> Dict[str, Any]:
        """
        Posts to a Web API method and returns the decoded JSON body.

        Raises:
            aiohttp.ClientError: On transport or HTTP errors.
            InvalidResponseError: When the body is not a JSON object.
            SlackAPIError: When Slack answers with ``"ok": false``.
        """
        await self._initialize_session()
        await self._rate_limiter.acquire()

        form = {"token": self.token}
        form.update({key: str(value) for key, value in fields.items()})

        start_time = time.monotonic()
        try:
            async with self._session.post(self.BASE_URL + method, data=form) as r:
                duration_ms = (time.monotonic() - start_time) * 1000
                log.debug(f"{method} answered {r.status} in {duration_ms:.0f} ms")

                if r.status == 429:
                    retry_after = r.headers.get("Retry-After")
                    await self._rate_limiter.on_429(
                        float(retry_after) if retry_after else None
                    )

                r.raise_for_status()
                try:
                    data = await r.json()
                except ValueError as e:
                    raise InvalidResponseError(method, f"invalid JSON body ({e})") from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            log.debug(f"API call to {method} failed: {e}")
            raise

        if not isinstance(data, dict):
            raise InvalidResponseError(method, "body is not a JSON object")
        if not data.get("ok", True):
            raise SlackAPIError(method, data.get("error", "unknown_error"))
        return data

    # Public API Methods
    async def list_users(self) -> Dict[str, Any]:
        return await self.api_call("users.list", count=self.DIRECTORY_LIMIT)

    async def list_channels(self) -> Dict[str, Any]:
        return await self.api_call(
            "channels.list", exclude_members="true", count=self.DIRECTORY_LIMIT
        )

    async def list_files(
        self, page: int, ts_to: int, ts_from: int = 0, count: int = 50
    ) -> Dict[str, Any]:
        return await self.api_call(
            "files.list", ts_from=ts_from, ts_to=ts_to, count=count, page=page
        )

    async def delete_file(self, file_id: str) -> Dict[str, Any]:
        return await self.api_call("files.delete", file=file_id)
