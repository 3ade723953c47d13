"""
Handles the low-level downloading of Slack files over HTTP.
"""

import asyncio
import logging
from pathlib import Path
from typing import Optional

import aiofiles
import aiohttp

from slack_sweeper.exceptions import DownloadError

log = logging.getLogger(__name__)


async def _discard_partial(path: Path) -> None:
    try:
        await asyncio.to_thread(path.unlink, missing_ok=True)
    except OSError as e:
        log.debug(f"Could not remove partial file '{path}': {e}")


class Downloader:
    """Streams a private Slack file to disk using bearer-token authentication."""

    CHUNK_SIZE = 262144  # 256 KB

    def __init__(self, token: str, session: Optional[aiohttp.ClientSession] = None):
        self.token = token
        self._session = session

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
            log.debug("Created download session.")
        return self._session

    async def close(self) -> None:
        if self._session and not self._session.closed:
            await self._session.close()
            log.debug("Download session closed.")

    async def download_file(self, url: str, destination_path: Path) -> int:
        """
        Downloads ``url`` into ``destination_path`` and returns the bytes written.

        The call only returns once the file handle has been closed, so the data
        is on disk before any follow-up action runs. A partially written file is
        removed on failure.

        Raises:
            DownloadError: On HTTP, transport or local write errors.
        """
        headers = {"Authorization": f"Bearer {self.token}"}
        bytes_written = 0
        opened = False
        try:
            session = await self._get_session()
            async with session.get(url, headers=headers, allow_redirects=True) as response:
                response.raise_for_status()
                async with aiofiles.open(destination_path, "wb") as f:
                    opened = True
                    async for chunk in response.content.iter_chunked(self.CHUNK_SIZE):
                        await f.write(chunk)
                        bytes_written += len(chunk)
        except (aiohttp.ClientError, asyncio.TimeoutError, OSError) as e:
            if opened:
                await _discard_partial(destination_path)
            raise DownloadError(
                f"Could not download '{destination_path.name}': {e}"
            ) from e

        log.debug(f"Wrote {bytes_written} bytes to '{destination_path}'")
        return bytes_written
