"""
Pages through ``files.list`` until enough old files have been gathered.
"""

import asyncio
import logging
import time
from typing import Callable, List, Mapping

import aiohttp

from slack_sweeper.api.client import SlackAPIClient
from slack_sweeper.exceptions import PageFetchError, SlackAPIError
from slack_sweeper.models.config import SweepConfig
from slack_sweeper.models.descriptor import FileDescriptor
from slack_sweeper.utils.formatting import format_cutoff

from .builder import build_descriptors

log = logging.getLogger(__name__)


class CandidatePaginator:
    """
    Collects descriptors for files uploaded before the configured cutoff.

    The total page count is only known once the first page has arrived, so
    the loop reads it from that response and uses it as the upper bound.
    """

    def __init__(
        self,
        config: SweepConfig,
        api_client: SlackAPIClient,
        users: Mapping[str, str],
        channels: Mapping[str, str],
        clock: Callable[[], float] = time.time,
    ):
        self.config = config
        self.api_client = api_client
        self.users = users
        self.channels = channels
        self.clock = clock
        self.pages_fetched = 0

    async def _fetch_page(self, page: int, ts_to: int) -> dict:
        try:
            response = await self.api_client.list_files(
                page=page, ts_to=ts_to, count=self.config.page_size
            )
            files = response.get("files") or []
            total_pages = int((response.get("paging") or {}).get("pages", 0))
        except (
            aiohttp.ClientError,
            asyncio.TimeoutError,
            SlackAPIError,
            AttributeError,
            TypeError,
            ValueError,
        ) as e:
            raise PageFetchError(f"Could not fetch file page {page}: {e}") from e
        self.pages_fetched += 1
        return {"files": files, "pages": total_pages}

    async def collect_candidates(self, min_count: int) -> List[FileDescriptor]:
        """
        Returns candidates in arrival order.

        ``min_count`` is a soft floor: the last page fetched may push the
        result past it and nothing is truncated.
        """
        ts_to = self.config.cutoff_timestamp(self.clock())
        log.info(f"Looking for files uploaded before {format_cutoff(ts_to)}")

        candidates: List[FileDescriptor] = []
        page = 1
        total_pages = 0
        while True:
            log.info(f"Fetching page {page} with {len(candidates)} candidates so far")
            result = await self._fetch_page(page, ts_to)
            if page == 1:
                total_pages = result["pages"]

            candidates.extend(
                build_descriptors(result["files"], self.users, self.channels)
            )

            if len(candidates) >= min_count or page >= total_pages:
                break
            page += 1

        log.debug(f"Stopped after page {page} of {total_pages}.")
        return candidates
