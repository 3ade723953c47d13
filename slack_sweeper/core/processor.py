"""
Downloads, then deletes, each candidate file strictly one at a time.
"""

import asyncio
import logging
from typing import List, Optional, Sequence

import aiohttp
from rich.markup import escape

from slack_sweeper.api.client import SlackAPIClient
from slack_sweeper.exceptions import (
    DeleteError,
    DownloadError,
    SlackAPIError,
)
from slack_sweeper.media.downloader import Downloader
from slack_sweeper.models.config import SweepConfig
from slack_sweeper.models.descriptor import FileDescriptor
from slack_sweeper.models.stats import SweepStats

log = logging.getLogger(__name__)


class SequentialProcessor:
    """
    Drains the candidate list as a stack, last-arrived first.

    The first download or delete failure stops the batch. It is logged and
    recorded in the returned stats rather than raised.
    """

    def __init__(
        self,
        config: SweepConfig,
        api_client: SlackAPIClient,
        downloader: Downloader,
        stats: Optional[SweepStats] = None,
    ):
        self.config = config
        self.api_client = api_client
        self.downloader = downloader
        self.stats = stats or SweepStats(dry_run=config.dry_run)

    async def process_all(self, descriptors: Sequence[FileDescriptor]) -> SweepStats:
        pending: List[FileDescriptor] = list(descriptors)
        try:
            while pending:
                await self._process_one(pending.pop())
        except (DownloadError, DeleteError) as e:
            self.stats.aborted_by = str(e)
            log.error(f"[red]✗ Batch aborted: {escape(str(e))}[/red]")
            self.stats.files_skipped = len(pending)
            if pending:
                log.warning(
                    f"[yellow]Skipped the remaining {len(pending)} file(s).[/yellow]"
                )
        return self.stats

    async def _process_one(self, descriptor: FileDescriptor) -> None:
        log.info(
            f"Downloading `{escape(descriptor.filename)}` "
            f"from `{escape(descriptor.folder)}`"
        )
        self.stats.files_announced += 1
        if self.config.dry_run:
            return

        folder = descriptor.destination_dir(self.config.destination)
        try:
            await asyncio.to_thread(folder.mkdir, parents=True, exist_ok=True)
        except OSError as e:
            raise DownloadError(f"Could not create folder '{folder}': {e}") from e

        size = await self.downloader.download_file(
            descriptor.permalink, descriptor.destination_path(self.config.destination)
        )
        self.stats.files_downloaded += 1
        self.stats.bytes_downloaded += size
        log.info("[green]Download complete![/green]")

        await self._delete_remote(descriptor)
        self.stats.files_deleted += 1

    async def _delete_remote(self, descriptor: FileDescriptor) -> None:
        try:
            await self.api_client.delete_file(descriptor.id)
        except (aiohttp.ClientError, asyncio.TimeoutError, SlackAPIError) as e:
            raise DeleteError(
                f"Downloaded '{descriptor.filename}' but could not delete it "
                f"from Slack: {e}"
            ) from e
        log.debug(f"Deleted Slack file {descriptor.id}")
