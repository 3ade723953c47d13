"""
The main orchestrator for a single sweep run.
"""

import logging
import time
from typing import Callable

from slack_sweeper.api.client import SlackAPIClient
from slack_sweeper.media.downloader import Downloader
from slack_sweeper.models.config import SweepConfig
from slack_sweeper.models.stats import SweepStats

from .directory import DirectoryResolver
from .paginator import CandidatePaginator
from .processor import SequentialProcessor

log = logging.getLogger(__name__)


class SweepManager:
    """Wires the resolver, paginator and processor together for one run."""

    def __init__(
        self,
        config: SweepConfig,
        api_client: SlackAPIClient,
        downloader: Downloader,
        clock: Callable[[], float] = time.time,
    ):
        self.config = config
        self.api_client = api_client
        self.downloader = downloader
        self.clock = clock
        self.stats = SweepStats(dry_run=config.dry_run)

    async def run(self) -> SweepStats:
        """
        Executes the sweep.

        Directory and listing failures propagate; download and delete
        failures are contained by the processor.
        """
        resolver = DirectoryResolver(self.api_client)
        users = await resolver.resolve_users()
        channels = await resolver.resolve_channels()
        log.debug(f"Directories loaded: {len(users)} users, {len(channels)} channels")

        paginator = CandidatePaginator(
            self.config, self.api_client, users, channels, clock=self.clock
        )
        candidates = await paginator.collect_candidates(self.config.min_candidates)
        self.stats.pages_fetched = paginator.pages_fetched
        self.stats.candidates_found = len(candidates)

        if not candidates:
            log.info("No files older than the cutoff. Nothing to do.")
            return self.stats

        log.info(f"Found {len(candidates)} candidate file(s).")
        processor = SequentialProcessor(
            self.config, self.api_client, self.downloader, self.stats
        )
        return await processor.process_all(candidates)
