"""
Resolves Slack user and channel ids to display names.
"""

import asyncio
import logging
from types import MappingProxyType
from typing import Mapping

import aiohttp

from slack_sweeper.api.client import SlackAPIClient
from slack_sweeper.exceptions import DirectoryFetchError, SlackAPIError

log = logging.getLogger(__name__)


class DirectoryResolver:
    """Fetches the user and channel directories, one request each."""

    def __init__(self, api_client: SlackAPIClient):
        self.api_client = api_client

    async def resolve_users(self) -> Mapping[str, str]:
        """Returns a read-only ``user id -> name`` mapping."""
        return await self._resolve("users", self.api_client.list_users, "members")

    async def resolve_channels(self) -> Mapping[str, str]:
        """Returns a read-only ``channel id -> name`` mapping."""
        return await self._resolve(
            "channels", self.api_client.list_channels, "channels"
        )

    async def _resolve(self, label: str, fetch, item_key: str) -> Mapping[str, str]:
        try:
            response = await fetch()
            entries = response[item_key]
            directory = {entry["id"]: entry["name"] for entry in entries}
        except (
            aiohttp.ClientError,
            asyncio.TimeoutError,
            SlackAPIError,
            KeyError,
            TypeError,
        ) as e:
            raise DirectoryFetchError(f"Could not fetch the {label} list: {e}") from e

        log.debug(f"Resolved {len(directory)} {label}.")
        return MappingProxyType(directory)
