"""
Turns raw ``files.list`` entries into normalized file descriptors.
"""

import re
from datetime import datetime, timezone
from typing import Any, Iterable, List, Mapping, Optional

from slack_sweeper.models.descriptor import FileDescriptor

_UNSAFE_CHARS = re.compile(r"[/\\:]")


def sanitize_segment(value: str) -> str:
    """Replaces path separators and colons so the value is a single path segment."""
    return _UNSAFE_CHARS.sub("_", value)


def derive_filename(timestamp: float, uploader: str, original_name: str) -> str:
    """
    Builds ``<UTC ISO time> - <uploader> - <name>``, e.g.
    ``2021-03-04T05_06_07 - alice - report.pdf``.
    """
    uploaded = datetime.fromtimestamp(int(timestamp), tz=timezone.utc)
    stamp = uploaded.strftime("%Y-%m-%dT%H:%M:%S")
    return sanitize_segment(f"{stamp} - {uploader} - {original_name}")


def _build_one(
    entry: Mapping[str, Any],
    users: Mapping[str, str],
    channels: Mapping[str, str],
) -> Optional[FileDescriptor]:
    if not isinstance(entry, Mapping):
        return None
    file_channels = entry.get("channels")
    permalink = entry.get("url_private_download")
    if not isinstance(file_channels, (list, tuple)) or not file_channels:
        return None
    if not isinstance(permalink, str) or not permalink:
        return None

    try:
        user_id = entry.get("user", "")
        filename = derive_filename(
            float(entry["timestamp"]),
            users.get(user_id, user_id),
            str(entry.get("name", "")),
        )
    except (KeyError, TypeError, ValueError, OverflowError, OSError):
        return None

    channel_id = file_channels[0]
    if not isinstance(channel_id, str):
        return None
    return FileDescriptor(
        filename=filename,
        folder=channels.get(channel_id, channel_id),
        permalink=permalink,
        id=str(entry.get("id", "")),
    )


def build_descriptors(
    entries: Iterable[Mapping[str, Any]],
    users: Mapping[str, str],
    channels: Mapping[str, str],
) -> List[FileDescriptor]:
    """
    Converts one page of raw file entries, keeping their order.

    Entries without a channel or a download link, or with an unreadable
    timestamp, are dropped without notice.
    """
    descriptors = []
    for entry in entries:
        descriptor = _build_one(entry, users, channels)
        if descriptor is not None:
            descriptors.append(descriptor)
    return descriptors
