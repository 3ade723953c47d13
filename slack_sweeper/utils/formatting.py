"""
Helper functions for turning raw numbers into operator-facing strings.
"""

from datetime import datetime, timezone

_SIZE_UNITS = ("B", "KB", "MB", "GB", "TB")


def format_size(bytes_size: float) -> str:
    """Formats a byte count as e.g. '145.3 MB'."""
    if bytes_size <= 0:
        return "0 B"
    unit = 0
    while bytes_size >= 1024 and unit < len(_SIZE_UNITS) - 1:
        bytes_size /= 1024
        unit += 1
    return f"{bytes_size:.1f} {_SIZE_UNITS[unit]}"


def format_duration(seconds: float) -> str:
    """Formats elapsed seconds as e.g. '1h 2m 3s'."""
    hours, remainder = divmod(int(seconds), 3600)
    minutes, secs = divmod(remainder, 60)
    parts = [f"{value}{suffix}" for value, suffix in ((hours, "h"), (minutes, "m")) if value]
    if secs or not parts:
        parts.append(f"{secs}s")
    return " ".join(parts)


def format_cutoff(ts_to: int) -> str:
    """Renders the listing cutoff timestamp as a UTC date for log lines."""
    return datetime.fromtimestamp(ts_to, tz=timezone.utc).strftime("%Y-%m-%d %H:%M UTC")
