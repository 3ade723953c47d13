"""
Data Models Layer.

Configuration, the normalized file descriptor and per-run statistics.
"""

from .config import SweepConfig
from .descriptor import FileDescriptor
from .stats import SweepStats

__all__ = ["FileDescriptor", "SweepConfig", "SweepStats"]
