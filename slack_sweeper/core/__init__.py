"""
Core sweep engine.

The `SweepManager` coordinates a run: the `DirectoryResolver` maps ids to
names, the `CandidatePaginator` pages through old files, and the
`SequentialProcessor` downloads and deletes them one at a time.
"""

from .builder import build_descriptors
from .directory import DirectoryResolver
from .paginator import CandidatePaginator
from .processor import SequentialProcessor
from .sweep_manager import SweepManager

__all__ = [
    "CandidatePaginator",
    "DirectoryResolver",
    "SequentialProcessor",
    "SweepManager",
    "build_descriptors",
]
