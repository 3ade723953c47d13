"""
The normalized unit of work handed from the paginator to the processor.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class FileDescriptor:
    """A Slack file selected for archiving."""

    filename: str
    folder: str
    permalink: str
    id: str

    def destination_dir(self, root: Path) -> Path:
        return root / self.folder

    def destination_path(self, root: Path) -> Path:
        return self.destination_dir(root) / self.filename
