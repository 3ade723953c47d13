"""
Media Layer.

Streams Slack file content to local storage.
"""

from .downloader import Downloader

__all__ = ["Downloader"]
