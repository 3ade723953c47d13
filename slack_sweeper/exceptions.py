"""
Defines custom exceptions for the application to allow for more specific error handling.
"""


class SweeperError(Exception):
    """Base exception for all application-specific errors."""


class ConfigurationError(SweeperError):
    """Raised for invalid or incomplete run options."""


class SlackAPIError(SweeperError):
    """Raised when the Slack Web API answers with ``"ok": false``."""

    def __init__(self, method: str, error: str):
        super().__init__(f"{method} failed: {error}")
        self.method = method
        self.error = error


class DirectoryFetchError(SweeperError):
    """Raised when the user or channel directory cannot be retrieved."""


class PageFetchError(SweeperError):
    """Raised when a page of the file listing cannot be retrieved."""


class DownloadError(SweeperError):
    """Raised when streaming a file to local storage fails."""


class DeleteError(SweeperError):
    """Raised when Slack refuses or fails to delete a downloaded file."""


class InvalidResponseError(SlackAPIError):
    """Raised when a Web API body is not a JSON object."""
