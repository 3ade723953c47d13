"""slack-sweeper: archive and purge old Slack file uploads."""

__version__ = "1.0.0"
