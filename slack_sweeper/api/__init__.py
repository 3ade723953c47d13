"""
Slack API Layer.

This package handles all communication with the Slack Web API.
"""

from .client import SlackAPIClient
from .rate_limiter import AdaptiveRateLimiter

__all__ = ["AdaptiveRateLimiter", "SlackAPIClient"]
