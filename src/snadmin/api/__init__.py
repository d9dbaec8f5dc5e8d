"""Admin API client."""

from snadmin.api.client import EpisodeClient

__all__ = ["EpisodeClient"]
