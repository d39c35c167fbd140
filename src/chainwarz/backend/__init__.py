"""Leaderboard/profile backend client."""

from chainwarz.backend.client import HttpBackendClient

__all__ = ["HttpBackendClient"]
