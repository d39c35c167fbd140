"""Data models for the chainwarz session core."""

from chainwarz.models.backend import LeaderboardEntry, Profile, parse_leaderboard
from chainwarz.models.chains import ChainDescriptor, NativeCurrency
from chainwarz.models.config import AppConfig, WalletConfig
from chainwarz.models.records import ActionResult, StrikeResult
from chainwarz.models.session import ConnectionSource, WalletSession

__all__ = [
    "LeaderboardEntry", "Profile", "parse_leaderboard",
    "ChainDescriptor", "NativeCurrency",
    "AppConfig", "WalletConfig",
    "ActionResult", "StrikeResult",
    "ConnectionSource", "WalletSession",
]
