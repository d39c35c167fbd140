"""Mutable wallet session state."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from chainwarz.models.backend import LeaderboardEntry, Profile
from chainwarz.models.records import StrikeResult


class ConnectionSource(str, Enum):
    """Where the active wallet provider came from."""

    HOST = "host-provided"  # Mini App host wallet
    INJECTED = "browser-injected"  # extension / injected EIP-1193 object
    NONE = "none"


@dataclass
class WalletSession:
    """State owned by a single WalletSessionManager.

    Created empty; ``account`` is set by a successful connect and cleared
    by an empty ``accountsChanged``; ``chain_id`` follows ``chainChanged``
    and every explicit switch.
    """

    provider: Any = None
    source: ConnectionSource = ConnectionSource.NONE
    account: str | None = None
    chain_id: str | None = None
    in_host: bool = False
    host_fid: int | None = None

    profile: Profile | None = None
    leaderboard: dict[str, list[LeaderboardEntry]] = field(default_factory=dict)
    last_strike: StrikeResult | None = None
    strikes: list[StrikeResult] = field(default_factory=list)
    status: str = ""
    unsupported_chains: set[str] = field(default_factory=set)

    @property
    def connected(self) -> bool:
        return self.account is not None

    def clear_account(self) -> None:
        self.account = None
        self.profile = None
