"""Payloads returned by the leaderboard/profile backend.

The backend owns these shapes; parsing is lenient so that extra or
missing fields never break the session.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


def _int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


@dataclass
class Profile:
    """A player's identity and per-chain strike counts."""

    address: str | None = None
    username: str | None = None
    display_name: str | None = None
    pfp_url: str | None = None
    profile_url: str | None = None
    fid: int | None = None
    strikes: dict[str, int] = field(default_factory=dict)

    @property
    def total_strikes(self) -> int:
        return sum(self.strikes.values())

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Profile:
        raw_strikes = data.get("strikes") or {}
        strikes = {}
        if isinstance(raw_strikes, dict):
            strikes = {str(k): _int(v) for k, v in raw_strikes.items()}
        fid = data.get("fid")
        return cls(
            address=data.get("walletAddress") or data.get("address"),
            username=data.get("username"),
            display_name=data.get("displayName") or data.get("display_name"),
            pfp_url=data.get("pfpUrl") or data.get("pfp_url"),
            profile_url=data.get("profileUrl") or data.get("profile_url"),
            fid=_int(fid) if fid is not None else None,
            strikes=strikes,
        )


@dataclass
class LeaderboardEntry:
    """One ranked row of a per-chain leaderboard."""

    rank: int
    wallet_address: str
    tx_count: int = 0
    username: str | None = None
    pfp_url: str | None = None

    @property
    def short_address(self) -> str:
        addr = self.wallet_address
        if len(addr) <= 10:
            return addr
        return f"{addr[:6]}...{addr[-4:]}"

    @classmethod
    def from_dict(cls, data: dict[str, Any], rank: int) -> LeaderboardEntry:
        return cls(
            rank=rank,
            wallet_address=str(data.get("walletAddress") or data.get("address") or ""),
            tx_count=_int(data.get("txCount", data.get("strikes", 0))),
            username=data.get("username"),
            pfp_url=data.get("pfpUrl") or data.get("pfp_url"),
        )


def parse_leaderboard(entries: Any) -> list[LeaderboardEntry]:
    """Parse a list of rows, ranking them in the order received."""
    if not isinstance(entries, list):
        return []
    return [
        LeaderboardEntry.from_dict(row, rank=i)
        for i, row in enumerate((e for e in entries if isinstance(e, dict)), start=1)
    ]
