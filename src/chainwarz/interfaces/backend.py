"""BackendService protocol - read-only leaderboard and profile API."""

from __future__ import annotations

from typing import Protocol

from chainwarz.models.backend import LeaderboardEntry, Profile


class BackendService(Protocol):
    """Serves player profiles and per-chain leaderboards."""

    async def get_profile(self, address: str) -> Profile | None:
        """Profile for a wallet address, or None if unknown."""
        ...

    async def get_profile_by_fid(self, fid: int) -> Profile | None:
        """Profile for a host identity (Farcaster fid), or None if unknown."""
        ...

    async def get_leaderboard(self) -> dict[str, list[LeaderboardEntry]]:
        """All leaderboards keyed by chain key."""
        ...

    async def get_chain_leaderboard(self, chain_key: str) -> list[LeaderboardEntry]:
        """Leaderboard for a single chain."""
        ...
