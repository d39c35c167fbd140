"""HTTP client for the ChainWarZ leaderboard/profile backend."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from chainwarz.errors import BackendError
from chainwarz.models.backend import LeaderboardEntry, Profile, parse_leaderboard

log = logging.getLogger(__name__)


class HttpBackendClient:
    """Reads profiles and leaderboards from the backend JSON API.

    Endpoints:
    - GET /api/profile/{address}
    - GET /api/profile/fid/{fid}
    - GET /api/leaderboard            (object keyed by chain)
    - GET /api/leaderboard/{chain}    (list of rows)
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout, connect=5),
            follow_redirects=True,
        )

    def _url(self, path: str) -> str:
        return f"{self._base_url}/api/{path}"

    async def _get_json(self, path: str, allow_missing: bool = False) -> Any:
        url = self._url(path)
        try:
            resp = await self._client.get(url)
        except httpx.HTTPError as exc:
            raise BackendError(f"Backend request failed: {exc}") from exc

        if allow_missing and resp.status_code == 404:
            log.debug("GET %s -> 404", url)
            return None
        if resp.status_code >= 400:
            raise BackendError(f"Backend returned HTTP {resp.status_code} for /api/{path}")
        try:
            return resp.json()
        except ValueError as exc:
            raise BackendError(f"Backend returned invalid JSON for /api/{path}") from exc

    async def get_profile(self, address: str) -> Profile | None:
        data = await self._get_json(f"profile/{address}", allow_missing=True)
        if not isinstance(data, dict):
            return None
        profile = Profile.from_dict(data)
        if profile.address is None:
            profile.address = address
        return profile

    async def get_profile_by_fid(self, fid: int) -> Profile | None:
        data = await self._get_json(f"profile/fid/{fid}", allow_missing=True)
        if not isinstance(data, dict):
            return None
        profile = Profile.from_dict(data)
        if profile.fid is None:
            profile.fid = fid
        return profile

    async def get_leaderboard(self) -> dict[str, list[LeaderboardEntry]]:
        data = await self._get_json("leaderboard")
        if not isinstance(data, dict):
            raise BackendError("Backend leaderboard payload is not an object")
        return {str(chain): parse_leaderboard(rows) for chain, rows in data.items()}

    async def get_chain_leaderboard(self, chain_key: str) -> list[LeaderboardEntry]:
        data = await self._get_json(f"leaderboard/{chain_key}")
        if isinstance(data, dict):
            # {"entries": [...]} or {"<chain>": [...]}
            data = data.get("entries", data.get(chain_key))
        return parse_leaderboard(data)

    async def close(self) -> None:
        await self._client.aclose()
