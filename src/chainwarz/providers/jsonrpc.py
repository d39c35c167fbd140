"""JSON-RPC node provider - a WalletProvider backed by a node with unlocked accounts.

Intended for development nodes (anvil, hardhat, geth --dev) where the node
itself signs ``eth_sendTransaction``. Wallet-only methods are emulated:
``eth_requestAccounts`` maps to ``eth_accounts``, a chain switch succeeds
only if the node already serves the requested chain, and adding chains is
unsupported.
"""

from __future__ import annotations

import itertools
import logging
from typing import Any

import httpx

from chainwarz.errors import (
    CHAIN_DISCONNECTED,
    DISCONNECTED,
    UNSUPPORTED_METHOD,
    ProviderRpcError,
)

log = logging.getLogger(__name__)


class JsonRpcProvider:
    """Speaks JSON-RPC 2.0 over HTTP. Has no event subscription."""

    def __init__(
        self,
        rpc_url: str,
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._rpc_url = rpc_url
        self._client = client or httpx.AsyncClient(timeout=httpx.Timeout(timeout, connect=5))
        self._ids = itertools.count(1)

    async def request(self, method: str, params: list | None = None) -> Any:
        if method == "eth_requestAccounts":
            return await self._call("eth_accounts", [])
        if method == "wallet_switchEthereumChain":
            return await self._switch_chain(params or [])
        if method == "wallet_addEthereumChain":
            raise ProviderRpcError(
                UNSUPPORTED_METHOD, "wallet_addEthereumChain is not supported by a node provider",
            )
        return await self._call(method, params or [])

    async def _switch_chain(self, params: list) -> None:
        wanted = (params[0] or {}).get("chainId", "") if params else ""
        current = await self._call("eth_chainId", [])
        try:
            same = int(wanted, 16) == int(current, 16)
        except (TypeError, ValueError):
            same = False
        if not same:
            raise ProviderRpcError(
                CHAIN_DISCONNECTED,
                f"Node at {self._rpc_url} serves chain {current}, not {wanted}",
            )
        return None

    async def _call(self, method: str, params: list) -> Any:
        payload = {"jsonrpc": "2.0", "id": next(self._ids), "method": method, "params": params}
        log.debug("-> %s %s", method, params)
        try:
            resp = await self._client.post(self._rpc_url, json=payload)
            resp.raise_for_status()
            body = resp.json()
        except httpx.HTTPError as exc:
            raise ProviderRpcError(DISCONNECTED, f"RPC transport error: {exc}") from exc
        except ValueError as exc:
            raise ProviderRpcError(DISCONNECTED, "RPC returned invalid JSON") from exc

        if error := body.get("error"):
            raise ProviderRpcError(
                int(error.get("code", -32603)),
                str(error.get("message", "RPC error")),
                error.get("data"),
            )
        return body.get("result")

    async def close(self) -> None:
        await self._client.aclose()
