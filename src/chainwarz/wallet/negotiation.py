"""Chain negotiation - switch (or add, then switch) and verify the wallet's network.

Wallets resolve switch/add requests before the network change is always
observable, so success is only reported once ``eth_chainId`` has been seen
to match the target within a bounded number of polls.
"""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Any, Awaitable, Callable

from chainwarz.errors import (
    UNRECOGNIZED_CHAIN,
    UNSUPPORTED_METHOD,
    USER_REJECTED,
    ChainNotSupportedByHost,
    ChainSwitchTimeout,
    error_message,
)
from chainwarz.interfaces.provider import WalletProvider
from chainwarz.models.chains import ChainDescriptor
from chainwarz.models.session import ConnectionSource

log = logging.getLogger(__name__)


class NegotiationState(str, Enum):
    REQUEST_SWITCH = "request_switch"
    REQUEST_ADD = "request_add"
    VERIFY = "verify"
    CONFIRMED = "confirmed"
    ABORTED = "aborted"


def _error_code(exc: BaseException) -> int | None:
    """Extract an EIP-1193 code, including codes nested by mobile wallets."""
    code = getattr(exc, "code", None)
    if code == UNRECOGNIZED_CHAIN:
        return code
    data = getattr(exc, "data", None)
    if isinstance(data, dict):
        original = data.get("originalError")
        if isinstance(original, dict) and original.get("code") == UNRECOGNIZED_CHAIN:
            return UNRECOGNIZED_CHAIN
    return code if isinstance(code, int) else None


def is_unrecognized_chain(exc: BaseException) -> bool:
    return _error_code(exc) == UNRECOGNIZED_CHAIN


class ChainNegotiator:
    """Runs the switch/add/verify protocol for one target chain at a time."""

    def __init__(
        self,
        verify_attempts: int = 10,
        verify_delay: float = 0.25,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        self._attempts = verify_attempts
        self._delay = verify_delay
        self._sleep = sleep

    async def negotiate(
        self,
        provider: WalletProvider,
        chain: ChainDescriptor,
        source: ConnectionSource = ConnectionSource.INJECTED,
    ) -> str:
        """Bring *provider* onto *chain*. Returns the confirmed chain id.

        Raises ChainNotSupportedByHost when a host refuses to add the chain,
        ChainSwitchTimeout when the switch is never observed, and re-raises
        any other provider failure unchanged.
        """
        self._transition(chain, NegotiationState.REQUEST_SWITCH)
        try:
            await provider.request("wallet_switchEthereumChain", [{"chainId": chain.id}])
        except Exception as exc:
            if not is_unrecognized_chain(exc):
                self._transition(chain, NegotiationState.ABORTED)
                log.warning("Switch to %s failed: %s", chain.name, error_message(exc))
                raise
            await self._add_then_switch(provider, chain, source)

        self._transition(chain, NegotiationState.VERIFY)
        chain_id = await self.verify(provider, chain)
        self._transition(chain, NegotiationState.CONFIRMED)
        return chain_id

    async def _add_then_switch(
        self,
        provider: WalletProvider,
        chain: ChainDescriptor,
        source: ConnectionSource,
    ) -> None:
        self._transition(chain, NegotiationState.REQUEST_ADD)
        try:
            await provider.request("wallet_addEthereumChain", [chain.wallet_add_params()])
        except Exception as exc:
            self._transition(chain, NegotiationState.ABORTED)
            code = _error_code(exc)
            refused_by_host = source is ConnectionSource.HOST and code != USER_REJECTED
            if code == UNSUPPORTED_METHOD or refused_by_host:
                raise ChainNotSupportedByHost(
                    f"{chain.name} is not supported by this wallet host"
                ) from exc
            log.warning("Adding %s failed: %s", chain.name, error_message(exc))
            raise

        # Many wallets switch as part of the add; verification is authoritative.
        self._transition(chain, NegotiationState.REQUEST_SWITCH)
        try:
            await provider.request("wallet_switchEthereumChain", [{"chainId": chain.id}])
        except Exception as exc:
            if _error_code(exc) == USER_REJECTED:
                self._transition(chain, NegotiationState.ABORTED)
                raise
            log.info(
                "Switch after adding %s failed (%s); verifying anyway",
                chain.name, error_message(exc),
            )

    async def verify(self, provider: WalletProvider, chain: ChainDescriptor) -> str:
        """Poll ``eth_chainId`` until it reports *chain*."""
        last_seen: str | None = None
        for attempt in range(1, self._attempts + 1):
            try:
                last_seen = await provider.request("eth_chainId")
            except Exception as exc:
                log.debug("eth_chainId poll %d failed: %s", attempt, exc)
            else:
                if chain.matches(last_seen):
                    log.debug("%s confirmed after %d poll(s)", chain.name, attempt)
                    return last_seen
            if attempt < self._attempts:
                await self._sleep(self._delay)

        self._transition(chain, NegotiationState.ABORTED)
        raise ChainSwitchTimeout(
            f"Wallet did not switch to {chain.name} "
            f"(last seen chain {last_seen or 'unknown'} after {self._attempts} checks)"
        )

    def _transition(self, chain: ChainDescriptor, state: NegotiationState) -> None:
        log.debug("Negotiating %s (%s): %s", chain.name, chain.id, state.value)
