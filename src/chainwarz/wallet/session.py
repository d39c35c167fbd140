"""Wallet session manager - provider selection, connection, chain switching and strikes."""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Coroutine

from chainwarz.amounts import format_units, to_hex, to_wei
from chainwarz.errors import (
    ChainMismatch,
    ChainNotSupportedByHost,
    ChainWarzError,
    ConnectionFailed,
    ConnectionRejected,
    NoProviderAvailable,
    NotConnected,
    StrikeInFlight,
    TransactionFailed,
    UnknownChain,
    error_message,
)
from chainwarz.interfaces.backend import BackendService
from chainwarz.interfaces.host import MiniAppHost
from chainwarz.interfaces.provider import EventSource, WalletProvider
from chainwarz.models.chains import ChainDescriptor
from chainwarz.models.config import AppConfig
from chainwarz.models.records import ActionResult, StrikeResult
from chainwarz.models.session import ConnectionSource, WalletSession
from chainwarz.wallet.negotiation import ChainNegotiator
from chainwarz.wallet.selection import select_provider

log = logging.getLogger(__name__)


class WalletSessionManager:
    """Owns one user's wallet session.

    Public operations never raise: each failure is logged, stored in
    ``session.status`` and returned as a failed ActionResult whose ``error``
    is the failure kind. Backend loads are best effort.
    """

    def __init__(
        self,
        config: AppConfig,
        backend: BackendService | None = None,
        host: MiniAppHost | None = None,
        injected: WalletProvider | None = None,
        negotiator: ChainNegotiator | None = None,
    ) -> None:
        self._cfg = config
        self._backend = backend
        self._host = host
        self._injected = injected
        self._negotiator = negotiator or ChainNegotiator(
            config.wallet.verify_attempts, config.wallet.verify_delay,
        )
        self.session = WalletSession()
        self._strike_in_flight = False
        self._listeners: list[tuple[str, Any]] = []
        self._tasks: set[asyncio.Task] = set()

    @property
    def strike_in_flight(self) -> bool:
        return self._strike_in_flight

    # ------------------------------------------------------------------
    # Startup
    # ------------------------------------------------------------------

    async def initialize(self) -> ActionResult:
        """Detect the host, pick a provider and restore any existing connection."""
        s = self.session
        s.in_host = await self._detect_host()

        if s.in_host:
            try:
                await self._host.ready()
            except Exception as exc:
                log.error("Host ready() failed: %s", exc)
            s.host_fid = await self._host_fid()

        try:
            await self._ensure_provider()
        except NoProviderAvailable as exc:
            log.warning("No wallet provider detected")
            await self.load_leaderboard()
            return self._fail(exc)

        await self._restore_connection()
        await self.load_leaderboard()
        if s.profile is None and s.host_fid is not None:
            await self.load_host_profile(s.host_fid)

        return self._ok("Ready" if s.account is None else f"Connected as {s.account}")

    async def _detect_host(self) -> bool:
        if self._host is None:
            return False
        try:
            return bool(await self._host.is_in_mini_app())
        except Exception as exc:
            log.debug("Host detection failed: %s", exc)
            return False

    async def _host_fid(self) -> int | None:
        try:
            context = await self._host.get_context()
        except Exception as exc:
            log.debug("Host context unavailable: %s", exc)
            return None
        user = context.get("user") if isinstance(context, dict) else None
        fid = user.get("fid") if isinstance(user, dict) else None
        if fid is None:
            return None
        try:
            return int(fid)
        except (TypeError, ValueError):
            log.warning("Ignoring malformed host fid: %r", fid)
            return None

    async def _ensure_provider(self) -> WalletProvider:
        s = self.session
        if s.provider is None:
            s.provider, s.source = await select_provider(s.in_host, self._host, self._injected)
            s.unsupported_chains.clear()
            self._attach_listeners(s.provider)
        return s.provider

    async def _restore_connection(self) -> None:
        """Pick up an existing authorization without prompting the user."""
        s = self.session
        try:
            accounts = await s.provider.request("eth_accounts")
        except Exception as exc:
            log.error("Error checking connection: %s", exc)
            return
        if accounts:
            s.account = accounts[0]
            log.info("Restored connection for %s", s.account)
            await self.refresh_chain()
            await self.load_profile(s.account)

    # ------------------------------------------------------------------
    # Connection
    # ------------------------------------------------------------------

    async def connect(self) -> ActionResult:
        """Request account access from the selected wallet."""
        s = self.session
        try:
            provider = await self._ensure_provider()
        except NoProviderAvailable as exc:
            return self._fail(exc)

        s.status = "Connecting Farcaster wallet..." if s.in_host else "Connecting wallet..."
        try:
            accounts = await provider.request("eth_requestAccounts")
        except Exception as exc:
            return self._fail(ConnectionFailed(f"Error: {error_message(exc)}"))

        if not accounts:
            return self._fail(ConnectionRejected("Wallet returned no accounts"))

        s.account = accounts[0]
        log.info("Connected %s via %s wallet", s.account, s.source.value)
        await self.refresh_chain()
        self._spawn(self.load_profile(s.account))
        return self._ok(
            "Connected with Farcaster wallet!"
            if s.source is ConnectionSource.HOST
            else "Wallet connected!"
        )

    async def refresh_chain(self) -> str | None:
        """Re-read the wallet's active chain id."""
        s = self.session
        if s.provider is None:
            return None
        try:
            s.chain_id = await s.provider.request("eth_chainId")
        except Exception as exc:
            log.error("Error getting chain: %s", exc)
        return s.chain_id

    # ------------------------------------------------------------------
    # Chains and strikes
    # ------------------------------------------------------------------

    def _chain(self, chain_key: str) -> ChainDescriptor:
        if chain_key not in self._cfg.chains:
            raise UnknownChain(
                f"Unknown chain '{chain_key}'. Available: {list(self._cfg.chains)}"
            )
        return self._cfg.chains[chain_key]

    def _check_supported(self, chain: ChainDescriptor) -> None:
        """Host refusals stick for the rest of the session."""
        if chain.key in self.session.unsupported_chains:
            raise ChainNotSupportedByHost(
                f"{chain.name} is not supported by this wallet host"
            )

    async def switch_chain(self, chain_key: str) -> ActionResult:
        """Move the wallet onto *chain_key* without sending anything."""
        s = self.session
        try:
            chain = self._chain(chain_key)
            provider = await self._ensure_provider()
            self._check_supported(chain)
            s.status = f"Switching to {chain.name}..."
            s.chain_id = await self._negotiator.negotiate(provider, chain, s.source)
        except ChainNotSupportedByHost as exc:
            s.unsupported_chains.add(chain_key)
            return self._fail(exc)
        except ChainWarzError as exc:
            await self.refresh_chain()
            return self._fail(exc)
        except Exception as exc:
            await self.refresh_chain()
            return self._fail(ChainWarzError(f"Error switching chain: {error_message(exc)}"))
        return self._ok(f"Now on {chain.name}!")

    async def send_strike(self, chain_key: str) -> ActionResult:
        """Switch to *chain_key* and send its strike transaction.

        Nothing is recorded unless the wallet returns a transaction hash.
        """
        s = self.session
        if self._strike_in_flight:
            return self._fail(StrikeInFlight("A strike is already in progress"))
        try:
            chain = self._chain(chain_key)
        except UnknownChain as exc:
            return self._fail(exc)
        if s.account is None:
            return self._fail(NotConnected("Please connect your wallet first"))
        if s.provider is None:
            return self._fail(NoProviderAvailable("No wallet provider available"))
        try:
            self._check_supported(chain)
        except ChainNotSupportedByHost as exc:
            return self._fail(exc)

        self._strike_in_flight = True
        account = s.account
        provider = s.provider
        try:
            try:
                tx_hash = await self._strike(provider, chain, account)
            except Exception as exc:
                cause = exc.kind if isinstance(exc, ChainWarzError) else None
                if isinstance(exc, ChainNotSupportedByHost):
                    s.unsupported_chains.add(chain.key)
                failure = TransactionFailed(
                    f"Transaction failed: {error_message(exc)}", cause_kind=cause,
                )
                log.error("Strike on %s failed: %s", chain.name, error_message(exc))
                s.status = str(failure)
                return ActionResult(False, str(failure), cause or failure.kind)
        finally:
            self._strike_in_flight = False

        result = StrikeResult(
            chain_key=chain.key,
            tx_hash=tx_hash,
            submitted_at=datetime.now(timezone.utc).isoformat(),
            explorer_url=chain.tx_url(tx_hash),
        )
        s.last_strike = result
        s.strikes.append(result)
        log.info("Strike sent on %s: %s", chain.name, tx_hash)
        self._spawn(self._refresh_after_strike())
        return self._ok(f"Transaction sent on {chain.name}!")

    async def _strike(
        self, provider: WalletProvider, chain: ChainDescriptor, account: str
    ) -> str:
        s = self.session
        s.status = f"Switching to {chain.name}..."
        s.chain_id = await self._negotiator.negotiate(provider, chain, s.source)

        current = await provider.request("eth_chainId")
        s.chain_id = current
        if not chain.matches(current):
            raise ChainMismatch(
                f"Failed to switch to {chain.name} (wallet is on {current})"
            )

        decimals = chain.native_currency.decimals
        value = to_wei(chain.strike_amount, decimals)
        s.status = "Confirm in wallet..."
        log.info(
            "Sending strike of %s %s to %s on %s",
            format_units(value, decimals), chain.native_currency.symbol,
            chain.contract_address, chain.name,
        )
        tx_hash = await provider.request(
            "eth_sendTransaction",
            [{"from": account, "to": chain.contract_address, "value": to_hex(value)}],
        )
        if not isinstance(tx_hash, str) or not tx_hash:
            raise TransactionFailed(f"Wallet returned no transaction hash ({tx_hash!r})")
        return tx_hash

    async def _refresh_after_strike(self) -> None:
        await asyncio.sleep(self._cfg.wallet.refresh_delay)
        await self.load_leaderboard()
        if self.session.account:
            await self.load_profile(self.session.account)

    # ------------------------------------------------------------------
    # Backend data (best effort)
    # ------------------------------------------------------------------

    async def load_profile(self, address: str) -> None:
        if self._backend is None:
            return
        try:
            profile = await self._backend.get_profile(address)
        except Exception as exc:
            log.warning("Error loading profile for %s: %s", address, exc)
            return
        current = self.session.account
        if current is None or current.lower() != address.lower():
            log.debug("Discarding profile for %s; account changed", address)
            return
        if profile is not None:
            self.session.profile = profile

    async def load_host_profile(self, fid: int) -> None:
        if self._backend is None:
            return
        try:
            profile = await self._backend.get_profile_by_fid(fid)
        except Exception as exc:
            log.warning("Error loading profile for fid %s: %s", fid, exc)
            return
        if profile is not None:
            self.session.profile = profile

    async def load_leaderboard(self) -> None:
        if self._backend is None:
            return
        try:
            self.session.leaderboard = await self._backend.get_leaderboard()
        except Exception as exc:
            log.warning("Error loading leaderboard: %s", exc)

    # ------------------------------------------------------------------
    # Provider events
    # ------------------------------------------------------------------

    def _attach_listeners(self, provider: Any) -> None:
        if not isinstance(provider, EventSource):
            log.debug("Provider has no event support; skipping listeners")
            return
        for event, handler in (
            ("accountsChanged", self._on_accounts_changed),
            ("chainChanged", self._on_chain_changed),
        ):
            provider.on(event, handler)
            self._listeners.append((event, handler))

    def _detach_listeners(self, provider: Any) -> None:
        if isinstance(provider, EventSource):
            for event, handler in self._listeners:
                provider.remove_listener(event, handler)
        self._listeners.clear()

    def _on_accounts_changed(self, accounts: list[str] | None) -> None:
        s = self.session
        if accounts:
            if s.account != accounts[0]:
                s.account = accounts[0]
                s.profile = None
                log.info("Account changed to %s", s.account)
            self._spawn(self.load_profile(accounts[0]))
        else:
            if s.account is not None:
                log.info("Wallet disconnected")
            s.clear_account()

    def _on_chain_changed(self, chain_id: Any) -> None:
        if isinstance(chain_id, str) and chain_id:
            self.session.chain_id = chain_id
            log.debug("Chain changed to %s", chain_id)
        else:
            self._spawn(self.refresh_chain())

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def _spawn(self, coro: Coroutine[Any, Any, Any]) -> None:
        try:
            task = asyncio.get_running_loop().create_task(coro)
        except RuntimeError:
            coro.close()
            log.debug("No running event loop; background refresh skipped")
            return
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def wait_idle(self) -> None:
        """Wait for pending background refreshes to finish."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def close(self) -> None:
        """Detach provider listeners and cancel background refreshes."""
        if self.session.provider is not None:
            self._detach_listeners(self.session.provider)
        for task in list(self._tasks):
            task.cancel()
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
        self._tasks.clear()

    def _ok(self, message: str) -> ActionResult:
        self.session.status = message
        return ActionResult(True, message)

    def _fail(self, exc: ChainWarzError) -> ActionResult:
        log.warning("%s: %s", exc.kind, exc)
        self.session.status = str(exc)
        return ActionResult(False, str(exc), exc.kind)
