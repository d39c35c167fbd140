"""WalletProvider protocol - an EIP-1193 style request/event surface."""

from __future__ import annotations

from typing import Any, Callable, Protocol, runtime_checkable

EventHandler = Callable[[Any], Any]


class WalletProvider(Protocol):
    """Supplies JSON-RPC access to the user's wallet.

    ``request`` raises :class:`chainwarz.errors.ProviderRpcError` (or any
    other exception) when the wallet rejects the call.
    """

    async def request(self, method: str, params: list | None = None) -> Any:
        """Issue a JSON-RPC method and return its result."""
        ...


@runtime_checkable
class EventSource(Protocol):
    """Optional event subscription surface (``accountsChanged``, ``chainChanged``).

    Handlers may be plain functions or coroutine functions.
    """

    def on(self, event: str, handler: EventHandler) -> None:
        ...

    def remove_listener(self, event: str, handler: EventHandler) -> None:
        ...
