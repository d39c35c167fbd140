"""MiniAppHost protocol - the embedding social-app container."""

from __future__ import annotations

from typing import Any, Protocol

from chainwarz.interfaces.provider import WalletProvider

# Capability a host advertises when it can hand out an Ethereum provider
ETHEREUM_PROVIDER_CAPABILITY = "wallet.getEthereumProvider"


class MiniAppHost(Protocol):
    """Capability discovery and wallet access offered by a Mini App host."""

    async def is_in_mini_app(self) -> bool:
        """True when the app runs inside the host container."""
        ...

    async def ready(self) -> None:
        """Tell the host the app has loaded (dismisses its splash screen)."""
        ...

    async def get_capabilities(self) -> list[str]:
        """Return the feature strings the host supports."""
        ...

    async def get_ethereum_provider(self) -> WalletProvider | None:
        """Return the host's wallet provider, if any."""
        ...

    async def get_context(self) -> dict[str, Any]:
        """Return the host context (``{"user": {"fid": ...}}`` and friends)."""
        ...
