"""Provider selection - host-supplied wallet first, injected wallet second."""

from __future__ import annotations

import logging

from chainwarz.errors import NoProviderAvailable
from chainwarz.interfaces.host import ETHEREUM_PROVIDER_CAPABILITY, MiniAppHost
from chainwarz.interfaces.provider import WalletProvider
from chainwarz.models.session import ConnectionSource

log = logging.getLogger(__name__)


def _has_request(provider: object) -> bool:
    return provider is not None and callable(getattr(provider, "request", None))


async def select_provider(
    in_host: bool,
    host: MiniAppHost | None,
    injected: WalletProvider | None,
) -> tuple[WalletProvider, ConnectionSource]:
    """Pick the wallet provider for this session.

    Inside a host that advertises the Ethereum-provider capability the
    host's provider wins; otherwise the injected provider is used. Raises
    NoProviderAvailable when neither yields a usable provider.
    """
    if in_host and host is not None:
        try:
            capabilities = await host.get_capabilities()
        except Exception as exc:
            log.warning("Host capability discovery failed: %s", exc)
            capabilities = []

        if ETHEREUM_PROVIDER_CAPABILITY in capabilities:
            try:
                provider = await host.get_ethereum_provider()
            except Exception as exc:
                log.warning("Host provider unavailable: %s", exc)
                provider = None
            if _has_request(provider):
                log.info("Using host-provided wallet")
                return provider, ConnectionSource.HOST
        else:
            log.info("Host does not advertise %s", ETHEREUM_PROVIDER_CAPABILITY)

    if _has_request(injected):
        log.info("Using browser-injected wallet")
        return injected, ConnectionSource.INJECTED

    if in_host:
        raise NoProviderAvailable("No Farcaster wallet provider found")
    raise NoProviderAvailable("Please install a Web3 wallet")
