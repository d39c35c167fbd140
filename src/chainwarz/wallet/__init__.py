"""Wallet session core - amounts, provider selection, chain negotiation, strikes."""

from chainwarz.wallet.negotiation import ChainNegotiator, NegotiationState
from chainwarz.wallet.selection import select_provider
from chainwarz.wallet.session import WalletSessionManager

__all__ = [
    "ChainNegotiator", "NegotiationState",
    "select_provider",
    "WalletSessionManager",
]
