"""Protocol interfaces for the collaborators the session core consumes."""

from chainwarz.interfaces.backend import BackendService
from chainwarz.interfaces.host import MiniAppHost
from chainwarz.interfaces.provider import EventHandler, EventSource, WalletProvider

__all__ = [
    "BackendService",
    "MiniAppHost",
    "EventHandler", "EventSource", "WalletProvider",
]
