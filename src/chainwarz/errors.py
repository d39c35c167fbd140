"""Error taxonomy for wallet, chain and backend operations."""

from __future__ import annotations

from typing import Any

# EIP-1193 provider error codes
USER_REJECTED = 4001
UNAUTHORIZED = 4100
UNSUPPORTED_METHOD = 4200
DISCONNECTED = 4900
CHAIN_DISCONNECTED = 4901
UNRECOGNIZED_CHAIN = 4902


class ProviderRpcError(Exception):
    """Error raised by a wallet provider's ``request`` call."""

    def __init__(self, code: int, message: str, data: Any = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.data = data

    def __repr__(self) -> str:
        return f"ProviderRpcError(code={self.code}, message={self.message!r})"


class ChainWarzError(Exception):
    """Base class for failures surfaced by the session core.

    ``kind`` is a stable machine-readable tag; ``str(exc)`` is the
    human-readable message shown to the user.
    """

    kind = "error"


class InvalidAmount(ChainWarzError):
    kind = "invalid_amount"


class NoProviderAvailable(ChainWarzError):
    kind = "no_provider"


class NotConnected(ChainWarzError):
    kind = "not_connected"


class ConnectionRejected(ChainWarzError):
    kind = "connection_rejected"


class ConnectionFailed(ChainWarzError):
    kind = "connection_failed"


class UnknownChain(ChainWarzError):
    kind = "unknown_chain"


class ChainNotSupportedByHost(ChainWarzError):
    kind = "chain_not_supported_by_host"


class ChainSwitchTimeout(ChainWarzError):
    kind = "chain_switch_timeout"


class ChainMismatch(ChainWarzError):
    kind = "chain_mismatch"


class StrikeInFlight(ChainWarzError):
    kind = "strike_in_flight"


class TransactionFailed(ChainWarzError):
    """A strike failed at any step after its preconditions were met.

    ``cause_kind`` keeps the kind of the underlying failure when it was
    itself a :class:`ChainWarzError`.
    """

    kind = "transaction_failed"

    def __init__(self, message: str, cause_kind: str | None = None) -> None:
        super().__init__(message)
        self.cause_kind = cause_kind


class BackendError(ChainWarzError):
    kind = "backend_error"


def error_message(exc: BaseException) -> str:
    """Best human-readable text for an arbitrary exception."""
    if isinstance(exc, ProviderRpcError):
        return exc.message
    return str(exc) or type(exc).__name__
