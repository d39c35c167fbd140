"""Operation result types."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class StrikeResult:
    """A strike transaction accepted by the wallet."""

    chain_key: str
    tx_hash: str
    submitted_at: str  # ISO 8601, UTC
    explorer_url: str = ""


@dataclass
class ActionResult:
    """Outcome of a public session operation."""

    success: bool
    message: str
    error: str | None = None  # ChainWarzError.kind on failure
