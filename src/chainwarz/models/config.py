"""Configuration models."""

from __future__ import annotations

from dataclasses import dataclass, field

from chainwarz.models.chains import ChainDescriptor


@dataclass
class WalletConfig:
    """Chain negotiation and post-strike timing."""

    verify_attempts: int = 10  # eth_chainId polls after a switch
    verify_delay: float = 0.25  # seconds between polls
    refresh_delay: float = 3.0  # seconds before the post-strike backend refresh


@dataclass
class AppConfig:
    """Complete application configuration."""

    # Backend
    backend_url: str = "https://chainwarz-backend-production.up.railway.app"
    backend_timeout: float = 10.0  # seconds

    # Logging
    log_level: str = "info"

    wallet: WalletConfig = field(default_factory=WalletConfig)
    chains: dict[str, ChainDescriptor] = field(default_factory=dict)
