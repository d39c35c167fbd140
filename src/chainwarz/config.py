"""Configuration loading: TOML file + environment variables."""

from __future__ import annotations

import dataclasses
import os
from pathlib import Path

try:
    import tomllib  # Python 3.11+
except ModuleNotFoundError:
    import tomli as tomllib  # type: ignore[no-redef]

from eth_utils import is_hex_address

from chainwarz.amounts import to_wei
from chainwarz.chains import CHAINS
from chainwarz.models.chains import ChainDescriptor
from chainwarz.models.config import AppConfig, WalletConfig

_CHAIN_FIELDS = ("contract_address", "strike_amount", "rpc_url", "explorer_url")


def load_config(
    config_path: str | Path | None = None,
    env_prefix: str = "CHAINWARZ_",
) -> AppConfig:
    """Load application configuration from a TOML file and env vars.

    Priority (highest wins):
        1. Environment variables (CHAINWARZ_BACKEND_URL, etc.)
        2. TOML config file
        3. Defaults from AppConfig and the built-in chain registry
    """
    raw: dict = {}
    if config_path is not None:
        p = Path(config_path).expanduser()
        if p.exists():
            with open(p, "rb") as f:
                raw = tomllib.load(f)

    cfg = AppConfig(chains=dict(CHAINS))

    # ── Backend section ────────────────────────────────────
    backend = raw.get("backend", {})
    if v := backend.get("url"):
        cfg.backend_url = str(v)
    if v := backend.get("timeout"):
        cfg.backend_timeout = float(v)

    # ── Logging section ────────────────────────────────────
    logging_raw = raw.get("logging", {})
    if v := logging_raw.get("level"):
        cfg.log_level = str(v)

    # ── Wallet section ─────────────────────────────────────
    wallet_raw = raw.get("wallet", {})
    cfg.wallet = WalletConfig(
        verify_attempts=int(wallet_raw.get("verify_attempts", 10)),
        verify_delay=float(wallet_raw.get("verify_delay", 0.25)),
        refresh_delay=float(wallet_raw.get("refresh_delay", 3.0)),
    )

    # ── Chain overrides ────────────────────────────────────
    for key, overrides in raw.get("chains", {}).items():
        if key not in cfg.chains:
            raise ValueError(f"Unknown chain '{key}' in config. Available: {list(cfg.chains)}")
        cfg.chains[key] = _apply_chain_overrides(cfg.chains[key], overrides)

    # ── Environment variable overrides (highest priority) ──
    if url := os.environ.get(f"{env_prefix}BACKEND_URL"):
        cfg.backend_url = url
    if level := os.environ.get(f"{env_prefix}LOG_LEVEL"):
        cfg.log_level = level
    if attempts := os.environ.get(f"{env_prefix}VERIFY_ATTEMPTS"):
        cfg.wallet.verify_attempts = int(attempts)

    cfg.backend_url = cfg.backend_url.rstrip("/")
    if cfg.wallet.verify_attempts < 1:
        raise ValueError("wallet.verify_attempts must be at least 1")

    return cfg


def _apply_chain_overrides(chain: ChainDescriptor, overrides: dict) -> ChainDescriptor:
    """Return a copy of *chain* with the given fields replaced and validated."""
    changes = {k: str(v) for k, v in overrides.items() if k in _CHAIN_FIELDS}
    unknown = set(overrides) - set(_CHAIN_FIELDS)
    if unknown:
        raise ValueError(f"Unsupported settings for chain '{chain.key}': {sorted(unknown)}")

    updated = dataclasses.replace(chain, **changes)
    if not is_hex_address(updated.contract_address):
        raise ValueError(
            f"Invalid contract address for chain '{chain.key}': {updated.contract_address}"
        )
    # Surfaces InvalidAmount at load time rather than at strike time
    to_wei(updated.strike_amount, updated.native_currency.decimals)
    return updated
