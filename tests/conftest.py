"""Shared fixtures for chainwarz tests."""

from __future__ import annotations

import pytest
from pytest_metadata.plugin import metadata_key

from chainwarz.chains import CHAINS
from chainwarz.models.config import AppConfig, WalletConfig
from chainwarz.wallet.session import WalletSessionManager

from tests.factories import make_leaderboard_entry, make_profile
from tests.mocks import TEST_ACCOUNT, MockBackend, MockProvider

BASE = CHAINS["base"]
HYPEREVM = CHAINS["hyperevm"]


# ── Report metadata ──────────────────────────────────────────────


def pytest_configure(config):
    """Add the strike contracts to the report Environment table."""
    meta = config.stash.setdefault(metadata_key, {})
    for chain in CHAINS.values():
        meta[f"{chain.name} Contract"] = f"{chain.contract_address} ({chain.id})"
    meta["Test Account"] = TEST_ACCOUNT


def make_test_config(**overrides) -> AppConfig:
    """Build an AppConfig suitable for testing: no real waits."""
    defaults = dict(
        backend_url="https://backend.test",
        backend_timeout=1.0,
        wallet=WalletConfig(verify_attempts=10, verify_delay=0.0, refresh_delay=0.0),
        chains=dict(CHAINS),
    )
    defaults.update(overrides)
    return AppConfig(**defaults)


@pytest.fixture
def test_config():
    """Default AppConfig for tests."""
    return make_test_config()


@pytest.fixture
def provider():
    """Wallet on Base that knows Base and mainnet but not HyperEVM."""
    return MockProvider()


@pytest.fixture
def backend():
    return MockBackend(
        profiles={TEST_ACCOUNT.lower(): make_profile()},
        leaderboard={
            "base": [make_leaderboard_entry()],
            "hyperevm": [],
        },
    )


@pytest.fixture
def manager(test_config, backend, provider):
    """Session manager wired to an injected mock wallet."""
    return WalletSessionManager(test_config, backend=backend, injected=provider)


@pytest.fixture
async def connected(manager):
    """Session manager with the test account already connected."""
    result = await manager.connect()
    assert result.success
    await manager.wait_idle()
    yield manager
    await manager.close()
