"""Provider-emitted accountsChanged / chainChanged handling."""

from __future__ import annotations

from chainwarz.wallet.session import WalletSessionManager

from tests.conftest import make_test_config
from tests.factories import make_profile
from tests.mocks import TEST_ACCOUNT, MockProvider, RequestOnlyProvider

OTHER_ACCOUNT = "0x" + "33" * 20


async def test_empty_accounts_clears_session(connected, provider):
    assert connected.session.profile is not None

    await provider.emit("accountsChanged", [])

    assert connected.session.account is None
    assert connected.session.profile is None
    assert not connected.session.connected


async def test_empty_accounts_when_already_disconnected(manager, provider):
    await manager.initialize()

    await provider.emit("accountsChanged", [])

    assert manager.session.account is None


async def test_account_switch_reloads_profile(connected, provider, backend):
    backend.profiles[OTHER_ACCOUNT.lower()] = make_profile(
        address=OTHER_ACCOUNT, username="other",
    )

    await provider.emit("accountsChanged", [OTHER_ACCOUNT])
    await connected.wait_idle()

    assert connected.session.account == OTHER_ACCOUNT
    assert connected.session.profile.username == "other"
    assert backend.profile_calls[-1] == OTHER_ACCOUNT


async def test_stale_profile_is_discarded(connected, provider, backend):
    """A profile arriving after the account changed must not be applied."""
    backend.profiles[OTHER_ACCOUNT.lower()] = make_profile(
        address=OTHER_ACCOUNT, username="other",
    )

    await provider.emit("accountsChanged", [OTHER_ACCOUNT])
    await provider.emit("accountsChanged", [])
    await connected.wait_idle()

    assert connected.session.account is None
    assert connected.session.profile is None


async def test_chain_changed_updates_chain_id(connected, provider):
    await provider.emit("chainChanged", "0xd0d4")

    assert connected.session.chain_id == "0xd0d4"


async def test_chain_changed_without_payload_refreshes(connected, provider):
    provider.chain_id = "0x1"

    await provider.emit("chainChanged", None)
    await connected.wait_idle()

    assert connected.session.chain_id == "0x1"


async def test_event_does_not_cancel_in_flight_strike(connected, provider):
    """Account events only touch state; the strike keeps its original sender."""
    original = provider.request

    async def request(method, params=None):
        if method == "eth_sendTransaction":
            await provider.emit("accountsChanged", [OTHER_ACCOUNT])
        return await original(method, params)

    provider.request = request

    result = await connected.send_strike("base")

    assert result.success
    assert provider.sent_transactions()[0]["from"] == TEST_ACCOUNT
    assert connected.session.account == OTHER_ACCOUNT


async def test_close_detaches_listeners(connected, provider):
    await connected.close()

    assert provider.listeners["accountsChanged"] == []
    assert provider.listeners["chainChanged"] == []


async def test_provider_without_events_is_supported(backend):
    inner = MockProvider(authorized=True)
    manager = WalletSessionManager(
        make_test_config(), backend=backend, injected=RequestOnlyProvider(inner),
    )

    result = await manager.initialize()

    assert result.success
    assert manager.session.account == TEST_ACCOUNT
    assert inner.listeners == {}
    await manager.close()


class SubscribeOnlyProvider(RequestOnlyProvider):
    """Has ``on`` but no way to unsubscribe, so it is not an event source."""

    def on(self, event, handler):
        self.inner.on(event, handler)


async def test_provider_without_remove_listener_gets_no_listeners(backend):
    inner = MockProvider(authorized=True)
    manager = WalletSessionManager(
        make_test_config(), backend=backend, injected=SubscribeOnlyProvider(inner),
    )

    await manager.initialize()
    await manager.close()

    assert inner.listeners == {}
