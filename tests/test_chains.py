"""Chain registry, descriptors, backend models and the rank ladder."""

from __future__ import annotations

import pytest

from chainwarz.chains import CHAINS, find_chain_by_id, get_chain, list_chain_keys
from chainwarz.models.backend import LeaderboardEntry, Profile, parse_leaderboard
from chainwarz.ranks import get_rank, next_rank


def test_registry_keys():
    assert list_chain_keys() == ["base", "hyperevm"]


def test_get_chain_unknown():
    with pytest.raises(KeyError, match="solana"):
        get_chain("solana")


@pytest.mark.parametrize("chain_id", ["0x2105", "0X2105", "0x02105"])
def test_find_chain_by_equivalent_ids(chain_id):
    assert find_chain_by_id(chain_id) is CHAINS["base"]


def test_find_chain_by_id_unknown():
    assert find_chain_by_id("0x1") is None
    assert find_chain_by_id("garbage") is None


def test_matches_rejects_empty_and_non_string():
    assert not CHAINS["base"].matches(None)
    assert not CHAINS["base"].matches("")
    assert not CHAINS["base"].matches(8453)


def test_strike_value_for_builtin_chains():
    for chain in CHAINS.values():
        assert chain.strike_wei == 1_337_000_000_000
        assert chain.strike_value_hex == "0x1374b68fa00"


def test_tx_url():
    chain = CHAINS["hyperevm"]

    assert chain.tx_url("0xabc") == "https://explorer.hyperliquid.xyz/tx/0xabc"


def test_wallet_add_params():
    assert CHAINS["hyperevm"].wallet_add_params() == {
        "chainId": "0xd0d4",
        "chainName": "HyperEVM",
        "rpcUrls": ["https://rpc.hyperliquid.xyz/evm"],
        "blockExplorerUrls": ["https://explorer.hyperliquid.xyz"],
        "nativeCurrency": {"name": "HYPE", "symbol": "HYPE", "decimals": 18},
    }


# ── Backend models ────────────────────────────────────────────────


def test_profile_from_dict_tolerates_missing_fields():
    profile = Profile.from_dict({"address": "0x" + "11" * 20})

    assert profile.username is None
    assert profile.strikes == {}
    assert profile.total_strikes == 0


def test_parse_leaderboard_assigns_ranks():
    entries = parse_leaderboard([
        {"walletAddress": "0x" + "11" * 20, "txCount": 3},
        {"walletAddress": "0x" + "22" * 20, "txCount": 1},
    ])

    assert [e.rank for e in entries] == [1, 2]
    assert all(isinstance(e, LeaderboardEntry) for e in entries)


# ── Ranks ─────────────────────────────────────────────────────────


@pytest.mark.parametrize("count, name", [
    (0, "Squire"),
    (99, "Squire"),
    (100, "Knight"),
    (250, "Knight Captain"),
    (999, "Baron"),
    (1000, "Duke"),
    (2500, "Warlord"),
    (10_000, "Legendary Champion"),
])
def test_get_rank(count, name):
    assert get_rank(count).name == name


def test_next_rank():
    assert next_rank(150).name == "Knight Captain"
    assert next_rank(5000) is None
