"""Configuration loading from TOML and environment."""

from __future__ import annotations

import pytest

from chainwarz.chains import CHAINS
from chainwarz.config import load_config
from chainwarz.errors import InvalidAmount

CONTRACT = "0x" + "ab" * 20


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("BACKEND_URL", "LOG_LEVEL", "VERIFY_ATTEMPTS"):
        monkeypatch.delenv(f"CHAINWARZ_{name}", raising=False)


def _write(tmp_path, text: str):
    path = tmp_path / "chainwarz.toml"
    path.write_text(text)
    return path


def test_defaults_without_file():
    cfg = load_config()

    assert cfg.backend_url == "https://chainwarz-backend-production.up.railway.app"
    assert cfg.log_level == "info"
    assert cfg.wallet.verify_attempts == 10
    assert cfg.wallet.verify_delay == 0.25
    assert set(cfg.chains) == {"base", "hyperevm"}


def test_missing_file_uses_defaults(tmp_path):
    cfg = load_config(tmp_path / "nope.toml")

    assert cfg.wallet.refresh_delay == 3.0


def test_file_sections(tmp_path):
    path = _write(tmp_path, f"""
[backend]
url = "https://backend.example/"
timeout = 2.5

[logging]
level = "debug"

[wallet]
verify_attempts = 3
verify_delay = 0.5

[chains.base]
contract_address = "{CONTRACT}"
strike_amount = "0.0001337"
""")

    cfg = load_config(path)

    assert cfg.backend_url == "https://backend.example"
    assert cfg.backend_timeout == 2.5
    assert cfg.log_level == "debug"
    assert cfg.wallet.verify_attempts == 3
    assert cfg.wallet.verify_delay == 0.5
    assert cfg.chains["base"].contract_address == CONTRACT
    assert cfg.chains["base"].strike_value_hex == "0x79997501a800"
    assert cfg.chains["hyperevm"].strike_amount == "0.000001337"


def test_overrides_do_not_leak_into_registry(tmp_path):
    load_config(_write(tmp_path, '[chains.base]\nstrike_amount = "1"\n'))

    assert CHAINS["base"].strike_amount == "0.000001337"


def test_env_wins_over_file(tmp_path, monkeypatch):
    path = _write(tmp_path, '[backend]\nurl = "https://file.example"\n[wallet]\nverify_attempts = 3\n')
    monkeypatch.setenv("CHAINWARZ_BACKEND_URL", "https://env.example")
    monkeypatch.setenv("CHAINWARZ_LOG_LEVEL", "warning")
    monkeypatch.setenv("CHAINWARZ_VERIFY_ATTEMPTS", "5")

    cfg = load_config(path)

    assert cfg.backend_url == "https://env.example"
    assert cfg.log_level == "warning"
    assert cfg.wallet.verify_attempts == 5


def test_unknown_chain_rejected(tmp_path):
    with pytest.raises(ValueError, match="Unknown chain 'solana'"):
        load_config(_write(tmp_path, '[chains.solana]\nstrike_amount = "1"\n'))


def test_unknown_chain_field_rejected(tmp_path):
    with pytest.raises(ValueError, match="Unsupported settings"):
        load_config(_write(tmp_path, '[chains.base]\nid = "0x1"\n'))


def test_bad_contract_address_rejected(tmp_path):
    with pytest.raises(ValueError, match="Invalid contract address"):
        load_config(_write(tmp_path, '[chains.base]\ncontract_address = "0x1234"\n'))


def test_bad_strike_amount_rejected(tmp_path):
    with pytest.raises(InvalidAmount):
        load_config(_write(tmp_path, '[chains.base]\nstrike_amount = "1.2.3"\n'))


def test_zero_verify_attempts_rejected(tmp_path):
    with pytest.raises(ValueError, match="verify_attempts"):
        load_config(_write(tmp_path, "[wallet]\nverify_attempts = 0\n"))
