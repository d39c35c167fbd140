"""Chain descriptors for the networks a strike can target."""

from __future__ import annotations

from dataclasses import dataclass

from chainwarz.amounts import to_hex, to_wei


@dataclass(frozen=True)
class NativeCurrency:
    """Native token metadata as expected by ``wallet_addEthereumChain``."""

    name: str
    symbol: str
    decimals: int = 18

    def to_dict(self) -> dict:
        return {"name": self.name, "symbol": self.symbol, "decimals": self.decimals}


@dataclass(frozen=True)
class ChainDescriptor:
    """An EVM network plus the strike contract deployed on it."""

    key: str  # registry key, e.g. "base"
    id: str  # hex chain id, e.g. "0x2105"
    name: str
    rpc_url: str
    explorer_url: str
    contract_address: str
    strike_amount: str  # decimal, in native units
    native_currency: NativeCurrency

    @property
    def strike_wei(self) -> int:
        return to_wei(self.strike_amount, self.native_currency.decimals)

    @property
    def strike_value_hex(self) -> str:
        return to_hex(self.strike_wei)

    @property
    def numeric_id(self) -> int:
        return int(self.id, 16)

    def matches(self, chain_id: str | None) -> bool:
        """True if a provider-reported chain id refers to this chain."""
        if not chain_id:
            return False
        try:
            return int(chain_id, 16) == self.numeric_id
        except (TypeError, ValueError):
            return False

    def tx_url(self, tx_hash: str) -> str:
        return f"{self.explorer_url.rstrip('/')}/tx/{tx_hash}"

    def wallet_add_params(self) -> dict:
        return {
            "chainId": self.id,
            "chainName": self.name,
            "rpcUrls": [self.rpc_url],
            "blockExplorerUrls": [self.explorer_url],
            "nativeCurrency": self.native_currency.to_dict(),
        }
