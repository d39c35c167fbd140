"""Built-in registry of strike chains."""

from __future__ import annotations

from chainwarz.models.chains import ChainDescriptor, NativeCurrency

CHAINS: dict[str, ChainDescriptor] = {
    "base": ChainDescriptor(
        key="base",
        id="0x2105",
        name="Base",
        rpc_url="https://mainnet.base.org",
        explorer_url="https://basescan.org",
        contract_address="0xB2B23e69b9d811D3D43AD473f90A171D18b19aab",
        strike_amount="0.000001337",
        native_currency=NativeCurrency(name="Ether", symbol="ETH", decimals=18),
    ),
    "hyperevm": ChainDescriptor(
        key="hyperevm",
        id="0xd0d4",
        name="HyperEVM",
        rpc_url="https://rpc.hyperliquid.xyz/evm",
        explorer_url="https://explorer.hyperliquid.xyz",
        contract_address="0xDddED87c1f1487495E8aa47c9B43FEf4c5153054",
        strike_amount="0.000001337",
        native_currency=NativeCurrency(name="HYPE", symbol="HYPE", decimals=18),
    ),
}


def get_chain(key: str, chains: dict[str, ChainDescriptor] | None = None) -> ChainDescriptor:
    """Get a chain by registry key. Raises ``KeyError`` if not found."""
    registry = CHAINS if chains is None else chains
    if key not in registry:
        raise KeyError(f"Unknown chain '{key}'. Available: {list(registry)}")
    return registry[key]


def find_chain_by_id(
    chain_id: str, chains: dict[str, ChainDescriptor] | None = None
) -> ChainDescriptor | None:
    """Look up a chain by its hex id (case-insensitive, tolerant of zero padding)."""
    registry = CHAINS if chains is None else chains
    for chain in registry.values():
        if chain.matches(chain_id):
            return chain
    return None


def list_chain_keys() -> list[str]:
    return list(CHAINS.keys())
