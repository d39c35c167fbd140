"""CLI entry point for chainwarz."""

from __future__ import annotations

import asyncio
import logging
import sys

import click

from chainwarz.amounts import format_units, to_hex, to_wei
from chainwarz.backend.client import HttpBackendClient
from chainwarz.config import load_config
from chainwarz.errors import ChainWarzError
from chainwarz.models.config import AppConfig
from chainwarz.providers.jsonrpc import JsonRpcProvider
from chainwarz.ranks import get_rank, next_rank
from chainwarz.wallet.session import WalletSessionManager


def _require_chain(cfg: AppConfig, chain_key: str) -> None:
    """Exit with error if the chain key is not configured."""
    if chain_key not in cfg.chains:
        click.echo(f"Error: Unknown chain '{chain_key}'.", err=True)
        click.echo(f"Available: {', '.join(cfg.chains)}", err=True)
        sys.exit(1)


@click.group()
@click.option("-c", "--config", "config_path", default=None, help="Path to config TOML file")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, verbose: bool) -> None:
    """chainwarz - Strike the chains from the command line."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    ctx.obj["verbose"] = verbose

    try:
        cfg = load_config(config_path)
    except (ValueError, ChainWarzError) as exc:
        click.echo(f"Error: Invalid configuration: {exc}", err=True)
        sys.exit(1)
    ctx.obj["config"] = cfg

    level = logging.DEBUG if verbose else getattr(logging, cfg.log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


# ── Info ───────────────────────────────────────────────


@cli.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show configuration."""
    cfg: AppConfig = ctx.obj["config"]
    click.echo(f"Backend:         {cfg.backend_url}")
    click.echo(f"Backend timeout: {cfg.backend_timeout}s")
    click.echo(f"Verify attempts: {cfg.wallet.verify_attempts}")
    click.echo(f"Verify delay:    {cfg.wallet.verify_delay}s")
    click.echo(f"Refresh delay:   {cfg.wallet.refresh_delay}s")
    click.echo(f"Chains:          {', '.join(cfg.chains)}")


@cli.command()
@click.pass_context
def chains(ctx: click.Context) -> None:
    """List strike chains with their exact strike values."""
    cfg: AppConfig = ctx.obj["config"]
    for chain in cfg.chains.values():
        symbol = chain.native_currency.symbol
        click.echo(f"{chain.key} ({chain.name}, {chain.id})")
        click.echo(f"  Contract: {chain.contract_address}")
        click.echo(f"  Strike:   {chain.strike_amount} {symbol}")
        click.echo(f"  Wei:      {chain.strike_wei} ({chain.strike_value_hex})")
        click.echo(f"  RPC:      {chain.rpc_url}")
        click.echo(f"  Explorer: {chain.explorer_url}")


@cli.command()
@click.argument("value")
@click.option("--decimals", type=int, default=18, show_default=True, help="Token decimals")
def amount(value: str, decimals: int) -> None:
    """Convert a decimal token amount to its exact integer and hex forms."""
    try:
        wei = to_wei(value, decimals)
    except ChainWarzError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)
    click.echo(f"Amount:  {format_units(wei, decimals)}")
    click.echo(f"Integer: {wei}")
    click.echo(f"Hex:     {to_hex(wei)}")


# ── Backend ────────────────────────────────────────────


@cli.command()
@click.option("--chain", "chain_key", default=None, help="Only show one chain")
@click.option("--limit", type=int, default=10, show_default=True)
@click.pass_context
def leaderboard(ctx: click.Context, chain_key: str | None, limit: int) -> None:
    """Show the strike leaderboards."""
    cfg: AppConfig = ctx.obj["config"]
    if chain_key:
        _require_chain(cfg, chain_key)

    async def _leaderboard():
        backend = HttpBackendClient(cfg.backend_url, cfg.backend_timeout)
        try:
            if chain_key:
                return {chain_key: await backend.get_chain_leaderboard(chain_key)}
            return await backend.get_leaderboard()
        finally:
            await backend.close()

    try:
        boards = asyncio.run(_leaderboard())
    except ChainWarzError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    for key, entries in boards.items():
        name = cfg.chains[key].name if key in cfg.chains else key
        click.echo(f"{name} Leaderboard")
        if not entries:
            click.echo("  (no strikes yet)")
        for entry in entries[:limit]:
            click.echo(
                f"  #{entry.rank:<3} @{entry.username or 'Unknown':<20} "
                f"{entry.short_address}  {entry.tx_count} strikes"
            )


@cli.command()
@click.argument("address")
@click.pass_context
def profile(ctx: click.Context, address: str) -> None:
    """Show a player's profile and rank."""
    cfg: AppConfig = ctx.obj["config"]

    async def _profile():
        backend = HttpBackendClient(cfg.backend_url, cfg.backend_timeout)
        try:
            return await backend.get_profile(address)
        finally:
            await backend.close()

    try:
        p = asyncio.run(_profile())
    except ChainWarzError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    if p is None:
        click.echo(f"No profile for {address}")
        return
    rank = get_rank(p.total_strikes)
    click.echo(f"Player:  @{p.username or 'Unknown'}")
    click.echo(f"Address: {p.address}")
    click.echo(f"Rank:    {rank.name}")
    for key, count in p.strikes.items():
        click.echo(f"  {key}: {count}")
    click.echo(f"Total:   {p.total_strikes}")
    upcoming = next_rank(p.total_strikes)
    if upcoming is not None:
        click.echo(f"Next:    {upcoming.name} in {upcoming.min_strikes - p.total_strikes} strikes")


# ── Strike ─────────────────────────────────────────────


@cli.command()
@click.argument("chain_key")
@click.option("--rpc-url", required=True, help="JSON-RPC node with an unlocked account")
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation prompt")
@click.pass_context
def strike(ctx: click.Context, chain_key: str, rpc_url: str, yes: bool) -> None:
    """Send a strike transaction through a JSON-RPC node."""
    cfg: AppConfig = ctx.obj["config"]
    _require_chain(cfg, chain_key)
    chain = cfg.chains[chain_key]

    if not yes:
        click.confirm(
            f"Send {chain.strike_amount} {chain.native_currency.symbol} "
            f"to {chain.contract_address} on {chain.name}?",
            abort=True,
        )

    async def _strike():
        provider = JsonRpcProvider(rpc_url)
        backend = HttpBackendClient(cfg.backend_url, cfg.backend_timeout)
        manager = WalletSessionManager(cfg, backend=backend, injected=provider)
        try:
            await manager.initialize()
            connected = await manager.connect()
            if not connected.success:
                return connected, manager.session
            return await manager.send_strike(chain_key), manager.session
        finally:
            await manager.close()
            await backend.close()
            await provider.close()

    result, session = asyncio.run(_strike())
    if not result.success:
        click.echo(f"Strike failed: {result.message}", err=True)
        sys.exit(1)

    click.echo(result.message)
    click.echo(f"  From:     {session.account}")
    click.echo(f"  Tx hash:  {session.last_strike.tx_hash}")
    click.echo(f"  Explorer: {session.last_strike.explorer_url}")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
