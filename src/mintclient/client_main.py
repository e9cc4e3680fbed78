"""
mintclient command-line entry point.

Usage:
    mintclient [OPTIONS] COMMAND [ARGS]...
"""
from __future__ import annotations

import asyncio
import json
import logging
from typing import Awaitable, Callable, Optional

import click
from pydantic import BaseModel

from mintclient.domain.errors import MintClientError, UnsupportedCapabilityError
from mintclient.domain.shared import MintClientProtocol, MintInfoCapability
from mintclient.envs.client_env import get_settings
from mintclient.infrastructure.mint.factory import mint_client_factory

logger = logging.getLogger(__name__)

Operation = Callable[[MintClientProtocol, str], Awaitable[BaseModel]]


def _invoke(ctx: click.Context, operation: Operation) -> None:
    """Run ``operation`` against the configured mint and print the result as JSON."""
    mint_url = ctx.obj["settings"].mint_url
    factory = ctx.obj["client_factory"]

    async def run() -> BaseModel:
        async with factory() as client:
            return await operation(client, mint_url)

    try:
        result = asyncio.run(run())
    except MintClientError as exc:
        logger.debug("Mint call failed", exc_info=True)
        raise click.ClickException(str(exc)) from exc
    payload = result.model_dump(mode="json", by_alias=True, exclude_none=True)
    click.echo(json.dumps(payload, indent=2))


@click.group()
@click.option("--mint-url", envvar="MINT_URL", help="Mint base URL")
@click.pass_context
def cli(ctx: click.Context, mint_url: Optional[str]) -> None:
    """Query a Cashu mint over HTTP."""
    ctx.ensure_object(dict)
    try:
        settings = get_settings(mint_url)
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc
    logging.basicConfig(level=settings.log_level)

    ctx.obj["settings"] = settings
    if "client_factory" not in ctx.obj:
        try:
            ctx.obj["client_factory"] = mint_client_factory(
                settings, capabilities=(MintInfoCapability,)
            )
        except UnsupportedCapabilityError as exc:
            raise click.ClickException(str(exc)) from exc


@cli.command()
@click.pass_context
def info(ctx: click.Context) -> None:
    """Show mint information."""

    async def get_info(client: MintClientProtocol, mint_url: str) -> BaseModel:
        if not isinstance(client, MintInfoCapability):
            raise click.ClickException("Mint client does not support mint info")
        return await client.get_mint_info(mint_url)

    _invoke(ctx, get_info)


@cli.command()
@click.pass_context
def keys(ctx: click.Context) -> None:
    """Show the active keyset."""
    _invoke(ctx, lambda client, mint_url: client.get_mint_keys(mint_url))


@cli.command()
@click.pass_context
def keysets(ctx: click.Context) -> None:
    """List keyset ids."""
    _invoke(ctx, lambda client, mint_url: client.get_mint_keysets(mint_url))


@cli.command("request-mint")
@click.argument("amount", type=click.IntRange(min=0))
@click.pass_context
def request_mint(ctx: click.Context, amount: int) -> None:
    """Request a mint quote for AMOUNT."""
    _invoke(ctx, lambda client, mint_url: client.request_mint(mint_url, amount))


@cli.command("check-fees")
@click.argument("payment_request")
@click.pass_context
def check_fees(ctx: click.Context, payment_request: str) -> None:
    """Estimate the fee for paying PAYMENT_REQUEST."""
    _invoke(ctx, lambda client, mint_url: client.check_fees(mint_url, payment_request))


if __name__ == "__main__":
    cli()
