"""Command line interface for the Pinata client."""

import asyncio
import logging
import sys
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import TypeVar

import click

from pinata.client import Pinata
from pinata.config import build_gateway_url
from pinata.credentials import Network
from pinata.errors import PinataError
from pinata.models import PinataFile, PinataGroup
from pinata.observability import (
    bind_command_context,
    configure_logging,
    get_logger,
)
from pinata.settings import MissingCredentialsError, get_settings


logger = get_logger()

T = TypeVar("T")

NETWORK_CHOICE = click.Choice([n.value for n in Network])


def _run(action: Callable[[Pinata], Awaitable[T]]) -> T:
    """Run one client action against a client built from the environment.

    Exits with status 1 on missing credentials or API errors.
    """

    async def _main() -> T:
        async with Pinata.from_settings() as client:
            return await action(client)

    try:
        return asyncio.run(_main())
    except MissingCredentialsError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except PinataError as e:
        logger.bind(component="cli").error("command_failed", **e.to_dict())
        click.echo(f"Error: {e.message}", err=True)
        sys.exit(1)


def _file_line(file: PinataFile) -> str:
    return f"{file.id}\t{file.cid}\t{file.size}\t{file.name or ''}"


def _group_line(group: PinataGroup) -> str:
    return f"{group.id}\t{group.name}\t{group.created_at.isoformat()}"


@click.group()
@click.version_option(version="0.1.0")
@click.option("--verbose", is_flag=True, help="Enable debug logging.")
@click.option("--json-logs", is_flag=True, help="Emit logs as JSON.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, json_logs: bool) -> None:
    """Pinata IPFS files CLI.

    Credentials are read from PINATA_JWT, or PINATA_API_KEY and
    PINATA_API_SECRET.
    """
    log_level = logging.DEBUG if verbose else logging.WARNING
    configure_logging(level=log_level, json_format=json_logs)
    if ctx.invoked_subcommand:
        bind_command_context(ctx.invoked_subcommand)


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--name", default=None, help="Name to upload under.")
@click.option("--group", "group_id", default=None, help="Group to add the file to.")
@click.option("--network", type=NETWORK_CHOICE, default=Network.PRIVATE.value)
def upload(path: Path, name: str | None, group_id: str | None, network: str) -> None:
    """Upload a file and print its CID."""
    file = _run(
        lambda client: client.upload_path(
            path, name=name, group_id=group_id, network=Network(network)
        )
    )
    click.echo(file.cid)


@cli.command("files")
@click.option("--group", "group_id", default=None, help="Only files in this group.")
@click.option("--network", type=NETWORK_CHOICE, default=Network.PRIVATE.value)
@click.option("--limit", type=click.IntRange(min=1), default=None, help="Page size.")
def list_files(group_id: str | None, network: str, limit: int | None) -> None:
    """List every file, one per line: id, CID, size, name."""

    async def collect(client: Pinata) -> list[PinataFile]:
        return [
            file
            async for file in client.iter_files(
                limit=limit, group_id=group_id, network=Network(network)
            )
        ]

    for file in _run(collect):
        click.echo(_file_line(file))


@cli.command("delete")
@click.argument("file_id")
@click.option("--network", type=NETWORK_CHOICE, default=Network.PRIVATE.value)
def delete_file(file_id: str, network: str) -> None:
    """Delete a file by its ID."""
    _run(lambda client: client.delete_file(file_id, network=Network(network)))
    click.echo(f"Deleted {file_id}")


@cli.command("groups")
@click.option("--limit", type=click.IntRange(min=1), default=None, help="Page size.")
def list_groups(limit: int | None) -> None:
    """List every group, one per line: id, name, creation time."""

    async def collect(client: Pinata) -> list[PinataGroup]:
        return [group async for group in client.iter_groups(limit=limit)]

    for group in _run(collect):
        click.echo(_group_line(group))


@cli.command("create-group")
@click.argument("name")
def create_group(name: str) -> None:
    """Create a group and print its ID."""
    group = _run(lambda client: client.create_group(name))
    click.echo(group.id)


@cli.command("gateway-url")
@click.argument("cid")
def gateway_url(cid: str) -> None:
    """Print the gateway URL for a CID.

    Needs only PINATA_GATEWAY_DOMAIN; no credentials or requests.
    """
    domain = get_settings().gateway_domain
    try:
        url = build_gateway_url(domain or "", cid)
    except ValueError:
        click.echo("Error: set PINATA_GATEWAY_DOMAIN", err=True)
        sys.exit(1)
    click.echo(url)


@cli.command("swap")
@click.argument("cid")
@click.argument("swap_cid")
@click.option("--network", type=NETWORK_CHOICE, default=Network.PRIVATE.value)
def add_swap(cid: str, swap_cid: str, network: str) -> None:
    """Serve SWAP_CID in place of CID at the gateway."""
    swap = _run(
        lambda client: client.add_swap(cid, swap_cid, network=Network(network))
    )
    click.echo(f"{cid} -> {swap.mapped_cid}")


if __name__ == "__main__":
    cli()
