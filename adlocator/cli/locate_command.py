import sys
from typing import Callable

import click
import msgspec
import uvloop

from adlocator.locator import (
    DnsLocator,
    HostPort,
    LocatorConfig,
    LocatorError,
    LocatorInputError,
)
from adlocator.locator.dns import DNSTransport
from adlocator.logging import LoggingConfig


async def run_locate(
    service: str,
    domain: str,
    site: str | None,
    config: LocatorConfig,
    resolver_factory: Callable[..., DNSTransport] | None = None,
) -> list[HostPort] | None:
    locator = DnsLocator(config=config, resolver_factory=resolver_factory)
    return await locator.locate(service, domain, site=site)


@click.command(help="Locate the servers of SERVICE in DOMAIN via DNS SRV records.")
@click.argument("service")
@click.argument("domain")
@click.option("--site", default=None, type=str, help="Active Directory site of the client.")
@click.option(
    "--nameserver",
    "nameservers",
    multiple=True,
    type=str,
    help="DNS server to query, may be repeated.",
)
@click.option("--timeout", default=None, type=float, help="Per try DNS timeout in seconds.")
@click.option("--tries", default=None, type=int, help="Number of DNS tries.")
@click.option("--log-level", default="error", type=str)
@click.option(
    "--json",
    "as_json",
    is_flag=True,
    show_default=True,
    default=False,
    help="Print the servers as a JSON array.",
)
@click.pass_context
def locate(
    ctx: click.Context,
    service: str,
    domain: str,
    site: str | None,
    nameservers: tuple[str, ...],
    timeout: float | None,
    tries: int | None,
    log_level: str,
    as_json: bool,
):
    try:
        LoggingConfig().update(log_level=log_level)
        config = LocatorConfig(
            nameservers=nameservers or None,
            timeout=timeout,
            tries=tries,
        )

    except ValueError as err:
        raise click.BadParameter(str(err)) from err

    try:
        servers = uvloop.run(
            run_locate(
                service,
                domain,
                site,
                config,
                resolver_factory=(ctx.obj or {}).get("resolver_factory"),
            )
        )

    except LocatorInputError as err:
        raise click.UsageError(str(err)) from err

    except LocatorError as err:
        click.echo(f"Error: {err}", err=True)
        sys.exit(1)

    if servers is None:
        click.echo(f"No servers found for service '{service}' in '{domain}'", err=True)
        sys.exit(1)

    if as_json:
        click.echo(msgspec.json.encode(servers).decode())
        return

    for server in servers:
        click.echo(str(server))
