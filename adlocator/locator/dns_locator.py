"""
Active Directory service locator.

Locates services like LDAP, Global Catalog or Kerberos through DNS SRV
records (RFC 2782) and returns the servers in the order a client should
try them. Only TCP records are queried and the ``_msdcs`` sub-domain is
not used.

Usage:
    from adlocator.locator import DnsLocator, LocatorConfig

    locator = DnsLocator(LocatorConfig(timeout=2.0))

    servers = await locator.locate("ldap", "ad.example.com")
    servers = await locator.locate("gc", "ad.example.com", site="berlin")

    if servers is None:
        print("no server offers this service")
"""

import asyncio
from dataclasses import dataclass, field
from typing import Callable, Iterable

from adlocator.logging import Logger
from adlocator.logging.locator_logging_models import (
    LocatorDebug,
    LocatorError as LocatorErrorEntry,
    LocatorTrace,
)

from .dns.srv_resolver import DNSTransport, SRVResolver
from .errors import LocatorError, LocatorInputError
from .models.host_port import HostPort
from .models.locator_config import LocatorConfig
from .models.lookup_name import build_lookup_name
from .selection.random_source import RandomSource, default_random_source
from .selection.rfc2782_selector import RFC2782Selector


LOGGER_NAME = "adlocator.locator"


@dataclass
class DnsLocator:
    """
    Resolves and orders the servers of a service within a domain.

    The locator holds no state between calls: each ``locate()`` opens
    its own DNS session, queries once and closes it again, so one
    instance can be shared by concurrent tasks.
    """

    config: LocatorConfig = field(default_factory=LocatorConfig)
    """Transport settings forwarded to the DNS resolver."""

    random_source: RandomSource = field(default_factory=default_random_source, repr=False)
    """Random draws for weighted ordering within a priority."""

    resolver_factory: Callable[..., DNSTransport] | None = field(default=None, repr=False)
    """Overrides the DNS transport, aiodns by default."""

    _resolver: SRVResolver = field(init=False, repr=False)
    _selector: RFC2782Selector = field(init=False, repr=False)
    _logger: Logger = field(default_factory=Logger, init=False, repr=False)

    _on_lookup: Callable[[str], None] | None = field(default=None, repr=False)
    """Optional callback when a lookup starts (lookup_name)."""

    _on_result: Callable[[str, int], None] | None = field(default=None, repr=False)
    """Optional callback when a lookup completes (lookup_name, server count)."""

    _on_error: Callable[[str, Exception], None] | None = field(default=None, repr=False)
    """Optional callback when a lookup fails (lookup_name, error)."""

    def __post_init__(self) -> None:
        if self.resolver_factory is None:
            self._resolver = SRVResolver(config=self.config)

        else:
            self._resolver = SRVResolver(
                config=self.config,
                resolver_factory=self.resolver_factory,
            )

        self._selector = RFC2782Selector(random_source=self.random_source)

    def set_callbacks(
        self,
        on_lookup: Callable[[str], None] | None = None,
        on_result: Callable[[str, int], None] | None = None,
        on_error: Callable[[str, Exception], None] | None = None,
    ) -> None:
        """
        Set optional callbacks for lookup events.

        Args:
            on_lookup: Called before the DNS query with the lookup name
            on_result: Called with the lookup name and the number of
                servers found, 0 if the service is not available
            on_error: Called with the lookup name and the error raised
        """
        self._on_lookup = on_lookup
        self._on_result = on_result
        self._on_error = on_error

    async def locate(
        self,
        service: str,
        domain: str,
        site: str | None = None,
    ) -> list[HostPort] | None:
        """
        Locate the servers of a service, sorted and selected per RFC 2782.

        Args:
            service: The service to locate, e.g. ``ldap``, ``gc`` or ``kerberos``
            domain: The domain name to search
            site: The Active Directory site the client resides in, if any

        Returns:
            The servers in the order to try them, or None if the domain
            does not offer the service.

        Raises:
            LocatorInputError: If service or domain is empty
            ResolutionError: If the DNS query fails
            MalformedRecordError: If DNS returned records that violate RFC 2782
        """
        lookup_name = build_lookup_name(service, domain, site=site)

        async with self._logger.context(name=LOGGER_NAME) as ctx:
            await ctx.log(
                LocatorDebug(
                    message=f"Looking up SRV RRs for '{lookup_name}'",
                    lookup_name=lookup_name,
                )
            )

            if self._on_lookup is not None:
                self._on_lookup(lookup_name)

            try:
                records = await self._resolver.resolve(lookup_name)

            except LocatorError as err:
                await ctx.log(
                    LocatorErrorEntry(
                        message=f"Failed to look up SRV RRs for '{lookup_name}'",
                        lookup_name=lookup_name,
                        error=str(err),
                        error_type=type(err).__name__,
                    )
                )

                if self._on_error is not None:
                    self._on_error(lookup_name, err)

                raise

            if records is None:
                await ctx.log(
                    LocatorDebug(
                        message=f"No SRV RRs for '{lookup_name}' found",
                        lookup_name=lookup_name,
                        count=0,
                    )
                )

                if self._on_result is not None:
                    self._on_result(lookup_name, 0)

                return None

            await ctx.log(
                LocatorTrace(
                    message=f"Found {len(records)} SRV RRs for '{lookup_name}'",
                    lookup_name=lookup_name,
                    records=[record.to_text() for record in records],
                )
            )

            servers = self._selector.select(records)

            await ctx.log(
                LocatorDebug(
                    message=f"Selected {len(servers)} servers for '{lookup_name}'",
                    lookup_name=lookup_name,
                    count=len(servers),
                )
            )

            if self._on_result is not None:
                self._on_result(lookup_name, len(servers))

            return servers

    async def locate_many(
        self,
        service: str,
        domains: Iterable[str],
        site: str | None = None,
    ) -> dict[str, list[HostPort] | None | LocatorError]:
        """
        Locate a service in several domains concurrently.

        Input errors are raised before any query is made, lookup failures
        are returned in place of the domain's result.
        """
        domains = list(domains)
        if not service:
            raise LocatorInputError("service")
        if not domains or not all(domains):
            raise LocatorInputError("domains")

        results: dict[str, list[HostPort] | None | LocatorError] = {}

        async def locate_one(domain: str) -> None:
            try:
                results[domain] = await self.locate(service, domain, site=site)

            except LocatorError as err:
                results[domain] = err

        await asyncio.gather(*[locate_one(domain) for domain in domains])

        return {domain: results[domain] for domain in domains}
