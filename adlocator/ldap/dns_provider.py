"""
LDAP DNS provider backed by the Active Directory locator.

Turns an LDAP URL like ``ldap://ad.example.com/dc=example,dc=com`` into
the list of LDAP URLs of the domain's servers, in failover order.

Recognized environment properties:
- ``adlocator.site``: The Active Directory site the client resides in.
- ``dns.*``: Passed through to the DNS resolver with the prefix stripped.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping
from urllib.parse import SplitResult, urlsplit, urlunsplit

from adlocator.locator.dns.srv_resolver import DNSTransport
from adlocator.locator.dns_locator import DnsLocator
from adlocator.locator.errors import LocatorInputError
from adlocator.locator.models.host_port import HostPort
from adlocator.locator.models.locator_config import LocatorConfig
from adlocator.locator.selection.random_source import RandomSource


SITE_PROPERTY = "adlocator.site"
DNS_PROPERTY_PREFIX = "dns."
LDAP_SERVICE = "ldap"


@dataclass(slots=True, frozen=True)
class LdapDnsProviderResult:
    domain_name: str
    """Domain the endpoints were located for."""

    endpoints: list[str]
    """LDAP URLs in the order they should be tried."""


@dataclass
class LdapDnsProvider:
    config: LocatorConfig = field(default_factory=LocatorConfig)
    """Base transport settings, ``dns.*`` properties are added per lookup."""

    random_source: RandomSource | None = field(default=None, repr=False)
    resolver_factory: Callable[..., DNSTransport] | None = field(default=None, repr=False)

    async def lookup_endpoints(
        self,
        url: str,
        env: Mapping[str, Any],
    ) -> LdapDnsProviderResult | None:
        if not url:
            raise LocatorInputError("url")
        if env is None:
            raise LocatorInputError("env", "env cannot be None")

        ldap_url = self._parse_url(url)
        domain_name = ldap_url.hostname

        locator = self._create_locator(env)
        servers = await locator.locate(
            LDAP_SERVICE,
            domain_name,
            site=env.get(SITE_PROPERTY),
        )

        if servers is None:
            return None

        return LdapDnsProviderResult(
            domain_name=domain_name,
            endpoints=[
                self._to_endpoint(ldap_url, server)
                for server in servers
            ],
        )

    def _create_locator(self, env: Mapping[str, Any]) -> DnsLocator:
        options = {
            key[len(DNS_PROPERTY_PREFIX):]: value
            for key, value in env.items()
            if isinstance(key, str) and key.startswith(DNS_PROPERTY_PREFIX)
        }

        config = self.config.with_options(**options) if options else self.config

        kwargs: dict[str, Any] = {"config": config}
        if self.random_source is not None:
            kwargs["random_source"] = self.random_source
        if self.resolver_factory is not None:
            kwargs["resolver_factory"] = self.resolver_factory

        return DnsLocator(**kwargs)

    @staticmethod
    def _parse_url(url: str) -> SplitResult:
        try:
            ldap_url = urlsplit(url)
            # Accessing port validates it.
            ldap_url.port

        except ValueError as err:
            raise LocatorInputError("url", f"URL '{url}' is invalid") from err

        if not ldap_url.scheme or not ldap_url.hostname:
            raise LocatorInputError("url", f"URL '{url}' has no host")

        return ldap_url

    @staticmethod
    def _to_endpoint(ldap_url: SplitResult, server: HostPort) -> str:
        # Only the host is replaced, the port of the original URL is kept.
        netloc = server.host
        if ldap_url.port is not None:
            netloc = f"{netloc}:{ldap_url.port}"

        return urlunsplit((
            ldap_url.scheme,
            netloc,
            ldap_url.path,
            ldap_url.query,
            ldap_url.fragment,
        ))
