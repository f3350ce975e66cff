"""
DNS SRV based locator for Active Directory services (RFC 2782).

Usage:
    from adlocator.locator import DnsLocator

    locator = DnsLocator()
    servers = await locator.locate("ldap", "ad.example.com")
"""

# Errors
from adlocator.locator.errors import (
    LocatorError as LocatorError,
    LocatorInputError as LocatorInputError,
    ResolutionError as ResolutionError,
    MalformedRecordError as MalformedRecordError,
)

# Models
from adlocator.locator.models import (
    HostPort as HostPort,
    LocatorConfig as LocatorConfig,
    SRVRecord as SRVRecord,
    build_lookup_name as build_lookup_name,
)

# DNS
from adlocator.locator.dns import SRVResolver as SRVResolver

# Selection
from adlocator.locator.selection import (
    RFC2782Selector as RFC2782Selector,
    RandomSource as RandomSource,
)

# Locator facade
from adlocator.locator.dns_locator import DnsLocator as DnsLocator
