from .dns_provider import (
    LdapDnsProvider as LdapDnsProvider,
    LdapDnsProviderResult as LdapDnsProviderResult,
    SITE_PROPERTY as SITE_PROPERTY,
)
