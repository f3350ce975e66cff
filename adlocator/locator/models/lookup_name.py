from adlocator.locator.errors import LocatorInputError


SRV_RR_FORMAT = "_{service}._tcp.{domain}"
SRV_RR_WITH_SITES_FORMAT = "_{service}._tcp.{site}._sites.{domain}"


def build_lookup_name(
    service: str,
    domain: str,
    site: str | None = None,
) -> str:
    """
    Build the SRV owner name for a service within a domain.

    An empty or missing site queries the domain wide records, otherwise
    the site specific ones, e.g. ``_ldap._tcp.site-a._sites.example.com``.
    """
    if not service:
        raise LocatorInputError("service")
    if not domain:
        raise LocatorInputError("domain")

    if site:
        return SRV_RR_WITH_SITES_FORMAT.format(
            service=service,
            site=site,
            domain=domain,
        )

    return SRV_RR_FORMAT.format(
        service=service,
        domain=domain,
    )
