"""
Test: DnsLocator facade.

Run with: pytest tests/unit/locator/test_dns_locator.py
"""

import asyncio
import random

import aiodns
import pytest
from pycares import errno as ares_errno

from adlocator.locator import (
    DnsLocator,
    HostPort,
    LocatorConfig,
    LocatorInputError,
    MalformedRecordError,
    ResolutionError,
)
from tests.unit.mocks import MockResolverFactory


def create_locator(
    factory: MockResolverFactory,
    config: LocatorConfig | None = None,
    seed: int = 2782,
) -> DnsLocator:
    return DnsLocator(
        config=config or LocatorConfig(),
        random_source=random.Random(seed),
        resolver_factory=factory,
    )


@pytest.mark.asyncio
async def test_locate_without_site(resolver_factory: MockResolverFactory):
    resolver_factory.set_mock_records(
        "_ldap._tcp.example.com",
        [(0, 0, 389, "dc1.example.com.")],
    )

    servers = await create_locator(resolver_factory).locate("ldap", "example.com")

    assert servers == [HostPort("dc1.example.com", 389)]
    assert resolver_factory.sessions[0].queries == [("_ldap._tcp.example.com", "SRV")]


@pytest.mark.asyncio
async def test_locate_with_site(resolver_factory: MockResolverFactory):
    resolver_factory.set_mock_records(
        "_ldap._tcp.site-a._sites.example.com",
        [(0, 0, 389, "dc-a.example.com.")],
    )

    servers = await create_locator(resolver_factory).locate(
        "ldap",
        "example.com",
        site="site-a",
    )

    assert servers == [HostPort("dc-a.example.com", 389)]
    assert resolver_factory.sessions[0].queries == [
        ("_ldap._tcp.site-a._sites.example.com", "SRV"),
    ]


@pytest.mark.asyncio
async def test_locate_orders_by_priority(resolver_factory: MockResolverFactory):
    resolver_factory.set_mock_records(
        "_gc._tcp.example.com",
        [
            (10, 100, 3268, "backup.example.com"),
            (0, 50, 3268, "dc1.example.com"),
            (0, 50, 3268, "dc2.example.com"),
        ],
    )
    locator = create_locator(resolver_factory)

    for _ in range(20):
        servers = await locator.locate("gc", "example.com")

        assert len(servers) == 3
        assert servers[-1] == HostPort("backup.example.com", 3268)
        assert {server.host for server in servers[:2]} == {
            "dc1.example.com",
            "dc2.example.com",
        }


@pytest.mark.asyncio
async def test_locate_not_found_returns_none(resolver_factory: MockResolverFactory):
    assert await create_locator(resolver_factory).locate("ldap", "example.com") is None


@pytest.mark.asyncio
async def test_locate_service_not_offered_returns_none(resolver_factory: MockResolverFactory):
    resolver_factory.set_mock_records("_kerberos._tcp.example.com", [(0, 0, 0, ".")])

    assert await create_locator(resolver_factory).locate("kerberos", "example.com") is None


@pytest.mark.parametrize(
    "service,domain",
    [
        ("", "example.com"),
        (None, "example.com"),
        ("ldap", ""),
        ("ldap", None),
    ],
)
@pytest.mark.asyncio
async def test_locate_rejects_missing_arguments(
    resolver_factory: MockResolverFactory,
    service,
    domain,
):
    with pytest.raises(LocatorInputError):
        await create_locator(resolver_factory).locate(service, domain)

    assert resolver_factory.sessions == []


@pytest.mark.asyncio
async def test_locate_malformed_record_returns_nothing(resolver_factory: MockResolverFactory):
    resolver_factory.set_mock_records(
        "_ldap._tcp.example.com",
        [
            (0, 0, 389, "dc1.example.com"),
            (0, 0, 389, "dc2 example.com"),
        ],
    )

    with pytest.raises(MalformedRecordError) as exc_info:
        await create_locator(resolver_factory).locate("ldap", "example.com")

    assert exc_info.value.lookup_name == "_ldap._tcp.example.com"


@pytest.mark.asyncio
async def test_locate_does_not_retry_failed_query(resolver_factory: MockResolverFactory):
    resolver_factory.set_mock_failure(
        "_ldap._tcp.example.com",
        aiodns.error.DNSError(ares_errno.ARES_ETIMEOUT, "Timeout while contacting DNS servers"),
    )

    with pytest.raises(ResolutionError):
        await create_locator(resolver_factory).locate("ldap", "example.com")

    assert resolver_factory.query_count == 1
    assert resolver_factory.sessions[0].closed


@pytest.mark.asyncio
async def test_callbacks_report_lookup_and_count(resolver_factory: MockResolverFactory):
    resolver_factory.set_mock_records(
        "_ldap._tcp.example.com",
        [
            (0, 0, 389, "dc1.example.com"),
            (0, 0, 389, "dc2.example.com"),
        ],
    )
    events: list[tuple] = []
    locator = create_locator(resolver_factory)
    locator.set_callbacks(
        on_lookup=lambda name: events.append(("lookup", name)),
        on_result=lambda name, count: events.append(("result", name, count)),
        on_error=lambda name, error: events.append(("error", name, error)),
    )

    await locator.locate("ldap", "example.com")
    await locator.locate("gc", "example.com")

    assert events == [
        ("lookup", "_ldap._tcp.example.com"),
        ("result", "_ldap._tcp.example.com", 2),
        ("lookup", "_gc._tcp.example.com"),
        ("result", "_gc._tcp.example.com", 0),
    ]


@pytest.mark.asyncio
async def test_callbacks_report_errors(resolver_factory: MockResolverFactory):
    failure = aiodns.error.DNSError(ares_errno.ARES_ESERVFAIL, "Server failed")
    resolver_factory.set_mock_failure("_ldap._tcp.example.com", failure)
    errors: list[tuple[str, Exception]] = []
    results: list[tuple[str, int]] = []
    locator = create_locator(resolver_factory)
    locator.set_callbacks(
        on_result=lambda name, count: results.append((name, count)),
        on_error=lambda name, error: errors.append((name, error)),
    )

    with pytest.raises(ResolutionError) as exc_info:
        await locator.locate("ldap", "example.com")

    assert errors == [("_ldap._tcp.example.com", exc_info.value)]
    assert results == []


@pytest.mark.asyncio
async def test_concurrent_locates_use_separate_sessions(resolver_factory: MockResolverFactory):
    for index in range(5):
        resolver_factory.set_mock_records(
            f"_ldap._tcp.domain{index}.example.com",
            [(0, 0, 389, f"dc.domain{index}.example.com")],
        )
    locator = create_locator(resolver_factory)

    results = await asyncio.gather(*[
        locator.locate("ldap", f"domain{index}.example.com")
        for index in range(5)
    ])

    assert results == [
        [HostPort(f"dc.domain{index}.example.com", 389)]
        for index in range(5)
    ]
    assert len(resolver_factory.sessions) == 5
    assert all(session.closed for session in resolver_factory.sessions)


@pytest.mark.asyncio
async def test_locate_many(resolver_factory: MockResolverFactory):
    resolver_factory.set_mock_records(
        "_ldap._tcp.a.example.com",
        [(0, 0, 389, "dc.a.example.com")],
    )
    resolver_factory.set_mock_failure(
        "_ldap._tcp.c.example.com",
        aiodns.error.DNSError(ares_errno.ARES_EREFUSED, "Query refused"),
    )

    results = await create_locator(resolver_factory).locate_many(
        "ldap",
        ["a.example.com", "b.example.com", "c.example.com"],
    )

    assert list(results) == ["a.example.com", "b.example.com", "c.example.com"]
    assert results["a.example.com"] == [HostPort("dc.a.example.com", 389)]
    assert results["b.example.com"] is None
    assert isinstance(results["c.example.com"], ResolutionError)


@pytest.mark.asyncio
async def test_locate_many_rejects_empty_domains(resolver_factory: MockResolverFactory):
    locator = create_locator(resolver_factory)

    with pytest.raises(LocatorInputError):
        await locator.locate_many("ldap", [])

    with pytest.raises(LocatorInputError):
        await locator.locate_many("ldap", ["a.example.com", ""])

    with pytest.raises(LocatorInputError):
        await locator.locate_many("", ["a.example.com"])

    assert resolver_factory.sessions == []


def test_default_locator_uses_aiodns():
    locator = DnsLocator()

    assert locator._resolver.resolver_factory is aiodns.DNSResolver
