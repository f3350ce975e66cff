"""
SRV record resolution over aiodns.

A fresh ``aiodns.DNSResolver`` is created for every lookup and closed
as soon as the query returns, so concurrent lookups never share a
transport session.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Protocol

import aiodns
from pycares import errno as ares_errno

from adlocator.locator.errors import MalformedRecordError, ResolutionError
from adlocator.locator.models.locator_config import LocatorConfig
from adlocator.locator.models.srv_record import SRVRecord, UNAVAILABLE_SERVICE


NOT_FOUND_ERRORS = frozenset({
    ares_errno.ARES_ENOTFOUND,
    ares_errno.ARES_ENODATA,
})


class SRVAnswer(Protocol):
    priority: int
    weight: int
    port: int
    host: str


class DNSTransport(Protocol):
    async def query(self, host: str, qtype: str) -> list[SRVAnswer]: ...

    async def close(self) -> None: ...


def answer_to_text(answer: SRVAnswer) -> str:
    """
    Render an aiodns SRV answer in presentation form.

    c-ares reports targets without the trailing dot and the root target
    as an empty name, both are turned back into FQDN form here.
    """
    target = answer.host or ""
    if not target.endswith("."):
        target = f"{target}."

    return f"{answer.priority} {answer.weight} {answer.port} {target}"


@dataclass
class SRVResolver:
    """
    Looks up the SRV records for a single owner name.

    Usage:
        resolver = SRVResolver(LocatorConfig(timeout=2.0))
        records = await resolver.resolve("_ldap._tcp.example.com")

        if records is None:
            print("service not available")
    """

    config: LocatorConfig = field(default_factory=LocatorConfig)
    """Transport settings forwarded to every resolver session."""

    resolver_factory: Callable[..., DNSTransport] = field(
        default=aiodns.DNSResolver,
        repr=False,
    )
    """Creates one transport session per lookup."""

    async def resolve(self, lookup_name: str) -> list[SRVRecord] | None:
        """
        Query the SRV records of ``lookup_name``.

        Returns:
            Records in the order the DNS server returned them, or None if
            the name does not exist, carries no SRV records or explicitly
            announces that the service is not offered.

        Raises:
            ResolutionError: If the query fails for any other reason.
            MalformedRecordError: If any returned record is invalid.
        """
        answers = await self._query(lookup_name)

        if not answers:
            return None

        records = [
            self._parse_answer(lookup_name, answer)
            for answer in answers
        ]

        unavailable = [record for record in records if record.is_unavailable]
        if unavailable and len(records) == 1:
            return None

        if unavailable:
            raise MalformedRecordError(
                unavailable[0].to_text(),
                f"target '{UNAVAILABLE_SERVICE}' must be the only record",
                lookup_name=lookup_name,
            )

        return records

    async def _query(self, lookup_name: str) -> list[SRVAnswer] | None:
        try:
            transport = self.resolver_factory(**self.config.resolver_kwargs())

        except Exception as exc:
            raise ResolutionError(
                lookup_name,
                f"failed to create DNS resolver: {exc}",
            ) from exc

        try:
            return await transport.query(lookup_name, "SRV")

        except aiodns.error.DNSError as exc:
            if exc.args and exc.args[0] in NOT_FOUND_ERRORS:
                return None

            raise ResolutionError(lookup_name, f"SRV query failed: {exc}") from exc

        except OSError as exc:
            raise ResolutionError(lookup_name, f"SRV query failed: {exc}") from exc

        finally:
            await self._release(transport)

    def _parse_answer(self, lookup_name: str, answer: Any) -> SRVRecord:
        try:
            return SRVRecord.from_text(answer_to_text(answer))

        except MalformedRecordError as exc:
            raise exc.for_lookup(lookup_name) from exc

        except (AttributeError, TypeError) as exc:
            raise MalformedRecordError(
                repr(answer),
                f"not an SRV answer: {exc}",
                lookup_name=lookup_name,
            ) from exc

    @staticmethod
    async def _release(transport: DNSTransport) -> None:
        try:
            await transport.close()

        except Exception:
            # Closing must never mask the query outcome.
            pass
