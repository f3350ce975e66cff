"""
Server selection per RFC 2782.

Records are tried by ascending priority. Within a priority the order is
randomized in proportion to weight: every extraction draws a number in
``[0, sum of remaining weights]`` and picks the first remaining record
whose running weight sum reaches it. The sums are recomputed after each
extraction since removing a record changes the odds of the others.
"""

from dataclasses import dataclass, field
from itertools import groupby
from operator import attrgetter

from adlocator.locator.models.host_port import HostPort
from adlocator.locator.models.srv_record import SRVRecord

from .random_source import RandomSource, default_random_source


@dataclass
class RFC2782Selector:
    """
    Orders SRV records into the sequence of servers a client should try.

    Usage:
        selector = RFC2782Selector()
        servers = selector.select(records)
    """

    random_source: RandomSource = field(
        default_factory=default_random_source,
        repr=False,
    )

    def select(self, records: list[SRVRecord]) -> list[HostPort]:
        """
        Order ``records`` by priority tier and weighted random choice.

        Returns one HostPort per record.
        """
        # sorted() is stable, so records keep their DNS order within a tier.
        by_priority = sorted(records, key=attrgetter("priority"))

        servers: list[HostPort] = []
        for _, tier in groupby(by_priority, key=attrgetter("priority")):
            servers.extend(self._order_tier(list(tier)))

        return servers

    def _order_tier(self, tier: list[SRVRecord]) -> list[HostPort]:
        remaining = list(tier)
        ordered: list[HostPort] = []

        while remaining:
            selected = self._pick(remaining)
            ordered.append(remaining.pop(selected).to_host_port())

        return ordered

    def _pick(self, remaining: list[SRVRecord]) -> int:
        total = sum(record.weight for record in remaining)
        threshold = self.random_source.randint(0, total) if total > 0 else 0

        running = 0
        for index, record in enumerate(remaining):
            running += record.weight
            if running >= threshold:
                return index

        # Unreachable: the final running sum equals total >= threshold.
        return len(remaining) - 1
