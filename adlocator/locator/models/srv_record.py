"""
SRV resource record model (RFC 2782).
"""

from dataclasses import dataclass

from adlocator.locator.errors import MalformedRecordError
from adlocator.locator.models.host_port import HostPort, MAX_PORT


UNAVAILABLE_SERVICE = "."
"""Target announcing that the domain does not offer the service."""

SRV_RECORD_FIELDS = ("priority", "weight", "port", "target")


def _parse_uint16(text: str, name: str, token: str) -> int:
    if not (token.isascii() and token.isdigit()):
        raise MalformedRecordError(text, f"{name} '{token}' is not an unsigned integer")

    value = int(token)
    if value > MAX_PORT:
        raise MalformedRecordError(text, f"{name} must be between 0 and 65535")

    return value


@dataclass(slots=True)
class SRVRecord:
    """
    A single SRV record as returned for one query.

    Records are ephemeral: created while resolving, consumed by the
    selector. Only ``priority`` orders them; records sharing a priority
    form a tier and are ordered by weighted random selection.
    """

    priority: int
    """Priority of the target host (lower values are tried first)."""

    weight: int
    """Relative weight among records of the same priority."""

    port: int
    """Port number of the service."""

    target: str
    """Fully qualified target host name, including the trailing dot."""

    def __post_init__(self) -> None:
        for name in ("priority", "weight", "port"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise MalformedRecordError(
                    self.to_text(), f"{name} must be an integer"
                )
            if not 0 <= value <= MAX_PORT:
                raise MalformedRecordError(
                    self.to_text(), f"{name} must be between 0 and 65535"
                )

        if not self.target:
            raise MalformedRecordError(self.to_text(), "target cannot be None or empty")

    @classmethod
    def from_text(cls, text: str) -> "SRVRecord":
        """
        Parse the presentation form ``"<priority> <weight> <port> <target>"``.

        Raises:
            MalformedRecordError: If the record does not hold exactly four
                tokens or a numeric field is outside 0-65535.
        """
        tokens = text.split()
        if len(tokens) != len(SRV_RECORD_FIELDS):
            raise MalformedRecordError(
                text,
                f"expected {len(SRV_RECORD_FIELDS)} fields, got {len(tokens)}",
            )

        priority, weight, port, target = tokens

        return cls(
            priority=_parse_uint16(text, "priority", priority),
            weight=_parse_uint16(text, "weight", weight),
            port=_parse_uint16(text, "port", port),
            target=target,
        )

    def to_text(self) -> str:
        return f"{self.priority} {self.weight} {self.port} {self.target}"

    @property
    def is_unavailable(self) -> bool:
        return self.target == UNAVAILABLE_SERVICE

    def to_host_port(self) -> HostPort:
        """Convert to an endpoint, dropping the trailing dot of the target."""
        host = self.target[:-1] if self.target.endswith(".") else self.target
        return HostPort(host=host, port=self.port)

    def __lt__(self, other: "SRVRecord") -> bool:
        if not isinstance(other, SRVRecord):
            return NotImplemented

        return self.priority < other.priority

    def __str__(self) -> str:
        return f"SRV RR: {self.to_text()}"
