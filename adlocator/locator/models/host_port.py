from dataclasses import dataclass


MAX_PORT = 0xFFFF


@dataclass(slots=True, frozen=True)
class HostPort:
    """
    A located server: a host name along with a port.

    Instances are ordered for failover by the selector, never by
    themselves.
    """

    host: str
    """Host name without the trailing dot of the SRV target."""

    port: int
    """TCP port the service listens on."""

    def __post_init__(self) -> None:
        if not self.host:
            raise ValueError("host cannot be None or empty")
        if isinstance(self.port, bool) or not isinstance(self.port, int):
            raise ValueError(f"port must be an integer, got {self.port!r}")
        if not 0 <= self.port <= MAX_PORT:
            raise ValueError("port must be between 0 and 65535")

    def __str__(self) -> str:
        return f"{self.host}:{self.port}"
