"""
Error types raised while locating services through DNS.

Not-found is never an error: the locator returns ``None`` in that case.
"""


class LocatorError(Exception):
    """Base class for all locator failures."""


class LocatorInputError(LocatorError, ValueError):
    """Raised when a required argument is missing or empty."""

    def __init__(self, argument: str, message: str | None = None):
        self.argument = argument
        super().__init__(message or f"{argument} cannot be None or empty")


class ResolutionError(LocatorError):
    """Raised when the SRV query itself fails."""

    def __init__(self, lookup_name: str, message: str):
        self.lookup_name = lookup_name
        super().__init__(f"SRV lookup failed for '{lookup_name}': {message}")


class MalformedRecordError(LocatorError):
    """Raised when a returned SRV record does not follow RFC 2782."""

    def __init__(
        self,
        record: str,
        message: str,
        lookup_name: str | None = None,
    ):
        self.record = record
        self.lookup_name = lookup_name
        self.reason = message

        if lookup_name:
            super().__init__(
                f"Invalid SRV record '{record}' for '{lookup_name}': {message}"
            )

        else:
            super().__init__(f"Invalid SRV record '{record}': {message}")

    def for_lookup(self, lookup_name: str) -> "MalformedRecordError":
        """Return a copy of this error tagged with the lookup name."""
        return MalformedRecordError(
            self.record,
            self.reason,
            lookup_name=lookup_name,
        )
