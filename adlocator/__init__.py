from .locator import (
    DnsLocator as DnsLocator,
    HostPort as HostPort,
    LocatorConfig as LocatorConfig,
    LocatorError as LocatorError,
    LocatorInputError as LocatorInputError,
    MalformedRecordError as MalformedRecordError,
    ResolutionError as ResolutionError,
)
