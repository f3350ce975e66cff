from .models import Entry, LogLevel


class LocatorTrace(Entry, kw_only=True):
    lookup_name: str
    records: list[str] = []
    level: LogLevel = LogLevel.TRACE

class LocatorDebug(Entry, kw_only=True):
    lookup_name: str
    count: int | None = None
    level: LogLevel = LogLevel.DEBUG

class LocatorError(Entry, kw_only=True):
    lookup_name: str
    error: str
    error_type: str
    level: LogLevel = LogLevel.ERROR
