from .host_port import HostPort as HostPort
from .locator_config import LocatorConfig as LocatorConfig
from .lookup_name import build_lookup_name as build_lookup_name
from .srv_record import (
    SRVRecord as SRVRecord,
    UNAVAILABLE_SERVICE as UNAVAILABLE_SERVICE,
)
