from .random_source import (
    RandomSource as RandomSource,
    default_random_source as default_random_source,
)
from .rfc2782_selector import RFC2782Selector as RFC2782Selector
