from .srv_resolver import (
    SRVResolver as SRVResolver,
    DNSTransport as DNSTransport,
    SRVAnswer as SRVAnswer,
    answer_to_text as answer_to_text,
)
