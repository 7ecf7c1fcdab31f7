from freshness._fresh import fresh as fresh
from freshness._headers import (
    Headers as Headers,
    has_no_cache_directive as has_no_cache_directive,
    normalize_etag as normalize_etag,
    parse_etag_list as parse_etag_list,
)
from freshness._utils import generate_http_date as generate_http_date, parse_date as parse_date

__all__ = (
    # Freshness
    "fresh",
    ## Headers
    "Headers",
    "normalize_etag",
    "parse_etag_list",
    "has_no_cache_directive",
    ## Dates
    "parse_date",
    "generate_http_date",
)
