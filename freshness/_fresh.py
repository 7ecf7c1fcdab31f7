from __future__ import annotations

import logging
from typing import Mapping, Union

from freshness._headers import Headers, has_no_cache_directive, normalize_etag, parse_etag_list
from freshness._utils import parse_date

logger = logging.getLogger("freshness.fresh")

__all__ = ("fresh",)

HeaderSource = Union[Headers, Mapping[str, str]]


def _header(headers: Headers, name: str) -> str | None:
    # A response without a usable validator can't be validated.
    value = headers.get(name)
    if value is None or not value.strip():
        return None
    return value


def fresh(request_headers: HeaderSource, response_headers: HeaderSource) -> bool:
    """
    Check whether the client's cached representation is still valid.

    A server calls this with the headers of a conditional request and the
    headers of the representation it is about to send. When the result is
    ``True`` the server may answer ``304 Not Modified`` instead of sending
    the body.

    Rules, in order (the first one that decides wins):

    1. A request without ``If-None-Match`` and ``If-Modified-Since`` is
       unconditional and therefore stale.
    2. ``Cache-Control: no-cache`` on the request forces a reload, so the
       cache is stale even if validators match (RFC 9111, Section 5.2.1.4).
    3. ``If-None-Match`` (unless exactly ``*``) must contain the response
       ``ETag``. Tags are compared weakly (RFC 9110, Section 8.8.3.2).
    4. ``If-Modified-Since`` must not be earlier than the response
       ``Last-Modified`` (RFC 9110, Section 13.1.3).

    When both validators are sent, both must pass. Missing or unparseable
    values make the response stale; this function never raises on bad
    header values.

    Parameters:
    ----------
    request_headers : Headers | Mapping[str, str]
        Headers of the incoming request. Plain mappings are looked up
        case-insensitively.
    response_headers : Headers | Mapping[str, str]
        Headers of the current representation.

    Examples:
    --------
    >>> fresh({"If-None-Match": '"foo"'}, {"ETag": '"foo"'})
    True
    >>> fresh({"If-None-Match": '"foo"'}, {"ETag": '"bar"'})
    False
    >>> fresh({}, {})
    False
    """
    request = request_headers if isinstance(request_headers, Headers) else Headers(request_headers)
    response = response_headers if isinstance(response_headers, Headers) else Headers(response_headers)

    # A blank validator is still present; it just never matches.
    modified_since = request.get("If-Modified-Since")
    none_match = request.get("If-None-Match")

    # unconditional request
    if modified_since is None and none_match is None:
        logger.debug("Considering the response as stale since the request is unconditional.")
        return False

    # end-to-end reload
    cache_control = request.get("Cache-Control")
    if cache_control is not None and has_no_cache_directive(cache_control):
        logger.debug("Considering the response as stale since the request contains the no-cache directive.")
        return False

    if none_match is not None and none_match != "*":
        etag = _header(response, "ETag")

        if etag is None:
            logger.debug("Considering the response as stale since it has no ETag to compare with If-None-Match.")
            return False

        if normalize_etag(etag) not in parse_etag_list(none_match):
            logger.debug(
                "Considering the response as stale since its ETag %s does not match If-None-Match %s.",
                etag,
                none_match,
            )
            return False

    if modified_since is not None:
        last_modified = _header(response, "Last-Modified")

        if last_modified is None:
            logger.debug(
                "Considering the response as stale since it has no Last-Modified to compare with If-Modified-Since."
            )
            return False

        last_modified_timestamp = parse_date(last_modified)
        modified_since_timestamp = parse_date(modified_since)

        if last_modified_timestamp is None or modified_since_timestamp is None:
            logger.debug(
                "Considering the response as stale since the date could not be parsed "
                "(Last-Modified=%s, If-Modified-Since=%s).",
                last_modified,
                modified_since,
            )
            return False

        if last_modified_timestamp > modified_since_timestamp:
            logger.debug(
                "Considering the response as stale since it was modified at %s, after %s.",
                last_modified,
                modified_since,
            )
            return False

    logger.debug("Considering the response as fresh since every validator in the request matches.")
    return True
