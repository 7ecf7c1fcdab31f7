from __future__ import annotations

import re
from typing import (
    Any,
    Iterable,
    Iterator,
    List,
    Mapping,
    MutableMapping,
    Optional,
    Tuple,
    Union,
)

HEADERS_ENCODING = "iso-8859-1"

# Matches the quotes, whitespace and weak marker around an entity tag.
ETAG_NOISE_REGEXP = re.compile(r'("|[ \t]|W/)')

# Always anchored to a comma or the string boundary so that directives
# such as "no-cache-extension" don't match.
CACHE_CONTROL_NO_CACHE_REGEXP = re.compile(r"(?:^|,)\s*?no-cache\s*?(?:,|$)")

__all__ = (
    "Headers",
    "normalize_etag",
    "parse_etag_list",
    "has_no_cache_directive",
)

_RawHeaderItem = Tuple[Union[str, bytes], Union[str, bytes]]
HeadersInput = Union[Mapping[str, Union[str, List[str]]], Iterable[_RawHeaderItem]]


def _decode(value: Union[str, bytes]) -> str:
    if isinstance(value, bytes):
        return value.decode(HEADERS_ENCODING)
    return value


class Headers(MutableMapping[str, str]):
    """
    Case-insensitive header collection.

    Accepts either a mapping (values may be a single string or a list of
    strings) or an iterable of ``(name, value)`` pairs, such as the raw
    ``list[tuple[bytes, bytes]]`` found in an ASGI scope.

    Repeated header values are folded with ``", "`` when looked up through
    ``headers[name]`` or ``headers.get(name)``.
    """

    def __init__(self, headers: Optional[HeadersInput] = None) -> None:
        self._headers: dict[str, List[str]] = {}

        if headers is None:
            return

        if isinstance(headers, Mapping):
            for key, value in headers.items():
                values = [value] if isinstance(value, (str, bytes)) else list(value)
                self._headers.setdefault(_decode(key).lower(), []).extend(_decode(v) for v in values)
        else:
            for key, value in headers:
                self._headers.setdefault(_decode(key).lower(), []).append(_decode(value))

    def get_list(self, key: str) -> Optional[List[str]]:
        return self._headers.get(key.lower(), None)

    def __getitem__(self, key: str) -> str:
        return ", ".join(self._headers[key.lower()])

    def __setitem__(self, key: str, value: str) -> None:
        self._headers.setdefault(key.lower(), []).append(value)

    def __delitem__(self, key: str) -> None:
        del self._headers[key.lower()]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.lower() in self._headers

    def __iter__(self) -> Iterator[str]:
        return iter(self._headers)

    def __len__(self) -> int:
        return len(self._headers)

    def __repr__(self) -> str:
        return repr(self._headers)

    def __str__(self) -> str:
        return str(self._headers)

    def __eq__(self, other_headers: Any) -> bool:
        return isinstance(other_headers, Headers) and self._headers == other_headers._headers

    __hash__ = None  # type: ignore[assignment]


def normalize_etag(etag: str) -> str:
    """
    Reduce an entity tag to its opaque value for weak comparison.

    Examples:
        >>> normalize_etag('"foo"')
        'foo'
        >>> normalize_etag('W/"foo"')
        'foo'
        >>> normalize_etag(' "foo" ')
        'foo'
    """
    return ETAG_NOISE_REGEXP.sub("", etag)


def parse_etag_list(value: str) -> List[str]:
    """
    Split an ``If-None-Match`` value into normalized entity tags.

    The wildcard is not special here: ``*, "bar"`` yields ``["*", "bar"]``.

    Examples:
        >>> parse_etag_list(' "bar" , W/"foo"')
        ['bar', 'foo']
    """
    return [normalize_etag(token) for token in value.split(",")]


def has_no_cache_directive(cache_control: str) -> bool:
    """
    Check whether a Cache-Control value carries a bare ``no-cache`` directive.

    The match is case-sensitive and only accepts the whole directive name.

    Examples:
        >>> has_no_cache_directive("max-age=0, no-cache")
        True
        >>> has_no_cache_directive("no-cache-please")
        False
    """
    return CACHE_CONTROL_NO_CACHE_REGEXP.search(cache_control) is not None
