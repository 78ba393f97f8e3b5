"""
Utility functions for building request URLs.

Includes:
- Form-urlencoding of query strings and form bodies
- URL composition from base, path and query
"""

from typing import Any, Iterator, List, Mapping, Optional, Tuple
from urllib.parse import urlencode


def _scalar(value: Any) -> str:
    if isinstance(value, bool):
        return '1' if value else '0'
    return str(value)


def _flatten(key: str, value: Any) -> Iterator[Tuple[str, str]]:
    """Yield (key, value) pairs; nested mappings become key[sub]."""
    if value is None:
        return
    if isinstance(value, Mapping):
        for sub_key, sub_value in value.items():
            yield from _flatten(f"{key}[{sub_key}]", sub_value)
    elif isinstance(value, (list, tuple)):
        for item in value:
            yield from _flatten(key, item)
    else:
        yield key, _scalar(value)


def encode_form(data: Optional[Mapping[str, Any]]) -> str:
    """
    Form-urlencode mapping in insertion order.

    Spaces become '+', reserved characters are percent-escaped, list values
    repeat the key, None values are skipped.

    Examples:
        >>> encode_form({'q': 'hello world', 'page': 2})
        'q=hello+world&page=2'

        >>> encode_form({'tag': ['a', 'b']})
        'tag=a&tag=b'
    """
    if not data:
        return ''

    pairs: List[Tuple[str, str]] = []
    for key, value in data.items():
        pairs.extend(_flatten(str(key), value))
    return urlencode(pairs)


def build_url(path: str, base: Optional[str] = None, query: Optional[Mapping[str, Any]] = None) -> str:
    """
    Compose final request URL.

    The base is prepended as-is (duplicate slashes are not normalized) and a
    non-empty query is appended after '?'.

    Args:
        path: Path or absolute URL
        base: Base URL (optional)
        query: Query parameters (optional)

    Returns:
        Final URL

    Examples:
        >>> build_url('/users', base='https://api.example.com')
        'https://api.example.com/users'

        >>> build_url('/search', base='https://api.example.com', query={'q': 'a b'})
        'https://api.example.com/search?q=a+b'

        >>> build_url('/users', base='https://api.example.com', query={})
        'https://api.example.com/users'
    """
    url = f"{base}{path}" if base else path

    query_string = encode_form(query)
    if query_string:
        url += '?' + query_string

    return url
