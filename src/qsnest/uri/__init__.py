import logging as _logging
import typing as _ty

from ..decode import ENCODING
from ..options import ParseOptions
from .query import Query, collect, parse_query
from .source import Source

_log = _logging.getLogger(__name__)


def _split_query(url: str) -> _ty.Optional[str]:
    url = url.strip()
    try:
        source, query = Source.from_uri(url)
    except ValueError as e:
        _log.debug("%r is not a URL (%s), searching for a query by hand", url, e)
    else:
        if source:
            return query or ""

    index = url.find("?")
    if index != -1:
        return url[index:]
    if "=" in url:
        # a bare query string without the leading '?'
        return url
    return None


def parse_url(
    url: "str | bytes | None", options: "ParseOptions | None" = None
) -> dict:
    """Parse the query of a full URL, a relative reference or a bare query.

    Never raises: anything that yields no query gives an empty dict.

    >>> parse_url("https://example.com?page=2&tags=js&tags=ts")
    {'page': '2', 'tags': ['js', 'ts']}
    """
    if url is None:
        return {}
    try:
        if isinstance(url, bytes):
            url = url.decode(ENCODING)
        elif not isinstance(url, str):
            url = str(url)
        query = _split_query(url)
        if query is None:
            return {}
        return parse_query(query, options)
    except Exception as e:
        _log.debug("no query in %r: %s", url, e)
        return {}
