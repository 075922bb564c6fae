"""Parse URL query strings into nested dicts using dot-notation keys.

>>> from qsnest import parse_query
>>> parse_query("user.name=John+Doe&user.tags=a&user.tags=b")
{'user': {'name': 'John Doe', 'tags': ['a', 'b']}}
"""

from .decode import decode, extract, normalize
from .errors import DecodeError, QsNestError, QueryStructureError
from .options import DEFAULT_OPTIONS, Collision, ParseOptions
from .tree import ParsedQuery, ParsedValue, flatten, insert, set_path
from .uri import Query, Source, collect, parse_query, parse_url

__all__ = [
    "Collision",
    "DEFAULT_OPTIONS",
    "DecodeError",
    "ParseOptions",
    "ParsedQuery",
    "ParsedValue",
    "QsNestError",
    "Query",
    "QueryStructureError",
    "Source",
    "collect",
    "decode",
    "extract",
    "flatten",
    "insert",
    "normalize",
    "parse_query",
    "parse_url",
    "set_path",
]
