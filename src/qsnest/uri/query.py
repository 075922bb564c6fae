import logging as _logging
import typing as _ty

import uritools as _uritools

from .. import options as _options
from .. import tree as _tree
from ..decode import ENCODING, extract, normalize
from ..errors import QueryStructureError
from ..options import ParseOptions

_log = _logging.getLogger(__name__)


def collect(tokens: _ty.Iterable[str]) -> dict[str, list[str]]:
    """Group decoded values by decoded key, keys in first-seen order."""
    params: dict[str, list[str]] = {}
    for token in tokens:
        pair = extract(token)
        if pair is None:
            continue
        key, value = pair
        params.setdefault(key, []).append(value)
    return params


def _verbatim(values: list[str]) -> "str | list[str]":
    return values[0] if len(values) == 1 else list(values)


def _assign(
    root: _tree.ParsedQuery, key: str, values: list[str], options: ParseOptions
) -> None:
    try:
        if options.is_nested(key):
            path = options.split_path(key)
            for value in values:
                _tree.set_path(root, path, value, options)
        elif isinstance(root.get(key), dict):
            # a dotted key already claimed this name
            for value in values:
                _tree.set_path(root, (key,), value, options)
        else:
            root[key] = _verbatim(values)
    except (QueryStructureError, TypeError, ValueError) as e:
        _log.warning("storing %r verbatim: %s", key, e)
        root[key] = _verbatim(values)


def parse_query(
    query: "str | bytes | None", options: "ParseOptions | None" = None
) -> _tree.ParsedQuery:
    """Parse a query string into nested dicts, lists and strings.

    >>> parse_query("page=2&tags=js&tags=ts")
    {'page': '2', 'tags': ['js', 'ts']}
    >>> parse_query("?object.prop1=1&object.prop2=2")
    {'object': {'prop1': '1', 'prop2': '2'}}
    """
    options = _options.resolve(options)
    normalized = normalize(query)
    if not normalized:
        return {}
    root: _tree.ParsedQuery = {}
    for key, values in collect(normalized.split(options.separator)).items():
        _assign(root, key, values, options)
    return root


class Query(str):
    SEPARATOR = "&"
    ENCODING = ENCODING

    def __new__(
        cls,
        query: (
            str
            | bytes
            | None
            | _ty.Sequence[tuple[str, str | None]]
            | _ty.Mapping[str, "str | None | _ty.Sequence[str] | _ty.Mapping"]
        ),
    ):
        if query is None or isinstance(query, (str, bytes)):
            query = normalize(query)
        else:
            if isinstance(query, _ty.Mapping):
                query = _tree.flatten(query)
            query = cls._encode(query)

        return str.__new__(cls, query)

    @classmethod
    def _encode(cls, items: _ty.Iterable[tuple[str, str | None]]) -> str:
        terms = []
        for key, value in items:
            name = _uritools.uriencode(key, "", cls.ENCODING).decode()
            if value is None:
                terms.append(name)
            else:
                value = _uritools.uriencode(str(value), "", cls.ENCODING).decode()
                terms.append(f"{name}={value}")
        return cls.SEPARATOR.join(terms)

    @property
    def options(self) -> ParseOptions:
        if self.SEPARATOR == _options.DEFAULT_OPTIONS.separator:
            return _options.DEFAULT_OPTIONS
        return ParseOptions(separator=self.SEPARATOR)

    def decode(query) -> list[tuple[str, str]]:
        pairs = []
        for token in query.split(query.SEPARATOR):
            pair = extract(token)
            if pair is not None:
                pairs.append(pair)
        return pairs

    def to_dict(query) -> dict[str, list[str]]:
        return collect(query.split(query.SEPARATOR))

    def to_tree(query, options: "ParseOptions | None" = None) -> _tree.ParsedQuery:
        return parse_query(str(query), options or query.options)
