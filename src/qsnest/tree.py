"""Placing decoded values into a nested tree addressed by key paths.

A tree is a plain ``dict`` whose values are ``str``, non-empty ``list[str]``
or further trees. Two collisions can happen while placing a value:

* a value reaches a key that already holds a tree (scalar collision),
* a path has to descend through a key holding a ``str`` or ``list``
  (nested collision).

Both are settled by :class:`~qsnest.options.ParseOptions`.
"""

import typing as _ty

from . import options as _options
from .errors import QueryStructureError
from .options import Collision, ParseOptions

ParsedValue: _ty.TypeAlias = "str | list[str] | ParsedQuery"
ParsedQuery: _ty.TypeAlias = "dict[str, ParsedValue]"

_MISSING = object()


def _segments(path: "_ty.Iterable[str]") -> tuple[str, ...]:
    return tuple(segment for segment in path if segment)


def _merge(existing, value: str, copy: bool):
    if existing is _MISSING:
        return value
    if isinstance(existing, str):
        return [existing, value]
    if copy:
        return [*existing, value]
    existing.append(value)
    return existing


def _descend(
    node: dict,
    key: str,
    options: ParseOptions,
    trail: tuple[str, ...],
    copy: bool,
) -> _ty.Optional[dict]:
    current = node.get(key, _MISSING)
    if current is _MISSING:
        child = {}
    elif isinstance(current, dict):
        child = dict(current) if copy else current
    elif isinstance(current, (str, list)):
        policy = options.on_nested_collision
        if policy is Collision.DROP:
            return None
        child = {options.marker: current} if policy is Collision.MARKER else {}
    else:
        raise QueryStructureError(trail, current)
    node[key] = child
    return child


def _place(
    node: dict,
    key: str,
    value: str,
    options: ParseOptions,
    trail: tuple[str, ...],
    copy: bool,
):
    current = node.get(key, _MISSING)
    if current is _MISSING or isinstance(current, (str, list)):
        node[key] = _merge(current, value, copy)
    elif isinstance(current, dict):
        policy = options.on_scalar_collision
        if policy is Collision.REPLACE:
            node[key] = value
        elif policy is Collision.MARKER:
            child = dict(current) if copy else current
            node[key] = child
            _place(child, options.marker, value, options, trail + (options.marker,), copy)
    else:
        raise QueryStructureError(trail, current)


def _walk(
    root: dict,
    path: "_ty.Iterable[str]",
    value: str,
    options: "ParseOptions | None",
    copy: bool,
):
    options = _options.resolve(options)
    segments = _segments(path)
    if not segments:
        return
    node = root
    for depth, key in enumerate(segments[:-1]):
        node = _descend(node, key, options, segments[: depth + 1], copy)
        if node is None:
            return
    _place(node, segments[-1], value, options, segments, copy)


def set_path(
    root: ParsedQuery,
    path: "_ty.Iterable[str]",
    value: str,
    options: "ParseOptions | None" = None,
) -> None:
    """Merge `value` into `root` at `path`, mutating `root` in place."""
    _walk(root, path, value, options, copy=False)


def insert(
    tree: "_ty.Mapping[str, ParsedValue]",
    path: "_ty.Iterable[str]",
    value: str,
    options: "ParseOptions | None" = None,
) -> ParsedQuery:
    """Return a new tree with `value` merged in at `path`.

    `tree` is left untouched: nodes along `path` are copied and every other
    subtree is shared with the result.
    """
    root = dict(tree)
    _walk(root, path, value, options, copy=True)
    return root


def flatten(
    tree: "_ty.Mapping[str, ParsedValue]",
    options: "ParseOptions | None" = None,
    prefix: tuple[str, ...] = (),
) -> _ty.Iterator[tuple[str, str | None]]:
    """Yield ``(dotted key, value)`` pairs that rebuild `tree` when parsed.

    A value stored under the marker key is emitted under its parent key,
    a None leaf is emitted as ``(dotted key, None)``.
    """
    options = _options.resolve(options)
    for key, value in tree.items():
        path = prefix if prefix and key == options.marker else prefix + (key,)
        if isinstance(value, _ty.Mapping):
            yield from flatten(value, options, path)
        elif value is None or isinstance(value, str):
            yield options.path_separator.join(path), value
        elif isinstance(value, (list, tuple)):
            dotted = options.path_separator.join(path)
            for item in value:
                yield dotted, str(item)
        else:
            raise QueryStructureError(path, value)
