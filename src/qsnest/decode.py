"""Token level helpers: percent-decoding, normalization and key/value split."""

import logging as _logging
import re as _re
import typing as _ty

import uritools as _uritools

from .errors import DecodeError

_log = _logging.getLogger(__name__)

ENCODING = "utf-8"

_BAD_ESCAPE = _re.compile(r"%(?![0-9A-Fa-f]{2})")


def decode_strict(token: str) -> str:
    """Percent-decode `token` after turning every ``+`` into a space.

    Raises :class:`DecodeError` on a truncated or non-hex escape and on
    escapes that do not form valid UTF-8.
    """
    text = token.replace("+", " ")
    if "%" not in text:
        return text
    bad = _BAD_ESCAPE.search(text)
    if bad:
        raise DecodeError(text, f"malformed escape at offset {bad.start()}")
    try:
        return _uritools.uridecode(text, ENCODING, "strict")
    except UnicodeError as e:
        raise DecodeError(text, str(e)) from e


def decode(token: str) -> str:
    try:
        return decode_strict(token)
    except DecodeError as e:
        _log.debug("keeping %r undecoded: %s", e.token, e.reason)
        return e.token


def normalize(query: "str | bytes | None") -> str:
    if query is None:
        return ""
    if isinstance(query, bytes):
        query = query.decode(ENCODING, "replace")
    elif not isinstance(query, str):
        query = str(query)
    return query[1:] if query.startswith("?") else query


def extract(token: str) -> _ty.Optional[tuple[str, str]]:
    """Split ``key=value`` (or a bare ``key``) into a decoded pair.

    Returns None when the token cannot address anything.
    """
    if not token:
        return None
    raw_key, sep, raw_value = token.partition("=")
    try:
        key = decode(raw_key)
        value = decode(raw_value) if sep else ""
    except (TypeError, ValueError) as e:
        _log.debug("skipping token %r: %s", token, e)
        return None
    if not key:
        return None
    return key, value
