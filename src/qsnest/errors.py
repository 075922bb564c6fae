class QsNestError(Exception):
    """Base class for errors raised inside qsnest."""


class DecodeError(QsNestError, ValueError):
    def __init__(self, token: str, reason: str):
        super().__init__(f"cannot decode {token!r}: {reason}")
        self.token = token
        self.reason = reason


class QueryStructureError(QsNestError, TypeError):
    """A tree node is neither a str, a list nor a mapping."""

    def __init__(self, path: "tuple[str, ...]", node: object):
        super().__init__(
            f"unexpected {type(node).__name__!r} at {'.'.join(path) or '<root>'!r}"
        )
        self.path = path
        self.node = node
