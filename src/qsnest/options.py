import enum as _enum
import typing as _ty


class Collision(_enum.Enum):
    """How to settle a key that is used both as a value and as a prefix."""

    MARKER = "marker"
    REPLACE = "replace"
    DROP = "drop"


class ParseOptions(_ty.NamedTuple):
    separator: str = "&"
    path_separator: str = "."
    marker: str = "__value"
    # a value arrives where a mapping already lives
    on_scalar_collision: Collision = Collision.MARKER
    # a dotted path runs through a str or list
    on_nested_collision: Collision = Collision.REPLACE

    def split_path(self, key: str) -> tuple[str, ...]:
        return tuple(segment for segment in key.split(self.path_separator) if segment)

    def is_nested(self, key: str) -> bool:
        return self.path_separator in key


DEFAULT_OPTIONS = ParseOptions()


def resolve(options: "ParseOptions | None") -> ParseOptions:
    return DEFAULT_OPTIONS if options is None else options
