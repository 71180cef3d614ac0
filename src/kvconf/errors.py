"""Error taxonomy raised while reading ``key=value`` configuration text."""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Discriminant shared by every configuration error."""

    PARSE = "parse"
    DUPLICATE_INDEX = "duplicate_index"


class ConfigurationError(Exception):
    """Base class for errors raised by :class:`kvconf.parser.ConfigParser`.

    Attributes
    ----------
    kind:
        Which failure occurred. Reporting code can dispatch on it instead of
        on the concrete exception class.
    line_index:
        0-based index of the offending line in the document.
    """

    kind: ErrorKind

    def __init__(self, kind: ErrorKind, line_index: int, message: str) -> None:
        super().__init__("Could not read configuration file. " + message)
        self.kind = kind
        self.line_index = line_index

    @property
    def message(self) -> str:
        return str(self)


class ParseError(ConfigurationError):
    """A line is neither blank, a comment, nor a single assignment."""

    def __init__(self, line_index: int, line: str, detail: str | None = None) -> None:
        self.line = line
        self.detail = detail
        super().__init__(
            ErrorKind.PARSE,
            line_index,
            f'Error on line {line_index} : "{line}"{detail or ""}',
        )


class DuplicateIndex(ConfigurationError):
    """A key was assigned a second time."""

    def __init__(self, line_index: int, key: str) -> None:
        self.key = key
        super().__init__(
            ErrorKind.DUPLICATE_INDEX,
            line_index,
            f"Duplicate index ({key}) on line {line_index}.",
        )
