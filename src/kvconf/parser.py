"""Parser for flat ``key=value`` configuration text with type inference."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, ItemsView, Iterator, List, Mapping, Optional, Union

from .errors import DuplicateIndex, ParseError

ConfigValue = Union[bool, int, float, str]

# Compared against the lower-cased, trimmed value.
BOOLEAN_EQUIVALENTS: Dict[bool, tuple[str, ...]] = {
    True: ("yes", "on", "true", "enabled", "enable"),
    False: ("no", "off", "false", "disabled", "disable"),
}

_LINE_BREAK = re.compile(r"\r?\n")
_DECIMAL = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_INFINITY = re.compile(r"[+-]?Infinity")
_PREFIXED_INT = re.compile(r"0([xXoObB])([0-9a-zA-Z]+)")
_PREFIX_BASES = {"x": 16, "o": 8, "b": 2}


@dataclass(frozen=True)
class ConfigEntry:
    """A single resolved assignment."""

    key: str
    value: ConfigValue
    line_index: int

    @property
    def value_type(self) -> str:
        return value_type_of(self.value)


def value_type_of(value: ConfigValue) -> str:
    """Return ``"boolean"``, ``"number"`` or ``"string"`` for an inferred value."""
    if isinstance(value, bool):
        return "boolean"
    elif isinstance(value, (int, float)):
        return "number"
    elif isinstance(value, str):
        return "string"
    return "unknown"


def _trim(value: str) -> str:
    # U+FEFF (byte-order mark) is trimmed along with whitespace.
    return value.strip().strip("\ufeff").strip()


def split_lines(text: str) -> List[str]:
    """Split on ``\\n`` or ``\\r\\n``. A bare ``\\r`` is kept as content."""
    return _LINE_BREAK.split(text)


def _coerce_number(data: str) -> Optional[Union[int, float]]:
    # Blank input must never become 0.
    if not data:
        return None

    if _DECIMAL.fullmatch(data):
        if any(marker in data for marker in ".eE"):
            number = float(data)
        else:
            try:
                number = int(data)
            except ValueError:
                # Exceeds the interpreter's int string-conversion limit.
                number = float(data)
    elif _INFINITY.fullmatch(data):
        number = float(data.replace("Infinity", "inf"))
    else:
        match = _PREFIXED_INT.fullmatch(data)
        if not match:
            return None
        try:
            number = int(match.group(2), _PREFIX_BASES[match.group(1).lower()])
        except ValueError:
            return None

    if isinstance(number, float) and math.isnan(number):
        return None
    return number


def infer_value(raw: str) -> ConfigValue:
    """Infer the datatype of a raw value.

    Booleans are checked first against :data:`BOOLEAN_EQUIVALENTS`, then
    numbers, and anything else is returned as the trimmed string.

    Parameters
    ----------
    raw : str
        Value substring taken from the right of the ``=`` sign

    Returns
    -------
    bool, int, float or str
    """
    data = _trim(raw)

    lowered = data.lower()
    for literal, equivalents in BOOLEAN_EQUIVALENTS.items():
        if lowered in equivalents:
            return literal

    number = _coerce_number(data)
    if number is not None:
        return number
    return data


class ConfigParser:
    """Parses a configuration document into an ordered, read-only store.

    Parameters
    ----------
    text : str
        The configuration document
    auto_process : bool
        Parse immediately in the constructor. Errors then propagate from
        construction. When False, call :meth:`process` before reading values.
    """

    def __init__(self, text: str, auto_process: bool = True) -> None:
        self._text = text
        self._entries: Dict[str, ConfigEntry] = {}
        self._store: Dict[str, ConfigValue] = {}
        self._processed = False
        if auto_process:
            self.process()

    @property
    def text(self) -> str:
        return self._text

    @property
    def processed(self) -> bool:
        """True once a call to :meth:`process` has completed successfully."""
        return self._processed

    def process(self) -> None:
        """Parse the document, replacing the store only on success.

        Calling this again re-parses the original text and produces the same
        store. On failure the previous store is dropped and ``processed`` is
        False.

        Raises
        ------
        ParseError
            A line has no ``=`` and is not a comment, or has more than one.
        DuplicateIndex
            A key is assigned again. The line of the second assignment is
            the one reported.
        """
        self._entries = {}
        self._store = {}
        self._processed = False

        entries: Dict[str, ConfigEntry] = {}
        for index, line in enumerate(split_lines(self._text)):
            line = _trim(line)
            if not line:
                continue

            parts = line.split("=")
            if len(parts) == 1:
                if line[0] != "#":
                    raise ParseError(index, line)
                continue
            if len(parts) > 2:
                raise ParseError(index, line, " Cannot parse chained assignments.")

            key = _trim(parts[0])
            if key in entries:
                raise DuplicateIndex(index, key)
            entries[key] = ConfigEntry(key=key, value=infer_value(parts[1]), line_index=index)

        self._entries = entries
        self._store = {key: entry.value for key, entry in entries.items()}
        self._processed = True

    def get(self, key: str, default: Optional[ConfigValue] = None) -> Optional[ConfigValue]:
        """Return the value for ``key`` or ``default`` when it was never set."""
        return self._store.get(key, default)

    def get_entry(self, key: str) -> Optional[ConfigEntry]:
        return self._entries.get(key)

    def get_all_entries(self) -> ItemsView[str, ConfigValue]:
        """Return a restartable, read-only view of ``(key, value)`` pairs.

        The view follows insertion order and can be iterated any number of
        times.
        """
        return MappingProxyType(self._store).items()

    def entries(self) -> Iterator[ConfigEntry]:
        return iter(list(self._entries.values()))

    def as_mapping(self) -> Mapping[str, ConfigValue]:
        return MappingProxyType(self._store)

    def to_dict(self) -> Dict[str, ConfigValue]:
        """Return a plain ``dict`` snapshot of the store."""
        return dict(self._store)

    def __contains__(self, key: object) -> bool:
        return key in self._store

    def __len__(self) -> int:
        return len(self._store)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._store))

    def __repr__(self) -> str:
        state = f"{len(self)} entries" if self._processed else "unprocessed"
        return f"<ConfigParser {state}>"


def parse_config_text(text: str) -> Dict[str, ConfigValue]:
    """Parse ``text`` and return the resulting mapping as a plain ``dict``."""
    return ConfigParser(text).to_dict()
