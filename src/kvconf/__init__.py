"""Typed ``key=value`` configuration parsing."""

from .errors import ConfigurationError, DuplicateIndex, ErrorKind, ParseError
from .loader import load_config, load_config_file
from .parser import (
    BOOLEAN_EQUIVALENTS,
    ConfigEntry,
    ConfigParser,
    infer_value,
    parse_config_text,
    split_lines,
    value_type_of,
)
from .settings import DEFAULT_SETTINGS, LoaderSettings

__all__ = [
    "BOOLEAN_EQUIVALENTS",
    "ConfigEntry",
    "ConfigParser",
    "ConfigurationError",
    "DEFAULT_SETTINGS",
    "DuplicateIndex",
    "ErrorKind",
    "LoaderSettings",
    "ParseError",
    "infer_value",
    "load_config",
    "load_config_file",
    "parse_config_text",
    "split_lines",
    "value_type_of",
]
