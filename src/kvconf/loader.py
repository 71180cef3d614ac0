"""Read configuration documents from disk."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict

from .parser import ConfigParser, ConfigValue
from .settings import DEFAULT_SETTINGS, LoaderSettings

logger = logging.getLogger(__name__)


def read_config_text(path: Path, settings: LoaderSettings | None = None) -> str:
    """Return the raw text of ``path`` decoded with the configured encoding."""

    active_settings = settings or DEFAULT_SETTINGS
    with open(path, "r", encoding=active_settings.encoding, newline="") as f:
        return f.read()


def load_config_file(path: Path, settings: LoaderSettings | None = None) -> ConfigParser:
    """Read ``path`` and build a :class:`ConfigParser` from its contents.

    Parameters
    ----------
    path : Path
        Location of the ``key=value`` configuration file
    settings : LoaderSettings, optional
        Loader options, defaults to :data:`DEFAULT_SETTINGS`

    Returns
    -------
    ConfigParser
        Parser holding the file's entries. Unprocessed when
        ``settings.auto_process`` is False.

    Raises
    ------
    OSError
        The file cannot be opened.
    ConfigurationError
        The document is malformed or repeats a key.
    """
    active_settings = settings or DEFAULT_SETTINGS
    path = Path(path)
    text = read_config_text(path, active_settings)
    logger.debug("Read %d characters from %s", len(text), path)

    parser = ConfigParser(text, auto_process=active_settings.auto_process)
    if parser.processed:
        logger.debug("Parsed %d entries from %s", len(parser), path)
    return parser


def load_config(path: Path, settings: LoaderSettings | None = None) -> Dict[str, ConfigValue]:
    """Load ``path`` and return its entries as a plain ``dict``."""
    parser = load_config_file(path, settings)
    if not parser.processed:
        parser.process()
    return parser.to_dict()
