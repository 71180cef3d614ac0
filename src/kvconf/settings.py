"""Options for loading configuration files from disk."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class LoaderSettings:
    """Options used by :func:`kvconf.loader.load_config_file`.

    Attributes
    ----------
    encoding:
        Text encoding used to decode the file. Defaults to ``utf-8``.
    auto_process:
        Whether the returned parser has already processed the document. When
        disabled the caller is responsible for calling ``process()``.
    """

    encoding: str = "utf-8"
    auto_process: bool = True


DEFAULT_SETTINGS = LoaderSettings()
