"""Exceptions raised by mdsite.

Fatal errors (ConfigError, FilesystemError) abort a run before or while
output is produced. PageError subclasses concern a single page; the site
orchestrator records them and carries on with the next file.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union


class SiteError(Exception):
    """Base class for every error mdsite raises."""


class ConfigError(SiteError):
    """The configuration file is unreadable or incomplete."""


class FilesystemError(SiteError):
    """A root, directory, template or output path could not be used."""

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None):
        super().__init__(message)
        self.path = Path(path) if path is not None else None


class PageError(SiteError):
    """A single page could not be produced."""

    kind = "Page error"

    def __init__(self, path: Union[str, Path], reason: str):
        super().__init__(f"{self.kind} in {path}: {reason}")
        self.path = Path(path)
        self.reason = reason


class ConversionError(PageError):
    kind = "Conversion error"


class TemplateError(PageError):
    kind = "Template error"
