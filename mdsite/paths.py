"""Map source files to their place in the output tree."""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import Union

MARKDOWN_SUFFIX = ".md"
HTML_SUFFIX = ".html"

PathLike = Union[str, PurePosixPath]


def is_markdown_file(name: str) -> bool:
    return PurePosixPath(name).suffix == MARKDOWN_SUFFIX


def target_filename(name: str) -> str:
    """Return the output filename: 'page.md' -> 'page.html', anything else unchanged."""
    if is_markdown_file(name):
        return str(PurePosixPath(name).with_suffix(HTML_SUFFIX))
    return name


def target_file(relative_dir: PathLike, name: str) -> PurePosixPath:
    """Position of a page in the output tree, used as the active-page key."""
    return PurePosixPath(relative_dir) / target_filename(name)


def back_prefix(relative_dir: PathLike) -> str:
    """One '../' per component of relative_dir; '' at the root.

    Prepended to every link so pages work from any subpath without
    absolute URLs.
    """
    return "../" * len(PurePosixPath(relative_dir).parts)
