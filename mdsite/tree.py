"""Scan a source directory into an immutable tree of DirectoryNode."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import FrozenSet, Iterable, Iterator, Tuple

from .errors import FilesystemError
from .paths import MARKDOWN_SUFFIX, is_markdown_file, target_filename

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS: Tuple[str, ...] = (MARKDOWN_SUFFIX,)


# -- data structures --
@dataclass(frozen=True)
class DirectoryNode:
    """One directory of the source tree.

    ``files`` and ``children`` are sorted by code point so that a build is
    reproducible across runs and platforms. The root node has an empty
    ``relative_path``. ``shadowed`` holds content files left out because
    another file of the directory already produces the same output name.
    """

    relative_path: PurePosixPath
    name: str
    files: Tuple[str, ...] = ()
    children: Tuple["DirectoryNode", ...] = ()
    shadowed: Tuple[str, ...] = ()

    def walk(self) -> Iterator["DirectoryNode"]:
        """Yield this node and its descendants depth-first, in sorted order."""
        yield self
        for child in self.children:
            yield from child.walk()

    def file_count(self) -> int:
        """Number of pages in this subtree."""
        return len(self.files) + sum(child.file_count() for child in self.children)


# -- scanning --
def _is_content_file(name: str, extensions: Iterable[str]) -> bool:
    return PurePosixPath(name).suffix in extensions


def _split_collisions(names: Iterable[str]) -> Tuple[Tuple[str, ...], Tuple[str, ...]]:
    """Keep one file per output name; Markdown wins over a same-named passthrough file."""
    kept = {}
    shadowed = []
    for name in sorted(names, key=lambda n: (not is_markdown_file(n), n)):
        target = target_filename(name)
        if target in kept:
            logger.warning("Output name %s of %s is already taken by %s", target, name, kept[target])
            shadowed.append(name)
        else:
            kept[target] = name
    return tuple(sorted(kept.values())), tuple(sorted(shadowed))


def _scan(path: Path, relative: PurePosixPath, extensions: Tuple[str, ...], exclude: FrozenSet[Path]) -> DirectoryNode:
    files = []
    children = []
    try:
        with os.scandir(path) as entries:
            for entry in entries:
                if entry.name.startswith("."):
                    continue
                if entry.is_dir(follow_symlinks=False):
                    sub = Path(entry.path)
                    if sub.resolve() in exclude:
                        logger.debug("Skipping excluded directory: %s", sub)
                        continue
                    children.append(_scan(sub, relative / entry.name, extensions, exclude))
                elif entry.is_symlink() and entry.is_dir():
                    logger.debug("Skipping symlinked directory: %s", entry.path)
                elif entry.is_file() and _is_content_file(entry.name, extensions):
                    files.append(entry.name)
    except OSError as exc:
        raise FilesystemError(f"Could not list directory: {path} ({exc.strerror or exc})", path) from exc

    children.sort(key=lambda node: node.name)
    kept, shadowed = _split_collisions(files)
    return DirectoryNode(
        relative_path=relative,
        name=path.name,
        files=kept,
        children=tuple(children),
        shadowed=shadowed,
    )


def build_tree(root: Path, extensions: Iterable[str] = DEFAULT_EXTENSIONS, exclude: Iterable[Path] = ()) -> DirectoryNode:
    """Scan root and return its DirectoryNode snapshot.

    Only regular files whose suffix is in ``extensions`` are kept. Hidden
    entries and symlinked directories are skipped; directories in
    ``exclude`` are left out entirely.
    """
    root = Path(root)
    if not root.exists():
        raise FilesystemError(f"Input folder does not exist: {root}", root)
    if not root.is_dir():
        raise FilesystemError(f"Input path is not a directory: {root}", root)

    excluded = frozenset(Path(p).resolve() for p in exclude)
    return _scan(root, PurePosixPath(), tuple(extensions), excluded)
