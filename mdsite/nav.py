"""Render the site-wide navigation menu for one page."""

from __future__ import annotations

import html
from pathlib import PurePosixPath
from typing import List

from .paths import target_file
from .tree import DirectoryNode

COLLAPSE_LEAF = "leaf"
COLLAPSE_DIRECT = "direct"
COLLAPSE_POLICIES = (COLLAPSE_LEAF, COLLAPSE_DIRECT)


def collapses(node: DirectoryNode, policy: str = COLLAPSE_LEAF) -> bool:
    """True if node is shown as a single link to its only file.

    'leaf' requires exactly one file and no subdirectories. 'direct' looks
    at the direct file count only, which hides any subdirectories.
    """
    if len(node.files) != 1:
        return False
    if policy == COLLAPSE_DIRECT:
        return True
    return not node.children


def _link(href: str, label: str, active: bool) -> str:
    attrs = ' class="active" aria-current="page"' if active else ""
    return f'  <li><a href="{html.escape(href)}"{attrs}>{html.escape(label)}</a></li>\n'


def _render_dir(node: DirectoryNode, active: PurePosixPath, url_prefix: str, policy: str, out: List[str]) -> None:
    out.append('<ul class="nav-list">\n')

    for name in node.files:
        target = target_file(node.relative_path, name)
        out.append(_link(url_prefix + target.as_posix(), PurePosixPath(name).stem, target == active))

    for child in node.children:
        if collapses(child, policy):
            target = target_file(child.relative_path, child.files[0])
            out.append(_link(url_prefix + target.as_posix(), child.name, target == active))
        else:
            out.append(f"  <li><strong>{html.escape(child.name)}</strong>\n")
            _render_dir(child, active, url_prefix, policy, out)
            out.append("  </li>\n")

    out.append("</ul>\n")


def render_nav(root: DirectoryNode, active: PurePosixPath, url_prefix: str = "", collapse: str = COLLAPSE_LEAF) -> str:
    """Render root as nested <ul> markup with ``active`` marked as the current page.

    ``active`` is the page's TargetFile (see paths.target_file); ``url_prefix``
    is the page's back-reference prefix so links stay relative.
    """
    if collapse not in COLLAPSE_POLICIES:
        raise ValueError(f"Unknown collapse policy: {collapse!r}")
    out: List[str] = []
    _render_dir(root, PurePosixPath(active), url_prefix, collapse, out)
    return "".join(out)
