from __future__ import annotations

"""
Shared pytest fixtures: source trees on disk and a minimal page template.
"""

import os
import sys
from pathlib import Path
from typing import Callable, Dict

import jinja2
import pytest

_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if _ROOT not in sys.path:
    sys.path.insert(0, _ROOT)

TEMPLATE_TEXT = (
    "<html><head><title>{{ title }}</title>"
    '<link rel="stylesheet" href="{{ base_path }}assets/style.css"></head>\n'
    "<body>\n{{ navigation }}<main>\n{{ content }}</main>\n</body></html>\n"
)


def write_files(root: Path, files: Dict[str, str]) -> Path:
    """Create every 'relative/path': 'text' entry under root."""
    root.mkdir(parents=True, exist_ok=True)
    for rel, text in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    return root


@pytest.fixture
def make_source(tmp_path: Path) -> Callable[[Dict[str, str]], Path]:
    """Factory that builds a source folder from a {relative path: text} mapping."""

    def _make(files: Dict[str, str]) -> Path:
        return write_files(tmp_path / "content", files)

    return _make


@pytest.fixture
def sample_source(make_source) -> Path:
    """The /a.md, /sub/b.md, /sub/c.md site."""
    return make_source({
        "a.md": "# A\n\nTop page.\n",
        "sub/b.md": "# B\n",
        "sub/c.md": "# C\n",
    })


@pytest.fixture
def template_path(tmp_path: Path) -> Path:
    theme = tmp_path / "theme"
    theme.mkdir()
    path = theme / "template.html"
    path.write_text(TEMPLATE_TEXT, encoding="utf-8")
    return path


@pytest.fixture
def template() -> jinja2.Template:
    return jinja2.Environment(undefined=jinja2.StrictUndefined).from_string(TEMPLATE_TEXT)
