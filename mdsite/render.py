"""Turn one source file into a finished page.

Markdown is converted with Python-Markdown; everything else in the content
filter (raw .htm/.html) is passed through untouched. The resulting fragment,
the navigation menu, the page title and the back-reference prefix are merged
into the site template with Jinja2.
"""

from __future__ import annotations

import logging
from pathlib import Path, PurePosixPath
from typing import Dict

import jinja2
import markdown

from .errors import ConversionError, FilesystemError, TemplateError
from .nav import COLLAPSE_LEAF, render_nav
from .paths import is_markdown_file, target_file
from .tree import DirectoryNode

logger = logging.getLogger(__name__)

MARKDOWN_EXTENSIONS = ["extra", "sane_lists", "toc", "pymdownx.tasklist", "pymdownx.tilde"]


# -- markdown conversion --
def convert_markdown(md_text: str) -> str:
    """Convert markdown to an HTML fragment.

    GitHub-style extras on top of Python-Markdown: tables, fenced code,
    task lists and ~~strikethrough~~.
    """
    return markdown.markdown(md_text, extensions=MARKDOWN_EXTENSIONS)


# -- template --
def load_template(template_path: Path) -> jinja2.Template:
    """Parse the page template once; the handle is reused for every page.

    Includes and extends resolve relative to the template's own directory.
    Undefined variables raise instead of rendering as empty strings.
    """
    template_path = Path(template_path)
    if not template_path.is_file():
        raise FilesystemError(f"Template file does not exist: {template_path}", template_path)

    env = jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(template_path.parent)),
        undefined=jinja2.StrictUndefined,
        autoescape=False,
        keep_trailing_newline=True,
    )
    try:
        return env.get_template(template_path.name)
    except jinja2.TemplateSyntaxError as exc:
        raise TemplateError(template_path, f"line {exc.lineno}: {exc.message}") from exc
    except (jinja2.TemplateNotFound, OSError) as exc:
        raise FilesystemError(f"Could not read template: {template_path}", template_path) from exc


# -- page --
def build_context(base_path: str, title: str, navigation: str, content: str) -> Dict[str, str]:
    return {
        "base_path": base_path,
        "title": title,
        "navigation": navigation,
        "content": content,
    }


def _read_source(source_path: Path, passthrough: bool = False) -> str:
    """Read a page as text.

    Passthrough pages keep undecodable bytes as surrogates so that they come
    back out byte for byte; Markdown must be valid UTF-8.
    """
    try:
        raw = source_path.read_bytes()
    except OSError as exc:
        raise FilesystemError(f"Could not read file: {source_path}", source_path) from exc
    if passthrough:
        return raw.decode("utf-8", "surrogateescape")
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ConversionError(source_path, f"not valid UTF-8 ({exc.reason} at byte {exc.start})") from exc


def render_page(
    source_path: Path,
    node: DirectoryNode,
    root: DirectoryNode,
    back: str,
    template: jinja2.Template,
    collapse: str = COLLAPSE_LEAF,
) -> bytes:
    """Render the file at source_path, which lives in ``node``, to output bytes.

    ``back`` is the node's back-reference prefix, used both as the
    template's ``base_path`` and as the prefix of every navigation link.
    """
    source_path = Path(source_path)
    name = source_path.name
    text = _read_source(source_path, passthrough=not is_markdown_file(name))

    if is_markdown_file(name):
        try:
            content = convert_markdown(text)
        except Exception as exc:
            raise ConversionError(source_path, str(exc) or type(exc).__name__) from exc
        logger.debug("Markdown processed: %s", source_path)
    else:
        content = text

    active = target_file(node.relative_path, name)
    navigation = f'<nav class="main-nav">\n{render_nav(root, active, back, collapse)}</nav>\n'
    context = build_context(back, PurePosixPath(name).stem, navigation, content)

    # anything the template raises while rendering concerns this page only
    try:
        rendered = template.render(**context)
    except Exception as exc:
        raise TemplateError(source_path, str(exc) or type(exc).__name__) from exc
    return rendered.encode("utf-8", "surrogateescape")
