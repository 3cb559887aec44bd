"""Drive a full site build over a scanned source tree."""

from __future__ import annotations

import logging
import os
import shutil
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Iterable, List

import jinja2

from .config import Config
from .errors import FilesystemError, PageError
from .nav import COLLAPSE_LEAF
from .paths import back_prefix, target_filename
from .render import load_template, render_page
from .tree import DEFAULT_EXTENSIONS, DirectoryNode, build_tree

logger = logging.getLogger(__name__)

ASSETS_DIRNAME = "assets"


# -- results --
@dataclass(frozen=True)
class PageFailure:
    source: Path
    reason: str


@dataclass
class BuildReport:
    """Pages written (relative to the output root) and pages skipped."""

    created: List[PurePosixPath] = field(default_factory=list)
    failures: List[PageFailure] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.created)


# -- output directory --
def _is_within(path: Path, parent: Path) -> bool:
    try:
        path.relative_to(parent)
        return True
    except ValueError:
        return False


def prepare_output_dir(output_root: Path, source_root: Path) -> None:
    """Wipe and recreate output_root. Every run is a full rebuild."""
    output_root = Path(output_root)
    if _is_within(Path(source_root).resolve(), output_root.resolve()):
        raise FilesystemError(
            f"Output folder {output_root} contains the input folder; refusing to delete it", output_root
        )
    try:
        if output_root.exists():
            shutil.rmtree(output_root)
        output_root.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise FilesystemError(f"Could not prepare output folder: {output_root} ({exc})", output_root) from exc


# -- assets --
def copy_theme_assets(template_path: Path, output_root: Path) -> bool:
    """Copy the 'assets' folder next to the template into output_root/assets.

    Existing files are overwritten. Returns False when there is nothing to
    copy or the copy failed; a failed copy is logged, not fatal.
    """
    source_assets = Path(template_path).parent / ASSETS_DIRNAME
    dest_assets = Path(output_root) / ASSETS_DIRNAME

    if not source_assets.is_dir():
        logger.info("No assets folder found at: %s (skipping copy)", source_assets)
        return False

    logger.info("Found assets folder: %s", source_assets)
    try:
        shutil.copytree(source_assets, dest_assets, dirs_exist_ok=True)
    except (OSError, shutil.Error) as exc:
        logger.error("Error copying assets: %s", exc)
        return False
    logger.info("Assets successfully copied to: %s", dest_assets)
    return True


def copy_source_assets(source_root: Path, output_root: Path, extensions: Iterable[str] = DEFAULT_EXTENSIONS) -> int:
    """Copy all non-content files (images, downloads...), preserving structure.

    Hidden entries, symlinked directories and the output folder itself are
    skipped. Returns the number of files copied.
    """
    source_root = Path(source_root)
    output_root = Path(output_root)
    output_resolved = output_root.resolve()
    exts = tuple(extensions)
    copied = 0

    for dirpath, dirnames, filenames in os.walk(source_root):
        current_dir = Path(dirpath)
        dirnames[:] = sorted(
            d for d in dirnames if not d.startswith(".") and (current_dir / d).resolve() != output_resolved
        )
        for fname in sorted(filenames):
            src = current_dir / fname
            if fname.startswith(".") or src.suffix in exts or not src.is_file():
                continue
            dst = output_root / src.relative_to(source_root)
            try:
                dst.parent.mkdir(parents=True, exist_ok=True)
                shutil.copy2(src, dst)
            except OSError as exc:
                raise FilesystemError(f"Could not copy {src} to {dst} ({exc})", src) from exc
            copied += 1

    logger.info("Copied %d asset file(s) from %s", copied, source_root)
    return copied


# -- pages --
def _write_page(path: Path, data: bytes) -> None:
    try:
        path.write_bytes(data)
    except OSError as exc:
        raise FilesystemError(f"Could not write file: {path} ({exc.strerror or exc})", path) from exc


def run(
    tree: DirectoryNode,
    source_root: Path,
    output_root: Path,
    template: jinja2.Template,
    collapse: str = COLLAPSE_LEAF,
) -> BuildReport:
    """Render every file of tree into the mirrored location under output_root.

    Per-page conversion and template errors are logged and recorded in the
    report; traversal carries on with the next file.
    """
    source_root = Path(source_root)
    output_root = Path(output_root)
    report = BuildReport()

    def process(node: DirectoryNode) -> None:
        out_dir = output_root / node.relative_path
        try:
            out_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise FilesystemError(f"Could not create directory: {out_dir} ({exc})", out_dir) from exc
        back = back_prefix(node.relative_path)

        for name in node.shadowed:
            source_path = source_root / node.relative_path / name
            reason = f"output name {target_filename(name)} is already produced by another page"
            logger.warning("Skipped %s: %s", source_path, reason)
            report.failures.append(PageFailure(source_path, reason))

        for name in node.files:
            source_path = source_root / node.relative_path / name
            relative_target = node.relative_path / target_filename(name)
            try:
                data = render_page(source_path, node, tree, back, template, collapse)
            except PageError as exc:
                logger.warning("Skipped %s: %s", source_path, exc.reason)
                report.failures.append(PageFailure(source_path, f"{exc.kind}: {exc.reason}"))
                continue
            _write_page(output_root / relative_target, data)
            report.created.append(relative_target)
            logger.info("Created: %s", output_root / relative_target)

        for child in node.children:
            process(child)

    process(tree)
    return report


def generate_site(config: Config, source_root: Path) -> BuildReport:
    """Full run: scan, load the template, rebuild the output folder, render.

    Anything fatal (missing input or template, unparsable template) is raised
    before the output folder is touched.
    """
    source_root = Path(source_root)
    if not source_root.is_dir():
        raise FilesystemError(f"Input folder does not exist: {source_root}", source_root)
    if not config.template_path.is_file():
        raise FilesystemError(f"Template file does not exist: {config.template_path}", config.template_path)

    logger.info("Scanning structure (%s)...", ", ".join(config.extensions))
    tree = build_tree(source_root, config.extensions, exclude=[config.output_dir])
    logger.info("Found %d page(s)", tree.file_count())

    logger.info("Loading template...")
    template = load_template(config.template_path)

    prepare_output_dir(config.output_dir, source_root)
    copy_theme_assets(config.template_path, config.output_dir)
    if config.copy_source_assets:
        copy_source_assets(source_root, config.output_dir, config.extensions)

    logger.info("Generating pages...")
    return run(tree, source_root, config.output_dir, template, config.collapse)
