#!/usr/bin/env python3
"""
Static site generator for a folder of Markdown pages.

Features:
- Converts all .md files under the input folder to .html in the output folder
- Optional raw HTML passthrough (extensions=.md,.htm in the config)
- Preserves directory structure; output is rebuilt from scratch on every run
- Site-wide navigation menu on every page with the current page highlighted
- Pages are rendered through a Jinja2 template (variables: base_path, title,
  navigation, content); an 'assets' folder next to the template is copied along

Usage:
  python build_static_site.py site.conf ./content
  mdsite site.conf ./content --strict

site.conf:
  template=themes/plain/template.html
  output=output_site
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from mdsite import __version__
from mdsite.config import load_config
from mdsite.errors import SiteError
from mdsite.site import generate_site

logger = logging.getLogger("mdsite")


# -- logging --
def setup_logging(level: int = logging.INFO) -> None:
    """Log to stderr through a single handler on the 'mdsite' logger."""
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.handlers[:] = [handler]
    logger.setLevel(level)
    logger.propagate = False


# -- CLI --
def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Generate a static site from a folder of Markdown pages.",
        epilog=(
            "The menu collapses a folder into a single link only when it holds exactly one page "
            "and no subfolders (collapse=leaf). Set collapse=direct in the config to collapse every "
            "folder with a single direct page, even one that has subfolders."
        ),
    )
    parser.add_argument("config", type=Path, help="Path to the key=value configuration file")
    parser.add_argument("input", type=Path, help="Folder containing the source pages")
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Show debug output")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only show warnings and errors")
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with status 1 if any page was skipped",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    if args.verbose:
        setup_logging(logging.DEBUG)
    elif args.quiet:
        setup_logging(logging.WARNING)
    else:
        setup_logging()

    try:
        config = load_config(args.config)
        report = generate_site(config, args.input)
    except SiteError as exc:
        logger.error("Error: %s", exc)
        return 1

    logger.info("Created %d page(s), skipped %d", report.count, len(report.failures))
    print(f"Site generated at: {config.output_dir.resolve()}")

    if args.strict and report.failures:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
