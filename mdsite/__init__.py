"""Static site generator for a folder of Markdown (and raw HTML) pages."""

from .config import Config, load_config, parse_config
from .errors import ConfigError, ConversionError, FilesystemError, PageError, SiteError, TemplateError
from .nav import render_nav
from .paths import back_prefix, target_file, target_filename
from .render import load_template, render_page
from .site import BuildReport, PageFailure, generate_site, run
from .tree import DirectoryNode, build_tree

__version__ = "0.5.0"

__all__ = [
    "BuildReport",
    "Config",
    "ConfigError",
    "ConversionError",
    "DirectoryNode",
    "FilesystemError",
    "PageError",
    "PageFailure",
    "SiteError",
    "TemplateError",
    "back_prefix",
    "build_tree",
    "generate_site",
    "load_config",
    "load_template",
    "parse_config",
    "render_nav",
    "render_page",
    "run",
    "target_file",
    "target_filename",
]
