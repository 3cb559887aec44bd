"""Read the key=value site configuration file.

Example::

    # theme and output
    template=themes/plain/template.html
    output=output_site
    extensions=.md,.htm
    copy_source_assets=false
    collapse=leaf
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Tuple

from .errors import ConfigError
from .nav import COLLAPSE_LEAF, COLLAPSE_POLICIES
from .tree import DEFAULT_EXTENSIONS

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_DIR = Path("output_site")

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class Config:
    template_path: Path
    output_dir: Path = DEFAULT_OUTPUT_DIR
    extensions: Tuple[str, ...] = DEFAULT_EXTENSIONS
    copy_source_assets: bool = False
    collapse: str = COLLAPSE_LEAF


def _parse_extensions(value: str) -> Tuple[str, ...]:
    exts = []
    for item in value.split(","):
        item = item.strip()
        if not item:
            continue
        exts.append(item if item.startswith(".") else f".{item}")
    if not exts:
        raise ConfigError("'extensions' must name at least one file extension")
    return tuple(dict.fromkeys(exts))


def _parse_bool(key: str, value: str) -> bool:
    lowered = value.lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ConfigError(f"'{key}' must be true or false, got {value!r}")


def parse_config(text: str) -> Config:
    """Parse configuration text. Lines are split at the first '='."""
    values: Dict[str, str] = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        values[key.strip()] = value.strip()

    known = {"template", "output", "extensions", "copy_source_assets", "collapse"}
    for key in values.keys() - known:
        logger.debug("Ignoring unknown config key: %s", key)

    template = values.get("template")
    if not template:
        raise ConfigError("Configuration is missing the 'template' entry")

    collapse = values.get("collapse", COLLAPSE_LEAF) or COLLAPSE_LEAF
    if collapse not in COLLAPSE_POLICIES:
        raise ConfigError(f"'collapse' must be one of {', '.join(COLLAPSE_POLICIES)}, got {collapse!r}")

    return Config(
        template_path=Path(template),
        output_dir=Path(values["output"]) if values.get("output") else DEFAULT_OUTPUT_DIR,
        extensions=_parse_extensions(values["extensions"]) if "extensions" in values else DEFAULT_EXTENSIONS,
        copy_source_assets=_parse_bool("copy_source_assets", values.get("copy_source_assets", "")),
        collapse=collapse,
    )


def load_config(config_path: Path) -> Config:
    try:
        text = Path(config_path).read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ConfigError(f"Configuration file not found: {config_path}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Could not read configuration file: {config_path} ({exc})") from exc
    return parse_config(text)
