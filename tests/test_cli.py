from __future__ import annotations

"""
End-to-end tests for the command-line entry point.
"""

import logging
from pathlib import Path

import pytest

import build_static_site


@pytest.fixture
def config_file(tmp_path: Path, template_path: Path) -> Path:
    path = tmp_path / "site.conf"
    path.write_text(f"template={template_path}\noutput={tmp_path / 'site'}\n", encoding="utf-8")
    return path


def test_main_builds_site(config_file: Path, sample_source: Path, tmp_path: Path, capsys) -> None:
    exit_code = build_static_site.main([str(config_file), str(sample_source)])

    assert exit_code == 0
    assert (tmp_path / "site" / "sub" / "c.html").is_file()
    assert "Site generated at:" in capsys.readouterr().out


def test_main_reports_missing_input(config_file: Path, tmp_path: Path, capsys) -> None:
    exit_code = build_static_site.main([str(config_file), str(tmp_path / "nope")])

    assert exit_code == 1
    assert "Input folder does not exist" in capsys.readouterr().err
    assert not (tmp_path / "site").exists()


def test_main_reports_missing_config(sample_source: Path, tmp_path: Path) -> None:
    assert build_static_site.main([str(tmp_path / "missing.conf"), str(sample_source)]) == 1


def test_partial_success_and_strict_mode(config_file: Path, make_source, tmp_path: Path, capsys) -> None:
    root = make_source({"good.md": "# ok\n"})
    (root / "bad.md").write_bytes(b"\xff\xfe")

    assert build_static_site.main([str(config_file), str(root)]) == 0
    err = capsys.readouterr().err
    assert "bad.md" in err
    assert "Created 1 page(s), skipped 1" in err

    assert build_static_site.main(["--strict", str(config_file), str(root)]) == 1


def test_setup_logging_levels() -> None:
    build_static_site.setup_logging(logging.WARNING)
    logger = logging.getLogger("mdsite")

    assert logger.level == logging.WARNING
    assert len(logger.handlers) == 1
    assert logger.propagate is False

    build_static_site.setup_logging()
    assert logger.level == logging.INFO


def test_default_theme_builds(sample_source: Path, tmp_path: Path) -> None:
    theme = Path(build_static_site.__file__).resolve().parent / "themes" / "default" / "template.html"
    config = tmp_path / "site.conf"
    config.write_text(f"template={theme}\noutput={tmp_path / 'site'}\n", encoding="utf-8")

    assert build_static_site.main(["-q", str(config), str(sample_source)]) == 0

    page = (tmp_path / "site" / "sub" / "b.html").read_text(encoding="utf-8")
    assert '<link href="../assets/style.css" rel="stylesheet">' in page
    assert "<title>b</title>" in page
    assert (tmp_path / "site" / "assets" / "style.css").is_file()


def test_help_describes_the_default_collapse_policy(capsys) -> None:
    with pytest.raises(SystemExit) as info:
        build_static_site.main(["--help"])

    assert info.value.code == 0
    out = capsys.readouterr().out
    assert "collapse=leaf" in out
    assert "collapse=direct" in out
