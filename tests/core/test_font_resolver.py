from __future__ import annotations

import logging
import shutil
from pathlib import Path

import pytest

from umbra.core.font_resolver import find_font_path, resolve_first_font, resolve_font_path
from umbra.core.runtime_config import set_config_path


@pytest.fixture
def font_dir(isolated_config: Path, test_font_path: Path) -> Path:
    """生成フォントを置いた font_dirs を config へ登録する。"""

    d = isolated_config / "fonts"
    d.mkdir()
    shutil.copy(test_font_path, d / "UmbraTest-Regular.ttf")
    cfg = isolated_config / "config.yaml"
    cfg.write_text(f'paths:\n  font_dirs:\n    - "{d}"\n', encoding="utf-8")
    set_config_path(cfg)
    return d


def test_existing_path_is_resolved_directly(isolated_config: Path, test_font_path: Path) -> None:
    assert resolve_font_path(str(test_font_path)) == test_font_path.resolve()


def test_file_name_in_font_dirs_is_resolved(font_dir: Path) -> None:
    assert resolve_font_path("UmbraTest-Regular.ttf") == (font_dir / "UmbraTest-Regular.ttf").resolve()


def test_stem_match_ignores_case_spaces_and_separators(font_dir: Path) -> None:
    expected = (font_dir / "UmbraTest-Regular.ttf").resolve()
    assert resolve_font_path("umbratest regular") == expected
    assert resolve_font_path("UMBRATEST_REGULAR") == expected


def test_partial_match_is_used_last(font_dir: Path) -> None:
    assert resolve_font_path("UmbraTest") == (font_dir / "UmbraTest-Regular.ttf").resolve()


def test_first_font_falls_back_with_warning(font_dir: Path, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="umbra.core.font_resolver"):
        got = resolve_first_font(["___no_such_font___", "UmbraTest"])
    assert got == (font_dir / "UmbraTest-Regular.ttf").resolve()
    assert any("___no_such_font___" in r.getMessage() for r in caplog.records)


def test_unresolved_font_error_message_contains_hints(font_dir: Path) -> None:
    assert find_font_path("___no_such_font___") is None
    with pytest.raises(FileNotFoundError) as excinfo:
        resolve_font_path("___no_such_font___")
    msg = str(excinfo.value)
    assert "___no_such_font___" in msg
    assert "font_dirs" in msg
    assert "searched_dirs=" in msg
    assert str(font_dir) in msg
