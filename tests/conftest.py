"""テスト共通 fixture（生成フォント / 設定の隔離）。"""

from __future__ import annotations

import string
from pathlib import Path

import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen

from umbra.core.font_resolver import clear_font_cache
from umbra.core.runtime_config import set_config_path
from umbra.core.text import FontFace

# 生成フォントのメトリクス（units_per_em=1000）。
UNITS_PER_EM = 1000
ADVANCE = 600
NARROW_ADVANCE = 300
NOTDEF_ADVANCE = 500
SPACE_ADVANCE = 250
ASCENT = 800
DESCENT = -200
CAP_HEIGHT = 700


def _box(pen: TTGlyphPen, x0: int, y0: int, x1: int, y1: int) -> None:
    # TrueType の外周は時計回り（y 上向き）。
    pen.moveTo((x0, y0))
    pen.lineTo((x0, y1))
    pen.lineTo((x1, y1))
    pen.lineTo((x1, y0))
    pen.closePath()


def _hole(pen: TTGlyphPen, x0: int, y0: int, x1: int, y1: int) -> None:
    pen.moveTo((x0, y0))
    pen.lineTo((x1, y0))
    pen.lineTo((x1, y1))
    pen.lineTo((x0, y1))
    pen.closePath()


def build_test_font(path: Path) -> Path:
    """A-Z と space を持つ箱型フォントを書き出す。`I` は幅狭、`O` は穴あき。"""

    letters = list(string.ascii_uppercase)
    fb = FontBuilder(UNITS_PER_EM, isTTF=True)
    fb.setupGlyphOrder([".notdef", "space", *letters])
    fb.setupCharacterMap({32: "space", **{ord(c): c for c in letters}})

    glyphs = {}
    metrics = {}

    pen = TTGlyphPen(None)
    _box(pen, 50, 0, 450, CAP_HEIGHT)
    glyphs[".notdef"] = pen.glyph()
    metrics[".notdef"] = (NOTDEF_ADVANCE, 50)

    glyphs["space"] = TTGlyphPen(None).glyph()
    metrics["space"] = (SPACE_ADVANCE, 0)

    for c in letters:
        pen = TTGlyphPen(None)
        if c == "I":
            _box(pen, 50, 0, 250, CAP_HEIGHT)
            metrics[c] = (NARROW_ADVANCE, 50)
        else:
            _box(pen, 50, 0, 550, CAP_HEIGHT)
            if c == "O":
                _hole(pen, 150, 100, 450, 600)
            metrics[c] = (ADVANCE, 50)
        glyphs[c] = pen.glyph()

    fb.setupGlyf(glyphs)
    fb.setupHorizontalMetrics(metrics)
    fb.setupHorizontalHeader(ascent=ASCENT, descent=DESCENT)
    fb.setupNameTable({"familyName": "UmbraTest", "styleName": "Regular"})
    fb.setupOS2(sTypoAscender=ASCENT, sTypoDescender=DESCENT, usWinAscent=ASCENT, usWinDescent=-DESCENT)
    fb.setupPost()
    path.parent.mkdir(parents=True, exist_ok=True)
    fb.save(str(path))
    return path


@pytest.fixture(scope="session")
def test_font_path(tmp_path_factory: pytest.TempPathFactory) -> Path:
    return build_test_font(tmp_path_factory.mktemp("fonts") / "UmbraTest-Regular.ttf")


@pytest.fixture
def face(test_font_path: Path) -> FontFace:
    """60px の生成フォントフェイス（1 unit = 0.06px）。"""
    return FontFace(path=test_font_path, size_px=60.0)


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """config 探索をテスト用ディレクトリへ閉じ込める。"""

    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    set_config_path(None)
    clear_font_cache()
    yield tmp_path
    set_config_path(None)
    clear_font_cache()
