"""
どこで: `src/umbra/core/text.py`。ラベル文字列のフォントメトリクスと輪郭生成。
何を: fontTools でフォントを読み、文字列の横幅計測と、塗りつぶし用の閉じたグリフ輪郭（px 座標）を提供する。
なぜ: シーン生成時の計測と描画時の塗りを同じフォント・同じ advance 規則に揃え、影とラベルの寸法ずれを防ぐため。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any

import numpy as np
from fontPens.flattenPen import FlattenPen  # type: ignore[import-untyped]
from fontTools.pens.recordingPen import (  # type: ignore[import-untyped]
    DecomposingRecordingPen,
    RecordingPen,
)
from fontTools.ttLib import TTFont  # type: ignore[import-untyped]

from umbra.core.font_resolver import resolve_first_font
from umbra.core.settings import EclipseSettings

logger = logging.getLogger(__name__)

_Contours = tuple[np.ndarray, ...]


@lru_cache(maxsize=16)
def _open_font(path: str, font_index: int) -> Any:
    """TTFont を開く（パスと subfont 番号ごとにプロセス内で共有）。"""
    if path.lower().endswith(".ttc"):
        return TTFont(path, fontNumber=max(0, font_index))
    return TTFont(path)


def _pen_value_to_contours(value: list[tuple[str, tuple]]) -> _Contours:
    """平坦化済み `RecordingPen.value` を、始点で閉じた輪郭（フォント単位、Y+上）へ変換する。"""

    out: list[np.ndarray] = []
    points: list[tuple[float, float]] = []

    def close() -> None:
        if len(points) >= 3:
            if points[0] != points[-1]:
                points.append(points[0])
            arr = np.asarray(points, dtype=np.float64)
            arr.setflags(write=False)
            out.append(arr)
        points.clear()

    for op, args in value:
        if op == "moveTo":
            close()
            points.append((float(args[0][0]), float(args[0][1])))
        elif op == "lineTo":
            points.append((float(args[0][0]), float(args[0][1])))
        elif op in ("closePath", "endPath"):
            close()
    close()
    return tuple(out)


@lru_cache(maxsize=4096)
def _glyph_contours(path: str, font_index: int, glyph_name: str, seg_len_units: float) -> _Contours:
    """1 グリフの平坦化済み輪郭を返す。描けないグリフは空。"""

    glyph_set = _open_font(path, font_index).getGlyphSet()
    if glyph_name not in glyph_set:
        logger.warning("Glyph '%s' not found in font '%s'", glyph_name, path)
        return ()

    recorded = DecomposingRecordingPen(glyph_set, reverseFlipped=True)
    try:
        glyph_set[glyph_name].draw(recorded)
    except recorded.MissingComponentError:  # type: ignore[attr-defined]
        logger.warning("Glyph '%s' has missing components in font '%s'", glyph_name, path)
        return ()

    flat = RecordingPen()
    recorded.replay(FlattenPen(flat, approximateSegmentLength=seg_len_units))
    return _pen_value_to_contours(flat.value)


@dataclass(frozen=True, slots=True)
class FontFace:
    """1 つのフォントファイルを固定 px サイズで扱うフェイス。

    Parameters
    ----------
    path : Path
        フォントファイル（.ttf/.otf/.ttc）。
    size_px : float
        1em のピクセル寸法。
    font_index : int
        `.ttc` の subfont 番号。
    flat_seg_len_em : float
        曲線平坦化の近似セグメント長（em 比）。
    """

    path: Path
    size_px: float
    font_index: int = 0
    flat_seg_len_em: float = 0.01

    @property
    def _font_key(self) -> tuple[str, int]:
        return str(Path(self.path).resolve()), int(self.font_index)

    def _tt_font(self) -> Any:
        return _open_font(*self._font_key)

    @property
    def units_per_em(self) -> float:
        return float(self._tt_font()["head"].unitsPerEm)

    @property
    def scale(self) -> float:
        """フォント単位 → px の倍率。"""
        return float(self.size_px) / self.units_per_em

    def _glyph_for(self, char: str) -> str:
        name = (self._tt_font().getBestCmap() or {}).get(ord(char))
        if name is not None:
            return name
        # 未収録文字はブラウザ同様 .notdef（豆腐）の advance で詰める。
        logger.warning(
            "Character '%s' (U+%04X) not found in font '%s'", char, ord(char), str(self.path)
        )
        return ".notdef"

    def _advance_units(self, glyph_name: str) -> float:
        advance, _lsb = self._tt_font()["hmtx"].metrics.get(glyph_name, (0, 0))
        return float(advance)

    def measure(self, text: str) -> float:
        """文字列の横幅（px）を advance の合計として返す。"""

        return sum(self._advance_units(self._glyph_for(ch)) for ch in str(text)) * self.scale

    def middle_offset_px(self) -> float:
        """ベースラインから em ボックス中央までの距離（px、上向き正）を返す。"""

        hhea = self._tt_font()["hhea"]
        return (float(hhea.ascent) + float(hhea.descent)) / 2.0 * self.scale

    def outline(self, text: str, center: tuple[float, float]) -> list[np.ndarray]:
        """文字列を `center` に中央揃え・middle ベースラインで置いた閉輪郭列を返す。

        Returns
        -------
        list[np.ndarray]
            px 座標（y 下向き）の float64 shape (N, 2) 列。各輪郭は始点で閉じる。
            non-zero で塗るとグリフの穴が抜ける。
        """

        placed, width_units = _label_layout(self, str(text))
        s = self.scale
        left = float(center[0]) - width_units * s / 2.0
        baseline = float(center[1]) + self.middle_offset_px()

        # フォント単位（Y+上）→ px（y 下向き）。
        to_px = np.array([s, -s], dtype=np.float64)
        origin = np.array([left, baseline], dtype=np.float64)
        return [origin + (contour + np.array([dx, 0.0])) * to_px for dx, contour in placed]


@lru_cache(maxsize=256)
def _label_layout(face: FontFace, text: str) -> tuple[tuple[tuple[float, np.ndarray], ...], float]:
    """各グリフ輪郭とその pen 位置（フォント単位）の組、および文字列全体の advance を返す。"""

    path, index = face._font_key
    seg_len_units = max(1.0, float(face.flat_seg_len_em) * face.units_per_em)
    placed: list[tuple[float, np.ndarray]] = []
    pen_x = 0.0
    for ch in text:
        name = face._glyph_for(ch)
        if not ch.isspace():
            placed.extend((pen_x, c) for c in _glyph_contours(path, index, name, seg_len_units))
        pen_x += face._advance_units(name)
    return tuple(placed), pen_x


def load_font_face(settings: EclipseSettings) -> FontFace:
    """設定のフォント候補を解決し、ラベル用 FontFace を返す。

    Raises
    ------
    FileNotFoundError
        どの候補フォントも見つからない場合。
    """

    path = resolve_first_font(settings.font_candidates())
    return FontFace(path=path, size_px=float(settings.font_size_px))


__all__ = ["FontFace", "load_font_face"]
