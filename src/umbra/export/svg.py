"""
どこで: `src/umbra/export/svg.py`。
何を: Surface プロトコルを SVG 文書として実装し、1 フレームを SVG へ保存する関数を提供する。
なぜ: interactive 依存なしの headless export を用意し、ライブ描画と同じフレーム手順を検証・保存できるようにするため。
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import numpy as np

from umbra.core.color import RGB01, rgb01_to_hex
from umbra.core.frame import render_frame
from umbra.core.scene import Scene
from umbra.core.settings import EclipseSettings
from umbra.core.surface import Paint, RadialGradient
from umbra.core.text import FontFace

_SVG_NS = "http://www.w3.org/2000/svg"
_FLOAT_DECIMALS = 3


def _fmt(value: float, *, decimals: int = _FLOAT_DECIMALS) -> str:
    """SVG 出力向けに float を決定的な文字列へ変換して返す。"""
    text = f"{float(value):.{int(decimals)}f}"
    if text.startswith("-0") and float(text) == 0.0:
        return text[1:]
    return text


def _subpaths_to_d(subpaths: Sequence[np.ndarray]) -> str:
    """閉じたサブパス列（各 shape (N,2)）を SVG path の d 属性へ変換して返す。"""
    parts: list[str] = []
    for sub in subpaths:
        xy = np.asarray(sub, dtype=np.float64)
        if xy.shape[0] < 2:
            continue
        parts.append(f"M {_fmt(xy[0, 0])} {_fmt(xy[0, 1])}")
        for p in xy[1:]:
            parts.append(f"L {_fmt(p[0])} {_fmt(p[1])}")
        parts.append("Z")
    return " ".join(parts)


class SvgSurface:
    """SVG 要素を積み上げる Surface 実装。

    Notes
    -----
    `begin_frame()` で要素をリセットし、`to_svg()` で文書全体を返す。
    ラベルはフォント輪郭の path として書き出す（閲覧環境のフォントに依存しない）。
    """

    def __init__(self, width: int, height: int) -> None:
        if int(width) <= 0 or int(height) <= 0:
            raise ValueError("SvgSurface の寸法は正の値である必要がある")
        self._width = int(width)
        self._height = int(height)
        self._defs: list[str] = []
        self._body: list[str] = []

    @property
    def size(self) -> tuple[int, int]:
        return (self._width, self._height)

    def resize(self, width: int, height: int) -> None:
        self._width = int(width)
        self._height = int(height)

    def begin_frame(self) -> None:
        self._defs = []
        self._body = []

    def end_frame(self) -> None:
        return

    def _paint_ref(self, paint: Paint) -> str:
        if isinstance(paint, RadialGradient):
            gid = f"g{len(self._defs)}"
            cx, cy = paint.center
            stops = "".join(
                f'<stop offset="{_fmt(o)}" stop-color="{rgb01_to_hex(c)}" />'
                for o, c in paint.stops
            )
            self._defs.append(
                (
                    f'    <radialGradient id="{gid}" gradientUnits="userSpaceOnUse" '
                    f'cx="{_fmt(cx)}" cy="{_fmt(cy)}" r="{_fmt(paint.radius)}">{stops}</radialGradient>'
                )
            )
            return f"url(#{gid})"
        return rgb01_to_hex(paint)

    def fill_rect(self, x: float, y: float, width: float, height: float, paint: Paint) -> None:
        fill = self._paint_ref(paint)
        self._body.append(
            (
                f'  <rect x="{_fmt(x)}" y="{_fmt(y)}" width="{_fmt(width)}" '
                f'height="{_fmt(height)}" fill="{fill}" />'
            )
        )

    def fill_path(self, subpaths: Sequence[np.ndarray], color: RGB01) -> None:
        d = _subpaths_to_d(subpaths)
        if not d:
            return
        self._body.append(f'  <path d="{d}" fill="{rgb01_to_hex(color)}" fill-rule="nonzero" />')

    def fill_text(
        self,
        text: str,
        center: tuple[float, float],
        *,
        face: FontFace,
        color: RGB01,
    ) -> None:
        self.fill_path(face.outline(text, center), color)

    def to_svg(self) -> str:
        """現在のフレームを SVG 文書として返す。"""
        lines: list[str] = []
        lines.append('<?xml version="1.0" encoding="UTF-8"?>')
        lines.append(
            (
                f'<svg xmlns="{_SVG_NS}" viewBox="0 0 {self._width} {self._height}" '
                f'width="{self._width}" height="{self._height}">'
            )
        )
        if self._defs:
            lines.append("  <defs>")
            lines.extend(self._defs)
            lines.append("  </defs>")
        lines.extend(self._body)
        lines.append("</svg>")
        return "\n".join(lines) + "\n"

    def save(self, path: str | Path) -> Path:
        """現在のフレームを保存し、保存先パスを返す。"""
        _path = Path(path)
        _path.parent.mkdir(parents=True, exist_ok=True)
        with _path.open("w", encoding="utf-8", newline="\n") as f:
            f.write(self.to_svg())
        return _path


def export_frame_svg(
    scene: Scene,
    light: tuple[float, float],
    path: str | Path,
    *,
    settings: EclipseSettings,
    face: FontFace,
    canvas_size: tuple[int, int] | None = None,
) -> Path:
    """1 フレームを SVG として保存する。

    Parameters
    ----------
    scene : Scene
        描画するシーン。
    light : tuple[float, float]
        光源位置。
    path : str or Path
        出力先パス。
    settings : EclipseSettings
        色・投影距離などの定数。
    face : FontFace
        ラベルのフェイス。
    canvas_size : tuple[int, int] or None, optional
        出力寸法。None ならシーンのビューポート寸法を使う。

    Returns
    -------
    Path
        保存先パス。

    Raises
    ------
    ValueError
        寸法が正でない場合。
    """

    if canvas_size is None:
        canvas_size = (int(round(scene.width)), int(round(scene.height)))
    canvas_w, canvas_h = canvas_size
    surface = SvgSurface(int(canvas_w), int(canvas_h))
    surface.begin_frame()
    render_frame(surface, scene, light, settings=settings, face=face)
    surface.end_frame()
    return surface.save(path)


__all__ = ["SvgSurface", "export_frame_svg"]
