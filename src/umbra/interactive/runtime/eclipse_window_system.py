# どこで: `src/umbra/interactive/runtime/eclipse_window_system.py`。
# 何を: 描画ウィンドウ・GLSurface・RenderLoop を束ね、ポインタ/リサイズ/キー入力を描画ループへ配線する。
# なぜ: `src/umbra/api/runner.py` の `run()` を「配線」に寄せ、ウィンドウ依存の責務を 1 箇所へ閉じ込めるため。

from __future__ import annotations

import logging
import time
from pathlib import Path

import numpy as np
from pyglet.window import Window, key

from umbra.core.light import LightSource
from umbra.core.runtime_config import output_root_dir
from umbra.core.settings import EclipseSettings
from umbra.core.text import FontFace
from umbra.export.image import png_output_size, rasterize_svg_to_png
from umbra.export.svg import export_frame_svg
from umbra.interactive.draw_window import create_draw_window
from umbra.interactive.gl.gl_surface import GLSurface
from umbra.interactive.runtime.frame_scheduler import PygletFrameScheduler
from umbra.interactive.runtime.perf import PerfCollector
from umbra.interactive.runtime.render_loop import RenderLoop

_logger = logging.getLogger(__name__)


def _timestamp() -> str:
    return time.strftime("%Y%m%d_%H%M%S")


class EclipseWindowSystem:
    """影描画ウィンドウのサブシステム。

    Notes
    -----
    ウィンドウを作れない環境（ディスプレイ無しなど）では `window` / `surface` が None になり、
    描画ループは start しても何もしない。
    """

    def __init__(
        self,
        *,
        settings: EclipseSettings,
        face: FontFace,
        canvas_size: tuple[int, int],
        window_pos: tuple[int, int] | None = None,
        fps: float = 60.0,
        seed: int | None = None,
    ) -> None:
        self._settings = settings
        self._face = face

        self.window: Window | None = None
        self.surface: GLSurface | None = None
        try:
            self.window = create_draw_window(canvas_size, position=window_pos)
            self.surface = GLSurface(self.window)
        except Exception:
            # 描画先が用意できなければ、ループは開始しない（no-op）。
            _logger.warning("描画ウィンドウを作成できませんでした", exc_info=True)
            if self.window is not None:
                self.window.close()
            self.window = None
            self.surface = None

        w, h = self.surface.size if self.surface is not None else canvas_size
        self.loop = RenderLoop(
            self.surface,
            PygletFrameScheduler(fps=float(fps)),
            settings=settings,
            face=face,
            light=LightSource.centered(w, h),
            rng=np.random.default_rng(seed),
            perf=PerfCollector.from_env(fps=float(fps)),
        )

        if self.window is not None:
            self.window.push_handlers(
                on_mouse_motion=self._on_mouse_motion,
                on_mouse_drag=self._on_mouse_drag,
                on_resize=self._on_resize,
                on_key_press=self._on_key_press,
                on_close=self._on_close,
            )

    # ---------- 入力 ----------
    def _pointer_to_surface(self, x: float, y: float) -> tuple[float, float]:
        # pyglet は左下原点（y 上向き）。Surface は左上原点（y 下向き）。
        assert self.window is not None
        return float(x), float(self.window.height) - float(y)

    def _on_mouse_motion(self, x: int, y: int, _dx: int, _dy: int) -> None:
        self.loop.move_light(*self._pointer_to_surface(x, y))

    def _on_mouse_drag(
        self, x: int, y: int, _dx: int, _dy: int, _buttons: int, _modifiers: int
    ) -> None:
        self.loop.move_light(*self._pointer_to_surface(x, y))

    def _on_resize(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            # 最小化中は 0 が来る。寸法が戻ったときに作り直す。
            return
        self.loop.resize(int(width), int(height))

    def _on_key_press(self, symbol: int, _modifiers: int) -> None:
        if symbol == key.R:
            self.loop.reset()
            return
        if symbol == key.S:
            try:
                path = self.save_svg()
            except Exception:
                _logger.exception("Failed to save SVG")
                return
            if path is not None:
                print(f"Saved SVG: {path}")
            return
        if symbol == key.P:
            try:
                path = self.save_png()
            except Exception as e:
                _logger.exception("Failed to save PNG")
                print(f"Failed to save PNG: {e}")
                return
            if path is not None:
                print(f"Saved PNG: {path}")

    def _on_close(self) -> None:
        # 閉じられたウィンドウへ描かないよう、予約中フレームを先に取り消す。
        self.loop.stop()

    # ---------- 書き出し ----------
    def save_svg(self, path: str | Path | None = None) -> Path | None:
        """現在のフレームを SVG として保存し、保存先パスを返す。未初期化なら None。"""

        snap = self.loop.snapshot()
        if snap is None:
            return None
        scene, light = snap
        if path is None:
            path = output_root_dir() / "svg" / f"eclipse_{_timestamp()}.svg"
        return export_frame_svg(scene, light, path, settings=self._settings, face=self._face)

    def save_png(self, path: str | Path | None = None) -> Path | None:
        """現在のフレームを SVG 経由で PNG として保存し、保存先パスを返す。"""

        stamp = _timestamp()
        svg_path = self.save_svg(output_root_dir() / "svg" / f"eclipse_{stamp}.svg")
        if svg_path is None:
            return None
        snap = self.loop.snapshot()
        assert snap is not None
        scene, _light = snap
        if path is None:
            path = output_root_dir() / "png" / f"eclipse_{stamp}.png"
        canvas_size = (int(round(scene.width)), int(round(scene.height)))
        return rasterize_svg_to_png(
            svg_path,
            path,
            output_size=png_output_size(canvas_size),
        )

    def close(self) -> None:
        """描画ループを止め、GPU / window 資源を解放する。"""

        self.loop.stop()
        surface = self.surface
        self.surface = None
        if surface is not None:
            try:
                surface.release()
            except Exception:
                _logger.exception("Failed to release GL surface")
        window = self.window
        self.window = None
        if window is not None:
            window.close()


__all__ = ["EclipseWindowSystem"]
