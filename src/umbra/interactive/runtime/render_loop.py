# どこで: `src/umbra/interactive/runtime/render_loop.py`。
# 何を: フレーム要求 → 描画 → 次フレーム要求 を繰り返す描画ループと、その start/stop/reset/resize を提供する。
# なぜ: 「次フレームで呼んで」という外部プリミティブ（FrameScheduler）の上に、取り消し可能なアニメーションを組み立てるため。

from __future__ import annotations

import logging
from typing import Any, Callable, Protocol

import numpy as np

from umbra.core.frame import render_frame
from umbra.core.light import LightSource
from umbra.core.scene import Scene, generate_scene
from umbra.core.settings import EclipseSettings
from umbra.core.surface import Surface
from umbra.core.text import FontFace
from umbra.interactive.runtime.perf import PerfCollector

_logger = logging.getLogger(__name__)

FrameCallback = Callable[[float], None]


class FrameScheduler(Protocol):
    """「次のフレームで 1 回だけ呼ぶ」スケジューリングと、その取り消し。"""

    def request_frame(self, callback: FrameCallback) -> Any:
        """`callback(dt)` を次フレームで 1 回呼ぶよう予約し、取り消し用ハンドルを返す。"""
        ...

    def cancel(self, handle: Any) -> None:
        """予約済みのフレームを取り消す。取り消し後に callback は呼ばれない。"""
        ...


class RenderLoop:
    """光源追従の影描画を毎フレーム繰り返すループ。

    Notes
    -----
    - 共有状態（光源・シーン）の書き手は入力ハンドラと (再)初期化、読み手はフレーム冒頭のみ。
    - 予約中のフレームは常に高々 1 つ。stop/resize/reset は予約を明示的に取り消す。
    - surface が None（描画先が用意できていない）の場合、start は何もしない。
    """

    def __init__(
        self,
        surface: Surface | None,
        scheduler: FrameScheduler,
        *,
        settings: EclipseSettings,
        face: FontFace,
        light: LightSource | None = None,
        rng: np.random.Generator | None = None,
        perf: PerfCollector | None = None,
    ) -> None:
        self._surface = surface
        self._scheduler = scheduler
        self._settings = settings
        self._face = face
        self._light = light if light is not None else LightSource()
        self._rng = rng if rng is not None else np.random.default_rng()
        self._perf = perf if perf is not None else PerfCollector(enabled=False)

        self._scene: Scene | None = None
        self._pending: Any | None = None
        self._running = False
        self._frame_count = 0

    # ---------- 状態参照 ----------
    @property
    def running(self) -> bool:
        return self._running

    @property
    def scene(self) -> Scene | None:
        return self._scene

    @property
    def light(self) -> LightSource:
        return self._light

    @property
    def frame_count(self) -> int:
        """描画済みフレーム数。"""
        return int(self._frame_count)

    @property
    def has_pending_frame(self) -> bool:
        return self._pending is not None

    # ---------- ライフサイクル ----------
    def start(self) -> None:
        """初期化して最初のフレームを予約する。"""

        if self._surface is None:
            _logger.warning("描画先が無いため描画ループを開始しません")
            return
        if self._running:
            return
        if self._scene is None:
            self._initialize()
        self._running = True
        _logger.debug("render loop started: size=%s", self._surface.size)
        self._request_next()

    def stop(self) -> None:
        """予約中のフレームを取り消し、以後の再予約を止める（teardown）。"""

        was_running = self._running
        self._running = False
        self._cancel_pending()
        if was_running:
            _logger.debug("render loop stopped after %d frames", self._frame_count)

    def reset(self) -> None:
        """同じビューポートでシーンを作り直す（新しいゆらぎ）。光源位置は変えない。"""

        if self._surface is None:
            return
        self._cancel_pending()
        self._scene = self._build_scene()
        _logger.debug("scene regenerated: %d obstacles", len(self._scene))
        if self._running:
            self._request_next()

    def resize(self, width: int, height: int) -> None:
        """描画先の寸法を変え、シーンと光源を新しいビューポートで初期化し直す。"""

        if self._surface is None:
            return
        self._cancel_pending()
        self._surface.resize(int(width), int(height))
        self._initialize()
        _logger.debug("render loop resized: size=%s", self._surface.size)
        if self._running:
            self._request_next()

    def move_light(self, x: float, y: float) -> None:
        """ポインタ位置へ光源を移す（次フレームから反映）。"""

        self._light.move_to(x, y)

    def snapshot(self) -> tuple[Scene, tuple[float, float]] | None:
        """現在のシーンと光源位置を返す（書き出し用）。未初期化なら None。"""

        if self._scene is None:
            return None
        return self._scene, self._light.position

    # ---------- 内部 ----------
    def _build_scene(self) -> Scene:
        assert self._surface is not None
        w, h = self._surface.size
        s = self._settings
        return generate_scene(
            float(w),
            float(h),
            words=s.words,
            measure=self._face.measure,
            cols=s.cols,
            rows=s.rows,
            label_height=s.label_height,
            jitter=s.jitter,
            rng=self._rng,
        )

    def _initialize(self) -> None:
        """シーン生成と光源の中心リセットをまとめて行う。"""

        assert self._surface is not None
        w, h = self._surface.size
        self._scene = self._build_scene()
        self._light.reset_to_center(w, h)

    def _request_next(self) -> None:
        self._pending = self._scheduler.request_frame(self._on_frame)

    def _cancel_pending(self) -> None:
        pending = self._pending
        self._pending = None
        if pending is not None:
            self._scheduler.cancel(pending)

    def _on_frame(self, _dt: float = 0.0) -> None:
        self._pending = None
        surface = self._surface
        if not self._running or surface is None:
            return

        # フレーム冒頭で 1 度だけ読み、以後はローカル変数だけを参照する。
        scene = self._scene
        light = self._light.position
        if scene is None:
            return

        perf = self._perf
        with perf.frame():
            with perf.section("draw"):
                surface.begin_frame()
                render_frame(surface, scene, light, settings=self._settings, face=self._face)
            with perf.section("present"):
                surface.end_frame()
        self._frame_count += 1

        if self._running and self._pending is None:
            self._request_next()


__all__ = ["FrameCallback", "FrameScheduler", "RenderLoop"]
