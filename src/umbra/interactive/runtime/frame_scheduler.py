# どこで: `src/umbra/interactive/runtime/frame_scheduler.py`。
# 何を: pyglet.clock を使った「次フレームで 1 回呼ぶ / その取り消し」プリミティブを提供する。
# なぜ: pyglet の unschedule は関数同一性で外すため、予約ごとに別の callable を作り、取り消しを正確にするため。

from __future__ import annotations

import pyglet

from umbra.interactive.runtime.render_loop import FrameCallback


class _ScheduledFrame:
    """1 回分の予約。pyglet.clock へ登録する callable 本体。"""

    __slots__ = ("_callback", "cancelled")

    def __init__(self, callback: FrameCallback) -> None:
        self._callback = callback
        self.cancelled = False

    def __call__(self, dt: float) -> None:
        if self.cancelled:
            return
        self.cancelled = True
        self._callback(float(dt))


class PygletFrameScheduler:
    """pyglet.clock.schedule_once による FrameScheduler 実装。

    Notes
    -----
    `fps > 0` の場合は 1/fps 秒後、`fps <= 0` の場合は次のイベントループ周回で呼ぶ。
    vsync 有効時は flip が表示周期で待つため、実際の周期は表示側に揃う。
    """

    def __init__(self, *, fps: float = 60.0) -> None:
        self._fps = float(fps)

    def _delay(self) -> float:
        if self._fps <= 0:
            return 0.0
        return 1.0 / self._fps

    def request_frame(self, callback: FrameCallback) -> _ScheduledFrame:
        handle = _ScheduledFrame(callback)
        pyglet.clock.schedule_once(handle, self._delay())
        return handle

    def cancel(self, handle: _ScheduledFrame) -> None:
        handle.cancelled = True
        pyglet.clock.unschedule(handle)


__all__ = ["PygletFrameScheduler"]
