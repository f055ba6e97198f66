# どこで: `src/umbra/interactive/runtime/window_loop.py`。
# 何を: 描画ウィンドウを 1 つの app loop（`pyglet.app.run()`）で回す最小ランナーを提供する。
# なぜ: OS 依存のイベント配送を pyglet に任せ、手動 `dispatch_events()` 由来の入力取りこぼしを避けるため。

from __future__ import annotations

from typing import Any

import pyglet


class WindowLoop:
    """ウィンドウが閉じられるまで pyglet のイベントループを回す。

    フレームの予約は RenderLoop（pyglet.clock.schedule_once）が行うため、
    ここでは終了条件の配線とループ実行だけを担当する。
    """

    def __init__(self, window: Any) -> None:
        # 注: pyglet の Window 型は環境/バージョン差があるため Any に寄せる。
        self._window = window

    def run(self) -> None:
        """ウィンドウが閉じられるまでループを実行する。"""

        def request_exit(*_: object) -> None:
            # pyglet の on_close から呼ばれるコールバックは引数が来る場合があるため *args を受ける。
            pyglet.app.exit()

        self._window.push_handlers(on_close=request_exit)
        try:
            pyglet.app.run(interval=None)
        finally:
            self._window.remove_handlers(on_close=request_exit)


__all__ = ["WindowLoop"]
