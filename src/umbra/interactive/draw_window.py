# どこで: `src/umbra/interactive/draw_window.py`。
# 何を: ライブ描画用の pyglet ウィンドウ生成を行う。
# なぜ: interactive 依存をこの層に閉じ込め、core/export をヘッドレスに保つため。

from __future__ import annotations

import pyglet
from pyglet.gl import Config
from pyglet.window import Window


def create_draw_window(
    size: tuple[int, int],
    *,
    position: tuple[int, int] | None = None,
) -> Window:
    """描画ウィンドウを生成する。

    Notes
    -----
    塗りは winding テクスチャ経由の画素単位判定なので MSAA は要求しない。
    ポインタが光源そのものなので、ウィンドウ上ではカーソルを隠す。
    """
    config = Config(double_buffer=True)  # type: ignore[abstract]
    width, height = size
    window = pyglet.window.Window(  # type: ignore[abstract]
        width=int(width),
        height=int(height),
        resizable=True,
        caption="Umbra",
        config=config,
    )
    if position is not None:
        window.set_location(int(position[0]), int(position[1]))
    window.set_mouse_visible(False)
    return window
