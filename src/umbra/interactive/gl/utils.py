from __future__ import annotations

# どこで: `src/umbra/interactive/gl/utils.py`。
# 何を: 描画で使う小さなユーティリティ（投影行列・バウンディングボックスのクリップ）を提供する。
# なぜ: GLSurface で共有し、ピクセル座標系（左上原点・y 下向き）の定義を一箇所に集約するため。

import numpy as np


def build_projection(width: float, height: float) -> "np.ndarray":
    """ピクセル座標（y 下向き）を clip 空間へ写す正射影行列（ModernGL 用の転置済み）を返す。"""
    proj = np.array(
        [
            [2 / width, 0, 0, -1],
            [0, -2 / height, 0, 1],
            [0, 0, -1, 0],
            [0, 0, 0, 1],
        ],
        dtype="f4",
    ).T
    return proj


def clipped_bbox(
    vertices: np.ndarray,
    *,
    width: float,
    height: float,
) -> tuple[float, float, float, float] | None:
    """頂点列の外接矩形を画面 [0,width]x[0,height] でクリップして (x0, y0, x1, y1) を返す。

    Notes
    -----
    画面外に完全に出ている、または面積 0 の場合は None。
    """
    if vertices.size == 0:
        return None
    mins = np.min(vertices, axis=0)
    maxs = np.max(vertices, axis=0)
    x0 = max(0.0, float(mins[0]))
    y0 = max(0.0, float(mins[1]))
    x1 = min(float(width), float(maxs[0]))
    y1 = min(float(height), float(maxs[1]))
    if x1 <= x0 or y1 <= y0:
        return None
    return x0, y0, x1, y1


def framebuffer_viewport(
    bbox: tuple[float, float, float, float],
    *,
    window_size: tuple[int, int],
    framebuffer_size: tuple[int, int],
) -> tuple[int, int, int, int]:
    """ピクセル座標の bbox をフレームバッファ座標（左下原点）の viewport (x, y, w, h) へ変換する。

    Notes
    -----
    HiDPI ではウィンドウ寸法とフレームバッファ寸法が異なるため倍率を掛ける。
    端数は外側へ丸めて 1px 余分に含める。
    """
    win_w, win_h = window_size
    fb_w, fb_h = framebuffer_size
    sx = float(fb_w) / float(win_w) if win_w > 0 else 1.0
    sy = float(fb_h) / float(win_h) if win_h > 0 else 1.0
    x0, y0, x1, y1 = bbox
    left = max(0, int(np.floor(x0 * sx)) - 1)
    right = min(int(fb_w), int(np.ceil(x1 * sx)) + 1)
    # y 下向き → 左下原点へ反転する。
    bottom = max(0, int(np.floor(float(fb_h) - y1 * sy)) - 1)
    top = min(int(fb_h), int(np.ceil(float(fb_h) - y0 * sy)) + 1)
    return left, bottom, max(0, right - left), max(0, top - bottom)


__all__ = ["build_projection", "clipped_bbox", "framebuffer_viewport"]
