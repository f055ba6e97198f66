# どこで: `src/umbra/core/light.py`。
# 何を: ポインタに追従する単一の点光源（LightSource）の状態を保持する。
# なぜ: 入力ハンドラ（書き手）と描画ステップ（読み手）が共有する座標を 1 箇所に閉じ込めるため。

from __future__ import annotations


class LightSource:
    """点光源の現在位置。

    Notes
    -----
    書き手は入力ハンドラとシーン再初期化、読み手はフレーム冒頭の描画ステップのみ。
    同一スレッド上でフレーム境界にだけ読まれるため、ロックは持たない。
    """

    __slots__ = ("_x", "_y")

    def __init__(self, x: float = 0.0, y: float = 0.0) -> None:
        self._x = float(x)
        self._y = float(y)

    @classmethod
    def centered(cls, width: float, height: float) -> "LightSource":
        """ビューポート中心に置いた光源を返す。"""

        light = cls()
        light.reset_to_center(width, height)
        return light

    @property
    def position(self) -> tuple[float, float]:
        """現在位置のスナップショット (x, y) を返す。"""

        return (self._x, self._y)

    def move_to(self, x: float, y: float) -> None:
        self._x = float(x)
        self._y = float(y)

    def reset_to_center(self, width: float, height: float) -> None:
        """ビューポート中心へ戻す（ポインタ入力前の既定位置）。"""

        self._x = float(width) / 2.0
        self._y = float(height) / 2.0

    def __repr__(self) -> str:
        return f"LightSource(x={self._x!r}, y={self._y!r})"


__all__ = ["LightSource"]
