# どこで: `src/umbra/core/obstacle.py`。
# 何を: ラベル付き矩形障害物（Obstacle）のモデルを定義する。
# なぜ: シーン生成・影計算・ラベル描画の全経路で同じ矩形表現を共有するため。

from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True, slots=True)
class Obstacle:
    """光を遮る不変の矩形障害物。

    Parameters
    ----------
    label : str
        描画し、シルエットとして影を落とす文字列。
    center : tuple[float, float]
        ビューポート座標（y は下向き）での中心。
    width : float
        ラベル描画の横幅（フォントの advance 合計）。
    height : float
        矩形の高さ（近似キャップハイト）。
    """

    label: str
    center: tuple[float, float]
    width: float
    height: float

    def __post_init__(self) -> None:
        if not float(self.width) > 0.0 or not float(self.height) > 0.0:
            raise ValueError(
                f"Obstacle の width/height は正の値である必要がある: width={self.width}, height={self.height}"
            )

    @property
    def x(self) -> float:
        return float(self.center[0])

    @property
    def y(self) -> float:
        return float(self.center[1])

    def corners(self) -> np.ndarray:
        """4 隅を 左上 → 右上 → 右下 → 左下 の順で返す。

        Returns
        -------
        np.ndarray
            float64 shape (4, 2)。
        """

        hw = float(self.width) / 2.0
        hh = float(self.height) / 2.0
        cx, cy = self.x, self.y
        return np.array(
            [
                [cx - hw, cy - hh],
                [cx + hw, cy - hh],
                [cx + hw, cy + hh],
                [cx - hw, cy + hh],
            ],
            dtype=np.float64,
        )


__all__ = ["Obstacle"]
