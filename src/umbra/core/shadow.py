"""
どこで: `src/umbra/core/shadow.py`。
何を: 障害物と光源位置から、塗りつぶし可能な影ポリゴン（ShadowPolygon）を生成する Shadow Caster を提供する。
なぜ: 毎フレームの影形状計算を純粋関数として切り出し、描画バックエンドから独立に検証できるようにするため。
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from umbra.core.obstacle import Obstacle

DEFAULT_SHADOW_DISTANCE = 2000.0


@dataclass(frozen=True, slots=True)
class ShadowPolygon:
    """1 つの障害物が落とす影。

    Parameters
    ----------
    fins : np.ndarray
        float64 shape (4, 5, 2)。辺ごとの閉じたサブパス
        `C_i → P_i → P_{i+1} → C_{i+1} → C_i`。

    Notes
    -----
    4 本のフィンをまとめて non-zero で塗ると、光源から遠い 2 辺が長い影を作り、
    近い 2 辺のフィンは矩形と影の内側に重なって見えなくなる。
    """

    fins: np.ndarray

    def __post_init__(self) -> None:
        fins = np.asarray(self.fins, dtype=np.float64)
        if fins.shape != (4, 5, 2):
            raise ValueError(f"fins は shape (4, 5, 2) である必要がある: got={fins.shape}")
        fins.setflags(write=False)
        object.__setattr__(self, "fins", fins)

    @property
    def corners(self) -> np.ndarray:
        """元の 4 隅（shape (4, 2)）。"""
        return self.fins[:, 0, :]

    @property
    def projected(self) -> np.ndarray:
        """各隅の投影点（shape (4, 2)）。"""
        return self.fins[:, 1, :]

    @property
    def points(self) -> np.ndarray:
        """全フィンの点列を連結した shape (20, 2) の配列。"""
        return self.fins.reshape(-1, 2)

    def subpaths(self) -> list[np.ndarray]:
        """塗りつぶし用のサブパス列（各 shape (5, 2)）を返す。"""
        return [self.fins[k] for k in range(self.fins.shape[0])]


def project_corners(
    corners: np.ndarray,
    light: tuple[float, float],
    *,
    distance: float = DEFAULT_SHADOW_DISTANCE,
) -> np.ndarray:
    """各隅を光源から遠ざける向きに `distance` だけ押し出した点列を返す。

    Notes
    -----
    光源と隅が一致する場合 `atan2(0, 0) == 0` となり +x 方向へ押し出す。
    """

    c = np.asarray(corners, dtype=np.float64)
    lx, ly = float(light[0]), float(light[1])
    angles = np.arctan2(c[:, 1] - ly, c[:, 0] - lx)
    d = float(distance)
    out = np.empty_like(c)
    out[:, 0] = c[:, 0] + np.cos(angles) * d
    out[:, 1] = c[:, 1] + np.sin(angles) * d
    return out


def cast_shadow(
    obstacle: Obstacle,
    light: tuple[float, float],
    *,
    distance: float = DEFAULT_SHADOW_DISTANCE,
) -> ShadowPolygon:
    """障害物の外接矩形から、光源の反対側へ伸びる影ポリゴンを生成する。

    Parameters
    ----------
    obstacle : Obstacle
        影を落とす障害物。
    light : tuple[float, float]
        光源位置 (lx, ly)。有限値である前提。
    distance : float
        投影距離。ビューポート対角より大きい値を想定する。

    Returns
    -------
    ShadowPolygon
        4 本の閉じたフィン（計 20 点）。
    """

    corners = obstacle.corners()
    projected = project_corners(corners, light, distance=distance)

    nxt = np.roll(np.arange(4), -1)
    fins = np.empty((4, 5, 2), dtype=np.float64)
    fins[:, 0] = corners
    fins[:, 1] = projected
    fins[:, 2] = projected[nxt]
    fins[:, 3] = corners[nxt]
    fins[:, 4] = corners
    return ShadowPolygon(fins=fins)


__all__ = ["DEFAULT_SHADOW_DISTANCE", "ShadowPolygon", "cast_shadow", "project_corners"]
