# どこで: `src/umbra/core/surface.py`。
# 何を: 1 フレームの描画先（Surface）のプロトコルと塗り（単色 / 放射グラデーション）の型を定義する。
# なぜ: フレーム手順を GL ウィンドウにも SVG にも同じ呼び出し列で流せるようにし、core をヘッドレスに保つため。

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, Union

import numpy as np

from umbra.core.color import RGB01

if TYPE_CHECKING:
    from umbra.core.text import FontFace


@dataclass(frozen=True, slots=True)
class RadialGradient:
    """中心 `center`・半径 `radius` の放射グラデーション（内半径 0）。

    Notes
    -----
    `radius` より外側は最後の stop の色で塗る。
    """

    center: tuple[float, float]
    radius: float
    stops: tuple[tuple[float, RGB01], ...]

    def color_at(self, distance: float) -> RGB01:
        """中心からの距離 `distance` における色を返す。

        Notes
        -----
        GL のグラデーションシェーダと SVG の `<radialGradient>` が行う stop 補間の CPU 参照実装。
        描画経路からは呼ばれず、補間規則（両端の clamp、区間内の線形補間）を固定するために使う。
        """

        t = float(distance) / float(self.radius) if self.radius > 0 else 1.0
        t = 0.0 if t < 0.0 else 1.0 if t > 1.0 else t
        stops = self.stops
        if t <= stops[0][0]:
            return stops[0][1]
        for (o0, c0), (o1, c1) in zip(stops[:-1], stops[1:]):
            if t <= o1:
                span = o1 - o0
                u = 0.0 if span <= 0 else (t - o0) / span
                return (
                    c0[0] + (c1[0] - c0[0]) * u,
                    c0[1] + (c1[1] - c0[1]) * u,
                    c0[2] + (c1[2] - c0[2]) * u,
                )
        return stops[-1][1]


Paint = Union[RGB01, RadialGradient]


class Surface(Protocol):
    """ピクセル寸法を持つ 2D 描画先。座標は左上原点・y 下向き。"""

    @property
    def size(self) -> tuple[int, int]:
        """現在の (width, height)。"""
        ...

    def resize(self, width: int, height: int) -> None:
        """描画先の寸法を変更する。"""
        ...

    def begin_frame(self) -> None:
        """1 フレームの描画を開始する。"""
        ...

    def end_frame(self) -> None:
        """1 フレームの描画を確定する（表示 / 保存）。"""
        ...

    def fill_rect(self, x: float, y: float, width: float, height: float, paint: Paint) -> None:
        """矩形を単色または放射グラデーションで塗る。"""
        ...

    def fill_path(self, subpaths: Sequence[np.ndarray], color: RGB01) -> None:
        """閉じたサブパス列をまとめて non-zero 規則で塗る。"""
        ...

    def fill_text(
        self,
        text: str,
        center: tuple[float, float],
        *,
        face: "FontFace",
        color: RGB01,
    ) -> None:
        """文字列を `center` に中央揃え・middle ベースラインで塗る。"""
        ...


__all__ = ["Paint", "RadialGradient", "Surface"]
