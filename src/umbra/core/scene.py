"""
どこで: `src/umbra/core/scene.py`。
何を: ビューポート寸法から障害物の集合（Scene）を生成する Scene Generator を提供する。
なぜ: 起動・リサイズ・リスタートのたびに、シーンを部分更新せず丸ごと作り直すため。
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

import numpy as np

from umbra.core.obstacle import Obstacle


@dataclass(frozen=True, slots=True)
class Scene:
    """グリッド状に配置された障害物の不変集合。

    Notes
    -----
    `obstacles` は列優先（i 外側・j 内側）の順で並ぶ。
    セル (i, j) の障害物は `at(i, j)` で引ける。
    """

    width: float
    height: float
    cols: int
    rows: int
    obstacles: tuple[Obstacle, ...]

    def __len__(self) -> int:
        return len(self.obstacles)

    def at(self, i: int, j: int) -> Obstacle:
        """グリッドセル (i, j) の障害物を返す。"""

        if not (0 <= int(i) < self.cols and 0 <= int(j) < self.rows):
            raise IndexError(f"セル外: (i, j)=({i}, {j}), grid=({self.cols}, {self.rows})")
        return self.obstacles[int(i) * self.rows + int(j)]

    def labels(self) -> tuple[str, ...]:
        return tuple(o.label for o in self.obstacles)


def word_for_cell(words: Sequence[str], i: int, j: int, *, cols: int) -> str:
    """セル (i, j) に割り当てる語を返す（`words[(i + j*cols) mod L]`）。"""

    if not words:
        raise ValueError("words は 1 語以上を含む必要がある")
    return str(words[(int(i) + int(j) * int(cols)) % len(words)])


def generate_scene(
    width: float,
    height: float,
    *,
    words: Sequence[str],
    measure: Callable[[str], float],
    cols: int = 5,
    rows: int = 4,
    label_height: float = 40.0,
    jitter: float = 25.0,
    rng: np.random.Generator | None = None,
) -> Scene:
    """ビューポートを cols × rows のセルに分割し、各セルに 1 つの障害物を置いた Scene を返す。

    Parameters
    ----------
    width, height : float
        ビューポート寸法。正である前提（0 以下は未ガードの縮退入力）。
    words : Sequence[str]
        ラベル語彙。
    measure : Callable[[str], float]
        ラベル横幅の計測関数。描画と同じフォントメトリクスである必要がある。
    cols, rows : int
        グリッド寸法。
    label_height : float
        障害物の高さ（近似キャップハイト）。
    jitter : float
        セル中心からの各軸ゆらぎ振幅。
    rng : np.random.Generator or None
        ゆらぎの乱数源。None なら新規に生成する。

    Returns
    -------
    Scene
        `cols * rows` 個の障害物を持つシーン。
    """

    _rng = rng if rng is not None else np.random.default_rng()
    cell_w = float(width) / float(cols)
    cell_h = float(height) / float(rows)
    amp = float(jitter)

    obstacles: list[Obstacle] = []
    for i in range(int(cols)):
        for j in range(int(rows)):
            word = word_for_cell(words, i, j, cols=int(cols))
            w = float(measure(word))
            cx = (i + 0.5) * cell_w + float(_rng.uniform(-amp, amp))
            cy = (j + 0.5) * cell_h + float(_rng.uniform(-amp, amp))
            obstacles.append(
                Obstacle(label=word, center=(cx, cy), width=w, height=float(label_height))
            )

    return Scene(
        width=float(width),
        height=float(height),
        cols=int(cols),
        rows=int(rows),
        obstacles=tuple(obstacles),
    )


__all__ = ["Scene", "generate_scene", "word_for_cell"]
