# どこで: `src/umbra/core/settings.py`。
# 何を: 日食（eclipse）シーンの見た目に関わる定数の束を表すデータクラスを定義する。
# なぜ: グリッド寸法・語彙・フォント・影の投影距離・グラデーションを config から一括で差し替えられるようにするため。

from __future__ import annotations

from dataclasses import dataclass

from umbra.core.color import RGB01

DEFAULT_WORDS: tuple[str, ...] = (
    "ECLIPSE",
    "SHADOW",
    "UMBRA",
    "LIGHT",
    "VOID",
    "DUSK",
    "CORONA",
    "NIGHT",
    "HALO",
    "DARK",
    "LUNAR",
    "SOLAR",
    "GLOOM",
    "EMBER",
    "ABYSS",
    "DAWN",
)

DEFAULT_GRADIENT_STOPS: tuple[tuple[float, RGB01], ...] = (
    (0.0, (1.0, 1.0, 1.0)),
    (0.2, (0xDD / 255.0, 0xDD / 255.0, 0xDD / 255.0)),
    (1.0, (0x33 / 255.0, 0x33 / 255.0, 0x33 / 255.0)),
)


@dataclass(frozen=True, slots=True)
class EclipseSettings:
    """シーン生成と 1 フレーム描画に用いる設定値の集合。

    Parameters
    ----------
    grid : tuple[int, int]
        障害物グリッドの (cols, rows)。
    words : tuple[str, ...]
        ラベル語彙。グリッド index `i + j*cols` を語彙長で割った余りで巡回する。
    font : str
        ラベル描画フォント（名前 / ファイル名 / パス）。
    font_fallbacks : tuple[str, ...]
        `font` が見つからない場合に先頭から試す候補。
    font_size_px : float
        ラベルのフォントサイズ（px）。
    label_height : float
        障害物の高さ（近似キャップハイト）。
    jitter : float
        セル中心からの位置ゆらぎ振幅。各軸 [-jitter, +jitter] の一様乱数。
    shadow_distance : float
        角を光源から遠ざける投影距離。ビューポート対角より大きい必要がある。
    gradient_radius_ratio : float
        放射グラデーション半径（ビューポート幅に対する比）。
    gradient_stops : tuple[tuple[float, RGB01], ...]
        (offset, RGB) の列。offset は 0..1 の単調非減少。
    shadow_color : RGB01
        影の塗り色。
    label_color : RGB01
        ラベルの塗り色。
    """

    grid: tuple[int, int] = (5, 4)
    words: tuple[str, ...] = DEFAULT_WORDS
    font: str = "Arial Black"
    font_fallbacks: tuple[str, ...] = ()
    font_size_px: float = 60.0
    label_height: float = 40.0
    jitter: float = 25.0
    shadow_distance: float = 2000.0
    gradient_radius_ratio: float = 0.8
    gradient_stops: tuple[tuple[float, RGB01], ...] = DEFAULT_GRADIENT_STOPS
    shadow_color: RGB01 = (0.0, 0.0, 0.0)
    label_color: RGB01 = (0x11 / 255.0, 0x11 / 255.0, 0x11 / 255.0)

    def __post_init__(self) -> None:
        cols, rows = self.grid
        if int(cols) <= 0 or int(rows) <= 0:
            raise ValueError(f"grid は正の (cols, rows) である必要がある: got={self.grid!r}")
        if not self.words:
            raise ValueError("words は 1 語以上を含む必要がある")
        if any(not str(w).strip() for w in self.words):
            # 幅 0 のラベルは障害物にできない。
            raise ValueError(f"words に空文字列は使えない: got={self.words!r}")
        if float(self.font_size_px) <= 0.0:
            raise ValueError(f"font_size_px は正の値である必要がある: got={self.font_size_px}")
        if float(self.label_height) <= 0.0:
            raise ValueError(f"label_height は正の値である必要がある: got={self.label_height}")
        if float(self.jitter) < 0.0:
            raise ValueError(f"jitter は 0 以上である必要がある: got={self.jitter}")
        if float(self.shadow_distance) <= 0.0:
            raise ValueError(f"shadow_distance は正の値である必要がある: got={self.shadow_distance}")
        if float(self.gradient_radius_ratio) <= 0.0:
            raise ValueError(
                f"gradient_radius_ratio は正の値である必要がある: got={self.gradient_radius_ratio}"
            )
        if not self.gradient_stops:
            raise ValueError("gradient_stops は 1 つ以上必要")
        prev = 0.0
        for offset, _rgb in self.gradient_stops:
            o = float(offset)
            if o < 0.0 or o > 1.0 or o < prev:
                raise ValueError(
                    f"gradient_stops の offset は 0..1 の単調非減少である必要がある: got={self.gradient_stops!r}"
                )
            prev = o

    @property
    def cols(self) -> int:
        return int(self.grid[0])

    @property
    def rows(self) -> int:
        return int(self.grid[1])

    def font_candidates(self) -> tuple[str, ...]:
        """フォント解決で試す名前列（`font` → `font_fallbacks`）を返す。"""

        return (str(self.font), *(str(f) for f in self.font_fallbacks))


__all__ = ["DEFAULT_GRADIENT_STOPS", "DEFAULT_WORDS", "EclipseSettings"]
