# どこで: `src/umbra/core/color.py`。
# 何を: 0..1 float RGB と 16 進カラー文字列の相互変換を提供する。
# なぜ: config.yaml の色指定（"#dddddd"）を描画側（GL/SVG）の表現へ揃えるため。

from __future__ import annotations

RGB01 = tuple[float, float, float]


def rgb01_to_rgb255(rgb: RGB01) -> tuple[int, int, int]:
    """0..1 float の RGB を 0..255 int の RGB に変換して返す。"""

    r, g, b = rgb
    out: list[int] = []
    for v in (r, g, b):
        fv = float(v)
        fv = 0.0 if fv < 0.0 else 1.0 if fv > 1.0 else fv
        out.append(int(round(fv * 255.0)))
    return int(out[0]), int(out[1]), int(out[2])


def rgb01_to_hex(rgb: RGB01) -> str:
    """0..1 float RGB を #rrggbb に変換して返す。"""

    r, g, b = rgb01_to_rgb255(rgb)
    return f"#{r:02x}{g:02x}{b:02x}"


def hex_to_rgb01(text: str) -> RGB01:
    """`#rgb` / `#rrggbb` を 0..1 float RGB に変換して返す。

    Raises
    ------
    ValueError
        16 進カラーとして解釈できない場合。
    """

    s = str(text).strip()
    if s.startswith("#"):
        s = s[1:]
    if len(s) == 3:
        s = "".join(ch * 2 for ch in s)
    if len(s) != 6:
        raise ValueError(f"16 進カラーは #rgb か #rrggbb である必要がある: got={text!r}")
    try:
        r, g, b = (int(s[i : i + 2], 16) for i in (0, 2, 4))
    except ValueError as exc:
        raise ValueError(f"16 進カラーとして解釈できない: got={text!r}") from exc
    return r / 255.0, g / 255.0, b / 255.0


__all__ = ["RGB01", "hex_to_rgb01", "rgb01_to_hex", "rgb01_to_rgb255"]
