"""
どこで: `src/umbra/export/image.py`。
何を: フレームの SVG を外部ラスタライザ（resvg）で PNG に変換して保存する関数を提供する。
なぜ: SVG を正（ソース）として保存し、PNG は任意の倍率で再生成できる導線を用意するため。
"""

from __future__ import annotations

import subprocess
from pathlib import Path

from umbra.core.runtime_config import runtime_config


def png_output_size(canvas_size: tuple[int, int], *, scale: float | None = None) -> tuple[int, int]:
    """canvas_size を基準に PNG 出力ピクセルサイズを返す。

    Notes
    -----
    `scale` が None の場合は config の `export.png.scale` を使う。
    """

    canvas_w, canvas_h = canvas_size
    if int(canvas_w) <= 0 or int(canvas_h) <= 0:
        raise ValueError("canvas_size は正の (width, height) である必要がある")
    s = float(runtime_config().png_scale) if scale is None else float(scale)
    if s <= 0:
        raise ValueError(f"scale は正の値である必要がある: got={s}")
    return int(int(canvas_w) * s), int(int(canvas_h) * s)


def resvg_command(
    *,
    input_svg: Path,
    output_png: Path,
    output_size: tuple[int, int],
) -> list[str]:
    """resvg の起動引数を返す。"""

    out_w, out_h = output_size
    if int(out_w) <= 0 or int(out_h) <= 0:
        raise ValueError("output_size は正の (width, height) である必要がある")
    return [
        "resvg",
        "--width",
        str(int(out_w)),
        "--height",
        str(int(out_h)),
        str(input_svg),
        str(output_png),
    ]


def rasterize_svg_to_png(
    svg_path: str | Path,
    png_path: str | Path,
    *,
    output_size: tuple[int, int],
) -> Path:
    """SVG を PNG として保存する。

    Parameters
    ----------
    svg_path : str or Path
        入力 SVG パス。
    png_path : str or Path
        出力 PNG パス。
    output_size : tuple[int, int]
        出力 PNG の (width, height) ピクセルサイズ。

    Returns
    -------
    Path
        出力 PNG パス。

    Raises
    ------
    RuntimeError
        resvg が見つからない、またはラスタライズに失敗した場合。

    Notes
    -----
    フレームは背景グラデーションで全面を塗るため、背景色の指定は持たない。
    """

    _svg_path = Path(svg_path)
    _png_path = Path(png_path)
    _png_path.parent.mkdir(parents=True, exist_ok=True)

    cmd = resvg_command(input_svg=_svg_path, output_png=_png_path, output_size=output_size)
    try:
        proc = subprocess.run(cmd, capture_output=True, text=True, check=False)
    except FileNotFoundError as e:
        raise RuntimeError(
            "resvg が見つかりません（`resvg` をインストールして PATH を通してください）"
        ) from e

    if proc.returncode != 0:
        details = (proc.stderr or proc.stdout or "").strip()
        raise RuntimeError(f"resvg が失敗しました (code={proc.returncode}). {details}".strip())

    return _png_path


__all__ = ["png_output_size", "rasterize_svg_to_png", "resvg_command"]
