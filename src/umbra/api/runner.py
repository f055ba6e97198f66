"""
どこで: `src/umbra/api/runner.py`。公開 API のランナー実装。
何を: 設定とフォントを読み込み、影描画ウィンドウを開いてポインタ追従の描画ループを回す。
なぜ: `python -m umbra` や利用側スクリプトから 1 関数で起動できる経路を用意するため。
"""

from __future__ import annotations

import logging
from pathlib import Path

import pyglet

from umbra.core.runtime_config import runtime_config, set_config_path
from umbra.core.text import load_font_face
from umbra.interactive.runtime.eclipse_window_system import EclipseWindowSystem
from umbra.interactive.runtime.window_loop import WindowLoop

_logger = logging.getLogger(__name__)


def run(
    *,
    config_path: str | Path | None = None,
    canvas_size: tuple[int, int] | None = None,
    fps: float | None = None,
    seed: int | None = None,
) -> None:
    """pyglet ウィンドウを生成し、光源がポインタに追従する影シーンをリアルタイム描画する。

    Parameters
    ----------
    config_path : str | Path | None
        設定ファイル（config.yaml）のパス。指定した場合は探索より優先する。
    canvas_size : tuple[int, int] | None
        初期ウィンドウ寸法（ピクセル）。None なら `ui.window_size`。
    fps : float | None
        目標フレームレート。None なら `ui.fps`。`<=0` の場合は可能な限り速く回す。
    seed : int | None
        配置ゆらぎの乱数シード。None なら毎回異なる。

    Returns
    -------
    None
        ウィンドウを閉じると制御を返す。描画ウィンドウを作れない環境では何もせずに返す。
    """

    set_config_path(config_path)
    cfg = runtime_config()
    settings = cfg.eclipse

    # pyglet の Window 作成前にオプションを設定する。
    pyglet.options["vsync"] = True

    # フォントが解決できない場合はウィンドウを開く前に失敗させる。
    face = load_font_face(settings)

    system = EclipseWindowSystem(
        settings=settings,
        face=face,
        canvas_size=canvas_size if canvas_size is not None else cfg.window_size,
        window_pos=cfg.window_pos,
        fps=float(cfg.fps if fps is None else fps),
        seed=seed,
    )
    if system.window is None:
        _logger.warning("描画先が無いため終了します")
        system.close()
        return

    try:
        system.loop.start()
        WindowLoop(system.window).run()
    finally:
        # 例外でも確実に後始末する。
        system.close()


__all__ = ["run"]
