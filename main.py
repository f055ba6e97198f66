"""
どこで: リポジトリ直下 `main.py`。
何を: 影描画ウィンドウを固定シードで起動する。
なぜ: インストールせずに動作確認できる最小エントリポイントとして利用するため。
"""

import logging
import sys

sys.path.append("src")

from umbra import run

CANVAS_WIDTH = 1280
CANVAS_HEIGHT = 800


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    run(
        canvas_size=(CANVAS_WIDTH, CANVAS_HEIGHT),
        fps=60,
        seed=0,
    )
