# どこで: `src/umbra/__main__.py`。
# 何を: `python -m umbra` で影描画ウィンドウを起動する。
# なぜ: スクリプトを書かずにそのまま動かせる入口を用意するため。

from __future__ import annotations

import logging

from umbra.api import run


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    run()


if __name__ == "__main__":
    main()
