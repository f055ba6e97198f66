# どこで: `src/umbra/core/__init__.py`。
# 何を: ヘッドレスなモデル層（シーン生成 / 影投影 / 文字計測 / 設定）をまとめるパッケージ定義。
# なぜ: ウィンドウや GPU に依存しない部分を分離し、単体で検証できるようにするため。

from __future__ import annotations

__all__ = []
