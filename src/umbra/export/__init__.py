# どこで: `src/umbra/export/__init__.py`。
# 何を: フレームをファイル（SVG / PNG）へ書き出す実装をまとめるパッケージ定義。
# なぜ: 書き出しを interactive から切り離し、ヘッドレスで使えるようにするため。

from __future__ import annotations

__all__ = []
