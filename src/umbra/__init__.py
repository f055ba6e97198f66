# どこで: `src/umbra/__init__.py`。
# 何を: ルート `umbra` パッケージを定義する。
# なぜ: import 起点を `umbra` に統一するため。

from __future__ import annotations

from umbra.api import run

__all__ = ["run"]
