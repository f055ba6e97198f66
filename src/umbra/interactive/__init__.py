# どこで: `src/umbra/interactive/__init__.py`。
# 何を: pyglet / ModernGL に依存するライブ描画層のパッケージ定義。
# なぜ: GUI 依存をこの層に閉じ込めるため。

from __future__ import annotations

__all__ = []
