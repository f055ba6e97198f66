# どこで: `src/umbra/interactive/gl/__init__.py`。
# 何を: ModernGL による塗り描画（シェーダ / メッシュ / インデックス生成）のパッケージ定義。
# なぜ: GPU 転送と描画手順を runtime から切り離すため。

from __future__ import annotations

__all__ = []
