# どこで: `src/umbra/interactive/gl/index_buffer.py`。
# 何を: サブパス境界（offsets）から GL_TRIANGLES 用の扇形（fan）インデックス配列を生成する。
# なぜ: インデックス生成を純粋関数として切り出し、テストしやすくするため（影は毎フレーム同じ offsets なのでキャッシュが効く）。

from __future__ import annotations

from functools import lru_cache

import numpy as np
from numba import njit  # type: ignore[attr-defined]


def offsets_for(subpath_lengths: list[int]) -> np.ndarray:
    """各サブパスの頂点数から offsets（先頭 0 の累積和）を返す。"""

    out = np.zeros(len(subpath_lengths) + 1, dtype=np.int32)
    if subpath_lengths:
        out[1:] = np.cumsum(np.asarray(subpath_lengths, dtype=np.int64))
    return out


def build_fan_indices(offsets: np.ndarray) -> np.ndarray:
    """offsets から GL_TRIANGLES 用の扇形インデックス配列を生成する。

    Notes
    -----
    - サブパス [s, e) は (s, s+k, s+k+1) の三角形 (k=1..n-2) に分解する。
    - 向きの違う三角形は winding 加算で打ち消し合うため、凹形や自己交差でも non-zero 塗りになる。
    - 3 頂点未満のサブパスは面積を持たないので出力しない。
    """
    offsets_i32 = np.asarray(offsets, dtype=np.int32)
    if offsets_i32.size < 2:
        return np.zeros((0,), dtype=np.uint32)
    return _build_fan_indices_cached(offsets_i32.tobytes())


@lru_cache(maxsize=256)
def _build_fan_indices_cached(offsets_bytes: bytes) -> np.ndarray:
    indices = _build_fan_indices_numba(np.frombuffer(offsets_bytes, dtype=np.int32))
    indices.setflags(write=False)
    return indices


@njit(cache=True)  # type: ignore[misc]
def _build_fan_indices_numba(offsets: np.ndarray) -> np.ndarray:
    """GL_TRIANGLES 用の fan indices を生成する（Numba 版）。"""
    n = offsets.shape[0]
    if n < 2:
        return np.empty((0,), dtype=np.uint32)

    total_triangles = 0
    for i in range(n - 1):
        length = offsets[i + 1] - offsets[i]
        if length >= 3:
            total_triangles += length - 2

    out = np.empty((total_triangles * 3,), dtype=np.uint32)
    cursor = 0
    for i in range(n - 1):
        start = offsets[i]
        end = offsets[i + 1]
        length = end - start
        if length < 3:
            continue
        for k in range(1, length - 1):
            out[cursor] = start
            out[cursor + 1] = start + k
            out[cursor + 2] = start + k + 1
            cursor += 3

    return out


__all__ = ["build_fan_indices", "offsets_for"]
