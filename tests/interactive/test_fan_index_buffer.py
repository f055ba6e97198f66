"""interactive.gl.index_buffer の `build_fan_indices` をテスト。"""

from __future__ import annotations

import numpy as np

from umbra.interactive.gl.index_buffer import build_fan_indices, offsets_for


def test_offsets_for_is_cumulative_sum_with_leading_zero() -> None:
    assert offsets_for([]).tolist() == [0]
    assert offsets_for([5, 5, 3]).tolist() == [0, 5, 10, 13]


def test_build_fan_indices_empty() -> None:
    indices = build_fan_indices(np.array([0], dtype=np.int32))
    assert indices.dtype == np.uint32
    assert indices.size == 0


def test_build_fan_indices_single_fin() -> None:
    # 閉じたフィン 5 点 => 3 三角形
    indices = build_fan_indices(np.array([0, 5], dtype=np.int32))
    assert indices.tolist() == [0, 1, 2, 0, 2, 3, 0, 3, 4]


def test_build_fan_indices_multiple_subpaths_offset_by_start() -> None:
    indices = build_fan_indices(offsets_for([3, 4]))
    assert indices.tolist() == [0, 1, 2, 3, 4, 5, 3, 5, 6]


def test_build_fan_indices_skips_degenerate_subpaths() -> None:
    # [0, 2) は 2 頂点なので面を持たず、[2, 5) のみ出力される
    indices = build_fan_indices(offsets_for([2, 3]))
    assert indices.tolist() == [2, 3, 4]


def test_build_fan_indices_covers_shadow_polygon() -> None:
    # 4 フィン x 5 点 => 12 三角形
    indices = build_fan_indices(offsets_for([5, 5, 5, 5]))
    assert indices.size == 36
    assert indices.max() == 19


def test_build_fan_indices_result_is_cached_and_read_only() -> None:
    offsets = offsets_for([5, 5, 5, 5])
    a = build_fan_indices(offsets)
    b = build_fan_indices(offsets.copy())
    assert a is b
    assert not a.flags.writeable
