"""core.scene の Scene Generator をテスト。"""

from __future__ import annotations

import numpy as np
import pytest

from umbra.core.scene import generate_scene, word_for_cell
from umbra.core.settings import DEFAULT_WORDS


def _measure(text: str) -> float:
    return 10.0 * len(text)


def test_scene_has_cols_times_rows_obstacles() -> None:
    scene = generate_scene(500.0, 400.0, words=DEFAULT_WORDS, measure=_measure)
    assert len(scene) == 20
    assert (scene.cols, scene.rows) == (5, 4)

    scene = generate_scene(300.0, 300.0, words=DEFAULT_WORDS, measure=_measure, cols=3, rows=2)
    assert len(scene) == 6


def test_obstacles_stay_within_jittered_cell_centers() -> None:
    rng = np.random.default_rng(123)
    scene = generate_scene(500.0, 400.0, words=DEFAULT_WORDS, measure=_measure, rng=rng)
    for i in range(5):
        for j in range(4):
            ob = scene.at(i, j)
            assert abs(ob.x - (i + 0.5) * 100.0) <= 25.0
            assert abs(ob.y - (j + 0.5) * 100.0) <= 25.0


def test_zero_jitter_places_obstacles_on_cell_centers() -> None:
    scene = generate_scene(500.0, 400.0, words=DEFAULT_WORDS, measure=_measure, jitter=0.0)
    assert scene.at(0, 0).center == (50.0, 50.0)
    assert scene.at(4, 3).center == (450.0, 350.0)


def test_obstacle_extent_comes_from_measure_and_label_height() -> None:
    scene = generate_scene(
        500.0, 400.0, words=("AB", "CDE"), measure=_measure, label_height=33.0
    )
    for ob in scene.obstacles:
        assert ob.width == pytest.approx(10.0 * len(ob.label))
        assert ob.width > 0.0
        assert ob.height == 33.0


def test_labels_are_deterministic_regardless_of_jitter() -> None:
    a = generate_scene(500.0, 400.0, words=DEFAULT_WORDS, measure=_measure, rng=np.random.default_rng(1))
    b = generate_scene(500.0, 400.0, words=DEFAULT_WORDS, measure=_measure, rng=np.random.default_rng(2))
    assert a.labels() == b.labels()
    assert [o.center for o in a.obstacles] != [o.center for o in b.obstacles]


def test_labels_cycle_through_vocabulary_by_grid_index() -> None:
    words = ("A", "B", "C")
    scene = generate_scene(500.0, 400.0, words=words, measure=_measure)
    for i in range(5):
        for j in range(4):
            assert scene.at(i, j).label == words[(i + j * 5) % 3]


def test_obstacles_are_ordered_column_major() -> None:
    scene = generate_scene(500.0, 400.0, words=DEFAULT_WORDS, measure=_measure, jitter=0.0)
    assert scene.obstacles[1].center == (50.0, 150.0)
    assert scene.obstacles[4].center == (150.0, 50.0)


def test_word_for_cell_and_at_bounds() -> None:
    assert word_for_cell(DEFAULT_WORDS, 0, 0, cols=5) == "ECLIPSE"
    assert word_for_cell(DEFAULT_WORDS, 1, 3, cols=5) == DEFAULT_WORDS[16 % len(DEFAULT_WORDS)]
    with pytest.raises(ValueError):
        word_for_cell((), 0, 0, cols=5)

    scene = generate_scene(500.0, 400.0, words=DEFAULT_WORDS, measure=_measure)
    with pytest.raises(IndexError):
        scene.at(5, 0)
