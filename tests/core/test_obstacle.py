from __future__ import annotations

import numpy as np
import pytest

from umbra.core.light import LightSource
from umbra.core.obstacle import Obstacle


def test_corners_order_is_tl_tr_br_bl() -> None:
    ob = Obstacle(label="HALO", center=(10.0, 20.0), width=8.0, height=4.0)
    np.testing.assert_array_equal(
        ob.corners(),
        [[6.0, 18.0], [14.0, 18.0], [14.0, 22.0], [6.0, 22.0]],
    )
    assert ob.corners().dtype == np.float64


@pytest.mark.parametrize("w,h", [(0.0, 10.0), (10.0, 0.0), (-1.0, 5.0)])
def test_obstacle_requires_positive_extent(w: float, h: float) -> None:
    with pytest.raises(ValueError):
        Obstacle(label="X", center=(0.0, 0.0), width=w, height=h)


def test_light_source_centered_and_move() -> None:
    light = LightSource.centered(500, 400)
    assert light.position == (250.0, 200.0)
    light.move_to(3, 4)
    assert light.position == (3.0, 4.0)
    light.reset_to_center(800, 600)
    assert light.position == (400.0, 300.0)
