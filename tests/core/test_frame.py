"""core.frame の描画手順（背景 → 影 → ラベル）をテスト。"""

from __future__ import annotations

import pytest

from umbra.core.frame import light_gradient, render_frame
from umbra.core.scene import generate_scene
from umbra.core.settings import EclipseSettings
from umbra.core.surface import RadialGradient
from umbra.core.text import FontFace


class _RecordingSurface:
    def __init__(self, width: int, height: int) -> None:
        self._size = (width, height)
        self.calls: list[tuple] = []

    @property
    def size(self) -> tuple[int, int]:
        return self._size

    def resize(self, width: int, height: int) -> None:
        self._size = (width, height)

    def begin_frame(self) -> None:
        self.calls.append(("begin",))

    def end_frame(self) -> None:
        self.calls.append(("end",))

    def fill_rect(self, x, y, width, height, paint) -> None:
        self.calls.append(("rect", (x, y, width, height), paint))

    def fill_path(self, subpaths, color) -> None:
        self.calls.append(("path", [s.copy() for s in subpaths], color))

    def fill_text(self, text, center, *, face, color) -> None:
        self.calls.append(("text", text, center, color))


def test_frame_draws_gradient_then_shadows_then_labels(face: FontFace) -> None:
    settings = EclipseSettings()
    scene = generate_scene(500.0, 400.0, words=settings.words, measure=face.measure)
    surface = _RecordingSurface(500, 400)

    render_frame(surface, scene, (250.0, 200.0), settings=settings, face=face)

    kinds = [c[0] for c in surface.calls]
    assert kinds == ["rect"] + ["path"] * 20 + ["text"] * 20

    _kind, rect, paint = surface.calls[0]
    assert rect == (0.0, 0.0, 500.0, 400.0)
    assert isinstance(paint, RadialGradient)
    assert paint.center == (250.0, 200.0)
    assert paint.radius == pytest.approx(400.0)

    for call in surface.calls[1:21]:
        _kind, subpaths, color = call
        assert len(subpaths) == 4
        assert all(s.shape == (5, 2) for s in subpaths)
        assert color == settings.shadow_color

    texts = surface.calls[21:]
    assert [t[1] for t in texts] == list(scene.labels())
    assert [t[2] for t in texts] == [o.center for o in scene.obstacles]
    assert all(t[3] == settings.label_color for t in texts)


def test_light_gradient_radius_follows_viewport_width() -> None:
    g = light_gradient((1.0, 2.0), viewport_width=800, settings=EclipseSettings())
    assert g.center == (1.0, 2.0)
    assert g.radius == pytest.approx(640.0)


def test_radial_gradient_color_interpolates_between_stops() -> None:
    g = RadialGradient(
        center=(0.0, 0.0),
        radius=100.0,
        stops=((0.0, (1.0, 1.0, 1.0)), (0.5, (0.0, 0.0, 0.0)), (1.0, (0.0, 0.0, 1.0))),
    )
    assert g.color_at(0.0) == (1.0, 1.0, 1.0)
    assert g.color_at(25.0) == pytest.approx((0.5, 0.5, 0.5))
    assert g.color_at(75.0) == pytest.approx((0.0, 0.0, 0.5))
    assert g.color_at(1000.0) == (0.0, 0.0, 1.0)
