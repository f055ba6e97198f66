from __future__ import annotations

import re
from pathlib import Path

import numpy as np
import pytest

from umbra.core.light import LightSource
from umbra.core.scene import generate_scene
from umbra.core.settings import EclipseSettings
from umbra.core.surface import RadialGradient
from umbra.core.text import FontFace
from umbra.export.svg import SvgSurface, export_frame_svg


# `umbra.export.svg`（Surface の SVG 実装）をテストする。


def test_fill_path_emits_nonzero_path_with_closed_subpaths() -> None:
    surface = SvgSurface(100, 50)
    surface.begin_frame()
    square = np.array([[0, 0], [10, 0], [10, 10], [0, 10], [0, 0]], dtype=np.float64)
    surface.fill_path([square, square + 20.0], (0.0, 0.0, 0.0))
    svg = surface.to_svg()

    assert 'viewBox="0 0 100 50"' in svg
    assert 'fill-rule="nonzero"' in svg
    assert 'fill="#000000"' in svg
    assert svg.count("Z") == 2
    assert "M 0.000 0.000 L 10.000 0.000" in svg
    assert "M 20.000 20.000" in svg


def test_fill_rect_with_gradient_writes_user_space_radial_gradient() -> None:
    surface = SvgSurface(500, 400)
    surface.begin_frame()
    settings = EclipseSettings()
    surface.fill_rect(
        0, 0, 500, 400, RadialGradient(center=(250.0, 200.0), radius=400.0, stops=settings.gradient_stops)
    )
    svg = surface.to_svg()

    assert '<radialGradient id="g0" gradientUnits="userSpaceOnUse" cx="250.000" cy="200.000" r="400.000">' in svg
    assert re.findall(r'stop-color="(#[0-9a-f]{6})"', svg) == ["#ffffff", "#dddddd", "#333333"]
    assert 'fill="url(#g0)"' in svg


def test_begin_frame_discards_previous_elements() -> None:
    surface = SvgSurface(10, 10)
    surface.fill_rect(0, 0, 10, 10, (1.0, 0.0, 0.0))
    surface.begin_frame()
    assert "<rect" not in surface.to_svg()


def test_svg_surface_rejects_non_positive_size() -> None:
    with pytest.raises(ValueError):
        SvgSurface(0, 10)


def test_export_frame_svg_writes_full_frame(tmp_path: Path, face: FontFace) -> None:
    settings = EclipseSettings()
    scene = generate_scene(500.0, 400.0, words=settings.words, measure=face.measure, rng=np.random.default_rng(3))
    light = LightSource.centered(500, 400)

    out = export_frame_svg(scene, light.position, tmp_path / "svg" / "frame.svg", settings=settings, face=face)

    text = out.read_text(encoding="utf-8")
    assert out == tmp_path / "svg" / "frame.svg"
    assert text.count("<rect") == 1
    # 影 20 + ラベル 20。
    assert text.count("<path") == 40
    assert text.count('fill="#111111"') == 20
    assert text.index('fill="#000000"') < text.index('fill="#111111"')
