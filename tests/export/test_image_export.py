from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

from umbra.export import image


# `umbra.export.image`（SVG→PNG / resvg）をテストする。

@pytest.fixture(autouse=True)
def _isolate(isolated_config: Path) -> None:
    return None


def test_png_output_size_scales_canvas_by_png_scale() -> None:
    assert image.png_output_size((300, 200)) == (600, 400)
    assert image.png_output_size((300, 200), scale=1.5) == (450, 300)
    with pytest.raises(ValueError):
        image.png_output_size((0, 200))
    with pytest.raises(ValueError):
        image.png_output_size((10, 10), scale=0.0)


def test_resvg_command_sets_output_size(tmp_path: Path) -> None:
    cmd = image.resvg_command(input_svg=tmp_path / "a.svg", output_png=tmp_path / "a.png", output_size=(640, 480))
    assert cmd == ["resvg", "--width", "640", "--height", "480", str(tmp_path / "a.svg"), str(tmp_path / "a.png")]


def test_rasterize_svg_to_png_invokes_resvg(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[list[str]] = []

    def fake_run(cmd, **kwargs):
        calls.append(list(cmd))
        return subprocess.CompletedProcess(cmd, 0, stdout="", stderr="")

    monkeypatch.setattr(image.subprocess, "run", fake_run)
    out = image.rasterize_svg_to_png(tmp_path / "in.svg", tmp_path / "png" / "out.png", output_size=(20, 10))

    assert out == tmp_path / "png" / "out.png"
    assert out.parent.is_dir()
    assert calls == [["resvg", "--width", "20", "--height", "10", str(tmp_path / "in.svg"), str(out)]]


def test_rasterize_svg_to_png_reports_missing_resvg(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_run(cmd, **kwargs):
        raise FileNotFoundError(cmd[0])

    monkeypatch.setattr(image.subprocess, "run", fake_run)
    with pytest.raises(RuntimeError, match="resvg"):
        image.rasterize_svg_to_png(tmp_path / "in.svg", tmp_path / "out.png", output_size=(20, 10))


def test_rasterize_svg_to_png_reports_failure(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_run(cmd, **kwargs):
        return subprocess.CompletedProcess(cmd, 1, stdout="", stderr="bad svg")

    monkeypatch.setattr(image.subprocess, "run", fake_run)
    with pytest.raises(RuntimeError, match="bad svg"):
        image.rasterize_svg_to_png(tmp_path / "in.svg", tmp_path / "out.png", output_size=(20, 10))
