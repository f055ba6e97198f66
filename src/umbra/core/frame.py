"""
どこで: `src/umbra/core/frame.py`。
何を: 1 フレーム分の描画手順（光の背景 → 影 → ラベル）を Surface へ発行する。
なぜ: 重なり順を 1 箇所に固定し、ライブ描画と SVG 書き出しで同じ絵を得るため。
"""

from __future__ import annotations

from umbra.core.scene import Scene
from umbra.core.settings import EclipseSettings
from umbra.core.shadow import cast_shadow
from umbra.core.surface import RadialGradient, Surface
from umbra.core.text import FontFace


def light_gradient(
    light: tuple[float, float],
    *,
    viewport_width: float,
    settings: EclipseSettings,
) -> RadialGradient:
    """光源位置を中心とする背景グラデーションを返す。"""

    return RadialGradient(
        center=(float(light[0]), float(light[1])),
        radius=float(viewport_width) * float(settings.gradient_radius_ratio),
        stops=settings.gradient_stops,
    )


def render_frame(
    surface: Surface,
    scene: Scene,
    light: tuple[float, float],
    *,
    settings: EclipseSettings,
    face: FontFace,
) -> None:
    """1 フレームを描く。

    Parameters
    ----------
    surface : Surface
        描画先。呼び出し側が begin_frame/end_frame で挟む。
    scene : Scene
        フレーム冒頭で確定したシーン。
    light : tuple[float, float]
        フレーム冒頭で読み取った光源位置。
    settings : EclipseSettings
        色・投影距離などの定数。
    face : FontFace
        シーン生成時の計測と同じフェイス。

    Notes
    -----
    手順（重なり順）:
    1) 画面全体を光源中心の放射グラデーションで塗る
    2) 全障害物の影を単色で塗る
    3) 全障害物のラベルを塗る
    """

    w, h = surface.size
    surface.fill_rect(0.0, 0.0, float(w), float(h), light_gradient(light, viewport_width=w, settings=settings))

    for obstacle in scene.obstacles:
        shadow = cast_shadow(obstacle, light, distance=settings.shadow_distance)
        surface.fill_path(shadow.subpaths(), settings.shadow_color)

    for obstacle in scene.obstacles:
        surface.fill_text(obstacle.label, obstacle.center, face=face, color=settings.label_color)


__all__ = ["light_gradient", "render_frame"]
