# どこで: `src/umbra/interactive/gl/gl_surface.py`。
# 何を: pyglet ウィンドウ上の ModernGL で Surface プロトコル（矩形グラデーション / non-zero パス塗り / ラベル）を実装する。
# なぜ: 自己交差する影フィンやグリフの穴を、三角形分割なしに GPU 上で non-zero 規則どおり塗るため。

from __future__ import annotations

from collections.abc import Sequence

import moderngl
import numpy as np
from pyglet.window import Window

from umbra.core.color import RGB01
from umbra.core.surface import Paint, RadialGradient
from umbra.core.text import FontFace
from umbra.interactive.gl import utils as render_utils
from umbra.interactive.gl.fill_mesh import FillMesh
from umbra.interactive.gl.index_buffer import build_fan_indices, offsets_for
from umbra.interactive.gl.shader import MAX_GRADIENT_STOPS, Shader


def _quad_vertices(x0: float, y0: float, x1: float, y1: float) -> np.ndarray:
    return np.array(
        [[x0, y0], [x1, y0], [x1, y1], [x0, y0], [x1, y1], [x0, y1]],
        dtype=np.float32,
    )


class GLSurface:
    """ウィンドウの back buffer へ描く Surface。

    Notes
    -----
    パス塗りは 2 パス:
    1) サブパスごとの扇形三角形を半精度 1ch テクスチャへ加算ブレンド（表 +1 / 裏 -1）し winding 数を積む
    2) パスの外接矩形だけを覆う quad で、|winding| >= 0.5 の画素を単色で塗る
    """

    def __init__(self, window: Window) -> None:
        window.switch_to()
        self._window = window
        self.ctx = moderngl.create_context(require=410)

        self._gradient = Shader.create_gradient_shader(self.ctx)
        self._winding = Shader.create_winding_shader(self.ctx)
        self._cover = Shader.create_cover_shader(self.ctx)

        self._path_mesh = FillMesh(self.ctx, self._winding)
        self._quad_vbo = self.ctx.buffer(reserve=6 * 2 * 4, dynamic=True)
        self._gradient_quad = self.ctx.simple_vertex_array(self._gradient, self._quad_vbo, "in_pos")
        self._cover_quad = self.ctx.simple_vertex_array(self._cover, self._quad_vbo, "in_pos")

        self._size = (int(window.width), int(window.height))
        self._winding_tex: moderngl.Texture | None = None
        self._winding_fbo: moderngl.Framebuffer | None = None
        self._allocate_targets()
        self._write_projection()

    # ---------- Surface ----------
    @property
    def size(self) -> tuple[int, int]:
        return self._size

    def resize(self, width: int, height: int) -> None:
        self._size = (max(1, int(width)), max(1, int(height)))
        self._window.switch_to()
        self._allocate_targets()
        self._write_projection()

    def begin_frame(self) -> None:
        # 録画や他ウィンドウで current context / framebuffer binding が揺れても、
        # 毎フレーム明示的に戻してから描く。
        self._window.switch_to()
        if self._winding_tex is None or self._winding_tex.size != self._framebuffer_size():
            self._allocate_targets()
        self._use_screen()

    def end_frame(self) -> None:
        self._window.flip()

    def fill_rect(self, x: float, y: float, width: float, height: float, paint: Paint) -> None:
        if isinstance(paint, RadialGradient):
            center, radius, stops = paint.center, float(paint.radius), paint.stops
        else:
            center, radius, stops = (0.0, 0.0), 1.0, ((0.0, paint),)
        self._write_gradient(center, radius, stops)
        self._quad_vbo.write(_quad_vertices(x, y, x + width, y + height))
        self._gradient_quad.render(mode=moderngl.TRIANGLES, vertices=6)

    def fill_path(self, subpaths: Sequence[np.ndarray], color: RGB01) -> None:
        parts = [np.asarray(p, dtype=np.float32) for p in subpaths if len(p) >= 3]
        if not parts:
            return
        vertices = np.concatenate(parts, axis=0)
        bbox = render_utils.clipped_bbox(vertices, width=self._size[0], height=self._size[1])
        if bbox is None:
            return
        indices = build_fan_indices(offsets_for([int(p.shape[0]) for p in parts]))
        if indices.size == 0:
            return

        fb_size = self._framebuffer_size()
        vp = render_utils.framebuffer_viewport(bbox, window_size=self._size, framebuffer_size=fb_size)
        assert self._winding_fbo is not None and self._winding_tex is not None

        # --- 1) winding 加算 ---
        self._winding_fbo.use()
        self.ctx.viewport = (0, 0, fb_size[0], fb_size[1])
        self._winding_fbo.clear(0.0, 0.0, 0.0, 0.0, viewport=vp)
        self.ctx.enable(moderngl.BLEND)
        self.ctx.blend_func = moderngl.ONE, moderngl.ONE
        self.ctx.blend_equation = moderngl.FUNC_ADD
        self._path_mesh.upload(vertices=vertices, indices=indices)
        self._path_mesh.render(moderngl.TRIANGLES)
        self.ctx.disable(moderngl.BLEND)

        # --- 2) カバー塗り ---
        self._use_screen()
        self._winding_tex.use(location=0)
        self._cover["u_winding"].value = 0
        self._cover["color"].value = (float(color[0]), float(color[1]), float(color[2]), 1.0)
        x0, y0, x1, y1 = bbox
        self._quad_vbo.write(_quad_vertices(x0, y0, x1, y1))
        self._cover_quad.render(mode=moderngl.TRIANGLES, vertices=6)

    def fill_text(
        self,
        text: str,
        center: tuple[float, float],
        *,
        face: FontFace,
        color: RGB01,
    ) -> None:
        self.fill_path(face.outline(text, center), color)

    # ---------- 内部 ----------
    def _framebuffer_size(self) -> tuple[int, int]:
        getter = getattr(self._window, "get_framebuffer_size", None)
        if callable(getter):
            w, h = getter()
            return max(1, int(w)), max(1, int(h))
        return self._size

    def _use_screen(self) -> None:
        fb_w, fb_h = self._framebuffer_size()
        self.ctx.screen.use()
        self.ctx.viewport = (0, 0, fb_w, fb_h)

    def _allocate_targets(self) -> None:
        if self._winding_fbo is not None:
            self._winding_fbo.release()
        if self._winding_tex is not None:
            self._winding_tex.release()
        fb_size = self._framebuffer_size()
        self._winding_tex = self.ctx.texture(fb_size, 1, dtype="f2")
        self._winding_tex.filter = (moderngl.NEAREST, moderngl.NEAREST)
        self._winding_fbo = self.ctx.framebuffer(color_attachments=[self._winding_tex])

    def _write_projection(self) -> None:
        projection = render_utils.build_projection(float(self._size[0]), float(self._size[1]))
        data = projection.tobytes()
        for program in (self._gradient, self._winding, self._cover):
            program["projection"].write(data)

    def _write_gradient(
        self,
        center: tuple[float, float],
        radius: float,
        stops: tuple[tuple[float, RGB01], ...],
    ) -> None:
        used = list(stops[:MAX_GRADIENT_STOPS])
        offsets = np.zeros((MAX_GRADIENT_STOPS,), dtype="f4")
        colors = np.zeros((MAX_GRADIENT_STOPS, 3), dtype="f4")
        for i in range(MAX_GRADIENT_STOPS):
            o, c = used[min(i, len(used) - 1)]
            offsets[i] = float(o)
            colors[i] = (float(c[0]), float(c[1]), float(c[2]))
        self._gradient["u_center"].value = (float(center[0]), float(center[1]))
        self._gradient["u_radius"].value = float(radius)
        self._gradient["u_count"].value = len(used)
        self._gradient["u_offsets"].write(offsets.tobytes())
        self._gradient["u_colors"].write(colors.tobytes())

    def release(self) -> None:
        """GPU リソースを解放する。"""
        self._path_mesh.release()
        self._gradient_quad.release()
        self._cover_quad.release()
        self._quad_vbo.release()
        if self._winding_fbo is not None:
            self._winding_fbo.release()
        if self._winding_tex is not None:
            self._winding_tex.release()
        for program in (self._gradient, self._winding, self._cover):
            program.release()
        self.ctx.release()


__all__ = ["GLSurface"]
