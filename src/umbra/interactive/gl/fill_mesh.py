"""
どこで: `src/umbra/interactive/gl/fill_mesh.py`。
何を: 塗りつぶし用 VBO/IBO/VAO の確保・更新・解放を担当する FillMesh を管理。
なぜ: GPU 転送の詳細を GLSurface から切り離し、再確保や VAO の張り直しを一元化するため。
"""

from __future__ import annotations

from typing import Any

import numpy as np


class FillMesh:
    """2D 頂点（in_pos）と三角形インデックスを GPU へ送るメッシュ。"""

    def __init__(
        self,
        ctx: Any,
        program: Any,
        # 影 20 本 + ラベル輪郭で足りる程度から始め、必要に応じて自動拡張する。
        initial_reserve: int = 256 * 1024,
    ) -> None:
        self.ctx = ctx
        self.program = program
        self.initial_reserve = int(initial_reserve)

        self.vbo = ctx.buffer(reserve=self.initial_reserve, dynamic=True)
        self.ibo = ctx.buffer(reserve=self.initial_reserve, dynamic=True)
        self.vao = ctx.simple_vertex_array(program, self.vbo, "in_pos", index_buffer=self.ibo)
        self.index_count: int = 0

    def _ensure_capacity(self, vbo_size: int, ibo_size: int) -> None:
        """データが大きくなったら GPU のバッファを再確保する。"""
        vao_needs_rebuild = False
        if vbo_size > self.vbo.size:
            self.vbo.release()
            self.vbo = self.ctx.buffer(reserve=max(vbo_size, self.initial_reserve), dynamic=True)
            vao_needs_rebuild = True

        if ibo_size > self.ibo.size:
            self.ibo.release()
            self.ibo = self.ctx.buffer(reserve=max(ibo_size, self.initial_reserve), dynamic=True)
            vao_needs_rebuild = True

        # VAO は VBO/IBO が差し替わるときだけ張り直す。
        if vao_needs_rebuild:
            self.vao.release()
            self.vao = self.ctx.simple_vertex_array(
                self.program, self.vbo, "in_pos", index_buffer=self.ibo
            )

    def upload(self, vertices: np.ndarray, indices: np.ndarray) -> None:
        """頂点（shape (N,2)）とインデックスを GPU へ送る。"""
        vertices_f32 = np.ascontiguousarray(vertices, dtype=np.float32)
        indices_u32 = np.ascontiguousarray(indices, dtype=np.uint32)
        self._ensure_capacity(vertices_f32.nbytes, indices_u32.nbytes)

        self.vbo.orphan()
        self.vbo.write(vertices_f32)

        self.ibo.orphan()
        self.ibo.write(indices_u32)

        self.index_count = len(indices_u32)

    def render(self, mode: int) -> None:
        if self.index_count <= 0:
            return
        self.vao.render(mode=mode, vertices=self.index_count)

    def release(self) -> None:
        """GPU のメモリを解放する。"""
        self.vbo.release()
        self.ibo.release()
        self.vao.release()


__all__ = ["FillMesh"]
