"""
どこで: `src/polychime/interactive/gl/line_mesh.py`。
何を: 多角形輪郭用の VBO/IBO/VAO と、マーカー用の頂点色付き VBO/VAO の確保・更新・解放を行う。
なぜ: GPU 転送の詳細を Renderer から切り離し、再確保や VAO の張り直しを一元化するため。
"""

from __future__ import annotations

from typing import Any

import numpy as np


def _grow(ctx: Any, buffer: Any, size: int, minimum: int) -> tuple[Any, bool]:
    # 足りないときだけ再確保する。戻り値の bool は「VAO の張り直しが必要か」。
    if size <= buffer.size:
        return buffer, False
    buffer.release()
    return ctx.buffer(reserve=max(size, minimum), dynamic=True), True


class LineMesh:
    """輪郭線（LINE_STRIP + primitive restart）の描画データを保持する。

    頂点は float32 (x, y)、インデックスは uint32。
    """

    PRIMITIVE_RESTART_INDEX = 0xFFFFFFFF

    def __init__(self, ctx: Any, program: Any, initial_reserve: int = 64 * 1024) -> None:
        self.ctx = ctx
        self.program = program
        self.initial_reserve = int(initial_reserve)

        self.vbo = ctx.buffer(reserve=self.initial_reserve, dynamic=True)
        self.ibo = ctx.buffer(reserve=self.initial_reserve, dynamic=True)
        self.vao = self._build_vao()

        self.index_count: int = 0
        self.ctx.primitive_restart = True  # type: ignore
        self.ctx.primitive_restart_index = self.PRIMITIVE_RESTART_INDEX  # type: ignore

    def _build_vao(self) -> Any:
        return self.ctx.vertex_array(
            self.program, [(self.vbo, "2f", "in_vert")], index_buffer=self.ibo
        )

    def upload(self, vertices: np.ndarray, indices: np.ndarray) -> None:
        """頂点 (N, 2) とインデックスを GPU へ送る。"""
        vertices_f32 = np.ascontiguousarray(vertices, dtype=np.float32)
        indices_u32 = np.ascontiguousarray(indices, dtype=np.uint32)

        self.vbo, vbo_new = _grow(self.ctx, self.vbo, vertices_f32.nbytes, self.initial_reserve)
        self.ibo, ibo_new = _grow(self.ctx, self.ibo, indices_u32.nbytes, self.initial_reserve)
        if vbo_new or ibo_new:
            self.vao.release()
            self.vao = self._build_vao()

        self.vbo.orphan()
        self.vbo.write(vertices_f32)
        self.ibo.orphan()
        self.ibo.write(indices_u32)
        self.index_count = len(indices_u32)

    def release(self) -> None:
        self.vbo.release()
        self.ibo.release()
        self.vao.release()


class FillMesh:
    """塗り三角形リスト（x, y, r, g, b の interleave）の描画データを保持する。"""

    def __init__(self, ctx: Any, program: Any, initial_reserve: int = 64 * 1024) -> None:
        self.ctx = ctx
        self.program = program
        self.initial_reserve = int(initial_reserve)

        self.vbo = ctx.buffer(reserve=self.initial_reserve, dynamic=True)
        self.vao = self._build_vao()
        self.vertex_count: int = 0

    def _build_vao(self) -> Any:
        return self.ctx.vertex_array(
            self.program, [(self.vbo, "2f 3f", "in_vert", "in_color")]
        )

    def upload(self, vertices: np.ndarray) -> None:
        """頂点 (M, 5) を GPU へ送る。"""
        vertices_f32 = np.ascontiguousarray(vertices, dtype=np.float32)
        self.vbo, rebuilt = _grow(self.ctx, self.vbo, vertices_f32.nbytes, self.initial_reserve)
        if rebuilt:
            self.vao.release()
            self.vao = self._build_vao()

        self.vbo.orphan()
        self.vbo.write(vertices_f32)
        self.vertex_count = int(vertices_f32.shape[0])

    def release(self) -> None:
        self.vbo.release()
        self.vao.release()
