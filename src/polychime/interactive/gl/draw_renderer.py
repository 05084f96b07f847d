# どこで: `src/polychime/interactive/gl/draw_renderer.py`。
# 何を: ライブ描画用の ModernGL レンダラーをカプセル化する。
# なぜ: コンテキスト生成・シェーダ設定・メッシュ転送を描画サブシステムから分離し、責務を明確にするため。

from __future__ import annotations

import moderngl
import numpy as np
from pyglet.window import Window

from polychime.interactive.frame_geometry import PackedPolygons
from polychime.interactive.gl import utils as render_utils
from polychime.interactive.gl.index_buffer import build_loop_indices
from polychime.interactive.gl.line_mesh import FillMesh, LineMesh
from polychime.interactive.gl.shader import Shader
from polychime.interactive.render_settings import RenderSettings


class DrawRenderer:
    """多角形の輪郭と塗りマーカーを描くシンプルなレンダラー。"""

    def __init__(self, window: Window, settings: RenderSettings) -> None:
        window.switch_to()
        self.ctx = moderngl.create_context(require=410)
        self.line_program = Shader.create_shader(self.ctx)
        self.fill_program = Shader.create_fill_shader(self.ctx)
        self._outline_mesh = LineMesh(self.ctx, self.line_program)
        self._marker_mesh = FillMesh(self.ctx, self.fill_program)
        # 多角形は構築後に変化しないため、upload 済みの内容を覚えて再転送を省く。
        self._uploaded_key: bytes | None = None

        # 射影行列はキャンバス寸法と倍率にのみ依存するため初期化時に一度設定する。
        canvas_w, canvas_h = settings.canvas_size
        projection = render_utils.build_projection(
            float(canvas_w),
            float(canvas_h),
            float(settings.render_scale),
        ).tobytes()
        self.line_program["projection"].write(projection)
        self.fill_program["projection"].write(projection)

    def viewport(self, width: int, height: int) -> None:
        """ビューポートをウィンドウサイズに合わせて更新する。"""
        self.ctx.viewport = (0, 0, int(width), int(height))

    def clear(self, color: tuple[float, float, float]) -> None:
        """背景色でクリアする。"""
        self.ctx.clear(*color, 1.0)

    def render_outlines(
        self,
        packed: PackedPolygons,
        *,
        color: tuple[float, float, float],
        thickness: float,
    ) -> None:
        """多角形列を閉じた輪郭線として描画する。"""
        key = packed.offsets.tobytes() + packed.coords.tobytes()
        if key != self._uploaded_key:
            indices = build_loop_indices(packed.offsets)
            if indices.size == 0:
                return
            self._outline_mesh.upload(vertices=packed.coords, indices=indices)
            self._uploaded_key = key

        self.line_program["line_thickness"].value = float(thickness)
        self.line_program["color"].value = (*color, 1.0)
        self._outline_mesh.vao.render(
            mode=self.ctx.LINE_STRIP, vertices=self._outline_mesh.index_count
        )

    def render_markers(self, triangles: np.ndarray) -> None:
        """頂点色付き三角形リスト (x, y, r, g, b) を描画する。"""
        if triangles.size == 0:
            return
        self._marker_mesh.upload(triangles)
        self._marker_mesh.vao.render(
            mode=self.ctx.TRIANGLES, vertices=self._marker_mesh.vertex_count
        )

    def release(self) -> None:
        """GPU リソースを解放する。"""
        self._outline_mesh.release()
        self._marker_mesh.release()
        self.line_program.release()
        self.fill_program.release()
        self.ctx.release()
