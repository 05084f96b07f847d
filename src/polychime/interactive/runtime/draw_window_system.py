# どこで: `src/polychime/interactive/runtime/draw_window_system.py`。
# 何を: アニメーションの状態更新・発音イベントの配送・描画ウィンドウへの描画をまとめたサブシステムを提供する。
# なぜ: `src/polychime/api/runner.py` の `run()` を「配線」に寄せ、1 フレームの責務を独立させるため。

from __future__ import annotations

import logging
import time

from pyglet.window import FPSDisplay, key

from polychime.core.animator import PolygonAnimator
from polychime.interactive.audio import TonePlayer
from polychime.interactive.draw_window import create_draw_window
from polychime.interactive.frame_geometry import (
    build_marker_triangles,
    marker_colors,
    pack_polygons,
)
from polychime.interactive.gl.draw_renderer import DrawRenderer
from polychime.interactive.render_settings import RenderSettings
from polychime.interactive.runtime.frame_clock import FixedStepClock, RealTimeClock

_logger = logging.getLogger(__name__)


class DrawWindowSystem:
    """描画（メインウィンドウ）のサブシステム。"""

    def __init__(
        self,
        animator: PolygonAnimator,
        *,
        settings: RenderSettings,
        tone_player: TonePlayer,
        vsync: bool = False,
        fixed_step_fps: float | None = None,
    ) -> None:
        """描画用の window/renderer を初期化する。"""

        self._animator = animator
        self._settings = settings
        self._tone_player = tone_player
        self._paused = False

        # 描画用の pyglet window を作成し、その window の OpenGL コンテキストに紐づく renderer を作る。
        self.window = create_draw_window(settings, vsync=vsync)
        self._renderer = DrawRenderer(self.window, settings)
        self._fps_display = FPSDisplay(self.window)
        self.window.push_handlers(on_key_press=self._on_key_press)

        # 多角形と色は構築後に変化しないため一度だけ配列化する。
        self._packed = pack_polygons(animator.polygons())
        self._colors = marker_colors(animator.shapes)

        self._clock: RealTimeClock | FixedStepClock
        if fixed_step_fps is not None:
            self._clock = FixedStepClock(fps=float(fixed_step_fps))
        else:
            self._clock = RealTimeClock(start_time=time.perf_counter())

    def _on_key_press(self, symbol: int, _modifiers: int) -> None:
        if symbol == key.SPACE:
            self._paused = not self._paused
            _logger.info("paused=%s", self._paused)

    def update(self) -> None:
        """状態を 1 フレーム進め、発生した発音イベントを配送する。"""

        dt = self._clock.tick()
        if self._paused:
            return
        events = self._animator.update(dt)
        if events:
            self._tone_player.dispatch(events)

    def _framebuffer_size(self) -> tuple[int, int]:
        getter = getattr(self.window, "get_framebuffer_size", None)
        if callable(getter):
            w, h = getter()
            return int(w), int(h)
        return int(self.window.width), int(self.window.height)

    def draw_frame(self) -> None:
        """1 フレーム分の描画を行う（`flip()` は呼ばない）。"""

        # 注: 呼び出し側（pyglet.window.Window.draw）が事前に self.window.switch_to() 済みである前提。
        self._renderer.ctx.screen.use()

        fb_w, fb_h = self._framebuffer_size()
        self._renderer.viewport(fb_w, fb_h)
        self._renderer.clear(self._settings.background_color)

        # --- 多角形の輪郭 ---
        self._renderer.render_outlines(
            self._packed,
            color=self._settings.line_color,
            thickness=self._settings.line_thickness,
        )

        # --- 巡回中の点 ---
        triangles = build_marker_triangles(
            self._animator.positions(),
            self._colors,
            self._settings.marker_radius,
        )
        self._renderer.render_markers(triangles)

        # --- FPS 表示（pyglet 側の描画）---
        self._fps_display.draw()

    def close(self) -> None:
        """GPU / window 資源を解放する。"""

        # renderer が保持している GPU リソースを破棄してから window を閉じる。
        self._renderer.release()
        self.window.close()
