"""
どこで: `src/polychime/api/runner.py`。公開 API のランナー実装。
何を: 設定を解決してアニメーション・音声・描画ウィンドウを組み立て、pyglet のループで回す。
なぜ: `main.py` を実行して多角形の巡回と発音を実際に確認できる経路を用意するため。
"""

from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path
from typing import Callable

from polychime.core.animator import PolygonAnimator
from polychime.core.runtime_config import runtime_config, set_config_path
from polychime.interactive.audio import TonePlayer
from polychime.interactive.render_settings import RenderSettings
from polychime.interactive.runtime.draw_window_system import DrawWindowSystem
from polychime.interactive.runtime.window_loop import FrameLoop, WindowTask

_logger = logging.getLogger(__name__)


def run(
    *,
    sync: bool | None = None,
    n: int | None = None,
    speed: float | None = None,
    audio: bool | None = None,
    fps: float | None = None,
    fixed_step_fps: float | None = None,
    config_path: str | Path | None = None,
) -> None:
    """pyglet ウィンドウを生成し、入れ子の多角形を巡回する点をリアルタイム描画する。

    Parameters
    ----------
    sync : bool | None
        True なら全多角形の 1 周の所要時間を揃える。None は config の値。
    n : int | None
        基準の三角形に追加する多角形の数。None は config の値。
    speed : float | None
        全体の速度倍率。None は config の値。
    audio : bool | None
        False で発音を無効化する。None は config の値。
    fps : float | None
        目標フレームレート。`<=0` はスロットリング無し。None は config の値。
    fixed_step_fps : float | None
        指定すると実時間ではなく `1/fixed_step_fps` 秒ずつ状態を進める。
    config_path : str | Path | None
        明示的に読む config.yaml。

    Returns
    -------
    None
        ウィンドウを閉じると制御を返す。
    """

    if config_path is not None:
        set_config_path(config_path)
    cfg = runtime_config()

    # 引数で与えたものだけ config を上書きする。
    overrides: dict[str, object] = {}
    if sync is not None:
        overrides["sync"] = bool(sync)
    if n is not None:
        overrides["n"] = int(n)
    if speed is not None:
        overrides["speed"] = float(speed)
    animation = replace(cfg.animation_settings(), **overrides)

    audio_enabled = cfg.audio_enabled if audio is None else bool(audio)
    target_fps = cfg.fps if fps is None else float(fps)

    # 音声デバイスが取れない場合はここで失敗させる（ウィンドウを作る前）。
    tone_player = TonePlayer(enabled=audio_enabled)
    animator = PolygonAnimator.from_settings(animation)
    settings = RenderSettings.from_config(cfg)

    draw_window = DrawWindowSystem(
        animator,
        settings=settings,
        tone_player=tone_player,
        vsync=cfg.vsync,
        fixed_step_fps=fixed_step_fps,
    )
    draw_window.window.set_location(*cfg.window_position)
    _logger.info(
        "polychime: shapes=%d sync=%s speed=%s audio=%s",
        len(animator.shapes),
        animation.sync,
        animation.speed,
        audio_enabled,
    )

    # `closers` は teardown 用（close 順もここで管理する）。
    closers: list[Callable[[], None]] = [draw_window.close]
    loop = FrameLoop(
        WindowTask(window=draw_window.window, draw_frame=draw_window.draw_frame),
        fps=target_fps,
        on_frame_start=draw_window.update,
    )

    try:
        loop.run()
    finally:
        for close in closers:
            try:
                close()
            except Exception:
                _logger.exception("Failed to close subsystem")
