# どこで: `src/polychime/interactive/runtime/window_loop.py`。
# 何を: pyglet の app loop（`pyglet.app.run()`）で「状態更新 → 描画」を 1 フレームずつ回す最小ランナーを提供する。
# なぜ: 1 フレームの順序（更新が終わってから描画が読む）をここで固定し、イベント配送は pyglet に任せるため。

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

import pyglet


@dataclass(frozen=True, slots=True)
class WindowTask:
    """pyglet window と「flip しない描画関数」を束ねる。"""

    # 注: pyglet の Window 型は環境/バージョン差があるため Any に寄せる。
    window: Any

    # 1フレーム分の描画処理（back buffer へ描くだけ）。
    # `switch_to()` / `flip()` は pyglet（`Window.draw()`）が担当する前提。
    draw_frame: Callable[[], None]


class FrameLoop:
    """更新と描画を同一ループで回す。"""

    def __init__(
        self,
        task: WindowTask,
        *,
        fps: float,
        on_frame_start: Callable[[], None],
    ) -> None:
        """ループを初期化する。

        Parameters
        ----------
        task : WindowTask
            描画したいウィンドウと描画処理。
        fps : float
            目標フレームレート。`<=0` の場合はスロットリングしない。
        on_frame_start : Callable[[], None]
            各フレーム冒頭（描画前）に呼ぶ状態更新。
        """

        self._task = task
        self._fps = float(fps)
        self._on_frame_start = on_frame_start

    def run(self) -> None:
        """ウィンドウが閉じられるまでループを実行する。"""

        task = self._task

        def request_exit(*_: object) -> None:
            # pyglet の on_close から呼ばれるコールバックは引数が来る場合があるため *args を受ける。
            pyglet.app.exit()

        task.window.push_handlers(on_close=request_exit)
        task.window.push_handlers(on_draw=task.draw_frame)

        # 1フレームは「状態更新 → Window.draw（on_draw→flip）」の順で進める。
        def step(dt: float) -> None:
            self._on_frame_start()
            if task.window not in pyglet.app.windows:
                return
            task.window.draw(dt)

        if self._fps <= 0:
            pyglet.clock.schedule(step)
        else:
            pyglet.clock.schedule_interval(step, 1.0 / float(self._fps))

        try:
            pyglet.app.run(interval=None)
        finally:
            pyglet.clock.unschedule(step)
