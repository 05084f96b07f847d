# どこで: `src/polychime/interactive/runtime/frame_clock.py`。
# 何を: 更新ステップへ渡すフレーム経過秒 `dt` の生成規則を提供する。
# なぜ: 「通常は実時間」「検証/録画用は固定 fps」を分離して見通しを良くするため。

from __future__ import annotations

import time


class RealTimeClock:
    """実時間ベースのフレーム時計。

    Notes
    -----
    `tick()` は前回 `tick()`（初回は `start_time`）からの `perf_counter()` 差分（秒）を返す。
    """

    def __init__(self, *, start_time: float) -> None:
        self._last = float(start_time)

    def tick(self) -> float:
        """フレームを進め、経過秒 `dt` を返す。"""

        now = time.perf_counter()
        dt = max(0.0, float(now - self._last))
        self._last = float(now)
        return dt


class FixedStepClock:
    """固定 fps のフレーム時計。

    Notes
    -----
    `tick()` は常に `1/fps` を返す。実時間と切り離して、同じ入力で同じ軌跡を再現するために使う。
    """

    def __init__(self, *, fps: float) -> None:
        _fps = float(fps)
        if _fps <= 0:
            raise ValueError("fps は正の値である必要がある")
        self._fps = _fps
        self._frame_index = 0

    @property
    def fps(self) -> float:
        return float(self._fps)

    @property
    def frame_index(self) -> int:
        """進めたフレーム数を返す。"""

        return int(self._frame_index)

    def tick(self) -> float:
        """フレームを 1 つ進め、`1/fps` を返す。"""

        self._frame_index += 1
        return 1.0 / float(self._fps)
