"""
どこで: `src/polychime/core/animator.py`。アニメーションの状態更新（ドライバ）。
何を: 入れ子の正多角形ごとに「現在位置・目標頂点・速度係数」を保持し、毎フレーム頂点を巡回させて発音イベントを返す。
なぜ: 描画/音声から切り離した純粋な更新ステップにして、デバイス無しでテストできるようにするため。
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from polychime.core.polygon import Polygon, nested_polygons
from polychime.core.vector import Vector

_logger = logging.getLogger(__name__)

# sync=False のときに全 Shape で共有する周回係数。
UNSYNCED_CYCLE_FACTOR = 6.5
# フレーム経過秒をこの値で割ってから速度係数を掛ける。
TIME_DIVISOR = 4.0


@dataclass(frozen=True, slots=True)
class AnimationSettings:
    """構築時に固定されるアニメーション設定。

    Parameters
    ----------
    sync : bool
        True なら 1 周の所要時間を全 Shape で揃える（速度係数に辺数を掛ける）。
    n : int
        基準の三角形に追加する多角形の数（Shape 数は n + 1）。
    speed : float
        全体の速度倍率。
    base_frequency : float
        発音周波数の基準 [Hz]。
    frequency_span : float
        周波数の増分を決める幅 [Hz]。増分は `frequency_span / max(n, 1)`。
    amplitude : float
        発音の振幅。
    duration : float
        発音の長さ [s]。
    """

    sync: bool = False
    n: int = 5
    speed: float = 1.0
    base_frequency: float = 400.0
    frequency_span: float = 1600.0
    amplitude: float = 0.02
    duration: float = 0.2

    def __post_init__(self) -> None:
        if int(self.n) < 0:
            raise ValueError(f"n は 0 以上である必要がある: got={self.n!r}")
        speed = float(self.speed)
        if not math.isfinite(speed) or speed <= 0.0:
            raise ValueError(f"speed は正の有限値である必要がある: got={self.speed!r}")
        if float(self.duration) <= 0.0:
            raise ValueError(f"duration は正の値である必要がある: got={self.duration!r}")

    @property
    def shape_count(self) -> int:
        return int(self.n) + 1

    def frequency_for(self, sides: int) -> float:
        """`sides` 角形に割り当てる周波数 [Hz] を返す。"""
        increment = float(self.frequency_span) / float(max(int(self.n), 1))
        return float(self.base_frequency) + float(sides - 2) * increment


@dataclass(frozen=True, slots=True)
class ToneEvent:
    """頂点 1 への到達で発生する発音要求。"""

    shape_index: int
    frequency: float
    amplitude: float
    duration: float


@dataclass(slots=True)
class Shape:
    """1 つの多角形と、その上を巡回する点の状態。"""

    vertices: Polygon
    position: Vector[float]
    index: int
    distance_scalar: float
    frequency: float
    hue: float

    @property
    def sides(self) -> int:
        return len(self.vertices)

    @property
    def target(self) -> Vector[float]:
        return self.vertices[self.index]


def build_shapes(settings: AnimationSettings) -> list[Shape]:
    """設定から初期状態の Shape 列を構築する。

    Notes
    -----
    各 Shape は頂点 0 上、目標 index 0 から始まる。
    速度係数は「最初の辺の長さ × (辺数 × speed | 6.5 × speed)」。
    """
    polygons = nested_polygons(settings.shape_count)
    count = len(polygons)
    speed = float(settings.speed)

    shapes: list[Shape] = []
    for i, vertices in enumerate(polygons):
        sides = len(vertices)
        edge = vertices[0].distance(vertices[1])
        factor = float(sides) * speed if settings.sync else UNSYNCED_CYCLE_FACTOR * speed
        shapes.append(
            Shape(
                vertices=vertices,
                position=vertices[0],
                index=0,
                distance_scalar=float(edge * factor),
                frequency=settings.frequency_for(sides),
                hue=360.0 / float(count) * float(i),
            )
        )
    return shapes


class PolygonAnimator:
    """全 Shape の巡回状態を 1 tick ずつ進めるドライバ。"""

    def __init__(self, shapes: list[Shape], settings: AnimationSettings) -> None:
        self._shapes = list(shapes)
        self._settings = settings

    @classmethod
    def from_settings(cls, settings: AnimationSettings) -> PolygonAnimator:
        shapes = build_shapes(settings)
        _logger.debug(
            "built %d shapes (sync=%s, speed=%s)", len(shapes), settings.sync, settings.speed
        )
        return cls(shapes, settings)

    @property
    def settings(self) -> AnimationSettings:
        return self._settings

    @property
    def shapes(self) -> tuple[Shape, ...]:
        return tuple(self._shapes)

    def positions(self) -> list[Vector[float]]:
        return [shape.position for shape in self._shapes]

    def polygons(self) -> list[Polygon]:
        return [shape.vertices for shape in self._shapes]

    def update(self, dt: float) -> list[ToneEvent]:
        """全 Shape を `dt` 秒ぶん進め、この tick に発生した発音イベントを返す。

        Parameters
        ----------
        dt : float
            前フレームからの経過秒。

        Returns
        -------
        list[ToneEvent]
            目標 index が 1 に進んだ Shape ごとの発音要求（Shape 順）。
        """
        dt_f = float(dt)
        if dt_f < 0.0:
            raise ValueError(f"dt は 0 以上である必要がある: got={dt!r}")

        events: list[ToneEvent] = []
        for i, shape in enumerate(self._shapes):
            step = dt_f / TIME_DIVISOR * shape.distance_scalar
            self._advance(i, shape, step, events)
        return events

    def _advance(self, shape_index: int, shape: Shape, step: float, events: list[ToneEvent]) -> None:
        budget = step
        idle_hops = 0
        while True:
            target = shape.target
            remaining = shape.position.distance(target)
            shape.position = shape.position.move_towards(target, budget)
            if shape.position != target:
                return

            shape.index = (shape.index + 1) % shape.sides
            if shape.index == 1:
                events.append(
                    ToneEvent(
                        shape_index=shape_index,
                        frequency=shape.frequency,
                        amplitude=float(self._settings.amplitude),
                        duration=float(self._settings.duration),
                    )
                )

            # 到達で余った距離は同じ tick のうちに次の辺へ持ち越す。
            if not budget > remaining:
                return
            budget = budget - remaining

            # 全頂点が重なった退化ケースでは距離が減らないため 1 周で打ち切る。
            if remaining == 0:
                idle_hops += 1
                if idle_hops >= shape.sides:
                    return
            else:
                idle_hops = 0


__all__ = [
    "AnimationSettings",
    "PolygonAnimator",
    "Shape",
    "TIME_DIVISOR",
    "ToneEvent",
    "UNSYNCED_CYCLE_FACTOR",
    "build_shapes",
]
