"""
どこで: `src/polychime/core/vector.py`。2 次元ベクトル値型の実体。
何を: 算術・内積・大きさ/角度変換・矩形クランプ・move_towards・イージング付き lerp を持つ `Vector[T]` を定義する。
なぜ: アニメーションの毎フレーム更新で使う幾何演算を、スカラー型（float / float32 / Fraction）に依存せず一箇所へ集約するため。
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

import numpy as np

from polychime.core import scalar
from polychime.core.easing import easing, find_t_from_x
from polychime.core.scalar import A, F, S

T = TypeVar("T")

# lerp で t を進める刻みと、終点へスナップする閾値。
LERP_STEP = 0.01
LERP_SNAP = 0.01


@dataclass(frozen=True, slots=True, eq=False)
class Vector(Generic[T]):
    """不変な 2 次元ベクトル。

    Parameters
    ----------
    x : T
        x 成分。
    y : T
        y 成分。

    Notes
    -----
    - 等価判定は成分ごとの厳密比較（NaN を含むベクトルは自分自身とも等しくない）。
    - 順序は「両成分がそろって小さい/大きい」場合のみ定義される半順序。
    - 各メソッドは self の型注釈（`Vector[A]` / `Vector[S]` / `Vector[F]`）で要求するスカラー能力を示す。
      能力の定義は `polychime.core.scalar` の `Addable` / `Scalable` / `FloatOps`。
    """

    x: T
    y: T

    # numpy スカラーとの二項演算で配列化されず、__rmul__ へ委ねさせる。
    __array_ufunc__ = None

    # ---------- 生成 ----------
    @classmethod
    def zero(cls) -> Vector[float]:
        """加法単位元 (0, 0) を返す。"""
        return Vector(0.0, 0.0)

    @classmethod
    def one(cls) -> Vector[float]:
        """乗法単位元 (1, 1) を返す。"""
        return Vector(1.0, 1.0)

    @classmethod
    def magnitude_angle(cls, angle: F, magnitude: F) -> Vector[F]:
        """角度と大きさからベクトルを作る。

        Notes
        -----
        角度は +Y 軸から測る（x = m·sin, y = m·cos）。`angle()` の +X 軸基準とは逆変換にならない。
        """
        return Vector(magnitude * scalar.sin(angle), magnitude * scalar.cos(angle))

    @classmethod
    def from_point(cls, point: Sequence[Any]) -> Vector[Any]:
        """長さ 2 のシーケンス（タプル / numpy 行など）から作る。"""
        try:
            x, y = point
        except Exception as exc:
            raise ValueError(f"Vector.from_point は長さ 2 のシーケンスを要求する: got={point!r}") from exc
        return cls(x, y)

    # ---------- 変換 ----------
    def to_tuple(self) -> tuple[T, T]:
        return (self.x, self.y)

    def to_array(self, dtype: Any = np.float32) -> np.ndarray:
        """描画転送用に shape (2,) の numpy 配列へ変換する。"""
        return np.array([self.x, self.y], dtype=dtype)

    def __iter__(self) -> Iterator[T]:
        yield self.x
        yield self.y

    # ---------- 比較 ----------
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector):
            return NotImplemented
        return bool(self.x == other.x and self.y == other.y)

    def __hash__(self) -> int:
        return hash((self.x, self.y))

    def partial_cmp(self: Vector[S], other: Vector[S]) -> int | None:
        """半順序比較。両成分が大きければ 1、小さければ -1、等しければ 0、それ以外は None。"""
        if self.x > other.x and self.y > other.y:
            return 1
        if self.x < other.x and self.y < other.y:
            return -1
        if self.x == other.x and self.y == other.y:
            return 0
        return None

    def __lt__(self: Vector[S], other: Vector[S]) -> bool:
        return self.partial_cmp(other) == -1

    def __gt__(self: Vector[S], other: Vector[S]) -> bool:
        return self.partial_cmp(other) == 1

    def __le__(self: Vector[S], other: Vector[S]) -> bool:
        return self.partial_cmp(other) in (-1, 0)

    def __ge__(self: Vector[S], other: Vector[S]) -> bool:
        return self.partial_cmp(other) in (0, 1)

    # ---------- 算術（A: Addable / S: Scalable） ----------
    def __add__(self: Vector[A], other: Vector[A]) -> Vector[A]:
        if not isinstance(other, Vector):
            return NotImplemented
        return Vector(self.x + other.x, self.y + other.y)

    def __sub__(self: Vector[A], other: Vector[A]) -> Vector[A]:
        if not isinstance(other, Vector):
            return NotImplemented
        return Vector(self.x - other.x, self.y - other.y)

    def __neg__(self: Vector[A]) -> Vector[A]:
        return Vector(-self.x, -self.y)

    def __mul__(self: Vector[S], factor: Any) -> Vector[S]:
        if isinstance(factor, Vector):
            return NotImplemented
        return Vector(self.x * factor, self.y * factor)

    def __rmul__(self: Vector[S], factor: Any) -> Vector[S]:
        return self.__mul__(factor)

    def __truediv__(self: Vector[F], divisor: Any) -> Vector[F]:
        if isinstance(divisor, Vector):
            return NotImplemented
        return Vector(self.x / divisor, self.y / divisor)

    def dot(self: Vector[S], other: Vector[S]) -> S:
        """内積 `x1*x2 + y1*y2`。"""
        return self.x * other.x + self.y * other.y

    # ---------- 大きさ / 角度（F: FloatOps） ----------
    def magnitude(self: Vector[F]) -> F:
        return scalar.sqrt(self.x * self.x + self.y * self.y)

    def angle(self: Vector[F]) -> F:
        """`atan2(y, x)`（+X 軸基準）を返す。"""
        return scalar.atan2(self.y, self.x)

    def distance(self: Vector[F], other: Vector[F]) -> F:
        return (self - other).magnitude()

    def _scaled_to(self: Vector[F], magnitude: Any) -> Vector[F]:
        # ゼロベクトルは向きが無いのでそのまま返す（normalise / with_magnitude 共通）。
        current = self.magnitude()
        if current == 0:
            return self
        factor = magnitude / current
        return Vector(self.x * factor, self.y * factor)

    def normalise(self: Vector[F]) -> Vector[F]:
        """単位ベクトルを返す。ゼロベクトルはゼロベクトルのまま。"""
        return self._scaled_to(scalar.constant(self.magnitude(), 1.0))

    def with_magnitude(self: Vector[F], magnitude: F) -> Vector[F]:
        """大きさを `magnitude` に揃えたベクトルを返す。ゼロベクトルはそのまま。"""
        return self._scaled_to(magnitude)

    def clamp_magnitude(self: Vector[F], magnitude: F) -> Vector[F]:
        if self.magnitude() > magnitude:
            return self.with_magnitude(magnitude)
        return self

    # ---------- 移動 ----------
    def clamp(self: Vector[S], min: Vector[S], max: Vector[S]) -> Vector[S]:
        """2 隅 `min` / `max` が張る矩形へ軸ごとにクランプする。

        Notes
        -----
        軸ごとの向きは `min` と `max` の大小から推定するため、どちらの隅が大きくても良い。
        """
        one = scalar.constant(min.x, 1.0)
        x_sign = one if min.x < max.x else -one
        one = scalar.constant(min.y, 1.0)
        y_sign = one if min.y < max.y else -one

        x = self.x
        if x * x_sign > max.x * x_sign:
            x = max.x
        if x * x_sign < min.x * x_sign:
            x = min.x
        y = self.y
        if y * y_sign > max.y * y_sign:
            y = max.y
        if y * y_sign < min.y * y_sign:
            y = min.y
        return Vector(x, y)

    def move_towards(self: Vector[F], target: Vector[F], delta: F) -> Vector[F]:
        """`target` へ向かって大きさ `delta` だけ直線的に進んだ点を返す。

        Parameters
        ----------
        target : Vector[F]
            目標点。
        delta : F
            進む距離。

        Returns
        -------
        Vector[F]
            移動後の点。`self` と `target` の張る矩形へクランプするため `target` を越えない。
            `delta` が残り距離以上なら厳密に `target` を返す。
        """
        if self == target:
            return target
        if delta >= self.distance(target):
            return target

        dx = abs(self.x - target.x)
        dy = abs(self.y - target.y)
        x_speed = scalar.constant(dx, 1.0)
        y_speed = scalar.constant(dy, 1.0)
        # 1 ステップの x:y 比を残り距離の x:y 比に揃える。
        if dx > dy:
            y_speed = scalar.safe_ratio(dy, dx)
        else:
            x_speed = scalar.safe_ratio(dx, dy)

        diff = target - self
        step = Vector(
            x_speed * scalar.sign(diff.x),
            y_speed * scalar.sign(diff.y),
        ).with_magnitude(delta)
        return (self + step).clamp(self, target)

    def lerp(self: Vector[F], start: Vector[F], end: Vector[F], speed: F) -> Vector[F]:
        """区間 [start, end] 上の現在位置からイージング曲線に沿って 1 歩進めた点を返す。

        Parameters
        ----------
        start, end : Vector[F]
            区間の始点と終点。
        speed : F
            1 呼び出しあたりの t の進み（`0.01 * speed`）。

        Returns
        -------
        Vector[F]
            `start + (end - start) * easing(t)`。
            進めた t が [1 - 0.01, 1) に入った場合は漸近的な停滞を避けて `end` を返す。
        """
        if start == end:
            return end

        segment = end - start
        length = segment.magnitude()
        x = (self - start).dot(segment) / (length * length)
        t = find_t_from_x(x)

        step = scalar.constant(t, LERP_STEP) * speed
        if t > 1:
            t = t - step
        else:
            t = t + step

        one = scalar.constant(t, 1.0)
        if one - t <= LERP_SNAP and t < one:
            return end
        return start + segment * easing(t)


__all__ = ["LERP_SNAP", "LERP_STEP", "Vector"]
