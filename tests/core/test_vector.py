"""Vector の算術・大きさ・クランプ・move_towards・lerp に関するテスト群。"""

from __future__ import annotations

import math
from fractions import Fraction

import numpy as np
import pytest

from polychime.core.easing import easing
from polychime.core.vector import Vector

SAMPLES = [
    Vector(3.5, -2.0),
    Vector(-1.25, 7.0),
    Vector(0.0, 4.0),
    Vector(1e-3, -1e3),
]


@pytest.mark.parametrize("v", SAMPLES)
def test_add_negation_and_self_subtraction_give_zero(v: Vector[float]) -> None:
    """v + (-v) と v - v はゼロベクトルになる。"""
    assert v + (-v) == Vector.zero()
    assert v - v == Vector.zero()


def test_scalar_multiplication_from_both_sides() -> None:
    """スカラー倍は左右どちらからでも成分ごとに掛かる。"""
    v = Vector(1.5, -2.0)
    assert v * 2.0 == Vector(3.0, -4.0)
    assert 2.0 * v == Vector(3.0, -4.0)
    assert v / 2.0 == Vector(0.75, -1.0)


def test_dot_product() -> None:
    assert Vector(1.0, 2.0).dot(Vector(3.0, 4.0)) == 11.0


def test_identities() -> None:
    """zero / one は加法・乗法の単位元。"""
    v = Vector(2.0, -3.0)
    assert v + Vector.zero() == v
    assert Vector.one() == Vector(1.0, 1.0)


def test_magnitude_and_distance() -> None:
    assert Vector(3.0, 4.0).magnitude() == 5.0
    assert Vector(1.0, 1.0).distance(Vector(4.0, 5.0)) == 5.0


@pytest.mark.parametrize("v", SAMPLES)
@pytest.mark.parametrize("m", [0.0, 0.5, 1.0, 12.0])
def test_with_magnitude_rescales(v: Vector[float], m: float) -> None:
    """非ゼロベクトルは指定した大きさになる。"""
    assert v.with_magnitude(m).magnitude() == pytest.approx(m, abs=1e-9)


@pytest.mark.parametrize("m", [0.0, 1.0, 5.0, -2.0])
def test_with_magnitude_keeps_zero_vector(m: float) -> None:
    """ゼロベクトルは向きが無いのでそのまま返る。"""
    assert Vector.zero().with_magnitude(m) == Vector.zero()


def test_normalise_returns_unit_vector_and_guards_zero() -> None:
    """normalise は単位ベクトルを返し、ゼロベクトルでは NaN を出さない。"""
    unit = Vector(3.0, 4.0).normalise()
    assert unit.x == pytest.approx(0.6)
    assert unit.y == pytest.approx(0.8)

    zero = Vector.zero().normalise()
    assert zero == Vector.zero()
    assert not math.isnan(zero.x)


def test_clamp_magnitude() -> None:
    short = Vector(3.0, 4.0)
    assert short.clamp_magnitude(10.0) is short
    assert short.clamp_magnitude(1.0).magnitude() == pytest.approx(1.0)


def test_magnitude_angle_measures_from_positive_y() -> None:
    """magnitude_angle は +Y 軸基準（x=sin, y=cos）。"""
    assert Vector.magnitude_angle(0.0, 1.0) == Vector(0.0, 1.0)
    v = Vector.magnitude_angle(math.pi / 2.0, 2.0)
    assert v.x == pytest.approx(2.0)
    assert v.y == pytest.approx(0.0, abs=1e-12)


def test_angle_measures_from_positive_x() -> None:
    """angle は atan2(y, x)（+X 軸基準）。"""
    assert Vector(0.0, 1.0).angle() == pytest.approx(math.pi / 2.0)
    assert Vector(1.0, 0.0).angle() == 0.0


def test_angle_and_magnitude_angle_do_not_round_trip() -> None:
    """2 つの角度規約は互いの逆変換ではない。"""
    v = Vector(1.0, 0.0)
    back = Vector.magnitude_angle(v.angle(), v.magnitude())
    assert back == Vector(0.0, 1.0)
    assert back != v


def test_clamp_infers_direction_from_corners() -> None:
    """min/max の大小が逆でも軸ごとにクランプされる。"""
    assert Vector(5.0, -5.0).clamp(Vector(2.0, 2.0), Vector(0.0, 0.0)) == Vector(2.0, 0.0)
    assert Vector(5.0, -5.0).clamp(Vector(0.0, 0.0), Vector(2.0, 2.0)) == Vector(2.0, 0.0)
    assert Vector(1.0, 1.0).clamp(Vector(0.0, 2.0), Vector(2.0, 0.0)) == Vector(1.0, 1.0)


@pytest.mark.parametrize(
    "a, b",
    [
        (Vector(0.0, 0.0), Vector(2.0, 3.0)),
        (Vector(2.0, 3.0), Vector(0.0, 0.0)),
        (Vector(-1.0, 4.0), Vector(3.0, -2.0)),
        (Vector(1.0, 1.0), Vector(1.0, 5.0)),
    ],
)
def test_clamp_is_idempotent_and_within_bounds(a: Vector[float], b: Vector[float]) -> None:
    rng = np.random.default_rng(0)
    for x, y in rng.uniform(-6.0, 6.0, size=(50, 2)):
        once = Vector(float(x), float(y)).clamp(a, b)
        assert once.clamp(a, b) == once
        assert min(a.x, b.x) <= once.x <= max(a.x, b.x)
        assert min(a.y, b.y) <= once.y <= max(a.y, b.y)


def test_move_towards_same_point_stays() -> None:
    """目標が自分自身なら方向が無いので動かない。"""
    p = Vector(1.5, -0.5)
    assert p.move_towards(p, 3.0) == p
    assert p.move_towards(Vector(1.5, -0.5), 0.0) == p


@pytest.mark.parametrize(
    "start, end",
    [
        (Vector(0.0, 0.0), Vector(3.0, 4.0)),
        (Vector(0.1, 0.7), Vector(-0.3, 0.2)),
        (Vector(0.0, -1.0), Vector(0.8660254037844386, 0.5)),
    ],
)
def test_move_towards_exact_distance_lands_on_target(start: Vector[float], end: Vector[float]) -> None:
    """ちょうど残り距離だけ進むと厳密に目標へ着く。"""
    assert start.move_towards(end, start.distance(end)) == end


def test_move_towards_partial_step_follows_straight_line() -> None:
    moved = Vector(0.0, 0.0).move_towards(Vector(3.0, 4.0), 1.0)
    assert moved.x == pytest.approx(0.6)
    assert moved.y == pytest.approx(0.8)

    vertical = Vector(0.0, 0.0).move_towards(Vector(0.0, 2.0), 0.5)
    assert vertical == Vector(0.0, 0.5)


def test_move_towards_never_overshoots() -> None:
    target = Vector(1.0, 1.0)
    assert Vector(0.0, 0.0).move_towards(target, 100.0) == target


def test_float32_components_stay_float32() -> None:
    v = Vector(np.float32(3.0), np.float32(4.0))
    assert isinstance(v.magnitude(), np.float32)

    moved = v.move_towards(Vector(np.float32(0.0), np.float32(0.0)), np.float32(1.0))
    assert isinstance(moved.x, np.float32)
    assert isinstance(moved.y, np.float32)
    assert float(moved.magnitude()) == pytest.approx(4.0, abs=1e-5)


def test_fraction_components_are_exact() -> None:
    a = Vector(Fraction(1, 3), Fraction(1, 2))
    b = Vector(Fraction(2, 3), Fraction(1, 2))
    assert a + b == Vector(Fraction(1), Fraction(1))
    assert a.dot(b) == Fraction(2, 9) + Fraction(1, 4)
    assert Vector(Fraction(5), Fraction(-1)).clamp(Vector(Fraction(0), Fraction(0)), Vector(Fraction(1), Fraction(1))) == Vector(
        Fraction(1), Fraction(0)
    )


def test_partial_order_is_quadrant_based() -> None:
    assert Vector(1.0, 1.0) < Vector(2.0, 2.0)
    assert Vector(3.0, 3.0) > Vector(2.0, 2.0)
    assert Vector(1.0, 1.0) <= Vector(1.0, 1.0)

    mixed_a, mixed_b = Vector(1.0, 3.0), Vector(2.0, 2.0)
    assert mixed_a.partial_cmp(mixed_b) is None
    assert not mixed_a < mixed_b
    assert not mixed_a > mixed_b


def test_equality_is_exact_and_nan_is_unequal() -> None:
    v = Vector(float("nan"), 0.0)
    assert v != v
    assert Vector(0.1 + 0.2, 0.0) != Vector(0.3, 0.0)
    assert {Vector(1.0, 2.0), Vector(1.0, 2.0)} == {Vector(1.0, 2.0)}


def test_conversions() -> None:
    v = Vector.from_point((1.0, 2.0))
    assert v == Vector(1.0, 2.0)
    assert v.to_tuple() == (1.0, 2.0)
    assert tuple(v) == (1.0, 2.0)
    arr = v.to_array()
    assert arr.dtype == np.float32
    assert arr.tolist() == [1.0, 2.0]

    with pytest.raises(ValueError):
        Vector.from_point((1.0, 2.0, 3.0))


def test_lerp_degenerate_segment_returns_end() -> None:
    end = Vector(2.0, 2.0)
    assert Vector(0.0, 0.0).lerp(Vector(2.0, 2.0), end, 1.0) is end


def test_lerp_from_start_takes_a_small_eased_step() -> None:
    """始点からは t を 0.01 進めた位置（イージングで約 2.2%）へ進む。"""
    start, end = Vector(0.0, 0.0), Vector(1.0, 0.0)
    out = start.lerp(start, end, 1.0)
    assert 0.0 < out.x < 0.05
    assert out.y == 0.0


def test_lerp_snaps_to_end_near_the_asymptote() -> None:
    """進めた t が [0.99, 1) に入ると終点へスナップする。"""
    start, end = Vector(0.0, 0.0), Vector(1.0, 0.0)
    out = Vector(0.99983, 0.0).lerp(start, end, 1.0)
    assert out == end


def test_lerp_progress_is_monotonic() -> None:
    start, end = Vector(0.0, 0.0), Vector(2.0, 1.0)
    p = start
    xs = []
    for _ in range(40):
        p = p.lerp(start, end, 1.0)
        xs.append(p.x)
    assert all(b >= a for a, b in zip(xs, xs[1:]))
    assert xs[-1] <= end.x


@pytest.mark.parametrize("speed", [0.5, 2.0, 3.0])
def test_lerp_step_scales_with_speed(speed: float) -> None:
    """t の進み幅は 0.01 * speed。"""
    start, end = Vector(0.0, 0.0), Vector(1.0, 0.0)
    out = start.lerp(start, end, speed)
    assert out.x == pytest.approx(easing(0.01 * speed), abs=1e-9)
    assert out.x > start.lerp(start, end, speed / 2.0).x


def test_lerp_keeps_float32() -> None:
    zero = np.float32(0.0)
    start = Vector(zero, zero)
    end = Vector(np.float32(1.0), zero)
    out = start.lerp(start, end, np.float32(2.0))
    assert isinstance(out.x, np.float32)
    assert isinstance(out.y, np.float32)
    assert float(out.x) == pytest.approx(easing(0.02), abs=1e-5)
