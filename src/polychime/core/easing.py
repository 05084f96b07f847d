"""
どこで: `src/polychime/core/easing.py`。
何を: 3 次イージング曲線とその導関数、および曲線を逆算する減衰付き Newton 法を提供する。
なぜ: `Vector.lerp` が射影位置 x から進行度 t を復元するための純粋な数値ループを切り出すため。
"""

from __future__ import annotations

from polychime.core.scalar import F, constant, like

MAX_ITERATIONS = 5000
TOLERANCE = 1e-64


def easing(t: F) -> F:
    """イージング値 `2.25t - 1.5t² + 0.25t³` を返す。

    Notes
    -----
    `t > 1` では定義域外として 1 を返す（曲線を頭打ちにする）。
    """
    if t > 1:
        return constant(t, 1.0)
    return (
        constant(t, 2.25) * t
        - constant(t, 1.5) * t * t
        + constant(t, 0.25) * t * t * t
    )


def easing_derivative(t: F) -> F:
    """イージング曲線の導関数 `2.25 - 3t + 0.75t²` を返す。`t > 1` では 0。"""
    if t > 1:
        return constant(t, 0.0)
    return constant(t, 2.25) - constant(t, 3.0) * t + constant(t, 0.75) * t * t


def find_t_from_x(x: F) -> F:
    """`easing(t) ≈ x` となる t を Newton 法で求める。

    Parameters
    ----------
    x : F
        曲線上の目標値。通常は [0, 1]。

    Returns
    -------
    F
        求めた t。導関数が 0 になった時点で t=1 として打ち切る。

    Notes
    -----
    初期値 0.5、最大 `MAX_ITERATIONS` 回。`|easing(t) - x| < TOLERANCE` で早期終了する。
    収束しなくてもエラーにはせず、最後の t を返す。
    """
    # int / Fraction は浮動小数へ寄せる（有理数のまま反復すると桁が爆発する）。
    x = like(x, x)
    t = constant(x, 0.5)
    tolerance = constant(x, TOLERANCE)
    for _ in range(MAX_ITERATIONS):
        value = easing(t) - x
        derivative = easing_derivative(t)
        if abs(value) < tolerance:
            break
        if derivative == 0:
            t = constant(x, 1.0)
            break
        t = t - value / derivative
    return t


__all__ = ["MAX_ITERATIONS", "TOLERANCE", "easing", "easing_derivative", "find_t_from_x"]
