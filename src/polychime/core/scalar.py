# どこで: `src/polychime/core/scalar.py`。
# 何を: Vector が要求するスカラー能力（Protocol）と、型を保ったまま浮動小数演算を行う補助関数を提供する。
# なぜ: float / np.float32 / Fraction などを 1 つの Vector 実装で扱い、メソッドごとに必要な能力だけを要求するため。

from __future__ import annotations

from fractions import Fraction
from typing import Any, Protocol, TypeVar, runtime_checkable

import numpy as np

T = TypeVar("T")


@runtime_checkable
class Addable(Protocol):
    """加減算と単項マイナスを持つスカラー（add / sub / neg 用）。"""

    def __add__(self, other: Any) -> Any: ...

    def __sub__(self, other: Any) -> Any: ...

    def __neg__(self) -> Any: ...


@runtime_checkable
class Scalable(Addable, Protocol):
    """スカラー倍と順序比較を持つスカラー（mul / dot / clamp / 半順序用）。"""

    def __mul__(self, other: Any) -> Any: ...

    def __lt__(self, other: Any) -> bool: ...

    def __gt__(self, other: Any) -> bool: ...

    def __le__(self, other: Any) -> bool: ...

    def __ge__(self, other: Any) -> bool: ...


@runtime_checkable
class FloatOps(Scalable, Protocol):
    """浮動小数演算（sqrt / trig / 除算）が意味を持つスカラー。

    Notes
    -----
    実際の演算は numpy ufunc 経由で行い、結果を入力と同じ型へ戻す。
    """

    def __truediv__(self, other: Any) -> Any: ...

    def __abs__(self) -> Any: ...

    def __float__(self) -> float: ...


# Vector の各メソッドが要求する能力ごとの型変数。
A = TypeVar("A", bound=Addable)
S = TypeVar("S", bound=Scalable)
F = TypeVar("F", bound=FloatOps)


def like(ref: Any, value: Any) -> Any:
    """`value` を `ref` のスカラー型へ揃える。

    numpy の浮動小数型はその型を保ち、それ以外（float / int / Fraction）は Python float にする。
    """
    if isinstance(ref, np.floating):
        return type(ref)(value)
    return float(value)


def _ufunc_input(value: Any) -> Any:
    # Fraction / int は object 配列扱いになるため、先に float へ落とす。
    if isinstance(value, np.floating):
        return value
    return float(value)


def sqrt(value: Any) -> Any:
    return like(value, np.sqrt(_ufunc_input(value)))


def atan2(y: Any, x: Any) -> Any:
    return like(y, np.arctan2(_ufunc_input(y), _ufunc_input(x)))


def sin(value: Any) -> Any:
    return like(value, np.sin(_ufunc_input(value)))


def cos(value: Any) -> Any:
    return like(value, np.cos(_ufunc_input(value)))


def sign(value: Any) -> Any:
    """符号 (-1 / 0 / +1) を入力と同じ浮動小数型で返す。NaN は NaN のまま。"""
    return like(value, np.sign(_ufunc_input(value)))


def is_nan(value: Any) -> bool:
    return bool(value != value)


def constant(ref: Any, value: float) -> Any:
    """定数 `value` を `ref` と演算しても型が崩れない形で返す。"""
    if isinstance(ref, np.floating):
        return type(ref)(value)
    if isinstance(ref, Fraction):
        return Fraction(value)
    if isinstance(ref, int) and float(value).is_integer():
        return int(value)
    return float(value)


def safe_ratio(numerator: T, denominator: T) -> T:
    """`numerator / denominator` を返す。分母 0 や NaN になる場合は 0 を返す。"""
    zero = constant(numerator, 0.0)
    if denominator == 0:
        return zero
    ratio = numerator / denominator  # type: ignore[operator]
    if is_nan(ratio):
        return zero
    return ratio


__all__ = [
    "A",
    "Addable",
    "F",
    "FloatOps",
    "S",
    "Scalable",
    "atan2",
    "constant",
    "cos",
    "is_nan",
    "like",
    "safe_ratio",
    "sign",
    "sin",
    "sqrt",
]
