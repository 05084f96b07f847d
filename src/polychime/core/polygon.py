"""
どこで: `src/polychime/core/polygon.py`。正多角形の頂点列生成。
何を: 辺数と外接円半径から正多角形の頂点タプルを作り、内接円が前段の外接円に一致する入れ子の系列を構築する。
なぜ: アニメーションの各 Shape が辿る頂点列を、描画系から独立した純粋関数として用意するため。
"""

from __future__ import annotations

import math

from polychime.core.vector import Vector

Polygon = tuple[Vector[float], ...]

# 頂点 0 を真下（-Y）に置くための開始角。magnitude_angle は +Y 軸基準。
DEFAULT_PHASE = math.pi


def regular_polygon(
    sides: int,
    circumradius: float = 1.0,
    *,
    phase: float = DEFAULT_PHASE,
) -> Polygon:
    """正多角形の頂点列を生成する。

    Parameters
    ----------
    sides : int
        辺の数（3 以上）。
    circumradius : float, optional
        外接円半径。
    phase : float, optional
        頂点 0 の角度 [rad]（+Y 軸基準）。

    Returns
    -------
    Polygon
        原点中心、頂点 j の角度が `2π/sides * j + phase` の頂点タプル（閉じるための重複点は含まない）。
    """
    sides_i = int(sides)
    if sides_i < 3:
        raise ValueError(f"polygon の sides は 3 以上である必要がある: got={sides!r}")
    r = float(circumradius)
    step = 2.0 * math.pi / float(sides_i)
    return tuple(
        Vector.magnitude_angle(step * float(j) + float(phase), r) for j in range(sides_i)
    )


def inradius(sides: int, circumradius: float) -> float:
    """外接円半径から内接円半径を返す。"""
    return float(circumradius) * math.cos(math.pi / float(sides))


def next_circumradius(sides: int, previous_circumradius: float) -> float:
    """内接円半径が `previous_circumradius` と一致する `sides` 角形の外接円半径を返す。"""
    return float(previous_circumradius) * math.sqrt(math.tan(math.pi / float(sides)) ** 2 + 1.0)


def nested_polygons(count: int, base_circumradius: float = 1.0) -> list[Polygon]:
    """三角形から始まる入れ子の正多角形列を返す。

    Notes
    -----
    i 番目は `i + 3` 角形。各多角形の内接円は 1 つ前の外接円に一致する。
    """
    n = int(count)
    if n < 1:
        raise ValueError(f"nested_polygons の count は 1 以上である必要がある: got={count!r}")

    radius = float(base_circumradius)
    polygons = [regular_polygon(3, radius)]
    for sides in range(4, n + 3):
        radius = next_circumradius(sides, radius)
        polygons.append(regular_polygon(sides, radius))
    return polygons


__all__ = [
    "DEFAULT_PHASE",
    "Polygon",
    "inradius",
    "nested_polygons",
    "next_circumradius",
    "regular_polygon",
]
