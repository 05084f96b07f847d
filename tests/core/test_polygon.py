"""正多角形の頂点生成と入れ子系列のテスト群。"""

from __future__ import annotations

import math

import pytest

from polychime.core.polygon import inradius, nested_polygons, next_circumradius, regular_polygon


def test_regular_polygon_starts_below_origin() -> None:
    """頂点 0 は真下（-Y）に置かれる。"""
    tri = regular_polygon(3)
    assert len(tri) == 3
    assert tri[0].x == pytest.approx(0.0, abs=1e-12)
    assert tri[0].y == pytest.approx(-1.0)


@pytest.mark.parametrize("sides", [3, 4, 5, 8])
def test_regular_polygon_vertices_lie_on_circumcircle(sides: int) -> None:
    poly = regular_polygon(sides, 2.5)
    assert len(poly) == sides
    for v in poly:
        assert v.magnitude() == pytest.approx(2.5)


@pytest.mark.parametrize("sides", [3, 4, 7])
def test_regular_polygon_edges_are_equal(sides: int) -> None:
    poly = regular_polygon(sides)
    edges = [poly[j].distance(poly[(j + 1) % sides]) for j in range(sides)]
    expected = 2.0 * math.sin(math.pi / sides)
    for e in edges:
        assert e == pytest.approx(expected)


@pytest.mark.parametrize("sides", [0, 1, 2])
def test_regular_polygon_rejects_degenerate_side_counts(sides: int) -> None:
    with pytest.raises(ValueError):
        regular_polygon(sides)


def test_next_circumradius_matches_previous_inradius() -> None:
    r = next_circumradius(4, 1.0)
    assert inradius(4, r) == pytest.approx(1.0)
    assert r == pytest.approx(math.sqrt(2.0))


def test_nested_polygons_side_counts() -> None:
    polys = nested_polygons(4)
    assert [len(p) for p in polys] == [3, 4, 5, 6]


def test_nested_polygons_inscribe_previous_circumcircle() -> None:
    """各多角形の内接円は 1 つ前の外接円に一致する。"""
    polys = nested_polygons(6)
    radii = [p[0].magnitude() for p in polys]
    assert radii[0] == pytest.approx(1.0)
    for k in range(1, len(polys)):
        assert inradius(len(polys[k]), radii[k]) == pytest.approx(radii[k - 1])


def test_nested_polygons_single_triangle() -> None:
    polys = nested_polygons(1)
    assert len(polys) == 1
    assert len(polys[0]) == 3


def test_nested_polygons_rejects_empty() -> None:
    with pytest.raises(ValueError):
        nested_polygons(0)
