"""frame_geometry（輪郭/マーカー配列化）のテスト群。"""

from __future__ import annotations

import numpy as np
import pytest

from polychime.core.animator import AnimationSettings, build_shapes
from polychime.core.vector import Vector
from polychime.interactive.frame_geometry import (
    MARKER_SEGMENTS,
    build_marker_triangles,
    marker_colors,
    pack_polygons,
)


def test_pack_polygons_offsets_and_coords() -> None:
    tri = (Vector(0.0, 0.0), Vector(1.0, 0.0), Vector(0.0, 1.0))
    quad = (Vector(0.0, 0.0), Vector(2.0, 0.0), Vector(2.0, 2.0), Vector(0.0, 2.0))
    packed = pack_polygons([tri, quad])

    assert packed.offsets.tolist() == [0, 3, 7]
    assert packed.coords.dtype == np.float32
    assert packed.coords.shape == (7, 2)
    np.testing.assert_array_equal(packed.coords[4], [2.0, 0.0])
    assert not packed.coords.flags.writeable


def test_pack_polygons_empty() -> None:
    packed = pack_polygons([])
    assert packed.offsets.tolist() == [0]
    assert packed.coords.shape == (0, 2)


def test_build_marker_triangles_layout() -> None:
    positions = [Vector(1.0, 2.0), Vector(-3.0, 0.5)]
    colors = [(1.0, 0.0, 0.0), (0.0, 0.0, 1.0)]
    tris = build_marker_triangles(positions, colors, 0.5, segments=8)

    assert tris.shape == (2 * 8 * 3, 5)
    assert tris.dtype == np.float32

    first = tris[: 8 * 3].reshape(8, 3, 5)
    # 各三角形の 1 頂点目は中心
    np.testing.assert_allclose(first[:, 0, :2], np.tile([1.0, 2.0], (8, 1)))
    # 外周の頂点は半径 0.5 上
    rim = first[:, 1, :2] - np.array([1.0, 2.0], dtype=np.float32)
    np.testing.assert_allclose(np.linalg.norm(rim, axis=1), 0.5, rtol=1e-5)
    np.testing.assert_allclose(tris[8 * 3 :, 2:], np.tile([0.0, 0.0, 1.0], (8 * 3, 1)))


def test_build_marker_triangles_default_segments() -> None:
    tris = build_marker_triangles([Vector(0.0, 0.0)], [(1.0, 1.0, 1.0)], 1.0)
    assert tris.shape == (MARKER_SEGMENTS * 3, 5)


def test_build_marker_triangles_empty() -> None:
    assert build_marker_triangles([], [], 1.0).shape == (0, 5)


def test_build_marker_triangles_rejects_bad_input() -> None:
    with pytest.raises(ValueError):
        build_marker_triangles([Vector(0.0, 0.0)], [], 1.0)
    with pytest.raises(ValueError):
        build_marker_triangles([Vector(0.0, 0.0)], [(1.0, 1.0, 1.0)], 1.0, segments=2)


def test_marker_colors_follow_hue() -> None:
    shapes = build_shapes(AnimationSettings(n=2))
    colors = marker_colors(shapes)
    assert len(colors) == 3
    assert colors[0] == pytest.approx((1.0, 0.0, 0.0))
    assert colors[1] == pytest.approx((0.0, 1.0, 0.0))
    assert colors[2] == pytest.approx((0.0, 0.0, 1.0))
