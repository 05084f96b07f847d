"""
どこで: `src/polychime/interactive/frame_geometry.py`。
何を: Shape の頂点列・現在位置・色相を、GPU へ送れる numpy 配列（輪郭線の coords/offsets とマーカー三角形）へ詰める。
なぜ: 配列化を GL から切り離した純粋関数にして、ウィンドウ無しでテストできるようにするため。
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from polychime.core.animator import Shape
from polychime.core.polygon import Polygon
from polychime.core.vector import Vector
from polychime.interactive.color import hue_to_rgb

MARKER_SEGMENTS = 32


@dataclass(frozen=True, slots=True)
class PackedPolygons:
    """多角形輪郭の頂点配列。

    Parameters
    ----------
    coords : np.ndarray
        float32 型 shape (N, 2) の頂点配列（閉じるための重複点は含まない）。
    offsets : np.ndarray
        int32 型 shape (M+1,) の多角形開始インデックス配列。
    """

    coords: np.ndarray
    offsets: np.ndarray


def pack_polygons(polygons: Sequence[Polygon]) -> PackedPolygons:
    """多角形列を coords/offsets 形式へまとめる。"""
    counts = [len(p) for p in polygons]
    offsets = np.zeros((len(counts) + 1,), dtype=np.int32)
    if counts:
        offsets[1:] = np.cumsum(counts, dtype=np.int32)

    coords = np.empty((int(offsets[-1]), 2), dtype=np.float32)
    cursor = 0
    for polygon in polygons:
        for vertex in polygon:
            coords[cursor] = vertex.to_array(np.float32)
            cursor += 1

    coords.setflags(write=False)
    offsets.setflags(write=False)
    return PackedPolygons(coords=coords, offsets=offsets)


def _unit_fan(segments: int) -> np.ndarray:
    angles = np.linspace(0.0, 2.0 * math.pi, num=segments + 1, dtype=np.float64)
    return np.stack([np.cos(angles), np.sin(angles)], axis=1)


def build_marker_triangles(
    positions: Sequence[Vector[float]],
    colors: Sequence[tuple[float, float, float]],
    radius: float,
    *,
    segments: int = MARKER_SEGMENTS,
) -> np.ndarray:
    """塗り円マーカーを三角形リスト (x, y, r, g, b) に展開する。

    Returns
    -------
    np.ndarray
        float32 型 shape (len(positions) * segments * 3, 5)。
    """
    if len(positions) != len(colors):
        raise ValueError("positions と colors の長さが一致しません")
    seg = int(segments)
    if seg < 3:
        raise ValueError(f"segments は 3 以上である必要がある: got={segments!r}")
    if not positions:
        return np.zeros((0, 5), dtype=np.float32)

    rim = _unit_fan(seg) * float(radius)
    out = np.empty((len(positions), seg, 3, 5), dtype=np.float32)
    for k, (p, rgb) in enumerate(zip(positions, colors)):
        center = np.array([float(p.x), float(p.y)], dtype=np.float64)
        out[k, :, 0, :2] = center
        out[k, :, 1, :2] = center + rim[:-1]
        out[k, :, 2, :2] = center + rim[1:]
        out[k, :, :, 2:] = rgb
    return out.reshape(-1, 5)


def marker_colors(shapes: Sequence[Shape]) -> list[tuple[float, float, float]]:
    return [hue_to_rgb(shape.hue) for shape in shapes]
