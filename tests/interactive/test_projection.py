"""build_projection の座標系テスト。"""

from __future__ import annotations

import numpy as np

from polychime.interactive.gl.utils import build_projection


def _to_ndc(proj: np.ndarray, x: float, y: float) -> np.ndarray:
    # ModernGL 用に転置済みなので、列ベクトル演算には戻して使う。
    return proj.T @ np.array([x, y, 0.0, 1.0], dtype=np.float32)


def test_origin_maps_to_center() -> None:
    proj = build_projection(1000.0, 1000.0, 100.0)
    np.testing.assert_allclose(_to_ndc(proj, 0.0, 0.0)[:2], [0.0, 0.0])


def test_world_units_scale_and_y_points_down() -> None:
    """ワールド 5 単位 = 500px = 画面端。+Y は画面下。"""
    proj = build_projection(1000.0, 1000.0, 100.0)
    np.testing.assert_allclose(_to_ndc(proj, 5.0, 0.0)[:2], [1.0, 0.0])
    np.testing.assert_allclose(_to_ndc(proj, 0.0, 5.0)[:2], [0.0, -1.0])
    assert proj.dtype == np.float32
