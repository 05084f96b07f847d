# どこで: `src/polychime/interactive/color.py`。
# 何を: Shape の色相 [deg] を描画用 RGB (0..1) に変換する。
# なぜ: 色空間変換を描画側に閉じ込め、core は色相だけを持てば済むようにするため。

from __future__ import annotations

import colorsys


def hue_to_rgb(hue_deg: float) -> tuple[float, float, float]:
    """彩度 1・明度 1 の色相 [deg] を RGB (0..1) に変換する。"""
    h = (float(hue_deg) % 360.0) / 360.0
    r, g, b = colorsys.hsv_to_rgb(h, 1.0, 1.0)
    return (float(r), float(g), float(b))
