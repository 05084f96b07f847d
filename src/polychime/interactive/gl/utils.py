from __future__ import annotations

# どこで: `src/polychime/interactive/gl/utils.py`。
# 何を: 描画で使う小さなユーティリティ（投影行列生成）を提供する。
# なぜ: renderer 初期化等で共有し、座標系の定義を一箇所に集約するため。

import numpy as np


def build_projection(canvas_width: float, canvas_height: float, scale: float) -> "np.ndarray":
    """ウィンドウ中央を原点とする正射影行列（ModernGL 用の転置済み）を返す。

    Notes
    -----
    ワールド 1 単位を `scale` ピクセルに写し、+Y を画面下向きにする。
    """
    sx = 2.0 * scale / canvas_width
    sy = 2.0 * scale / canvas_height
    proj = np.array(
        [
            [sx, 0, 0, 0],
            [0, -sy, 0, 0],
            [0, 0, -1, 0],
            [0, 0, 0, 1],
        ],
        dtype="f4",
    ).T
    return proj
