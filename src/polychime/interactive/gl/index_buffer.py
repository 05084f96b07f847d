# どこで: `src/polychime/interactive/gl/index_buffer.py`。
# 何を: 多角形の offsets から「閉じた」GL_LINE_STRIP 用インデックス配列を生成する。
# なぜ: インデックス生成を純粋関数として切り出し、テストしやすくするため。

from __future__ import annotations

from functools import lru_cache

import numpy as np
from numba import njit  # type: ignore[attr-defined]

from polychime.interactive.gl.line_mesh import LineMesh


def build_loop_indices(offsets: np.ndarray) -> np.ndarray:
    """offsets から閉ループ用インデックス配列を生成する。

    Notes
    -----
    - 各多角形は `start..end-1` の後に `start` を再度出力して閉じる。
    - 複数の多角形を 1 draw call で描くため、間に PRIMITIVE_RESTART_INDEX を挿入する。
    - 多角形の頂点数は毎フレーム変わらないため、offsets の内容で LRU キャッシュする。
    """
    offsets_i32 = np.asarray(offsets, dtype=np.int32)
    if offsets_i32.size < 2:
        return np.zeros((0,), dtype=np.uint32)
    return _build_loop_indices_cached(offsets_i32.tobytes())


@lru_cache(maxsize=16)
def _build_loop_indices_cached(offsets_bytes: bytes) -> np.ndarray:
    offsets = np.frombuffer(offsets_bytes, dtype=np.int32)
    out = _build_loop_indices_numba(offsets, np.uint32(LineMesh.PRIMITIVE_RESTART_INDEX))
    out.setflags(write=False)
    return out


@njit(cache=True)  # type: ignore[misc]
def _build_loop_indices_numba(offsets: np.ndarray, restart_index: np.uint32) -> np.ndarray:
    """閉じた LINE_STRIP + primitive restart 用の indices を生成する（Numba 版）。"""
    n = offsets.shape[0]
    if n < 2:
        return np.empty((0,), dtype=np.uint32)

    total = 0
    loops = 0
    for i in range(n - 1):
        length = offsets[i + 1] - offsets[i]
        # 2 頂点未満では線にならない。
        if length >= 2:
            total += length + 1
            loops += 1

    if loops == 0:
        return np.empty((0,), dtype=np.uint32)

    out = np.empty((total + loops - 1,), dtype=np.uint32)
    cursor = 0
    emitted_any = False
    for i in range(n - 1):
        start = offsets[i]
        end = offsets[i + 1]
        if end - start < 2:
            continue

        if emitted_any:
            out[cursor] = restart_index
            cursor += 1

        for j in range(start, end):
            out[cursor] = j
            cursor += 1
        out[cursor] = start
        cursor += 1

        emitted_any = True

    return out
