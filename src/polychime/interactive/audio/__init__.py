# どこで: `src/polychime/interactive/audio/__init__.py`。
# 何を: 発音イベントの再生（pyglet.media）ユーティリティを提供する。
# なぜ: 音声デバイス依存を interactive 側に閉じ込め、core をヘッドレスに保つため。

from __future__ import annotations

from .tone_player import TonePlayer

__all__ = ["TonePlayer"]
