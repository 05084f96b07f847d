# どこで: `src/polychime/__init__.py`。
# 何を: ルート `polychime` パッケージを定義する。
# なぜ: import 起点を `polychime` に統一するため。

from __future__ import annotations

from polychime.api import run
from polychime.core.animator import AnimationSettings, PolygonAnimator, ToneEvent
from polychime.core.vector import Vector

__all__ = ["AnimationSettings", "PolygonAnimator", "ToneEvent", "Vector", "run"]
