# どこで: `src/polychime/interactive/audio/tone_player.py`。
# 何を: `ToneEvent` を pyglet.media のサイン波として「投げっぱなし」で再生する。
# なぜ: 更新ステップが返したイベントを描画ループ側でまとめて捌き、core から音声デバイスを切り離すため。

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

import pyglet
from pyglet.media import synthesis

from polychime.core.animator import ToneEvent

_logger = logging.getLogger(__name__)


class TonePlayer:
    """発音イベントをサイン波として再生する。

    Notes
    -----
    - 構築時に音声ドライバを取得できなければ RuntimeError（起動失敗）とする。
    - 再生中の失敗はログに残すだけで呼び出し側へは伝えない。
    - 再生は追跡しない。同じ音を重ねて鳴らせるよう StaticSource をキャッシュして使い回す。
    """

    def __init__(self, *, enabled: bool = True) -> None:
        self._enabled = bool(enabled)
        self._sources: dict[tuple[float, float, float], Any] = {}
        if not self._enabled:
            return

        driver = pyglet.media.get_audio_driver()
        if driver is None:
            raise RuntimeError("音声出力ドライバを取得できません（pyglet.options['audio'] を確認してください）")
        _logger.info("audio driver: %s", type(driver).__name__)

    @property
    def enabled(self) -> bool:
        return self._enabled

    def _source_for(self, event: ToneEvent) -> Any:
        key = (float(event.frequency), float(event.amplitude), float(event.duration))
        source = self._sources.get(key)
        if source is None:
            sine = synthesis.Sine(
                float(event.duration),
                frequency=float(event.frequency),
                envelope=synthesis.FlatEnvelope(float(event.amplitude)),
            )
            source = pyglet.media.StaticSource(sine)
            self._sources[key] = source
        return source

    def play(self, event: ToneEvent) -> None:
        """1 つのイベントを再生する（失敗はログのみ）。"""
        if not self._enabled:
            return
        try:
            self._source_for(event).play()
        except Exception:
            _logger.exception(
                "Failed to play tone: shape=%d frequency=%.1fHz",
                event.shape_index,
                event.frequency,
            )

    def dispatch(self, events: Iterable[ToneEvent]) -> None:
        """1 tick 分のイベントをまとめて再生する。

        Notes
        -----
        長い停止の後は 1 tick で同じ Shape が何周もし得る。同じ音が重なって音量が跳ねないよう、
        Shape ごとに最初の 1 件だけを鳴らす。
        """
        played: set[int] = set()
        for event in events:
            if event.shape_index in played:
                continue
            played.add(event.shape_index)
            self.play(event)
