# どこで: `src/polychime/interactive/render_settings.py`。
# 何を: interactive 描画設定の束を表すデータクラスを定義する。
# なぜ: `run` の引数を簡潔に保ちつつ、ウィンドウ/レンダラー側の設定を一元管理するため。

from __future__ import annotations

from dataclasses import dataclass

from polychime.core.runtime_config import RuntimeConfig


@dataclass(frozen=True, slots=True)
class RenderSettings:
    """リアルタイム描画に用いる設定値の集合。

    Notes
    -----
    ワールド座標は原点がウィンドウ中央、+Y が画面下向き。`render_scale` はワールド 1 単位あたりのピクセル数。
    """

    background_color: tuple[float, float, float] = (0.0, 0.0, 0.0)
    line_color: tuple[float, float, float] = (1.0, 1.0, 1.0)
    line_thickness: float = 0.1
    marker_radius: float = 0.2
    render_scale: float = 100.0
    canvas_size: tuple[int, int] = (1000, 1000)
    borderless: bool = True

    @classmethod
    def from_config(cls, cfg: RuntimeConfig) -> RenderSettings:
        return cls(
            background_color=cfg.background_color,
            line_color=cfg.line_color,
            line_thickness=float(cfg.line_thickness),
            marker_radius=float(cfg.marker_radius),
            render_scale=float(cfg.render_scale),
            canvas_size=cfg.window_size,
            borderless=bool(cfg.borderless),
        )
