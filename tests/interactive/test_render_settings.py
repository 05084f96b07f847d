"""RenderSettings の config からの構築テスト。"""

from __future__ import annotations

from pathlib import Path

import pytest

from polychime.core.runtime_config import runtime_config, set_config_path
from polychime.interactive.render_settings import RenderSettings


@pytest.fixture(autouse=True)
def _reset_runtime_config() -> None:
    set_config_path(None)
    yield
    set_config_path(None)


def test_from_packaged_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """既定では線幅 0.1（scale 100 で 10px）、マーカー半径 0.2。"""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))

    settings = RenderSettings.from_config(runtime_config())
    assert settings.line_thickness == 0.1
    assert settings.line_thickness * settings.render_scale == pytest.approx(10.0)
    assert settings.marker_radius == 0.2
    assert settings.canvas_size == (1000, 1000)
    assert settings.borderless is True


def test_defaults_match_packaged_config() -> None:
    assert RenderSettings().line_thickness == 0.1
    assert RenderSettings().render_scale == 100.0
