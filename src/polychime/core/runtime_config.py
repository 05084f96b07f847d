# どこで: `src/polychime/core/runtime_config.py`。
# 何を: config.yaml による実行時設定（探索・ロード・キャッシュ）を提供する。
# なぜ: アニメーション/音/ウィンドウの既定値をコードから外し、ユーザーが上書きできるようにするため。

from __future__ import annotations

from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any

from polychime.core.animator import AnimationSettings


@dataclass(frozen=True, slots=True)
class RuntimeConfig:
    """polychime の実行時設定。"""

    config_path: Path | None
    sync: bool
    n: int
    speed: float
    audio_enabled: bool
    base_frequency: float
    frequency_span: float
    amplitude: float
    duration: float
    window_size: tuple[int, int]
    window_position: tuple[int, int]
    borderless: bool
    vsync: bool
    fps: float
    render_scale: float
    line_thickness: float
    marker_radius: float
    background_color: tuple[float, float, float]
    line_color: tuple[float, float, float]

    def animation_settings(self) -> AnimationSettings:
        """アニメーション側で使う設定の束を返す。"""
        return AnimationSettings(
            sync=self.sync,
            n=self.n,
            speed=self.speed,
            base_frequency=self.base_frequency,
            frequency_span=self.frequency_span,
            amplitude=self.amplitude,
            duration=self.duration,
        )


_EXPLICIT_CONFIG_PATH: Path | None = None
_CONFIG_CACHE: RuntimeConfig | None = None


def set_config_path(path: str | Path | None) -> None:
    """以降の設定探索で使う明示 config パスを設定する。

    Notes
    -----
    `path` を None にすると明示指定を解除し、既定の探索に戻る。
    """

    global _EXPLICIT_CONFIG_PATH, _CONFIG_CACHE
    _CONFIG_CACHE = None
    if path is None:
        _EXPLICIT_CONFIG_PATH = None
        return
    _EXPLICIT_CONFIG_PATH = Path(str(path)).expanduser()


def _default_config_candidates() -> tuple[Path, ...]:
    return (
        Path.cwd() / ".polychime" / "config.yaml",
        Path.home() / ".config" / "polychime" / "config.yaml",
    )


def _as_mapping(value: Any, *, key: str) -> dict[str, Any]:
    if value is None:
        return {}
    if isinstance(value, dict):
        return dict(value)
    raise RuntimeError(f"{key} は mapping である必要があります: got={value!r}")


def _as_bool(value: Any, *, key: str) -> bool:
    if isinstance(value, bool):
        return value
    raise RuntimeError(f"{key} は true/false である必要があります: got={value!r}")


def _as_int(value: Any, *, key: str) -> int:
    if isinstance(value, bool):
        raise RuntimeError(f"{key} は整数である必要があります: got={value!r}")
    try:
        return int(value)
    except Exception as exc:
        raise RuntimeError(f"{key} は整数である必要があります: got={value!r}") from exc


def _as_float(value: Any, *, key: str) -> float:
    if isinstance(value, bool):
        raise RuntimeError(f"{key} は数値である必要があります: got={value!r}")
    try:
        return float(value)
    except Exception as exc:
        raise RuntimeError(f"{key} は数値である必要があります: got={value!r}") from exc


def _as_int_pair(value: Any, *, key: str) -> tuple[int, int]:
    try:
        seq = list(value)
    except Exception as exc:
        raise RuntimeError(f"{key} は [x, y] の配列である必要があります: got={value!r}") from exc
    if len(seq) != 2:
        raise RuntimeError(f"{key} は [x, y] の配列である必要があります: got={value!r}")
    return (_as_int(seq[0], key=key), _as_int(seq[1], key=key))


def _as_rgb(value: Any, *, key: str) -> tuple[float, float, float]:
    try:
        seq = list(value)
    except Exception as exc:
        raise RuntimeError(f"{key} は [r, g, b] の配列である必要があります: got={value!r}") from exc
    if len(seq) != 3:
        raise RuntimeError(f"{key} は [r, g, b] の配列である必要があります: got={value!r}")
    r, g, b = (_as_float(c, key=key) for c in seq)
    for c in (r, g, b):
        if not 0.0 <= c <= 1.0:
            raise ValueError(f"{key} の各成分は 0..1 である必要があります: got={value!r}")
    return (r, g, b)


def _require(section: dict[str, Any], name: str, *, key: str) -> Any:
    value = section.get(name)
    if value is None:
        raise RuntimeError(
            f"{key}.{name} が未設定です（同梱 default_config.yaml を確認してください）"
        )
    return value


def _load_yaml_text(text: str, *, source: str) -> dict[str, Any]:
    import yaml  # type: ignore[import-untyped]

    try:
        data = yaml.safe_load(text)
    except Exception as exc:
        raise RuntimeError(f"config.yaml の読み込みに失敗しました: source={source}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise RuntimeError(f"config.yaml は mapping である必要があります: source={source}")

    return dict(data)


def _load_yaml_config(path: Path) -> dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    return _load_yaml_text(text, source=str(path))


def _load_packaged_default_config() -> dict[str, Any]:
    """同梱デフォルト config をロードして dict を返す。"""

    try:
        blob = (
            resources.files("polychime")
            .joinpath("resource", "default_config.yaml")
            .read_text(encoding="utf-8")
        )
    except Exception as exc:  # pragma: no cover
        raise RuntimeError(
            "同梱 default_config.yaml の読み込みに失敗しました"
            "（パッケージ配布物の package-data を確認してください）"
        ) from exc

    return _load_yaml_text(blob, source="polychime/resource/default_config.yaml")


def _merge_sections(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    # セクション（animation / audio / ...）単位で 1 段だけ深くマージする。
    out = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(out.get(key), dict):
            merged = dict(out[key])
            merged.update(value)
            out[key] = merged
        else:
            out[key] = value
    return out


def runtime_config() -> RuntimeConfig:
    """実行時設定をロードして返す（キャッシュ）。

    上書き順（後勝ち）:
    1) 同梱 default_config.yaml
    2) `./.polychime/config.yaml` / `~/.config/polychime/config.yaml`
    3) `set_config_path(...)` / `run(..., config_path=...)` の明示パス
    """

    global _CONFIG_CACHE
    if _CONFIG_CACHE is not None:
        return _CONFIG_CACHE

    explicit_path = _EXPLICIT_CONFIG_PATH
    if explicit_path is not None and not explicit_path.is_file():
        raise FileNotFoundError(f"config.yaml が見つかりません: {explicit_path}")

    discovered_path: Path | None = None
    for p in _default_config_candidates():
        if p.is_file():
            discovered_path = p
            break

    payload = _load_packaged_default_config()
    if discovered_path is not None:
        payload = _merge_sections(payload, _load_yaml_config(discovered_path))
    if explicit_path is not None:
        payload = _merge_sections(payload, _load_yaml_config(explicit_path))

    version = payload.get("version")
    if version is None:
        raise RuntimeError(
            "config.yaml の version が未設定です（同梱 default_config.yaml を確認してください）"
        )
    version_i = _as_int(version, key="version")
    if version_i != 1:
        raise RuntimeError(f"未対応の config.yaml version です: got={version_i}")

    animation = _as_mapping(payload.get("animation"), key="animation")
    audio = _as_mapping(payload.get("audio"), key="audio")
    window = _as_mapping(payload.get("window"), key="window")
    render = _as_mapping(payload.get("render"), key="render")

    n = _as_int(_require(animation, "n", key="animation"), key="animation.n")
    if n < 0:
        raise ValueError(f"animation.n は 0 以上である必要があります: got={n}")
    speed = _as_float(_require(animation, "speed", key="animation"), key="animation.speed")
    if speed <= 0:
        raise ValueError(f"animation.speed は正の値である必要があります: got={speed}")

    window_size = _as_int_pair(_require(window, "size", key="window"), key="window.size")
    if window_size[0] <= 0 or window_size[1] <= 0:
        raise ValueError(f"window.size は正の値である必要があります: got={window_size}")

    render_scale = _as_float(_require(render, "scale", key="render"), key="render.scale")
    if render_scale <= 0:
        raise ValueError(f"render.scale は正の値である必要があります: got={render_scale}")

    cfg = RuntimeConfig(
        config_path=explicit_path or discovered_path,
        sync=_as_bool(_require(animation, "sync", key="animation"), key="animation.sync"),
        n=n,
        speed=speed,
        audio_enabled=_as_bool(_require(audio, "enabled", key="audio"), key="audio.enabled"),
        base_frequency=_as_float(
            _require(audio, "base_frequency", key="audio"), key="audio.base_frequency"
        ),
        frequency_span=_as_float(
            _require(audio, "frequency_span", key="audio"), key="audio.frequency_span"
        ),
        amplitude=_as_float(_require(audio, "amplitude", key="audio"), key="audio.amplitude"),
        duration=_as_float(_require(audio, "duration", key="audio"), key="audio.duration"),
        window_size=window_size,
        window_position=_as_int_pair(
            _require(window, "position", key="window"), key="window.position"
        ),
        borderless=_as_bool(_require(window, "borderless", key="window"), key="window.borderless"),
        vsync=_as_bool(_require(window, "vsync", key="window"), key="window.vsync"),
        fps=_as_float(_require(window, "fps", key="window"), key="window.fps"),
        render_scale=render_scale,
        line_thickness=_as_float(
            _require(render, "line_thickness", key="render"), key="render.line_thickness"
        ),
        marker_radius=_as_float(
            _require(render, "marker_radius", key="render"), key="render.marker_radius"
        ),
        background_color=_as_rgb(
            _require(render, "background_color", key="render"), key="render.background_color"
        ),
        line_color=_as_rgb(_require(render, "line_color", key="render"), key="render.line_color"),
    )
    _CONFIG_CACHE = cfg
    return cfg


__all__ = ["RuntimeConfig", "runtime_config", "set_config_path"]
