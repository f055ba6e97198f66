# どこで: `src/umbra/core/runtime_config.py`。
# 何を: config.yaml の層（同梱既定 → 探索 → 明示指定）を重ねて実行時設定を組み立て、キャッシュする。
# なぜ: 見た目の定数（グリッド・語彙・フォント・投影距離など）や出力先をユーザーが差し替えられるようにするため。

from __future__ import annotations

import os
from collections.abc import Callable
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any, TypeVar

import yaml  # type: ignore[import-untyped]

from umbra.core.color import RGB01, hex_to_rgb01
from umbra.core.settings import EclipseSettings

_T = TypeVar("_T")

_SUPPORTED_VERSION = 1
_PACKAGED_SOURCE = "umbra/resource/default_config.yaml"


@dataclass(frozen=True, slots=True)
class RuntimeConfig:
    """umbra の実行時設定。"""

    config_path: Path | None
    output_dir: Path
    font_dirs: tuple[Path, ...]
    window_pos: tuple[int, int]
    window_size: tuple[int, int]
    fps: float
    png_scale: float
    eclipse: EclipseSettings


_explicit_path: Path | None = None
_cached: RuntimeConfig | None = None


def set_config_path(path: str | Path | None) -> None:
    """明示 config パスを差し替え、キャッシュを捨てる。None で探索のみに戻す。"""

    global _explicit_path, _cached
    _explicit_path = None if path is None else Path(str(path)).expanduser()
    _cached = None


def _discovery_candidates() -> tuple[Path, ...]:
    return (
        Path.cwd() / ".umbra" / "config.yaml",
        Path.home() / ".config" / "umbra" / "config.yaml",
    )


# ---------- 値の解釈 ----------
def _to_path(value: Any) -> Path | None:
    text = "" if value is None else str(value).strip()
    if not text:
        return None
    return Path(os.path.expandvars(os.path.expanduser(text)))


def _to_path_tuple(value: Any, *, key: str) -> tuple[Path, ...]:
    if value is None:
        return ()
    # 文字列は PATH 形式（os.pathsep 区切り）として受ける。
    items = str(value).split(os.pathsep) if isinstance(value, str) else _to_list(value, key=key)
    return tuple(p for p in (_to_path(item) for item in items) if p is not None)


def _to_list(value: Any, *, key: str) -> list[Any]:
    if isinstance(value, (list, tuple)):
        return list(value)
    raise RuntimeError(f"{key} は配列である必要があります: got={value!r}")


def _to_section(value: Any, *, key: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise RuntimeError(f"{key} は mapping である必要があります: got={value!r}")
    return dict(value)


def _to_int_pair(value: Any, *, key: str) -> tuple[int, int]:
    items = _to_list(value, key=key)
    if len(items) != 2:
        raise RuntimeError(f"{key} は要素 2 つの配列である必要があります: got={value!r}")
    try:
        return int(items[0]), int(items[1])
    except (TypeError, ValueError) as exc:
        raise RuntimeError(f"{key} は整数 2 つである必要があります: got={value!r}") from exc


def _to_float(value: Any, *, key: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise RuntimeError(f"{key} は数値である必要があります: got={value!r}") from exc


def _to_str_tuple(value: Any, *, key: str) -> tuple[str, ...]:
    if isinstance(value, str):
        return (value,)
    return tuple(str(v) for v in _to_list(value, key=key))


def _to_color(value: Any, *, key: str) -> RGB01:
    try:
        return hex_to_rgb01(str(value))
    except ValueError as exc:
        raise RuntimeError(f"{key} は 16 進カラーである必要があります: got={value!r}") from exc


def _to_stops(value: Any, *, key: str) -> tuple[tuple[float, RGB01], ...]:
    stops: list[tuple[float, RGB01]] = []
    for item in _to_list(value, key=key):
        if not isinstance(item, (list, tuple)) or len(item) != 2:
            raise RuntimeError(f"{key} の要素は [offset, color] である必要があります: got={item!r}")
        stops.append((_to_float(item[0], key=key), _to_color(item[1], key=key)))
    return tuple(stops)


def _required(section: dict[str, Any], name: str, parse: Callable[..., _T], *, key: str) -> _T:
    value = section.get(name)
    if value is None:
        raise RuntimeError(f"{key} が未設定です（同梱 default_config.yaml を確認してください）")
    return parse(value, key=key)


# ---------- ロード ----------
def _parse_yaml(text: str, *, source: str) -> dict[str, Any]:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise RuntimeError(f"config.yaml を解析できません: source={source}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise RuntimeError(f"config.yaml の最上位は mapping である必要があります: source={source}")
    return data


def _read_packaged_defaults() -> dict[str, Any]:
    try:
        text = resources.files("umbra").joinpath("resource", "default_config.yaml").read_text(
            encoding="utf-8"
        )
    except OSError as exc:  # pragma: no cover
        raise RuntimeError(
            f"{_PACKAGED_SOURCE} を読めません（package-data に含まれているか確認してください）"
        ) from exc
    return _parse_yaml(text, source=_PACKAGED_SOURCE)


def _read_user_config(path: Path) -> dict[str, Any]:
    return _parse_yaml(path.read_text(encoding="utf-8"), source=str(path))


def _merge_section(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """トップレベル section 単位で浅く上書きした dict を返す。

    Notes
    -----
    `eclipse:` のように一部キーだけを書いた config でも、同梱既定の残りのキーを保つ。
    """

    out = dict(base)
    for key, value in override.items():
        prev = out.get(key)
        if isinstance(prev, dict) and isinstance(value, dict):
            out[key] = {**prev, **value}
        else:
            out[key] = value
    return out


# eclipse section のキー名は EclipseSettings のフィールド名と一致する（gradient を除く）。
_ECLIPSE_FIELDS: dict[str, Callable[..., Any]] = {
    "grid": _to_int_pair,
    "words": _to_str_tuple,
    "font": lambda value, key: str(value),
    "font_fallbacks": _to_str_tuple,
    "font_size_px": _to_float,
    "label_height": _to_float,
    "jitter": _to_float,
    "shadow_distance": _to_float,
    "shadow_color": _to_color,
    "label_color": _to_color,
}


def _build_eclipse_settings(section: dict[str, Any]) -> EclipseSettings:
    kwargs: dict[str, Any] = {}
    for name, parse in _ECLIPSE_FIELDS.items():
        value = section.get(name)
        if value is not None:
            kwargs[name] = parse(value, key=f"eclipse.{name}")

    gradient = _to_section(section.get("gradient"), key="eclipse.gradient")
    if gradient.get("radius_ratio") is not None:
        kwargs["gradient_radius_ratio"] = _to_float(
            gradient["radius_ratio"], key="eclipse.gradient.radius_ratio"
        )
    if gradient.get("stops") is not None:
        kwargs["gradient_stops"] = _to_stops(gradient["stops"], key="eclipse.gradient.stops")

    try:
        return EclipseSettings(**kwargs)
    except ValueError as exc:
        raise RuntimeError(f"eclipse 設定が不正です: {exc}") from exc


def runtime_config() -> RuntimeConfig:
    """設定層を重ねて RuntimeConfig を返す（初回のみロードし、以後はキャッシュ）。

    Raises
    ------
    FileNotFoundError
        明示指定した config が存在しない場合。
    RuntimeError
        config の型や version が不正な場合。
    ValueError
        寸法や倍率が正でない場合。
    """

    global _cached
    if _cached is not None:
        return _cached

    explicit = _explicit_path
    if explicit is not None and not explicit.is_file():
        raise FileNotFoundError(f"config.yaml が見つかりません: {explicit}")
    discovered = next((p for p in _discovery_candidates() if p.is_file()), None)

    payload = _read_packaged_defaults()
    for layer in (discovered, explicit):
        if layer is not None:
            payload = _merge_section(payload, _read_user_config(layer))

    version = payload.get("version")
    if version != _SUPPORTED_VERSION:
        raise RuntimeError(f"未対応の config.yaml version です: got={version!r}")

    paths = _to_section(payload.get("paths"), key="paths")
    ui = _to_section(payload.get("ui"), key="ui")
    png = _to_section(_to_section(payload.get("export"), key="export").get("png"), key="export.png")

    output_dir = _to_path(paths.get("output_dir"))
    if output_dir is None:
        raise RuntimeError("paths.output_dir が未設定です（同梱 default_config.yaml を確認してください）")
    window_size = _required(ui, "window_size", _to_int_pair, key="ui.window_size")
    if min(window_size) <= 0:
        raise ValueError(f"ui.window_size は正の値である必要があります: got={window_size}")
    png_scale = _required(png, "scale", _to_float, key="export.png.scale")
    if png_scale <= 0:
        raise ValueError(f"export.png.scale は正の値である必要があります: got={png_scale}")

    _cached = RuntimeConfig(
        config_path=explicit or discovered,
        output_dir=output_dir,
        font_dirs=_to_path_tuple(paths.get("font_dirs"), key="paths.font_dirs"),
        window_pos=_required(ui, "window_position", _to_int_pair, key="ui.window_position"),
        window_size=window_size,
        fps=_required(ui, "fps", _to_float, key="ui.fps"),
        png_scale=png_scale,
        eclipse=_build_eclipse_settings(_to_section(payload.get("eclipse"), key="eclipse")),
    )
    return _cached


def output_root_dir() -> Path:
    """出力ファイル（svg/ png/）の保存先ルートを返す。

    後に読んだ層が勝つ:
    1) 同梱 default_config.yaml
    2) `./.umbra/config.yaml` / `~/.config/umbra/config.yaml`
    3) `run(..., config_path=...)`
    """

    return Path(runtime_config().output_dir)


__all__ = ["RuntimeConfig", "output_root_dir", "runtime_config", "set_config_path"]
