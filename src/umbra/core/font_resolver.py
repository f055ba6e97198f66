# どこで: `src/umbra/core/font_resolver.py`。
# 何を: ラベル用フォントの探索・解決を提供する。
# なぜ: "Arial Black" のような名前指定を、config の font_dirs と OS のフォントディレクトリから実体ファイルへ解決するため。

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Sequence
from pathlib import Path

from umbra.core.runtime_config import runtime_config

_logger = logging.getLogger(__name__)

_FONT_EXTENSIONS = (".ttf", ".otf", ".ttc")

_FONT_FILES_CACHE: dict[tuple[str, ...], tuple[Path, ...]] = {}


def _system_font_dirs() -> tuple[Path, ...]:
    home = Path.home()
    if sys.platform == "darwin":
        return (
            Path("/System/Library/Fonts"),
            Path("/System/Library/Fonts/Supplemental"),
            Path("/Library/Fonts"),
            home / "Library" / "Fonts",
        )
    if sys.platform.startswith("win"):
        windir = os.environ.get("WINDIR", r"C:\Windows")
        local = os.environ.get("LOCALAPPDATA")
        dirs = [Path(windir) / "Fonts"]
        if local:
            dirs.append(Path(local) / "Microsoft" / "Windows" / "Fonts")
        return tuple(dirs)
    return (
        Path("/usr/share/fonts"),
        Path("/usr/local/share/fonts"),
        home / ".local" / "share" / "fonts",
        home / ".fonts",
    )


def _search_dirs() -> tuple[Path, ...]:
    cfg = runtime_config()
    dirs: list[Path] = [Path(d).expanduser() for d in cfg.font_dirs]
    dirs.extend(_system_font_dirs())
    return tuple(dirs)


def _list_font_files(*, dirs: tuple[Path, ...]) -> tuple[Path, ...]:
    """dirs 配下のフォントファイルを dirs の順 → ファイル名の安定順で列挙する。"""

    key = tuple(str(d) for d in dirs)
    cached = _FONT_FILES_CACHE.get(key)
    if cached is not None:
        return cached

    seen: list[Path] = []
    for root in dirs:
        if not root.is_dir():
            continue
        found: list[Path] = []
        for ext in _FONT_EXTENSIONS:
            for fp in root.glob(f"**/*{ext}"):
                try:
                    resolved = fp.resolve()
                except OSError:
                    continue
                if resolved.is_file():
                    found.append(resolved)
        for fp in sorted(set(found), key=lambda p: p.name.lower()):
            if fp not in seen:
                seen.append(fp)

    out = tuple(seen)
    _FONT_FILES_CACHE[key] = out
    return out


def _normalize(text: str) -> str:
    return str(text).lower().replace(" ", "").replace("_", "").replace("-", "")


def find_font_path(font: str) -> Path | None:
    """`font` 指定を実体ファイルへ解決して返す。見つからなければ None。

    Notes
    -----
    解決順:
    0) 実在パス（絶対/相対）
    1) 探索ディレクトリ直下のファイル名一致
    2) ステムの完全一致（空白・`-`・`_` と大小文字を無視）
    3) 部分一致
    """

    raw = str(font).strip()
    if not raw:
        return None

    direct_path = Path(raw).expanduser()
    if direct_path.is_file():
        return direct_path.resolve()

    dirs = _search_dirs()
    for d in dirs:
        fp = d / raw
        if fp.is_file():
            return fp.resolve()

    files = _list_font_files(dirs=dirs)
    key = _normalize(raw)
    for fp in files:
        if _normalize(fp.stem) == key:
            return fp
    for fp in files:
        if key in _normalize(fp.name):
            return fp
    return None


def resolve_font_path(font: str) -> Path:
    """`font` 指定を実体ファイルへ解決して返す。

    Raises
    ------
    FileNotFoundError
        フォントを解決できない場合。
    """

    found = find_font_path(font)
    if found is not None:
        return found
    raise FileNotFoundError(_not_found_hint((str(font),)))


def resolve_first_font(fonts: Sequence[str]) -> Path:
    """候補列を先頭から解決し、最初に見つかったフォントを返す。

    Raises
    ------
    FileNotFoundError
        どの候補も解決できない場合。
    """

    names = [str(f) for f in fonts if str(f).strip()]
    for idx, name in enumerate(names):
        found = find_font_path(name)
        if found is None:
            continue
        if idx > 0:
            _logger.warning("フォント %r が見つからないため %r を使用します: %s", names[0], name, found)
        return found
    raise FileNotFoundError(_not_found_hint(tuple(names)))


def _not_found_hint(names: tuple[str, ...]) -> str:
    dirs = _search_dirs()
    searched = ", ".join(str(d) for d in dirs) if dirs else "(none)"
    cfg = runtime_config()
    example_yaml = "paths:\n  font_dirs:\n    - \"~/Fonts\"\n"
    return (
        f"フォントが見つかりません: {list(names)!r}。"
        " `eclipse.font` に実在パスを渡すか、config.yaml の `font_dirs` を設定してください"
        "（例: ./.umbra/config.yaml または ~/.config/umbra/config.yaml）。"
        f"\n\n{example_yaml}\nsearched_dirs={searched}, config_path={cfg.config_path}"
    )


def clear_font_cache() -> None:
    """フォント列挙キャッシュを破棄する（font_dirs を差し替えた後など）。"""

    _FONT_FILES_CACHE.clear()


__all__ = [
    "clear_font_cache",
    "find_font_path",
    "resolve_first_font",
    "resolve_font_path",
]
