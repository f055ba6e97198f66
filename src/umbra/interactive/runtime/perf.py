"""
どこで: `src/umbra/interactive/runtime/perf.py`。
何を: 描画ループの区間時間を窓（N フレーム）単位で集計し、平均と最大をログへ出す。
なぜ: 1 フレームが表示周期（~16ms）に収まっているか、描画と present のどちらが重いかを切り分けるため。
"""

from __future__ import annotations

import contextlib
import logging
import os
import time
from collections import defaultdict
from collections.abc import Iterator
from dataclasses import dataclass, field

_logger = logging.getLogger(__name__)

_DEFAULT_EVERY = 60
_FALSY = frozenset({"", "0", "false", "no", "off"})


def _perf_enabled_from_env() -> bool:
    raw = os.environ.get("UMBRA_PERF", "")
    return raw.strip().lower() not in _FALSY


def _report_every_from_env() -> int:
    raw = os.environ.get("UMBRA_PERF_EVERY", "")
    try:
        return int(raw)
    except ValueError:
        return _DEFAULT_EVERY


@dataclass(slots=True)
class _Window:
    """1 出力窓ぶんの集計値（秒単位）。"""

    frames: int = 0
    totals: defaultdict[str, float] = field(default_factory=lambda: defaultdict(float))
    worst_frame: float = 0.0

    def summary(self) -> tuple[float, str]:
        n = max(1, self.frames)
        frame_ms = self.totals.get("frame", 0.0) * 1000.0 / n
        labels = [f"frame={frame_ms:.3f}ms"]
        labels.extend(
            f"{name}={total * 1000.0 / n:.3f}ms"
            for name, total in sorted(self.totals.items())
            if name != "frame"
        )
        labels.append(f"max={self.worst_frame * 1000.0:.3f}ms")
        return frame_ms, " ".join(labels)


class PerfCollector:
    """フレーム区間計測の集計器。

    Notes
    -----
    無効時は `frame()` / `section()` とも何も測らない。
    窓の平均フレーム時間が `budget_ms` を超えたときは warning で出す。
    """

    def __init__(
        self,
        *,
        enabled: bool,
        report_every: int = _DEFAULT_EVERY,
        budget_ms: float = 1000.0 / 60.0,
    ) -> None:
        self.enabled = bool(enabled)
        self.report_every = report_every if report_every > 0 else _DEFAULT_EVERY
        self.budget_ms = float(budget_ms)
        self.last_report: str | None = None
        self._window = _Window()

    @classmethod
    def from_env(cls, *, fps: float = 60.0) -> PerfCollector:
        """`UMBRA_PERF` で有効化し、`UMBRA_PERF_EVERY` フレームごとに出力する collector を返す。"""
        fps = float(fps) if fps > 0 else 60.0
        return cls(
            enabled=_perf_enabled_from_env(),
            report_every=_report_every_from_env(),
            budget_ms=1000.0 / fps,
        )

    @contextlib.contextmanager
    def section(self, name: str) -> Iterator[None]:
        if not self.enabled:
            yield
            return
        started = time.perf_counter()
        try:
            yield
        finally:
            self._window.totals[name] += time.perf_counter() - started

    @contextlib.contextmanager
    def frame(self) -> Iterator[None]:
        """1 フレームを測り、窓が埋まったら出力して集計をやり直す。"""
        if not self.enabled:
            yield
            return
        started = time.perf_counter()
        try:
            yield
        finally:
            elapsed = time.perf_counter() - started
            win = self._window
            win.totals["frame"] += elapsed
            win.worst_frame = max(win.worst_frame, elapsed)
            win.frames += 1
            if win.frames >= self.report_every:
                self._flush()

    def _flush(self) -> None:
        frame_ms, report = self._window.summary()
        self._window = _Window()
        self.last_report = report
        if frame_ms > self.budget_ms:
            _logger.warning("[umbra-perf] %s (budget %.1fms 超過)", report, self.budget_ms)
        else:
            _logger.info("[umbra-perf] %s", report)


__all__ = ["PerfCollector"]
