from __future__ import annotations

import pyglet
import pytest

from umbra.interactive.runtime.frame_scheduler import PygletFrameScheduler


class _FakeClock:
    def __init__(self) -> None:
        self.scheduled: list[tuple[object, float]] = []
        self.unscheduled: list[object] = []

    def schedule_once(self, func, delay: float) -> None:
        self.scheduled.append((func, float(delay)))

    def unschedule(self, func) -> None:
        self.unscheduled.append(func)


@pytest.fixture
def clock(monkeypatch: pytest.MonkeyPatch) -> _FakeClock:
    fake = _FakeClock()
    monkeypatch.setattr(pyglet.clock, "schedule_once", fake.schedule_once)
    monkeypatch.setattr(pyglet.clock, "unschedule", fake.unschedule)
    return fake


def test_request_frame_schedules_once_with_fps_delay(clock: _FakeClock) -> None:
    got: list[float] = []
    scheduler = PygletFrameScheduler(fps=50.0)
    handle = scheduler.request_frame(got.append)

    assert clock.scheduled == [(handle, pytest.approx(0.02))]
    handle(0.02)
    handle(0.02)
    assert got == [0.02]


def test_non_positive_fps_schedules_next_tick(clock: _FakeClock) -> None:
    scheduler = PygletFrameScheduler(fps=0.0)
    scheduler.request_frame(lambda dt: None)
    assert clock.scheduled[0][1] == 0.0


def test_cancel_unschedules_and_suppresses_callback(clock: _FakeClock) -> None:
    got: list[float] = []
    scheduler = PygletFrameScheduler(fps=60.0)
    first = scheduler.request_frame(got.append)
    second = scheduler.request_frame(got.append)

    scheduler.cancel(first)

    assert clock.unscheduled == [first]
    first(0.1)
    second(0.1)
    assert got == [0.1]
