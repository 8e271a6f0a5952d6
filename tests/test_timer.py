from datetime import timedelta

import pytest

from fluidsim import FpsCounter, Timer


class FakeClock:
    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock(100.0)


class TestTimer:
    def test_delta_since_construction(self, clock):
        timer = Timer(clock)
        clock.now += 0.25
        assert timer.delta() == timedelta(seconds=0.25)

    def test_tick_resets(self, clock):
        timer = Timer(clock)
        clock.now += 3.0
        timer.tick()
        clock.now += 0.5
        assert timer.delta() == timedelta(seconds=0.5)


class TestFpsCounter:
    def test_counts_frames_in_the_last_second(self, clock):
        fps = FpsCounter(clock)
        for _ in range(30):
            fps.add_frame()
            clock.now += 0.0625
        # 30 frames over 1.875s; the last 16 fall inside the window
        assert fps.fps() == 16

    def test_empty(self, clock):
        assert FpsCounter(clock).fps() == 0

    def test_old_frames_expire(self, clock):
        fps = FpsCounter(clock)
        fps.add_frame()
        clock.now += 1.5
        assert fps.fps() == 0
