import time
from collections import deque
from datetime import timedelta


class Timer:
    """Wall-clock time since the last tick."""
    def __init__(self, clock=time.monotonic):
        self.clock = clock
        self.last_tick = clock()

    def tick(self):
        self.last_tick = self.clock()

    def delta(self):
        return timedelta(seconds=self.clock() - self.last_tick)


class FpsCounter:
    """Counts the frames added during the last second."""
    def __init__(self, clock=time.monotonic):
        self.clock = clock
        self.frames = deque()

    def add_frame(self):
        self.frames.append(self.clock())

    def fps(self):
        now = self.clock()
        while self.frames and self.frames[0] + 1.0 < now:
            self.frames.popleft()
        return len(self.frames)
