class SimClock:
    """Monotonic tick source owned by the simulation driver.

    The replacement policy only reads time values handed to it; advancing the
    clock is the caller's job.
    """

    def __init__(self, start: int = 0):
        if start < 0:
            raise ValueError(f"Clock cannot start at negative tick {start}")
        self._now = start

    def current_time(self) -> int:
        return self._now

    def advance(self, ticks: int = 1) -> int:
        if ticks < 0:
            raise ValueError(f"Clock cannot move backwards ({ticks} ticks)")
        self._now += ticks
        return self._now

    def __repr__(self) -> str:
        return f"SimClock(now={self._now})"
