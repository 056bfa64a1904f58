"""
Wall-clock time source used to stamp elements of the LWW-Element-Graph.
"""
import math
import time
from typing import Callable

# Any zero-argument callable returning the current time as a float
Clock = Callable[[], float]


class WallClock:
    """
    Wall-clock time source that never repeats itself.

    Successive readings of the same instance are strictly increasing: when the
    underlying source stalls (coarse resolution) or steps back, the clock moves
    to the next representable float after its previous reading instead.
    """

    def __init__(self, source: Clock = time.time):
        self.source = source
        self.last_reading = -math.inf

    def now(self) -> float:
        """Read the current time."""
        reading = self.source()
        if reading <= self.last_reading:
            reading = math.nextafter(self.last_reading, math.inf)
        self.last_reading = reading
        return reading

    def __call__(self) -> float:
        return self.now()

    def __str__(self) -> str:
        return f"WallClock(last={self.last_reading})"
