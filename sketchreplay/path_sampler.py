
import numpy as np

from .errors import DegenerateStroke
from .model import Stroke


class PathSampler:
    """
    Read-only view over the sample points of one stroke.

    Maps elapsed wall-clock time to a parametric position along the stroke, so
    that a replay advances at the speed the stroke was originally recorded.
    Integer part of a parametric value indexes points, the fractional part is
    the progress between two neighbouring points.
    """

    def __init__(self, path: Stroke):
        if not path.points:
            raise DegenerateStroke("stroke has no points")
        self.path = path
        # Time offsets must not go backwards for the inverse lookup to work
        times = np.array([p.time_offset for p in path.points], dtype=np.float64)
        self.times = np.maximum.accumulate(times)
        self.last_index = len(self.times) - 1

    def time_at(self, value: float) -> float:
        """Recorded time offset at a parametric value (linear between points)."""
        if value >= self.last_index:
            return float(self.times[-1])
        idx = int(value)
        frac = value - idx
        return float(self.times[idx] + frac * (self.times[idx + 1] - self.times[idx]))

    def value_at(self, time_offset: float) -> float:
        """Largest parametric value whose recorded time is `time_offset`."""
        if time_offset >= self.times[-1]:
            return float(self.last_index)

        # times[idx] <= time_offset < times[idx + 1]
        idx = int(np.searchsorted(self.times, time_offset, side="right")) - 1
        if idx < 0:
            return 0.0
        span = self.times[idx + 1] - self.times[idx]
        return float(idx + (time_offset - self.times[idx]) / span)

    def advance(self, current_value: float, elapsed_seconds: float) -> float:
        """
        Returns the parametric value reached after `elapsed_seconds` more of
        the stroke's recorded time, starting at `current_value`.
        """
        if current_value > self.last_index:
            return current_value

        target = self.time_at(current_value) + max(0.0, elapsed_seconds)
        return max(current_value, self.value_at(target))


def advance(current_value: float, elapsed_seconds: float, path: Stroke) -> float:
    return PathSampler(path).advance(current_value, elapsed_seconds)
