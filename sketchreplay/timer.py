
import logging
import time
from typing import Callable, Generator, Optional

from .animator import ReplayAnimator
from .model import Drawing

logger = logging.getLogger(__name__)


class FrameTimer:
    """
    Drives a ReplayAnimator at a fixed frame rate on the calling thread.

    Every `start` opens a new generation. Frame loops belonging to an older
    generation end before ticking again, so a replaced run can never write
    into the visible drawing of the new one.
    """

    def __init__(self, animator: ReplayAnimator, fps: int = 60,
                 clock: Callable[[], float] = time.monotonic,
                 sleep: Callable[[float], None] = time.sleep):
        if fps <= 0:
            raise ValueError(f"fps must be positive, got {fps}")
        self.animator = animator
        self.interval = 1.0 / fps
        self.clock = clock
        self.sleep = sleep
        self.generation = 0

    def start(self, drawing: Drawing) -> bool:
        self.cancel()
        return self.animator.start(drawing, now=self.clock())

    def cancel(self) -> None:
        """Stops the current run. Safe to call any number of times."""
        self.generation += 1
        self.animator.stop()

    def frames(self) -> Generator[Drawing, None, None]:
        """
        Yields a visible-drawing snapshot per frame until the replay finishes
        or is cancelled.
        """
        generation = self.generation
        next_frame = self.clock() + self.interval

        while self.animator.is_running and generation == self.generation:
            delay = next_frame - self.clock()
            if delay > 0:
                self.sleep(delay)
            if generation != self.generation or not self.animator.is_running:
                break

            now = self.clock()
            snapshot = self.animator.tick(now)

            # A late frame is not made up; the next tick just sees a larger elapsed
            next_frame += self.interval
            if next_frame < now:
                next_frame = now + self.interval

            yield snapshot

    def run(self, drawing: Drawing,
            on_frame: Optional[Callable[[Drawing], None]] = None) -> Drawing:
        """Replays `drawing` to the end, blocking, and returns the final snapshot."""
        if not self.start(drawing):
            return self.animator.visible
        count = 0
        for snapshot in self.frames():
            count += 1
            if on_frame is not None:
                on_frame(snapshot)
        logger.debug("Frame loop ended after %d frames", count)
        return self.animator.visible
