import logging
import math
import time
from dataclasses import replace
from enum import Enum
from typing import Callable, Optional

from .errors import DegenerateStroke, EmptyDrawing, ReplayStateError
from .model import AnimationCursor, Drawing
from .path_sampler import PathSampler

logger = logging.getLogger(__name__)


class AnimatorState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    FINISHED = "finished"


class ReplayAnimator:
    """
    Redraws a captured drawing stroke by stroke at its recorded pace.

    The source drawing is handed to `start`; every `tick` publishes a new
    visible drawing, which is also passed to `sink` when one is given. The
    visible drawing is replaced on each tick, never edited in place, so a
    renderer holding an older snapshot is unaffected.
    """

    def __init__(self,
                 sink: Optional[Callable[[Drawing], None]] = None,
                 clock: Callable[[], float] = time.monotonic):
        self.sink = sink
        self.clock = clock
        self.state = AnimatorState.IDLE
        self.source = Drawing()
        self.visible = Drawing()
        self.cursor: Optional[AnimationCursor] = None
        self._sampler: Optional[PathSampler] = None

    @property
    def is_running(self) -> bool:
        return self.state is AnimatorState.RUNNING

    def start(self, drawing: Drawing, now: Optional[float] = None) -> bool:
        """
        Begins replaying `drawing` from its first stroke.

        Returns False and changes nothing when the drawing has no strokes.
        """
        try:
            self._check_not_empty(drawing)
        except EmptyDrawing as e:
            logger.debug("Replay not started: %s", e)
            return False

        if self.is_running:
            self.stop()

        self.source = drawing
        self.cursor = AnimationCursor(0, 0.0, self.clock() if now is None else now)
        self._sampler = None
        self.state = AnimatorState.RUNNING
        self._publish(Drawing())
        logger.info("Replay started with %d strokes", len(drawing))
        return True

    def tick(self, now: Optional[float] = None) -> Drawing:
        """Advances the replay to `now` and returns the new visible drawing."""
        if not self.is_running:
            raise ReplayStateError(f"tick called while {self.state.value}")

        if now is None:
            now = self.clock()
        cursor = self.cursor
        elapsed = now - cursor.last_tick_time
        index = cursor.stroke_index
        stroke = self.source.strokes[index]

        try:
            sampler = self._sampler_for(index)
        except DegenerateStroke:
            logger.debug("Skipping stroke %d without points", index)
            self._publish(self.visible.with_stroke(index, stroke))
            self._next_stroke(now)
            return self.visible

        value = sampler.advance(cursor.parametric_value, elapsed)
        if value >= sampler.last_index:
            self._publish(self.visible.with_stroke(index, stroke))
            self._next_stroke(now)
        else:
            self._publish(self.visible.with_stroke(index, stroke.truncated(math.floor(value))))
            self.cursor = replace(cursor, parametric_value=value, last_tick_time=now)
        return self.visible

    def stop(self) -> None:
        """Abandons the replay; whatever is already visible stays visible."""
        if self.state is AnimatorState.IDLE:
            return
        logger.debug("Replay stopped at %s", self.cursor)
        self.state = AnimatorState.IDLE
        self.cursor = None
        self._sampler = None

    def run_to_completion(self, step: float = 1.0 / 60) -> Drawing:
        """Ticks with synthetic timestamps `step` seconds apart until finished."""
        if step <= 0:
            raise ValueError(f"step must be positive, got {step}")
        now = self.cursor.last_tick_time if self.cursor else 0.0
        while self.is_running:
            now += step
            self.tick(now)
        return self.visible

    def _check_not_empty(self, drawing: Drawing):
        if not drawing.strokes:
            raise EmptyDrawing("drawing has no strokes")

    def _sampler_for(self, index: int) -> PathSampler:
        stroke = self.source.strokes[index]
        if not stroke.points:
            raise DegenerateStroke(f"stroke {index} has no points")
        if self._sampler is None or self._sampler.path is not stroke:
            self._sampler = PathSampler(stroke)
        return self._sampler

    def _next_stroke(self, now: float):
        index = self.cursor.stroke_index + 1
        self.cursor = AnimationCursor(index, 0.0, now)
        self._sampler = None
        if index == len(self.source):
            self.state = AnimatorState.FINISHED
            logger.info("Replay finished after %d strokes", index)

    def _publish(self, drawing: Drawing):
        self.visible = drawing
        if self.sink is not None:
            self.sink(drawing)
