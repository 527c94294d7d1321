from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Callable, Optional, Tuple


class InkTool(Enum):
    PEN = "pen"
    PENCIL = "pencil"
    MARKER = "marker"
    MONOLINE = "monoline"
    FOUNTAIN_PEN = "fountain_pen"
    WATERCOLOR = "watercolor"
    CRAYON = "crayon"


@dataclass(frozen=True)
class Ink:
    tool: InkTool = InkTool.PEN
    color: Tuple[float, float, float, float] = (0.0, 0.0, 1.0, 1.0)  # RGBA, 0..1
    width: float = 10.0


@dataclass(frozen=True)
class Point:
    x: float
    y: float
    time_offset: float = 0.0  # seconds since the stroke began
    size: float = 1.0
    opacity: float = 1.0
    force: float = 1.0
    azimuth: float = 0.0
    altitude: float = 0.0


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float

    @property
    def min_x(self) -> float:
        return self.x

    @property
    def min_y(self) -> float:
        return self.y

    @property
    def max_x(self) -> float:
        return self.x + self.width

    @property
    def max_y(self) -> float:
        return self.y + self.height


def _bounds_of(points) -> Optional[Rect]:
    points = list(points)
    xs = [p.x for p in points]
    ys = [p.y for p in points]
    if not xs:
        return None
    return Rect(min(xs), min(ys), max(xs) - min(xs), max(ys) - min(ys))


@dataclass(frozen=True)
class Stroke:
    """
    One continuous pen drag. Points are kept in the order they were sampled.
    """
    ink: Ink
    points: Tuple[Point, ...] = ()
    created_at: float = 0.0

    def __post_init__(self):
        if not isinstance(self.points, tuple):
            object.__setattr__(self, "points", tuple(self.points))

    def __len__(self) -> int:
        return len(self.points)

    @property
    def bounds(self) -> Optional[Rect]:
        return _bounds_of(self.points)

    def truncated(self, count: int) -> "Stroke":
        """Copy of this stroke holding only its first `count` points."""
        count = max(0, min(int(count), len(self.points)))
        return replace(self, points=self.points[:count])

    def transformed(self, fn: Callable[[Point], Point]) -> "Stroke":
        return replace(self, points=tuple(fn(p) for p in self.points))


@dataclass(frozen=True)
class Drawing:
    """
    Ordered strokes of one canvas. Stroke order is z-order and capture order.

    A Drawing is a value: every edit returns a new instance.
    """
    strokes: Tuple[Stroke, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if not isinstance(self.strokes, tuple):
            object.__setattr__(self, "strokes", tuple(self.strokes))

    def __len__(self) -> int:
        return len(self.strokes)

    @property
    def bounds(self) -> Optional[Rect]:
        """Box enclosing every point, or None when there are no points."""
        return _bounds_of(p for s in self.strokes for p in s.points)

    def with_stroke(self, index: int, stroke: Stroke) -> "Drawing":
        """Replaces the stroke at `index`, or appends when `index` is the next slot."""
        if index == len(self.strokes):
            return Drawing(self.strokes + (stroke,))
        if not 0 <= index < len(self.strokes):
            raise IndexError(f"stroke index {index} out of range for {len(self.strokes)} strokes")
        strokes = list(self.strokes)
        strokes[index] = stroke
        return Drawing(tuple(strokes))


@dataclass(frozen=True)
class AnimationCursor:
    stroke_index: int = 0
    parametric_value: float = 0.0
    last_tick_time: float = 0.0
