
from dataclasses import dataclass, replace
from typing import Optional, Tuple

import numpy as np

from .errors import InvalidGeometry
from .model import Drawing, Point, Rect


@dataclass(frozen=True, eq=False)
class Transform:
    """2x3 affine matrix [[sx, 0, tx], [0, sy, ty]]."""
    matrix: np.ndarray

    @classmethod
    def from_scale_translate(cls, scale_x: float, scale_y: float,
                             translate_x: float, translate_y: float) -> "Transform":
        return cls(np.array([[scale_x, 0.0, translate_x],
                             [0.0, scale_y, translate_y]], dtype=np.float64))

    @property
    def scale_x(self) -> float:
        return float(self.matrix[0, 0])

    @property
    def scale_y(self) -> float:
        return float(self.matrix[1, 1])

    @property
    def translate_x(self) -> float:
        return float(self.matrix[0, 2])

    @property
    def translate_y(self) -> float:
        return float(self.matrix[1, 2])

    def apply_point(self, point: Point) -> Point:
        x, y = self.matrix @ np.array([point.x, point.y, 1.0])
        return replace(point, x=float(x), y=float(y))

    def apply_rect(self, rect: Rect) -> Rect:
        x0, y0 = self.matrix @ np.array([rect.min_x, rect.min_y, 1.0])
        x1, y1 = self.matrix @ np.array([rect.max_x, rect.max_y, 1.0])
        return Rect(float(min(x0, x1)), float(min(y0, y1)),
                    float(abs(x1 - x0)), float(abs(y1 - y0)))


class BoundsFitter:
    """
    Fits one bounding box into a target region, used to shrink a drawing
    into place before it is replayed.
    """

    @staticmethod
    def fit(source_box: Rect,
            target_origin: Tuple[float, float],
            target_height: float,
            target_width: Optional[float] = None) -> Transform:
        """
        Computes the transform that fits `source_box` into the target region.

        Height always matches `target_height`. Width matches `target_width`
        when given, otherwise the aspect ratio is kept. Slack left in the
        region is split evenly on both sides.
        """
        if source_box.height == 0 or source_box.width == 0:
            raise InvalidGeometry(
                f"cannot fit a {source_box.width}x{source_box.height} box")

        scale_y = target_height / source_box.height
        scale_x = target_width / source_box.width if target_width is not None else scale_y

        scaled_w = source_box.width * scale_x
        scaled_h = source_box.height * scale_y
        region_w = target_width if target_width is not None else scaled_w

        origin_x, origin_y = target_origin
        tx = origin_x + (region_w - scaled_w) / 2 - source_box.min_x * scale_x
        ty = origin_y + (target_height - scaled_h) / 2 - source_box.min_y * scale_y
        return Transform.from_scale_translate(scale_x, scale_y, tx, ty)

    @staticmethod
    def fit_drawing(drawing: Drawing,
                    target_origin: Tuple[float, float],
                    target_height: float,
                    target_width: Optional[float] = None) -> Transform:
        box = drawing.bounds
        if box is None:
            raise InvalidGeometry("drawing has no points, bounding box is undefined")
        return BoundsFitter.fit(box, target_origin, target_height, target_width)

    @staticmethod
    def apply(transform: Transform, drawing: Drawing) -> Drawing:
        """New drawing with every point moved by `transform`; `drawing` is untouched."""
        return Drawing(tuple(s.transformed(transform.apply_point) for s in drawing.strokes))
