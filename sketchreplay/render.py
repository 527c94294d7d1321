
import cv2
import numpy as np
from typing import Iterable, Generator, Tuple

from .model import Drawing, Stroke


def ink_to_bgr(color: Tuple[float, float, float, float]) -> Tuple[int, int, int]:
    r, g, b = (int(round(max(0.0, min(1.0, c)) * 255)) for c in color[:3])
    return (b, g, r)


class SketchRenderer:
    """
    Rasterizes drawings onto a BGR canvas.
    """
    def __init__(self, width: int, height: int,
                 background: Tuple[int, int, int] = (255, 255, 255)):
        self.width = width
        self.height = height
        self.background = background
        self.canvas = np.empty((height, width, 3), dtype=np.uint8)
        self.canvas[:] = background

    def render(self, drawing: Drawing) -> np.ndarray:
        """
        Draws every stroke of `drawing` in order and returns a copy of the canvas.
        """
        self.canvas[:] = self.background
        for stroke in drawing.strokes:
            self.draw_stroke(stroke)
        return self.canvas.copy()

    def draw_stroke(self, stroke: Stroke):
        if not stroke.points:
            return

        color = ink_to_bgr(stroke.ink.color)
        thickness = max(1, int(round(stroke.ink.width)))
        pts = np.array([(p.x, p.y) for p in stroke.points], dtype=np.float64)
        pts = np.round(pts).astype(np.int32)

        if len(pts) == 1:
            # Start of a stroke that has nothing to connect to yet
            cv2.circle(self.canvas, tuple(int(v) for v in pts[0]),
                       max(1, thickness // 2), color, -1, cv2.LINE_AA)
            return

        cv2.polylines(self.canvas, [pts.reshape(-1, 1, 2)], False, color,
                      thickness, cv2.LINE_AA)

    def render_frames(self, snapshots: Iterable[Drawing]) -> Generator[np.ndarray, None, None]:
        """
        Yields one frame per visible-drawing snapshot.
        """
        for drawing in snapshots:
            yield self.render(drawing)
