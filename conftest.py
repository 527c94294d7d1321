"""Shared pytest fixtures.

Fixtures:
    make_stroke: factory for strokes sampled at a fixed rate
    three_strokes: drawing of three short strokes with different inks
    rich_point_drawing: drawing whose points carry every metadata field
"""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent))

from sketchreplay.model import Drawing, Ink, InkTool, Point, Stroke


def _make_stroke(n_points, rate=0.1, ink=None, created_at=100.0, x0=0.0, y0=0.0):
    ink = ink or Ink()
    points = tuple(Point(x0 + i * 10.0, y0 + i * 5.0, time_offset=i * rate) for i in range(n_points))
    return Stroke(ink, points, created_at)


@pytest.fixture
def make_stroke():
    return _make_stroke


@pytest.fixture
def three_strokes():
    return Drawing((
        _make_stroke(5, ink=Ink(InkTool.PEN, (0, 0, 1, 1), 10), created_at=1.0),
        _make_stroke(3, ink=Ink(InkTool.MARKER, (1, 0, 0, 1), 4), created_at=2.0, y0=50),
        _make_stroke(8, rate=0.05, ink=Ink(InkTool.PENCIL, (0, 0, 0, 0.5), 2), created_at=3.0, x0=20),
    ))


@pytest.fixture
def rich_point_drawing():
    points = tuple(
        Point(x=1.5 * i, y=-2.25 * i, time_offset=i / 240, size=3.0 + i,
              opacity=0.8, force=0.1 * i, azimuth=1.2345678901234567, altitude=0.7)
        for i in range(6)
    )
    return Drawing((
        Stroke(Ink(InkTool.FOUNTAIN_PEN, (0.1, 0.2, 0.3, 0.4), 7.5), points, 1718900000.123456),
        Stroke(Ink(InkTool.WATERCOLOR, (1.0, 1.0, 1.0, 1.0), 20.0), (), 1718900001.0),
    ))
