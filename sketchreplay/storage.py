"""
Drawing persistence.

Drawings are stored as canonical JSON (sorted keys, no whitespace) so the same
drawing always produces the same bytes. Each point is written as a flat list:

    [x, y, time_offset, size, opacity, force, azimuth, altitude]
"""

import json
import logging
import math
import os
import re
from typing import Any, Dict, List

from .errors import CorruptData, InvalidGeometry
from .model import Drawing, Ink, InkTool, Point, Stroke

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1
FILE_SUFFIX = ".drawing"

_POINT_FIELDS = ("x", "y", "time_offset", "size", "opacity", "force", "azimuth", "altitude")
_VALID_NAME = re.compile(r"^[\w][\w .-]*$")


def _finite(value, what: str) -> float:
    if not math.isfinite(value):
        raise InvalidGeometry(f"{what} is not a finite number: {value!r}")
    return value


def _reject_constant(name: str):
    raise ValueError(f"non-finite number {name} in drawing data")


def _stroke_to_dict(index: int, stroke: Stroke) -> Dict[str, Any]:
    return {
        "ink": {
            "tool": stroke.ink.tool.value,
            "color": [_finite(c, f"stroke {index} ink color") for c in stroke.ink.color],
            "width": _finite(stroke.ink.width, f"stroke {index} ink width"),
        },
        "created_at": _finite(stroke.created_at, f"stroke {index} created_at"),
        "points": [
            [_finite(getattr(p, f), f"stroke {index} point {i} {f}") for f in _POINT_FIELDS]
            for i, p in enumerate(stroke.points)
        ],
    }


def _stroke_from_dict(data: Dict[str, Any]) -> Stroke:
    ink = data["ink"]
    color = tuple(float(c) for c in ink["color"])
    if len(color) != 4:
        raise ValueError(f"ink color needs 4 components, got {len(color)}")
    points = []
    for values in data["points"]:
        if len(values) != len(_POINT_FIELDS):
            raise ValueError(f"point needs {len(_POINT_FIELDS)} values, got {len(values)}")
        numbers = [float(v) for v in values]
        if not all(math.isfinite(v) for v in numbers):
            raise ValueError(f"non-finite point value in {values!r}")
        points.append(Point(*numbers))
    width = float(ink["width"])
    created_at = float(data["created_at"])
    if not all(math.isfinite(v) for v in color + (width, created_at)):
        raise ValueError("non-finite ink or timestamp value")
    return Stroke(
        ink=Ink(tool=InkTool(ink["tool"]), color=color, width=width),
        points=tuple(points),
        created_at=created_at,
    )


def serialize(drawing: Drawing) -> bytes:
    """
    Encodes a drawing as canonical JSON bytes.

    Raises:
        InvalidGeometry: a coordinate or other value is NaN or infinite.
    """
    payload = {
        "version": FORMAT_VERSION,
        "strokes": [_stroke_to_dict(i, s) for i, s in enumerate(drawing.strokes)],
    }
    return json.dumps(payload, sort_keys=True, separators=(",", ":"),
                      ensure_ascii=False, allow_nan=False).encode("utf-8")


def deserialize(data: bytes) -> Drawing:
    """
    Decodes bytes produced by `serialize`.

    Raises:
        CorruptData: bytes are not valid drawing JSON.
    """
    try:
        payload = json.loads(data.decode("utf-8"), parse_constant=_reject_constant)
        version = payload.get("version")
        if type(version) is not int or version != FORMAT_VERSION:
            raise ValueError(f"unsupported format version {version!r}")
        return Drawing(tuple(_stroke_from_dict(s) for s in payload["strokes"]))
    except (UnicodeDecodeError, ValueError, KeyError, TypeError, AttributeError,
            RecursionError) as e:
        raise CorruptData(f"cannot decode drawing: {e}") from e


class DrawingStore:
    """
    Saved drawings in one directory, one file per name.
    """

    def __init__(self, directory: str):
        self.directory = directory
        os.makedirs(directory, exist_ok=True)

    def _path(self, name: str) -> str:
        if not _VALID_NAME.match(name) or name in (".", ".."):
            raise ValueError(f"invalid drawing name: {name!r}")
        return os.path.join(self.directory, name + FILE_SUFFIX)

    def save(self, name: str, drawing: Drawing) -> str:
        path = self._path(name)
        data = serialize(drawing)
        tmp_path = path + ".tmp"
        try:
            with open(tmp_path, "wb") as f:
                f.write(data)
        except OSError:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise
        os.replace(tmp_path, path)
        logger.info("Saved drawing %r (%d strokes)", name, len(drawing))
        return path

    def load(self, name: str) -> Drawing:
        path = self._path(name)
        if not os.path.exists(path):
            raise FileNotFoundError(f"no saved drawing named {name!r}")
        with open(path, "rb") as f:
            return deserialize(f.read())

    def names(self) -> List[str]:
        return sorted(
            entry[:-len(FILE_SUFFIX)]
            for entry in os.listdir(self.directory)
            if entry.endswith(FILE_SUFFIX)
        )

    def delete(self, name: str) -> None:
        path = self._path(name)
        if not os.path.exists(path):
            raise FileNotFoundError(f"no saved drawing named {name!r}")
        os.remove(path)
        logger.info("Deleted drawing %r", name)
