
import os
from dataclasses import dataclass
from typing import Tuple

ENV_PREFIX = "SKETCHREPLAY_"


def parse_hex_color(value: str) -> Tuple[int, int, int]:
    """'#RRGGBB' -> (B, G, R) as OpenCV expects."""
    value = value.lstrip("#")
    if len(value) != 6:
        raise ValueError(f"expected #RRGGBB, got {value!r}")
    r, g, b = (int(value[i:i + 2], 16) for i in (0, 2, 4))
    return (b, g, r)


@dataclass
class ReplaySettings:
    # Playback
    fps: int = 60

    # Render surface
    width: int = 1280
    height: int = 720
    background_color: str = "#FFFFFF"

    # Storage
    storage_dir: str = "saved_drawings"

    # Logging
    log_level: str = "INFO"
    log_format: str = "text"  # text or json

    def frame_interval(self) -> float:
        return 1.0 / self.fps

    def background_bgr(self) -> Tuple[int, int, int]:
        return parse_hex_color(self.background_color)

    @classmethod
    def from_env(cls, environ=None) -> "ReplaySettings":
        """Builds settings from SKETCHREPLAY_* variables, defaults elsewhere."""
        environ = os.environ if environ is None else environ
        defaults = cls()

        def get(name, cast=str):
            raw = environ.get(ENV_PREFIX + name.upper())
            return getattr(defaults, name) if raw is None else cast(raw)

        settings = cls(
            fps=get("fps", int),
            width=get("width", int),
            height=get("height", int),
            background_color=get("background_color"),
            storage_dir=get("storage_dir"),
            log_level=get("log_level").upper(),
            log_format=get("log_format").lower(),
        )
        if settings.fps <= 0:
            raise ValueError(f"fps must be positive, got {settings.fps}")
        return settings
