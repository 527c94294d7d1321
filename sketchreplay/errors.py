"""
Exception types for drawing replay.
"""


class ReplayError(Exception):
    """Base class for every replay error."""
    pass


class EmptyDrawing(ReplayError):
    """Raised when a replay is requested for a drawing without strokes."""
    pass


class InvalidGeometry(ReplayError):
    """Raised when a bounding box has zero width or height."""
    pass


class CorruptData(ReplayError):
    """Raised when serialized drawing bytes cannot be decoded."""
    pass


class DegenerateStroke(ReplayError):
    """Raised when a stroke has no points to sample."""
    pass


class ReplayStateError(ReplayError):
    """Raised when the animator is ticked outside the running state."""
    pass
