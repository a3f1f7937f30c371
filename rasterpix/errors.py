class RasterError(Exception):
    """Base class for errors raised by rasterpix."""


class SizeMismatchError(RasterError, ValueError):
    """Supplied pixel storage does not hold exactly `width * height` pixels."""

    def __init__(self, width: int, height: int, actual: int) -> None:
        self.expected: int = width * height
        self.actual: int = actual
        super().__init__(
            f"buffer of {actual} pixels does not match {width}x{height} ({self.expected})"
        )


class SceneError(RasterError, ValueError):
    """A scene description could not be understood."""
