"""Float bitmap holding a generated distance field."""

import numpy as np

from glyphfield.exceptions import InvalidDimensionsError


class MsdfBitmap:
    """Row-major float32 bitmap with one or three channels per pixel.

    Pixels are stored as a ``(height, width, channels)`` numpy array. The
    three-channel form holds R, G, B multi-channel distances; single-channel
    bitmaps hold plain or pseudo signed distance fields.

    Example:
        bitmap = MsdfBitmap(32, 32)
        r, g, b = bitmap[4, 7]
    """

    def __init__(self, width: int, height: int, channels: int = 3) -> None:
        """Allocate a zero-filled bitmap.

        Args:
            width: Width in pixels, must be positive
            height: Height in pixels, must be positive
            channels: 1 or 3

        Raises:
            InvalidDimensionsError: If any dimension is not usable
        """
        if width <= 0 or height <= 0 or channels not in (1, 3):
            raise InvalidDimensionsError(width, height, channels)
        self.width = width
        self.height = height
        self.channels = channels
        self.pixels = np.zeros((height, width, channels), dtype=np.float32)

    def __getitem__(self, xy: tuple[int, int]) -> np.ndarray:
        """Return a writable view of the channels of pixel (x, y)."""
        x, y = xy
        return self.pixels[y, x]

    def copy(self) -> "MsdfBitmap":
        """Deep copy of the bitmap."""
        other = MsdfBitmap(self.width, self.height, self.channels)
        other.pixels[...] = self.pixels
        return other

    def median(self) -> np.ndarray:
        """Per-pixel median of the channels, as a shader reconstructs it.

        Returns:
            ``(height, width)`` float32 array
        """
        if self.channels == 1:
            return self.pixels[..., 0].copy()
        return np.median(self.pixels, axis=2).astype(np.float32)

    def __repr__(self) -> str:
        return f"MsdfBitmap(width={self.width}, height={self.height}, channels={self.channels})"
