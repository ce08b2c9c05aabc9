"""Bitmap writer for saving generated distance fields.

This module provides the BitmapWriter class for writing bitmaps as raw
float arrays (.npy) or as 8-bit images (.png).
"""

from pathlib import Path

import numpy as np
from PIL import Image

from glyphfield.domain import MsdfBitmap
from glyphfield.exceptions import BitmapSaveError

SUPPORTED_FORMATS = ("png", "npy")


def to_8bit(bitmap: MsdfBitmap) -> np.ndarray:
    """Quantize a bitmap to 8 bits per channel.

    Values are clamped to [0, 1] and rounded, so the edge value 0.5 maps
    to 128.

    Returns:
        uint8 array of shape (height, width) or (height, width, 3)
    """
    pixels = np.clip(bitmap.pixels, 0.0, 1.0)
    quantized = np.rint(pixels * 255.0).astype(np.uint8)
    if bitmap.channels == 1:
        return quantized[..., 0]
    return quantized


class BitmapWriter:
    """Writes distance field bitmaps to an output directory.

    Example:
        writer = BitmapWriter(Path("out"), "png")
        path = writer.write("A", bitmap)
    """

    def __init__(self, output_dir: Path, format: str = "png") -> None:
        """Initialize the bitmap writer.

        Args:
            output_dir: Directory receiving the files (created on first write)
            format: "png" or "npy"

        Raises:
            ValueError: If the format is not supported
        """
        if format not in SUPPORTED_FORMATS:
            raise ValueError(f"Unsupported output format '{format}'")
        self._output_dir = output_dir
        self._format = format

    def get_output_path(self, glyph_name: str) -> Path:
        """Output file path for a glyph.

        Converts: A -> out/A.png
                  uni0041 -> out/uni0041.npy
        """
        return self._output_dir / f"{glyph_name}.{self._format}"

    def write(self, glyph_name: str, bitmap: MsdfBitmap) -> Path:
        """Save a bitmap.

        Args:
            glyph_name: Name used for the file stem
            bitmap: Bitmap to save

        Returns:
            Path of the written file

        Raises:
            BitmapSaveError: If the file cannot be written
        """
        path = self.get_output_path(glyph_name)
        try:
            self._output_dir.mkdir(parents=True, exist_ok=True)
            if self._format == "npy":
                np.save(path, bitmap.pixels)
            else:
                Image.fromarray(to_8bit(bitmap)).save(path)
        except (OSError, ValueError) as e:
            raise BitmapSaveError(str(path), str(e)) from e
        return path
