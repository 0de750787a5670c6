"""
Pixel buffer model shared by every analysis stage.

A PixelBuffer is a decoded image as handed over by the imaging layer (or any
other caller): row-major RGBA bytes with known width and height. The backing
array is made read-only on construction so stages cannot mutate each other's
input.
"""
from dataclasses import dataclass
from typing import Tuple

import numpy as np


@dataclass(frozen=True)
class FaceRegion:
    """Axis-aligned box in source-image pixel coordinates."""
    x: int
    y: int
    width: int
    height: int

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height

    @property
    def area(self) -> int:
        return self.width * self.height

    def fits_within(self, width: int, height: int) -> bool:
        """True when the box is non-empty and lies inside a width x height image."""
        return (
            self.width > 0 and self.height > 0
            and self.x >= 0 and self.y >= 0
            and self.x + self.width <= width
            and self.y + self.height <= height
        )

    def as_xywh(self) -> Tuple[int, int, int, int]:
        return self.x, self.y, self.width, self.height


def _as_uint8(array: np.ndarray) -> np.ndarray:
    """
    Channel data as uint8 without silent wrapping or truncation.

    Integer arrays are accepted when every value lies in 0-255; float and
    other dtypes are rejected.
    """
    if array.dtype == np.uint8:
        return array
    if array.dtype.kind not in ("i", "u"):
        raise ValueError(f"Expected uint8 pixel data, got dtype {array.dtype}")
    if array.size and (array.min() < 0 or array.max() > 255):
        raise ValueError(
            f"Pixel values out of range 0-255 (min {array.min()}, max {array.max()})"
        )
    return array.astype(np.uint8)


class PixelBuffer:
    """Immutable RGBA image of shape (height, width, 4), dtype uint8."""

    __slots__ = ("_rgba",)

    def __init__(self, rgba: np.ndarray):
        if rgba.ndim != 3 or rgba.shape[2] != 4:
            raise ValueError(f"Expected (height, width, 4) RGBA array, got shape {rgba.shape}")
        if rgba.shape[0] == 0 or rgba.shape[1] == 0:
            raise ValueError("Pixel buffer must have non-zero width and height")
        data = np.array(_as_uint8(np.asarray(rgba)), copy=True)
        data.setflags(write=False)
        self._rgba = data

    @classmethod
    def from_rgba_bytes(cls, width: int, height: int, data: bytes) -> "PixelBuffer":
        """
        Build a buffer from raw row-major RGBA bytes.

        Raises:
            ValueError: If the byte count does not match width * height * 4
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Invalid dimensions {width}x{height}")
        expected = width * height * 4
        if len(data) != expected:
            raise ValueError(f"Expected {expected} bytes for {width}x{height} RGBA, got {len(data)}")
        array = np.frombuffer(bytes(data), dtype=np.uint8).reshape(height, width, 4)
        return cls(array)

    @classmethod
    def from_array(cls, array: np.ndarray) -> "PixelBuffer":
        """
        Build a buffer from an (h, w, 3) RGB or (h, w, 4) RGBA array.

        RGB input gets a fully opaque alpha channel. Float arrays and integer
        values outside 0-255 raise ValueError.
        """
        array = np.asarray(array)
        if array.ndim != 3 or array.shape[2] not in (3, 4):
            raise ValueError(f"Expected (height, width, 3|4) array, got shape {array.shape}")
        if array.shape[2] == 3:
            alpha = np.full(array.shape[:2] + (1,), 255, dtype=np.uint8)
            array = np.concatenate([_as_uint8(array), alpha], axis=2)
        return cls(array)

    @classmethod
    def filled(cls, width: int, height: int, rgb: Tuple[int, int, int]) -> "PixelBuffer":
        """Uniform opaque image, mostly useful for tests and fixtures."""
        array = np.empty((height, width, 4), dtype=np.uint8)
        array[..., :3] = rgb
        array[..., 3] = 255
        return cls(array)

    @property
    def width(self) -> int:
        return int(self._rgba.shape[1])

    @property
    def height(self) -> int:
        return int(self._rgba.shape[0])

    @property
    def rgba(self) -> np.ndarray:
        return self._rgba

    def rgb(self) -> np.ndarray:
        """Read-only (h, w, 3) view of the colour channels."""
        return self._rgba[..., :3]

    def crop_rgb(self, region: FaceRegion) -> np.ndarray:
        """Colour channels inside a region, clipped to the buffer bounds."""
        x0 = max(0, region.x)
        y0 = max(0, region.y)
        x1 = min(self.width, region.x + region.width)
        y1 = min(self.height, region.y + region.height)
        return self._rgba[y0:y1, x0:x1, :3]

    def full_region(self) -> FaceRegion:
        return FaceRegion(0, 0, self.width, self.height)

    def __repr__(self) -> str:
        return f"PixelBuffer({self.width}x{self.height})"
