"""
Swatch Rendering Module

Renders palette recommendations as PNG swatch strips for quick visual QA and
for clients that cannot draw the colour lists themselves.
"""

import base64
from typing import List, Optional, Tuple

import cv2
import numpy as np
from loguru import logger

from skintone.schemas import AnalysisResult


def hex_to_bgr(hex_color: str) -> Tuple[int, int, int]:
    """Convert hex color to BGR tuple for OpenCV."""
    hex_color = hex_color.lstrip('#')
    r, g, b = tuple(int(hex_color[i:i+2], 16) for i in (0, 2, 4))
    return (b, g, r)


def validate_swatch_params(hex_colors: List[str], chip_size: int) -> None:
    """Validate swatch rendering parameters."""
    if not hex_colors:
        raise ValueError("hex_colors cannot be empty")

    if chip_size <= 0:
        raise ValueError("chip_size must be positive")

    for i, hex_color in enumerate(hex_colors):
        if not isinstance(hex_color, str) or not hex_color.startswith('#') or len(hex_color) != 7:
            raise ValueError(f"Invalid hex color format at index {i}: {hex_color}")
        try:
            int(hex_color[1:], 16)
        except ValueError:
            raise ValueError(f"Invalid hex color digits at index {i}: {hex_color}")


def _encode_png(img: np.ndarray) -> str:
    success, buffer = cv2.imencode('.png', img)
    if not success:
        raise RuntimeError("Failed to encode swatch as PNG")
    return base64.b64encode(buffer.tobytes()).decode('ascii')


def _strip(hex_colors: List[str], chip_size: int, width: Optional[int] = None) -> np.ndarray:
    """One row of chips; pads with light gray up to width."""
    img_width = width or chip_size * len(hex_colors)
    img = np.full((chip_size, img_width, 3), 240, dtype=np.uint8)
    for i, hex_color in enumerate(hex_colors):
        x_start = i * chip_size
        img[:, x_start:x_start + chip_size, :] = hex_to_bgr(hex_color)
        cv2.rectangle(img, (x_start, 0), (x_start + chip_size - 1, chip_size - 1), (200, 200, 200), 1)
    return img


def render_palette_sheet(result: AnalysisResult, chip_size: int = 40, gap: int = 8) -> str:
    """
    Render best, neutral and avoid colours as three stacked rows.

    Returns:
        Base64-encoded PNG image string
    """
    rows = [
        [entry.hex for entry in result.best_colors],
        [entry.hex for entry in result.neutral_colors],
        [entry.hex for entry in result.avoid_colors],
    ]
    for row in rows:
        validate_swatch_params(row, chip_size)
    logger.debug(f"Rendering palette sheet for {result.seasonal_palette.value}, chip_size={chip_size}")

    width = chip_size * max(len(row) for row in rows)
    spacer = np.full((gap, width, 3), 255, dtype=np.uint8)

    parts = []
    for index, row in enumerate(rows):
        if index:
            parts.append(spacer)
        parts.append(_strip(row, chip_size, width))

    return _encode_png(np.vstack(parts))
