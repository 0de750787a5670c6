"""
SkinTone Face Signatures
Compact grid-average fingerprints used for cache matching and palette hashing.
"""
from typing import Optional, Tuple

import numpy as np

from skintone.services.pixels import FaceRegion, PixelBuffer


FaceSignature = Tuple[int, ...]

DEFAULT_GRID_SIZE = 5
EMPTY_SIGNATURE: FaceSignature = ()


def grid_bounds(length: int, grid_size: int) -> list:
    """Integer cell boundaries floor(i * length / grid_size) for i in 0..grid_size."""
    return [(i * length) // grid_size for i in range(grid_size + 1)]


def extract_signature(
    buffer: PixelBuffer,
    region: Optional[FaceRegion] = None,
    grid_size: int = DEFAULT_GRID_SIZE,
    min_region_dim: int = 5
) -> FaceSignature:
    """
    Downsample a region into an N x N grid of average colours.

    Args:
        buffer: Decoded image
        region: Area to summarise (whole image when None)
        grid_size: Cells per side
        min_region_dim: Regions narrower or shorter than this give an empty signature

    Returns:
        Tuple of 3 * grid_size**2 ints (R, G, B per cell, row-major), or an
        empty tuple for a degenerate region
    """
    rgb = buffer.crop_rgb(region or buffer.full_region())
    height, width = rgb.shape[:2]
    if height < min_region_dim or width < min_region_dim:
        return EMPTY_SIGNATURE

    rows = grid_bounds(height, grid_size)
    cols = grid_bounds(width, grid_size)

    values = []
    for row in range(grid_size):
        for col in range(grid_size):
            cell = rgb[rows[row]:rows[row + 1], cols[col]:cols[col + 1]]
            if cell.size == 0:
                continue
            means = np.rint(cell.reshape(-1, 3).mean(axis=0)).astype(int)
            values.extend(int(v) for v in means)

    return tuple(values)


def signature_cells(signature: FaceSignature) -> np.ndarray:
    """View a signature as an (cells, 3) int array of per-cell RGB averages."""
    usable = len(signature) - len(signature) % 3
    return np.asarray(signature[:usable], dtype=np.int32).reshape(-1, 3)


def signatures_comparable(a: FaceSignature, b: FaceSignature) -> bool:
    """Signatures can be compared position-wise only when built on the same grid."""
    return len(a) == len(b)
