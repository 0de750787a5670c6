"""
Skin-tone pixel classifier.

Broad per-pixel RGB rule covering light through very dark skin. Not a
statistical skin model.
"""
from typing import Optional

import numpy as np

from skintone.config import SkinBounds


DEFAULT_BOUNDS = SkinBounds()


def is_skin(r: int, g: int, b: int, bounds: Optional[SkinBounds] = None) -> bool:
    """
    Classify a single RGB triple as skin.

    Args:
        r, g, b: Channel values, normally 0-255
        bounds: Classifier thresholds (defaults to SkinBounds())

    Returns:
        True when every rule of the classifier holds
    """
    bounds = bounds or DEFAULT_BOUNDS
    r, g, b = int(r), int(g), int(b)

    return (
        r > bounds.r_min and g > bounds.g_min and b > bounds.b_min
        and r < bounds.upper and g < bounds.upper and b < bounds.upper
        and r > b - bounds.rb_tolerance
        and abs(r - g) < bounds.rg_max_gap
        and r > g - bounds.gr_tolerance
    )


def skin_mask(rgb: np.ndarray, bounds: Optional[SkinBounds] = None) -> np.ndarray:
    """
    Vectorised form of is_skin over an (..., 3) array.

    Args:
        rgb: Array whose last axis holds R, G, B
        bounds: Classifier thresholds (defaults to SkinBounds())

    Returns:
        Boolean array of shape rgb.shape[:-1]
    """
    bounds = bounds or DEFAULT_BOUNDS
    channels = np.asarray(rgb).astype(np.int32)
    r, g, b = channels[..., 0], channels[..., 1], channels[..., 2]

    mask = (r > bounds.r_min) & (g > bounds.g_min) & (b > bounds.b_min)
    mask &= (r < bounds.upper) & (g < bounds.upper) & (b < bounds.upper)
    mask &= r > b - bounds.rb_tolerance
    mask &= np.abs(r - g) < bounds.rg_max_gap
    mask &= r > g - bounds.gr_tolerance
    return mask

