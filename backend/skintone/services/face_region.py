"""
Face region locator.

Finds a face-like area from skin-pixel geometry alone: enough skin overall, a
bounding box that is not an extreme rectangle, and skin dense enough inside
that box. Every rejection is reported as a negative result with a reason,
never raised.
"""
import math
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np
from loguru import logger

from skintone.config import AnalysisPolicy
from skintone.services.pixels import FaceRegion, PixelBuffer
from skintone.services.skin import skin_mask


REASON_INSUFFICIENT_SKIN = "insufficient_skin"
REASON_ASPECT_RATIO = "aspect_ratio"
REASON_SPARSE = "sparse"


@dataclass(frozen=True)
class RegionScan:
    """Outcome of one locator pass over a buffer."""
    region: Optional[FaceRegion]
    skin_pixels: int
    scanned_pixels: int
    reason: Optional[str] = None
    skin_box: Optional[FaceRegion] = None  # unpadded bounding box of skin pixels

    @property
    def face_detected(self) -> bool:
        return self.region is not None

    @property
    def skin_ratio(self) -> float:
        return self.skin_pixels / self.scanned_pixels if self.scanned_pixels else 0.0


def tight_bbox(mask: np.ndarray) -> Tuple[int, int, int, int]:
    """
    Calculate tight bounding box around non-zero mask pixels.

    Args:
        mask: Boolean or binary mask

    Returns:
        Bounding box as (x, y, width, height), inclusive of edge pixels

    Raises:
        ValueError: If mask is empty
    """
    nonzero_coords = np.where(mask > 0)

    if len(nonzero_coords[0]) == 0:
        raise ValueError("Mask is empty - cannot compute bounding box")

    y_coords, x_coords = nonzero_coords
    y_min, y_max = int(y_coords.min()), int(y_coords.max())
    x_min, x_max = int(x_coords.min()), int(x_coords.max())

    return x_min, y_min, x_max - x_min + 1, y_max - y_min + 1


def pad_region(region: FaceRegion, fraction: float, width: int, height: int) -> FaceRegion:
    """Grow a region by fraction * max(w, h) on every side, clamped to the image."""
    pad = int(round(max(region.width, region.height) * fraction))
    x0 = max(0, region.x - pad)
    y0 = max(0, region.y - pad)
    x1 = min(width, region.x + region.width + pad)
    y1 = min(height, region.y + region.height + pad)
    return FaceRegion(x0, y0, x1 - x0, y1 - y0)


def locate_face(buffer: PixelBuffer, policy: Optional[AnalysisPolicy] = None) -> RegionScan:
    """
    Locate a face-like skin region in a pixel buffer.

    Args:
        buffer: Decoded image
        policy: Analysis thresholds (defaults to AnalysisPolicy())

    Returns:
        RegionScan with a padded region on acceptance, or region=None and a
        rejection reason
    """
    policy = policy or AnalysisPolicy()
    stride = policy.scan_stride

    # Candidate area: the upper fraction of the frame, sub-sampled by stride
    candidate_rows = max(1, int(math.ceil(buffer.height * policy.candidate_upper_fraction)))
    grid = buffer.rgb()[:candidate_rows:stride, ::stride]
    mask = skin_mask(grid, policy.skin)

    scanned = int(mask.size)
    skin_count = int(np.count_nonzero(mask))
    logger.debug(f"Region scan: {skin_count}/{scanned} skin pixels (stride={stride})")

    if scanned == 0 or skin_count / scanned < policy.min_skin_ratio:
        return RegionScan(None, skin_count, scanned, REASON_INSUFFICIENT_SKIN)

    gx, gy, gw, gh = tight_bbox(mask)

    # Map grid coordinates back to source pixels
    x0 = gx * stride
    y0 = gy * stride
    x1 = min(buffer.width, (gx + gw - 1) * stride + 1)
    y1 = min(buffer.height, (gy + gh - 1) * stride + 1)
    skin_box = FaceRegion(x0, y0, x1 - x0, y1 - y0)

    aspect = skin_box.aspect_ratio
    if aspect < policy.min_aspect or aspect > policy.max_aspect:
        logger.debug(f"Rejected skin box {skin_box.as_xywh()}: aspect ratio {aspect:.2f}")
        return RegionScan(None, skin_count, scanned, REASON_ASPECT_RATIO, skin_box)

    density = skin_count / (gw * gh)
    if density < policy.min_box_density:
        logger.debug(f"Rejected skin box {skin_box.as_xywh()}: density {density:.3f}")
        return RegionScan(None, skin_count, scanned, REASON_SPARSE, skin_box)

    region = pad_region(skin_box, policy.padding_fraction, buffer.width, buffer.height)
    return RegionScan(region, skin_count, scanned, None, skin_box)
