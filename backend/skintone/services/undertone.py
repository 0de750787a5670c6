"""
Undertone classification from skin samples.

Skin pixels are reduced to one robust colour (a brightness-median sample
blended with the plain mean) which is then banded by its red-blue margin.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

import numpy as np
from loguru import logger

from skintone.config import AnalysisPolicy
from skintone.services.pixels import FaceRegion, PixelBuffer
from skintone.services.signature import FaceSignature, signature_cells
from skintone.services.skin import skin_mask


class Undertone(str, Enum):
    """Skin colour temperature."""
    WARM = "warm"
    COOL = "cool"
    NEUTRAL = "neutral"


@dataclass(frozen=True)
class UndertoneEstimate:
    """Classification together with the evidence behind it."""
    undertone: Undertone
    sample_count: int
    color: Optional[Tuple[float, float, float]] = None  # blended RGB, None when insufficient

    @property
    def sufficient(self) -> bool:
        return self.color is not None


def collect_skin_samples(
    buffer: Optional[PixelBuffer] = None,
    region: Optional[FaceRegion] = None,
    signature: Optional[FaceSignature] = None,
    policy: Optional[AnalysisPolicy] = None
) -> np.ndarray:
    """
    Gather skin-classified colours from pixels and/or signature cells.

    Args:
        buffer: Image to sample (skipped when None)
        region: Restrict pixel sampling to this area (whole image when None)
        signature: Grid averages added as extra virtual samples
        policy: Analysis thresholds

    Returns:
        (N, 3) int32 array of RGB samples
    """
    policy = policy or AnalysisPolicy()
    parts = []

    if buffer is not None:
        rgb = buffer.crop_rgb(region or buffer.full_region()).reshape(-1, 3)
        parts.append(rgb[skin_mask(rgb, policy.skin)].astype(np.int32))

    if signature:
        cells = signature_cells(signature)
        parts.append(cells[skin_mask(cells, policy.skin)])

    if not parts:
        return np.empty((0, 3), dtype=np.int32)
    return np.concatenate(parts, axis=0)


def robust_color(samples: np.ndarray, median_weight: float = 0.7) -> Tuple[float, float, float]:
    """
    Blend the brightness-median sample with the mean of all samples.

    Args:
        samples: (N, 3) RGB samples, N >= 1
        median_weight: Share of the median sample in the blend

    Returns:
        Blended (R, G, B) as floats
    """
    brightness = samples.sum(axis=1)
    order = np.argsort(brightness, kind="stable")
    median = samples[order[len(order) // 2]].astype(np.float64)
    mean = samples.mean(axis=0)

    blended = median_weight * median + (1.0 - median_weight) * mean
    return float(blended[0]), float(blended[1]), float(blended[2])


def classify_color(color: Tuple[float, float, float], policy: Optional[AnalysisPolicy] = None) -> Undertone:
    """
    Band a colour into warm / cool / neutral.

    Warm needs red well above blue and above green; cool is a small red-blue
    margin or blue reaching green; everything in between is neutral.
    """
    policy = policy or AnalysisPolicy()
    r, g, b = color
    rb_margin = r - b

    if rb_margin > policy.warm_rb_margin and r - g > policy.warm_rg_margin:
        return Undertone.WARM
    if rb_margin < policy.cool_rb_margin or b >= g:
        return Undertone.COOL
    return Undertone.NEUTRAL


def classify_undertone(samples: np.ndarray, policy: Optional[AnalysisPolicy] = None) -> UndertoneEstimate:
    """
    Classify (N, 3) RGB samples into an undertone.

    Fewer than policy.min_samples samples give neutral with no blended colour.
    """
    policy = policy or AnalysisPolicy()
    count = int(len(samples))

    if count < policy.min_samples:
        logger.debug(f"Only {count} skin samples (< {policy.min_samples}), using neutral")
        return UndertoneEstimate(Undertone.NEUTRAL, count)

    color = robust_color(samples, policy.median_weight)
    undertone = classify_color(color, policy)
    logger.debug(
        f"Undertone {undertone.value} from {count} samples, "
        f"color=({color[0]:.1f}, {color[1]:.1f}, {color[2]:.1f})"
    )
    return UndertoneEstimate(undertone, count, color)

