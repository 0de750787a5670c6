"""
Face framing advisory.

Cheap checks that a photo looks like a portrait before the user commits to an
analysis: framing aspect ratio, overall skin coverage, colour variation, and
skin concentrated in the centre rather than the edges. The result only drives
a warning; analysis runs regardless.
"""
from dataclasses import dataclass, field
from typing import Dict, Optional

import numpy as np

from skintone.config import SkinBounds, config
from skintone.services.imaging import resize_long_edge
from skintone.services.pixels import PixelBuffer
from skintone.services.skin import skin_mask


MSG_FACE_DETECTED = "Face detected"
MSG_BAD_FRAMING = (
    "This image doesn't seem to contain a properly framed face. "
    "Please upload a photo that clearly shows your face."
)
MSG_NO_SKIN = "We couldn't detect a human face in this image. Please upload a clear photo of your face."
MSG_VARIATION = (
    "This doesn't appear to be a photo with a clearly visible face. "
    "Please upload a clear portrait photo."
)
MSG_DISTRIBUTION = (
    "We couldn't detect a human face in this image. "
    "Please upload a photo that clearly shows your face."
)


@dataclass(frozen=True)
class ValidationPolicy:
    """Thresholds for the framing advisory."""
    min_aspect: float = 0.5
    max_aspect: float = 1.8
    min_skin_ratio: float = 0.15
    min_variation: float = 10.0
    max_variation: float = 100.0
    center_radius_fraction: float = 1.0 / 3.0
    min_center_skin_ratio: float = 0.3
    center_edge_factor: float = 1.5


@dataclass(frozen=True)
class FaceValidation:
    """Advisory verdict and the measurements behind it."""
    is_valid: bool
    message: str
    checks: Dict[str, float] = field(default_factory=dict)


def color_variation(rgb: np.ndarray) -> float:
    """
    Mean channel change between consecutive sampled pixels.

    Every fourth pixel (starting at the second) is compared with the previous
    sample; the summed absolute RGB differences are normalised by pixels / 16.
    """
    flat = rgb.reshape(-1, 3).astype(np.int32)
    if len(flat) < 2:
        return 0.0

    samples = flat[1::4]
    previous = np.concatenate([flat[:1], samples[:-1]], axis=0)
    total = float(np.abs(samples - previous).sum())
    return total / (len(flat) / 16.0)


def center_edge_skin_ratios(mask: np.ndarray, radius_fraction: float = 1.0 / 3.0):
    """Skin ratios inside and outside a centred disc of radius min(w, h) * fraction."""
    height, width = mask.shape
    ys, xs = np.mgrid[0:height, 0:width]
    radius = min(width, height) * radius_fraction
    inside = np.hypot(xs - width // 2, ys - height // 2) < radius

    center_total = int(inside.sum())
    edge_total = int((~inside).sum())
    center_ratio = float(mask[inside].sum()) / center_total if center_total else 0.0
    edge_ratio = float(mask[~inside].sum()) / edge_total if edge_total else 0.0
    return center_ratio, edge_ratio


def validate_face_framing(
    buffer: PixelBuffer,
    policy: Optional[ValidationPolicy] = None,
    bounds: Optional[SkinBounds] = None,
    working_edge: Optional[int] = None
) -> FaceValidation:
    """
    Check whether an image looks like a well-framed face photo.

    Args:
        buffer: Decoded image
        policy: Advisory thresholds
        bounds: Skin classifier bounds
        working_edge: Long edge the image is scaled to, up or down (default from config)

    Returns:
        FaceValidation with the first failing check's message, or "Face detected"
    """
    policy = policy or ValidationPolicy()
    checks: Dict[str, float] = {}

    aspect = buffer.width / buffer.height
    checks["aspect_ratio"] = aspect
    if aspect > policy.max_aspect or aspect < policy.min_aspect:
        return FaceValidation(False, MSG_BAD_FRAMING, checks)

    rgb = resize_long_edge(
        np.ascontiguousarray(buffer.rgb()),
        working_edge or config.VALIDATION_EDGE,
        allow_upscale=True
    )
    mask = skin_mask(rgb, bounds)

    skin_ratio = float(mask.mean())
    checks["skin_ratio"] = skin_ratio
    if skin_ratio < policy.min_skin_ratio:
        return FaceValidation(False, MSG_NO_SKIN, checks)

    variation = color_variation(rgb)
    checks["color_variation"] = variation
    if variation < policy.min_variation or variation > policy.max_variation:
        return FaceValidation(False, MSG_VARIATION, checks)

    center_ratio, edge_ratio = center_edge_skin_ratios(mask, policy.center_radius_fraction)
    checks["center_skin_ratio"] = center_ratio
    checks["edge_skin_ratio"] = edge_ratio
    if not (center_ratio > policy.min_center_skin_ratio
            and center_ratio > edge_ratio * policy.center_edge_factor):
        return FaceValidation(False, MSG_DISTRIBUTION, checks)

    return FaceValidation(True, MSG_FACE_DETECTED, checks)
