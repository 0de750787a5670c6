"""
SkinTone Seasonal Palettes

Maps (undertone, signature hash) to one of four seasonal palettes and a palette
to its curated best / neutral / avoid colour lists.
"""
from typing import Dict, List, Optional, Tuple

from skintone.schemas import AnalysisResult, ColorEntry
from skintone.services.seasons import (
    AVOID_COLORS, BEST_COLORS, NEUTRAL_COLORS, SEASON_ORDER, SeasonalPalette, Swatch
)
from skintone.services.signature import FaceSignature
from skintone.services.undertone import Undertone


DEFAULT_PALETTE = SeasonalPalette.SUMMER

SKIN_TONE_LABELS: Dict[Undertone, str] = {
    Undertone.WARM: "Warm / Golden",
    Undertone.COOL: "Cool / Rosy",
    Undertone.NEUTRAL: "Neutral / Balanced",
}


def stable_hash(signature: FaceSignature, central: bool = True, modulus: int = 1_000_000) -> int:
    """
    Deterministic non-negative hash of a signature.

    Args:
        signature: Face signature values
        central: Hash only the central half of the signature (face centre)
        modulus: Fold the 32-bit accumulator into [0, modulus)

    Returns:
        Integer in [0, modulus)
    """
    values = signature
    if central:
        n = len(signature)
        start = n // 4
        middle = signature[start:start + n // 2]
        if middle:
            values = middle

    h = 0
    for value in values:
        h = ((h << 5) - h + int(value)) & 0xFFFFFFFF
    return h % modulus


def select_palette(undertone: Undertone, signature_hash: int) -> SeasonalPalette:
    """
    Pick a seasonal palette for an undertone.

    Warm splits spring/autumn and cool splits summer/winter on hash % 100 < 50;
    neutral spreads over all four seasons by quartile.
    """
    bucket = signature_hash % 100

    if undertone == Undertone.WARM:
        return SeasonalPalette.SPRING if bucket < 50 else SeasonalPalette.AUTUMN
    if undertone == Undertone.COOL:
        return SeasonalPalette.SUMMER if bucket < 50 else SeasonalPalette.WINTER

    return SEASON_ORDER[bucket // 25]


def _entries(swatches: List[Swatch]) -> List[ColorEntry]:
    return [ColorEntry(name=name, hex=hex_code, description=description) for name, hex_code, description in swatches]


def palette_colors(palette: SeasonalPalette) -> Tuple[List[ColorEntry], List[ColorEntry], List[ColorEntry]]:
    """Best (8), neutral (4) and avoid (4) colours for a palette."""
    palette = SeasonalPalette(palette)
    return (
        _entries(BEST_COLORS[palette]),
        _entries(NEUTRAL_COLORS[palette]),
        _entries(AVOID_COLORS[palette]),
    )


def build_result(undertone: Undertone, palette: SeasonalPalette) -> AnalysisResult:
    """Assemble the full result record; it depends only on undertone and palette."""
    undertone = Undertone(undertone)
    best, neutral, avoid = palette_colors(palette)
    return AnalysisResult(
        undertone=undertone,
        skin_tone=SKIN_TONE_LABELS[undertone],
        seasonal_palette=SeasonalPalette(palette),
        best_colors=best,
        neutral_colors=neutral,
        avoid_colors=avoid,
    )


def default_result() -> AnalysisResult:
    """The neutral / summer recommendation used whenever analysis cannot proceed."""
    return build_result(Undertone.NEUTRAL, DEFAULT_PALETTE)


def palette_for_signature(
    undertone: Undertone,
    signature: FaceSignature,
    central: bool = True,
    modulus: int = 1_000_000,
    fallback: Optional[SeasonalPalette] = None
) -> SeasonalPalette:
    """Palette for an undertone and signature; empty signatures use the fallback palette."""
    if not signature:
        return fallback or DEFAULT_PALETTE
    return select_palette(undertone, stable_hash(signature, central, modulus))
