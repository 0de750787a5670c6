"""
SkinTone API Schemas
Pydantic models for analysis results and request/response validation.
"""
from typing import Dict, List, Optional
from pydantic import BaseModel, Field

from skintone.services.seasons import SeasonalPalette
from skintone.services.undertone import Undertone


HEX_PATTERN = r"^#[0-9A-Fa-f]{6}$"


class ColorEntry(BaseModel):
    """Single recommended (or discouraged) colour."""
    name: str = Field(..., description="Display name of the colour")
    hex: str = Field(
        ...,
        pattern=HEX_PATTERN,
        description="Hex color code in format #RRGGBB"
    )
    description: str = Field(..., description="Short description shown under the swatch")


class AnalysisResult(BaseModel):
    """Undertone classification and the seasonal palette derived from it."""
    undertone: Undertone = Field(..., description="Skin undertone: warm, cool or neutral")
    skin_tone: str = Field(..., description="Human-readable undertone label")
    seasonal_palette: SeasonalPalette = Field(..., description="Seasonal palette family")
    best_colors: List[ColorEntry] = Field(..., description="Eight colours that flatter this palette")
    neutral_colors: List[ColorEntry] = Field(..., description="Four foundation neutrals")
    avoid_colors: List[ColorEntry] = Field(..., description="Four colours to avoid")


class FaceRegionModel(BaseModel):
    """Face bounding box in source-image pixels."""
    x: int = Field(..., ge=0)
    y: int = Field(..., ge=0)
    width: int = Field(..., gt=0)
    height: int = Field(..., gt=0)


class AnalysisResponse(BaseModel):
    """Response of the analyze endpoint."""
    request_id: str = Field(..., description="Request identifier for tracing")
    result: AnalysisResult = Field(..., description="Undertone and palette recommendation")
    face_detected: bool = Field(..., description="Whether a face region was located")
    from_cache: bool = Field(
        ...,
        description="Whether the result was reused from a similar earlier image"
    )
    swatch_png_b64: Optional[str] = Field(
        None,
        description="Base64-encoded PNG strip of the best colours"
    )


class FaceDetectionResponse(BaseModel):
    """Response of the detect-face endpoint."""
    face_detected: bool = Field(..., description="Whether a face region was located")
    region: Optional[FaceRegionModel] = Field(None, description="Padded face region")
    signature: Optional[List[int]] = Field(
        None,
        description="Grid-average face signature (R, G, B per cell, row-major)"
    )
    skin_ratio: float = Field(..., ge=0.0, le=1.0, description="Share of scanned pixels classified as skin")
    reason: Optional[str] = Field(None, description="Why no face was accepted")


class FaceValidationResponse(BaseModel):
    """Advisory on whether the photo looks like a well-framed portrait."""
    is_valid: bool = Field(..., description="Whether every framing check passed")
    message: str = Field(..., description="User-facing advisory message")
    checks: Dict[str, float] = Field(
        default_factory=dict,
        description="Measured values behind each framing check"
    )


class PaletteResponse(BaseModel):
    """Static colour lists for one seasonal palette."""
    season: SeasonalPalette
    best_colors: List[ColorEntry]
    neutral_colors: List[ColorEntry]
    avoid_colors: List[ColorEntry]


class CacheStatsResponse(BaseModel):
    """Consistency cache statistics."""
    size: int = Field(..., ge=0)
    capacity: int = Field(..., ge=1)
    hits: int = Field(..., ge=0)
    misses: int = Field(..., ge=0)
    records: int = Field(..., ge=0)
    evictions: int = Field(..., ge=0)


class HealthResponse(BaseModel):
    """Health check response."""
    ok: bool = Field(True, description="Service health status")
    version: str = Field(..., description="Service version")
    service: str = Field("skintone-analysis", description="Service name")


class ErrorResponse(BaseModel):
    """Error response."""
    detail: str = Field(..., description="Error message")
