"""
SkinTone v1 API Routes
Upload endpoints for undertone analysis, face detection and framing advice.
"""
from dataclasses import asdict
from typing import Any, Dict

from fastapi import APIRouter, File, HTTPException, Query, UploadFile

from skintone.schemas import (
    AnalysisResponse, CacheStatsResponse, FaceDetectionResponse, FaceRegionModel,
    FaceValidationResponse, PaletteResponse
)
from skintone.services.analyzer import get_analyzer
from skintone.services.imaging import UnprocessableImageError, read_image, validate_file_upload
from skintone.services.palette import palette_colors
from skintone.services.pixels import PixelBuffer
from skintone.services.seasons import SeasonalPalette
from skintone.services.swatches import render_palette_sheet
from skintone.utils.logging import get_logger
from skintone.utils.metrics import get_metrics

router = APIRouter(prefix="/v1", tags=["Skin Tone Analysis"])
logger = get_logger()


async def _load(file: UploadFile) -> PixelBuffer:
    """Validate and decode an upload, mapping decode failures to 400."""
    validate_file_upload(file)
    try:
        return await read_image(file)
    except UnprocessableImageError as e:
        logger.warning(f"Unprocessable upload: {e}", extra={'upload_name': file.filename})
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/analyze",
             response_model=AnalysisResponse,
             summary="Analyze skin undertone",
             description="Classify undertone and recommend a seasonal colour palette")
async def analyze(
    file: UploadFile = File(..., description="Portrait photo (JPEG or PNG)"),
    include_swatch: bool = Query(False, description="Attach a PNG sheet of the palette colours")
) -> AnalysisResponse:
    buffer = await _load(file)
    outcome = get_analyzer().analyze_detailed(buffer)

    swatch = render_palette_sheet(outcome.result) if include_swatch else None
    return AnalysisResponse(
        request_id=outcome.request_id,
        result=outcome.result,
        face_detected=outcome.face_detected,
        from_cache=outcome.from_cache,
        swatch_png_b64=swatch
    )


@router.post("/detect-face",
             response_model=FaceDetectionResponse,
             summary="Detect face region")
async def detect_face(
    file: UploadFile = File(..., description="Portrait photo (JPEG or PNG)")
) -> FaceDetectionResponse:
    buffer = await _load(file)
    detection = get_analyzer().detect_face(buffer)

    region = None
    if detection.region is not None:
        region = FaceRegionModel(**asdict(detection.region))

    return FaceDetectionResponse(
        face_detected=detection.face_detected,
        region=region,
        signature=list(detection.signature) if detection.signature else None,
        skin_ratio=detection.scan.skin_ratio,
        reason=detection.scan.reason
    )


@router.post("/validate-face",
             response_model=FaceValidationResponse,
             summary="Check portrait framing")
async def validate_face(
    file: UploadFile = File(..., description="Portrait photo (JPEG or PNG)")
) -> FaceValidationResponse:
    buffer = await _load(file)
    validation = get_analyzer().validate_face(buffer)
    return FaceValidationResponse(
        is_valid=validation.is_valid,
        message=validation.message,
        checks=validation.checks
    )


@router.get("/palettes/{season}", response_model=PaletteResponse, summary="Seasonal palette colours")
async def get_palette(season: SeasonalPalette) -> PaletteResponse:
    best, neutral, avoid = palette_colors(season)
    return PaletteResponse(season=season, best_colors=best, neutral_colors=neutral, avoid_colors=avoid)


@router.get("/cache/stats", response_model=CacheStatsResponse, summary="Consistency cache statistics")
async def cache_stats() -> CacheStatsResponse:
    return CacheStatsResponse(**get_analyzer().cache.stats())


@router.delete("/cache", summary="Clear the consistency cache")
async def clear_cache() -> Dict[str, Any]:
    get_analyzer().cache.clear()
    return {"cleared": True}


@router.get("/metrics", summary="In-process analysis metrics")
async def metrics() -> Dict[str, Any]:
    return get_metrics().get_summary()
