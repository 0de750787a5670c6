"""
SkinTone Analysis Orchestrator
Chains face location, signature extraction, consistency lookup, undertone
classification and palette mapping into one call that never fails outward.
"""
import time
from dataclasses import dataclass
from typing import Optional

from skintone.config import AnalysisPolicy, Config
from skintone.schemas import AnalysisResult
from skintone.services.cache import ConsistencyCache
from skintone.services.face_region import RegionScan, locate_face
from skintone.services.face_validation import FaceValidation, validate_face_framing
from skintone.services.palette import DEFAULT_PALETTE, build_result, default_result, palette_for_signature
from skintone.services.pixels import FaceRegion, PixelBuffer
from skintone.services.signature import FaceSignature, extract_signature
from skintone.services.undertone import UndertoneEstimate, collect_skin_samples, classify_undertone
from skintone.utils.ids import generate_request_id
from skintone.utils.logging import get_logger
from skintone.utils.metrics import get_metrics

logger = get_logger()


@dataclass(frozen=True)
class FaceDetection:
    """Face locator verdict as exposed to callers."""
    face_detected: bool
    region: Optional[FaceRegion]
    signature: Optional[FaceSignature]
    scan: RegionScan


@dataclass(frozen=True)
class AnalysisOutcome:
    """Result container for one analysis."""
    request_id: str
    result: AnalysisResult
    face_detected: bool = False
    from_cache: bool = False
    signature: FaceSignature = ()
    region: Optional[FaceRegion] = None
    estimate: Optional[UndertoneEstimate] = None
    degraded: bool = False


class SkinToneAnalyzer:
    """
    Analysis service owning its policy and consistency cache.

    One instance per process is typical; tests and multi-tenant deployments
    can build their own instances with a private cache.
    """

    def __init__(self, policy: Optional[AnalysisPolicy] = None, cache: Optional[ConsistencyCache] = None):
        self.policy = policy or AnalysisPolicy()
        self.cache = cache if cache is not None else ConsistencyCache(
            capacity=self.policy.cache_capacity,
            threshold=self.policy.similarity_threshold,
            scale=self.policy.similarity_scale
        )

    def _signature(self, buffer: PixelBuffer, region: Optional[FaceRegion]) -> FaceSignature:
        return extract_signature(
            buffer,
            region,
            grid_size=self.policy.grid_size,
            min_region_dim=self.policy.min_region_dim
        )

    def detect_face(self, buffer: PixelBuffer) -> FaceDetection:
        """
        Locate a face region and summarise it as a signature.

        Returns:
            FaceDetection; region and signature are None when no face was accepted
        """
        scan = locate_face(buffer, self.policy)
        if scan.region is None:
            return FaceDetection(False, None, None, scan)

        signature = self._signature(buffer, scan.region)
        return FaceDetection(True, scan.region, signature or None, scan)

    def validate_face(self, buffer: PixelBuffer) -> FaceValidation:
        """Framing advisory for the upload dialog; does not affect analysis."""
        return validate_face_framing(buffer, bounds=self.policy.skin)

    def analyze(self, buffer: PixelBuffer) -> AnalysisResult:
        """Undertone and seasonal palette for an image."""
        return self.analyze_detailed(buffer).result

    def analyze_detailed(self, buffer: PixelBuffer) -> AnalysisOutcome:
        """
        Run the full pipeline and report how the result was reached.

        Any internal failure yields the neutral / summer default instead of
        an exception.
        """
        request_id = generate_request_id("tone")
        start_time = time.time()
        metrics = get_metrics()
        metrics.increment_analysis_count()
        log = logger.bind(request_id=request_id)

        try:
            outcome = self._run(request_id, buffer)
        except Exception as e:
            log.error(f"[{request_id}] Analysis failed, using default palette: {e}", extra={
                'error_type': type(e).__name__
            })
            metrics.increment_fallback_count("error")
            outcome = AnalysisOutcome(request_id, default_result(), degraded=True)

        duration_ms = (time.time() - start_time) * 1000
        metrics.record_timing("analysis", duration_ms)
        metrics.increment_undertone_count(outcome.result.undertone.value)

        log.info(f"[{request_id}] Analysis complete", extra={
            'undertone': outcome.result.undertone.value,
            'seasonal_palette': outcome.result.seasonal_palette.value,
            'face_detected': outcome.face_detected,
            'from_cache': outcome.from_cache,
            'duration_ms': round(duration_ms, 2)
        })
        return outcome

    def _run(self, request_id: str, buffer: PixelBuffer) -> AnalysisOutcome:
        metrics = get_metrics()

        # Step 1: Locate face; fall back to the whole image
        scan = locate_face(buffer, self.policy)
        region = scan.region
        if region is not None:
            metrics.increment_face_detected_count()
        else:
            logger.debug(f"[{request_id}] No face region ({scan.reason}), sampling whole image")

        # Step 2: Signature of the face region (or whole frame)
        signature = self._signature(buffer, region)

        # Step 3: Reuse a result for a visually similar earlier image
        cached = self.cache.lookup(signature)
        if cached is not None:
            metrics.increment_cache_hit_count()
            return AnalysisOutcome(
                request_id, cached,
                face_detected=region is not None,
                from_cache=True,
                signature=signature,
                region=region
            )

        # Step 4: Undertone from skin pixels plus signature cells
        samples = collect_skin_samples(buffer, region, signature, self.policy)
        estimate = classify_undertone(samples, self.policy)

        # Step 5: Palette
        if estimate.sufficient:
            palette = palette_for_signature(
                estimate.undertone,
                signature,
                central=self.policy.hash_central_slice,
                modulus=self.policy.hash_modulus
            )
        else:
            metrics.increment_fallback_count("insufficient_samples")
            palette = DEFAULT_PALETTE

        result = build_result(estimate.undertone, palette)
        self.cache.record(signature, result)

        return AnalysisOutcome(
            request_id, result,
            face_detected=region is not None,
            signature=signature,
            region=region,
            estimate=estimate
        )


# Global analyzer instance
_analyzer: Optional[SkinToneAnalyzer] = None


def get_analyzer() -> SkinToneAnalyzer:
    """Get or create the process-wide analyzer."""
    global _analyzer
    if _analyzer is None:
        _analyzer = SkinToneAnalyzer(Config.policy())
    return _analyzer
