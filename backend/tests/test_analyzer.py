"""
Tests for the analysis orchestrator.
"""
import numpy as np

from skintone.services import analyzer as analyzer_module
from skintone.services.analyzer import SkinToneAnalyzer, get_analyzer
from skintone.services.cache import ConsistencyCache
from skintone.services.face_region import REASON_INSUFFICIENT_SKIN
from skintone.services.pixels import FaceRegion, PixelBuffer
from skintone.services.seasons import SeasonalPalette
from skintone.services.undertone import Undertone
from skintone.utils.metrics import get_metrics

PRIMARIES = [
    (255, 0, 0), (0, 255, 0), (0, 0, 255), (255, 255, 0),
    (255, 0, 255), (0, 255, 255), (255, 255, 255), (0, 0, 0),
]


class TestAnalyze:

    def test_warm_image(self, analyzer, warm_image):
        outcome = analyzer.analyze_detailed(warm_image)

        assert outcome.face_detected
        assert not outcome.from_cache
        assert not outcome.degraded
        assert outcome.region == FaceRegion(0, 0, 100, 100)
        assert outcome.result.undertone == Undertone.WARM
        assert outcome.result.seasonal_palette in (SeasonalPalette.SPRING, SeasonalPalette.AUTUMN)
        assert outcome.estimate.sample_count == 100 * 100 + 25
        assert outcome.request_id.startswith("tone-")

    def test_result_lists_complete(self, analyzer, warm_image):
        result = analyzer.analyze(warm_image)
        assert len(result.best_colors) == 8
        assert len(result.neutral_colors) == 4
        assert len(result.avoid_colors) == 4

    def test_black_image_defaults(self, analyzer, black_image):
        """No skin at all: neutral undertone with the summer palette."""
        outcome = analyzer.analyze_detailed(black_image)

        assert not outcome.face_detected
        assert not outcome.degraded
        assert outcome.result.undertone == Undertone.NEUTRAL
        assert outcome.result.seasonal_palette == SeasonalPalette.SUMMER
        assert outcome.estimate.sample_count == 0
        assert get_metrics().get_counters()["fallback_total_insufficient_samples"] == 1

    def test_fallback_results_are_cached(self, analyzer, black_image):
        analyzer.analyze(black_image)
        assert len(analyzer.cache) == 1

    def test_deterministic_across_instances(self, portrait_rgb, warm_image):
        buffer = PixelBuffer.from_array(portrait_rgb)
        first = SkinToneAnalyzer().analyze(buffer)
        second = SkinToneAnalyzer().analyze(buffer)
        assert first == second
        assert SkinToneAnalyzer().analyze(warm_image) == SkinToneAnalyzer().analyze(warm_image)

    def test_deterministic_after_cache_clear(self, analyzer, portrait_rgb):
        buffer = PixelBuffer.from_array(portrait_rgb)
        first = analyzer.analyze(buffer)
        analyzer.cache.clear()
        assert analyzer.analyze(buffer) == first

    def test_portrait_face_detected(self, analyzer, portrait_rgb):
        outcome = analyzer.analyze_detailed(PixelBuffer.from_array(portrait_rgb))
        assert outcome.face_detected
        assert outcome.region.fits_within(120, 120)
        assert len(outcome.signature) == 75


class TestConsistency:

    def test_similar_image_served_from_cache(self, analyzer, warm_image):
        first = analyzer.analyze_detailed(warm_image)
        shifted = PixelBuffer.filled(100, 100, (181, 141, 111))
        second = analyzer.analyze_detailed(shifted)

        assert second.from_cache
        assert second.estimate is None
        assert second.result == first.result
        assert get_metrics().get_counters()["cache_hits_total"] == 1

    def test_repeat_image_served_from_cache(self, analyzer, warm_image):
        analyzer.analyze(warm_image)
        assert analyzer.analyze_detailed(warm_image).from_cache

    def test_cache_stays_bounded(self, analyzer):
        for rgb in PRIMARIES:
            outcome = analyzer.analyze_detailed(PixelBuffer.filled(40, 40, rgb))
            assert not outcome.from_cache

        stats = analyzer.cache.stats()
        assert stats["size"] == 5
        assert stats["records"] == 8
        assert stats["evictions"] == 3

    def test_private_cache_injection(self, warm_image):
        cache = ConsistencyCache(capacity=2)
        analyzer = SkinToneAnalyzer(cache=cache)
        assert analyzer.cache is cache
        analyzer.analyze(warm_image)
        assert len(cache) == 1

    def test_empty_cache_shared_between_analyzers(self, warm_image):
        """An injected cache is used even while it is still empty."""
        shared = ConsistencyCache()
        first = SkinToneAnalyzer(cache=shared)
        second = SkinToneAnalyzer(cache=shared)

        first.analyze(warm_image)
        assert second.analyze_detailed(warm_image).from_cache
        assert shared.stats()["hits"] == 1


class TestFailureContainment:

    def test_internal_error_yields_default(self, analyzer, warm_image, monkeypatch):
        def explode(*args, **kwargs):
            raise RuntimeError("locator exploded")

        monkeypatch.setattr(analyzer_module, "locate_face", explode)
        outcome = analyzer.analyze_detailed(warm_image)

        assert outcome.degraded
        assert outcome.result.undertone == Undertone.NEUTRAL
        assert outcome.result.seasonal_palette == SeasonalPalette.SUMMER
        assert get_metrics().get_counters()["fallback_total_error"] == 1

    def test_analyze_never_raises(self, analyzer, warm_image, monkeypatch):
        monkeypatch.setattr(analyzer_module, "classify_undertone", lambda *a, **k: 1 / 0)
        assert analyzer.analyze(warm_image).seasonal_palette == SeasonalPalette.SUMMER


class TestDetectFace:

    def test_face_found(self, analyzer, warm_image):
        detection = analyzer.detect_face(warm_image)
        assert detection.face_detected
        assert detection.region == FaceRegion(0, 0, 100, 100)
        assert detection.signature == (180, 140, 110) * 25

    def test_no_face(self, analyzer, black_image):
        detection = analyzer.detect_face(black_image)
        assert not detection.face_detected
        assert detection.region is None
        assert detection.signature is None
        assert detection.scan.reason == REASON_INSUFFICIENT_SKIN

    def test_detect_does_not_touch_cache(self, analyzer, warm_image):
        analyzer.detect_face(warm_image)
        assert len(analyzer.cache) == 0


class TestValidateFace:

    def test_portrait_valid(self, analyzer, portrait_rgb):
        validation = analyzer.validate_face(PixelBuffer.from_array(portrait_rgb))
        assert validation.is_valid

    def test_blank_invalid(self, analyzer):
        img = np.zeros((100, 100, 3), dtype=np.uint8)
        assert not analyzer.validate_face(PixelBuffer.from_array(img)).is_valid


class TestMetrics:

    def test_counters_recorded(self, analyzer, warm_image):
        analyzer.analyze(warm_image)
        counters = get_metrics().get_counters()
        assert counters["analyses_total"] == 1
        assert counters["face_detected_total"] == 1
        assert counters["undertone_total_warm"] == 1
        assert "analysis_duration_ms" in get_metrics().get_timing_stats()


def test_get_analyzer_singleton():
    assert get_analyzer() is get_analyzer()
