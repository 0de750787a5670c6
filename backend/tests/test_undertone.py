"""
Unit tests for undertone classification.
"""
import numpy as np
import pytest

from skintone.config import AnalysisPolicy
from skintone.services.pixels import FaceRegion, PixelBuffer
from skintone.services.signature import extract_signature
from skintone.services.undertone import (
    Undertone, classify_color, classify_undertone, collect_skin_samples, robust_color
)


def repeated(rgb, count):
    return np.tile(np.array(rgb, dtype=np.int32), (count, 1))


class TestClassifyColor:

    def test_warm(self):
        assert classify_color((180, 140, 110)) == Undertone.WARM

    def test_cool_small_red_blue_margin(self):
        assert classify_color((200, 170, 190)) == Undertone.COOL

    def test_cool_blue_reaches_green(self):
        assert classify_color((150, 120, 125)) == Undertone.COOL

    def test_neutral_band(self):
        """Red-blue margin of exactly 40 is not warm but well above the cool band."""
        assert classify_color((200, 170, 160)) == Undertone.NEUTRAL

    def test_red_green_margin_required_for_warm(self):
        """Large red-blue margin alone is not warm when red barely exceeds green."""
        assert classify_color((180, 170, 110)) == Undertone.NEUTRAL

    def test_bands_monotonic_in_red_blue_margin(self):
        """Raising the red-blue margin never moves from warm back towards cool."""
        order = {Undertone.COOL: 0, Undertone.NEUTRAL: 1, Undertone.WARM: 2}
        previous = -1
        for blue in range(170, 60, -5):
            rank = order[classify_color((200, 150, blue))]
            assert rank >= previous
            previous = rank
        assert previous == 2

    def test_custom_margins(self):
        policy = AnalysisPolicy(warm_rb_margin=20.0, warm_rg_margin=5.0, cool_rb_margin=10.0)
        assert classify_color((200, 170, 160), policy) == Undertone.WARM


class TestRobustColor:

    def test_median_by_brightness(self):
        samples = np.array([(100, 80, 60), (200, 150, 120), (150, 110, 90)], dtype=np.int32)
        assert robust_color(samples, median_weight=1.0) == (150.0, 110.0, 90.0)

    def test_mean_only(self):
        samples = np.array([(100, 80, 60), (200, 160, 120)], dtype=np.int32)
        assert robust_color(samples, median_weight=0.0) == (150.0, 120.0, 90.0)

    def test_glare_outlier_resisted(self):
        samples = np.vstack([repeated((180, 140, 110), 99), repeated((245, 245, 245), 1)])
        r, g, b = robust_color(samples)
        assert abs(r - 180) < 1
        assert abs(b - 110) < 1


class TestClassifyUndertone:

    def test_insufficient_samples_is_neutral(self):
        estimate = classify_undertone(repeated((180, 140, 110), 29))
        assert estimate.undertone == Undertone.NEUTRAL
        assert estimate.sample_count == 29
        assert not estimate.sufficient

    def test_empty_samples(self):
        estimate = classify_undertone(np.empty((0, 3), dtype=np.int32))
        assert estimate.undertone == Undertone.NEUTRAL
        assert estimate.color is None

    def test_sufficient_warm(self):
        estimate = classify_undertone(repeated((180, 140, 110), 30))
        assert estimate.undertone == Undertone.WARM
        assert estimate.sufficient
        assert estimate.color == pytest.approx((180.0, 140.0, 110.0))


class TestCollectSkinSamples:

    def test_pixels_and_signature_cells(self):
        buffer = PixelBuffer.filled(10, 10, (180, 140, 110))
        signature = extract_signature(buffer)
        samples = collect_skin_samples(buffer, signature=signature)
        assert samples.shape == (100 + 25, 3)

    def test_region_only(self):
        img = np.zeros((20, 20, 3), dtype=np.uint8)
        img[:, :10] = (180, 140, 110)
        buffer = PixelBuffer.from_array(img)

        assert len(collect_skin_samples(buffer)) == 200
        assert len(collect_skin_samples(buffer, FaceRegion(0, 0, 5, 5))) == 25
        assert len(collect_skin_samples(buffer, FaceRegion(10, 0, 10, 20))) == 0

    def test_signature_only(self):
        signature = (180, 140, 110, 0, 0, 0)
        samples = collect_skin_samples(signature=signature)
        assert samples.tolist() == [[180, 140, 110]]

    def test_black_image_has_no_samples(self, black_image):
        assert len(collect_skin_samples(black_image)) == 0

    def test_nothing_to_sample(self):
        assert collect_skin_samples().shape == (0, 3)
