"""
SkinTone Configuration
Manages environment variables and the analysis policy shared by all services.
"""
import os
from dataclasses import dataclass, field, replace
from typing import Optional

from loguru import logger


@dataclass(frozen=True)
class SkinBounds:
    """Per-channel bounds and tolerances for the skin-tone pixel classifier."""
    r_min: int = 60
    g_min: int = 40
    b_min: int = 20
    upper: int = 250           # channels at or above this are overexposed
    rb_tolerance: int = 0      # r > b - rb_tolerance
    rg_max_gap: int = 80       # |r - g| < rg_max_gap
    gr_tolerance: int = 0      # r > g - gr_tolerance


@dataclass(frozen=True)
class AnalysisPolicy:
    """Centralized thresholds for region location, sampling, caching and hashing."""

    skin: SkinBounds = field(default_factory=SkinBounds)

    # Face region locator
    min_skin_ratio: float = 0.01
    min_aspect: float = 0.5
    max_aspect: float = 2.0
    min_box_density: float = 0.2
    padding_fraction: float = 0.5
    candidate_upper_fraction: float = 1.0
    scan_stride: int = 1

    # Face signature
    grid_size: int = 5
    min_region_dim: int = 5

    # Undertone classifier
    min_samples: int = 30
    median_weight: float = 0.7
    warm_rb_margin: float = 40.0
    warm_rg_margin: float = 15.0
    cool_rb_margin: float = 20.0

    # Consistency cache
    cache_capacity: int = 5
    similarity_threshold: float = 80.0
    similarity_scale: float = 0.4

    # Palette hash
    hash_modulus: int = 1_000_000
    hash_central_slice: bool = True

    def __post_init__(self):
        if not 0.0 < self.min_aspect <= self.max_aspect:
            raise ValueError("min_aspect must be positive and not exceed max_aspect")
        if not 0.0 <= self.median_weight <= 1.0:
            raise ValueError("median_weight must be within [0, 1]")
        if self.grid_size < 1:
            raise ValueError("grid_size must be at least 1")
        if self.scan_stride < 1:
            raise ValueError("scan_stride must be at least 1")
        if not 0.0 < self.candidate_upper_fraction <= 1.0:
            raise ValueError("candidate_upper_fraction must be within (0, 1]")
        if self.cache_capacity < 1:
            raise ValueError("cache_capacity must be at least 1")
        if self.warm_rb_margin < self.cool_rb_margin:
            raise ValueError("warm_rb_margin must not be below cool_rb_margin")


class Config:
    """Configuration class for SkinTone services."""

    # Upload limits
    MAX_FILE_MB: int = int(os.environ.get("SKINTONE_MAX_FILE_MB", "10"))
    MAX_EDGE: int = int(os.environ.get("SKINTONE_MAX_EDGE", "768"))
    MIN_EDGE: int = int(os.environ.get("SKINTONE_MIN_EDGE", "16"))

    # Face validation works on a copy scaled to this long edge
    VALIDATION_EDGE: int = int(os.environ.get("SKINTONE_VALIDATION_EDGE", "300"))

    # Logging
    LOG_LEVEL: str = os.environ.get("SKINTONE_LOG_LEVEL", "INFO")
    LOG_JSON: bool = os.environ.get("SKINTONE_LOG_JSON", "false").lower() in ("1", "true", "yes")

    # Consistency cache
    CACHE_CAPACITY: int = int(os.environ.get("SKINTONE_CACHE_CAPACITY", "5"))
    SIMILARITY_THRESHOLD: float = float(os.environ.get("SKINTONE_SIMILARITY_THRESHOLD", "80"))

    # CORS settings
    ALLOWED_ORIGINS: str = os.environ.get("SKINTONE_ALLOWED_ORIGINS", "")

    # Supported image formats
    SUPPORTED_MIME_TYPES = ["image/jpeg", "image/png"]
    SUPPORTED_EXTENSIONS = {".jpg", ".jpeg", ".png"}

    @classmethod
    def policy(cls, base: Optional[AnalysisPolicy] = None) -> AnalysisPolicy:
        """
        Build the analysis policy with environment overrides applied.

        Out-of-range overrides are logged and the base value is kept.
        """
        base = base or AnalysisPolicy()
        overrides = {}

        if cls.validate_cache_capacity(cls.CACHE_CAPACITY):
            overrides["cache_capacity"] = cls.CACHE_CAPACITY
        else:
            logger.warning(
                f"Ignoring SKINTONE_CACHE_CAPACITY={cls.CACHE_CAPACITY} (expected 1-1000), "
                f"using {base.cache_capacity}"
            )

        if cls.validate_similarity_threshold(cls.SIMILARITY_THRESHOLD):
            overrides["similarity_threshold"] = cls.SIMILARITY_THRESHOLD
        else:
            logger.warning(
                f"Ignoring SKINTONE_SIMILARITY_THRESHOLD={cls.SIMILARITY_THRESHOLD} (expected 0-100), "
                f"using {base.similarity_threshold}"
            )

        return replace(base, **overrides)

    @classmethod
    def allowed_origins(cls) -> list:
        """Parse the comma-separated CORS origin list."""
        return [origin.strip() for origin in cls.ALLOWED_ORIGINS.split(",") if origin.strip()]

    @classmethod
    def validate_similarity_threshold(cls, threshold: float) -> bool:
        """Validate similarity threshold parameter."""
        return 0.0 <= threshold <= 100.0

    @classmethod
    def validate_cache_capacity(cls, capacity: int) -> bool:
        """Validate cache capacity parameter."""
        return 1 <= capacity <= 1000

    @classmethod
    def validate_max_edge(cls, max_edge: int) -> bool:
        """Validate max_edge parameter."""
        return 64 <= max_edge <= 4096


# Global config instance
config = Config()
