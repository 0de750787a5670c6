"""
Unit tests for configuration and analysis policy validation.
"""
import pytest
from loguru import logger

from skintone.config import AnalysisPolicy, Config


class TestAnalysisPolicy:

    def test_defaults(self):
        policy = AnalysisPolicy()
        assert policy.grid_size == 5
        assert policy.min_samples == 30
        assert policy.cache_capacity == 5
        assert policy.similarity_threshold == 80.0

    @pytest.mark.parametrize("kwargs", [
        {"min_aspect": 3.0, "max_aspect": 2.0},
        {"median_weight": 1.5},
        {"grid_size": 0},
        {"scan_stride": 0},
        {"candidate_upper_fraction": 0.0},
        {"cache_capacity": 0},
        {"warm_rb_margin": 10.0, "cool_rb_margin": 20.0},
    ])
    def test_invalid_policies(self, kwargs):
        with pytest.raises(ValueError):
            AnalysisPolicy(**kwargs)


class TestConfig:

    def test_policy_applies_cache_settings(self):
        policy = Config.policy()
        assert policy.cache_capacity == Config.CACHE_CAPACITY
        assert policy.similarity_threshold == Config.SIMILARITY_THRESHOLD

    def test_invalid_cache_capacity_keeps_default(self, monkeypatch):
        monkeypatch.setattr(Config, "CACHE_CAPACITY", 0)
        messages = []
        sink_id = logger.add(lambda message: messages.append(message.record["message"]), level="WARNING")
        try:
            policy = Config.policy()
        finally:
            logger.remove(sink_id)

        assert policy.cache_capacity == AnalysisPolicy().cache_capacity
        assert any("SKINTONE_CACHE_CAPACITY=0" in message for message in messages)

    def test_out_of_range_threshold_keeps_default(self, monkeypatch):
        monkeypatch.setattr(Config, "SIMILARITY_THRESHOLD", 150.0)
        assert Config.policy().similarity_threshold == 80.0

    def test_valid_overrides_applied(self, monkeypatch):
        monkeypatch.setattr(Config, "CACHE_CAPACITY", 12)
        monkeypatch.setattr(Config, "SIMILARITY_THRESHOLD", 90.0)
        policy = Config.policy()
        assert (policy.cache_capacity, policy.similarity_threshold) == (12, 90.0)

    def test_allowed_origins_parsing(self, monkeypatch):
        monkeypatch.setattr(Config, "ALLOWED_ORIGINS", " https://a.example , ,https://b.example")
        assert Config.allowed_origins() == ["https://a.example", "https://b.example"]

    def test_validators(self):
        assert Config.validate_similarity_threshold(80.0)
        assert not Config.validate_similarity_threshold(120.0)
        assert Config.validate_cache_capacity(5)
        assert not Config.validate_cache_capacity(0)
        assert not Config.validate_max_edge(10)
