"""Tests for impact estimation strategies."""
import pytest

from life_systems.core.config import ScoringConfig, IMPACT_ESTIMATOR_HEALTH_SENSITIVE
from life_systems.core.registry import REGISTRY_ORDER
from life_systems.core.types import SystemType
from life_systems.leverage_agents.impact_estimators import (
    LeverageEstimate, PresetImpactEstimator, HealthSensitiveImpactEstimator, build_impact_estimator,
)
from life_systems.leverage_agents.leverage_identifier import LeverageIdentifier
from life_systems.leverage_agents.leverage_ranker import LeverageRanker

PRESET = LeverageEstimate(impact_score=0.8, effort_required=0.4, cascade_potential=0.85, evidence_strength=0.8)


class TestEstimators:
    """Test suite for estimator strategies."""

    def test_preset_passthrough(self):
        assert PresetImpactEstimator().estimate(PRESET, [SystemType.VITALITY], {}, 0.9) is PRESET

    def test_health_sensitive_full_gap(self):
        estimate = HealthSensitiveImpactEstimator().estimate(PRESET, [SystemType.VITALITY], {SystemType.VITALITY: 0.0}, 0.0)
        assert estimate.impact_score == pytest.approx(0.8)
        assert estimate.effort_required == 0.4

    def test_health_sensitive_no_gap(self):
        estimate = HealthSensitiveImpactEstimator().estimate(PRESET, [SystemType.VITALITY], {SystemType.VITALITY: 10.0}, 0.0)
        assert estimate.impact_score == pytest.approx(0.4)

    def test_pattern_nudges_evidence(self):
        estimate = HealthSensitiveImpactEstimator().estimate(PRESET, [SystemType.VITALITY], {}, 0.5)
        assert estimate.evidence_strength == pytest.approx(0.85)
        assert estimate.cascade_potential == 0.85

    def test_build_from_config(self):
        assert isinstance(build_impact_estimator(ScoringConfig(impact_estimator="preset")), PresetImpactEstimator)
        assert isinstance(
            build_impact_estimator(ScoringConfig(impact_estimator=IMPACT_ESTIMATOR_HEALTH_SENSITIVE)),
            HealthSensitiveImpactEstimator,
        )

    def test_build_unknown_raises(self):
        config = ScoringConfig()
        config.impact_estimator = "oracle"
        with pytest.raises(ValueError):
            build_impact_estimator(config)


class TestEstimatorInPipeline:
    """Swapping the estimator changes numbers, not the ranking contract."""

    def test_health_sensitive_ranking_contract(self, health_factory, preset_config):
        health = [health_factory(s, 2.0 if s == SystemType.VITALITY else 9.0) for s in REGISTRY_ORDER]
        candidates = LeverageIdentifier(health, estimator=HealthSensitiveImpactEstimator(), config=preset_config).identify()
        ranked = LeverageRanker(config=preset_config).rank(candidates)

        ratios = [c.leverage_ratio for c in ranked.highest_leverage_points]
        assert ratios == sorted(ratios, reverse=True)
        assert all(0.0 <= c.impact_score <= 1.0 for c in candidates)
        placed = sum(len(b) for b in ranked.priority_matrix.quadrants().values())
        assert placed == len(candidates)
