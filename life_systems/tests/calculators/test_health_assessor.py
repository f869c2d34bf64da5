"""Tests for HealthAssessor."""
import pytest

from life_systems.calculators.health_assessor import HealthAssessor
from life_systems.core.registry import REGISTRY_ORDER, get_definition
from life_systems.core.types import (
    SystemType, SystemRecord, TREND_IMPROVING, TREND_STABLE, TREND_DECLINING,
)


class TestFallbackAssessment:
    """Test suite for systems with no stored record."""

    def test_neutral_fallback(self, preset_config):
        health = HealthAssessor(config=preset_config).assess(None, SystemType.VITALITY)
        definition = get_definition(SystemType.VITALITY)

        assert health.overall_score == 3.0
        assert set(health.component_scores) == set(definition.core_components)
        assert all(score == 3.0 for score in health.component_scores.values())
        assert health.trend_direction == TREND_STABLE
        assert health.key_strengths == []
        assert health.primary_challenges == list(definition.common_challenges[:3])
        assert health.recommended_interventions == list(definition.leverage_opportunities[:2])
        assert health.last_assessment

    def test_fallback_ignores_prior_score(self, preset_config):
        health = HealthAssessor(config=preset_config).assess(None, "meaning", prior_score=9.0)
        assert health.system_type == SystemType.MEANING
        assert health.trend_direction == TREND_STABLE


class TestRecordedAssessment:
    """Test suite for systems with a stored record."""

    def test_component_scores_fall_back_to_overall(self, preset_config, sample_record):
        health = HealthAssessor(config=preset_config).assess(sample_record, SystemType.VITALITY)

        assert health.overall_score == 6.5
        assert health.component_scores["Energy Management"] == 7.0
        assert health.component_scores["Sleep Optimization"] == 4.0
        assert health.component_scores["Physical Fitness"] == 6.5
        assert health.last_assessment == "2026-01-15T08:00:00+00:00"

    def test_heuristic_lists(self, preset_config, sample_record):
        health = HealthAssessor(config=preset_config).assess(sample_record, SystemType.VITALITY)
        definition = get_definition(SystemType.VITALITY)

        assert health.key_strengths == list(definition.core_components[:2])
        assert health.primary_challenges == list(definition.common_challenges[:2])

    def test_only_planned_interventions_capped_at_three(self, preset_config, sample_record):
        health = HealthAssessor(config=preset_config).assess(sample_record, SystemType.VITALITY)
        assert health.recommended_interventions == [
            "Start a fixed bedtime", "Add a 20 minute walk", "Tweak caffeine timing",
        ]

    @pytest.mark.parametrize("raw, expected", [(14.0, 10.0), (-2.0, 0.0), (7.25, 7.25)])
    def test_overall_clamped(self, preset_config, raw, expected):
        health = HealthAssessor(config=preset_config).assess(SystemRecord(satisfaction_level=raw), SystemType.CONTEXT)
        assert health.overall_score == expected

    @pytest.mark.parametrize("prior, expected", [
        (None, TREND_STABLE),
        (5.0, TREND_IMPROVING),
        (6.3, TREND_STABLE),
        (8.0, TREND_DECLINING),
    ])
    def test_trend_from_prior_score(self, preset_config, sample_record, prior, expected):
        health = HealthAssessor(config=preset_config).assess(sample_record, SystemType.VITALITY, prior_score=prior)
        assert health.trend_direction == expected


class TestAssessAll:
    """Test suite for whole-registry assessment."""

    def test_empty_records_give_six_fallbacks(self, preset_config):
        results = HealthAssessor(config=preset_config).assess_all({}, {})

        assert [h.system_type for h in results] == list(REGISTRY_ORDER)
        assert all(h.overall_score == 3.0 for h in results)

    def test_string_keys_accepted(self, preset_config):
        results = HealthAssessor(config=preset_config).assess_all(
            {"resources": SystemRecord(satisfaction_level=9.0)},
            {"resources": 7.0},
        )
        resources = results[1]
        assert resources.system_type == SystemType.RESOURCES
        assert resources.overall_score == 9.0
        assert resources.trend_direction == TREND_IMPROVING
