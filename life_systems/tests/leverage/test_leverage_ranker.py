"""Tests for LeverageRanker."""
import pytest

from life_systems.core.types import (
    SystemType, LEVERAGE_GATEWAY, LEVERAGE_CATALYST,
    QUADRANT_HIGH_IMPACT_LOW_EFFORT, QUADRANT_HIGH_IMPACT_HIGH_EFFORT,
    QUADRANT_LOW_IMPACT_LOW_EFFORT, QUADRANT_LOW_IMPACT_HIGH_EFFORT,
)
from life_systems.leverage_agents.leverage_identifier import LeverageIdentifier
from life_systems.leverage_agents.leverage_ranker import LeverageRanker, rank, to_frame


@pytest.fixture
def low_vitality_candidates(low_vitality_health, preset_config):
    return LeverageIdentifier(low_vitality_health, config=preset_config).identify()


class TestOrdering:
    """Test suite for ratio ordering."""

    def test_sorted_by_ratio(self, low_vitality_candidates, preset_config):
        ranked = LeverageRanker(config=preset_config).rank(low_vitality_candidates)

        assert [c.intervention_name for c in ranked.highest_leverage_points] == [
            "Environment Design Optimization",   # 3.5
            "Consistent Exercise System",        # 2.0
            "Energy Management System",          # 1.8
            "Systems Thinking Mindset Shift",    # ~1.58
        ]

    def test_ties_keep_input_order(self, candidate_factory, preset_config):
        first = candidate_factory("First", impact=0.6, effort=0.3)
        second = candidate_factory("Second", impact=0.6, effort=0.3)
        ranked = LeverageRanker(config=preset_config).rank([first, second])
        assert [c.intervention_name for c in ranked.highest_leverage_points] == ["First", "Second"]

    def test_top_n_cap(self, candidate_factory, preset_config):
        candidates = [candidate_factory(f"C{i}", impact=0.1 + i * 0.05, effort=0.5) for i in range(12)]
        ranked = LeverageRanker(config=preset_config).rank(candidates)

        assert len(ranked.highest_leverage_points) == 10
        assert ranked.highest_leverage_points[0].intervention_name == "C11"

    def test_type_buckets(self, low_vitality_candidates, preset_config):
        ranked = rank(low_vitality_candidates, config=preset_config)

        assert [c.leverage_type for c in ranked.gateway_habits] == [LEVERAGE_GATEWAY]
        assert [c.leverage_type for c in ranked.catalyst_interventions] == [LEVERAGE_CATALYST]
        assert len(ranked.keystone_opportunities) == 1
        assert len(ranked.bottleneck_removals) == 1
        assert ranked.multiplier_effects == []

    def test_empty_input(self, preset_config):
        ranked = LeverageRanker(config=preset_config).rank([])
        assert ranked.highest_leverage_points == []
        assert ranked.compound_chains == []


class TestPriorityMatrix:
    """Test suite for quadrant bucketing."""

    @pytest.mark.parametrize("impact, effort, quadrant", [
        (0.9, 0.2, QUADRANT_HIGH_IMPACT_LOW_EFFORT),
        (0.9, 0.4, QUADRANT_HIGH_IMPACT_HIGH_EFFORT),
        (0.7, 0.39, QUADRANT_LOW_IMPACT_LOW_EFFORT),
        (0.7, 0.4, QUADRANT_LOW_IMPACT_HIGH_EFFORT),
    ])
    def test_boundaries(self, candidate_factory, preset_config, impact, effort, quadrant):
        ranker = LeverageRanker(config=preset_config)
        assert ranker.quadrant_for(candidate_factory(impact=impact, effort=effort)) == quadrant

    def test_every_candidate_in_exactly_one_quadrant(self, low_vitality_candidates, preset_config):
        matrix = LeverageRanker(config=preset_config).rank(low_vitality_candidates).priority_matrix
        placed = [c.leverage_point_id for bucket in matrix.quadrants().values() for c in bucket]

        assert sorted(placed) == sorted(c.leverage_point_id for c in low_vitality_candidates)
        assert [c.intervention_name for c in matrix.low_impact_low_effort] == ["Environment Design Optimization"]
        assert len(matrix.high_impact_high_effort) == 3


class TestCompoundChains:
    """Test suite for compound chains."""

    def test_one_chain_per_affected_system(self, low_vitality_candidates, preset_config):
        chains = LeverageRanker(config=preset_config).rank(low_vitality_candidates).compound_chains
        assert [c.anchor_system for c in chains] == list(SystemType)

    def test_chain_members_and_impact(self, low_vitality_candidates, preset_config):
        chains = LeverageRanker(config=preset_config).rank(low_vitality_candidates).compound_chains
        vitality = chains[0]
        by_id = {c.leverage_point_id: c.intervention_name for c in low_vitality_candidates}

        assert vitality.chain_id == "chain-vitality"
        assert [by_id[i] for i in vitality.leverage_points] == [
            "Environment Design Optimization", "Consistent Exercise System", "Energy Management System",
        ]
        # 1 - (0.3 * 0.2 * 0.1)
        assert vitality.total_impact == pytest.approx(0.994)
        assert vitality.implementation_sequence == [
            "Establish Environment Design Optimization",
            "Establish Consistent Exercise System",
            "Establish Energy Management System",
            "Consolidate gains across the vitality system before adding more change",
        ]

    def test_single_member_chain(self, low_vitality_candidates, preset_config):
        meaning = LeverageRanker(config=preset_config).rank(low_vitality_candidates).compound_chains[4]
        assert meaning.anchor_system == SystemType.MEANING
        assert len(meaning.leverage_points) == 1
        assert meaning.total_impact == pytest.approx(0.95)

    def test_combined_impact_empty(self):
        assert LeverageRanker.combined_impact([]) == 0.0


class TestFrame:
    """Test suite for the tabular view."""

    def test_to_frame(self, low_vitality_candidates, preset_config):
        frame = to_frame(low_vitality_candidates, config=preset_config)

        assert len(frame) == 4
        assert frame.iloc[0]["intervention_name"] == "Environment Design Optimization"
        assert frame.iloc[0]["quadrant"] == QUADRANT_LOW_IMPACT_LOW_EFFORT
        assert frame.iloc[0]["leverage_ratio"] == pytest.approx(3.5)
        assert frame.iloc[0]["affected_systems"] == "context, vitality, development"
