"""Tests for ArchitectureOrchestrator."""
import json

import pytest
from unittest.mock import patch

from life_systems.core.registry import REGISTRY_ORDER, EVOLUTION_STEPS, get_definition
from life_systems.core.types import (
    SystemType, SystemRecord, InterventionRecord, UserSystemsState, Interconnection,
    UnknownSystemTypeError, LEVERAGE_BOTTLENECK, CONNECTION_REINFORCING, DIRECTION_IMPROVEMENT,
)
from life_systems.leverage_agents.leverage_identifier import LeverageIdentifier
from life_systems.leverage_agents.leverage_ranker import LeverageRanker
from life_systems.orchestration.architecture_orchestrator import ArchitectureOrchestrator


@pytest.fixture
def orchestrator(preset_config):
    return ArchitectureOrchestrator(config=preset_config)


class TestSynthesizeScenarios:
    """End-to-end synthesis scenarios."""

    def test_uniform_recorded_scores(self, orchestrator, uniform_state):
        architecture = orchestrator.synthesize(uniform_state)
        monitoring = architecture.monitoring

        assert [h.system_type for h in architecture.systems_health] == list(REGISTRY_ORDER)
        assert monitoring.system_balance_score == pytest.approx(1.0)
        assert monitoring.trending_up == []
        assert monitoring.trending_down == []
        assert monitoring.urgent_attention_needed == []
        assert monitoring.recommended_focus == SystemType.VITALITY

    def test_new_user_all_fallback(self, orchestrator, empty_state):
        architecture = orchestrator.synthesize(empty_state)
        monitoring = architecture.monitoring

        assert len(architecture.systems_health) == 6
        assert all(h.overall_score == 3.0 for h in architecture.systems_health)
        assert monitoring.system_balance_score == pytest.approx(1.0)
        assert monitoring.trending_up == []
        assert monitoring.trending_down == []
        # Fallback score 3 sits below the urgent threshold of 4
        assert monitoring.urgent_attention_needed == list(REGISTRY_ORDER)
        assert monitoring.recommended_focus == SystemType.VITALITY
        assert architecture.highest_leverage_points

    def test_low_vitality(self, orchestrator, low_vitality_state):
        architecture = orchestrator.synthesize(low_vitality_state)

        assert architecture.monitoring.urgent_attention_needed == [SystemType.VITALITY]
        assert architecture.monitoring.recommended_focus == SystemType.VITALITY
        assert any(
            c.leverage_type == LEVERAGE_BOTTLENECK and SystemType.VITALITY in c.affected_systems
            for c in architecture.highest_leverage_points
        )

    def test_effective_interconnections(self, orchestrator, low_vitality_state):
        architecture = orchestrator.synthesize(low_vitality_state)
        edge = next(
            e for e in architecture.interconnections
            if e.from_system == SystemType.VITALITY and e.to_system == SystemType.RESOURCES
        )
        assert edge.strength == pytest.approx(0.44)
        assert len(architecture.interconnections) == 7

    def test_recommendations_and_evolution(self, orchestrator, low_vitality_state):
        architecture = orchestrator.synthesize(low_vitality_state)

        assert architecture.system_design_recommendations == [
            "Focus on vitality system as primary leverage point",
            "Leverage development to improve resources",
            "Leverage vitality to improve resources",
        ]
        assert architecture.next_evolution_steps == list(EVOLUTION_STEPS)

    def test_fallback_recommendations_include_interventions(self, orchestrator, empty_state):
        recommendations = orchestrator.synthesize(empty_state).system_design_recommendations
        definition = get_definition(SystemType.VITALITY)

        assert recommendations[1:3] == list(definition.leverage_opportunities[:2])
        assert len(recommendations) == 5

    def test_leverage_map_matches_highest_points(self, orchestrator, low_vitality_state):
        architecture = orchestrator.synthesize(low_vitality_state)
        placed = [c for bucket in architecture.leverage_map.quadrants().values() for c in bucket]
        assert len(placed) == len(architecture.highest_leverage_points)

    def test_json_round_trip(self, orchestrator, low_vitality_state):
        architecture = orchestrator.synthesize(low_vitality_state)
        payload = json.loads(json.dumps(architecture.to_dict()))

        assert payload["user_id"] == "low-vitality-user"
        assert payload["monitoring"]["recommended_focus"] == "vitality"
        assert len(payload["systems_health"]) == 6

    def test_report_includes_table(self, orchestrator, low_vitality_state):
        report = orchestrator.to_report(orchestrator.synthesize(low_vitality_state))
        assert len(report["leverage_table"]) == len(report["highest_leverage_points"])
        json.dumps(report)

    def test_each_synthesis_is_fresh(self, orchestrator, uniform_state):
        first = orchestrator.synthesize(uniform_state)
        second = orchestrator.synthesize(uniform_state)
        assert first.systems_health is not second.systems_health
        assert first.highest_leverage_points[0].leverage_point_id != second.highest_leverage_points[0].leverage_point_id


class TestSynthesizeErrors:
    """Test suite for validation and stage failures."""

    def test_unknown_edge_system_is_fatal(self, preset_config, uniform_state):
        bad_edge = Interconnection(
            from_system="finances", to_system=SystemType.VITALITY,
            connection_type=CONNECTION_REINFORCING, declared_strength=0.5, description="bad",
        )
        orchestrator = ArchitectureOrchestrator(config=preset_config, edges=[bad_edge])
        with pytest.raises(UnknownSystemTypeError):
            orchestrator.synthesize(uniform_state)

    def test_string_edge_systems_resolved(self, preset_config, uniform_state, custom_edge):
        custom_edge.from_system = "meaning"
        orchestrator = ArchitectureOrchestrator(config=preset_config, edges=[custom_edge])
        architecture = orchestrator.synthesize(uniform_state)

        assert architecture.interconnections[0].from_system is SystemType.MEANING
        assert architecture.interconnections[0].strength == pytest.approx(0.25)

    def test_unknown_candidate_system_is_fatal(self, orchestrator, uniform_state, candidate_factory):
        rogue = candidate_factory("Rogue", systems=["wealth"])
        with patch.object(LeverageIdentifier, "identify", return_value=[rogue]):
            with pytest.raises(UnknownSystemTypeError):
                orchestrator.synthesize(uniform_state)

    def test_stage_failure_wrapped(self, orchestrator, uniform_state):
        with patch.object(LeverageRanker, "rank", side_effect=KeyError("boom")):
            with pytest.raises(RuntimeError, match="Leverage ranking failed") as exc_info:
                orchestrator.synthesize(uniform_state)
        assert isinstance(exc_info.value.__cause__, KeyError)


class TestSupplementaryAnalyses:
    """Test suite for per-system and planning analyses."""

    def test_cascade_uses_effective_edges(self, orchestrator, low_vitality_state):
        result = orchestrator.cascade(SystemType.VITALITY, DIRECTION_IMPROVEMENT, user_state=low_vitality_state)
        assert result.primary_effects[0].impact == pytest.approx(0.44)

    def test_cascade_without_state_uses_declared(self, orchestrator):
        result = orchestrator.cascade("vitality")
        assert result.primary_effects[0].impact == pytest.approx(0.8)

    def test_analyze_system(self, orchestrator, low_vitality_state):
        analysis = orchestrator.analyze_system(low_vitality_state, "vitality")
        definition = get_definition(SystemType.VITALITY)

        assert analysis.current_health.overall_score == 3.0
        assert analysis.improvement_opportunities == list(definition.leverage_opportunities[:3])
        assert len(analysis.interconnection_impacts) == 5
        assert analysis.interconnection_impacts[0] == (
            "vitality → resources: Higher energy and cognitive function drive wealth creation capacity"
        )
        assert analysis.success_metrics == list(definition.key_metrics)

    def test_identify_leverage_opportunities(self, orchestrator, low_vitality_state):
        opportunities = orchestrator.identify_leverage_opportunities(low_vitality_state)

        vitality = opportunities.single_system_leverage[0]
        assert vitality["system"] == SystemType.VITALITY
        assert vitality["opportunity"] == "Optimize core components"
        assert vitality["impact_score"] == pytest.approx(0.7)
        assert len(opportunities.cross_system_leverage) == 4
        assert all(entry["impact_score"] > 0.8 for entry in opportunities.cross_system_leverage)
        assert len(opportunities.compound_leverage) == 6
        json.dumps(opportunities.to_dict())

    @pytest.mark.parametrize("text, effort", [
        ("Complete overhaul of meals", 0.8),
        ("Enhance focus blocks", 0.5),
        ("Tweak caffeine timing", 0.2),
        ("Journal nightly", 0.4),
    ])
    def test_intervention_effort(self, orchestrator, text, effort):
        assert orchestrator.intervention_effort(text) == effort

    def test_optimization_plan_focus(self, orchestrator):
        state = UserSystemsState(
            user_id="planner",
            records={
                SystemType.VITALITY: SystemRecord(
                    satisfaction_level=4.0,
                    interventions=[
                        InterventionRecord(name="Redesign evening routine"),
                        InterventionRecord(name="Improve sleep hygiene"),
                        InterventionRecord(name="Start a fixed bedtime"),
                    ],
                ),
            },
        )
        plan = orchestrator.generate_optimization_plan(state, focus="vitality")

        assert [p.intervention for p in plan.priority_interventions] == [
            "Start a fixed bedtime", "Improve sleep hygiene", "Redesign evening routine",
        ]
        assert [p.effort_required for p in plan.priority_interventions] == [0.2, 0.5, 0.8]
        # Five vitality edges at (4 + 3) / 20 of declared: 3.7 * 0.35
        assert plan.priority_interventions[0].impact_score == pytest.approx(1.295)
        assert all(p.system == SystemType.VITALITY for p in plan.priority_interventions)
        assert len(plan.priority_interventions[0].implementation_steps) == 5

    def test_optimization_plan_whole_user(self, orchestrator, empty_state):
        plan = orchestrator.generate_optimization_plan(empty_state)

        ratios = [p.leverage_ratio for p in plan.priority_interventions]
        assert len(ratios) == 5
        assert ratios == sorted(ratios, reverse=True)
        assert len(plan.implementation_sequence) == 5
        assert set(plan.success_metrics) == set(SystemType)
        assert [s.systems for s in plan.synergy_opportunities] == [
            [SystemType.VITALITY, SystemType.RESOURCES],
            [SystemType.VITALITY, SystemType.CONNECTION],
        ]
        assert plan.synergy_opportunities[0].combined_impact == pytest.approx(0.8)
        json.dumps(plan.to_dict())

    def test_profile_leverage_point(self, orchestrator, low_vitality_state):
        architecture = orchestrator.synthesize(low_vitality_state)
        candidate = architecture.highest_leverage_points[0]
        profile = orchestrator.profile_leverage_point(candidate, architecture.systems_health)

        assert profile.leverage_analysis is candidate
        assert [i.system for i in profile.system_impacts] == candidate.affected_systems


class TestSystemDesign:
    """Test suite for single-system design plans."""

    def test_design_from_definition(self, orchestrator):
        design = orchestrator.design_system_architecture(
            "vitality", challenges=["Afternoon crashes"], outcomes=["Steady energy"],
        )
        definition = get_definition(SystemType.VITALITY)

        assert design.system_type is SystemType.VITALITY
        assert design.current_challenges == ["Afternoon crashes"]
        assert design.desired_outcomes == ["Steady energy"]
        assert design.leverage_points == list(definition.leverage_opportunities)
        assert design.measurement_system == list(definition.key_metrics)
        assert design.potential_obstacles == [
            "Energy crashes and fatigue", "Inconsistent exercise habits", "Poor sleep patterns",
        ]
        assert design.mitigation_strategies == [
            "Environment design to reduce friction",
            "Accountability systems and support",
            "Gradual implementation and iteration",
        ]

    def test_three_phase_plan(self, orchestrator):
        plan = orchestrator.design_system_architecture(SystemType.MEANING).implementation_plan

        assert [p.phase for p in plan] == [1, 2, 3]
        assert [p.focus for p in plan] == ["Foundation Building", "Implementation", "Optimization"]
        assert [p.timeline for p in plan] == ["2-4 weeks", "4-8 weeks", "4-12 weeks"]
        assert plan[2].success_criteria == ["Desired outcomes achieved", "System mastery"]

    def test_unknown_system_raises(self, orchestrator):
        with pytest.raises(UnknownSystemTypeError):
            orchestrator.design_system_architecture("finances")

    def test_json_compatible(self, orchestrator):
        payload = json.loads(json.dumps(orchestrator.design_system_architecture("context").to_dict()))
        assert payload["system_type"] == "context"
        assert payload["current_challenges"] == []
        assert len(payload["implementation_plan"]) == 3

    def test_profile_carries_strategy(self, orchestrator, low_vitality_state):
        architecture = orchestrator.synthesize(low_vitality_state)
        candidate = architecture.highest_leverage_points[0]
        profile = orchestrator.profile_leverage_point(candidate, architecture.systems_health)
        assert profile.implementation_strategies[0].leverage_point_id == candidate.leverage_point_id
