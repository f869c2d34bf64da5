"""Shared test fixtures for life systems tests."""
import pytest

from life_systems.core.config import ScoringConfig, IMPACT_ESTIMATOR_PRESET
from life_systems.core.registry import REGISTRY_ORDER
from life_systems.core.types import (
    SystemType, SystemHealth, SystemRecord, InterventionRecord, PatternSummary,
    UserSystemsState, LeverageAnalysis, Interconnection,
    INTERVENTION_PLANNED, INTERVENTION_ACTIVE, CONNECTION_REINFORCING,
    LEVERAGE_KEYSTONE, TREND_STABLE,
)


def make_health(system_type, score, trend=TREND_STABLE, strengths=None, interventions=None):
    return SystemHealth(
        system_type=system_type,
        overall_score=score,
        component_scores={},
        trend_direction=trend,
        key_strengths=list(strengths or []),
        primary_challenges=[],
        recommended_interventions=list(interventions or []),
    )


def make_candidate(name="Candidate", impact=0.8, effort=0.4, systems=None, leverage_type=LEVERAGE_KEYSTONE, point_id=None):
    return LeverageAnalysis(
        leverage_point_id=point_id or f"lp-{name.lower().replace(' ', '-')}",
        intervention_name=name,
        leverage_type=leverage_type,
        impact_score=impact,
        effort_required=effort,
        affected_systems=list(systems or [SystemType.VITALITY]),
    )


@pytest.fixture
def preset_config():
    """Scoring config pinned to contract defaults regardless of environment."""
    return ScoringConfig(top_n=10, trend_tolerance=0.5, impact_estimator=IMPACT_ESTIMATOR_PRESET)


@pytest.fixture
def uniform_health():
    """Six systems, all at score 5."""
    return [make_health(s, 5.0) for s in REGISTRY_ORDER]


@pytest.fixture
def low_vitality_health():
    """Vitality at 3, everything else at 8."""
    return [make_health(s, 3.0 if s == SystemType.VITALITY else 8.0) for s in REGISTRY_ORDER]


@pytest.fixture
def sample_record():
    return SystemRecord(
        satisfaction_level=6.5,
        key_metrics={"Energy Management": 7.0, "Sleep Optimization": 4.0},
        last_updated="2026-01-15T08:00:00+00:00",
        interventions=[
            InterventionRecord(name="Start a fixed bedtime", implementation_status=INTERVENTION_PLANNED),
            InterventionRecord(name="Add a 20 minute walk", implementation_status=INTERVENTION_PLANNED),
            InterventionRecord(name="Meal prep on Sundays", implementation_status=INTERVENTION_ACTIVE),
            InterventionRecord(name="Tweak caffeine timing", implementation_status=INTERVENTION_PLANNED),
            InterventionRecord(name="Optimize recovery days", implementation_status=INTERVENTION_PLANNED),
        ],
    )


@pytest.fixture
def empty_state():
    """New user: no records, patterns or history."""
    return UserSystemsState(user_id="new-user")


@pytest.fixture
def uniform_state():
    """Every system recorded at score 5."""
    return UserSystemsState(
        user_id="uniform-user",
        records={s: SystemRecord(satisfaction_level=5.0) for s in REGISTRY_ORDER},
    )


@pytest.fixture
def low_vitality_state():
    """Vitality recorded at 3, every other system at 8."""
    records = {
        s: SystemRecord(satisfaction_level=3.0 if s == SystemType.VITALITY else 8.0)
        for s in REGISTRY_ORDER
    }
    return UserSystemsState(
        user_id="low-vitality-user",
        records=records,
        patterns=[
            PatternSummary(
                description="Late nights erode next-day focus",
                impact_areas=[SystemType.VITALITY, SystemType.DEVELOPMENT],
                transformation_potential=0.7,
            ),
        ],
    )


@pytest.fixture
def sample_state_document():
    """User state in the persistence collaborator's JSON shape."""
    return {
        "user_id": "doc-user",
        "records": {
            "vitality": {
                "current_state": {"satisfaction_level": 4, "key_metrics": {"Physical Fitness": 3}},
                "last_updated": "2026-02-01T10:00:00+00:00",
                "interventions": [{"name": "Start stretching", "implementation_status": "planned"}],
            },
            "resources": {"satisfaction_level": 7.5},
        },
        "patterns": [
            {"description": "Overwork", "impact_areas": ["vitality", "resources"], "transformation_potential": 0.6},
        ],
        "prior_scores": {"vitality": 5.0},
    }


@pytest.fixture
def custom_edge():
    return Interconnection(
        from_system=SystemType.MEANING,
        to_system=SystemType.CONNECTION,
        connection_type=CONNECTION_REINFORCING,
        declared_strength=0.5,
        description="Shared values deepen relationships",
        leverage_potential=0.6,
    )


@pytest.fixture
def health_factory():
    return make_health


@pytest.fixture
def candidate_factory():
    return make_candidate
