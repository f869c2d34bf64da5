"""
Impact/effort estimation strategies for leverage candidates.

Rules in the identifier only decide *whether* a candidate applies; how big its
impact and effort are comes from an estimator. Swapping the estimator never
changes the ranking or bucketing contract, only the numbers fed into it.
"""
import logging
from dataclasses import dataclass, replace
from typing import Dict, List

import numpy as np

from life_systems.core.config import (
    ScoringConfig, IMPACT_ESTIMATOR_PRESET, IMPACT_ESTIMATOR_HEALTH_SENSITIVE,
)
from life_systems.core.types import SystemType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LeverageEstimate:
    impact_score: float
    effort_required: float
    cascade_potential: float
    evidence_strength: float


class ImpactEstimator:
    """Interface: turn a rule's preset into the estimate used for ranking."""

    name: str = "base"

    def estimate(
        self,
        preset: LeverageEstimate,
        affected_systems: List[SystemType],
        scores: Dict[SystemType, float],
        pattern_relevance: float,
    ) -> LeverageEstimate:
        raise NotImplementedError


class PresetImpactEstimator(ImpactEstimator):
    """Returns each rule's fixed constants unchanged (compatibility default)."""

    name = IMPACT_ESTIMATOR_PRESET

    def estimate(self, preset, affected_systems, scores, pattern_relevance):
        return preset


class HealthSensitiveImpactEstimator(ImpactEstimator):
    """
    Scales impact by how much room the affected systems have to improve.

    impact' = preset.impact × (FLOOR + (1 − FLOOR) × mean_gap), where
    mean_gap = mean((10 − score) / 10) over the affected systems. Evidence is
    nudged upward by matching pattern signal. Effort and cascade potential
    keep their presets.
    """

    name = IMPACT_ESTIMATOR_HEALTH_SENSITIVE

    # Minimum share of the preset impact retained when every system is at 10
    IMPACT_FLOOR: float = 0.5
    # Maximum evidence boost from a fully relevant pattern
    PATTERN_EVIDENCE_BOOST: float = 0.1

    def estimate(self, preset, affected_systems, scores, pattern_relevance):
        gaps = [(10.0 - scores.get(s, 5.0)) / 10.0 for s in affected_systems]
        mean_gap = float(np.clip(np.mean(gaps), 0.0, 1.0)) if gaps else 0.5
        impact = preset.impact_score * (self.IMPACT_FLOOR + (1.0 - self.IMPACT_FLOOR) * mean_gap)
        evidence = min(1.0, preset.evidence_strength + self.PATTERN_EVIDENCE_BOOST * pattern_relevance)
        return replace(preset, impact_score=round(impact, 4), evidence_strength=round(evidence, 4))


def build_impact_estimator(config: ScoringConfig) -> ImpactEstimator:
    if config.impact_estimator == IMPACT_ESTIMATOR_HEALTH_SENSITIVE:
        return HealthSensitiveImpactEstimator()
    if config.impact_estimator != IMPACT_ESTIMATOR_PRESET:
        raise ValueError(f"Unknown impact estimator: {config.impact_estimator!r}")
    return PresetImpactEstimator()
