import logging
from typing import Optional, List, Dict

from life_systems.calculators.calculator_base import CalculatorBase
from life_systems.core.config import AppConfig, ScoringConfig
from life_systems.core.registry import REGISTRY_ORDER, get_definition
from life_systems.core.types import (
    SystemType, SystemRecord, SystemHealth,
    TREND_IMPROVING, TREND_STABLE, TREND_DECLINING, INTERVENTION_PLANNED,
    coerce_system_type, utc_now_iso,
)

logger = logging.getLogger(__name__)


class HealthAssessor(CalculatorBase):
    """
    Converts a system's stored record (or its absence) into a `SystemHealth`.

    Missing records are the normal case for new users and produce a neutral
    fallback rather than an error. Component scores fall back to the overall
    score when a metric is not recorded: an unmeasured component is assumed to
    sit at the system's average.

    Strengths and challenges are the first N registry entries. This is a
    fixed-size heuristic, not a ranked selection.
    """

    # Neutral fallback for systems with no record
    DEFAULT_SCORE: float = 3.0
    DEFAULT_CHALLENGE_COUNT: int = 3
    DEFAULT_INTERVENTION_COUNT: int = 2

    # Heuristic list sizes for assessed systems
    STRENGTH_COUNT: int = 2
    CHALLENGE_COUNT: int = 2
    MAX_PLANNED_INTERVENTIONS: int = 3

    def __init__(self, config: Optional[ScoringConfig] = None):
        self.config = config or AppConfig.scoring

    def assess(
        self,
        raw_state: Optional[SystemRecord],
        system_type: SystemType,
        prior_score: Optional[float] = None,
    ) -> SystemHealth:
        """
        Build a health record for one system.

        Args:
            raw_state: Persisted record, or None when the user has none
            system_type: The system being assessed
            prior_score: Previous overall score from the history collaborator

        Returns:
            SystemHealth with scores clamped to the 0-10 scale
        """
        system_type = coerce_system_type(system_type)
        definition = get_definition(system_type)

        if raw_state is None:
            logger.debug("No record; using neutral fallback", extra={"system": system_type.value})
            return SystemHealth(
                system_type=system_type,
                overall_score=self.DEFAULT_SCORE,
                component_scores={c: self.DEFAULT_SCORE for c in definition.core_components},
                trend_direction=TREND_STABLE,
                last_assessment=utc_now_iso(),
                key_strengths=[],
                primary_challenges=list(definition.common_challenges[:self.DEFAULT_CHALLENGE_COUNT]),
                recommended_interventions=list(definition.leverage_opportunities[:self.DEFAULT_INTERVENTION_COUNT]),
            )

        overall = self.clamp_score(raw_state.satisfaction_level)
        component_scores: Dict[str, float] = {}
        for component in definition.core_components:
            metric = self._clean_value(raw_state.key_metrics.get(component))
            component_scores[component] = overall if metric is None else self.clamp_score(metric)

        planned = [
            i.name for i in raw_state.interventions
            if i.implementation_status == INTERVENTION_PLANNED
        ]

        return SystemHealth(
            system_type=system_type,
            overall_score=overall,
            component_scores=component_scores,
            trend_direction=self.determine_trend(overall, prior_score),
            last_assessment=raw_state.last_updated,
            key_strengths=list(definition.core_components[:self.STRENGTH_COUNT]),
            primary_challenges=list(definition.common_challenges[:self.CHALLENGE_COUNT]),
            recommended_interventions=planned[:self.MAX_PLANNED_INTERVENTIONS],
        )

    def determine_trend(self, current: float, prior: Optional[float]) -> str:
        """Compare against the prior score; no history means stable."""
        prior = self._clean_value(prior)
        if prior is None:
            return TREND_STABLE
        delta = current - self.clamp_score(prior)
        if delta > self.config.trend_tolerance:
            return TREND_IMPROVING
        if delta < -self.config.trend_tolerance:
            return TREND_DECLINING
        return TREND_STABLE

    def assess_all(
        self,
        records: Optional[Dict[SystemType, SystemRecord]] = None,
        prior_scores: Optional[Dict[SystemType, float]] = None,
    ) -> List[SystemHealth]:
        """Assess every registry system in registry order."""
        records = {coerce_system_type(k): v for k, v in (records or {}).items()}
        prior_scores = {coerce_system_type(k): v for k, v in (prior_scores or {}).items()}
        results = [
            self.assess(records.get(system_type), system_type, prior_scores.get(system_type))
            for system_type in REGISTRY_ORDER
        ]
        logger.info(
            "Assessed systems",
            extra={"recorded": len(records), "fallback": len(REGISTRY_ORDER) - len(records)},
        )
        return results
