import uuid
import logging
from dataclasses import dataclass
from typing import Optional, List, Dict, Tuple

from life_systems.calculators.calculator_base import CalculatorBase
from life_systems.core.config import AppConfig, ScoringConfig
from life_systems.core.registry import REGISTRY_ORDER
from life_systems.core.types import (
    SystemType, SystemHealth, PatternSummary, LeverageAnalysis,
    LEVERAGE_KEYSTONE, LEVERAGE_BOTTLENECK, LEVERAGE_MULTIPLIER,
    LEVERAGE_GATEWAY, LEVERAGE_CATALYST,
    LEVEL_LOW, LEVEL_MEDIUM, LEVEL_HIGH,
    TIME_IMMEDIATE, TIME_WEEKS, TIME_MONTHS,
)
from life_systems.leverage_agents.impact_estimators import (
    LeverageEstimate, ImpactEstimator, build_impact_estimator,
)

logger = logging.getLogger(__name__)

# Trigger kinds for leverage rules
TRIGGER_MEAN_BELOW = "mean_below"
TRIGGER_SYSTEM_BELOW = "system_below"
TRIGGER_ALWAYS = "always"


@dataclass(frozen=True)
class LeverageRule:
    """One independent threshold rule; fires zero or one candidate."""
    key: str
    intervention_name: str
    leverage_type: str
    trigger: str
    preset: LeverageEstimate
    affected_systems: Tuple[SystemType, ...]
    compound_effects: Tuple[str, ...]
    implementation_difficulty: str
    time_to_impact: str
    risk_level: str
    threshold: Optional[float] = None
    trigger_system: Optional[SystemType] = None


class LeverageIdentifier(CalculatorBase):
    """
    Generates candidate interventions from a health snapshot.

    Each rule is evaluated independently. Rules never exclude one another, so
    candidates of several leverage types can coexist. Gateway and catalyst
    rules always fire. The candidate list is never empty, even with no
    pattern data.

    Patterns are best-effort context. A candidate's `pattern_relevance` is the
    strongest transformation potential among patterns that touch any of its
    affected systems. The preset estimator ignores it.
    """

    # ═══════════════════════════════════════════════════════════════════════════
    # RULE THRESHOLDS
    # ═══════════════════════════════════════════════════════════════════════════
    ROUTINE_MEAN_THRESHOLD: float = 6.0     # mean health below this → routine/time rules
    VITALITY_LOW_THRESHOLD: float = 5.0     # vitality below this → exercise/energy rules
    DEVELOPMENT_LOW_THRESHOLD: float = 7.0  # development below this → learning multiplier

    RULES: Tuple[LeverageRule, ...] = (
        LeverageRule(
            key="morning-routine",
            intervention_name="Optimized Morning Routine",
            leverage_type=LEVERAGE_KEYSTONE,
            trigger=TRIGGER_MEAN_BELOW,
            threshold=ROUTINE_MEAN_THRESHOLD,
            preset=LeverageEstimate(impact_score=0.85, effort_required=0.3, cascade_potential=0.9, evidence_strength=0.8),
            affected_systems=(SystemType.VITALITY, SystemType.DEVELOPMENT, SystemType.MEANING),
            compound_effects=(
                "Increased energy throughout day",
                "Better decision making capacity",
                "Enhanced sense of control and purpose",
                "Automatic spillover to other healthy habits",
            ),
            implementation_difficulty=LEVEL_MEDIUM,
            time_to_impact=TIME_WEEKS,
            risk_level=LEVEL_LOW,
        ),
        LeverageRule(
            key="exercise-system",
            intervention_name="Consistent Exercise System",
            leverage_type=LEVERAGE_KEYSTONE,
            trigger=TRIGGER_SYSTEM_BELOW,
            trigger_system=SystemType.VITALITY,
            threshold=VITALITY_LOW_THRESHOLD,
            preset=LeverageEstimate(impact_score=0.8, effort_required=0.4, cascade_potential=0.85, evidence_strength=0.9),
            affected_systems=(SystemType.VITALITY, SystemType.CONNECTION, SystemType.DEVELOPMENT),
            compound_effects=(
                "Improved energy and mood",
                "Better sleep quality",
                "Increased confidence and discipline",
                "Social connections through activities",
            ),
            implementation_difficulty=LEVEL_MEDIUM,
            time_to_impact=TIME_WEEKS,
            risk_level=LEVEL_LOW,
        ),
        LeverageRule(
            key="energy-management",
            intervention_name="Energy Management System",
            leverage_type=LEVERAGE_BOTTLENECK,
            trigger=TRIGGER_SYSTEM_BELOW,
            trigger_system=SystemType.VITALITY,
            threshold=VITALITY_LOW_THRESHOLD,
            preset=LeverageEstimate(impact_score=0.9, effort_required=0.5, cascade_potential=0.95, evidence_strength=0.9),
            affected_systems=(SystemType.VITALITY, SystemType.RESOURCES, SystemType.DEVELOPMENT, SystemType.CONNECTION),
            compound_effects=(
                "Unlocks capacity for all other systems",
                "Improves decision making quality",
                "Enables sustainable high performance",
                "Reduces stress and overwhelm",
            ),
            implementation_difficulty=LEVEL_MEDIUM,
            time_to_impact=TIME_WEEKS,
            risk_level=LEVEL_LOW,
        ),
        LeverageRule(
            key="time-architecture",
            intervention_name="Time Architecture System",
            leverage_type=LEVERAGE_BOTTLENECK,
            trigger=TRIGGER_MEAN_BELOW,
            threshold=ROUTINE_MEAN_THRESHOLD,
            preset=LeverageEstimate(impact_score=0.85, effort_required=0.4, cascade_potential=0.8, evidence_strength=0.8),
            affected_systems=(SystemType.RESOURCES, SystemType.DEVELOPMENT, SystemType.CONNECTION, SystemType.MEANING),
            compound_effects=(
                "More time for high-value activities",
                "Reduced stress and urgency",
                "Better work-life integration",
                "Increased progress on goals",
            ),
            implementation_difficulty=LEVEL_MEDIUM,
            time_to_impact=TIME_WEEKS,
            risk_level=LEVEL_LOW,
        ),
        LeverageRule(
            key="accelerated-learning",
            intervention_name="Accelerated Learning System",
            leverage_type=LEVERAGE_MULTIPLIER,
            trigger=TRIGGER_SYSTEM_BELOW,
            trigger_system=SystemType.DEVELOPMENT,
            threshold=DEVELOPMENT_LOW_THRESHOLD,
            preset=LeverageEstimate(impact_score=0.8, effort_required=0.3, cascade_potential=0.85, evidence_strength=0.8),
            affected_systems=(SystemType.DEVELOPMENT, SystemType.RESOURCES, SystemType.MEANING),
            compound_effects=(
                "Faster skill acquisition",
                "Increased earning potential",
                "Better problem-solving ability",
                "Adaptability to change",
            ),
            implementation_difficulty=LEVEL_LOW,
            time_to_impact=TIME_IMMEDIATE,
            risk_level=LEVEL_LOW,
        ),
        LeverageRule(
            key="environment-design",
            intervention_name="Environment Design Optimization",
            leverage_type=LEVERAGE_GATEWAY,
            trigger=TRIGGER_ALWAYS,
            preset=LeverageEstimate(impact_score=0.7, effort_required=0.2, cascade_potential=0.75, evidence_strength=0.9),
            affected_systems=(SystemType.CONTEXT, SystemType.VITALITY, SystemType.DEVELOPMENT),
            compound_effects=(
                "Automatic behavior improvement",
                "Reduced decision fatigue",
                "Easier habit formation",
                "Consistent positive triggers",
            ),
            implementation_difficulty=LEVEL_LOW,
            time_to_impact=TIME_IMMEDIATE,
            risk_level=LEVEL_LOW,
        ),
        LeverageRule(
            key="systems-mindset",
            intervention_name="Systems Thinking Mindset Shift",
            leverage_type=LEVERAGE_CATALYST,
            trigger=TRIGGER_ALWAYS,
            preset=LeverageEstimate(impact_score=0.95, effort_required=0.6, cascade_potential=0.95, evidence_strength=0.9),
            affected_systems=REGISTRY_ORDER,
            compound_effects=(
                "Fundamental approach transformation",
                "Problem reframing capabilities",
                "Leverage identification skills",
                "Systematic outcome design",
            ),
            implementation_difficulty=LEVEL_HIGH,
            time_to_impact=TIME_MONTHS,
            risk_level=LEVEL_MEDIUM,
        ),
    )

    def __init__(
        self,
        systems_health: List[SystemHealth],
        estimator: Optional[ImpactEstimator] = None,
        config: Optional[ScoringConfig] = None,
    ):
        self.systems_health = list(systems_health)
        self.config = config or AppConfig.scoring
        self.estimator = estimator or build_impact_estimator(self.config)

    def _rule_fires(self, rule: LeverageRule, mean_score: float) -> bool:
        if rule.trigger == TRIGGER_ALWAYS:
            return True
        if rule.trigger == TRIGGER_MEAN_BELOW:
            return mean_score < rule.threshold
        if rule.trigger == TRIGGER_SYSTEM_BELOW:
            series = self.scores
            # A system missing from the snapshot cannot trigger its rule
            if series is None or rule.trigger_system not in series.index:
                return False
            return float(series.loc[rule.trigger_system]) < rule.threshold
        raise ValueError(f"Unknown rule trigger: {rule.trigger!r}")

    @staticmethod
    def pattern_relevance(affected_systems: Tuple[SystemType, ...], patterns: List[PatternSummary]) -> float:
        """Strongest transformation potential among overlapping patterns (0 if none)."""
        affected = set(affected_systems)
        matches = [
            p.transformation_potential for p in patterns
            if affected.intersection(p.impact_areas)
        ]
        return max(matches) if matches else 0.0

    def _build_candidate(self, rule: LeverageRule, patterns: List[PatternSummary]) -> LeverageAnalysis:
        relevance = self.pattern_relevance(rule.affected_systems, patterns)
        scores: Dict[SystemType, float] = {} if self.scores is None else dict(self.scores.items())
        estimate = self.estimator.estimate(rule.preset, list(rule.affected_systems), scores, relevance)
        return LeverageAnalysis(
            leverage_point_id=f"{rule.key}-{uuid.uuid4().hex[:12]}",
            intervention_name=rule.intervention_name,
            leverage_type=rule.leverage_type,
            impact_score=estimate.impact_score,
            effort_required=estimate.effort_required,
            affected_systems=list(rule.affected_systems),
            cascade_potential=estimate.cascade_potential,
            compound_effects=list(rule.compound_effects),
            implementation_difficulty=rule.implementation_difficulty,
            time_to_impact=rule.time_to_impact,
            evidence_strength=estimate.evidence_strength,
            risk_level=rule.risk_level,
            pattern_relevance=relevance,
        )

    def identify(self, patterns: Optional[List[PatternSummary]] = None) -> List[LeverageAnalysis]:
        """
        Evaluate every rule against the snapshot.

        Args:
            patterns: Pattern summaries; None or empty falls back to health thresholds alone

        Returns:
            Candidates in rule order (keystone, bottleneck, multiplier, gateway, catalyst)
        """
        patterns = patterns or []
        mean_score = self._mean(h.overall_score for h in self.systems_health)
        if mean_score is None:
            mean_score = self.NEUTRAL_SCORE

        candidates = [
            self._build_candidate(rule, patterns)
            for rule in self.RULES
            if self._rule_fires(rule, mean_score)
        ]
        logger.info(
            "Identified leverage candidates",
            extra={
                "candidates": len(candidates),
                "mean_score": round(mean_score, 2),
                "patterns": len(patterns),
                "estimator": self.estimator.name,
            },
        )
        return candidates


def identify(
    all_health: List[SystemHealth],
    patterns: Optional[List[PatternSummary]] = None,
    estimator: Optional[ImpactEstimator] = None,
) -> List[LeverageAnalysis]:
    return LeverageIdentifier(all_health, estimator=estimator).identify(patterns)
