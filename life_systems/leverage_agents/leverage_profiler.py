import logging
from typing import Optional, List, Dict, Any, Tuple

from life_systems.calculators.calculator_base import CalculatorBase
from life_systems.core.types import (
    SystemHealth, LeverageAnalysis, SystemImpact, RiskAssessment, LeveragePointProfile,
    InterventionStrategy, StrategyStep,
)

logger = logging.getLogger(__name__)


class LeverageProfiler(CalculatorBase):
    """Deep dive on one leverage candidate against the user's current health."""

    # Health points gained per unit of impact score, before capping at 10
    IMPACT_TO_POINTS: float = 3.0
    IMPACT_MECHANISM: str = "Direct positive influence through intervention"

    PRIMARY_RISKS: Tuple[str, ...] = (
        "Implementation inconsistency",
        "Overwhelm from too much change",
        "Lack of environmental support",
    )
    MITIGATION_STRATEGIES: Tuple[str, ...] = (
        "Start with minimum viable implementation",
        "Design environment for success",
        "Build accountability systems",
    )
    FALLBACK_OPTIONS: Tuple[str, ...] = (
        "Reduce scope and complexity",
        "Focus on one system at a time",
        "Seek external support and guidance",
    )
    SUCCESS_INDICATORS: Tuple[str, ...] = (
        "Consistent implementation without forced effort",
        "Visible improvements in affected life systems",
        "Positive spillover effects to unrelated areas",
        "Increased confidence and sense of control",
        "Compound effects beginning to manifest",
    )
    # (timeframe, expected effects, measurement methods)
    COMPOUND_TIMELINE: Tuple[Tuple[str, Tuple[str, ...], Tuple[str, ...]], ...] = (
        ("1-2 weeks",
         ("Initial habit formation", "Early momentum building"),
         ("Daily consistency tracking", "Energy level monitoring")),
        ("1-2 months",
         ("System stabilization", "First spillover effects"),
         ("System health improvements", "Qualitative observations")),
        ("3-6 months",
         ("Compound effects visible", "Identity shifts apparent"),
         ("Cross-system impact analysis", "Identity assessment")),
    )

    # Strategy template applied to every leverage point
    STRATEGY_APPROACH: str = "environment_design"
    STRATEGY_SUCCESS_PROBABILITY: float = 0.8
    STRATEGY_EXPECTED_TIMELINE: str = "4-8 weeks"
    STRATEGY_RESOURCES: Tuple[str, ...] = ("Time commitment", "Focus and attention")
    STRATEGY_MEASUREMENT: Tuple[str, ...] = ("Weekly progress tracking", "System health scores")
    # (action, timeline, success criteria, obstacles, mitigations)
    STRATEGY_STEPS: Tuple[Tuple[str, str, Tuple[str, ...], Tuple[str, ...], Tuple[str, ...]], ...] = (
        ("Assess current state and design target system", "1 week",
         ("Clear baseline and target defined",),
         ("Lack of clarity on desired outcome",),
         ("Use structured assessment tools",)),
    )

    def __init__(self, systems_health: Optional[List[SystemHealth]] = None):

        self.systems_health = list(systems_health or [])

    def system_impacts(self, candidate: LeverageAnalysis) -> List[SystemImpact]:
        impacts = []
        for system in candidate.affected_systems:
            current = self._score_for(system)
            headroom = max(0.0, self.SCORE_MAX - current)
            impacts.append(SystemImpact(
                system=system,
                current_state=current,
                projected_improvement=round(min(headroom, candidate.impact_score * self.IMPACT_TO_POINTS), 4),
                impact_mechanism=self.IMPACT_MECHANISM,
                timeline=candidate.time_to_impact,
            ))
        return impacts

    def implementation_strategies(self, candidate: LeverageAnalysis) -> List[InterventionStrategy]:
        steps = [
            StrategyStep(
                step=number,
                action=action,
                timeline=timeline,
                success_criteria=list(criteria),
                potential_obstacles=list(obstacles),
                mitigation_strategies=list(mitigations),
            )
            for number, (action, timeline, criteria, obstacles, mitigations) in enumerate(self.STRATEGY_STEPS, start=1)
        ]
        return [InterventionStrategy(
            leverage_point_id=candidate.leverage_point_id,
            strategy_name=f"{candidate.intervention_name} Implementation",
            approach=self.STRATEGY_APPROACH,
            implementation_steps=steps,
            success_probability=self.STRATEGY_SUCCESS_PROBABILITY,
            expected_timeline=self.STRATEGY_EXPECTED_TIMELINE,
            resource_requirements=list(self.STRATEGY_RESOURCES),
            measurement_methods=list(self.STRATEGY_MEASUREMENT),
        )]

    def risk_assessment(self) -> RiskAssessment:

        return RiskAssessment(
            primary_risks=list(self.PRIMARY_RISKS),
            mitigation_strategies=list(self.MITIGATION_STRATEGIES),
            fallback_options=list(self.FALLBACK_OPTIONS),
        )

    def compound_effects_timeline(self) -> List[Dict[str, Any]]:
        return [
            {
                "timeframe": timeframe,
                "expected_effects": list(effects),
                "measurement_methods": list(methods),
            }
            for timeframe, effects, methods in self.COMPOUND_TIMELINE
        ]

    def profile(self, candidate: LeverageAnalysis) -> LeveragePointProfile:
        profile = LeveragePointProfile(
            leverage_analysis=candidate,
            system_impacts=self.system_impacts(candidate),
            implementation_strategies=self.implementation_strategies(candidate),
            risk_assessment=self.risk_assessment(),
            success_indicators=list(self.SUCCESS_INDICATORS),
            compound_effects_timeline=self.compound_effects_timeline(),
        )
        logger.debug(
            "Profiled leverage point",
            extra={"leverage_point": candidate.leverage_point_id, "systems": len(profile.system_impacts)},
        )
        return profile


def profile_leverage_point(
    candidate: LeverageAnalysis,
    systems_health: Optional[List[SystemHealth]] = None,
) -> LeveragePointProfile:
    return LeverageProfiler(systems_health).profile(candidate)
