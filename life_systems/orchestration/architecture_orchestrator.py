import logging
from dataclasses import replace
from typing import Optional, List, Dict, Any

from life_systems.calculators.cascade_simulator import CascadeSimulator
from life_systems.calculators.health_assessor import HealthAssessor
from life_systems.calculators.health_monitor import HealthMonitor
from life_systems.calculators.interconnection_model import InterconnectionModel
from life_systems.core.config import AppConfig, ScoringConfig
from life_systems.core.registry import (
    REGISTRY_ORDER, EVOLUTION_STEPS, declared_edges, get_definition,
)
from life_systems.core.types import (
    SystemType, SystemHealth, Interconnection, LeverageAnalysis, UserSystemsState,
    SystemArchitecture, HealthMonitorSummary, CascadeResult, RankedLeverageMap,
    SystemAnalysis, LeverageOpportunities, PriorityIntervention, SynergyOpportunity,
    OptimizationPlan, LeveragePointProfile, ImplementationPhase, SystemDesign, UnknownSystemTypeError,
    CONNECTION_REINFORCING, DIRECTION_IMPROVEMENT, coerce_system_type,
)
from life_systems.leverage_agents.impact_estimators import ImpactEstimator
from life_systems.leverage_agents.leverage_identifier import LeverageIdentifier
from life_systems.leverage_agents.leverage_profiler import LeverageProfiler
from life_systems.leverage_agents.leverage_ranker import LeverageRanker

logger = logging.getLogger(__name__)


class ArchitectureOrchestrator:
    """
    Assembles one user's `SystemArchitecture` from the scoring components.

    Pipeline stages:
    1. Health: assess all six systems (fallback for missing records)
    2. Interconnections: validate edge references, derive effective strengths
    3. Leverage: identify candidates and validate their system references
    4. Ranking: ratio ordering, type buckets, quadrants, compound chains
    5. Monitoring: overall, balance, trend and urgency lists, focus
    6. Recommendations: focus and cross-system advice, evolution steps

    Each synthesis is rebuilt from scratch and shares no mutable state, so one
    orchestrator can serve concurrent callers. Unknown system references are
    fatal and propagate as `UnknownSystemTypeError`; any other stage failure is
    wrapped in RuntimeError.
    """

    FOCUS_RECOMMENDATION: str = "Focus on {system} system as primary leverage point"
    CROSS_SYSTEM_RECOMMENDATION: str = "Leverage {source} to improve {target}"
    FOCUS_INTERVENTION_COUNT: int = 2
    CROSS_SYSTEM_RECOMMENDATION_COUNT: int = 2
    # Edges above this leverage potential count as cross-system opportunities
    CROSS_SYSTEM_POTENTIAL_THRESHOLD: float = 0.8

    IMPROVEMENT_OPPORTUNITY_COUNT: int = 3
    SINGLE_SYSTEM_DEFAULT_OPPORTUNITY: str = "Optimize core components"
    INTERCONNECTION_IMPACT: str = "{source} → {target}: {description}"

    # Keyword effort heuristic, checked in order; first tier with a match wins
    EFFORT_KEYWORDS = (
        (0.8, ("redesign", "overhaul", "transform", "complete")),
        (0.5, ("improve", "optimize", "enhance", "develop")),
        (0.2, ("adjust", "tweak", "add", "start")),
    )
    DEFAULT_EFFORT: float = 0.4

    IMPLEMENTATION_STEPS = (
        "Assess current state and define specific goals",
        "Design the intervention system and approach",
        "Start with small, manageable changes",
        "Monitor progress and adjust approach",
        "Scale successful elements and maintain consistency",
    )
    IMPLEMENTATION_SEQUENCE = (
        "Phase 1: Foundation - Establish highest leverage intervention",
        "Phase 2: Stabilization - Allow first changes to take root",
        "Phase 3: Expansion - Add complementary interventions",
        "Phase 4: Integration - Connect systems for synergy",
        "Phase 5: Optimization - Fine-tune and maintain",
    )
    SYNERGY_DESCRIPTION: str = "{first} and {second} reinforce each other: {description}"

    # (focus, actions, timeline, success criteria) per design phase
    DESIGN_PHASES = (
        ("Foundation Building", ("Assess current state", "Design basic systems"), "2-4 weeks",
         ("Clear baseline established", "Systems designed")),
        ("Implementation", ("Install core systems", "Build momentum"), "4-8 weeks",
         ("Systems operational", "Consistent execution")),
        ("Optimization", ("Refine and improve", "Measure and adjust"), "4-12 weeks",
         ("Desired outcomes achieved", "System mastery")),
    )
    DESIGN_OBSTACLE_COUNT: int = 3
    DESIGN_MITIGATIONS = (
        "Environment design to reduce friction",
        "Accountability systems and support",
        "Gradual implementation and iteration",
    )


    def __init__(
        self,
        config: Optional[ScoringConfig] = None,
        edges: Optional[List[Interconnection]] = None,
        estimator: Optional[ImpactEstimator] = None,
    ):
        self.config = config or AppConfig.scoring
        self.edges = edges
        self.estimator = estimator
        self.assessor = HealthAssessor(config=self.config)
        self.simulator = CascadeSimulator(config=self.config)
        self.ranker = LeverageRanker(config=self.config)

    # ═══════════════════════════════════════════════════════════════════════════
    # VALIDATION
    # ═══════════════════════════════════════════════════════════════════════════

    @staticmethod
    def validate_edges(edges: List[Interconnection]) -> List[Interconnection]:
        """Resolve both endpoints of every edge; unknown names raise UnknownSystemTypeError."""
        validated = []
        for edge in edges:
            validated.append(replace(
                edge,
                from_system=coerce_system_type(edge.from_system),
                to_system=coerce_system_type(edge.to_system),
                examples=list(edge.examples),
            ))
        return validated

    @staticmethod
    def validate_candidates(candidates: List[LeverageAnalysis]) -> List[LeverageAnalysis]:
        validated = []
        for candidate in candidates:
            systems = [coerce_system_type(s) for s in candidate.affected_systems]
            validated.append(replace(candidate, affected_systems=systems))
        return validated

    # ═══════════════════════════════════════════════════════════════════════════
    # SHARED DERIVATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    def assess(self, user_state: UserSystemsState) -> List[SystemHealth]:
        return self.assessor.assess_all(user_state.records, user_state.prior_scores)

    def effective_edges(self, systems_health: List[SystemHealth]) -> List[Interconnection]:
        source_edges = declared_edges() if self.edges is None else self.edges
        return InterconnectionModel(systems_health).effective_edges(self.validate_edges(source_edges))

    def identify(self, systems_health: List[SystemHealth], user_state: UserSystemsState) -> List[LeverageAnalysis]:
        identifier = LeverageIdentifier(systems_health, estimator=self.estimator, config=self.config)
        return self.validate_candidates(identifier.identify(user_state.patterns))

    def monitor_system_health(self, systems_health: List[SystemHealth]) -> HealthMonitorSummary:
        return HealthMonitor(systems_health, config=self.config).summarize()

    def build_recommendations(
        self,
        systems_health: List[SystemHealth],
        edges: List[Interconnection],
        focus: Optional[SystemType],
    ) -> List[str]:
        """Focus line, the focus system's first interventions, then top cross-system edges."""
        if focus is None:
            return []
        focus_health = next(h for h in systems_health if h.system_type == focus)
        recommendations = [self.FOCUS_RECOMMENDATION.format(system=focus.value)]
        recommendations.extend(focus_health.recommended_interventions[:self.FOCUS_INTERVENTION_COUNT])

        high_potential = sorted(
            (e for e in edges if e.leverage_potential > self.CROSS_SYSTEM_POTENTIAL_THRESHOLD),
            key=lambda e: e.leverage_potential,
            reverse=True,
        )
        for edge in high_potential[:self.CROSS_SYSTEM_RECOMMENDATION_COUNT]:
            recommendations.append(self.CROSS_SYSTEM_RECOMMENDATION.format(
                source=edge.from_system.value, target=edge.to_system.value,
            ))
        return recommendations

    @staticmethod
    def evolution_steps() -> List[str]:
        return list(EVOLUTION_STEPS)

    # ═══════════════════════════════════════════════════════════════════════════
    # SYNTHESIS
    # ═══════════════════════════════════════════════════════════════════════════

    def synthesize(self, user_state: UserSystemsState) -> SystemArchitecture:
        """
        Build the full architecture report for one user.

        Args:
            user_state: Sparse records, pattern summaries and prior scores

        Returns:
            SystemArchitecture with exactly one health entry per system

        Raises:
            UnknownSystemTypeError: If an edge or candidate names an unknown system
            RuntimeError: If any other pipeline stage fails
        """
        logger.info("Synthesizing system architecture", extra={"user_id": user_state.user_id})

        logger.info("[1/6] Assessing system health...")
        try:
            systems_health = self.assess(user_state)
            logger.info("Health complete", extra={"systems": len(systems_health)})
        except UnknownSystemTypeError:
            raise
        except Exception as e:
            logger.exception("Health assessment failed")
            raise RuntimeError(f"Health assessment failed: {e}") from e

        logger.info("[2/6] Deriving interconnections...")
        try:
            edges = self.effective_edges(systems_health)
            logger.info("Interconnections complete", extra={"edges": len(edges)})
        except UnknownSystemTypeError:
            logger.error("Interconnection references an unknown system")
            raise
        except Exception as e:
            logger.exception("Interconnection model failed")
            raise RuntimeError(f"Interconnection model failed: {e}") from e

        logger.info("[3/6] Identifying leverage points...")
        try:
            candidates = self.identify(systems_health, user_state)
            logger.info("Leverage identification complete", extra={"candidates": len(candidates)})
        except UnknownSystemTypeError:
            logger.error("Leverage candidate references an unknown system")
            raise
        except Exception as e:
            logger.exception("Leverage identification failed")
            raise RuntimeError(f"Leverage identification failed: {e}") from e

        logger.info("[4/6] Ranking leverage points...")
        try:
            ranked: RankedLeverageMap = self.ranker.rank(candidates)
            logger.info("Ranking complete", extra={"chains": len(ranked.compound_chains)})
        except Exception as e:
            logger.exception("Leverage ranking failed")
            raise RuntimeError(f"Leverage ranking failed: {e}") from e

        logger.info("[5/6] Monitoring system health...")
        try:
            monitoring = self.monitor_system_health(systems_health)
            logger.info("Monitoring complete", extra={"balance": round(monitoring.system_balance_score, 3)})
        except Exception as e:
            logger.exception("Health monitoring failed")
            raise RuntimeError(f"Health monitoring failed: {e}") from e

        logger.info("[6/6] Building recommendations...")
        try:
            recommendations = self.build_recommendations(systems_health, edges, monitoring.recommended_focus)
        except Exception as e:
            logger.exception("Recommendations failed")
            raise RuntimeError(f"Recommendations failed: {e}") from e

        architecture = SystemArchitecture(
            user_id=user_state.user_id,
            systems_health=systems_health,
            interconnections=edges,
            leverage_map=ranked.priority_matrix,
            highest_leverage_points=ranked.highest_leverage_points,
            compound_chains=ranked.compound_chains,
            system_design_recommendations=recommendations,
            next_evolution_steps=self.evolution_steps(),
            monitoring=monitoring,
        )
        logger.info("Architecture synthesized", extra={"user_id": user_state.user_id})
        return architecture

    # ═══════════════════════════════════════════════════════════════════════════
    # SUPPLEMENTARY ANALYSES
    # ═══════════════════════════════════════════════════════════════════════════

    def cascade(
        self,
        source: SystemType,
        direction: str = DIRECTION_IMPROVEMENT,
        user_state: Optional[UserSystemsState] = None,
    ) -> CascadeResult:
        """Cascade over effective edges for `user_state`, or the declared edges without one."""
        if user_state is None:
            source_edges = declared_edges() if self.edges is None else self.edges
            edges = self.validate_edges(source_edges)
        else:
            edges = self.effective_edges(self.assess(user_state))
        return self.simulator.cascade(source, direction, edges)

    def analyze_system(self, user_state: UserSystemsState, system_type: SystemType) -> SystemAnalysis:
        system_type = coerce_system_type(system_type)
        definition = get_definition(system_type)
        systems_health = self.assess(user_state)
        current = next(h for h in systems_health if h.system_type == system_type)

        source_edges = declared_edges() if self.edges is None else self.edges
        impacts = [
            self.INTERCONNECTION_IMPACT.format(
                source=edge.from_system.value, target=edge.to_system.value, description=edge.description,
            )
            for edge in self.validate_edges(source_edges) if edge.touches(system_type)
        ]
        return SystemAnalysis(
            definition=definition,
            current_health=current,
            improvement_opportunities=list(definition.leverage_opportunities[:self.IMPROVEMENT_OPPORTUNITY_COUNT]),
            interconnection_impacts=impacts,
            recommended_interventions=list(definition.leverage_opportunities[:self.IMPROVEMENT_OPPORTUNITY_COUNT]),
            success_metrics=list(definition.key_metrics),
        )

    def design_system_architecture(
        self,
        system_type: SystemType,
        challenges: Optional[List[str]] = None,
        outcomes: Optional[List[str]] = None,
    ) -> SystemDesign:
        """
        Three-phase design plan for one system.

        Args:
            system_type: System to design, as a SystemType or its string value
            challenges: The user's stated challenges, carried into the design
            outcomes: The outcomes the design should reach

        Returns:
            SystemDesign; obstacles come from the system's common challenges
        """
        system_type = coerce_system_type(system_type)
        definition = get_definition(system_type)
        plan = [
            ImplementationPhase(
                phase=number,
                focus=focus,
                actions=list(actions),
                timeline=timeline,
                success_criteria=list(criteria),
            )
            for number, (focus, actions, timeline, criteria) in enumerate(self.DESIGN_PHASES, start=1)
        ]
        design = SystemDesign(
            system_type=system_type,
            current_challenges=list(challenges or []),
            desired_outcomes=list(outcomes or []),
            implementation_plan=plan,
            leverage_points=list(definition.leverage_opportunities),
            measurement_system=list(definition.key_metrics),
            potential_obstacles=list(definition.common_challenges[:self.DESIGN_OBSTACLE_COUNT]),
            mitigation_strategies=list(self.DESIGN_MITIGATIONS),
        )
        logger.info(
            "System design generated",
            extra={"system": system_type.value, "challenges": len(design.current_challenges)},
        )
        return design


    def identify_leverage_opportunities(self, user_state: UserSystemsState) -> LeverageOpportunities:
        systems_health = self.assess(user_state)
        edges = self.effective_edges(systems_health)
        candidates = self.identify(systems_health, user_state)
        ranked = self.ranker.rank(candidates)

        single = [
            {
                "system": h.system_type,
                "opportunity": (
                    h.recommended_interventions[0] if h.recommended_interventions
                    else self.SINGLE_SYSTEM_DEFAULT_OPPORTUNITY
                ),
                "impact_score": (10.0 - h.overall_score) / 10.0,
            }
            for h in systems_health
        ]
        cross = [
            {
                "systems": [e.from_system, e.to_system],
                "opportunity": self.CROSS_SYSTEM_RECOMMENDATION.format(
                    source=e.from_system.value, target=e.to_system.value,
                ),
                "impact_score": e.leverage_potential,
            }
            for e in edges if e.leverage_potential > self.CROSS_SYSTEM_POTENTIAL_THRESHOLD
        ]

        by_id = {c.leverage_point_id: c for c in candidates}
        compound = []
        for chain in ranked.compound_chains:
            touched = set()
            for point_id in chain.leverage_points:
                touched.update(by_id[point_id].affected_systems)
            compound.append({
                "opportunity": chain.description,
                "affected_systems": [s for s in REGISTRY_ORDER if s in touched],
                "compound_score": chain.total_impact,
            })
        return LeverageOpportunities(
            single_system_leverage=single,
            cross_system_leverage=cross,
            compound_leverage=compound,
        )

    def intervention_effort(self, intervention: str) -> float:
        text = intervention.lower()
        for effort, keywords in self.EFFORT_KEYWORDS:
            if any(keyword in text for keyword in keywords):
                return effort
        return self.DEFAULT_EFFORT

    def synergy_opportunities(self, edges: List[Interconnection]) -> List[SynergyOpportunity]:
        """Pairs of systems joined by reinforcing edges in both directions."""
        reinforcing = {
            (e.from_system, e.to_system): e for e in edges
            if e.connection_type == CONNECTION_REINFORCING
        }
        seen = set()
        synergies = []
        for (source, target), edge in reinforcing.items():
            reverse = reinforcing.get((target, source))
            pair = frozenset((source, target))
            if reverse is None or source == target or pair in seen:
                continue
            seen.add(pair)
            synergies.append(SynergyOpportunity(
                systems=[source, target],
                synergy_description=self.SYNERGY_DESCRIPTION.format(
                    first=source.value, second=target.value, description=edge.description,
                ),
                combined_impact=(edge.leverage_potential + reverse.leverage_potential) / 2.0,
            ))
        return synergies

    def generate_optimization_plan(
        self,
        user_state: UserSystemsState,
        focus: Optional[SystemType] = None,
    ) -> OptimizationPlan:
        """
        Score each system's recommended interventions by cascade reach per unit effort.

        Args:
            user_state: Sparse records, pattern summaries and prior scores
            focus: Restrict scoring to one system

        Returns:
            OptimizationPlan with the top interventions by leverage ratio
        """
        focus = coerce_system_type(focus) if focus is not None else None
        systems_health = self.assess(user_state)
        edges = self.effective_edges(systems_health)

        scored: List[PriorityIntervention] = []
        for health in systems_health:
            if focus is not None and health.system_type != focus:
                continue
            if not health.recommended_interventions:
                continue
            result = self.simulator.cascade(health.system_type, DIRECTION_IMPROVEMENT, edges)
            reach = self.simulator.total_impact(result)
            for intervention in health.recommended_interventions:
                scored.append(PriorityIntervention(
                    system=health.system_type,
                    intervention=intervention,
                    impact_score=reach,
                    effort_required=self.intervention_effort(intervention),
                    implementation_steps=list(self.IMPLEMENTATION_STEPS),
                ))

        scored.sort(key=lambda p: p.leverage_ratio, reverse=True)
        plan = OptimizationPlan(
            priority_interventions=scored[:self.config.max_priority_interventions],
            synergy_opportunities=self.synergy_opportunities(edges),
            implementation_sequence=list(self.IMPLEMENTATION_SEQUENCE),
            success_metrics={s: list(get_definition(s).success_indicators) for s in REGISTRY_ORDER},
        )
        logger.info(
            "Optimization plan generated",
            extra={"scored": len(scored), "focus": focus.value if focus else None},
        )
        return plan

    @staticmethod
    def profile_leverage_point(
        candidate: LeverageAnalysis,
        systems_health: List[SystemHealth],
    ) -> LeveragePointProfile:
        return LeverageProfiler(systems_health).profile(candidate)

    def to_report(self, architecture: SystemArchitecture) -> Dict[str, Any]:
        """JSON-ready report with the tabular leverage view attached."""
        report = architecture.to_dict()
        frame = self.ranker.to_frame(architecture.highest_leverage_points)
        report["leverage_table"] = frame.to_dict(orient="records")
        return report
