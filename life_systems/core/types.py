import math
from enum import Enum
from datetime import datetime, timezone
from dataclasses import dataclass, field
from typing import Optional, List, Dict, Any, Tuple


class SystemType(str, Enum):
    """The six life domains. Declaration order is the registry order."""
    VITALITY = "vitality"
    RESOURCES = "resources"
    CONNECTION = "connection"
    DEVELOPMENT = "development"
    MEANING = "meaning"
    CONTEXT = "context"


class UnknownSystemTypeError(ValueError):
    """Raised when an edge, candidate or record references a system outside the registry."""


def coerce_system_type(value: Any) -> SystemType:
    """Resolve a SystemType or its string value, failing fast on anything else."""
    if isinstance(value, SystemType):
        return value
    try:
        return SystemType(value)
    except ValueError:
        raise UnknownSystemTypeError(f"Unknown system type: {value!r}") from None


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


# Trend tags
TREND_IMPROVING = "improving"
TREND_STABLE = "stable"
TREND_DECLINING = "declining"

# Connection types
CONNECTION_REINFORCING = "reinforcing"
CONNECTION_BALANCING = "balancing"
CONNECTION_NEUTRAL = "neutral"

# Change directions for cascade analysis
DIRECTION_IMPROVEMENT = "improvement"
DIRECTION_DECLINE = "decline"
VALID_DIRECTIONS = (DIRECTION_IMPROVEMENT, DIRECTION_DECLINE)

# Leverage types
LEVERAGE_KEYSTONE = "keystone"
LEVERAGE_BOTTLENECK = "bottleneck"
LEVERAGE_MULTIPLIER = "multiplier"
LEVERAGE_GATEWAY = "gateway"
LEVERAGE_CATALYST = "catalyst"
LEVERAGE_TYPES = (
    LEVERAGE_KEYSTONE, LEVERAGE_BOTTLENECK, LEVERAGE_MULTIPLIER,
    LEVERAGE_GATEWAY, LEVERAGE_CATALYST,
)

# Difficulty / risk labels
LEVEL_LOW = "low"
LEVEL_MEDIUM = "medium"
LEVEL_HIGH = "high"

# Time-to-impact labels
TIME_IMMEDIATE = "immediate"
TIME_WEEKS = "weeks"
TIME_MONTHS = "months"
TIME_LONG_TERM = "long-term"

# Intervention statuses (persistence contract)
INTERVENTION_PLANNED = "planned"
INTERVENTION_ACTIVE = "active"
INTERVENTION_COMPLETED = "completed"
INTERVENTION_PAUSED = "paused"

# Priority matrix quadrant keys
QUADRANT_HIGH_IMPACT_LOW_EFFORT = "high_impact_low_effort"
QUADRANT_HIGH_IMPACT_HIGH_EFFORT = "high_impact_high_effort"
QUADRANT_LOW_IMPACT_LOW_EFFORT = "low_impact_low_effort"
QUADRANT_LOW_IMPACT_HIGH_EFFORT = "low_impact_high_effort"


def _serialize(value: Any) -> Any:
    """Recursively convert engine objects to JSON-compatible values."""
    if isinstance(value, Enum):
        return value.value
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, dict):
        return {_serialize(k): _serialize(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_serialize(v) for v in value]
    if isinstance(value, datetime):
        return value.isoformat()
    return value


def _require(data: Dict[str, Any], key: str) -> Any:
    if not isinstance(data, dict):
        raise ValueError(f"Expected an object with field {key}, got {type(data).__name__}")
    if key not in data:
        raise ValueError(f"Missing required field: {key}")
    return data[key]


def _mapping_field(data: Dict[str, Any], key: str) -> Dict[str, Any]:
    """Optional object field; absent or null reads as empty."""
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"{key} must be an object, got {type(value).__name__}")
    return value


def _list_field(data: Dict[str, Any], key: str) -> List[Any]:
    """Optional array field; absent or null reads as empty."""
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"{key} must be a list, got {type(value).__name__}")
    return value


def _finite_float(value: Any, key: str) -> float:
    if isinstance(value, bool):
        raise ValueError(f"{key} must be numeric, got {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"{key} must be numeric, got {value!r}") from None
    if not math.isfinite(number):
        raise ValueError(f"{key} must be finite, got {value!r}")
    return number



# --- Registry data
@dataclass(frozen=True)
class SystemDefinition:
    """Static description of one life system."""
    name: str
    description: str
    core_components: Tuple[str, ...]
    key_metrics: Tuple[str, ...]
    success_indicators: Tuple[str, ...]
    common_challenges: Tuple[str, ...]
    leverage_opportunities: Tuple[str, ...]
    interconnection_points: Tuple[SystemType, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "core_components": list(self.core_components),
            "key_metrics": list(self.key_metrics),
            "success_indicators": list(self.success_indicators),
            "common_challenges": list(self.common_challenges),
            "leverage_opportunities": list(self.leverage_opportunities),
            "interconnection_points": [s.value for s in self.interconnection_points],
        }


@dataclass(frozen=True)
class LeverageTypeProfile:
    description: str
    characteristics: Tuple[str, ...]
    examples: Tuple[str, ...]


@dataclass
class Interconnection:
    """
    Directed, typed edge between two systems.

    `declared_strength` is the registry value; `strength` is the effective
    value used in computation (scaled by endpoint health per user).
    """
    from_system: SystemType
    to_system: SystemType
    connection_type: str
    declared_strength: float
    description: str
    examples: List[str] = field(default_factory=list)
    leverage_potential: float = 0.0
    strength: Optional[float] = None

    def __post_init__(self):
        if self.strength is None:
            self.strength = self.declared_strength

    def touches(self, system: SystemType) -> bool:
        return self.from_system == system or self.to_system == system

    def other_end(self, system: SystemType) -> SystemType:
        return self.to_system if self.from_system == system else self.from_system

    def to_dict(self) -> Dict[str, Any]:
        return {
            "from_system": _serialize(self.from_system),
            "to_system": _serialize(self.to_system),
            "connection_type": self.connection_type,
            "declared_strength": self.declared_strength,
            "strength": self.strength,
            "description": self.description,
            "examples": list(self.examples),
            "leverage_potential": self.leverage_potential,
        }


@dataclass(frozen=True)
class EdgeTemplate:
    """Immutable declared edge held by the registry; `build` gives a per-use copy."""
    from_system: SystemType
    to_system: SystemType
    connection_type: str
    declared_strength: float
    description: str
    examples: Tuple[str, ...] = ()
    leverage_potential: float = 0.0

    def build(self) -> Interconnection:
        return Interconnection(
            from_system=self.from_system,
            to_system=self.to_system,
            connection_type=self.connection_type,
            declared_strength=self.declared_strength,
            description=self.description,
            examples=list(self.examples),
            leverage_potential=self.leverage_potential,
        )


# --- Collaborator inputs
@dataclass
class InterventionRecord:
    name: str
    implementation_status: str = INTERVENTION_PLANNED

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "InterventionRecord":
        return cls(
            name=_require(data, "name"),
            implementation_status=data.get("implementation_status", INTERVENTION_PLANNED),
        )


@dataclass
class SystemRecord:
    """Persisted state of one system, as supplied by the persistence collaborator."""
    satisfaction_level: float
    key_metrics: Dict[str, float] = field(default_factory=dict)
    last_updated: str = field(default_factory=utc_now_iso)
    interventions: List[InterventionRecord] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SystemRecord":
        if not isinstance(data, dict):
            raise ValueError(f"system record must be an object, got {type(data).__name__}")
        # Accept both the flat contract and the nested `current_state` storage shape
        state = data.get("current_state")
        if state is None:
            state = data
        elif not isinstance(state, dict):
            raise ValueError(f"current_state must be an object, got {type(state).__name__}")
        satisfaction = _finite_float(_require(state, "satisfaction_level"), "satisfaction_level")
        metrics = {}
        for name, value in _mapping_field(state, "key_metrics").items():
            if isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value):
                metrics[name] = float(value)
        return cls(
            satisfaction_level=satisfaction,
            key_metrics=metrics,
            last_updated=data.get("last_updated") or utc_now_iso(),
            interventions=[InterventionRecord.from_dict(i) for i in _list_field(data, "interventions")],
        )


@dataclass
class PatternSummary:
    """Pattern-analysis output consumed as contextual signal."""
    description: str
    impact_areas: List[SystemType] = field(default_factory=list)
    transformation_potential: float = 0.0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PatternSummary":
        return cls(
            description=_require(data, "description"),
            impact_areas=[coerce_system_type(a) for a in _list_field(data, "impact_areas")],
            transformation_potential=_finite_float(
                data.get("transformation_potential", 0.0), "transformation_potential"
            ),
        )


@dataclass
class UserSystemsState:
    """Everything the engine needs for one user; sparse records are normal."""
    user_id: str
    records: Dict[SystemType, SystemRecord] = field(default_factory=dict)
    patterns: List[PatternSummary] = field(default_factory=list)
    prior_scores: Dict[SystemType, float] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UserSystemsState":
        user_id = _require(data, "user_id")
        records = {
            coerce_system_type(k): SystemRecord.from_dict(v)
            for k, v in _mapping_field(data, "records").items()
            if v is not None
        }
        prior = {
            coerce_system_type(k): _finite_float(v, f"prior_scores.{k}")
            for k, v in _mapping_field(data, "prior_scores").items()
        }
        return cls(
            user_id=user_id,
            records=records,
            patterns=[PatternSummary.from_dict(p) for p in _list_field(data, "patterns")],
            prior_scores=prior,
        )


# --- Health
@dataclass
class SystemHealth:
    system_type: SystemType
    overall_score: float
    component_scores: Dict[str, float]
    trend_direction: str = TREND_STABLE
    last_assessment: str = field(default_factory=utc_now_iso)
    key_strengths: List[str] = field(default_factory=list)
    primary_challenges: List[str] = field(default_factory=list)
    recommended_interventions: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "system_type": self.system_type.value,
            "overall_score": self.overall_score,
            "component_scores": dict(self.component_scores),
            "trend_direction": self.trend_direction,
            "last_assessment": self.last_assessment,
            "key_strengths": list(self.key_strengths),
            "primary_challenges": list(self.primary_challenges),
            "recommended_interventions": list(self.recommended_interventions),
        }


@dataclass
class HealthMonitorSummary:
    overall_health_score: float
    system_balance_score: float
    trending_up: List[SystemType] = field(default_factory=list)
    trending_down: List[SystemType] = field(default_factory=list)
    urgent_attention_needed: List[SystemType] = field(default_factory=list)
    recent_improvements: List[Dict[str, Any]] = field(default_factory=list)
    recommended_focus: Optional[SystemType] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "overall_health_score": self.overall_health_score,
            "system_balance_score": self.system_balance_score,
            "trending_up": _serialize(self.trending_up),
            "trending_down": _serialize(self.trending_down),
            "urgent_attention_needed": _serialize(self.urgent_attention_needed),
            "recent_improvements": _serialize(self.recent_improvements),
            "recommended_focus": _serialize(self.recommended_focus),
        }


# --- Cascade
@dataclass
class CascadeEffect:
    system: SystemType
    impact: float
    description: str
    via: Optional[SystemType] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "system": self.system.value,
            "impact": self.impact,
            "description": self.description,
            "via": _serialize(self.via),
        }


@dataclass
class TimelineCheckpoint:
    weeks: int
    effects: List[str]

    def to_dict(self) -> Dict[str, Any]:
        return {"weeks": self.weeks, "effects": list(self.effects)}


@dataclass
class CascadeResult:
    source: SystemType
    direction: str
    primary_effects: List[CascadeEffect] = field(default_factory=list)
    secondary_effects: List[CascadeEffect] = field(default_factory=list)
    timeline: List[TimelineCheckpoint] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source": self.source.value,
            "direction": self.direction,
            "primary_effects": _serialize(self.primary_effects),
            "secondary_effects": _serialize(self.secondary_effects),
            "timeline": _serialize(self.timeline),
        }


# --- Leverage
@dataclass
class LeverageAnalysis:
    """
    Candidate intervention with impact/effort estimates.

    `leverage_ratio` is derived on every access from impact and effort so it
    can never drift from them after sorting, bucketing or re-estimation.
    """
    leverage_point_id: str
    intervention_name: str
    leverage_type: str
    impact_score: float
    effort_required: float
    affected_systems: List[SystemType]
    cascade_potential: float = 0.0
    compound_effects: List[str] = field(default_factory=list)
    implementation_difficulty: str = LEVEL_MEDIUM
    time_to_impact: str = TIME_WEEKS
    evidence_strength: float = 0.0
    risk_level: str = LEVEL_LOW
    pattern_relevance: float = 0.0

    def __post_init__(self):
        if not self.affected_systems:
            raise ValueError(f"{self.intervention_name}: affected_systems must not be empty")
        if self.leverage_type not in LEVERAGE_TYPES:
            raise ValueError(f"{self.intervention_name}: unknown leverage type {self.leverage_type!r}")

    @property
    def leverage_ratio(self) -> float:
        if self.effort_required == 0:
            return self.impact_score
        return self.impact_score / self.effort_required

    def to_dict(self) -> Dict[str, Any]:
        return {
            "leverage_point_id": self.leverage_point_id,
            "intervention_name": self.intervention_name,
            "leverage_type": self.leverage_type,
            "impact_score": self.impact_score,
            "effort_required": self.effort_required,
            "leverage_ratio": self.leverage_ratio,
            "affected_systems": _serialize(self.affected_systems),
            "cascade_potential": self.cascade_potential,
            "compound_effects": list(self.compound_effects),
            "implementation_difficulty": self.implementation_difficulty,
            "time_to_impact": self.time_to_impact,
            "evidence_strength": self.evidence_strength,
            "risk_level": self.risk_level,
            "pattern_relevance": self.pattern_relevance,
        }


@dataclass
class PriorityMatrix:
    high_impact_low_effort: List[LeverageAnalysis] = field(default_factory=list)
    high_impact_high_effort: List[LeverageAnalysis] = field(default_factory=list)
    low_impact_low_effort: List[LeverageAnalysis] = field(default_factory=list)
    low_impact_high_effort: List[LeverageAnalysis] = field(default_factory=list)

    def quadrants(self) -> Dict[str, List[LeverageAnalysis]]:
        return {
            QUADRANT_HIGH_IMPACT_LOW_EFFORT: self.high_impact_low_effort,
            QUADRANT_HIGH_IMPACT_HIGH_EFFORT: self.high_impact_high_effort,
            QUADRANT_LOW_IMPACT_LOW_EFFORT: self.low_impact_low_effort,
            QUADRANT_LOW_IMPACT_HIGH_EFFORT: self.low_impact_high_effort,
        }

    def to_dict(self) -> Dict[str, Any]:
        return _serialize(self.quadrants())


@dataclass
class CompoundChain:
    chain_id: str
    anchor_system: SystemType
    description: str
    leverage_points: List[str]
    total_impact: float
    implementation_sequence: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "chain_id": self.chain_id,
            "anchor_system": self.anchor_system.value,
            "description": self.description,
            "leverage_points": list(self.leverage_points),
            "total_impact": self.total_impact,
            "implementation_sequence": list(self.implementation_sequence),
        }


@dataclass
class RankedLeverageMap:
    highest_leverage_points: List[LeverageAnalysis] = field(default_factory=list)
    keystone_opportunities: List[LeverageAnalysis] = field(default_factory=list)
    bottleneck_removals: List[LeverageAnalysis] = field(default_factory=list)
    multiplier_effects: List[LeverageAnalysis] = field(default_factory=list)
    gateway_habits: List[LeverageAnalysis] = field(default_factory=list)
    catalyst_interventions: List[LeverageAnalysis] = field(default_factory=list)
    priority_matrix: PriorityMatrix = field(default_factory=PriorityMatrix)
    compound_chains: List[CompoundChain] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "highest_leverage_points": _serialize(self.highest_leverage_points),
            "keystone_opportunities": _serialize(self.keystone_opportunities),
            "bottleneck_removals": _serialize(self.bottleneck_removals),
            "multiplier_effects": _serialize(self.multiplier_effects),
            "gateway_habits": _serialize(self.gateway_habits),
            "catalyst_interventions": _serialize(self.catalyst_interventions),
            "priority_matrix": self.priority_matrix.to_dict(),
            "compound_chains": _serialize(self.compound_chains),
        }


@dataclass
class SystemImpact:
    system: SystemType
    current_state: float
    projected_improvement: float
    impact_mechanism: str
    timeline: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "system": self.system.value,
            "current_state": self.current_state,
            "projected_improvement": self.projected_improvement,
            "impact_mechanism": self.impact_mechanism,
            "timeline": self.timeline,
        }


@dataclass
class RiskAssessment:
    primary_risks: List[str]
    mitigation_strategies: List[str]
    fallback_options: List[str]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "primary_risks": list(self.primary_risks),
            "mitigation_strategies": list(self.mitigation_strategies),
            "fallback_options": list(self.fallback_options),
        }


@dataclass
class StrategyStep:
    step: int
    action: str
    timeline: str
    prerequisites: List[str] = field(default_factory=list)
    success_criteria: List[str] = field(default_factory=list)
    potential_obstacles: List[str] = field(default_factory=list)
    mitigation_strategies: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "step": self.step,
            "action": self.action,
            "timeline": self.timeline,
            "prerequisites": list(self.prerequisites),
            "success_criteria": list(self.success_criteria),
            "potential_obstacles": list(self.potential_obstacles),
            "mitigation_strategies": list(self.mitigation_strategies),
        }


@dataclass
class InterventionStrategy:
    """How one leverage point gets put into practice."""
    leverage_point_id: str
    strategy_name: str
    approach: str
    implementation_steps: List[StrategyStep]
    success_probability: float
    expected_timeline: str
    resource_requirements: List[str] = field(default_factory=list)
    measurement_methods: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "leverage_point_id": self.leverage_point_id,
            "strategy_name": self.strategy_name,
            "approach": self.approach,
            "implementation_steps": _serialize(self.implementation_steps),
            "success_probability": self.success_probability,
            "expected_timeline": self.expected_timeline,
            "resource_requirements": list(self.resource_requirements),
            "measurement_methods": list(self.measurement_methods),
        }


@dataclass
class LeveragePointProfile:
    leverage_analysis: LeverageAnalysis
    system_impacts: List[SystemImpact]
    risk_assessment: RiskAssessment
    success_indicators: List[str]
    compound_effects_timeline: List[Dict[str, Any]]
    implementation_strategies: List[InterventionStrategy] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "leverage_analysis": self.leverage_analysis.to_dict(),
            "system_impacts": _serialize(self.system_impacts),
            "implementation_strategies": _serialize(self.implementation_strategies),
            "risk_assessment": self.risk_assessment.to_dict(),
            "success_indicators": list(self.success_indicators),
            "compound_effects_timeline": _serialize(self.compound_effects_timeline),
        }



# --- Architecture report
@dataclass
class SystemArchitecture:
    """Aggregate report; rebuilt from scratch on every synthesis."""
    user_id: str
    systems_health: List[SystemHealth]
    interconnections: List[Interconnection]
    leverage_map: PriorityMatrix
    highest_leverage_points: List[LeverageAnalysis]
    compound_chains: List[CompoundChain]
    system_design_recommendations: List[str]
    next_evolution_steps: List[str]
    monitoring: HealthMonitorSummary
    generated_at: str = field(default_factory=utc_now_iso)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "user_id": self.user_id,
            "generated_at": self.generated_at,
            "systems_health": _serialize(self.systems_health),
            "interconnections": _serialize(self.interconnections),
            "leverage_map": self.leverage_map.to_dict(),
            "highest_leverage_points": _serialize(self.highest_leverage_points),
            "compound_chains": _serialize(self.compound_chains),
            "system_design_recommendations": list(self.system_design_recommendations),
            "next_evolution_steps": list(self.next_evolution_steps),
            "monitoring": self.monitoring.to_dict(),
        }


# --- Supplementary analyses
@dataclass
class SystemAnalysis:
    definition: SystemDefinition
    current_health: SystemHealth
    improvement_opportunities: List[str]
    interconnection_impacts: List[str]
    recommended_interventions: List[str]
    success_metrics: List[str]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "definition": self.definition.to_dict(),
            "current_health": self.current_health.to_dict(),
            "improvement_opportunities": list(self.improvement_opportunities),
            "interconnection_impacts": list(self.interconnection_impacts),
            "recommended_interventions": list(self.recommended_interventions),
            "success_metrics": list(self.success_metrics),
        }


@dataclass
class LeverageOpportunities:
    single_system_leverage: List[Dict[str, Any]] = field(default_factory=list)
    cross_system_leverage: List[Dict[str, Any]] = field(default_factory=list)
    compound_leverage: List[Dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return _serialize({
            "single_system_leverage": self.single_system_leverage,
            "cross_system_leverage": self.cross_system_leverage,
            "compound_leverage": self.compound_leverage,
        })


@dataclass
class PriorityIntervention:
    system: SystemType
    intervention: str
    impact_score: float
    effort_required: float
    implementation_steps: List[str] = field(default_factory=list)

    @property
    def leverage_ratio(self) -> float:
        if self.effort_required == 0:
            return self.impact_score
        return self.impact_score / self.effort_required

    def to_dict(self) -> Dict[str, Any]:
        return {
            "system": self.system.value,
            "intervention": self.intervention,
            "impact_score": self.impact_score,
            "effort_required": self.effort_required,
            "leverage_ratio": self.leverage_ratio,
            "implementation_steps": list(self.implementation_steps),
        }


@dataclass
class SynergyOpportunity:
    systems: List[SystemType]
    synergy_description: str
    combined_impact: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "systems": _serialize(self.systems),
            "synergy_description": self.synergy_description,
            "combined_impact": self.combined_impact,
        }


@dataclass
class OptimizationPlan:
    priority_interventions: List[PriorityIntervention]
    synergy_opportunities: List[SynergyOpportunity]
    implementation_sequence: List[str]
    success_metrics: Dict[SystemType, List[str]]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "priority_interventions": _serialize(self.priority_interventions),
            "synergy_opportunities": _serialize(self.synergy_opportunities),
            "implementation_sequence": list(self.implementation_sequence),
            "success_metrics": _serialize(self.success_metrics),
        }


@dataclass
class ImplementationPhase:
    phase: int
    focus: str
    actions: List[str]
    timeline: str
    success_criteria: List[str]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "phase": self.phase,
            "focus": self.focus,
            "actions": list(self.actions),
            "timeline": self.timeline,
            "success_criteria": list(self.success_criteria),
        }


@dataclass
class SystemDesign:
    """
    Structured design for rebuilding one system around stated challenges and outcomes.

    Carries only the deterministic parts; any prose design is left to an
    external writer working from these fields.
    """
    system_type: SystemType
    current_challenges: List[str]
    desired_outcomes: List[str]
    implementation_plan: List[ImplementationPhase]
    leverage_points: List[str]
    measurement_system: List[str]
    potential_obstacles: List[str]
    mitigation_strategies: List[str]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "system_type": self.system_type.value,
            "current_challenges": list(self.current_challenges),
            "desired_outcomes": list(self.desired_outcomes),
            "implementation_plan": _serialize(self.implementation_plan),
            "leverage_points": list(self.leverage_points),
            "measurement_system": list(self.measurement_system),
            "potential_obstacles": list(self.potential_obstacles),
            "mitigation_strategies": list(self.mitigation_strategies),
        }
