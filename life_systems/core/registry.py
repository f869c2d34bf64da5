"""
Static catalog of the six life systems and the declared graph between them.

Everything here is built once at import and exposed read-only: definitions and
description tables through `MappingProxyType`, edges as a tuple of templates
that callers copy before adjusting strengths.
"""
from types import MappingProxyType
from typing import Any, List, Mapping, Tuple

from life_systems.core.types import (
    SystemType, SystemDefinition, EdgeTemplate, Interconnection, LeverageTypeProfile,
    CONNECTION_REINFORCING, LEVERAGE_KEYSTONE, LEVERAGE_BOTTLENECK,
    LEVERAGE_MULTIPLIER, LEVERAGE_GATEWAY, LEVERAGE_CATALYST,
    coerce_system_type,
)

V = SystemType.VITALITY
R = SystemType.RESOURCES
C = SystemType.CONNECTION
D = SystemType.DEVELOPMENT
M = SystemType.MEANING
X = SystemType.CONTEXT

REGISTRY_ORDER: Tuple[SystemType, ...] = tuple(SystemType)


# ═══════════════════════════════════════════════════════════════════════════
# SYSTEM DEFINITIONS
# ═══════════════════════════════════════════════════════════════════════════

SYSTEM_DEFINITIONS: Mapping[SystemType, SystemDefinition] = MappingProxyType({
    V: SystemDefinition(
        name="Vitality System",
        description="Energy, vitality, and physical foundation for everything else",
        core_components=(
            "Energy Management", "Physical Fitness", "Nutrition Architecture",
            "Sleep Optimization", "Stress Management", "Recovery Systems",
        ),
        key_metrics=(
            "Energy levels throughout day", "Physical fitness markers",
            "Sleep quality and duration", "Stress resilience", "Recovery speed",
            "Health span indicators",
        ),
        success_indicators=(
            "Consistent high energy without stimulants",
            "Resilience to physical and mental stress",
            "Rapid recovery from exertion",
            "Stable mood and cognitive function",
            "Sustainable health habits",
        ),
        common_challenges=(
            "Energy crashes and fatigue", "Inconsistent exercise habits",
            "Poor sleep patterns", "Stress accumulation", "Reactive health management",
        ),
        leverage_opportunities=(
            "Morning routine optimization", "Environment design for healthy defaults",
            "Keystone habit installation", "Energy architecture vs. energy expenditure",
        ),
        interconnection_points=(D, R, C, M),
    ),
    R: SystemDefinition(
        name="Resources System",
        description="Financial freedom and resource architecture for life design",
        core_components=(
            "Income Architecture", "Asset Building", "Expense Optimization",
            "Investment Strategy", "Risk Management", "Wealth Psychology",
        ),
        key_metrics=(
            "Net worth progression", "Passive income ratio",
            "Financial independence timeline", "Investment returns",
            "Expense efficiency", "Money mindset health",
        ),
        success_indicators=(
            "Increasing passive income streams", "Compound wealth growth",
            "Financial stress elimination", "Investment competence",
            "Abundance mindset development",
        ),
        common_challenges=(
            "Trading time for money", "Lack of investment knowledge",
            "Scarcity mindset", "Lifestyle inflation", "Short-term financial thinking",
        ),
        leverage_opportunities=(
            "Skill monetization systems", "Automated wealth building",
            "Tax optimization strategies", "Network effect utilization",
        ),
        interconnection_points=(D, M, X, V),
    ),
    C: SystemDefinition(
        name="Connection System",
        description="Connection, love, and social architecture for fulfillment",
        core_components=(
            "Intimate Relationships", "Family Dynamics", "Friendship Networks",
            "Professional Relationships", "Community Connections", "Self-Relationship",
        ),
        key_metrics=(
            "Relationship satisfaction levels", "Support network strength",
            "Communication effectiveness", "Conflict resolution skills",
            "Social connection frequency", "Emotional intimacy depth",
        ),
        success_indicators=(
            "Deep, authentic connections", "Effective communication patterns",
            "Strong support networks", "Healthy boundaries",
            "Mutual growth in relationships",
        ),
        common_challenges=(
            "Surface-level connections", "Communication breakdowns",
            "Boundary issues", "Social isolation", "Relationship maintenance neglect",
        ),
        leverage_opportunities=(
            "Communication system design", "Relationship ritual creation",
            "Network effect amplification", "Emotional intelligence development",
        ),
        interconnection_points=(D, M, V, X),
    ),
    D: SystemDefinition(
        name="Development System",
        description="Learning, skills, and personal evolution architecture",
        core_components=(
            "Learning Systems", "Skill Development", "Knowledge Application",
            "Feedback Loops", "Challenge Progression", "Meta-Learning",
        ),
        key_metrics=(
            "Learning velocity", "Skill acquisition rate",
            "Knowledge application effectiveness", "Feedback integration speed",
            "Challenge completion rate", "Meta-skill development",
        ),
        success_indicators=(
            "Accelerating learning curves", "Skill transfer across domains",
            "Rapid adaptation to new challenges", "Effective feedback utilization",
            "Continuous improvement mindset",
        ),
        common_challenges=(
            "Random learning without system",
            "Knowledge consumption without application",
            "Avoiding difficult challenges", "Poor feedback processing",
            "Learning plateau stagnation",
        ),
        leverage_opportunities=(
            "Learning system architecture", "Skill stacking strategies",
            "Compound learning effects", "Teaching to accelerate learning",
        ),
        interconnection_points=(R, M, V, C),
    ),
    M: SystemDefinition(
        name="Meaning System",
        description="Meaning, contribution, and legacy design architecture",
        core_components=(
            "Values Alignment", "Mission Clarity", "Impact Creation",
            "Legacy Building", "Service Architecture", "Meaning Making",
        ),
        key_metrics=(
            "Values-action alignment", "Mission clarity score", "Impact measurement",
            "Legacy progress indicators", "Service contribution levels",
            "Meaning satisfaction",
        ),
        success_indicators=(
            "Clear life mission", "Daily actions aligned with values",
            "Measurable positive impact", "Legacy building progress",
            "Deep sense of meaning",
        ),
        common_challenges=(
            "Unclear life direction", "Values-action misalignment",
            "Impact measurement difficulty", "Legacy planning absence",
            "Meaning crisis episodes",
        ),
        leverage_opportunities=(
            "Mission-driven decision making", "Impact amplification systems",
            "Values-based habit design", "Service integration into work",
        ),
        interconnection_points=(D, C, R, X),
    ),
    X: SystemDefinition(
        name="Context System",
        description="Space, culture, and contextual design for optimal functioning",
        core_components=(
            "Physical Environment", "Digital Environment", "Social Environment",
            "Cultural Environment", "Workspace Design", "Context Architecture",
        ),
        key_metrics=(
            "Environment optimization score", "Distraction elimination rate",
            "Productivity environment rating", "Social environment quality",
            "Cultural alignment level", "Context switching efficiency",
        ),
        success_indicators=(
            "Environments that promote desired behaviors",
            "Minimal friction for good habits",
            "Maximal friction for bad habits",
            "Inspiring and energizing spaces",
            "Cultural environments that support growth",
        ),
        common_challenges=(
            "Distracting environments", "Poor workspace design",
            "Negative social influences", "Cultural misalignment",
            "High context switching costs",
        ),
        leverage_opportunities=(
            "Environment as behavior architect", "Default option design",
            "Social environment curation", "Digital environment optimization",
        ),
        interconnection_points=(V, D, R, C),
    ),
})


# ═══════════════════════════════════════════════════════════════════════════
# DECLARED INTERCONNECTIONS
# ═══════════════════════════════════════════════════════════════════════════
# Fixed topology. Strengths are declared values; per-user effective strengths
# are derived by the interconnection model and never written back here.

SYSTEM_INTERCONNECTIONS: Tuple[EdgeTemplate, ...] = (
    EdgeTemplate(
        from_system=V, to_system=R, connection_type=CONNECTION_REINFORCING,
        declared_strength=0.8,
        description="Higher energy and cognitive function drive wealth creation capacity",
        examples=(
            "Better sleep leads to better decision making",
            "Higher energy enables more productive work",
            "Health reduces medical expenses",
        ),
        leverage_potential=0.9,
    ),
    EdgeTemplate(
        from_system=V, to_system=C, connection_type=CONNECTION_REINFORCING,
        declared_strength=0.7,
        description="Physical and mental health affects relationship quality and availability",
        examples=(
            "Higher energy for relationship investment",
            "Better mood enhances interactions",
            "Stress management improves patience",
        ),
        leverage_potential=0.8,
    ),
    EdgeTemplate(
        from_system=R, to_system=V, connection_type=CONNECTION_REINFORCING,
        declared_strength=0.6,
        description="Financial resources enable better health investments and reduce stress",
        examples=(
            "Quality food and healthcare access",
            "Time for exercise and recovery",
            "Reduced financial stress",
        ),
        leverage_potential=0.7,
    ),
    EdgeTemplate(
        from_system=C, to_system=V, connection_type=CONNECTION_REINFORCING,
        declared_strength=0.8,
        description="Strong relationships provide support, reduce stress, and improve longevity",
        examples=(
            "Social support reduces stress hormones",
            "Accountability partners for health habits",
            "Emotional support during challenges",
        ),
        leverage_potential=0.9,
    ),
    EdgeTemplate(
        from_system=D, to_system=R, connection_type=CONNECTION_REINFORCING,
        declared_strength=0.9,
        description="Continuous learning and skill development increase earning potential",
        examples=(
            "New skills command higher compensation",
            "Learning enables career transitions",
            "Knowledge creates investment opportunities",
        ),
        leverage_potential=0.95,
    ),
    EdgeTemplate(
        from_system=M, to_system=R, connection_type=CONNECTION_REINFORCING,
        declared_strength=0.7,
        description="Clear purpose drives focused action and attracts aligned opportunities",
        examples=(
            "Mission clarity focuses effort",
            "Purpose attracts like-minded collaborators",
            "Values alignment increases persistence",
        ),
        leverage_potential=0.8,
    ),
    EdgeTemplate(
        from_system=X, to_system=V, connection_type=CONNECTION_REINFORCING,
        declared_strength=0.8,
        description="Well-designed environments make healthy choices automatic",
        examples=(
            "Kitchen design influences eating habits",
            "Workspace setup affects posture and stress",
            "Social environment shapes health behaviors",
        ),
        leverage_potential=0.85,
    ),
)


# Cascade descriptions keyed by (changed system, affected system).
# `{direction}` is filled with "improves" or "degrades".
CASCADE_DESCRIPTIONS: Mapping[Tuple[SystemType, SystemType], str] = MappingProxyType({
    (V, R): "Better health {direction} energy and focus for wealth-building activities",
    (V, C): "Health changes {direction} confidence and energy for social connections",
    (V, D): "Physical vitality {direction} learning capacity and mental clarity",
    (V, M): "Health improvements {direction} ability to pursue meaningful activities",
    (V, X): "Health awareness {direction} environmental choices and design",
    (R, V): "Financial stability {direction} access to quality health resources",
    (R, C): "Wealth changes {direction} social dynamics and relationship opportunities",
    (R, D): "Financial resources {direction} investment in learning and development",
    (R, M): "Financial freedom {direction} ability to pursue meaningful work",
    (R, X): "Wealth {direction} ability to design optimal living and working environments",
    (C, V): "Social connections {direction} mental health and stress management",
    (C, R): "Relationships {direction} opportunities and collaboration for wealth",
    (C, D): "Social learning and feedback {direction} personal development",
    (C, M): "Meaningful connections {direction} sense of purpose and belonging",
    (C, X): "Social environment {direction} overall life context and support",
    (D, V): "Learning and awareness {direction} health optimization strategies",
    (D, R): "Skills and knowledge {direction} earning potential and opportunities",
    (D, C): "Personal development {direction} relationship skills and empathy",
    (D, M): "Self-discovery {direction} clarity about life purpose and meaning",
    (D, X): "Growth mindset {direction} environmental optimization and design",
    (M, V): "Life meaning {direction} motivation for health and self-care",
    (M, R): "Purpose alignment {direction} sustainable wealth-building motivation",
    (M, C): "Shared values {direction} deeper, more meaningful connections",
    (M, D): "Purpose-driven learning {direction} focused personal development",
    (M, X): "Meaningful life {direction} intentional environment design",
    (X, V): "Optimized environment {direction} automatic healthy choices",
    (X, R): "Strategic environment {direction} wealth-building opportunities and focus",
    (X, C): "Social environment {direction} relationship quality and frequency",
    (X, D): "Learning environment {direction} continuous development and improvement",
    (X, M): "Purposeful environment {direction} alignment with values and meaning",
})

CASCADE_FALLBACK_DESCRIPTION = (
    "Changes in {source} {direction} the {target} system through {connection_type} connections"
)


# ═══════════════════════════════════════════════════════════════════════════
# LEVERAGE CATALOG
# ═══════════════════════════════════════════════════════════════════════════

LEVERAGE_TYPE_PROFILES: Mapping[str, LeverageTypeProfile] = MappingProxyType({
    LEVERAGE_KEYSTONE: LeverageTypeProfile(
        description="Habits or systems that automatically trigger positive changes in other areas",
        characteristics=("Creates automatic spillover effects", "Changes identity and self-perception", "Builds momentum"),
        examples=("Morning routine", "Exercise habit", "Reading practice"),
    ),
    LEVERAGE_BOTTLENECK: LeverageTypeProfile(
        description="Constraints that, when removed, unlock significant capacity across systems",
        characteristics=("Limits multiple systems simultaneously", "Single point of failure", "High unlock potential"),
        examples=("Energy management", "Time management", "Decision fatigue"),
    ),
    LEVERAGE_MULTIPLIER: LeverageTypeProfile(
        description="Changes that amplify the effectiveness of other systems and efforts",
        characteristics=("Increases ROI of other activities", "Creates synergistic effects", "Compounds over time"),
        examples=("Learning system", "Network effects", "Skill stacking"),
    ),
    LEVERAGE_GATEWAY: LeverageTypeProfile(
        description="Entry points that lead naturally to bigger transformations",
        characteristics=("Lower resistance to start", "Natural progression pathway", "Identity shifting"),
        examples=("Small environmental changes", "Micro-habits", "Social connections"),
    ),
    LEVERAGE_CATALYST: LeverageTypeProfile(
        description="Interventions that accelerate transformation across all systems",
        characteristics=("Rapid impact", "Cross-system effects", "Paradigm shifting"),
        examples=("Mindset shifts", "Environment redesign", "Relationship changes"),
    ),
})

# Compound-chain headline per anchor system
CHAIN_THEMES: Mapping[SystemType, str] = MappingProxyType({
    V: "Vitality → Energy → Productivity Compound Chain",
    R: "Resources → Freedom → Options Compound Chain",
    C: "Connection → Support → Resilience Compound Chain",
    D: "Development → Skill → Opportunity Compound Chain",
    M: "Meaning → Focus → Persistence Compound Chain",
    X: "Context → Defaults → Automatic Behavior Compound Chain",
})

EVOLUTION_STEPS: Tuple[str, ...] = (
    "Stabilize foundation systems (vitality, context)",
    "Build development systems (learning, skills)",
    "Scale impact systems (resources, connection)",
    "Integrate meaning and purpose",
    "Optimize for compound effects",
)


def get_definition(system_type: Any) -> SystemDefinition:
    """Registry lookup; accepts a SystemType or its string value."""
    return SYSTEM_DEFINITIONS[coerce_system_type(system_type)]


def declared_edges() -> List[Interconnection]:
    """Fresh copies of the declared edges, safe for per-user adjustment."""
    return [template.build() for template in SYSTEM_INTERCONNECTIONS]


def cascade_description(source: SystemType, target: SystemType, direction_word: str, connection_type: str) -> str:
    template = CASCADE_DESCRIPTIONS.get((source, target))
    if template is None:
        return CASCADE_FALLBACK_DESCRIPTION.format(
            source=source.value, target=target.value,
            direction=direction_word, connection_type=connection_type,
        )
    return template.format(direction=direction_word)
