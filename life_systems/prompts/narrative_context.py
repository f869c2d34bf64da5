"""
Life Systems Architecture - plain-text inputs for the external narrative writer.

The engine never calls a language model. These helpers flatten a synthesized
architecture into labelled text fields that a collaborator can drop into
ARCHITECTURE_NARRATIVE_PROMPT (or its own template) unchanged.
"""
from typing import Optional, Dict

from life_systems.core.types import SystemArchitecture, CascadeResult


# --- SYSTEM CONTEXT - Architect framing ---
LIFE_ARCHITECT_SYSTEM_PROMPT = (
    "You are a life systems architect."
    " Treat every challenge as a design problem and prefer interventions that compound across systems."
    " Be warm, specific and concise."
)


# --- ARCHITECTURE NARRATIVE PROMPT ---
ARCHITECTURE_NARRATIVE_PROMPT = """You are explaining a life systems assessment to the person it describes.
Use only the structured findings below. Do not invent scores, systems or interventions.

CURRENT SYSTEMS HEALTH:
{health_summary}

PRIMARY CHALLENGES:
{challenges}

HIGHEST LEVERAGE INTERVENTIONS:
{top_leverage}

CASCADE EFFECTS:
{cascade_effects}

MONITORING:
{monitoring_summary}

Write three short paragraphs:
1. Where their life architecture stands today and which system is the constraint
2. Which one or two interventions unlock the most change, and why they compound
3. What to watch over the next 4-12 weeks"""


# --- Field line templates ---
HEALTH_LINE = "- {system}: {score:.1f}/10 ({trend})"
CHALLENGE_LINE = "- {system}: {challenges}"
LEVERAGE_LINE = "- {name} [{leverage_type}] impact {impact:.2f}, effort {effort:.2f}, ratio {ratio:.2f}; affects {systems}"
CASCADE_LINE = "- {system} ({impact:+.2f}): {description}"
MONITORING_TEMPLATE = (
    "Overall health {overall:.1f}/10, balance {balance:.2f}. "
    "Recommended focus: {focus}. Needs urgent attention: {urgent}. "
    "Improving: {up}. Declining: {down}."
)
NONE_TEXT = "none"
TOP_LEVERAGE_COUNT = 5


def _join_systems(systems) -> str:
    return ", ".join(s.value for s in systems) or NONE_TEXT


def build_narrative_inputs(
    architecture: SystemArchitecture,
    cascade: Optional[CascadeResult] = None,
) -> Dict[str, str]:
    """Flatten an architecture (and optional cascade) into prompt fields."""
    health_summary = "\n".join(
        HEALTH_LINE.format(system=h.system_type.value, score=h.overall_score, trend=h.trend_direction)
        for h in architecture.systems_health
    )
    challenges = "\n".join(
        CHALLENGE_LINE.format(system=h.system_type.value, challenges="; ".join(h.primary_challenges))
        for h in architecture.systems_health if h.primary_challenges
    ) or NONE_TEXT
    top_leverage = "\n".join(
        LEVERAGE_LINE.format(
            name=c.intervention_name,
            leverage_type=c.leverage_type,
            impact=c.impact_score,
            effort=c.effort_required,
            ratio=c.leverage_ratio,
            systems=_join_systems(c.affected_systems),
        )
        for c in architecture.highest_leverage_points[:TOP_LEVERAGE_COUNT]
    ) or NONE_TEXT

    cascade_effects = NONE_TEXT
    if cascade is not None:
        effects = list(cascade.primary_effects) + list(cascade.secondary_effects)
        cascade_effects = "\n".join(
            CASCADE_LINE.format(system=e.system.value, impact=e.impact, description=e.description)
            for e in effects
        ) or NONE_TEXT

    monitoring = architecture.monitoring
    monitoring_summary = MONITORING_TEMPLATE.format(
        overall=monitoring.overall_health_score,
        balance=monitoring.system_balance_score,
        focus=monitoring.recommended_focus.value if monitoring.recommended_focus else NONE_TEXT,
        urgent=_join_systems(monitoring.urgent_attention_needed),
        up=_join_systems(monitoring.trending_up),
        down=_join_systems(monitoring.trending_down),
    )

    return {
        "health_summary": health_summary,
        "challenges": challenges,
        "top_leverage": top_leverage,
        "cascade_effects": cascade_effects,
        "monitoring_summary": monitoring_summary,
    }


def render_narrative_prompt(architecture: SystemArchitecture, cascade: Optional[CascadeResult] = None) -> str:
    return ARCHITECTURE_NARRATIVE_PROMPT.format(**build_narrative_inputs(architecture, cascade))
