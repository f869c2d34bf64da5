import logging
from typing import Optional, List, Tuple

from life_systems.core.config import AppConfig, ScoringConfig
from life_systems.core.registry import cascade_description, declared_edges
from life_systems.core.types import (
    SystemType, Interconnection, CascadeEffect, CascadeResult, TimelineCheckpoint,
    DIRECTION_IMPROVEMENT, VALID_DIRECTIONS, coerce_system_type,
)

logger = logging.getLogger(__name__)


class CascadeSimulator:
    """
    Propagates a change in one system across the interconnection graph.

    Propagation is bounded at two hops. Primary effects carry the full
    effective edge strength; each secondary effect decays by a fixed factor
    times the strength of the second edge. Edges touching the source are
    skipped on the second hop so a change never reflects straight back.

    The timeline is a fixed four-checkpoint schedule, independent of the
    source and magnitude. It is a coarse placeholder, not an event model.
    """

    MAX_HOPS: int = 2

    TIMELINE: Tuple[Tuple[int, str], ...] = (
        (1, "Immediate behavioral changes begin"),
        (4, "Primary system adaptations take hold"),
        (12, "Secondary system cascades become apparent"),
        (24, "Full system architecture realignment"),
    )

    SECONDARY_DESCRIPTION: str = "Secondary effect through {via} system"

    def __init__(self, config: Optional[ScoringConfig] = None):
        self.config = config or AppConfig.scoring

    @property
    def secondary_decay(self) -> float:
        return self.config.secondary_decay

    def cascade(
        self,
        source: SystemType,
        direction: str,
        edges: Optional[List[Interconnection]] = None,
    ) -> CascadeResult:
        """
        Simulate primary and secondary effects of a change.

        Args:
            source: The system that changed
            direction: 'improvement' or 'decline'
            edges: Effective edges; defaults to the declared registry edges

        Returns:
            CascadeResult with signed impacts and the fixed timeline
        """
        source = coerce_system_type(source)
        if direction not in VALID_DIRECTIONS:
            raise ValueError(f"direction must be one of {VALID_DIRECTIONS}, got {direction!r}")
        edges = declared_edges() if edges is None else edges

        sign = 1.0 if direction == DIRECTION_IMPROVEMENT else -1.0
        direction_word = "improves" if direction == DIRECTION_IMPROVEMENT else "degrades"

        primary_effects: List[CascadeEffect] = []
        for edge in edges:
            if not edge.touches(source):
                continue
            target = edge.other_end(source)
            primary_effects.append(CascadeEffect(
                system=target,
                impact=sign * edge.strength,
                description=cascade_description(source, target, direction_word, edge.connection_type),
            ))

        secondary_effects: List[CascadeEffect] = []
        for primary in primary_effects:
            if primary.system == source:
                continue
            for edge in edges:
                if not edge.touches(primary.system) or edge.touches(source):
                    continue
                secondary_effects.append(CascadeEffect(
                    system=edge.other_end(primary.system),
                    impact=primary.impact * self.secondary_decay * edge.strength,
                    description=self.SECONDARY_DESCRIPTION.format(via=primary.system.value),
                    via=primary.system,
                ))

        logger.debug(
            "Cascade computed",
            extra={
                "source": source.value,
                "direction": direction,
                "primary": len(primary_effects),
                "secondary": len(secondary_effects),
            },
        )
        return CascadeResult(
            source=source,
            direction=direction,
            primary_effects=primary_effects,
            secondary_effects=secondary_effects,
            timeline=[TimelineCheckpoint(weeks=w, effects=[text]) for w, text in self.TIMELINE],
        )

    @staticmethod
    def total_impact(result: CascadeResult) -> float:
        """Sum of absolute primary impacts; the reach of a change in one hop."""
        return sum(abs(effect.impact) for effect in result.primary_effects)
