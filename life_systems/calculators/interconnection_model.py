import logging
from dataclasses import replace
from typing import Optional, List

from life_systems.calculators.calculator_base import CalculatorBase
from life_systems.core.registry import declared_edges
from life_systems.core.types import SystemHealth, Interconnection

logger = logging.getLogger(__name__)


class InterconnectionModel(CalculatorBase):
    """
    Derives per-user effective edge strengths over the fixed topology.

    effective = declared × ((health(from) + health(to)) / 20)

    Two endpoints at 10 leave the declared strength unchanged; two endpoints
    at 0 zero the edge out. The damping is deliberate: a link between two
    neglected systems transmits little change.
    """

    HEALTH_NORMALIZER: float = 20.0

    def __init__(self, systems_health: List[SystemHealth]):
        self.systems_health = list(systems_health)
        self.calculations = {}

    def effective_strength(self, edge: Interconnection) -> float:
        from_score = self._score_for(edge.from_system)
        to_score = self._score_for(edge.to_system)
        health_factor = (from_score + to_score) / self.HEALTH_NORMALIZER
        strength = edge.declared_strength * health_factor
        # Bound to [0, declared] regardless of out-of-scale inputs
        return max(0.0, min(edge.declared_strength, strength))

    def effective_edges(self, edges: Optional[List[Interconnection]] = None) -> List[Interconnection]:
        """
        Copy each edge with its strength replaced by the effective value.

        Args:
            edges: Edge list to adjust; defaults to the registry's declared edges

        Returns:
            New Interconnection objects; inputs are never mutated
        """
        source_edges = declared_edges() if edges is None else edges
        adjusted = [
            replace(edge, examples=list(edge.examples), strength=self.effective_strength(edge))
            for edge in source_edges
        ]
        if adjusted:
            self._store_result('mean_effective_strength', self._mean(e.strength for e in adjusted))
        logger.debug("Computed effective edges", extra={"edges": len(adjusted)})
        return adjusted


def effective_edges(
    all_health: List[SystemHealth],
    edges: Optional[List[Interconnection]] = None,
) -> List[Interconnection]:
    return InterconnectionModel(all_health).effective_edges(edges)
