import logging
from typing import Optional, List, Dict

import numpy as np
import pandas as pd

from life_systems.core.config import AppConfig, ScoringConfig
from life_systems.core.registry import REGISTRY_ORDER, CHAIN_THEMES
from life_systems.core.types import (
    LeverageAnalysis, PriorityMatrix, CompoundChain, RankedLeverageMap,
    LEVERAGE_KEYSTONE, LEVERAGE_BOTTLENECK, LEVERAGE_MULTIPLIER,
    LEVERAGE_GATEWAY, LEVERAGE_CATALYST,
    QUADRANT_HIGH_IMPACT_LOW_EFFORT, QUADRANT_HIGH_IMPACT_HIGH_EFFORT,
    QUADRANT_LOW_IMPACT_LOW_EFFORT, QUADRANT_LOW_IMPACT_HIGH_EFFORT,
)

logger = logging.getLogger(__name__)


class LeverageRanker:
    """
    Orders candidates by leverage ratio and buckets them for presentation.

    Sorting is stable: equal ratios keep the identifier's rule order. The
    quadrant test uses a strict `>` on impact and a strict `<` on effort, so
    boundary values (impact exactly 0.7, effort exactly 0.4) fall on the
    low-impact / high-effort side. Every candidate lands in exactly one
    quadrant.
    """

    CHAIN_ESTABLISH_STEP: str = "Establish {name}"
    CHAIN_CONSOLIDATE_STEP: str = "Consolidate gains across the {system} system before adding more change"

    def __init__(self, config: Optional[ScoringConfig] = None):
        self.config = config or AppConfig.scoring

    # ═══════════════════════════════════════════════════════════════════════════
    # ORDERING
    # ═══════════════════════════════════════════════════════════════════════════

    @staticmethod
    def sort_by_ratio(candidates: List[LeverageAnalysis]) -> List[LeverageAnalysis]:
        # sorted() is stable; ties keep input order
        return sorted(candidates, key=lambda c: c.leverage_ratio, reverse=True)

    def quadrant_for(self, candidate: LeverageAnalysis) -> str:
        high_impact = candidate.impact_score > self.config.high_impact_threshold
        low_effort = candidate.effort_required < self.config.low_effort_threshold
        if high_impact:
            return QUADRANT_HIGH_IMPACT_LOW_EFFORT if low_effort else QUADRANT_HIGH_IMPACT_HIGH_EFFORT
        return QUADRANT_LOW_IMPACT_LOW_EFFORT if low_effort else QUADRANT_LOW_IMPACT_HIGH_EFFORT

    def priority_matrix(self, candidates: List[LeverageAnalysis]) -> PriorityMatrix:
        matrix = PriorityMatrix()
        buckets = matrix.quadrants()
        for candidate in candidates:
            buckets[self.quadrant_for(candidate)].append(candidate)
        return matrix

    # ═══════════════════════════════════════════════════════════════════════════
    # COMPOUND CHAINS
    # ═══════════════════════════════════════════════════════════════════════════

    @staticmethod
    def combined_impact(impacts: List[float]) -> float:
        """Probability that at least one member lands: 1 - prod(1 - impact)."""
        if not impacts:
            return 0.0
        arr = np.clip(np.asarray(impacts, dtype=float), 0.0, 1.0)
        return float(1.0 - np.prod(1.0 - arr))

    def compound_chains(self, ordered: List[LeverageAnalysis]) -> List[CompoundChain]:
        """
        One chain per system that at least one candidate affects.

        Args:
            ordered: Candidates already sorted by leverage ratio

        Returns:
            Chains in registry order, each holding its top members by ratio
        """
        chains: List[CompoundChain] = []
        for system in REGISTRY_ORDER:
            members = [c for c in ordered if system in c.affected_systems][:self.config.max_chain_links]
            if not members:
                continue
            sequence = [self.CHAIN_ESTABLISH_STEP.format(name=c.intervention_name) for c in members]
            sequence.append(self.CHAIN_CONSOLIDATE_STEP.format(system=system.value))
            chains.append(CompoundChain(
                chain_id=f"chain-{system.value}",
                anchor_system=system,
                description=CHAIN_THEMES[system],
                leverage_points=[c.leverage_point_id for c in members],
                total_impact=round(self.combined_impact([c.impact_score for c in members]), 4),
                implementation_sequence=sequence,
            ))
        return chains

    # ═══════════════════════════════════════════════════════════════════════════
    # PUBLIC API
    # ═══════════════════════════════════════════════════════════════════════════

    def rank(self, candidates: List[LeverageAnalysis]) -> RankedLeverageMap:
        ordered = self.sort_by_ratio(candidates)

        by_type: Dict[str, List[LeverageAnalysis]] = {}
        for candidate in ordered:
            by_type.setdefault(candidate.leverage_type, []).append(candidate)

        ranked = RankedLeverageMap(
            highest_leverage_points=ordered[:self.config.top_n],
            keystone_opportunities=by_type.get(LEVERAGE_KEYSTONE, []),
            bottleneck_removals=by_type.get(LEVERAGE_BOTTLENECK, []),
            multiplier_effects=by_type.get(LEVERAGE_MULTIPLIER, []),
            gateway_habits=by_type.get(LEVERAGE_GATEWAY, []),
            catalyst_interventions=by_type.get(LEVERAGE_CATALYST, []),
            priority_matrix=self.priority_matrix(ordered),
            compound_chains=self.compound_chains(ordered),
        )
        logger.info(
            "Ranked leverage candidates",
            extra={
                "candidates": len(candidates),
                "top": len(ranked.highest_leverage_points),
                "chains": len(ranked.compound_chains),
            },
        )
        return ranked

    def to_frame(self, candidates: List[LeverageAnalysis]) -> pd.DataFrame:
        """Tabular view, one row per candidate in ranked order."""
        columns = [
            "leverage_point_id", "intervention_name", "leverage_type",
            "impact_score", "effort_required", "leverage_ratio",
            "cascade_potential", "evidence_strength", "pattern_relevance",
            "time_to_impact", "risk_level", "quadrant", "affected_systems",
        ]
        rows = []
        for candidate in self.sort_by_ratio(candidates):
            row = {k: v for k, v in candidate.to_dict().items() if k in columns}
            row["quadrant"] = self.quadrant_for(candidate)
            row["affected_systems"] = ", ".join(s.value for s in candidate.affected_systems)
            rows.append(row)
        return pd.DataFrame(rows, columns=columns)


def rank(candidates: List[LeverageAnalysis], config: Optional[ScoringConfig] = None) -> RankedLeverageMap:
    return LeverageRanker(config=config).rank(candidates)


def to_frame(candidates: List[LeverageAnalysis], config: Optional[ScoringConfig] = None) -> pd.DataFrame:
    return LeverageRanker(config=config).to_frame(candidates)
