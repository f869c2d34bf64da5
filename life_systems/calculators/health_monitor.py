import logging
from typing import Optional, List

from life_systems.calculators.calculator_base import CalculatorBase
from life_systems.core.config import AppConfig, ScoringConfig
from life_systems.core.types import (
    SystemHealth, HealthMonitorSummary, TREND_IMPROVING, TREND_DECLINING,
)

logger = logging.getLogger(__name__)


class HealthMonitor(CalculatorBase):
    """Overall score, balance and attention lists for a health snapshot."""

    # Std-dev at which balance bottoms out at 0
    BALANCE_STD_CEILING: float = 5.0
    DEFAULT_IMPROVEMENT_TEXT: str = "General improvement"

    def __init__(self, systems_health: List[SystemHealth], config: Optional[ScoringConfig] = None):
        self.systems_health = list(systems_health)
        self.config = config or AppConfig.scoring
        self.calculations = {}

    def balance_score(self) -> float:
        """1 - std/5 clamped at 0; equal scores give perfect balance 1.0."""
        series = self.scores
        if series is None:
            return 0.0
        std = self._population_std(series.tolist())
        return max(0.0, 1.0 - std / self.BALANCE_STD_CEILING)

    def overall_score(self) -> float:
        series = self.scores
        if series is None:
            return 0.0
        return float(series.mean())

    def recommended_focus(self):
        """Lowest-scoring system; ties resolve to the earliest in input order."""
        series = self.scores
        if series is None:
            return None
        # idxmin returns the first occurrence of the minimum
        return series.idxmin()

    def summarize(self) -> HealthMonitorSummary:
        overall = self._store_result('overall_health_score', self.overall_score())
        balance = self._store_result('system_balance_score', self.balance_score())

        trending_up = [h.system_type for h in self.systems_health if h.trend_direction == TREND_IMPROVING]
        trending_down = [h.system_type for h in self.systems_health if h.trend_direction == TREND_DECLINING]
        urgent = [
            h.system_type for h in self.systems_health
            if h.overall_score < self.config.urgent_score_threshold
        ]
        recent_improvements = [
            {
                "system": h.system_type,
                "improvement": h.key_strengths[0] if h.key_strengths else self.DEFAULT_IMPROVEMENT_TEXT,
                "impact": h.overall_score,
            }
            for h in self.systems_health if h.trend_direction == TREND_IMPROVING
        ]

        summary = HealthMonitorSummary(
            overall_health_score=overall if overall is not None else 0.0,
            system_balance_score=balance if balance is not None else 0.0,
            trending_up=trending_up,
            trending_down=trending_down,
            urgent_attention_needed=urgent,
            recent_improvements=recent_improvements,
            recommended_focus=self.recommended_focus(),
        )
        logger.debug(
            "Health monitor summary",
            extra={"overall": summary.overall_health_score, "balance": summary.system_balance_score, "urgent": len(urgent)},
        )
        return summary


def monitor_system_health(systems_health: List[SystemHealth], config: Optional[ScoringConfig] = None) -> HealthMonitorSummary:
    return HealthMonitor(systems_health, config=config).summarize()
