import numpy as np
import pandas as pd
from typing import Optional, List, Any, Iterable

from life_systems.core.types import SystemType


class CalculatorBase:
    """Base class providing score series access and result helpers.

    Subclasses that work over a health snapshot set `systems_health`
    (a list of `SystemHealth` in registry order).
    """

    SCORE_MIN: float = 0.0
    SCORE_MAX: float = 10.0
    # Neutral midpoint used when an endpoint has no health entry
    NEUTRAL_SCORE: float = 5.0

    @property
    def scores(self) -> Optional[pd.Series]:
        """Overall scores indexed by SystemType, preserving input order."""
        cache = getattr(self, "_scores_cache", None)
        if cache is not None:
            return cache

        health = getattr(self, "systems_health", None)
        if not health:
            return None

        # object dtype keeps the SystemType labels intact
        series = pd.Series(
            [float(h.overall_score) for h in health],
            index=pd.Index([h.system_type for h in health], dtype=object),
            dtype=float,
        )
        setattr(self, "_scores_cache", series)
        return series

    def _score_for(self, system_type: SystemType, default: Optional[float] = None) -> float:
        """Overall score for one system, or the neutral midpoint."""
        series = self.scores
        if series is None or system_type not in series.index:
            return self.NEUTRAL_SCORE if default is None else default
        return float(series.loc[system_type])

    @classmethod
    def clamp_score(cls, value: Any) -> float:
        """Clamp to the 0-10 health scale; non-finite input becomes the minimum."""
        cleaned = cls._clean_value(value)
        if cleaned is None:
            return cls.SCORE_MIN
        return float(np.clip(cleaned, cls.SCORE_MIN, cls.SCORE_MAX))

    @staticmethod
    def _clean_value(value: Any) -> Optional[float]:
        if value is None:
            return None
        try:
            value = float(value)
        except (TypeError, ValueError):
            return None
        if not np.isfinite(value):
            return None
        return value

    def _clean_result(self, value: Any) -> Optional[float]:
        """Clean result (None/NaN/inf -> None)."""
        return self._clean_value(value)

    def _store_result(self, key: str, value: Any) -> Optional[float]:
        """Store cleaned result in calculations dict."""
        cleaned = self._clean_result(value)
        if cleaned is not None:
            if not hasattr(self, 'calculations'):
                self.calculations = {}
            self.calculations[key] = cleaned
        return cleaned

    @staticmethod
    def _mean(values: Iterable[float]) -> Optional[float]:
        arr = np.asarray(list(values), dtype=float)
        if arr.size == 0:
            return None
        return float(arr.mean())

    @staticmethod
    def _population_std(values: List[float]) -> Optional[float]:
        arr = np.asarray(values, dtype=float)
        if arr.size == 0:
            return None
        return float(arr.std(ddof=0))
