import os
from dotenv import load_dotenv
from dataclasses import dataclass
from typing import Optional, Dict, Any, Callable

load_dotenv()


class EnvConfig:
    """Small helper for reading and casting environment variables.

    Usage: EnvConfig.get('LIFE_SYSTEMS_TOP_N', cast=int, aliases=['TOP_N'])
    """

    @staticmethod
    def get(name: str, default: Any = None, cast: Optional[Callable] = None, aliases: Optional[list] = None):
        aliases = aliases or []
        for key in (name, *aliases):
            val = os.getenv(key)
            if val is not None:
                if cast is not None:
                    try:
                        return cast(val)
                    except Exception as exc:  # keep error explicit
                        raise ValueError(f"Invalid value for {key}: {exc}")
                return val
        return default


# Impact estimator names accepted by ScoringConfig.impact_estimator
IMPACT_ESTIMATOR_PRESET = 'preset'
IMPACT_ESTIMATOR_HEALTH_SENSITIVE = 'health_sensitive'


@dataclass
class BaseConfig:
    """Mixin-like helper for dataclasses that load from envs and validate."""

    @classmethod
    def _env(cls, name: str, default: Any = None, cast: Optional[Callable] = None, aliases: Optional[list] = None):
        return EnvConfig.get(name, default=default, cast=cast, aliases=aliases)

    def validate(self, required: bool = True):
        """Default no-op; override in subclasses with required flag."""
        return None


@dataclass
class ScoringConfig(BaseConfig):
    """Thresholds and limits for ranking, monitoring and cascade analysis.

    Defaults are the contract values; the environment may override the
    presentation limits and trend tolerance but the quadrant thresholds and
    secondary decay are only overridable by explicit constructor values.
    """
    top_n: int = 10
    high_impact_threshold: float = 0.7
    low_effort_threshold: float = 0.4
    urgent_score_threshold: float = 4.0
    secondary_decay: float = 0.5
    trend_tolerance: float = 0.5
    max_chain_links: int = 3
    max_priority_interventions: int = 5
    impact_estimator: str = IMPACT_ESTIMATOR_PRESET

    def __post_init__(self):
        top_n = self._env('LIFE_SYSTEMS_TOP_N', default=None, cast=int)
        if top_n is not None and self.top_n == ScoringConfig.top_n:
            self.top_n = top_n
        tolerance = self._env('LIFE_SYSTEMS_TREND_TOLERANCE', default=None, cast=float)
        if tolerance is not None and self.trend_tolerance == ScoringConfig.trend_tolerance:
            self.trend_tolerance = tolerance
        if self.impact_estimator == ScoringConfig.impact_estimator:
            self.impact_estimator = self._env('LIFE_SYSTEMS_IMPACT_ESTIMATOR', default=self.impact_estimator)

    def validate(self, required: bool = True) -> None:
        if self.top_n < 1:
            raise ValueError('top_n must be >= 1')
        if not 0 <= self.high_impact_threshold <= 1:
            raise ValueError('high_impact_threshold must be between 0 and 1')
        if not 0 <= self.low_effort_threshold <= 1:
            raise ValueError('low_effort_threshold must be between 0 and 1')
        if not 0 <= self.secondary_decay <= 1:
            raise ValueError('secondary_decay must be between 0 and 1')
        if self.trend_tolerance < 0:
            raise ValueError('trend_tolerance must be >= 0')
        if self.max_chain_links < 1:
            raise ValueError('max_chain_links must be >= 1')
        valid_estimators = [IMPACT_ESTIMATOR_PRESET, IMPACT_ESTIMATOR_HEALTH_SENSITIVE]
        if self.impact_estimator not in valid_estimators:
            raise ValueError(f'impact_estimator must be one of {valid_estimators}')


@dataclass
class ReportConfig(BaseConfig):
    output_dir: str = 'scripts/output'
    indent: int = 2

    def __post_init__(self):
        self.output_dir = self._env('LIFE_SYSTEMS_OUTPUT_DIR', default=self.output_dir)

    def validate(self, required: bool = True) -> None:
        if self.indent < 0:
            raise ValueError('indent must be >= 0')


class AppConfig:
    """Central application configuration container.

    Access sub-configs as attributes (e.g., `AppConfig.scoring`).
    Use `AppConfig.from_env()` for a validated instance reflecting the
    current environment.
    """

    scoring: ScoringConfig = ScoringConfig()
    report: ReportConfig = ReportConfig()

    @staticmethod
    def validate_all(strict: bool = False) -> None:
        AppConfig.scoring.validate(required=strict)
        AppConfig.report.validate(required=strict)

    @staticmethod
    def check_availability() -> Dict[str, Dict[str, Any]]:
        """Return availability map for each config.

        For each named sub-config return a dict with keys:
        - available: bool
        - reason: Optional[str] explaining failure when available is False
        """
        results: Dict[str, Dict[str, Any]] = {}
        configs = {
            'scoring': ScoringConfig(),
            'report': ReportConfig(),
        }
        for name, cfg in configs.items():
            try:
                cfg.validate(required=True)
                results[name] = {'available': True, 'reason': None}
            except ValueError as e:
                results[name] = {'available': False, 'reason': str(e)}
        return results

    @staticmethod
    def from_env(strict: bool = False) -> 'AppConfig':
        config = AppConfig()
        config.scoring = ScoringConfig()
        config.report = ReportConfig()
        config.scoring.validate(required=strict)
        config.report.validate(required=strict)
        return config
