import yaml
import os
import logging
from typing import Optional, Dict, Any, Literal
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from jobmatch.exceptions import ConfigurationError, describe_validation_errors

logger = logging.getLogger(__name__)

CRITERIA = ("skills", "experience", "location", "salary", "preferences", "availability")

WEIGHT_SUM_TOLERANCE = 1e-6


class CriterionWeights(BaseModel):
    """
    Weights for each criterion in the overall score.

    overall_score = round(100 * sum(weight_i * component_i))

    Weights must be non-negative and sum to 1. Unknown criterion keys are
    rejected so a typo cannot silently drop a criterion.
    """
    model_config = ConfigDict(extra='forbid', frozen=True)

    skills: float = Field(default=0.30, ge=0)
    experience: float = Field(default=0.25, ge=0)
    location: float = Field(default=0.15, ge=0)
    salary: float = Field(default=0.15, ge=0)
    preferences: float = Field(default=0.10, ge=0)
    availability: float = Field(default=0.05, ge=0)

    @model_validator(mode='after')
    def check_sum(self) -> 'CriterionWeights':
        total = sum(getattr(self, name) for name in CRITERIA)
        if abs(total - 1.0) > WEIGHT_SUM_TOLERANCE:
            raise ValueError(f"criterion weights must sum to 1.0, got {total:.6f}")
        return self

    def as_dict(self) -> Dict[str, float]:
        return {name: float(getattr(self, name)) for name in CRITERIA}


class NeutralScores(BaseModel):
    """Scores used when a criterion cannot be evaluated from the supplied data."""
    model_config = ConfigDict(extra='forbid', frozen=True)

    experience: float = Field(default=0.7, ge=0, le=1)
    location: float = Field(default=0.7, ge=0, le=1)
    salary: float = Field(default=0.7, ge=0, le=1)
    employment_type: float = Field(default=0.7, ge=0, le=1)
    availability: float = Field(default=1.0, ge=0, le=1)


class ScoringConstants(BaseModel):
    """
    Tunable constants of the similarity rules.

    Defaults are the canonical values; see DESIGN.md for how each was chosen.
    """
    model_config = ConfigDict(extra='forbid', frozen=True)

    # Skills
    skill_level_penalty_per_level: float = Field(default=0.05, ge=0, le=1)
    skill_level_penalty_cap: float = Field(default=0.30, ge=0, le=1)
    preferred_skill_bonus: float = Field(default=0.05, ge=0, le=1)
    preferred_skill_bonus_cap: float = Field(default=0.20, ge=0, le=1)

    # Experience
    underqualified_floor: float = Field(default=0.3, ge=0, le=1)
    overqualified_floor: float = Field(default=0.8, ge=0, le=1)
    overqualified_penalty: float = Field(default=0.2, ge=0)
    relevant_experience_bonus: float = Field(default=0.2, ge=0, le=1)
    relevant_title_overlap: float = Field(default=0.5, ge=0, le=1)

    # Location
    remote_required_mismatch: float = Field(default=0.2, ge=0, le=1)
    same_region: float = Field(default=0.7, ge=0, le=1)
    willing_to_relocate: float = Field(default=0.7, ge=0, le=1)
    location_mismatch: float = Field(default=0.3, ge=0, le=1)

    # Salary
    salary_overlap_floor: float = Field(default=0.5, ge=0, le=1)
    hours_per_year: float = Field(default=2080.0, gt=0)

    # Preferences
    employment_type_mismatch: float = Field(default=0.3, ge=0, le=1)
    industry_mismatch: float = Field(default=0.3, ge=0, le=1)
    company_size_mismatch: float = Field(default=0.5, ge=0, le=1)

    # Availability
    not_looking_mismatch: float = Field(default=0.3, ge=0, le=1)

    # Tags
    recently_posted_days: int = Field(default=7, ge=0)


class ReasoningThresholds(BaseModel):
    """Score bands for reasoning sentences: > strong, [moderate, strong], < moderate."""
    model_config = ConfigDict(extra='forbid', frozen=True)

    strong: float = Field(default=0.8, ge=0, le=1)
    moderate: float = Field(default=0.5, ge=0, le=1)

    @model_validator(mode='after')
    def check_order(self) -> 'ReasoningThresholds':
        if self.moderate > self.strong:
            raise ValueError("reasoning.moderate must not exceed reasoning.strong")
        return self


class ResultPolicy(BaseModel):
    """Post-scoring result filtering and truncation policy.

    Applied after batch scoring to filter and truncate results.
    """
    model_config = ConfigDict(extra='forbid')

    min_score: int = Field(default=60, ge=0, le=100)  # inclusive threshold
    top_k: Optional[int] = Field(default=None, ge=1)  # None = keep everything


class MatchingConfig(BaseModel):
    """
    Configuration for the MatchingEngine.

    Validated once when the engine is constructed and read-only afterwards.
    """
    model_config = ConfigDict(extra='forbid', frozen=True)

    weights: CriterionWeights = Field(default_factory=CriterionWeights)
    neutral: NeutralScores = Field(default_factory=NeutralScores)
    constants: ScoringConstants = Field(default_factory=ScoringConstants)
    reasoning: ReasoningThresholds = Field(default_factory=ReasoningThresholds)
    result_policy: ResultPolicy = Field(default_factory=ResultPolicy)

    # Thread pool size for batch scoring; None or 1 = sequential
    max_workers: Optional[int] = Field(default=None, ge=1)


class LoggingConfig(BaseModel):
    model_config = ConfigDict(extra='forbid')

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: str = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class AppConfig(BaseModel):
    model_config = ConfigDict(extra='forbid')

    matching: MatchingConfig = Field(default_factory=MatchingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def build_weights(weights: Any) -> CriterionWeights:
    """Validate caller-supplied weights (mapping or CriterionWeights)."""
    if isinstance(weights, CriterionWeights):
        return weights
    if not isinstance(weights, dict):
        raise ConfigurationError(f"weights must be a mapping of criterion -> float, got {type(weights).__name__}")
    try:
        return CriterionWeights(**weights)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid weights: {describe_validation_errors(e.errors())}") from e


def build_matching_config(data: Optional[Dict[str, Any]] = None) -> MatchingConfig:
    """Validate a raw `matching:` mapping into a MatchingConfig."""
    try:
        return MatchingConfig(**(data or {}))
    except ValidationError as e:
        raise ConfigurationError(f"Invalid matching config: {describe_validation_errors(e.errors())}") from e


def _apply_env_overrides(data: Dict[str, Any]) -> Dict[str, Any]:
    # Allow env var override for the result policy threshold
    env_min_score = os.environ.get("JOBMATCH_MIN_SCORE")
    if env_min_score:
        data.setdefault('matching', {}).setdefault('result_policy', {})['min_score'] = env_min_score

    env_top_k = os.environ.get("JOBMATCH_TOP_K")
    if env_top_k:
        data.setdefault('matching', {}).setdefault('result_policy', {})['top_k'] = env_top_k

    # Allow env var override for log level
    env_log_level = os.environ.get("JOBMATCH_LOG_LEVEL")
    if env_log_level:
        data.setdefault('logging', {})['level'] = env_log_level.upper()

    return data


def load_config(config_path: Optional[str] = "config.yaml") -> AppConfig:
    """
    Load application config from YAML.

    When config_path is None only defaults and environment overrides apply.
    If the file is not found at the given path, the repository-root
    config.yaml next to this package is tried before giving up.
    """
    data: Dict[str, Any] = {}

    if config_path is not None:
        if not os.path.exists(config_path):
            base_dir = os.path.dirname(os.path.abspath(__file__))
            fallback = os.path.join(base_dir, "..", os.path.basename(config_path))
            if not os.path.exists(fallback):
                raise ConfigurationError(f"Config file not found: {config_path}")
            config_path = fallback

        with open(config_path, "r") as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Config file {config_path} is not valid YAML: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"Config file {config_path} must contain a mapping at the top level")

    data = _apply_env_overrides(data)

    try:
        config = AppConfig(**data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid config: {describe_validation_errors(e.errors())}") from e

    logger.debug(f"Loaded config (weights={config.matching.weights.as_dict()})")
    return config
