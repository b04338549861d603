"""
JobMatch - deterministic job/candidate matching and scoring.

    from jobmatch import score_match, match_all, filter_by_min_score

    result = score_match(opportunity, profile)
    ranked = filter_by_min_score(match_all(opportunities, profile), threshold=60)
"""

from jobmatch.config_loader import CriterionWeights, MatchingConfig, ResultPolicy, load_config
from jobmatch.exceptions import ConfigurationError, InvalidInputError, MatchingError
from jobmatch.models import Opportunity, Profile
from jobmatch.scorer import (
    MatchComponents,
    MatchingEngine,
    MatchResult,
    apply_result_policy,
    filter_by_min_score,
    match_all,
    score_match,
)

__version__ = "0.1.0"

__all__ = [
    'ConfigurationError',
    'CriterionWeights',
    'InvalidInputError',
    'MatchComponents',
    'MatchingConfig',
    'MatchingEngine',
    'MatchingError',
    'MatchResult',
    'Opportunity',
    'Profile',
    'ResultPolicy',
    'apply_result_policy',
    'filter_by_min_score',
    'load_config',
    'match_all',
    'score_match',
]
