#!/usr/bin/env python3
"""
Scoring Module - Rule-based opportunity/profile scoring.

Public API:
- MatchingEngine: Main scoring orchestrator
- MatchResult / MatchComponents: Result dataclasses

Focused, single-responsibility modules:

- models.py: Data structures (MatchComponents, MatchResult)
- skills.py / experience.py / location.py / compensation.py /
  preferences.py / availability.py: Per-criterion similarity
- similarity.py: Runs all criteria for one pair
- aggregate.py: Weighted 0-100 aggregation
- reasoning.py: Explanation sentences and recommendation tags
- confidence.py: Data completeness / consistency confidence
- service.py: MatchingEngine orchestrator and batch helpers
"""

from jobmatch.scorer.models import MatchComponents, MatchResult
from jobmatch.scorer.service import (
    MatchingEngine,
    apply_result_policy,
    filter_by_min_score,
    match_all,
    score_match,
)

__all__ = [
    'MatchingEngine',
    'MatchComponents',
    'MatchResult',
    'apply_result_policy',
    'filter_by_min_score',
    'match_all',
    'score_match',
]
