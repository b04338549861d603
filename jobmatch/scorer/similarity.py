#!/usr/bin/env python3
"""
Similarity Calculations - Per-criterion similarity for one opportunity/profile pair.

Runs every criterion calculator and assembles a MatchComponents vector plus
the per-criterion details payload. Pure: no I/O, no shared state.
"""

from datetime import date
from typing import Dict, Any, Tuple
import logging

from jobmatch.config_loader import MatchingConfig
from jobmatch.models import Opportunity, Profile
from jobmatch.scorer.models import MatchComponents
from jobmatch.scorer.skills import calculate_skills_match
from jobmatch.scorer.experience import calculate_experience_match, infer_seniority
from jobmatch.scorer.location import calculate_location_match
from jobmatch.scorer.compensation import calculate_compensation_match
from jobmatch.scorer.preferences import calculate_preferences_match
from jobmatch.scorer.availability import calculate_availability_match

logger = logging.getLogger(__name__)


def compute_components(
    opportunity: Opportunity,
    profile: Profile,
    config: MatchingConfig,
    as_of: date
) -> Tuple[MatchComponents, Dict[str, Dict[str, Any]]]:
    """
    Compute all criterion scores for one pair.

    Returns:
        Tuple of (components, details) where details maps criterion name to
        the calculator's explanation dict. A criterion whose details carry
        'skipped': True is recorded in components.skipped.
    """
    constants, neutral = config.constants, config.neutral

    seniority, seniority_source = infer_seniority(opportunity)

    results = {
        'skills': calculate_skills_match(opportunity, profile, constants, seniority),
        'experience': calculate_experience_match(
            opportunity, profile, constants, neutral, as_of,
            seniority=seniority, seniority_source=seniority_source
        ),
        'location': calculate_location_match(opportunity, profile, constants, neutral),
        'salary': calculate_compensation_match(opportunity, profile, constants, neutral),
        'preferences': calculate_preferences_match(opportunity, profile, constants, neutral),
        'availability': calculate_availability_match(opportunity, profile, constants, neutral, as_of),
    }

    scores = {name: float(score) for name, (score, _) in results.items()}
    details = {name: detail for name, (_, detail) in results.items()}
    skipped = frozenset(name for name, detail in details.items() if detail.get('skipped'))

    components = MatchComponents(skipped=skipped, **scores)
    logger.debug(
        f"Components {opportunity.id}/{profile.id}: "
        + ", ".join(f"{k}={v:.2f}" for k, v in scores.items())
        + (f" (skipped: {', '.join(sorted(skipped))})" if skipped else "")
    )
    return components, details
