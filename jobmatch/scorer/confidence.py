#!/usr/bin/env python3
"""
Confidence - How much the overall score can be trusted.

    confidence = 0.6 * completeness + 0.4 * consistency

completeness is the share of profile signals present (summary, experience,
skills, salary, location); consistency is 1 - variance of the evaluated
component scores, floored at 0.
"""

from datetime import date
from typing import Dict, Any, Tuple
import numpy as np

from jobmatch.models import Profile
from jobmatch.scorer.models import MatchComponents

COMPLETENESS_WEIGHT = 0.6
CONSISTENCY_WEIGHT = 0.4


def profile_completeness(profile: Profile, as_of: date) -> Tuple[float, Dict[str, bool]]:
    loc = profile.location
    signals = {
        'summary': bool(profile.summary and profile.summary.strip()),
        'experience': profile.total_years(as_of) is not None,
        'skills': len(profile.skills) > 0,
        'salary': profile.salary is not None and profile.salary.is_complete,
        'location': bool(loc.city or loc.region or loc.country or loc.remote_preference),
    }
    return sum(signals.values()) / len(signals), signals


def calculate_confidence(
    profile: Profile,
    components: MatchComponents,
    as_of: date
) -> Tuple[float, Dict[str, Any]]:
    """
    Returns: (confidence in [0, 1], details)
    """
    completeness, signals = profile_completeness(profile, as_of)

    scores = np.array(list(components.evaluated().values()), dtype=np.float64)
    variance = float(np.var(scores)) if scores.size else 0.0
    consistency = max(0.0, 1.0 - variance)

    confidence = COMPLETENESS_WEIGHT * completeness + CONSISTENCY_WEIGHT * consistency
    return round(confidence, 4), {
        'completeness': completeness,
        'consistency': consistency,
        'signals': signals,
    }
