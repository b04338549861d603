#!/usr/bin/env python3
"""
Availability Match - Candidate start date against the requested urgency.

d = days from the reference date until the candidate is available
(a date in the past counts as 0). Scores decay linearly past the threshold:

    immediate       d <= 7  -> 1.0, else 1 - (d - 7) / 14
    within-2-weeks  d <= 14 -> 1.0, else 1 - (d - 14) / 14
    within-month    d <= 30 -> 1.0, else 1 - (d - 30) / 30
    within-quarter  d <= 90 -> 1.0, else 1 - (d - 90) / 90
    not-looking     d > 90  -> 1.0, else not_looking_mismatch
"""

from datetime import date
from typing import Dict, Any, Tuple
import logging

from jobmatch.config_loader import NeutralScores, ScoringConstants
from jobmatch.models import AvailabilityBand, Opportunity, Profile
from jobmatch.utils import clamp01

logger = logging.getLogger(__name__)

# band -> (threshold days, decay window days)
DECAY_WINDOWS = {
    AvailabilityBand.IMMEDIATE: (7, 14),
    AvailabilityBand.WITHIN_2_WEEKS: (14, 14),
    AvailabilityBand.WITHIN_MONTH: (30, 30),
    AvailabilityBand.WITHIN_QUARTER: (90, 90),
}


def days_until_available(available_on: date, as_of: date) -> int:
    return max(0, (available_on - as_of).days)


def calculate_availability_match(
    opportunity: Opportunity,
    profile: Profile,
    constants: ScoringConstants,
    neutral: NeutralScores,
    as_of: date
) -> Tuple[float, Dict[str, Any]]:
    """
    Calculate the availability component.

    Returns: (score, details)
    """
    requested = AvailabilityBand.parse(opportunity.availability_requirement)
    if requested is None:
        return 1.0, {
            'skipped': True,
            'reason': 'No availability requirement',
        }

    if profile.availability_date is None:
        return neutral.availability, {
            'skipped': True,
            'reason': 'Profile has no availability date',
            'requested': requested.value,
        }

    days = days_until_available(profile.availability_date, as_of)
    band = AvailabilityBand.from_days(days)

    if requested is AvailabilityBand.NOT_LOOKING:
        score = 1.0 if days > 90 else constants.not_looking_mismatch
    else:
        threshold, window = DECAY_WINDOWS[requested]
        score = 1.0 if days <= threshold else clamp01(1.0 - (days - threshold) / window)

    details = {
        'requested': requested.value,
        'days_until_available': days,
        'band': band.value,
        'as_of': as_of.isoformat(),
    }
    logger.debug(f"Availability {score:.2f} ({days} days, requested {requested.value})")
    return score, details
