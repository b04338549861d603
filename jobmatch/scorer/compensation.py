#!/usr/bin/env python3
"""
Compensation Match - Salary range alignment.

Both ranges are normalized to a yearly figure first (hourly * hours_per_year,
weekly * 52, monthly * 12). Then, with F = salary_overlap_floor:

    overlapping       -> F + (1 - F) * min(1, overlap / profile_width)
                         (zero-width profile range inside the offer -> 1.0)
    offer above range -> 1.0
    offer below range -> F * max(0, 1 - gap / offer_max)

Missing ranges and currency mismatches are not compared (neutral, skipped).
"""

from typing import Dict, Any, Optional, Tuple
import logging

from jobmatch.config_loader import NeutralScores, ScoringConstants
from jobmatch.models import SalaryRange, Opportunity, Profile
from jobmatch.utils import clamp01, normalize_text

logger = logging.getLogger(__name__)

PERIODS_PER_YEAR = {
    'yearly': 1.0,
    'annual': 1.0,
    'annually': 1.0,
    'year': 1.0,
    'monthly': 12.0,
    'month': 12.0,
    'weekly': 52.0,
    'week': 52.0,
}

HOURLY_PERIODS = ('hourly', 'hour')


def annualize(salary: SalaryRange, constants: ScoringConstants) -> Optional[Tuple[float, float]]:
    """
    Normalize a salary range to yearly (low, high).

    A single missing bound collapses the range to a point; reversed bounds
    are swapped. Returns None for an unknown pay period.
    """
    period = normalize_text(salary.period) or 'yearly'
    if period in HOURLY_PERIODS:
        factor = constants.hours_per_year
    elif period in PERIODS_PER_YEAR:
        factor = PERIODS_PER_YEAR[period]
    else:
        logger.warning(f"Unknown salary period {salary.period!r}; skipping salary comparison")
        return None

    low = salary.min if salary.min is not None else salary.max
    high = salary.max if salary.max is not None else salary.min
    if low > high:
        low, high = high, low
    return low * factor, high * factor


def salary_alignment(offer_low: float, offer_high: float, wanted_low: float, wanted_high: float,
                     floor: float) -> Tuple[float, str]:
    """Score yearly ranges. Returns (score, alignment) where alignment is above/within/below."""
    if offer_low > wanted_high:
        return 1.0, 'above'

    if offer_high < wanted_low:
        gap = wanted_low - offer_high
        if offer_high <= 0:
            return 0.0, 'below'
        return clamp01(floor * max(0.0, 1.0 - gap / offer_high)), 'below'

    overlap = min(offer_high, wanted_high) - max(offer_low, wanted_low)
    width = wanted_high - wanted_low
    if width <= 0:
        return 1.0, 'within'
    return clamp01(floor + (1.0 - floor) * min(1.0, overlap / width)), 'within'


def calculate_compensation_match(
    opportunity: Opportunity,
    profile: Profile,
    constants: ScoringConstants,
    neutral: NeutralScores
) -> Tuple[float, Dict[str, Any]]:
    """
    Calculate the salary component.

    Returns: (score, details)
    """
    offer, wanted = opportunity.salary, profile.salary

    if offer is None or not offer.is_complete or wanted is None or not wanted.is_complete:
        return neutral.salary, {
            'skipped': True,
            'reason': 'Salary range missing on one side',
        }

    if normalize_text(offer.currency) != normalize_text(wanted.currency):
        return neutral.salary, {
            'skipped': True,
            'reason': f"Currency mismatch ({offer.currency} vs {wanted.currency})",
        }

    offer_yearly = annualize(offer, constants)
    wanted_yearly = annualize(wanted, constants)
    if offer_yearly is None or wanted_yearly is None:
        return neutral.salary, {
            'skipped': True,
            'reason': 'Unknown salary period',
        }

    score, alignment = salary_alignment(
        offer_yearly[0], offer_yearly[1],
        wanted_yearly[0], wanted_yearly[1],
        constants.salary_overlap_floor
    )

    details = {
        'currency': offer.currency.upper(),
        'offer_yearly': list(offer_yearly),
        'expected_yearly': list(wanted_yearly),
        'alignment': alignment,
    }
    logger.debug(f"Salary {score:.3f} ({alignment}; offer={offer_yearly}, expected={wanted_yearly})")
    return score, details
