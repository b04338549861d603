#!/usr/bin/env python3
"""
Location Match - Remote/onsite compatibility and geographic proximity.

Rules are evaluated in order, first hit wins:
    1. remote opportunity, profile accepts remote          -> 1.0
    2. hybrid opportunity, profile prefers hybrid/flexible -> 1.0
    3. profile wants remote only, opportunity neither
       remote nor hybrid                                   -> remote_required_mismatch
    4. profile city in / containing the posted location    -> 1.0
       (region-only posting in the profile's region        -> 1.0)
    5. same region, different city                         -> same_region
    6. otherwise                                           -> location_mismatch,
       or willing_to_relocate if the profile would move

A hybrid posting still needs some office presence, so remote-only and
onsite profiles are scored on geography for it.
"""

from typing import Dict, Any, Tuple
import logging
import re

from jobmatch.config_loader import NeutralScores, ScoringConstants
from jobmatch.models import Opportunity, Profile, RemotePreference
from jobmatch.utils import contains_either_way, normalize_location, normalize_text

logger = logging.getLogger(__name__)


def _mentions(term: str, text: str) -> bool:
    """Whole-word containment, so 'ca' does not match 'chicago'."""
    if not term or not text:
        return False
    return re.search(r'\b' + re.escape(term) + r'\b', text) is not None


def calculate_location_match(
    opportunity: Opportunity,
    profile: Profile,
    constants: ScoringConstants,
    neutral: NeutralScores
) -> Tuple[float, Dict[str, Any]]:
    """
    Calculate the location component.

    Returns: (score, details)
    """
    job_location = normalize_location(opportunity.location.model_dump(include={'text', 'city', 'region', 'country'}))
    preference = RemotePreference.parse(profile.location.remote_preference)
    # No declared preference is treated as open to remote work
    accepts_remote = preference is None or preference.accepts_remote
    is_hybrid = opportunity.location.hybrid and not opportunity.is_remote
    profile_city = normalize_text(profile.location.city)
    profile_region = normalize_text(profile.location.region)

    details = {
        'job_location': job_location,
        'job_is_remote': opportunity.is_remote,
        'job_is_hybrid': is_hybrid,
        'remote_preference': preference.value if preference else None,
        'profile_city': profile_city or None,
        'profile_region': profile_region or None,
        'willing_to_relocate': profile.location.willing_to_relocate,
    }

    if opportunity.is_remote and accepts_remote:
        details['rule'] = 'remote'
        return 1.0, details

    if is_hybrid and preference in (None, RemotePreference.HYBRID, RemotePreference.FLEXIBLE):
        details['rule'] = 'hybrid'
        return 1.0, details

    if preference is RemotePreference.REMOTE_ONLY and not is_hybrid:
        details['rule'] = 'remote_required'
        return constants.remote_required_mismatch, details

    if not opportunity.is_remote and (not job_location or not (profile_city or profile_region)):
        details.update({'skipped': True, 'reason': 'No usable location data'})
        return neutral.location, details

    if contains_either_way(profile_city, job_location):
        details['rule'] = 'same_city'
        return 1.0, details

    if _mentions(profile_region, job_location):
        region_only = not opportunity.location.city and not opportunity.location.text
        details['rule'] = 'region' if region_only else 'same_region'
        return (1.0 if region_only else constants.same_region), details

    if profile.location.willing_to_relocate:
        details['rule'] = 'relocate'
        return constants.willing_to_relocate, details

    details['rule'] = 'mismatch'
    return constants.location_mismatch, details
