#!/usr/bin/env python3
"""
Preferences Match - Employment type, industry and company size alignment.

The employment-type subfactor is always present. Industry and company size
are averaged in only when both the opportunity and the profile supply them.
"""

from typing import Dict, Any, List, Optional, Tuple
import logging

from jobmatch.config_loader import NeutralScores, ScoringConstants
from jobmatch.models import EmploymentType, Opportunity, Profile
from jobmatch.utils import contains_either_way, normalize_terms, normalize_text

logger = logging.getLogger(__name__)


def calculate_employment_type_match(
    opportunity: Opportunity,
    profile: Profile,
    constants: ScoringConstants,
    neutral: NeutralScores
) -> Tuple[float, Dict[str, Any]]:
    """
    Calculate employment type match.

    Returns: (score, details)
    """
    accepted = [t for t in (EmploymentType.parse(v) for v in profile.employment_types) if t is not None]
    job_type = EmploymentType.parse(opportunity.employment_type)

    details = {
        'job_type': job_type.value if job_type else opportunity.employment_type,
        'accepted_types': [t.value for t in accepted],
    }

    if not accepted:
        details['reason'] = 'No employment type preference'
        return 1.0, details

    if job_type is None:
        details['reason'] = 'Unknown employment type'
        return neutral.employment_type, details

    if job_type in accepted:
        return 1.0, details

    return constants.employment_type_mismatch, details


def calculate_industry_match(
    opportunity: Opportunity,
    profile: Profile,
    constants: ScoringConstants
) -> Optional[Tuple[float, Dict[str, Any]]]:
    """
    Calculate industry match score. None when either side is silent.

    Returns: (score, details) or None
    """
    job_industry = normalize_text(opportunity.industry)
    preferred = normalize_terms(profile.industries)
    if not job_industry or not preferred:
        return None

    details = {'job_industry': job_industry, 'preferred_industries': preferred}
    for industry in preferred:
        if contains_either_way(industry, job_industry):
            return 1.0, details
    return constants.industry_mismatch, details


def calculate_company_size_match(
    opportunity: Opportunity,
    profile: Profile,
    constants: ScoringConstants
) -> Optional[Tuple[float, Dict[str, Any]]]:
    """
    Calculate company size match score. None when either side is silent.

    Returns: (score, details) or None
    """
    job_size = normalize_text(opportunity.company_size)
    preferred = normalize_terms(profile.company_sizes)
    if not job_size or not preferred:
        return None

    details = {'job_company_size': job_size, 'preferred_sizes': preferred}
    if job_size in preferred:
        return 1.0, details
    return constants.company_size_mismatch, details


def calculate_preferences_match(
    opportunity: Opportunity,
    profile: Profile,
    constants: ScoringConstants,
    neutral: NeutralScores
) -> Tuple[float, Dict[str, Any]]:
    """
    Calculate the preferences component as the mean of the available subfactors.

    Returns: (score, details)
    """
    type_score, type_details = calculate_employment_type_match(opportunity, profile, constants, neutral)
    scores: List[float] = [type_score]
    details: Dict[str, Any] = {'employment_type': {'score': type_score, **type_details}}

    for name, result in (
        ('industry', calculate_industry_match(opportunity, profile, constants)),
        ('company_size', calculate_company_size_match(opportunity, profile, constants)),
    ):
        if result is None:
            continue
        sub_score, sub_details = result
        scores.append(sub_score)
        details[name] = {'score': sub_score, **sub_details}

    score = sum(scores) / len(scores)
    logger.debug(f"Preferences {score:.2f} from {len(scores)} subfactor(s)")
    return score, details
