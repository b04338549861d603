#!/usr/bin/env python3
"""
Experience Match - Seniority band inference and years-in-band scoring.

The opportunity's band comes from its explicit seniority label when that
parses, otherwise from keywords in title/description/requirements:

    entry, junior               -> entry      [0, 2]
    senior, lead                -> senior     [5, 10]
    executive, director, vp     -> executive  [10, 20]
    (any other text)            -> mid        [2, 5]

Scoring against the profile's total years:
    in band          -> 1.0
    below the floor  -> max(underqualified_floor, 1 - deficit / floor)
    above ceiling    -> max(overqualified_floor, 1 - (excess / ceiling) * overqualified_penalty)

Relevant work history then adds a capped bonus, clamped to 1.0:
    bonus = min(relevant_years / total_years * cap, cap)

A history entry is relevant when its title shares more than
relevant_title_overlap of its words with the opportunity title (Jaccard),
or when one of its skills matches a required skill.
"""

from datetime import date
from typing import Dict, Any, List, Optional, Tuple
import logging
import re

from jobmatch.config_loader import NeutralScores, ScoringConstants
from jobmatch.models import Opportunity, Profile, SeniorityLevel, WorkExperience
from jobmatch.utils import clamp01, contains_either_way, normalize_terms, normalize_text

logger = logging.getLogger(__name__)

# Checked in order; the first band with a keyword hit wins.
SENIORITY_KEYWORDS = [
    (SeniorityLevel.ENTRY, re.compile(r'\b(entry|junior|jr|graduate|0-2 years)\b')),
    (SeniorityLevel.SENIOR, re.compile(r'\b(senior|sr|lead|principal|staff)\b|\b5\+ years')),
    (SeniorityLevel.EXECUTIVE, re.compile(r'\b(executive|director|vp|vice president|head of)\b|\b10\+ years')),
]

_WORD = re.compile(r'[a-z0-9+#.]+')


def infer_seniority(opportunity: Opportunity) -> Tuple[Optional[SeniorityLevel], str]:
    """
    Determine the opportunity's seniority band.

    Returns: (level or None, source) where source is 'explicit', 'inferred',
    'default' (text present but no keyword), or 'unknown' (nothing to go on).
    """
    explicit = SeniorityLevel.parse(opportunity.seniority)
    if explicit is not None:
        return explicit, 'explicit'

    text = opportunity.seniority_text.lower()
    if not text.strip():
        return None, 'unknown'

    for level, pattern in SENIORITY_KEYWORDS:
        if pattern.search(text):
            return level, 'inferred'

    return SeniorityLevel.MID, 'default'


def band_score(years: float, floor: float, ceiling: float, constants: ScoringConstants) -> float:
    """Score how well `years` fits the [floor, ceiling] band."""
    if floor <= years <= ceiling:
        return 1.0
    if years < floor:
        deficit = floor - years
        return clamp01(max(constants.underqualified_floor, 1.0 - deficit / floor))
    excess_ratio = (years - ceiling) / ceiling if ceiling > 0 else 1.0
    return clamp01(max(constants.overqualified_floor, 1.0 - excess_ratio * constants.overqualified_penalty))


def title_overlap(a: str, b: str) -> float:
    """Jaccard similarity of the two titles' word sets."""
    words_a = set(_WORD.findall(normalize_text(a)))
    words_b = set(_WORD.findall(normalize_text(b)))
    if not words_a or not words_b:
        return 0.0
    return len(words_a & words_b) / len(words_a | words_b)


def find_relevant_experience(
    opportunity: Opportunity,
    profile: Profile,
    min_title_overlap: float = 0.5
) -> List[WorkExperience]:
    """Work-history entries whose title or skills line up with the opportunity."""
    required = normalize_terms(opportunity.required_skills)
    relevant = []

    for entry in profile.work_history:
        if title_overlap(entry.title, opportunity.title) > min_title_overlap:
            relevant.append(entry)
            continue
        skills = normalize_terms(entry.skills)
        if any(contains_either_way(skill, req) for skill in skills for req in required):
            relevant.append(entry)

    return relevant


def calculate_experience_match(
    opportunity: Opportunity,
    profile: Profile,
    constants: ScoringConstants,
    neutral: NeutralScores,
    as_of: date,
    seniority: Optional[SeniorityLevel] = None,
    seniority_source: Optional[str] = None
) -> Tuple[float, Dict[str, Any]]:
    """
    Calculate the experience component.

    `seniority`/`seniority_source` may be passed in when the caller already
    ran infer_seniority (the skills criterion needs it too).

    Returns: (score, details)
    """
    if seniority_source is None:
        seniority, seniority_source = infer_seniority(opportunity)

    if seniority is None:
        return neutral.experience, {
            'skipped': True,
            'reason': 'Could not determine seniority band',
        }

    years = profile.total_years(as_of)
    if years is None:
        return neutral.experience, {
            'skipped': True,
            'reason': 'Profile has no experience data',
            'level': seniority.value,
            'level_source': seniority_source,
        }

    floor, ceiling = seniority.years_band
    base = band_score(years, floor, ceiling, constants)

    relevant = find_relevant_experience(opportunity, profile, constants.relevant_title_overlap)
    relevant_years = profile.years_from_history(as_of, relevant) if relevant else None
    relevant_bonus = 0.0
    if relevant_years and years > 0:
        cap = constants.relevant_experience_bonus
        relevant_bonus = min(relevant_years / years * cap, cap)
    score = clamp01(base + relevant_bonus)

    if years < floor:
        level_match = 'below'
    elif years > ceiling:
        level_match = 'above'
    else:
        level_match = 'exact'

    details = {
        'level': seniority.value,
        'level_source': seniority_source,
        'band': [floor, ceiling],
        'user_years': years,
        'level_match': level_match,
        'base': base,
        'relevant_years': relevant_years or 0.0,
        'relevant_bonus': relevant_bonus,
    }
    logger.debug(f"Experience {score:.2f} ({years} years vs {seniority.value} band {floor}-{ceiling}, "
                 f"relevant={relevant_years or 0.0})")
    return score, details
