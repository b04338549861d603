#!/usr/bin/env python3
"""
Skills Match - Required/preferred skill coverage.

A required skill counts as matched when any possessed skill is equal to it,
a prefix of it, or a substring of it in either direction (case-insensitive,
whitespace-collapsed).

Formula (ratio of required):
    base = |matched required| / |required|
    score = clamp01(base - level_penalty + preferred_bonus)

- level_penalty: per matched required skill whose declared proficiency is
  below the level expected for the opportunity's seniority, capped.
- preferred_bonus: per matched preferred skill, capped.
- Empty required set: score = 1.0, no adjustments.
"""

from typing import Dict, Any, List, Optional, Tuple
import logging

from jobmatch.config_loader import ScoringConstants
from jobmatch.models import Opportunity, Profile, ProfileSkill, SeniorityLevel
from jobmatch.utils import clamp01, contains_either_way, normalize_terms, normalize_text

logger = logging.getLogger(__name__)


def find_matching_skill(required: str, possessed: List[ProfileSkill]) -> Optional[ProfileSkill]:
    """
    Return the possessed skill that satisfies `required`, preferring an exact
    match over a substring match. `required` must already be normalized.
    """
    fuzzy = None
    for skill in possessed:
        name = normalize_text(skill.name)
        if not name:
            continue
        if name == required:
            return skill
        if fuzzy is None and contains_either_way(name, required):
            fuzzy = skill
    return fuzzy


def _level_shortfall(skill: ProfileSkill, required_level: Optional[int]) -> int:
    if required_level is None or skill.level is None:
        return 0

    return max(0, required_level - skill.level)


def calculate_skills_match(
    opportunity: Opportunity,
    profile: Profile,
    constants: ScoringConstants,
    seniority: Optional[SeniorityLevel] = None
) -> Tuple[float, Dict[str, Any]]:
    """
    Calculate the skills component.

    Args:
        opportunity: Job posting with required/preferred skills
        profile: Profile with possessed skills
        constants: Tunable penalty/bonus constants
        seniority: Seniority band of the opportunity (drives expected proficiency)

    Returns: (score, details)
    """
    required = normalize_terms(opportunity.required_skills)
    preferred = [s for s in normalize_terms(opportunity.preferred_skills) if s not in required]

    if not required:
        return 1.0, {
            'reason': 'No required skills',
            'total_required': 0,
            'matched_skills': [],
            'missing_skills': [],
        }

    required_level = seniority.required_skill_level if seniority else None

    matched: List[str] = []
    missing: List[str] = []
    shortfall_levels = 0

    for skill in required:
        hit = find_matching_skill(skill, profile.skills)
        if hit is None:
            missing.append(skill)
            continue
        matched.append(skill)
        shortfall_levels += _level_shortfall(hit, required_level)

    matched_preferred = [s for s in preferred if find_matching_skill(s, profile.skills) is not None]

    base = len(matched) / len(required)
    level_penalty = min(
        shortfall_levels * constants.skill_level_penalty_per_level,
        constants.skill_level_penalty_cap
    )
    preferred_bonus = min(
        len(matched_preferred) * constants.preferred_skill_bonus,
        constants.preferred_skill_bonus_cap
    )
    score = clamp01(base - level_penalty + preferred_bonus)

    details = {
        'total_required': len(required),
        'total_matched': len(matched),
        'matched_skills': matched,
        'missing_skills': missing,
        'matched_preferred': matched_preferred,
        'base': base,
        'level_penalty': level_penalty,
        'preferred_bonus': preferred_bonus,
    }

    logger.debug(f"Skills {score:.2f} ({len(matched)}/{len(required)} required, "
                 f"penalty={level_penalty:.2f}, bonus={preferred_bonus:.2f})")
    return score, details
