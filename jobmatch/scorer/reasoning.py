#!/usr/bin/env python3
"""
Reasoning - Human-readable explanation and recommendation tags for a match.

Each evaluated criterion contributes one pre-authored sentence chosen by its
score band. Output order is the fixed criterion priority order, never score
magnitude, so identical inputs always produce identical text.
"""

from datetime import date
from typing import Dict, Any, List, Optional

from jobmatch.config_loader import CRITERIA, ReasoningThresholds
from jobmatch.models import Opportunity
from jobmatch.scorer.models import MatchComponents

STRONG = "strong"
MODERATE = "moderate"
CAUTION = "caution"

REASONING_TABLE: Dict[str, Dict[str, str]] = {
    'skills': {
        STRONG: "Strong skills match - candidate has most required skills",
        MODERATE: "Good skills overlap with some gaps that could be filled through training",
        CAUTION: "Limited skills match - significant upskilling may be required",
    },
    'experience': {
        STRONG: "Experience level aligns well with requirements",
        MODERATE: "Moderate experience match - some areas may need development",
        CAUTION: "Experience level below requirements - consider for growth potential",
    },
    'location': {
        STRONG: "Location is a great fit",
        MODERATE: "Location workable with some flexibility",
        CAUTION: "Location may require relocation or remote work",
    },
    'salary': {
        STRONG: "Salary expectations align well",
        MODERATE: "Salary expectations partially overlap",
        CAUTION: "Salary expectations differ significantly",
    },
    'preferences': {
        STRONG: "Job type and preferences match",
        MODERATE: "Job type and preferences partially match",
        CAUTION: "Job type or preferences differ from what the candidate wants",
    },
    'availability': {
        STRONG: "Available within the requested timeframe",
        MODERATE: "Availability is slightly later than requested",
        CAUTION: "Availability does not fit the requested timeframe",
    },
}


def score_band(score: float, thresholds: ReasoningThresholds) -> str:
    if score > thresholds.strong:
        return STRONG
    if score >= thresholds.moderate:
        return MODERATE
    return CAUTION


def generate_reasoning(components: MatchComponents, thresholds: ReasoningThresholds) -> List[str]:
    """One sentence per evaluated criterion, in priority order. Skipped criteria are silent."""
    reasoning = []
    for name in CRITERIA:
        if name in components.skipped:
            continue
        reasoning.append(REASONING_TABLE[name][score_band(getattr(components, name), thresholds)])
    return reasoning


def generate_tags(
    components: MatchComponents,
    details: Dict[str, Dict[str, Any]],
    opportunity: Opportunity,
    as_of: date,
    recently_posted_days: int = 7
) -> List[str]:
    """Short recommendation badges derived from the components and their details."""
    tags = []

    if components.skills >= 0.9:
        tags.append('Perfect Skills Match')
    elif components.skills >= 0.7:
        tags.append('Strong Skills Match')

    level_match: Optional[str] = details.get('experience', {}).get('level_match')
    if level_match == 'above':
        tags.append('Senior Opportunity')
    elif level_match == 'below':
        tags.append('Growth Opportunity')

    if details.get('location', {}).get('rule') in ('remote', 'hybrid'):
        tags.append('Remote Friendly')

    if details.get('salary', {}).get('alignment') == 'above':
        tags.append('High Compensation')

    if opportunity.posted_date is not None:
        age = (as_of - opportunity.posted_date).days
        if 0 <= age <= recently_posted_days:
            tags.append('Recently Posted')

    return tags
