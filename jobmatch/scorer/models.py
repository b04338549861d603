#!/usr/bin/env python3
"""
Scoring Models - Data structures for scoring results.
"""

from typing import List, Dict, Any, FrozenSet, Optional
from dataclasses import dataclass, field, asdict

from jobmatch.config_loader import CRITERIA


@dataclass(frozen=True)
class MatchComponents:
    """Per-criterion similarity scores, each in [0, 1].

    Criteria listed in `skipped` could not be evaluated from the supplied
    data; their value is the configured neutral default and they are left
    out of aggregation and reasoning.
    """
    skills: float
    experience: float
    location: float
    salary: float
    preferences: float
    availability: float
    skipped: FrozenSet[str] = frozenset()

    def as_dict(self) -> Dict[str, float]:
        return {name: getattr(self, name) for name in CRITERIA}

    def evaluated(self) -> Dict[str, float]:
        """Scores of the criteria that were actually evaluated, in priority order."""
        return {name: getattr(self, name) for name in CRITERIA if name not in self.skipped}


@dataclass
class MatchResult:
    """Complete scored match between one opportunity and one profile."""
    opportunity_id: str
    profile_id: str
    overall_score: int
    components: MatchComponents
    reasoning: List[str] = field(default_factory=list)
    confidence: Optional[float] = None
    tags: List[str] = field(default_factory=list)
    effective_weights: Dict[str, float] = field(default_factory=dict)
    details: Dict[str, Any] = field(default_factory=dict)

    @property
    def confidence_level(self) -> str:
        """Coarse label for UI badges: high / medium / low."""
        if self.confidence is None:
            return "low"
        if self.confidence >= 0.75:
            return "high"
        if self.confidence >= 0.5:
            return "medium"
        return "low"

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly representation (sets become sorted lists)."""
        data = asdict(self)
        data['components'] = self.components.as_dict()
        data['skipped'] = sorted(self.components.skipped)
        data['confidence_level'] = self.confidence_level
        return data
