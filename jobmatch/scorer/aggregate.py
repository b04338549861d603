#!/usr/bin/env python3
"""
Weighted Aggregation - Reduce a MatchComponents vector to a 0-100 score.

    overall = round_half_up(100 * sum(w_i * c_i))

Skipped criteria get weight 0 and the remaining weights are renormalized so
they sum to 1 again.
"""

from typing import Dict, Tuple
import numpy as np

from jobmatch.config_loader import CRITERIA, CriterionWeights
from jobmatch.scorer.models import MatchComponents
from jobmatch.utils import clamp, round_half_up


def effective_weights(components: MatchComponents, weights: CriterionWeights) -> Dict[str, float]:
    """Weights actually applied to this pair, renormalized over evaluated criteria."""
    base = weights.as_dict()
    kept = {name: (0.0 if name in components.skipped else base[name]) for name in CRITERIA}
    total = sum(kept.values())
    if total <= 0:
        # Everything that carries weight was skipped; fall back to configured weights
        return base
    return {name: w / total for name, w in kept.items()}


def aggregate_with_weights(
    components: MatchComponents,
    weights: CriterionWeights
) -> Tuple[int, Dict[str, float]]:
    """
    Aggregate components into the overall score.

    Returns: (overall_score, effective_weights)
    """
    applied = effective_weights(components, weights)
    w = np.array([applied[name] for name in CRITERIA], dtype=np.float64)
    c = np.array([getattr(components, name) for name in CRITERIA], dtype=np.float64)
    weighted = float(np.dot(w, c))
    return int(clamp(round_half_up(100.0 * weighted), 0, 100)), applied


def aggregate(components: MatchComponents, weights: CriterionWeights) -> int:
    score, _ = aggregate_with_weights(components, weights)
    return score
