#!/usr/bin/env python3
"""
Matching Service - Score opportunity/profile pairs and rank batches.

MatchingEngine is constructed once with a validated MatchingConfig and is
read-only afterwards, so one instance can be shared across threads.

Pipeline per pair:
    similarity (per-criterion components) -> aggregate (0-100 score)
    -> reasoning + tags -> confidence

Batch scoring sorts by overall_score (highest first, ties keep input order).
Post-scoring ResultPolicy can be applied to filter and truncate results.
"""

from concurrent.futures import ThreadPoolExecutor
from datetime import date, datetime
from typing import List, Optional, Any, Dict, Iterable, Type, TypeVar, Union
import logging

from pydantic import BaseModel, ValidationError

from jobmatch.config_loader import (
    CriterionWeights,
    MatchingConfig,
    ResultPolicy,
    build_matching_config,
    build_weights,
)
from jobmatch.exceptions import ConfigurationError, InvalidInputError, describe_validation_errors
from jobmatch.models import Opportunity, Profile
from jobmatch.scorer.aggregate import aggregate_with_weights
from jobmatch.scorer.confidence import calculate_confidence
from jobmatch.scorer.models import MatchResult
from jobmatch.scorer.reasoning import generate_reasoning, generate_tags
from jobmatch.scorer.similarity import compute_components

logger = logging.getLogger(__name__)

RecordT = TypeVar('RecordT', bound=BaseModel)

WeightsArg = Optional[Union[CriterionWeights, Dict[str, float]]]


def coerce_record(record: Any, model: Type[RecordT], kind: str) -> RecordT:
    """Accept a model instance or a plain mapping; anything else is invalid input."""
    if isinstance(record, model):
        return record
    if isinstance(record, dict):
        try:
            return model.model_validate(record)
        except ValidationError as e:
            errors = e.errors()
            raise InvalidInputError(
                f"Invalid {kind}: {describe_validation_errors(errors)}",
                record=kind,
                errors=errors
            ) from e
    raise InvalidInputError(
        f"{kind} must be a {model.__name__} or a mapping, got {type(record).__name__}",
        record=kind
    )


def _resolve_as_of(as_of: Optional[date]) -> date:
    if as_of is None:
        return date.today()
    if isinstance(as_of, datetime):
        return as_of.date()
    return as_of


def filter_by_min_score(results: Iterable[MatchResult], threshold: int = 60) -> List[MatchResult]:
    """Keep results scoring at least `threshold` (inclusive), preserving order."""
    return [r for r in results if r.overall_score >= threshold]


def apply_result_policy(
    results: List[MatchResult],
    policy: Optional[ResultPolicy]
) -> List[MatchResult]:
    """Apply ResultPolicy to filter and truncate results.

    Args:
        results: List of scored matches (already sorted by overall_score)
        policy: ResultPolicy to apply, or None for no filtering

    Returns:
        Filtered and truncated results
    """
    if policy is None:
        return results

    filtered = filter_by_min_score(results, policy.min_score)

    if policy.top_k is not None:
        filtered = filtered[:policy.top_k]

    return filtered


class MatchingEngine:
    """
    Stateless scorer for opportunity/profile pairs.

    Weights and tunables are validated here, once; a bad configuration
    raises ConfigurationError before any pair is scored.
    """

    def __init__(
        self,
        config: Optional[Union[MatchingConfig, Dict[str, Any]]] = None,
        weights: WeightsArg = None
    ):
        if config is None:
            config = MatchingConfig()
        elif isinstance(config, dict):
            config = build_matching_config(config)
        elif not isinstance(config, MatchingConfig):
            raise ConfigurationError(f"config must be a MatchingConfig or mapping, got {type(config).__name__}")

        if weights is not None:
            config = config.model_copy(update={'weights': build_weights(weights)})

        self.config = config

    def _weights_for(self, weights: WeightsArg) -> CriterionWeights:
        if weights is None:
            return self.config.weights
        return build_weights(weights)

    def _score(
        self,
        opportunity: Opportunity,
        profile: Profile,
        weights: CriterionWeights,
        as_of: date
    ) -> MatchResult:
        components, details = compute_components(opportunity, profile, self.config, as_of)
        overall_score, applied_weights = aggregate_with_weights(components, weights)

        reasoning = generate_reasoning(components, self.config.reasoning)
        tags = generate_tags(
            components, details, opportunity, as_of,
            recently_posted_days=self.config.constants.recently_posted_days
        )
        confidence, confidence_details = calculate_confidence(profile, components, as_of)
        details['confidence'] = confidence_details

        logger.debug(f"Opportunity {opportunity.id} / profile {profile.id}: overall={overall_score}")

        return MatchResult(
            opportunity_id=opportunity.id,
            profile_id=profile.id,
            overall_score=overall_score,
            components=components,
            reasoning=reasoning,
            confidence=confidence,
            tags=tags,
            effective_weights=applied_weights,
            details=details,
        )

    def score_match(
        self,
        opportunity: Union[Opportunity, Dict[str, Any]],
        profile: Union[Profile, Dict[str, Any]],
        weights: WeightsArg = None,
        as_of: Optional[date] = None
    ) -> MatchResult:
        """Score a single opportunity against a profile.

        Args:
            opportunity: Opportunity instance or mapping
            profile: Profile instance or mapping
            weights: Optional per-call weights overriding the configured ones
            as_of: Reference date for date-based criteria (defaults to today)

        Returns:
            MatchResult with overall_score, components, reasoning, confidence
        """
        return self._score(
            coerce_record(opportunity, Opportunity, 'opportunity'),
            coerce_record(profile, Profile, 'profile'),
            self._weights_for(weights),
            _resolve_as_of(as_of)
        )

    def match_all(
        self,
        opportunities: Iterable[Union[Opportunity, Dict[str, Any]]],
        profile: Union[Profile, Dict[str, Any]],
        weights: WeightsArg = None,
        as_of: Optional[date] = None,
        max_workers: Optional[int] = None
    ) -> List[MatchResult]:
        """Score every opportunity against one profile.

        All records are validated before anything is scored. With more than
        one worker the pairs are scored on a thread pool; the final order is
        the same either way.

        Returns:
            List of MatchResult sorted by overall_score (highest first),
            ties kept in input order
        """
        profile = coerce_record(profile, Profile, 'profile')
        records = [coerce_record(o, Opportunity, 'opportunity') for o in opportunities]
        applied = self._weights_for(weights)
        reference = _resolve_as_of(as_of)

        workers = max_workers if max_workers is not None else self.config.max_workers
        if workers is not None and workers < 1:
            raise ConfigurationError(f"max_workers must be >= 1, got {workers}")

        if workers and workers > 1 and len(records) > 1:
            with ThreadPoolExecutor(max_workers=workers) as executor:
                results = list(executor.map(lambda o: self._score(o, profile, applied, reference), records))
        else:
            results = [self._score(o, profile, applied, reference) for o in records]

        results.sort(key=lambda r: r.overall_score, reverse=True)

        logger.info(f"Scored {len(results)} opportunities for profile {profile.id}"
                    + (f" (top score {results[0].overall_score})" if results else ""))
        return results

    def filter_by_min_score(self, results: Iterable[MatchResult], threshold: int = 60) -> List[MatchResult]:
        return filter_by_min_score(results, threshold)

    def apply_result_policy(
        self,
        results: List[MatchResult],
        policy: Optional[ResultPolicy] = None
    ) -> List[MatchResult]:
        """Apply `policy`, or the configured result policy when none is given."""
        policy = policy if policy is not None else self.config.result_policy
        filtered = apply_result_policy(results, policy)
        logger.info(f"Result policy kept {len(filtered)}/{len(results)} "
                    f"(min_score={policy.min_score}, top_k={policy.top_k})")
        return filtered


def score_match(
    opportunity: Union[Opportunity, Dict[str, Any]],
    profile: Union[Profile, Dict[str, Any]],
    weights: WeightsArg = None,
    as_of: Optional[date] = None
) -> MatchResult:
    """Score one pair with the default configuration (and optional weights)."""
    return MatchingEngine(weights=weights).score_match(opportunity, profile, as_of=as_of)


def match_all(
    opportunities: Iterable[Union[Opportunity, Dict[str, Any]]],
    profile: Union[Profile, Dict[str, Any]],
    weights: WeightsArg = None,
    as_of: Optional[date] = None,
    max_workers: Optional[int] = None
) -> List[MatchResult]:
    """Score and rank a batch with the default configuration (and optional weights)."""
    return MatchingEngine(weights=weights).match_all(
        opportunities, profile, as_of=as_of, max_workers=max_workers
    )
