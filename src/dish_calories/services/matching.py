"""Fuzzy selection of the best FDC candidate for a dish name."""

import logging
import sys
from collections.abc import Sequence
from dataclasses import dataclass

from rapidfuzz import fuzz, utils

from dish_calories.domain.nutrition import FoodCandidate

FIELD_WEIGHTS: dict[str, float] = {
    "description": 0.7,
    "brand_name": 0.2,
    "ingredients": 0.1,
}
MATCH_THRESHOLD = 0.6
MIN_MATCH_CHAR_LENGTH = 2

_EPSILON = sys.float_info.epsilon

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScoredCandidate:
    """Candidate with its composite distance (lower is better)."""

    candidate: FoodCandidate
    score: float
    position: int


@dataclass(frozen=True)
class CandidateMatcher:
    """Weighted fuzzy matcher over description, brand name and ingredients.

    Each field is scored as a distance in [0, 1] derived from rapidfuzz's
    WRatio. A field counts only when it is at least ``min_match_length``
    characters long and its distance is within ``threshold``. The composite
    score multiplies ``distance ** weight`` over the counted fields, so an
    exact description match scores close to zero.
    """

    weights: dict[str, float] | None = None
    threshold: float = MATCH_THRESHOLD
    min_match_length: int = MIN_MATCH_CHAR_LENGTH

    def select_best(
        self, candidates: Sequence[FoodCandidate], query: str
    ) -> FoodCandidate | None:
        """Return the best candidate, falling back to the first one."""
        if not candidates:
            return None
        if len(candidates) == 1:
            return candidates[0]

        ranked = self.rank(candidates, query)
        if ranked:
            best = ranked[0]
            _logger.info(
                'Best match for "%s": %s (score: %s)',
                query,
                best.candidate.description,
                best.score,
            )
            return best.candidate

        _logger.info(
            'No good fuzzy match for "%s", using first result: %s',
            query,
            candidates[0].description,
        )
        return candidates[0]

    def rank(
        self, candidates: Sequence[FoodCandidate], query: str
    ) -> list[ScoredCandidate]:
        """Return matched candidates ordered by score, best first.

        Ties keep the source order.
        """
        scored = []
        for position, candidate in enumerate(candidates):
            score = self.score(candidate, query)
            if score is not None:
                scored.append(ScoredCandidate(candidate, score, position))
        return sorted(scored, key=lambda item: (item.score, item.position))

    def score(self, candidate: FoodCandidate, query: str) -> float | None:
        """Return the composite distance, or None when no field matches."""
        if len(query.strip()) < self.min_match_length:
            return None
        total: float | None = None
        for field_name, weight in (self.weights or FIELD_WEIGHTS).items():
            text = getattr(candidate, field_name, None)
            if not isinstance(text, str) or len(text.strip()) < self.min_match_length:
                continue
            distance = field_distance(query, text)
            if distance > self.threshold:
                continue
            weighted = max(distance, _EPSILON) ** weight
            total = weighted if total is None else total * weighted
        return total


def field_distance(query: str, text: str) -> float:
    """Return a normalized distance between query and text (0 is identical)."""
    similarity = fuzz.WRatio(query, text, processor=utils.default_process)
    return 1.0 - similarity / 100.0
