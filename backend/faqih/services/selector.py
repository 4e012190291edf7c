"""Threshold, order and truncate scored fatwas into the final result list."""

from collections.abc import Callable, Sequence

from faqih.models.schemas import Fatwa
from faqih.services.ranker import score

# Weak-but-nonzero matches are admitted; anything above this is shown
MIN_SCORE = 3
MAX_RESULTS = 5

Scorer = Callable[[str, Fatwa], float]


def rank(
    query: str,
    fatwas: Sequence[Fatwa],
    scorer: Scorer = score,
    limit: int = MAX_RESULTS,
) -> list[tuple[Fatwa, float]]:
    """Return up to ``limit`` ``(fatwa, score)`` pairs scoring above MIN_SCORE.

    Sorted by descending score; ``sorted`` is stable, so equal scores keep
    dataset order.
    """
    scored = [(fatwa, scorer(query, fatwa)) for fatwa in fatwas]
    kept = [item for item in scored if item[1] > MIN_SCORE]
    kept = sorted(kept, key=lambda item: item[1], reverse=True)
    return kept[:limit]


def select_top_matches(
    query: str,
    fatwas: Sequence[Fatwa],
    scorer: Scorer = score,
    limit: int = MAX_RESULTS,
) -> list[Fatwa]:
    """The best matching fatwas for ``query``, at most ``limit`` of them."""
    return [fatwa for fatwa, _ in rank(query, fatwas, scorer=scorer, limit=limit)]
