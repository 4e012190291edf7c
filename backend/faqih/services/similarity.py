"""Edit-distance based word similarity used by the fuzzy fallbacks."""

from rapidfuzz.distance import Levenshtein


def edit_distance(a: str, b: str) -> int:
    """Minimum single-character insertions, deletions and substitutions turning ``a`` into ``b``."""
    return Levenshtein.distance(a, b)


def similarity(a: str, b: str) -> float:
    """Similarity in [0, 1]: ``1 - distance / longest length``.

    Two empty strings are identical (1.0).
    """
    max_len = max(len(a), len(b))
    if max_len == 0:
        return 1.0
    return 1 - edit_distance(a, b) / max_len
