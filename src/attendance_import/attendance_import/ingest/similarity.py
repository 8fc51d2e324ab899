from __future__ import annotations

from typing import Iterable


def jaccard_similarity(tokens_a: Iterable[str], tokens_b: Iterable[str]) -> float:
    """Jaccard index |A ∩ B| / |A ∪ B| of two token collections.

    Duplicate tokens collapse. Two empty inputs score 0.0.
    """

    set_a = set(tokens_a)
    set_b = set(tokens_b)
    union = set_a | set_b
    if not union:
        return 0.0
    return len(set_a & set_b) / len(union)
