"""
Fuzzy string matching utilities.

Thin wrapper over thefuzz used by product_reader when a column header is
neither a raw field name nor a known rename.
"""

import logging

from thefuzz import fuzz, process

logger = logging.getLogger(__name__)


def best_match(
    value: str,
    candidates: dict[str, str],
    threshold: int = 80,
) -> tuple[str | None, int]:
    """
    Find the canonical value whose candidate key best matches *value*.

    Scored with token_sort_ratio so word order does not matter
    ("Name Product" still matches "product name").

    Args:
        value: Header text to match; compared lowercased and stripped.
        candidates: Dict of candidate_key (lowercase) → canonical_value.
        threshold: Minimum score (0-100) to accept a match.

    Returns:
        (canonical_value, score), or (None, 0) when nothing reaches the
        threshold.
    """
    if not value or not candidates:
        return None, 0

    query = value.strip().lower()
    choices = {canonical_key: canonical_key for canonical_key in candidates}
    found = process.extractOne(
        query,
        choices,
        scorer=fuzz.token_sort_ratio,
        score_cutoff=threshold,
    )

    if found is None:
        logger.debug(f"No fuzzy match for '{value}' at threshold {threshold}")
        return None, 0

    matched_key, score = found[0], found[1]
    logger.debug(
        f"Fuzzy matched '{value}' → '{candidates[matched_key]}' (score={score})"
    )
    return candidates[matched_key], int(score)
