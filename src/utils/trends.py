"""
Trend tokenizer.

Single definition of what counts as one trend occurrence, shared by
aggregation and flagging.
"""

from collections import Counter
from typing import Dict, Iterable, List


def tokenize_trends(raw: str) -> List[str]:
    """
    Split a raw multi-value trend field into trend labels.

    Tokens are split on commas and taken verbatim; tokens that are empty
    or whitespace-only are discarded.

    Args:
        raw: Comma-separated trend field (may be empty)

    Returns:
        Trend labels in field order
    """
    if not raw:
        return []
    return [token for token in raw.split(",") if token.strip()]


def count_labels(labels: Iterable[str]) -> Dict[str, int]:
    """Accumulate label occurrences into a label -> count mapping."""
    return dict(Counter(labels))
