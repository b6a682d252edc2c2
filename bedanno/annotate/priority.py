"""
ranking of candidate features for a query region

The priority key of a feature is compared lexicographically, larger keys win

1. feature type rank
2. MANE select
3. transcript support level rank
4. confidence level rank
5. protein coding
6. fraction of the query covered by the feature

Features with equal keys are separated by :func:`tie_key` (smallest wins), which only depends
on the features themselves so that the choice never depends on the order features were read
"""
from typing import Iterable, Optional, Tuple

from ..interval import Interval
from ..types import Feature
from .constants import CONFIDENCE_RANK, FEATURE_TYPE, FEATURE_TYPE_RANK, TSL_RANK

PriorityKey = Tuple[int, bool, int, int, bool, float]


def priority_key(feature: Feature, query: Interval) -> PriorityKey:
    return (
        FEATURE_TYPE_RANK.get(feature.feature_type, FEATURE_TYPE_RANK[FEATURE_TYPE.OTHER]),
        feature.mane_select,
        TSL_RANK.get(feature.transcript_support_level, 0),
        CONFIDENCE_RANK.get(feature.confidence_level, 0),
        feature.is_protein_coding,
        Interval.overlap_fraction(query, feature.interval) if len(query) else 0.0,
    )


def tie_key(feature: Feature) -> Tuple[str, str, int, int]:
    return (feature.gene_name or '', feature.transcript_id or '', feature.start, feature.end)


def compare(first: Feature, second: Feature, query: Interval) -> int:
    """
    Returns:
        1 if the first feature wins, -1 if the second feature wins and 0 for a tie

    Example:
        >>> cds = Feature('chr1', Interval(30, 40), 'CDS', gene_name='KEEP1')
        >>> gene = Feature('chr1', Interval(20, 60), 'gene', gene_name='LOW1')
        >>> compare(cds, gene, Interval(10, 50))
        1
    """
    first_key = priority_key(first, query)
    second_key = priority_key(second, query)
    if first_key > second_key:
        return 1
    elif first_key < second_key:
        return -1
    return 0


def select_best(candidates: Iterable[Feature], query: Interval) -> Optional[Feature]:
    """
    pick the highest priority feature for a query

    Returns:
        the winning feature or None when there are no candidates
    """
    best = None
    for candidate in candidates:
        if best is None:
            best = candidate
            continue
        result = compare(candidate, best, query)
        if result > 0 or (result == 0 and tie_key(candidate) < tie_key(best)):
            best = candidate
    return best
