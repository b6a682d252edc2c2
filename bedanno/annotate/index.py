from typing import Dict, List

from intervaltree import IntervalTree

from ..interval import Interval
from ..types import Feature
from ..util import logger


class FeatureIndex:
    """
    annotation features bucketed by chromosome, each bucket is an interval tree so that
    overlap queries do not scan every feature on the chromosome

    Example:
        >>> index = FeatureIndex()
        >>> index.insert(Feature('chr1', Interval(0, 200), 'gene', gene_name='GENEA'))
        >>> [f.gene_name for f in index.query_overlaps('chr1', Interval(10, 50))]
        ['GENEA']
    """

    def __init__(self):
        self._trees: Dict[str, IntervalTree] = {}
        self._counts: Dict[str, int] = {}
        self._inserted = 0

    def insert(self, feature: Feature):
        """
        add a feature to the bucket of its chromosome. Features may be inserted in any order
        """
        self._inserted += 1
        tree = self._trees.setdefault(feature.chromosome, IntervalTree())
        self._counts[feature.chromosome] = self._counts.get(feature.chromosome, 0) + 1
        # empty features overlap nothing and the tree does not accept null intervals
        if len(feature.interval):
            tree.addi(feature.start, feature.end, (self._inserted, feature))

    def query_overlaps(self, chromosome: str, interval: Interval) -> List[Feature]:
        """
        Returns:
            every stored feature on the chromosome overlapping the interval, in insertion order
        """
        tree = self._trees.get(chromosome)
        if not tree or not len(interval):
            return []
        hits = sorted(tree.overlap(interval.start, interval.end), key=lambda i: i.data[0])
        return [hit.data[1] for hit in hits]

    def evict(self, chromosome: str) -> int:
        """
        drop all features for a chromosome

        Returns:
            the number of features released
        """
        self._trees.pop(chromosome, None)
        count = self._counts.pop(chromosome, 0)
        if count:
            logger.debug(f'released {count} features on {chromosome}')
        return count

    reset = evict

    def chromosomes(self) -> List[str]:
        return list(self._trees.keys())

    def count(self, chromosome: str) -> int:
        return self._counts.get(chromosome, 0)

    def __contains__(self, chromosome):
        return chromosome in self._trees

    def __len__(self):
        return sum(self._counts.values())
