from typing import Iterable, Iterator, List, Optional, Tuple, Union

from ..constants import STREAM, Namespace
from ..types import QueryRegion
from ..util import logger
from .index import FeatureIndex
from .stream import RecordStream


class MERGE_STATE(Namespace):
    """
    states of the merge driver

    Attributes:
        NO_CHROMOSOME_YET: nothing has been read
        ACTIVE: regions for the current chromosome are being answered
        DONE: the query stream is exhausted
    """

    NO_CHROMOSOME_YET: str = 'no chromosome yet'
    ACTIVE: str = 'active'
    DONE: str = 'done'


class MergeDriver:
    """
    Reads the query and annotation streams together so that when the regions of a chromosome
    are handed out, the feature index holds every feature for that chromosome.

    When both inputs list chromosomes in the same order, this reads one chromosome of each
    stream at a time. Otherwise features of chromosomes ahead of the queries are kept in the
    index until their regions are read.
    """

    def __init__(
        self,
        queries: Union[RecordStream, Iterable[QueryRegion]],
        features: Union[RecordStream, Iterable],
        index: Optional[FeatureIndex] = None,
    ):
        self.queries = (
            queries if isinstance(queries, RecordStream) else RecordStream(queries, STREAM.QUERY)
        )
        self.features = (
            features
            if isinstance(features, RecordStream)
            else RecordStream(features, STREAM.ANNOTATION)
        )
        self.index = FeatureIndex() if index is None else index
        self.state = MERGE_STATE.NO_CHROMOSOME_YET
        self.chromosome: Optional[str] = None
        self.features_read = 0

    @property
    def queries_read(self) -> int:
        return self.queries.record_number

    def _transition(self, chromosome: Optional[str]):
        if self.state == MERGE_STATE.DONE:
            raise AssertionError('cannot advance a finished merge', chromosome)
        if chromosome is None:
            logger.debug(f'{self.state} -> {MERGE_STATE.DONE}')
            self.state = MERGE_STATE.DONE
        else:
            logger.debug(f'{self.state} ({self.chromosome}) -> {MERGE_STATE.ACTIVE} ({chromosome})')
            self.state = MERGE_STATE.ACTIVE
        self.chromosome = chromosome

    def _collect_queries(self, chromosome: str) -> List[QueryRegion]:
        block = []
        while self.queries.current_chromosome() == chromosome:
            block.append(self.queries.next())
        return block

    def _drain_features(self, chromosome: str):
        """
        insert features into the index until the annotation stream has moved past the
        chromosome (or ended)
        """
        while (
            self.features.current_chromosome() is not None
            and chromosome not in self.features.closed
        ):
            self.index.insert(self.features.next())
            self.features_read += 1

    def blocks(self) -> Iterator[Tuple[str, List[QueryRegion]]]:
        """
        Yields:
            the chromosome name and its regions (in input order). The index holds every
            feature for the chromosome until the next block is requested

        Raises:
            ChromosomeReorderError: either input re-enters a chromosome it has already left.
                Annotations left over after the last region are still read to check their order
        """
        while True:
            chromosome = self.queries.current_chromosome()
            self._transition(chromosome)
            if chromosome is None:
                break
            block = self._collect_queries(chromosome)
            self._drain_features(chromosome)
            logger.debug(
                f'{chromosome}: {len(block)} regions, {self.index.count(chromosome)} features'
            )
            yield chromosome, block
            self.index.evict(chromosome)

        for buffered in self.index.chromosomes():
            self.index.evict(buffered)
        # nothing is left to annotate but the annotation order is still checked
        for _ in self.features:
            self.features_read += 1
