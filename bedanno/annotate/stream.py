from typing import Iterable, Optional, Set

from ..error import ChromosomeReorderError


class RecordStream:
    """
    wraps an iterable of records (anything with a ``chromosome`` attribute) so that the
    chromosome of the next record can be checked before it is read

    Chromosomes must form contiguous blocks. A chromosome is closed as soon as the stream
    moves to a different chromosome (or ends). A record for a closed chromosome raises
    :class:`~bedanno.error.ChromosomeReorderError`

    Example:
        >>> stream = RecordStream(regions, 'query')
        >>> stream.current_chromosome()
        'chr1'
        >>> region = stream.next()
    """

    def __init__(self, records: Iterable, name: str):
        self.name = name
        self.closed: Set[str] = set()
        self.exhausted = False
        self.record_number = 0  # records consumed so far
        self._records = iter(records)
        self._lookahead = None
        self._chromosome = None

    def _fill(self):
        if self._lookahead is not None or self.exhausted:
            return
        try:
            record = next(self._records)
        except StopIteration:
            self.exhausted = True
            if self._chromosome is not None:
                self.closed.add(self._chromosome)
            return
        if self._chromosome is None or record.chromosome != self._chromosome:
            self._enter(record.chromosome)
        self._lookahead = record

    def _enter(self, chromosome):
        if chromosome in self.closed:
            raise ChromosomeReorderError(chromosome, self.name, self.record_number + 1)
        if self._chromosome is not None:
            self.closed.add(self._chromosome)

    def current_chromosome(self) -> Optional[str]:
        """
        Returns:
            the chromosome of the next record without consuming it, None at the end of the stream
        """
        self._fill()
        if self._lookahead is None:
            return None
        return self._lookahead.chromosome

    def next(self):
        """
        consume the next record

        Raises:
            StopIteration: the stream has no more records
        """
        self._fill()
        if self._lookahead is None:
            raise StopIteration()
        record = self._lookahead
        self._lookahead = None
        self._chromosome = record.chromosome
        self.record_number += 1
        return record

    def __iter__(self):
        return self

    def __next__(self):
        return self.next()

    def __repr__(self):
        return '{}(name={}, records={}, closed={})'.format(
            self.__class__.__name__, self.name, self.record_number, sorted(self.closed)
        )
