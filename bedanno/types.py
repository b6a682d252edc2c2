"""
Record types passed between the readers, the annotation engine and the writer
"""
import re
from dataclasses import dataclass, field
from typing import List, Optional

from .annotate.constants import PROTEIN_CODING
from .interval import Interval


class ReferenceName(str):
    """
    Class for reference sequence names. Ensures that hg19/hg38 chromosome names match.

    Example:
        >>> ReferenceName('chr1') == ReferenceName('1')
        True
    """

    def __eq__(self, other):
        options = {str(self)}
        if self.startswith('chr'):
            options.add(str(self[3:]))
        else:
            options.add('chr' + str(self))
        return other in options

    def __ne__(self, other):
        return not self.__eq__(other)

    def __hash__(self):
        return hash(re.sub('^chr', '', str(self)))


@dataclass(frozen=True)
class QueryRegion:
    """
    a single BED region

    Attributes:
        chromosome: the chromosome/contig name
        interval: the half-open region
        record: the original row, split on tabs, with every column kept
        record_number: 1-based position of the region in its input
    """

    chromosome: str
    interval: Interval
    record: List[str] = field(default_factory=list, compare=False, hash=False)
    record_number: int = 0

    @property
    def start(self) -> int:
        return self.interval.start

    @property
    def end(self) -> int:
        return self.interval.end


@dataclass(frozen=True)
class Feature:
    chromosome: str
    interval: Interval
    feature_type: str
    gene_name: Optional[str] = None
    transcript_id: Optional[str] = None
    mane_select: bool = False
    transcript_support_level: str = 'NA'
    confidence_level: Optional[int] = None
    transcript_type: Optional[str] = None

    @property
    def is_protein_coding(self) -> bool:
        return self.transcript_type == PROTEIN_CODING

    @property
    def start(self) -> int:
        return self.interval.start

    @property
    def end(self) -> int:
        return self.interval.end
