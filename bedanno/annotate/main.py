import time
from typing import Callable, Iterable, Iterator, List, NamedTuple, Optional

from ..config import get_default
from ..types import Feature, QueryRegion, ReferenceName
from ..util import format_duration, logger
from .constants import NO_MATCH
from .file_io import BedWriter, read_annotations, read_bed, resolve_reference
from .index import FeatureIndex
from .merge import MergeDriver
from .priority import select_best


class Annotation(NamedTuple):
    region: QueryRegion
    gene_name: str
    feature: Optional[Feature]


class Annotator:
    """
    answers each region with the gene name of its best overlapping feature

    Args:
        emit: called once per region, in input order, with the region and its gene name
    """

    def __init__(self, emit: Optional[Callable[[QueryRegion, str], None]] = None):
        self.emit = emit
        self.regions_annotated = 0
        self.regions_matched = 0

    def annotate_block(
        self, chromosome: str, regions: List[QueryRegion], index: FeatureIndex
    ) -> List[Annotation]:
        result = []
        for region in regions:
            best = select_best(index.query_overlaps(chromosome, region.interval), region.interval)
            gene_name = best.gene_name if best is not None and best.gene_name else NO_MATCH
            result.append(Annotation(region, gene_name, best))
        return result

    def iter_annotations(
        self, queries: Iterable[QueryRegion], features: Iterable[Feature]
    ) -> Iterator[Annotation]:
        """
        Raises:
            ChromosomeReorderError: either input re-enters a chromosome it has already left
        """
        driver = MergeDriver(queries, features)
        for chromosome, regions in driver.blocks():
            # the whole block is resolved before anything is handed out
            annotations = self.annotate_block(chromosome, regions, driver.index)
            matched = len([ann for ann in annotations if ann.feature is not None])
            logger.debug(f'{chromosome}: {matched} of {len(annotations)} regions matched a feature')
            self.regions_annotated += len(annotations)
            self.regions_matched += matched
            for annotation in annotations:
                yield annotation
        logger.info(
            f'annotated {self.regions_annotated} regions ({self.regions_matched} matched) '
            f'using {driver.features_read} features'
        )

    def run(self, queries: Iterable[QueryRegion], features: Iterable[Feature]) -> int:
        """
        Returns:
            the number of regions emitted
        """
        emitted = 0
        for annotation in self.iter_annotations(queries, features):
            if self.emit is not None:
                self.emit(annotation.region, annotation.gene_name)
            emitted += 1
        return emitted


def annotate(queries: Iterable[QueryRegion], features: Iterable[Feature]) -> Iterator[Annotation]:
    """
    Example:
        >>> for ann in annotate(read_bed('regions.bed'), read_annotations('genes.gtf')):
        ...     print(ann.region.record, ann.gene_name)
    """
    return Annotator().iter_annotations(queries, features)


def main(
    bed: str,
    reference: str,
    output: str,
    gff_type: Optional[str] = None,
    ignore_chr_prefix: bool = False,
    chunk_size: Optional[int] = None,
    data_dir: Optional[str] = None,
    start_time=None,
    **kwargs,
) -> int:
    """
    Args:
        bed: path to the input BED file (- for stdin)
        reference: path to the GTF/GFF file or the name of a built-in reference
        output: path to the output BED file (- for stdout)

    Returns:
        the number of regions written
    """
    if start_time is None:
        start_time = int(time.time())
    if chunk_size is None:
        chunk_size = get_default('chunk_size')
    chrom_type = ReferenceName if ignore_chr_prefix else str

    reference_path = resolve_reference(reference, data_dir=data_dir)
    logger.info(f'reading regions: {bed}')
    logger.info(f'reading annotations: {reference_path}')
    queries = read_bed(bed, chunk_size=chunk_size, chrom_type=chrom_type)
    features = read_annotations(
        reference_path, gff_type=gff_type, chunk_size=chunk_size, chrom_type=chrom_type
    )

    with BedWriter(output) as writer:
        emitted = Annotator(emit=writer).run(queries, features)

    duration = int(time.time()) - start_time
    logger.info(f'wrote {emitted} regions')
    logger.info(f'run time (hh/mm/ss): {format_duration(duration)}')
    return emitted
