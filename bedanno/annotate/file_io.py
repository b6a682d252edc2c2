"""
module which holds all functions relating to reading the region and annotation files and
writing the annotated regions
"""
import contextlib
import csv
import gzip
import io
import itertools
import os
import re
import sys
from typing import Callable, Dict, Iterator, List, Optional, Tuple
from urllib.parse import unquote

import pandas as pd

from ..config import get_default
from ..constants import GFF_TYPE
from ..error import MalformedIntervalError, ParseError, ReferenceNotFoundError
from ..interval import Interval
from ..types import Feature, QueryRegion
from ..util import logger
from .constants import FEATURE_TYPE, MANE_SELECT_TAG, TSL

REFERENCE_ALIASES: Dict[str, str] = {
    'hg38': os.path.join('hg38', 'gencode.v43.basic.annotation.gtf.gz'),
}
"""dict: built-in reference names and their location relative to the data directory"""

GTF_ATTRIBUTE_PATTERN = re.compile(r'([^\s;"]+)\s+(?:"([^"]*)"|([^\s;"]+))')

STDIN = '-'

Attributes = Dict[str, List[str]]


def _display_name(filename) -> str:
    if filename == STDIN:
        return '<stdin>'
    return getattr(filename, 'name', str(filename))


def _open_text(filename):
    if filename == STDIN:
        return contextlib.nullcontext(sys.stdin)
    elif hasattr(filename, 'read'):
        return contextlib.nullcontext(filename)
    elif str(filename).endswith('.gz'):
        return gzip.open(filename, 'rt')
    return open(filename, 'r')


def _data_lines(fh) -> Iterator[str]:
    for line in fh:
        line = line.rstrip('\r\n')
        # only whole-line comments, a # inside a column is data
        if not line.strip() or line.startswith('#'):
            continue
        yield line


def _read_chunk(lines: List[str]) -> pd.DataFrame:
    """
    split a chunk of lines into columns. The frame is as wide as the widest line in the chunk
    """
    width = max([line.count('\t') + 1 for line in lines])
    return pd.read_csv(
        io.StringIO('\n'.join(lines)),
        sep='\t',
        header=None,
        names=list(range(width)),
        dtype=str,
        comment=None,
        quoting=csv.QUOTE_NONE,
        na_filter=False,
        skip_blank_lines=False,
    )


def read_tabbed_rows(
    filename, chunk_size: Optional[int] = None
) -> Iterator[Tuple[int, List[str]]]:
    """
    reads a headerless tab-delimited file a chunk at a time. Lines starting with ``#`` and
    blank lines are skipped. Rows may have different numbers of columns. Gzipped files are
    detected by their extension

    Args:
        filename: path to the file, an open file handle or ``-`` for stdin
        chunk_size: number of rows to hold in memory at a time

    Yields:
        the 1-based record number and the row values as strings, exactly as many values as
        the row has columns
    """
    if chunk_size is None:
        chunk_size = get_default('chunk_size')
    name = _display_name(filename)
    record_number = 0
    with _open_text(filename) as fh:
        lines = _data_lines(fh)
        while True:
            chunk_lines = list(itertools.islice(lines, chunk_size))
            if not chunk_lines:
                break
            try:
                chunk = _read_chunk(chunk_lines)
            except pd.errors.ParserError as err:
                match = re.search(r'line (\d+)', str(err))
                offset = int(match.group(1)) if match else 1
                raise ParseError(name, record_number + offset, str(err).strip())
            rows = chunk.itertuples(index=False, name=None)
            for line, row in zip(chunk_lines, rows):
                record_number += 1
                # shorter rows are padded out to the width of the chunk
                yield record_number, list(row[: line.count('\t') + 1])
    if not record_number:
        logger.warning(f'no records found in {name}')


def read_bed(
    filename, chunk_size: Optional[int] = None, chrom_type: Callable[[str], str] = str
) -> Iterator[QueryRegion]:
    """
    reads regions from a BED file. The first three columns are the chromosome, start and end
    (0-based, half-open). Any other columns are kept as-is on the region record

    Raises:
        ParseError: a row has fewer than 3 columns or an invalid start/end
    """
    name = _display_name(filename)
    for record_number, row in read_tabbed_rows(filename, chunk_size):
        if len(row) < 3:
            raise ParseError(name, record_number, 'expected at least 3 columns (chrom, start, end)')
        try:
            interval = Interval(int(row[1]), int(row[2]))
        except ValueError:
            raise ParseError(name, record_number, f'start and end must be integers: {row[1:3]}')
        except MalformedIntervalError as err:
            raise ParseError(name, record_number, str(err))
        yield QueryRegion(chrom_type(row[0]), interval, row, record_number)


def parse_attributes(field: str, gff_type: str = GFF_TYPE.GTF2) -> Attributes:
    """
    parse the attributes column of a GTF/GFF record. Keys may be repeated (ex. tag) so
    every key maps to a list of values

    Example:
        >>> parse_attributes('gene_name "DDX11L1"; tag "basic"; tag "Ensembl_canonical";')
        {'gene_name': ['DDX11L1'], 'tag': ['basic', 'Ensembl_canonical']}
        >>> parse_attributes('gene_name=DDX11L1;tag=basic,MANE_Select', GFF_TYPE.GFF3)
        {'gene_name': ['DDX11L1'], 'tag': ['basic', 'MANE_Select']}
    """
    attributes: Attributes = {}
    if gff_type == GFF_TYPE.GFF3:
        for chunk in field.split(';'):
            chunk = chunk.strip()
            if not chunk or chunk == '.':
                continue
            key, _, value = chunk.partition('=')
            attributes.setdefault(key.strip(), []).extend(
                [unquote(v.strip()) for v in value.split(',')]
            )
    else:
        for key, quoted, bare in GTF_ATTRIBUTE_PATTERN.findall(field):
            attributes.setdefault(key, []).append(quoted if quoted or not bare else bare)
    return attributes


def _first(attributes: Attributes, *keys: str) -> Optional[str]:
    for key in keys:
        values = attributes.get(key)
        if values and values[0]:
            return values[0]
    return None


def build_feature(
    chromosome: str, interval: Interval, feature_type: str, attributes: Attributes
) -> Feature:
    """
    create a feature from the parsed columns of an annotation record
    """
    # ensembl writes ex. "1 (assigned to previous version 5)"
    tsl = (_first(attributes, 'transcript_support_level') or TSL.NA).split()[0]
    if tsl not in TSL.values():
        tsl = TSL.NA
    try:
        level = int(_first(attributes, 'level'))
    except (TypeError, ValueError):
        level = None
    return Feature(
        chromosome=chromosome,
        interval=interval,
        feature_type=FEATURE_TYPE.normalize(feature_type),
        gene_name=_first(attributes, 'gene_name', 'gene'),
        transcript_id=_first(attributes, 'transcript_id'),
        mane_select=MANE_SELECT_TAG in attributes.get('tag', []),
        transcript_support_level=tsl,
        confidence_level=level,
        transcript_type=_first(attributes, 'transcript_type', 'transcript_biotype'),
    )


def read_annotations(
    filename,
    gff_type: Optional[str] = None,
    chunk_size: Optional[int] = None,
    chrom_type: Callable[[str], str] = str,
) -> Iterator[Feature]:
    """
    reads features from a GTF/GFF file. Coordinates are converted from 1-based inclusive to
    0-based half-open

    Args:
        filename: path to the annotation file
        gff_type: the annotation dialect, detected from the file extension if not given

    Raises:
        ParseError: a row has fewer than 9 columns or an invalid start/end
    """
    if gff_type is None:
        gff_type = GFF_TYPE.from_extension(str(filename))
    GFF_TYPE.enforce(gff_type)
    name = _display_name(filename)
    for record_number, row in read_tabbed_rows(filename, chunk_size):
        if len(row) < 9:
            raise ParseError(name, record_number, f'expected 9 columns, found {len(row)}')
        try:
            interval = Interval(int(row[3]) - 1, int(row[4]))
        except ValueError:
            raise ParseError(name, record_number, f'start and end must be integers: {row[3:5]}')
        except MalformedIntervalError as err:
            raise ParseError(name, record_number, str(err))
        yield build_feature(
            chrom_type(row[0]), interval, row[2], parse_attributes(row[8], gff_type)
        )


def resolve_reference(reference: str, data_dir: Optional[str] = None) -> str:
    """
    Args:
        reference: a built-in reference name (ex. hg38) or the path to a GTF/GFF file
        data_dir: directory holding the built-in references

    Returns:
        path to the annotation file

    Raises:
        ReferenceNotFoundError: the file does not exist
    """
    if reference in REFERENCE_ALIASES:
        data_dir = get_default('data_dir') if data_dir is None else data_dir
        path = os.path.join(data_dir, REFERENCE_ALIASES[reference])
    else:
        path = reference
    if not os.path.exists(path):
        raise ReferenceNotFoundError(f'Cannot open GTF/GFF file: {path}')
    return path


class BedWriter:
    """
    writes regions as their original BED row with the gene name appended as the last column

    Example:
        >>> with BedWriter('annotated.bed') as writer:
        ...     writer.write(region, 'GENEA')
    """

    def __init__(self, filename=STDIN):
        self.filename = filename
        self.written = 0
        self._fh = None
        self._close = False

    def __enter__(self):
        if self.filename == STDIN:
            self._fh = sys.stdout
        elif hasattr(self.filename, 'write'):
            self._fh = self.filename
        else:
            logger.info(f'opening for write: {self.filename}')
            if str(self.filename).endswith('.gz'):
                self._fh = gzip.open(self.filename, 'wt')
            else:
                self._fh = open(self.filename, 'w')
            self._close = True
        return self

    def write(self, region: QueryRegion, gene_name: str):
        self._fh.write('\t'.join(list(region.record) + [gene_name]) + '\n')
        self.written += 1

    def __call__(self, region: QueryRegion, gene_name: str):
        self.write(region, gene_name)

    def __exit__(self, *pos):
        if self._close:
            logger.info(f'closing: {self.filename}')
            self._fh.close()
        else:
            self._fh.flush()
