import random

import pytest
from bedanno.annotate.constants import NO_MATCH
from bedanno.annotate.main import Annotator, annotate
from bedanno.error import ChromosomeReorderError
from bedanno.interval import Interval
from bedanno.types import Feature, QueryRegion


def region(chromosome, start, end):
    return QueryRegion(chromosome, Interval(start, end), [chromosome, str(start), str(end)])


def feature(chromosome, start, end, name, feature_type='gene', **kwargs):
    return Feature(chromosome, Interval(start, end), feature_type, gene_name=name, **kwargs)


@pytest.fixture
def scenario():
    regions = [
        region('chr1', 10, 50),
        region('chr1', 100, 150),
        region('chr1', 400, 500),
        region('chr1', 600, 700),
        region('chr10', 10, 50),
        region('chr10', 55, 60),
        region('chr2', 5, 55),
        region('chrX', 100, 200),
        region('chrM', 0, 200),
    ]
    features = [
        feature('chr1', 0, 5, 'SKIP1'),
        feature('chr1', 20, 60, 'LOW1'),
        feature('chr1', 30, 40, 'KEEP1', 'CDS'),
        feature('chr1', 90, 170, 'KEEP2', 'CDS'),
        feature('chr1', 200, 300, 'SKIP2'),
        feature('chr1', 600, 700, 'LOW4', confidence_level=2),
        feature('chr1', 550, 650, 'KEEP4', confidence_level=1),
        feature('chr1', 800, 900, 'SKIP5'),
        feature('chr2', 0, 500, 'KEEPchr2'),
        feature('chr10', 0, 500, 'LOWchr10', transcript_support_level='2'),
        feature('chr10', 0, 500, 'KEEPchr10', transcript_support_level='1'),
        feature('chrX', 0, 500, 'KEEPchrX'),
    ]
    expected = [
        'KEEP1',
        'KEEP2',
        NO_MATCH,
        'KEEP4',
        'KEEPchr10',
        'KEEPchr10',
        'KEEPchr2',
        'KEEPchrX',
        NO_MATCH,
    ]
    return regions, features, expected


class TestAnnotate:
    def test_scenario(self, scenario):
        regions, features, expected = scenario
        result = list(annotate(regions, features))
        assert [ann.region for ann in result] == regions
        assert [ann.gene_name for ann in result] == expected

    def test_no_match_has_no_feature(self, scenario):
        regions, features, _ = scenario
        for ann in annotate(regions, features):
            if ann.gene_name == NO_MATCH:
                assert ann.feature is None
            else:
                assert ann.feature.gene_name == ann.gene_name

    def test_single_gene(self):
        features = [
            feature('chr1', 0, 200, 'GENEA'),
            feature('chr1', 5, 45, 'GENEA', 'exon'),
        ]
        result = list(annotate([region('chr1', 10, 50), region('chr1', 400, 500)], features))
        assert [ann.gene_name for ann in result] == ['GENEA', NO_MATCH]
        assert result[0].feature.feature_type == 'exon'

    def test_feature_order_within_chromosome_does_not_matter(self, scenario):
        regions, features, expected = scenario
        shuffled = []
        for chromosome in ['chr1', 'chr2', 'chr10', 'chrX']:
            block = [f for f in features if f.chromosome == chromosome]
            random.Random(chromosome).shuffle(block)
            shuffled.extend(block)
        assert [ann.gene_name for ann in annotate(regions, shuffled)] == expected

    def test_sorted_input_gives_same_result(self, scenario):
        regions, features, _ = scenario
        unsorted = [(ann.region, ann.gene_name) for ann in annotate(regions, features)]
        regions_sorted = sorted(regions, key=lambda r: (r.chromosome, r.start, r.end))
        features_sorted = sorted(features, key=lambda f: (f.chromosome, f.start, f.end))
        result = [(ann.region, ann.gene_name) for ann in annotate(regions_sorted, features_sorted)]
        assert sorted(result, key=lambda r: r[0].record) == sorted(
            unsorted, key=lambda r: r[0].record
        )

    def test_missing_gene_name(self):
        result = list(annotate([region('chr1', 10, 50)], [feature('chr1', 0, 100, None)]))
        assert result[0].gene_name == NO_MATCH
        assert result[0].feature is not None

    def test_empty_region(self):
        result = list(annotate([region('chr1', 10, 10)], [feature('chr1', 0, 100, 'GENEA')]))
        assert result[0].gene_name == NO_MATCH

    def test_no_regions(self, scenario):
        _, features, _ = scenario
        assert list(annotate([], features)) == []

    def test_reorder(self):
        regions = [region('chr1', 10, 50), region('chr2', 10, 50), region('chr1', 60, 70)]
        with pytest.raises(ChromosomeReorderError):
            list(annotate(regions, [feature('chr1', 0, 100, 'GENEA')]))


class TestAnnotator:
    def test_emit_once_per_region(self, scenario):
        regions, features, expected = scenario
        emitted = []
        count = Annotator(emit=lambda r, g: emitted.append((r, g))).run(regions, features)
        assert count == len(regions)
        assert emitted == list(zip(regions, expected))

    def test_counters(self, scenario):
        regions, features, _ = scenario
        annotator = Annotator()
        assert annotator.run(regions, features) == 9
        assert annotator.regions_annotated == 9
        assert annotator.regions_matched == 7

    def test_block_resolved_before_emit(self):
        regions = [region('chr1', 10, 50), region('chr2', 10, 50), region('chr2', 20, 30)]
        features = [feature('chr1', 0, 100, 'GENEA'), feature('chr2', 0, 100, 'GENEB')]
        annotator = Annotator()
        annotations = annotator.iter_annotations(regions, features)
        next(annotations)
        assert annotator.regions_annotated == 1
        next(annotations)
        # the whole chr2 block is answered once its first region is handed out
        assert annotator.regions_annotated == 3
