import pytest
from bedanno.annotate.stream import RecordStream
from bedanno.error import ChromosomeReorderError
from bedanno.interval import Interval
from bedanno.types import QueryRegion, ReferenceName


def regions(*chromosomes):
    return [QueryRegion(chrom, Interval(i, i + 1)) for i, chrom in enumerate(chromosomes)]


class TestRecordStream:
    def test_peek_does_not_consume(self):
        stream = RecordStream(regions('chr1', 'chr2'), 'query')
        assert stream.current_chromosome() == 'chr1'
        assert stream.current_chromosome() == 'chr1'
        assert stream.record_number == 0
        assert stream.next().chromosome == 'chr1'
        assert stream.record_number == 1
        assert stream.current_chromosome() == 'chr2'

    def test_end_of_stream(self):
        stream = RecordStream(regions('chr1'), 'query')
        stream.next()
        assert stream.current_chromosome() is None
        assert stream.exhausted
        with pytest.raises(StopIteration):
            stream.next()

    def test_empty(self):
        stream = RecordStream([], 'query')
        assert stream.current_chromosome() is None
        assert stream.exhausted
        assert stream.closed == set()
        assert list(stream) == []

    def test_closed_on_change(self):
        stream = RecordStream(regions('chr1', 'chr1', 'chr2'), 'query')
        stream.next()
        assert stream.closed == set()
        stream.next()
        assert stream.current_chromosome() == 'chr2'
        assert stream.closed == {'chr1'}

    def test_closed_at_end(self):
        stream = RecordStream(regions('chr1', 'chr2'), 'query')
        list(stream)
        assert stream.closed == {'chr1', 'chr2'}

    def test_iteration(self):
        records = regions('chr1', 'chr1', 'chr10', 'chr2')
        assert list(RecordStream(records, 'query')) == records

    def test_reorder(self):
        stream = RecordStream(regions('chr1', 'chr2', 'chr1'), 'annotation')
        stream.next()
        stream.next()
        with pytest.raises(ChromosomeReorderError) as err:
            stream.current_chromosome()
        assert err.value.chromosome == 'chr1'
        assert err.value.stream == 'annotation'
        assert err.value.record_number == 3

    def test_reorder_raised_while_iterating(self):
        with pytest.raises(ChromosomeReorderError):
            list(RecordStream(regions('chr1', 'chr2', 'chr2', 'chr1'), 'query'))

    def test_prefix_insensitive_names(self):
        records = [
            QueryRegion(ReferenceName('chr1'), Interval(0, 1)),
            QueryRegion(ReferenceName('1'), Interval(1, 2)),
            QueryRegion(ReferenceName('chr2'), Interval(0, 1)),
        ]
        stream = RecordStream(records, 'query')
        assert len(list(stream)) == 3
        assert len(stream.closed) == 2
        assert ReferenceName('chr1') in stream.closed
        assert ReferenceName('1') in stream.closed
        assert ReferenceName('2') in stream.closed
