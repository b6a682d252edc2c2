from typing import Optional

from .error import MalformedIntervalError


class Interval:
    """
    half-open integer interval ``[start, end)``
    """

    def __init__(self, start: int, end: Optional[int] = None):
        """
        Args:
            start: the start of the interval (inclusive)
            end: the end of the interval (exclusive), defaults to an empty interval at start
        """
        start = int(start)
        end = start if end is None else int(end)
        if start < 0:
            raise MalformedIntervalError('interval start cannot be negative', start, end)
        if start > end:
            raise MalformedIntervalError('interval start > end is not allowed', start, end)
        self.start = start
        self.end = end

    def __getitem__(self, index):
        try:
            index = int(index)
        except ValueError:
            raise IndexError('index input accessor must be an integer', index)
        if index == 0:
            return self.start
        elif index == 1:
            return self.end
        raise IndexError('index input accessor is out of bounds: 1 or 2 only', index)

    def __len__(self):
        """
        the length of the interval

        Example:
            >>> len(Interval(1, 11))
            10
        """
        return self.end - self.start

    def length(self) -> int:
        return self.end - self.start

    def __eq__(self, other):
        try:
            return self[0] == other[0] and self[1] == other[1]
        except (TypeError, IndexError):
            return NotImplemented

    def __hash__(self):
        return hash((self.start, self.end))

    def __lt__(self, other):
        if self[0] < other[0]:
            return True
        elif self[0] == other[0] and self[1] < other[1]:
            return True
        return False

    def __repr__(self):
        return '{}({}, {})'.format(self.__class__.__name__, self.start, self.end)

    def __str__(self):
        return '[{}, {})'.format(self.start, self.end)

    def __contains__(self, other):
        try:
            return other[0] >= self[0] and other[1] <= self[1]
        except TypeError:
            return self[0] <= other < self[1]

    @classmethod
    def overlaps(cls, first, other) -> bool:
        """
        checks if two intervals have any portion of their given ranges in common. Empty
        intervals never overlap anything

        Example:
            >>> Interval.overlaps(Interval(1, 4), Interval(4, 7))
            False
            >>> Interval.overlaps((1, 10), (9, 11))
            True
        """
        return max(first[0], other[0]) < min(first[1], other[1])

    @classmethod
    def intersection(cls, *intervals) -> Optional['Interval']:
        """
        returns None if there is no intersection

        Example:
            >>> Interval.intersection((1, 10), (2, 8), (7, 15))
            Interval(7, 8)
            >>> Interval.intersection((1, 2), (5, 9)) is None
            True
        """
        if len(intervals) < 1:
            raise AttributeError('cannot compute the intersection of an empty set of intervals')
        low = max([i[0] for i in intervals])
        high = min([i[1] for i in intervals])
        if low >= high:
            return None
        return Interval(low, high)

    @classmethod
    def overlap_fraction(cls, query, other) -> float:
        """
        the size of the intersection of two intervals divided by the size of the first

        Example:
            >>> Interval.overlap_fraction(Interval(10, 50), Interval(5, 45))
            0.875
        """
        shared = cls.intersection(query, other)
        if shared is None:
            return 0.0
        return len(shared) / (query[1] - query[0])
