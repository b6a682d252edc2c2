"""
module responsible for small utility functions and constants used throughout the bedanno package
"""
from typing import Any, List, Tuple

PROGNAME: str = 'bedanno'
EXIT_OK: int = 0
EXIT_ERROR: int = 1


class Namespace:
    """
    Namespace to hold module constants. Constants are declared as class attributes

    Example:
        >>> class THING(Namespace):
        ...     FIRST: str = 'first'
        ...     SECOND: str = 'second'
        >>> THING.values()
        ['first', 'second']
    """

    @classmethod
    def keys(cls) -> List[str]:
        """
        get the attribute keys as a list, in the order they were declared
        """
        keys = []
        for base in reversed(cls.__mro__):
            for attr in vars(base):
                if attr.startswith('_') or attr in keys:
                    continue
                if isinstance(vars(base)[attr], (classmethod, staticmethod)) or callable(
                    vars(base)[attr]
                ):
                    continue
                keys.append(attr)
        return keys

    @classmethod
    def values(cls) -> List[Any]:
        return [getattr(cls, k) for k in cls.keys()]

    @classmethod
    def items(cls) -> List[Tuple[str, Any]]:
        return [(k, getattr(cls, k)) for k in cls.keys()]

    @classmethod
    def enforce(cls, value):
        """
        checks that the current namespace has a given value

        Returns:
            the input value

        Raises:
            KeyError: the value did not exist

        Example:
            >>> GFF_TYPE.enforce('GTF2')
            'GTF2'
            >>> GFF_TYPE.enforce('BAM')
            Traceback (most recent call last):
            ....
        """
        if value not in cls.values():
            raise KeyError('value {0} is not a valid member of '.format(repr(value)), cls.values())
        return value

    @classmethod
    def reverse(cls, value) -> str:
        """
        for a given value, return the associated key

        Raises:
            KeyError: the value is not unique
            KeyError: the value is not assigned
        """
        result = [key for key, val in cls.items() if val == value]
        if len(result) > 1:
            raise KeyError('could not reverse, the mapping is not unique', value, result)
        elif not result:
            raise KeyError('input value is not assigned to a key', value)
        return result[0]


class GFF_TYPE(Namespace):
    """
    holds controlled vocabulary for the supported annotation file dialects

    Attributes:
        GTF2: GTF, attributes written as ``key "value";``
        GFF2: GFF2.5, same attribute syntax as GTF
        GFF3: GFF3, attributes written as ``key=value;``
    """

    GTF2: str = 'GTF2'
    GFF2: str = 'GFF2'
    GFF3: str = 'GFF3'

    @classmethod
    def from_extension(cls, filename: str) -> str:
        """
        Example:
            >>> GFF_TYPE.from_extension('gencode.v43.basic.annotation.gtf.gz')
            'GTF2'
            >>> GFF_TYPE.from_extension('genes.gff')
            'GFF3'
        """
        name = filename[:-3] if filename.endswith('.gz') else filename
        if name.endswith('.gff') or name.endswith('.gff3'):
            return cls.GFF3
        elif name.endswith('.gff2'):
            return cls.GFF2
        elif name.endswith('.gtf'):
            return cls.GTF2
        raise ValueError(
            'Reference must be a GFF or GTF file, or genome name (hg38 is supported)', filename
        )


class STREAM(Namespace):
    """
    names of the two input streams, used in error reporting
    """

    QUERY: str = 'query'
    ANNOTATION: str = 'annotation'
