from ..constants import Namespace

NO_MATCH = '.'
"""str: gene name given to a region with no overlapping feature"""

MANE_SELECT_TAG = 'MANE_Select'
PROTEIN_CODING = 'protein_coding'


class FEATURE_TYPE(Namespace):
    """
    holds controlled vocabulary for the annotation feature types that take part in ranking.
    Any other feature type in the annotation file is treated as OTHER
    """

    CDS: str = 'CDS'
    STOP_CODON: str = 'stop_codon'
    START_CODON: str = 'start_codon'
    UTR: str = 'UTR'
    EXON: str = 'exon'
    TRANSCRIPT: str = 'transcript'
    GENE: str = 'gene'
    OTHER: str = 'other'

    @classmethod
    def normalize(cls, feature_type: str) -> str:
        """
        Example:
            >>> FEATURE_TYPE.normalize('five_prime_UTR')
            'UTR'
            >>> FEATURE_TYPE.normalize('Selenocysteine')
            'other'
        """
        feature_type = FEATURE_TYPE_ALIASES.get(feature_type, feature_type)
        if feature_type in FEATURE_TYPE_RANK:
            return feature_type
        return cls.OTHER


FEATURE_TYPE_ALIASES = {
    'five_prime_UTR': FEATURE_TYPE.UTR,
    'three_prime_UTR': FEATURE_TYPE.UTR,
    'five_prime_utr': FEATURE_TYPE.UTR,
    'three_prime_utr': FEATURE_TYPE.UTR,
    'mRNA': FEATURE_TYPE.TRANSCRIPT,
}

FEATURE_TYPE_RANK = {
    FEATURE_TYPE.CDS: 7,
    FEATURE_TYPE.STOP_CODON: 6,
    FEATURE_TYPE.START_CODON: 5,
    FEATURE_TYPE.UTR: 4,
    FEATURE_TYPE.EXON: 3,
    FEATURE_TYPE.TRANSCRIPT: 2,
    FEATURE_TYPE.GENE: 1,
    FEATURE_TYPE.OTHER: 0,
}
"""dict: feature type to rank, higher ranks are preferred"""


class TSL(Namespace):
    """
    transcript support level values. 1 is the best supported, NA is not analysed
    """

    TSL1: str = '1'
    TSL2: str = '2'
    TSL3: str = '3'
    TSL4: str = '4'
    TSL5: str = '5'
    NA: str = 'NA'


TSL_RANK = {TSL.TSL1: 5, TSL.TSL2: 4, TSL.TSL3: 3, TSL.TSL4: 2, TSL.TSL5: 1, TSL.NA: 0}

CONFIDENCE_RANK = {1: 3, 2: 2, 3: 1}
"""dict: annotation confidence level to rank, a missing level ranks below all of these"""
