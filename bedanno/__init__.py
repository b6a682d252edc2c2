"""
annotates genomic regions (BED) with the name of the best overlapping gene from a gene model (GTF/GFF)
"""
__version__ = '1.0.0'
