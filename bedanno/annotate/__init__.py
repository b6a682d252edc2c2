"""
Sub-package Documentation
==========================

Annotates genomic regions with the name of the gene which best overlaps them


Algorithm Overview
----------------------

- read the BED regions for the next chromosome (regions of a chromosome must be contiguous)
- read the annotation file until every feature for that chromosome has been loaded into the
  feature index. Features for other chromosomes seen along the way are kept until their
  regions are read
- for each region, collect the overlapping features and pick the best by priority
    1. feature type (CDS > stop_codon > start_codon > UTR > exon > transcript > gene > other)
    2. MANE select transcript
    3. transcript support level (1 > 2 > 3 > 4 > 5 > NA)
    4. annotation confidence level (1 > 2 > 3)
    5. protein coding transcript
    6. fraction of the region covered by the feature
- output the region row with the gene name appended (``.`` when nothing overlaps)
- release the features of the chromosome
"""
