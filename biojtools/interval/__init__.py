"""
This subpackage contains the interval set engine.

Classes:
    IntervalCollection: Intervals of one BED file grouped by contig.
    PerContigIndex: Overlap index of an IntervalCollection.
    JaccardResult: Base pair similarity of two collections.

Functions:
    load: Parse a BED file into an IntervalCollection.
    index: Build a PerContigIndex.
    jaccard: Similarity of two indexes.
    multijaccard: Similarity of every unordered pair of a list of BED files.
    write_table: Write results as a delimited table.

For more:
    >> help(biojtools.interval.tree) for more information on the overlap index.
    >> help(biojtools.interval.similarity) for more information on how similarity is measured.
"""

from .collection import Interval, IntervalCollection, load
from .tree import ContigIndex, PerContigIndex, index
from .similarity import COLUMNS, JaccardResult, jaccard, multijaccard, write_table
