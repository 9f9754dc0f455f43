"""
Base pair Jaccard similarity between interval collections.

Intersection and union are measured in bases: the intervals of each collection are merged, the merged forms are
swept together per contig to find the overlapping length, and
    union = covered(A) + covered(B) - intersection
The ratio is intersection / union, and 0 when the union is empty.
"""

import csv
import logging
from collections import deque, namedtuple
from concurrent.futures import ThreadPoolExecutor
from itertools import combinations

import numba

from ..util import CACHE_JIT, DEFAULT_THREADS, THREAD_NAME
from .collection import load
from .tree import index

log = logging.getLogger(__name__)

JaccardResult = namedtuple('JaccardResult', 'a b intersection union ratio')
"""namedtuple: Similarity of the collections labelled a and b."""

COLUMNS = ('collectionA', 'collectionB', 'intersection', 'union', 'ratio')


@numba.jit(nopython=True, nogil=True, cache=CACHE_JIT)
def intersection_length(a_starts, a_ends, b_starts, b_ends):
    """
    Sweep two sorted, merged interval lists.
    :return: Number of bases covered by both.
    """
    i = 0
    j = 0
    total = 0
    while i < a_starts.shape[0] and j < b_starts.shape[0]:
        lo = max(a_starts[i], b_starts[j])
        hi = min(a_ends[i], b_ends[j])
        if hi > lo:
            total += hi - lo
        if a_ends[i] < b_ends[j]:
            i += 1
        else:
            j += 1
    return total


def jaccard(a, b) -> JaccardResult:
    """
    Compute the similarity of two indexed collections.
    :param a: PerContigIndex
    :param b: PerContigIndex
    :return: JaccardResult labelled with the index names.
    """
    intersection = 0
    for contig in a.contigs.keys() & b.contigs.keys():
        x, y = a.contigs[contig], b.contigs[contig]
        intersection += int(intersection_length(x.merged_starts, x.merged_ends, y.merged_starts, y.merged_ends))
    union = a.covered + b.covered - intersection
    ratio = intersection / union if union else 0.0
    log.debug("%s vs %s: %d / %d", a.name, b.name, intersection, union)
    return JaccardResult(a.name, b.name, intersection, union, ratio)


def multijaccard(paths, names=None, threads=DEFAULT_THREADS):
    """
    Compute the similarity of every unordered pair of interval files.
    Files are loaded and indexed in parallel, pairs are computed in parallel and yielded in
    itertools.combinations order. Only a bounded number of pairs are in flight at once.
    :param paths: Paths of the interval files.
    :param names: Optional labels, one per path. Defaults to the paths.
    :param threads: Worker pool size.
    :return: Generator of JaccardResult.
    """
    paths = list(paths)
    if names is None:
        names = paths
    else:
        names = list(names)
        if len(names) != len(paths):
            raise ValueError("Expected {} names, got {}.".format(len(paths), len(names)))

    backlog = max(1, threads) * 2
    with ThreadPoolExecutor(max_workers=max(1, threads), thread_name_prefix=THREAD_NAME) as pool:
        indexes = list(pool.map(lambda args: index(load(args[0]), args[1]), zip(paths, names)))
        pending = deque()
        for pair in combinations(indexes, 2):
            pending.append(pool.submit(jaccard, *pair))
            if len(pending) >= backlog:
                yield pending.popleft().result()
        while pending:
            yield pending.popleft().result()


def write_table(results, output, delimiter=',') -> int:
    """
    Write results as a delimited table with a header row, one row per result as it arrives.
    :param results: Iterable of JaccardResult.
    :param output: Text stream.
    :param delimiter: Field separator.
    :return: Number of rows written, excluding the header.
    """
    writer = csv.writer(output, delimiter=delimiter, lineterminator='\n')
    writer.writerow(COLUMNS)
    count = 0
    for result in results:
        writer.writerow(result)
        output.flush()
        count += 1
    return count
