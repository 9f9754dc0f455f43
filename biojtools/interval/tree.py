"""
Per contig overlap index.

Each contig is held as an implicit augmented interval tree: intervals sorted by start are laid out as the in-order
traversal of a complete binary tree, where the node at index i has level k when the lowest k bits of i are set and
bit k is clear. maxes[i] is the greatest end in the subtree rooted at i. Queries report every overlap in
O(log n + k) and do not allocate beyond the result array.
"""

import numba
import numpy as np

from ..util import CACHE_JIT
from .collection import Interval

STACK_SIZE = 64
SMALL_SUBTREE = 3
"""int: Subtrees at or below this level are scanned linearly instead of descended."""


@numba.jit(nopython=True, nogil=True, cache=CACHE_JIT)
def index_prepare(starts, ends, maxes):
    """
    Fill maxes for intervals already sorted by start.
    :return: Level of the root node, -1 if there are no intervals.
    """
    n = starts.shape[0]
    if n == 0:
        return -1
    last_i = 0
    last = 0
    for i in range(0, n, 2):
        last_i = i
        maxes[i] = ends[i]
        last = ends[i]
    k = 1
    while (1 << k) <= n:
        x = 1 << (k - 1)
        i0 = (x << 1) - 1
        step = x << 2
        for i in range(i0, n, step):
            el = maxes[i - x]
            er = maxes[i + x] if i + x < n else last
            e = ends[i]
            if el > e:
                e = el
            if er > e:
                e = er
            maxes[i] = e
        # Move last_i to its parent so that out of range right children see the true maximum
        last_i = last_i - x if (last_i >> k) & 1 else last_i + x
        if last_i < n and maxes[last_i] > last:
            last = maxes[last_i]
        k += 1
    return k - 1


@numba.jit(nopython=True, nogil=True, cache=CACHE_JIT)
def index_query(starts, ends, maxes, max_level, qstart, qend, out):
    """
    Find the intervals overlapping [qstart, qend).
    :param out: Array with room for every interval, receives the matching indexes in ascending order.
    :return: Number of matches written to out.
    """
    n = starts.shape[0]
    count = 0
    if max_level < 0:
        return count
    stack_x = np.empty(STACK_SIZE, np.int64)
    stack_k = np.empty(STACK_SIZE, np.int64)
    stack_w = np.empty(STACK_SIZE, np.int64)
    t = 0
    stack_x[t] = (1 << max_level) - 1
    stack_k[t] = max_level
    stack_w[t] = 0
    t += 1
    while t:
        t -= 1
        x = stack_x[t]
        k = stack_k[t]
        w = stack_w[t]
        if k <= SMALL_SUBTREE:
            i0 = (x >> k) << k
            i1 = i0 + (1 << (k + 1)) - 1
            if i1 > n:
                i1 = n
            i = i0
            while i < i1 and starts[i] < qend:
                if qstart < ends[i]:
                    out[count] = i
                    count += 1
                i += 1
        elif w == 0:
            y = x - (1 << (k - 1))
            stack_x[t] = x
            stack_k[t] = k
            stack_w[t] = 1
            t += 1
            if y >= n or maxes[y] > qstart:
                stack_x[t] = y
                stack_k[t] = k - 1
                stack_w[t] = 0
                t += 1
        elif x < n and starts[x] < qend:
            if qstart < ends[x]:
                out[count] = x
                count += 1
            stack_x[t] = x + (1 << (k - 1))
            stack_k[t] = k - 1
            stack_w[t] = 0
            t += 1
    return count


@numba.jit(nopython=True, nogil=True, cache=CACHE_JIT)
def merge(starts, ends, out_starts, out_ends):
    """
    Merge overlapping or adjacent intervals already sorted by start.
    :return: Number of merged intervals written to out_starts and out_ends.
    """
    m = 0
    for i in range(starts.shape[0]):
        if m and starts[i] <= out_ends[m - 1]:
            if ends[i] > out_ends[m - 1]:
                out_ends[m - 1] = ends[i]
        else:
            out_starts[m] = starts[i]
            out_ends[m] = ends[i]
            m += 1
    return m


class ContigIndex:
    """
    Overlap index of the intervals on one contig, along with their merged (non-overlapping) form.
    """
    __slots__ = 'starts', 'ends', 'maxes', 'max_level', 'merged_starts', 'merged_ends', 'covered'

    def __init__(self, starts, ends):
        order = np.lexsort((ends, starts))
        self.starts = np.ascontiguousarray(starts[order], dtype=np.int64)
        self.ends = np.ascontiguousarray(ends[order], dtype=np.int64)
        self.maxes = np.empty_like(self.ends)
        self.max_level = index_prepare(self.starts, self.ends, self.maxes)

        merged_starts = np.empty_like(self.starts)
        merged_ends = np.empty_like(self.ends)
        m = merge(self.starts, self.ends, merged_starts, merged_ends)
        self.merged_starts = merged_starts[:m]
        self.merged_ends = merged_ends[:m]
        self.covered = int((self.merged_ends - self.merged_starts).sum())

    def __len__(self):
        return self.starts.shape[0]

    def query(self, start: int, end: int):
        """
        Find every interval overlapping [start, end).
        :return: Array of indexes into starts and ends, ascending.
        """
        out = np.empty(len(self), dtype=np.int64)
        count = index_query(self.starts, self.ends, self.maxes, self.max_level, start, end, out)
        return out[:count]


class PerContigIndex:
    """
    Read only overlap index of an IntervalCollection.
    """

    def __init__(self, contigs: dict, name=None):
        """
        Constructor.
        :param contigs: dict of contig name to ContigIndex.
        :param name: Label of the indexed collection.
        """
        self.contigs = contigs
        self.name = name

    @property
    def covered(self) -> int:
        """
        Number of bases covered by at least one interval.
        """
        return sum(contig.covered for contig in self.contigs.values())

    def overlaps(self, contig: str, start: int, end: int):
        """
        Find every interval overlapping [start, end) on contig.
        :return: List of Interval, ordered by start.
        """
        index = self.contigs.get(contig)
        if index is None:
            return []
        return [Interval(contig, int(index.starts[i]), int(index.ends[i])) for i in index.query(start, end)]

    def __len__(self):
        return sum(len(contig) for contig in self.contigs.values())

    def __repr__(self):
        return "PerContigIndex({!r}, contigs={})".format(self.name, len(self.contigs))


def index(collection, name=None) -> PerContigIndex:
    """
    Build the overlap index of a collection.
    :param collection: IntervalCollection to index.
    :param name: Label of the index, defaults to the collection path.
    :return: PerContigIndex
    """
    return PerContigIndex({contig: ContigIndex(starts, ends)
                           for contig, (starts, ends) in collection.contigs.items() if len(starts)},
                          collection.path if name is None else name)
