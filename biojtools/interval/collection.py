"""
Loading of BED style interval files.
"""

import gzip
import logging
import zlib
from collections import namedtuple

import numpy as np

from ..bgzf import is_gzip
from ..errors import IoError, ParseError

log = logging.getLogger(__name__)

FIELD_SEPARATOR = '\t'
MIN_FIELDS = 3
MAX_COORDINATE = 2 ** 62
"""int: Coordinates must stay well inside int64 so that lengths and sums can not overflow."""

COMMENT = '#'
DIRECTIVES = ('track', 'browser')
"""tuple: First words of display directive lines, these are not intervals."""

Interval = namedtuple('Interval', 'contig start end')
"""namedtuple: Half open interval [start, end) on contig."""


class IntervalCollection:
    """
    Intervals grouped by contig.
    Coordinates are held as numpy int64 arrays in file order and are not modified once loaded.
    """

    def __init__(self, contigs: dict, path=None):
        """
        Constructor.
        :param contigs: dict of contig name to a tuple of (starts, ends) int64 arrays of equal length.
        :param path: Source of the intervals, used as the default label.
        """
        self.contigs = contigs
        self.path = path
        for starts, ends in contigs.values():
            starts.flags.writeable = False
            ends.flags.writeable = False

    @classmethod
    def from_intervals(cls, intervals, path=None) -> 'IntervalCollection':
        """
        Build a collection from (contig, start, end) tuples.
        :param intervals: Iterable of Interval or equivalent tuples.
        :param path: Label of the collection.
        :return: IntervalCollection
        """
        grouped = {}
        for contig, start, end in intervals:
            if not 0 <= start <= end:
                raise ValueError("Invalid interval {}:{}-{}".format(contig, start, end))
            starts, ends = grouped.setdefault(contig, ([], []))
            starts.append(start)
            ends.append(end)
        return cls({contig: (np.array(starts, dtype=np.int64), np.array(ends, dtype=np.int64))
                    for contig, (starts, ends) in grouped.items()}, path)

    def __len__(self):
        return sum(len(starts) for starts, _ in self.contigs.values())

    def __iter__(self):
        for contig, (starts, ends) in self.contigs.items():
            for start, end in zip(starts.tolist(), ends.tolist()):
                yield Interval(contig, start, end)

    def __repr__(self):
        return "IntervalCollection({!r}, contigs={}, intervals={})".format(self.path, len(self.contigs), len(self))


def _parse_coordinate(value, path, line_number):
    try:
        coordinate = int(value)
    except ValueError as e:
        raise ParseError("Non-numeric coordinate {!r}.".format(value), path, line_number) from e
    if not 0 <= coordinate <= MAX_COORDINATE:
        raise ParseError("Coordinate {} out of range.".format(coordinate), path, line_number)
    return coordinate


def _parse(lines, path):
    for line_number, line in enumerate(lines, 1):
        line = line.rstrip('\r\n')
        if not line.strip() or line.startswith(COMMENT) or line.split(None, 1)[0] in DIRECTIVES:
            continue
        fields = line.split(FIELD_SEPARATOR)
        if len(fields) < MIN_FIELDS:
            raise ParseError("Expected at least {} tab separated fields, found {}.".format(MIN_FIELDS, len(fields)), path, line_number)
        contig = fields[0]
        if not contig:
            raise ParseError("Empty contig name.", path, line_number)
        start = _parse_coordinate(fields[1], path, line_number)
        end = _parse_coordinate(fields[2], path, line_number)
        if start > end:
            raise ParseError("Start {} is greater than end {}.".format(start, end), path, line_number)
        yield Interval(contig, start, end)


def load(path) -> IntervalCollection:
    """
    Load a BED style file of one interval per line: contig<TAB>start<TAB>end, further fields are ignored.
    Blank lines, comments (#) and lines whose first word is track or browser are skipped. GZIP or BGZF compressed files are accepted.
    :param path: Path to the interval file.
    :return: IntervalCollection
    """
    try:
        with open(path, 'rb') as raw:
            compressed = is_gzip(raw.read(2))
        opener = gzip.open if compressed else open
        with opener(path, 'rt', encoding='utf-8') as lines:
            collection = IntervalCollection.from_intervals(_parse(lines, path), path)
    except UnicodeDecodeError as e:
        raise ParseError("File is not text: {}".format(e), path) from e
    except (OSError, EOFError, zlib.error) as e:
        raise IoError("Can not read intervals: {}".format(getattr(e, 'strerror', None) or e), path) from e
    log.debug("%s: loaded %d intervals on %d contigs", path, len(collection), len(collection.contigs))
    return collection
