"""
Identifier filter for alignment files.

Records are selected by read name and written to a new file in the container of the input, the header is copied
unchanged and every kept record is written from its raw encoding. The output only replaces the destination once the
whole input has been read without error.
"""

import logging
import re
import zlib
from collections import namedtuple

from .errors import IoError, UnsupportedFormat
from .reader import Compression, Format
from .util import atomic_output
from .writer import Writer

log = logging.getLogger(__name__)

FilterCounts = namedtuple('FilterCounts', 'total written')
"""namedtuple: Records read and records written by filter_records()."""


def read_ids(path) -> set:
    """
    Read a file of identifiers, one per line.
    Surrounding whitespace is removed and blank lines are skipped.
    :param path: Path of the identifier file.
    :return: set of str.
    """
    try:
        with open(path, 'r') as lines:
            return {line.strip() for line in lines if line.strip()}
    except (OSError, UnicodeDecodeError) as e:
        raise IoError("Can not read identifiers: {}".format(getattr(e, 'strerror', None) or e), path) from e


def _open_writer(reader, compression, output, level):
    if reader.format is Format.BAM:
        return Writer.bam(output, reader.raw_header, compression is not Compression.NONE, level)
    return Writer.sam(output, reader.raw_header, compression is not Compression.NONE, level)


def filter_records(stream, ids, output, keep=False, pattern=None, level=zlib.Z_DEFAULT_COMPRESSION) -> FilterCounts:
    """
    Write the records of an alignment stream whose identifier matches (keep=True) or does not match (keep=False).
    An identifier matches when it is in ids or, if given, pattern finds a match in it.
    :param stream: RecordStream of a SAM or BAM file.
    :param ids: Collection of identifiers.
    :param output: Destination path, replaced only on success.
    :param keep: Keep matching records if True, drop them otherwise.
    :param pattern: Regular expression, str or compiled.
    :param level: zlib compression level used for compressed output.
    :return: FilterCounts
    """
    if not stream.format.alignment:
        raise UnsupportedFormat("Filtering is only supported for SAM and BAM files, not {}.".format(stream.format.value), stream.path)
    if isinstance(pattern, str):
        pattern = re.compile(pattern)
    ids = frozenset(ids)

    total = 0
    with stream.open() as reader, atomic_output(output) as out:
        writer = _open_writer(reader, stream.compression, out, level)
        for record in reader:
            total += 1
            matched = record.name in ids or (pattern is not None and pattern.search(record.name) is not None)
            if matched == keep:
                writer(record)
        writer.finalize()

    log.info("%s: wrote %d of %d records to %s", stream.path, writer.count, total, output)
    return FilterCounts(total, writer.count)
