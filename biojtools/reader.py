"""
Provides convenience interface for reading HTS data.

The container of a path is discovered once, from a small prefix of its content, and a RecordStream is returned that
yields Record instances in file order. Every iteration re-opens the path, so a RecordStream can be consumed more than
once but never rewinds mid-stream.
"""

import gzip
import io
import logging
import os
import zlib
from collections import namedtuple
from contextlib import contextmanager
from enum import Enum

from . import bam, bgzf, fastx, sam
from .errors import DecodeError, IoError, UnsupportedFormat

log = logging.getLogger(__name__)

MAGIC_SIZE = 18
"""int: Bytes needed to tell BGZF from plain GZIP."""

PEEK_SIZE = 4096
"""int: Bytes of uncompressed content inspected to determine the container."""


class Format(Enum):
    FASTQ = 'fastq'
    FASTA = 'fasta'
    SAM = 'sam'
    BAM = 'bam'

    @property
    def alignment(self) -> bool:
        return self in (Format.SAM, Format.BAM)


class Compression(Enum):
    NONE = 'none'
    GZIP = 'gzip'
    BGZF = 'bgzf'


Discovery = namedtuple('Discovery', 'format compression')
"""namedtuple: Result of discover()."""

EXTENSIONS = {
    '.fastq': Format.FASTQ,
    '.fq': Format.FASTQ,
    '.fasta': Format.FASTA,
    '.fa': Format.FASTA,
    '.sam': Format.SAM,
}

# Errors raised by the compression layer
COMPRESSION_ERRORS = (bgzf.InvalidBGZF, zlib.error, EOFError, OSError)
# Errors raised while decoding records of a recognised container
RECORD_ERRORS = (bam.InvalidBAM, sam.InvalidSAM, fastx.InvalidFASTX)


def _open_file(path):
    try:
        return open(path, 'rb')
    except OSError as e:
        raise IoError("Can not open: {}".format(e.strerror or e), path) from e


def _open_stream(path, compression: Compression):
    """
    Open path and wrap it so that reads return uncompressed data.
    :param path: Path to open.
    :param compression: Compression of the content.
    :return: Buffered binary stream supporting read() and readline().
    """
    if compression is Compression.GZIP:
        try:
            return gzip.open(path, 'rb')
        except OSError as e:
            raise IoError("Can not open: {}".format(e.strerror or e), path) from e
    raw = _open_file(path)
    if compression is Compression.BGZF:
        return io.BufferedReader(bgzf.Reader(raw))
    return raw


def _from_extension(path):
    root, ext = os.path.splitext(os.fspath(path).lower())
    if ext == '.gz':
        ext = os.path.splitext(root)[1]
    return EXTENSIONS.get(ext)


def _classify(prefix: bytes, path):
    if bam.is_bam(prefix):
        return Format.BAM
    text = prefix.lstrip()
    line, newline, _ = text.partition(b'\n')
    # The first line may run past the peeked prefix
    complete = bool(newline) or len(prefix) < PEEK_SIZE
    if sam.is_sam(line, complete):
        return Format.SAM
    if text.startswith(fastx.FASTQ_DELIMITER):
        return Format.FASTQ
    if text.startswith(fastx.FASTA_DELIMITER):
        return Format.FASTA
    if not complete and _from_extension(path) is Format.SAM:
        return Format.SAM
    return None


def discover(path) -> Discovery:
    """
    Determine the container and compression of a file from the first bytes of its content.
    Empty content is classified by the file extension instead.
    :param path: Path to inspect.
    :return: Discovery tuple of (Format, Compression).
    """
    with _open_file(path) as raw:
        try:
            magic = raw.read(MAGIC_SIZE)
        except OSError as e:
            raise IoError("Can not read: {}".format(e.strerror or e), path) from e

    if bgzf.is_bgzf(magic):
        compression = Compression.BGZF
    elif bgzf.is_gzip(magic):
        compression = Compression.GZIP
    else:
        compression = Compression.NONE

    try:
        with _open_stream(path, compression) as stream:
            prefix = stream.read(PEEK_SIZE)
    except COMPRESSION_ERRORS as e:
        raise IoError("Can not decompress {} data: {}".format(compression.value, e), path) from e

    if prefix.strip():
        format = _classify(prefix, path)
    else:
        format = _from_extension(path)
    if format is None:
        raise UnsupportedFormat("Content does not match FASTQ, FASTA, SAM or BAM.", path)

    log.debug("%s: %s with %s compression", path, format.value, compression.value)
    return Discovery(format, compression)


class _Reader:
    """
    Base class for the per container readers.
    Provides Iterable interface to read in records and translates decoder failures into DecodeError or IoError.
    """
    format = None

    def __init__(self, input, path=None):
        self._input = input
        self.path = path
        self.header = b''
        self.raw_header = b''
        self.references = []
        self.count = 0
        self.offset = None

    @contextmanager
    def _errors(self):
        try:
            yield
        except RECORD_ERRORS as e:
            offset = e.offset if getattr(e, 'offset', None) is not None else self.offset
            raise DecodeError(str(e), self.path, offset, self.count) from e
        except COMPRESSION_ERRORS as e:
            raise IoError("Can not read compressed data: {}".format(e), self.path) from e

    def _next(self):
        """
        Decode the next record.
        :return: Record or None at the end of the data.
        """
        raise NotImplementedError()

    def __iter__(self):
        return self

    def __next__(self):
        with self._errors():
            record = self._next()
        if record is None:
            raise StopIteration()
        self.count += 1
        return record

    def close(self):
        self._input.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


class FASTQReader(_Reader):
    format = Format.FASTQ

    def __init__(self, input, path=None):
        super().__init__(input, path)
        self._records = fastx.read_fastq(input)

    def _next(self):
        return next(self._records, None)


class FASTAReader(_Reader):
    format = Format.FASTA

    def __init__(self, input, path=None):
        super().__init__(input, path)
        self._records = fastx.read_fasta(input)

    def _next(self):
        return next(self._records, None)


class SAMReader(_Reader):
    format = Format.SAM

    def __init__(self, input, path=None):
        super().__init__(input, path)
        with self._errors():
            self.header, self.references, self._pending = sam.header_from_stream(input)
        self.raw_header = self.header
        self._position = len(self.header)

    def _next(self):
        line, self._pending = self._pending, None
        if line is None:
            line = self._input.readline()
        while line and not line.strip():
            self._position += len(line)
            line = self._input.readline()
        if not line:
            return None
        self.offset = self._position
        self._position += len(line)
        return sam.record_from_line(line[:-1] if line.endswith(b'\n') else line)


class BAMReader(_Reader):
    format = Format.BAM

    def __init__(self, input, path=None):
        super().__init__(input, path)
        with self._errors():
            self.raw_header, self.header, self.references = bam.header_from_stream(input)
        self._position = len(self.raw_header)

    def _next(self):
        record = bam.record_from_stream(self._input, self.references, self._position)
        if record is not None:
            self.offset = self._position
            self._position += len(record.raw)
        return record


READERS = {
    Format.FASTQ: FASTQReader,
    Format.FASTA: FASTAReader,
    Format.SAM: SAMReader,
    Format.BAM: BAMReader,
}


class RecordStream:
    """
    Lazy, finite sequence of Records read from one path.
    Iterating opens the path, yields every record in file order and closes it again.
    Use open() directly to access the container header while reading.
    """

    def __init__(self, path, discovery: Discovery):
        self.path = path
        self.format, self.compression = discovery

    def open(self) -> _Reader:
        """
        Open the path and read past any container header.
        :return: Reader instance, usable as a context manager.
        """
        stream = _open_stream(self.path, self.compression)
        try:
            return READERS[self.format](stream, self.path)
        except BaseException:
            stream.close()
            raise

    def __iter__(self):
        with self.open() as reader:
            yield from reader

    def __repr__(self):
        return "RecordStream({!r}, {}, {})".format(self.path, self.format.value, self.compression.value)


def Reader(path) -> RecordStream:
    """
    Convenience interface for reading records from FASTQ/FASTA (plain or GZIP) and SAM/BAM (plain or BGZF) files.
    :param path: Path to the file.
    :return: RecordStream that emits Record instances.
    """
    return RecordStream(path, discover(path))
