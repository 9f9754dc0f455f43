"""
Provides convenience interface for writing alignment data.

Records are written from their raw encoding, so a record read by one of the readers is reproduced byte for byte.
"""

import zlib

from . import bgzf


class Writer:
    """
    Base class of the alignment writers. Instances are callables that accept one AlignmentRecord per call.
    """

    def __init__(self, output):
        self._output = output
        self.count = 0

    @staticmethod
    def bam(output, raw_header: bytes, compressed=True, level=zlib.Z_DEFAULT_COMPRESSION) -> 'Writer':
        """
        Begin BAM output.
        :param output: Binary stream to write to.
        :param raw_header: Encoded BAM header, from the magic to the last reference entry.
        :param compressed: Write BGZF compressed BAM if True, uncompressed BAM otherwise.
        :param level: zlib compression level used for BGZF output.
        :return: Writer instance.
        """
        if compressed:
            writer = BGZFWriter(output, level)
        else:
            writer = StreamWriter(output)
        writer.write_header(raw_header)
        return writer

    @staticmethod
    def sam(output, header: bytes = b'', compressed=False, level=zlib.Z_DEFAULT_COMPRESSION) -> 'Writer':
        """
        Begin SAM output.
        :param output: Binary stream to write to.
        :param header: SAM header text, written unchanged.
        :param compressed: Write BGZF compressed SAM if True, plain text otherwise.
        :param level: zlib compression level used for BGZF output.
        :return: Writer instance.
        """
        if compressed:
            writer = BGZFWriter(output, level, terminator=b'\n')
        else:
            writer = StreamWriter(output, terminator=b'\n')
        writer.write_header(header)
        return writer

    def write_header(self, header: bytes):
        raise NotImplementedError()

    def __call__(self, record):
        raise NotImplementedError()

    def finalize(self):
        """
        Complete the container. The output stream is not closed.
        :return: None
        """
        pass


class StreamWriter(Writer):
    """
    Writes uncompressed data directly to the output stream.
    """

    def __init__(self, output, terminator=b''):
        super().__init__(output)
        self._terminator = terminator

    def write_header(self, header: bytes):
        self._output.write(header)

    def __call__(self, record):
        self._output.write(record.raw + self._terminator)
        self.count += 1


class BGZFWriter(Writer):
    """
    Writes BGZF compressed data.
    The header occupies its own blocks, and a record that fits in a single block is never split across two.
    """

    def __init__(self, output, level=zlib.Z_DEFAULT_COMPRESSION, terminator=b''):
        super().__init__(bgzf.Writer(output, level))
        self._terminator = terminator

    def write_header(self, header: bytes):
        if header:
            self._output(header)
            self._output.finish_block()

    def __call__(self, record):
        data = record.raw + self._terminator
        if len(data) <= bgzf.MAX_DATA_SIZE and self._output.block_remaining() < len(data):
            self._output.finish_block()
        self._output(data)
        self.count += 1

    def finalize(self):
        self._output.finalize()
