"""
Provides convenience interface to write data to BGZF blocks.
"""

import zlib

from .block import Block, MAX_DATA_SIZE
from .util import EMPTY_BLOCK


class Writer:
    """
    Callable that compresses the data passed to it into BGZF blocks written to a stream.
    Data is buffered until a block is full or finish_block() is called.
    """

    def __init__(self, output, level=zlib.Z_DEFAULT_COMPRESSION):
        """
        Constructor.
        :param output: Binary stream to write blocks to.
        :param level: zlib compression level from 0-9, -1 for the zlib default.
        """
        self._output = output
        self._level = level
        self._data = bytearray()
        self.total_in = 0
        self.total_out = 0

    def block_remaining(self) -> int:
        """
        Amount of uncompressed data that can still be added to the current block.
        :return: Amount of remaining space in bytes.
        """
        return MAX_DATA_SIZE - len(self._data)

    def __call__(self, data):
        """
        Pass data to the compressor.
        Passing data larger than the remaining block space will result in the data being split between blocks.
        To guarantee that data is compressed into the same block check block_remaining() before submitting the data.
        :param data: Data to add to compression stream.
        :return: None
        """
        data = memoryview(data).cast('B')
        offset = 0
        while offset < len(data):
            take = min(self.block_remaining(), len(data) - offset)
            self._data += data[offset:offset + take]
            offset += take
            if not self.block_remaining():
                self.finish_block()

    def finish_block(self):
        """
        Compress and write out any buffered data as a block.
        :return: None
        """
        if not self._data:
            return
        block = Block.deflate(bytes(self._data), self._level)
        self._output.write(block)
        self.total_in += len(self._data)
        self.total_out += len(block)
        self._data = bytearray()

    def finalize(self):
        """
        Write out remaining data followed by the empty block marking EOF.
        The output stream is not closed.
        :return: None
        """
        self.finish_block()
        self._output.write(EMPTY_BLOCK)
        self.total_out += len(EMPTY_BLOCK)
