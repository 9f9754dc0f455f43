"""
Provides a raw stream that inflates BGZF blocks on demand.
"""

import io
import warnings

from ..errors import TruncatedFileWarning
from .block import Block


class Reader(io.RawIOBase):
    """
    Exposes the uncompressed content of a BGZF stream through the io.RawIOBase interface.
    Only one block is held in memory at a time. Wrap in io.BufferedReader for line and peek access.
    """

    def __init__(self, input, peek=None):
        """
        Constructor.
        :param input: Binary stream positioned at the start of a block.
        :param peek: Data consumed from stream while peeking. Will be prepended to read data.
        """
        super().__init__()
        self._input = input
        self._peek = peek
        self._buffer = b''
        self._offset = 0
        self._last_empty = False
        self._eof = False
        self.total_in = 0
        self.total_out = 0

    def readable(self):
        return True

    def _next_block(self) -> bool:
        """
        Inflate the next block into the internal buffer.
        :return: False once the underlying stream is exhausted.
        """
        try:
            block, cdata = Block.from_stream(self._input, self._peek)
        except EOFError:
            if not self._last_empty:
                warnings.warn("Missing EOF marker, data is possibly truncated.", TruncatedFileWarning)
            self._eof = True
            return False
        self._peek = None
        self._buffer = block.inflate(cdata)
        self._offset = 0
        self._last_empty = not self._buffer
        self.total_in += len(block)
        self.total_out += len(self._buffer)
        return True

    def readinto(self, b):
        while self._offset >= len(self._buffer):
            if self._eof or not self._next_block():
                return 0
        count = min(len(b), len(self._buffer) - self._offset)
        b[:count] = self._buffer[self._offset:self._offset + count]
        self._offset += count
        return count

    def close(self):
        if not self.closed:
            self._input.close()
        super().close()
