"""
This subpackage contains all the code needed to work with BGZF compressed data.

Classes:
    Block: Represents a BGZF/GZIP block.
    Reader: Raw stream exposing the uncompressed content of BGZF data.
    Writer: Convenience interface to write compressed data.

Constants:
    EMPTY_BLOCK bytes: This is the byte data representing an empty block. This is used as an EOF marker at the end of BGZF compressed files.
    MAX_BLOCK_SIZE int: This is the maximum BGZF block size imposed by the domain of the two byte block size subfield value.
    MAX_DATA_SIZE int: Uncompressed bytes packed into each block.

For more:
    >> help(biojtools.bgzf.block) for more information on the Block object.
    >> help(biojtools.bgzf.reader) for more information on the Reader object.
    >> help(biojtools.bgzf.writer) for more information on the Writer object.
    >> help(biojtools.bgzf.util) for more information on utility functions including functions to detect BGZF data.
"""

from .block import Block, MAX_DATA_SIZE
from .reader import Reader
from .util import EMPTY_BLOCK, InvalidBGZF, MAX_BLOCK_SIZE, SIZEOF_EMPTY_BLOCK, is_bgzf, is_gzip
from .writer import Writer
