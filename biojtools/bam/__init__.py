"""
This subpackage contains the code required to read and write BAM formatted data.

Classes:
    RecordHeader: ctypes structure of the fixed fields of an alignment block.
    RecordFlags: Enum of FLAG bit values.

Functions:
    header_from_stream: Read the BAM header, keeping its encoded bytes.
    record_from_stream: Decode the next alignment block into an AlignmentRecord.

For more:
    >> help(biojtools.bam.record) for more information on decoding alignment blocks.
    >> help(biojtools.bam.util) for more information on utility functions including functions to work with BAM header data.
"""

from .record import RecordFlags, RecordHeader, SIZEOF_RECORDHEADER, record_from_buffer, record_from_stream
from .util import InvalidBAM, MAGIC, header_from_stream, is_bam, pack_header
