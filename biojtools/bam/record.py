import ctypes as C
from enum import IntFlag

from ..record import AlignmentRecord
from .util import InvalidBAM, read_exact

SIZEOF_INT32 = C.sizeof(C.c_int32)


class RecordFlags(IntFlag):
    """
    Represents flag bit values. Can be OR'd (|) together or AND (&) to determine flag setting.
    """
    MULTISEG = 1 << 0  # template having multiple segments in sequencing
    ALIGNED = 1 << 1  # each segment properly aligned according to the aligner
    UNMAPPED = 1 << 2  # segment unmapped
    MATE_UNMAPPED = 1 << 3  # next segment in the template unmapped
    REVERSE_COMPLIMENTED = 1 << 4  # SEQ being reverse complemented
    MATE_REVERSED = 1 << 5  # SEQ of the next segment in the template being reversed
    READ1 = 1 << 6  # the first segment in the template
    READ2 = 1 << 7  # the last segment in the template
    SECONDARY = 1 << 8  # secondary alignment
    QCFAIL = 1 << 9  # not passing quality controls
    DUPLICATE = 1 << 10  # PCR or optical duplicate
    SUPPLEMENTARY = 1 << 11  # supplementary alignment


class RecordHeader(C.LittleEndianStructure):
    """
    Represents a BAM record header in memory
    """
    _pack_ = 1
    _fields_ = [
        ("block_size", C.c_int32),  # block_size Length of the remainder of the alignment record int32 t
        ("reference_id", C.c_int32),  # refID Reference sequence ID, −1 ≤ refID < n ref; -1 for a read without a mapping position. int32 t [-1]
        ("position", C.c_int32),  # pos 0-based leftmost coordinate (= POS − 1) int32 t [-1]
        ("name_length", C.c_uint8),  # l_read_name length of read name below (= length(QNAME) + 1) uint8 t
        ("mapping_quality", C.c_uint8),  # mapq Mapping quality (=MAPQ) uint8 t
        ("bin", C.c_uint16),  # bin BAI index bin uint16 t
        ("cigar_length", C.c_uint16),  # n_cigar_op Number of operations in CIGAR uint16 t
        ("flag", C.c_uint16),  # flag Bitwise flags (= FLAG) uint16 t
        ("sequence_length", C.c_int32),  # l_seq Length of SEQ int32 t
        ("next_reference_id", C.c_int32),  # next_refID Ref-ID of the next segment (−1 ≤ mate refID < n ref) int32 t [-1]
        ("next_position", C.c_int32),  # next_pos 0-based leftmost pos of the next segment (= PNEXT − 1) int32 t [-1]
        ("template_length", C.c_int32),  # tlen Template length (= TLEN) int32 t [0]
    ]

    def __len__(self):
        return SIZEOF_RECORDHEADER


SIZEOF_RECORDHEADER = C.sizeof(RecordHeader)
SIZEOF_BLOCK_SIZE = SIZEOF_INT32


def record_from_stream(stream, references, offset=0):
    """
    Decode the next alignment block.
    :param stream: Uncompressed BAM stream positioned at a block_size field.
    :param references: List of Reference objects from the BAM header.
    :param offset: Position of the block in the uncompressed stream, used for error reporting.
    :return: AlignmentRecord, or None at a clean end of stream.
    """
    block_size = stream.read(SIZEOF_BLOCK_SIZE)
    if not block_size:
        return None
    if len(block_size) != SIZEOF_BLOCK_SIZE:
        raise InvalidBAM("Truncated record block size.", offset)
    size = int.from_bytes(block_size, byteorder='little', signed=True)
    if size < SIZEOF_RECORDHEADER - SIZEOF_BLOCK_SIZE:
        raise InvalidBAM("Record block size {} is smaller than the fixed record fields.".format(size), offset)
    raw = block_size + read_exact(stream, size, offset + SIZEOF_BLOCK_SIZE, "record")
    return record_from_buffer(raw, references, offset)


def record_from_buffer(raw: bytes, references, offset=0):
    """
    Decode an alignment from the bytes of one complete block.
    :param raw: Block data including the leading block_size field.
    :param references: List of Reference objects from the BAM header.
    :param offset: Position of the block in the uncompressed stream, used for error reporting.
    :return: AlignmentRecord holding raw unchanged.
    """
    header = RecordHeader.from_buffer_copy(raw)
    name_end = SIZEOF_RECORDHEADER + header.name_length
    if header.name_length < 2 or name_end > len(raw) or raw[name_end - 1] != 0:
        raise InvalidBAM("Invalid read name.", offset)
    try:
        name = raw[SIZEOF_RECORDHEADER:name_end - 1].decode('ascii')
    except UnicodeDecodeError as e:
        raise InvalidBAM("Read name is not ASCII.", offset) from e
    if not -1 <= header.reference_id < len(references):
        raise InvalidBAM("Reference id {} out of range.".format(header.reference_id), offset)

    if header.flag & RecordFlags.UNMAPPED or header.reference_id == -1:
        reference, position = None, None
    else:
        reference, position = references[header.reference_id].name, header.position
    return AlignmentRecord(name, header.flag, reference, position, raw)
