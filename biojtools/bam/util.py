from typing import List, Tuple

from ..reference import Reference, SIZEOF_INT32

MAGIC = b'BAM\x01'
"""bytes: Magic bytes identifying BAM data"""


def is_bam(buffer, offset=0):
    """
    Helper to determine if passed buffer contains a BAM header.
    :param buffer: Buffer containing unknown data.
    :param offset: Offset into buffer to being reading.
    :return: True if offset points to beginning of a BAM header, False otherwise.
    """
    return buffer[offset:offset + 4] == MAGIC


class InvalidBAM(ValueError):
    """
    Exception to indicate invalid or unexpected data was read while trying to parse BAM formatted data.
    offset is the position in the uncompressed stream where the problem was found.
    """

    def __init__(self, message, offset=None):
        super().__init__(message)
        self.offset = offset


def read_exact(stream, size: int, offset: int, what: str) -> bytes:
    """
    Read exactly size bytes.
    :param stream: Stream to read from.
    :param size: Number of bytes required.
    :param offset: Position of the read in the uncompressed stream, reported on failure.
    :param what: Description of the data being read, reported on failure.
    :return: bytes of length size.
    """
    data = stream.read(size)
    if len(data) != size:
        raise InvalidBAM("Truncated {}, expected {} bytes got {}.".format(what, size, len(data)), offset)
    return data


def _int32(data: bytes) -> int:
    return int.from_bytes(data, byteorder='little', signed=True)


def header_from_stream(stream, _magic=None) -> Tuple[bytes, bytes, List[Reference]]:
    """
    Read in BAM header data.
    Note: SAM formatted header text will likely duplicate the reference data.
    :param stream: Stream positioned at the BAM magic.
    :param _magic: Data consumed from stream while peeking. Will be prepended to read data.
    :return: Tuple containing (bytes of the complete encoded header, SAM formatted header text, list of Reference objects)
    """
    raw = bytearray(_magic or b'')
    raw += read_exact(stream, len(MAGIC) - len(raw), 0, "BAM magic")
    if not is_bam(raw):
        raise InvalidBAM("Invalid BAM header found.", 0)

    l_text = _int32(read_exact(stream, SIZEOF_INT32, len(raw), "header length"))  # l_text Length of the header text, including any NUL padding int32 t
    if l_text < 0:
        raise InvalidBAM("Negative header text length.", len(raw))
    raw += l_text.to_bytes(SIZEOF_INT32, 'little', signed=True)
    text = read_exact(stream, l_text, len(raw), "header text")  # text Plain header text in SAM; not necessarily NUL-terminated char[l text]
    raw += text

    n_ref = _int32(read_exact(stream, SIZEOF_INT32, len(raw), "reference count"))  # n_ref # reference sequences int32 t
    if n_ref < 0:
        raise InvalidBAM("Negative reference count.", len(raw))
    raw += n_ref.to_bytes(SIZEOF_INT32, 'little', signed=True)

    # List of reference information (n=n ref )
    refs = []
    for i in range(n_ref):
        l_name_bytes = read_exact(stream, SIZEOF_INT32, len(raw), "reference name length")
        l_name = _int32(l_name_bytes)  # l_name Length of the reference name plus 1 (including NUL) int32 t
        if l_name < 1:
            raise InvalidBAM("Invalid reference name length {}.".format(l_name), len(raw))
        raw += l_name_bytes
        name = read_exact(stream, l_name, len(raw), "reference name")  # name Reference sequence name; NUL-terminated char[l name]
        raw += name
        l_ref_bytes = read_exact(stream, SIZEOF_INT32, len(raw), "reference length")
        raw += l_ref_bytes  # l_ref Length of the reference sequence int32 t
        refs.append(Reference(name.rstrip(b'\x00').decode('ascii', 'replace'), _int32(l_ref_bytes), i))
    return bytes(raw), bytes(text.rstrip(b'\x00')), refs


def pack_header(sam_header=b'', references=()) -> bytearray:
    """
    Generate BAM header.
    :param sam_header: ASCII encoded SAM header text to include.
    :param references: List of Reference objects. Order of list determines record reference ids.
    :return: bytearray object containing BAM formatted header.
    """
    bam_header = bytearray(MAGIC)
    bam_header += (len(sam_header).to_bytes(SIZEOF_INT32, 'little', signed=True)
                   + sam_header
                   + len(references).to_bytes(SIZEOF_INT32, 'little', signed=True))
    for ref in references:
        bam_header += ref.pack()
    return bam_header
