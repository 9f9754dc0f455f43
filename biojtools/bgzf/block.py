import ctypes as C
import zlib

from .util import BGZF_SUBFIELD, InvalidBGZF, MAX_BLOCK_SIZE

SIZEOF_UINT16 = C.sizeof(C.c_uint16)
FIXED_XLEN_HEADER = b'\x1f\x8b\x08\x04\x00\x00\x00\x00\x00\xff\x06\x00\x42\x43\x02\x00'
WBITS = -15  # raw deflate, the GZIP framing is handled here

FEXTRA = 1 << 2  # RFC 1952 FLG bit


class Header(C.LittleEndianStructure):
    """
    Represents BGZF/GZIP block header.
    """
    _pack_ = 1
    _fields_ = [
        ("id1", C.c_uint8),  # ID1   gzip IDentifier1            uint8 31
        ("id2", C.c_uint8),  # ID2   gzip IDentifier2            uint8 139
        ("compression_method", C.c_uint8),  # CM    gzip Compression Method     uint8 8
        ("flag", C.c_uint8),  # FLG   gzip FLaGs                  uint8 4
        ("modification_time", C.c_uint32),  # MTIME gzip Modification TIME      uint32
        ("extra_flags", C.c_uint8),  # XFL   gzip eXtra FLags            uint8
        ("os", C.c_uint8),  # OS    gzip Operating System       uint8
        ("extra_length", C.c_uint16)  # XLEN  gzip eXtra LENgth           uint16
    ]


SIZEOF_HEADER = C.sizeof(Header)


class SubField(C.LittleEndianStructure):
    """
    Represents a BGZF/GZIP block subfield header.
    """
    _pack_ = 1
    _fields_ = [
        ("SI1", C.c_uint8),  # SI1 Subfield Identifier1        uint8 66
        ("SI2", C.c_uint8),  # SI2 Subfield Identifier2        uint8 67
        ("SLEN", C.c_uint16)  # SLEN Subfield LENgth uint16 t 2
    ]


SIZEOF_SUBFIELD = C.sizeof(SubField)


class Trailer(C.LittleEndianStructure):
    """
    Represents BGZF/GZIP block trailer.
    """
    _pack_ = 1
    _fields_ = [
        ("CRC32", C.c_uint32),  # CRC32 CRC-32                      uint32
        ("uncompressed_size", C.c_uint32)  # ISIZE Input SIZE (length of uncompressed data) uint32
    ]


SIZEOF_TRAILER = C.sizeof(Trailer)
MAX_CDATA_SIZE = MAX_BLOCK_SIZE - len(FIXED_XLEN_HEADER) - SIZEOF_UINT16 - SIZEOF_TRAILER
MAX_DATA_SIZE = 0xff00
"""int: Uncompressed bytes packed per block, leaves room for incompressible data to still fit in MAX_CDATA_SIZE."""


class Block:
    """
    Represents BGZF/GZIP block.
    """
    __slots__ = '_header', '_trailer', 'size'

    def __init__(self, header: Header, extra_fields: dict, trailer: Trailer):
        """
        Constructor.
        :param header: Header object instance.
        :param extra_fields: Dictionary of extra fields keyed by the two byte identifier.
        :param trailer: Trailer object instance.
        """
        self._header = header
        self.size = Block._get_size(extra_fields)
        self._trailer = trailer

    @property
    def CRC32(self):
        return self._trailer.CRC32

    @property
    def uncompressed_size(self):
        return self._trailer.uncompressed_size

    def __len__(self):
        return self.size

    def inflate(self, cdata) -> bytes:
        """
        Decompress the block payload and verify it against the trailer.
        :param cdata: Compressed data returned alongside this block by from_stream() or from_buffer().
        :return: bytes containing the uncompressed data.
        """
        try:
            data = zlib.decompress(cdata, WBITS, self.uncompressed_size or 1)
        except zlib.error as e:
            raise InvalidBGZF("Corrupt deflate data: {}".format(e)) from e
        if len(data) != self.uncompressed_size:
            raise InvalidBGZF("Block size mismatch, expected {} bytes got {}.".format(self.uncompressed_size, len(data)))
        if zlib.crc32(data) != self.CRC32:
            raise InvalidBGZF("Block CRC32 mismatch.")
        return data

    @staticmethod
    def from_buffer(buffer, offset=0) -> ('Block', memoryview):
        """
        Load a block from a buffer.
        This references the buffer data and does not copy in memory.
        :param buffer: Buffer to read from.
        :param offset: Offset into buffer pointing to first block byte.
        :return: Tuple containing: (Block instance, memoryview containing compressed block data).
        """
        start = offset
        buffer = memoryview(buffer)
        if len(buffer) < offset + SIZEOF_HEADER:
            raise InvalidBGZF("Truncated block header.")
        header = Header.from_buffer_copy(buffer, offset)
        Block._check_header(header)

        # Parse extra fields
        offset += SIZEOF_HEADER
        extra_fields = Block._parse_extra(buffer[offset: offset + header.extra_length])

        offset += header.extra_length
        block_size = Block._get_size(extra_fields)
        trailer_start = start + block_size - SIZEOF_TRAILER
        if len(buffer) < start + block_size or trailer_start < offset:
            raise InvalidBGZF("Truncated block.")
        trailer = Trailer.from_buffer_copy(buffer, trailer_start)

        return Block(header, extra_fields, trailer), buffer[offset: trailer_start]

    @staticmethod
    def from_stream(stream, _magic=None) -> ('Block', memoryview):
        """
        Load a block from a stream.
        This copies the stream data into memory.
        :param stream: Stream to read from.
        :param _magic: Data consumed from stream while peeking. Will be prepended to read data.
        :return: Tuple containing: (Block instance, memoryview containing compressed block data).
        """
        # Provide a friendly way of peeking into a stream for data type discovery
        header_buffer = bytearray(_magic or b'') + stream.read(SIZEOF_HEADER - len(_magic or b''))
        if not header_buffer:
            raise EOFError()
        if len(header_buffer) != SIZEOF_HEADER:
            raise InvalidBGZF("Truncated block header.")
        header = Header.from_buffer(header_buffer)
        Block._check_header(header)

        extra_fields_buffer = bytearray(stream.read(header.extra_length))
        if len(extra_fields_buffer) != header.extra_length:
            raise InvalidBGZF("Truncated block extra field.")
        extra_fields = Block._parse_extra(extra_fields_buffer)

        data_size = Block._get_size(extra_fields) - SIZEOF_HEADER - SIZEOF_TRAILER - header.extra_length
        if data_size < 0:
            raise InvalidBGZF("Block size smaller than its header.")
        buffer = memoryview(stream.read(data_size))
        if len(buffer) != data_size:
            raise InvalidBGZF("Truncated block data.")

        trailer = bytearray(stream.read(SIZEOF_TRAILER))
        if len(trailer) != SIZEOF_TRAILER:
            raise InvalidBGZF("Truncated block trailer.")
        trailer = Trailer.from_buffer(trailer)

        return Block(header, extra_fields, trailer), buffer

    @staticmethod
    def deflate(data, level=zlib.Z_DEFAULT_COMPRESSION) -> bytes:
        """
        Compress data into a complete BGZF block.
        :param data: Uncompressed data, no more than MAX_DATA_SIZE bytes.
        :param level: zlib compression level from 0-9, -1 for the zlib default.
        :return: bytes containing the encoded block.
        """
        if len(data) > MAX_DATA_SIZE:
            raise ValueError("Block data can not exceed {} bytes.".format(MAX_DATA_SIZE))
        compressor = zlib.compressobj(level, zlib.DEFLATED, WBITS)
        cdata = compressor.compress(data) + compressor.flush()
        if len(cdata) > MAX_CDATA_SIZE:
            # Incompressible data, store it instead
            compressor = zlib.compressobj(0, zlib.DEFLATED, WBITS)
            cdata = compressor.compress(data) + compressor.flush()
        block_size = len(FIXED_XLEN_HEADER) + SIZEOF_UINT16 + len(cdata) + SIZEOF_TRAILER
        trailer = Trailer(zlib.crc32(data), len(data))
        return b''.join((FIXED_XLEN_HEADER, (block_size - 1).to_bytes(SIZEOF_UINT16, 'little'), cdata, bytes(trailer)))

    @staticmethod
    def _check_header(header):
        if header.id1 != 31 or header.id2 != 139:
            raise InvalidBGZF("Invalid block header found: ID1: {} ID2: {}".format(header.id1, header.id2))
        if not header.flag & FEXTRA:
            raise InvalidBGZF("Block has no extra field.")

    @staticmethod
    def _parse_extra(buffer) -> dict:
        """
        Parse GZIP formatted extra data fields into dictionary.
        :param buffer: Buffer containing extra field data.
        :return: Dict containing field values keyed on two byte field identifier.
        """
        extra_fields = {}
        field_offset = 0
        while field_offset + SIZEOF_SUBFIELD <= len(buffer):
            field = SubField.from_buffer_copy(buffer, field_offset)
            field_start = field_offset + SIZEOF_SUBFIELD
            extra_fields[bytes((field.SI1, field.SI2))] = bytes(buffer[field_start: field_start + field.SLEN])
            field_offset = field_start + field.SLEN
        return extra_fields

    @staticmethod
    def _get_size(extra_fields) -> int:
        """
        Helper to parse BGZF block size subfield.
        :param extra_fields: Dict returned from _parse_extra().
        :return: Total size of block.
        """
        # Load BGZF required BC field
        BC = extra_fields.get(BGZF_SUBFIELD)
        if BC and len(BC) == SIZEOF_UINT16:
            return int.from_bytes(BC, byteorder='little', signed=False) + 1
        raise InvalidBGZF("Missing block size field.")
