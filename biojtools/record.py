"""
Record model shared by every reader.

A Record is one of a closed set of variants:
    SequenceRecord: One FASTQ or FASTA entry.
    AlignmentRecord: One SAM line or BAM alignment block.

Records are immutable once a reader has built them and are not retained by consumers.
"""

from collections import namedtuple

ILLUMINA_SEPARATOR = ':'

IlluminaName = namedtuple('IlluminaName', 'instrument flow_cell')
"""namedtuple: Fields recovered from an Illumina read name. flow_cell is None for Casava < 1.8 names."""


def parse_read_name(name: str):
    """
    Split an Illumina style read name into its instrument and flow cell fields.
    Casava >= 1.8: instrument:run:flowcell:lane:tile:x:y
    Casava < 1.8: instrument:lane:tile:x:y#index/pair
    :param name: Read identifier, without the leading delimiter or description.
    :return: IlluminaName or None if the name has neither shape.
    """
    fields = name.split(ILLUMINA_SEPARATOR)
    if not fields[0]:
        return None
    if len(fields) == 7:
        return IlluminaName(fields[0], fields[2] or None)
    if len(fields) == 5:
        return IlluminaName(fields[0], None)
    return None


class Record:
    """
    Base of the record variants. Provides the identifier.
    """
    __slots__ = '_name',

    def __init__(self, name: str):
        if not name:
            raise ValueError("Record identifier can not be empty.")
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def __setattr__(self, key, value):
        if hasattr(self, '_name'):
            raise AttributeError("{} is immutable.".format(type(self).__name__))
        super().__setattr__(key, value)

    def __delattr__(self, item):
        raise AttributeError("{} is immutable.".format(type(self).__name__))

    @property
    def instrument(self):
        """
        Sequencing instrument parsed from the identifier, None if the identifier does not follow an Illumina convention.
        """
        parsed = parse_read_name(self._name)
        return parsed.instrument if parsed else None


class SequenceRecord(Record):
    """
    A FASTQ or FASTA entry. Only the measurements needed downstream are kept, not the sequence itself.
    """
    __slots__ = '_length', '_has_quality', '_description'

    def __init__(self, name: str, length: int, has_quality: bool = False, description: str = ''):
        """
        Constructor.
        :param name: Identifier, the first whitespace delimited token of the header line.
        :param length: Number of bases in the sequence.
        :param has_quality: True for FASTQ entries.
        :param description: Remainder of the header line.
        """
        if length < 0:
            raise ValueError("Sequence length can not be negative.")
        object.__setattr__(self, '_length', length)
        object.__setattr__(self, '_has_quality', has_quality)
        object.__setattr__(self, '_description', description)
        super().__init__(name)

    @property
    def length(self) -> int:
        return self._length

    @property
    def has_quality(self) -> bool:
        return self._has_quality

    @property
    def description(self) -> str:
        return self._description

    def __len__(self):
        return self._length

    def __repr__(self):
        return "SequenceRecord({!r}, length={})".format(self._name, self._length)


class AlignmentRecord(Record):
    """
    A SAM or BAM alignment.
    raw holds the exact encoded entry (the BAM block including block_size, or the SAM line without its newline)
    so that it can be written back out unchanged.
    """
    __slots__ = '_flag', '_reference', '_position', '_raw'

    def __init__(self, name: str, flag: int, reference=None, position=None, raw: bytes = b''):
        """
        Constructor.
        :param name: Query name.
        :param flag: Bitwise FLAG field.
        :param reference: Reference name, must be None for an unmapped record.
        :param position: 0-based leftmost mapping position, None for an unmapped record.
        :param raw: Encoded record data.
        """
        object.__setattr__(self, '_flag', flag)
        object.__setattr__(self, '_reference', reference)
        object.__setattr__(self, '_position', position if reference is not None else None)
        object.__setattr__(self, '_raw', bytes(raw))
        super().__init__(name)

    @property
    def flag(self) -> int:
        return self._flag

    @property
    def mapped(self) -> bool:
        return self._reference is not None

    @property
    def reference(self):
        return self._reference

    @property
    def position(self):
        return self._position

    @property
    def raw(self) -> bytes:
        return self._raw

    def __bytes__(self):
        return self._raw

    def __repr__(self):
        return "AlignmentRecord({!r}, flag={}, reference={!r}, position={})".format(
            self._name, self._flag, self._reference, self._position)
