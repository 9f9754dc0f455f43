"""
Decoders for FASTQ and FASTA text.

Both decoders read line by line from a binary stream and only keep the running length of the current entry,
so entry size does not affect memory use. Multi-line sequence (and quality) entries are supported.
"""

from typing import Iterator

from .record import SequenceRecord

FASTQ_DELIMITER = b'@'
FASTA_DELIMITER = b'>'
SEPARATOR = b'+'


class InvalidFASTX(ValueError):
    """
    Exception to indicate a malformed FASTQ or FASTA entry.
    offset is the position of the entry in the uncompressed stream.
    """

    def __init__(self, message, offset=None):
        super().__init__(message)
        self.offset = offset


def _parse_header(line: bytes, offset: int):
    fields = line[1:].rstrip(b'\r\n').split(None, 1)
    if not fields:
        raise InvalidFASTX("Empty record identifier.", offset)
    try:
        name = fields[0].decode('ascii')
        description = fields[1].decode('ascii', 'replace') if len(fields) > 1 else ''
    except UnicodeDecodeError as e:
        raise InvalidFASTX("Record identifier is not ASCII.", offset) from e
    return name, description


def _line_length(line: bytes) -> int:
    return len(line.rstrip(b'\r\n'))


def read_fastq(stream) -> Iterator[SequenceRecord]:
    """
    Decode FASTQ entries.
    :param stream: Binary stream at the beginning of FASTQ data.
    :return: Generator of SequenceRecord with has_quality set.
    """
    offset = 0
    line = stream.readline()
    while line:
        if not line.strip():
            # Blank lines between entries
            offset += len(line)
            line = stream.readline()
            continue
        start = offset
        if not line.startswith(FASTQ_DELIMITER):
            raise InvalidFASTX("Expected '@' at the start of a FASTQ entry.", start)
        name, description = _parse_header(line, start)
        offset += len(line)

        length = 0
        line = stream.readline()
        while line and not line.startswith(SEPARATOR):
            length += _line_length(line)
            offset += len(line)
            line = stream.readline()
        if not line:
            raise InvalidFASTX("Missing '+' separator line.", start)
        offset += len(line)

        quality = 0
        while quality < length:
            line = stream.readline()
            if not line:
                raise InvalidFASTX("Truncated quality, expected {} scores got {}.".format(length, quality), start)
            quality += _line_length(line)
            offset += len(line)
        if quality != length:
            raise InvalidFASTX("Quality length {} does not match sequence length {}.".format(quality, length), start)

        yield SequenceRecord(name, length, True, description)
        line = stream.readline()


def read_fasta(stream) -> Iterator[SequenceRecord]:
    """
    Decode FASTA entries.
    :param stream: Binary stream at the beginning of FASTA data.
    :return: Generator of SequenceRecord.
    """
    offset = 0
    line = stream.readline()
    while line and not line.strip():
        offset += len(line)
        line = stream.readline()
    while line:
        start = offset
        if not line.startswith(FASTA_DELIMITER):
            raise InvalidFASTX("Expected '>' at the start of a FASTA entry.", start)
        name, description = _parse_header(line, start)
        offset += len(line)

        length = 0
        line = stream.readline()
        while line and not line.startswith(FASTA_DELIMITER):
            length += len(line.strip())
            offset += len(line)
            line = stream.readline()

        yield SequenceRecord(name, length, False, description)
