import re
from typing import List, Tuple

from .bam.record import RecordFlags
from .record import AlignmentRecord
from .reference import Reference

header_re = re.compile(rb"^@(HD|SQ|RG|PG|CO)\t")
tag_re = re.compile(rb"\t([A-Za-z][A-Za-z0-9]):([ -~]+)")

MANDATORY_FIELDS = 11


class InvalidSAM(ValueError):
    """
    Exception to indicate a malformed SAM line.
    """
    pass


def is_sam(line: bytes, complete: bool = True) -> bool:
    """
    Helper to determine if a line of text begins SAM formatted data.
    :param line: First line of the data.
    :param complete: False if the line was cut short, it then only needs to reach the SEQ field.
    :return: True if the line is a SAM header line or a SAM alignment line.
    """
    fields = MANDATORY_FIELDS if complete else MANDATORY_FIELDS - 1
    return bool(header_re.match(line)) or line.count(b'\t') >= fields - 1


def header_from_stream(stream) -> Tuple[bytes, List[Reference], bytes]:
    """
    Read SAM header lines from stream.
    The header is read up to and including the first alignment line, which is returned so no data is lost.
    :param stream: Binary stream at the beginning of SAM data.
    :return: Tuple containing (header text exactly as read, list of Reference objects from SQ lines, first alignment line or b'').
    """
    header = bytearray()
    references = []
    line = stream.readline()
    while line.startswith(b'@'):
        header += line
        if line.startswith(b'@SQ\t'):
            tags = dict(tag_re.findall(line.rstrip(b'\r\n')))
            if b'SN' not in tags or not tags.get(b'LN', b'').isdigit():
                raise InvalidSAM("SQ header line requires SN and a numeric LN.")
            references.append(Reference(tags[b'SN'].decode('ascii', 'replace'), int(tags[b'LN']), len(references)))
        line = stream.readline()
    return bytes(header), references, line


def record_from_line(line: bytes) -> AlignmentRecord:
    """
    Decode one SAM alignment line.
    :param line: Line without its line terminator.
    :return: AlignmentRecord holding the line as its raw data.
    """
    fields = line.split(b'\t', MANDATORY_FIELDS)
    if len(fields) < MANDATORY_FIELDS:
        raise InvalidSAM("Expected at least {} fields, found {}.".format(MANDATORY_FIELDS, len(fields)))
    name, flag, reference_name, position = fields[:4]
    if not name or name == b'*':
        raise InvalidSAM("Missing query name.")
    try:
        flag = int(flag)
        position = int(position)
    except ValueError as e:
        raise InvalidSAM("Non-numeric FLAG or POS field.") from e
    try:
        name = name.decode('ascii')
        reference_name = reference_name.decode('ascii')
    except UnicodeDecodeError as e:
        raise InvalidSAM("QNAME or RNAME is not ASCII.") from e

    if flag & RecordFlags.UNMAPPED or reference_name == '*':
        return AlignmentRecord(name, flag, None, None, line)
    return AlignmentRecord(name, flag, reference_name, position - 1, line)
