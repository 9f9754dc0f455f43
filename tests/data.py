"""
Builders for synthetic test inputs.
"""

import gzip
import io
import os

from biojtools import bgzf
from biojtools.bam import RecordHeader, RecordFlags, SIZEOF_RECORDHEADER, pack_header
from biojtools.reference import Reference

FASTQ = (b"@HWI-ST1:42:FC1:1:1:10:20 1:N:0:ACGT\n"
         b"ACGTACGTAC\n"
         b"+\n"
         b"IIIIIIIIII\n"
         b"@HWI-ST1:42:FC2:1:1:11:21 1:N:0:ACGT\n"
         b"ACGTA\n"
         b"+HWI-ST1:42:FC2:1:1:11:21\n"
         b"@IIII\n"
         b"@HWUSI-EAS100R:6:73:941:1973#0/1\n"
         b"ACGTACGTAC\n"
         b"GGCC\n"
         b"+\n"
         b"IIIIIIIIII\n"
         b"IIII\n"
         b"@SRR001666.1 071112_SLXA-EAS1_s_7:5:1:817:345 length=36\n"
         b"\n"
         b"+\n"
         b"\n")
"""bytes: Four entries: Casava 1.8 on two flow cells, Casava < 1.8 over multiple lines, and an empty SRA entry."""

FASTQ_LENGTHS = (10, 5, 14, 0)

FASTA = (b">chr1 first contig\n"
         b"ACGTACGTAC\n"
         b"ACGT\n"
         b">chr2\n"
         b">chr3\n"
         b"NNNNN\n")

FASTA_LENGTHS = (14, 0, 5)

REFERENCES = [Reference('chr1', 1000, 0), Reference('chr2', 500, 1)]

SAM_HEADER = (b"@HD\tVN:1.6\tSO:unsorted\n"
              b"@SQ\tSN:chr1\tLN:1000\n"
              b"@SQ\tSN:chr2\tLN:500\n"
              b"@PG\tID:test\n")

ALIGNMENTS = [
    # name, flag, reference id, 0-based position
    ('HWI-ST1:42:FC1:1:1:10:20', 0, 0, 99),
    ('HWI-ST1:42:FC1:1:1:10:21', int(RecordFlags.REVERSE_COMPLIMENTED), 1, 0),
    ('HWI-ST1:42:FC1:1:1:10:22', int(RecordFlags.UNMAPPED), -1, -1),
    ('read4', int(RecordFlags.UNMAPPED), 0, 10),
    ('read5', int(RecordFlags.SECONDARY), 0, 500),
]
"""list: Three mapped records and two unmapped, one of which carries a placement."""


def bam_record(name, flag=0, reference_id=-1, position=-1, sequence_length=4) -> bytes:
    """
    Encode an alignment block with no CIGAR, an all 'A' sequence and missing qualities.
    """
    read_name = name.encode('ascii') + b'\x00'
    body = read_name + b'\x11' * ((sequence_length + 1) // 2) + b'\xff' * sequence_length
    header = RecordHeader(
        block_size=SIZEOF_RECORDHEADER - 4 + len(body),
        reference_id=reference_id,
        position=position,
        name_length=len(read_name),
        mapping_quality=255,
        bin=4680,
        cigar_length=0,
        flag=flag,
        sequence_length=sequence_length,
        next_reference_id=-1,
        next_position=-1,
        template_length=0,
    )
    return bytes(header) + body


def bam_records(alignments=ALIGNMENTS):
    return [bam_record(name, flag, reference_id, position) for name, flag, reference_id, position in alignments]


def bam(alignments=ALIGNMENTS, compressed=True, eof=True) -> bytes:
    """
    Encode a complete BAM file.
    :param compressed: BGZF compress the data.
    :param eof: Append the empty EOF block when compressed.
    """
    data = bytes(pack_header(SAM_HEADER, REFERENCES)) + b''.join(bam_records(alignments))
    if not compressed:
        return data
    return bgzf_compress(data, eof)


def bgzf_compress(data: bytes, eof=True) -> bytes:
    output = io.BytesIO()
    writer = bgzf.Writer(output)
    writer(data)
    if eof:
        writer.finalize()
    else:
        writer.finish_block()
    return output.getvalue()


def sam_line(name, flag=0, reference_id=-1, position=-1) -> bytes:
    reference = REFERENCES[reference_id].name if reference_id >= 0 else '*'
    return '\t'.join((name, str(flag), reference, str(position + 1), '255', '4M', '*', '0', '0', 'AAAA', '*', 'NM:i:0')).encode('ascii')


def sam(alignments=ALIGNMENTS, header=SAM_HEADER) -> bytes:
    return header + b''.join(sam_line(*alignment) + b'\n' for alignment in alignments)


def write(directory, name, data) -> str:
    """
    Write data to a file in directory.
    :return: Path of the file.
    """
    path = os.path.join(directory, name)
    with open(path, 'wb' if isinstance(data, bytes) else 'w') as output:
        output.write(data)
    return path


def write_gzip(directory, name, data: bytes) -> str:
    return write(directory, name, gzip.compress(data))
