from unittest import TestCase
import io

from biojtools.fastx import InvalidFASTX, read_fasta, read_fastq

from .data import FASTA, FASTA_LENGTHS, FASTQ, FASTQ_LENGTHS


class TestFASTQ(TestCase):
    def test_records(self):
        records = list(read_fastq(io.BytesIO(FASTQ)))
        self.assertEqual(tuple(len(record) for record in records), FASTQ_LENGTHS)
        self.assertEqual(records[0].name, 'HWI-ST1:42:FC1:1:1:10:20')
        self.assertEqual(records[0].description, '1:N:0:ACGT')
        self.assertTrue(all(record.has_quality for record in records))
        self.assertEqual(records[3].name, 'SRR001666.1')

    def test_empty(self):
        self.assertEqual(list(read_fastq(io.BytesIO(b''))), [])
        self.assertEqual(list(read_fastq(io.BytesIO(b'\n\n'))), [])

    def test_crlf(self):
        records = list(read_fastq(io.BytesIO(b'@r1\r\nACGT\r\n+\r\nIIII\r\n')))
        self.assertEqual(records[0].name, 'r1')
        self.assertEqual(records[0].length, 4)

    def test_quality_mismatch(self):
        with self.assertRaises(InvalidFASTX) as context:
            list(read_fastq(io.BytesIO(b'@r1\nACGT\n+\nIIIII\n')))
        self.assertEqual(context.exception.offset, 0)

    def test_truncated_quality(self):
        data = b'@r1\nACGT\n+\nIIII\n@r2\nACGT\n+\nII\n'
        records = read_fastq(io.BytesIO(data))
        self.assertEqual(next(records).name, 'r1')
        with self.assertRaises(InvalidFASTX) as context:
            next(records)
        self.assertEqual(context.exception.offset, 16)

    def test_missing_separator(self):
        with self.assertRaises(InvalidFASTX):
            list(read_fastq(io.BytesIO(b'@r1\nACGT\n')))

    def test_missing_delimiter(self):
        with self.assertRaises(InvalidFASTX):
            list(read_fastq(io.BytesIO(b'r1\nACGT\n+\nIIII\n')))

    def test_empty_identifier(self):
        with self.assertRaises(InvalidFASTX):
            list(read_fastq(io.BytesIO(b'@\nACGT\n+\nIIII\n')))
        with self.assertRaises(InvalidFASTX):
            list(read_fastq(io.BytesIO(b'@  \nACGT\n+\nIIII\n')))


class TestFASTA(TestCase):
    def test_records(self):
        records = list(read_fasta(io.BytesIO(FASTA)))
        self.assertEqual(tuple(len(record) for record in records), FASTA_LENGTHS)
        self.assertEqual([record.name for record in records], ['chr1', 'chr2', 'chr3'])
        self.assertEqual(records[0].description, 'first contig')
        self.assertFalse(any(record.has_quality for record in records))

    def test_empty(self):
        self.assertEqual(list(read_fasta(io.BytesIO(b''))), [])

    def test_leading_data(self):
        with self.assertRaises(InvalidFASTX) as context:
            list(read_fasta(io.BytesIO(b'ACGT\n>chr1\nACGT\n')))
        self.assertEqual(context.exception.offset, 0)

    def test_empty_identifier(self):
        with self.assertRaises(InvalidFASTX) as context:
            list(read_fasta(io.BytesIO(b'>chr1\nACGT\n>\nACGT\n')))
        self.assertEqual(context.exception.offset, 11)
