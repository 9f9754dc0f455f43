from unittest import TestCase
import io

from biojtools import sam

from .data import REFERENCES, SAM_HEADER, sam_line


class TestSAM(TestCase):
    def test_is_sam(self):
        self.assertTrue(sam.is_sam(b'@HD\tVN:1.6'))
        self.assertTrue(sam.is_sam(sam_line('r1')))
        self.assertFalse(sam.is_sam(b'@r1 1:N:0:ACGT'))
        self.assertFalse(sam.is_sam(b'>chr1'))

    def test_header(self):
        first = sam_line('r1') + b'\n'
        header, references, line = sam.header_from_stream(io.BytesIO(SAM_HEADER + first + b'rest'))
        self.assertEqual(header, SAM_HEADER)
        self.assertEqual(references, REFERENCES)
        self.assertEqual(line, first)

    def test_header_only(self):
        header, references, line = sam.header_from_stream(io.BytesIO(SAM_HEADER))
        self.assertEqual(header, SAM_HEADER)
        self.assertEqual(line, b'')

    def test_invalid_sq(self):
        with self.assertRaises(sam.InvalidSAM):
            sam.header_from_stream(io.BytesIO(b'@SQ\tSN:chr1\tLN:abc\n'))
        with self.assertRaises(sam.InvalidSAM):
            sam.header_from_stream(io.BytesIO(b'@SQ\tLN:100\n'))

    def test_record(self):
        line = sam_line('r1', 16, 0, 99)
        record = sam.record_from_line(line)
        self.assertEqual(record.name, 'r1')
        self.assertEqual(record.flag, 16)
        self.assertEqual(record.reference, 'chr1')
        self.assertEqual(record.position, 99)
        self.assertEqual(record.raw, line)

    def test_unmapped(self):
        self.assertFalse(sam.record_from_line(sam_line('r1', 4, 0, 99)).mapped)
        self.assertFalse(sam.record_from_line(sam_line('r1', 0, -1, -1)).mapped)

    def test_malformed(self):
        with self.assertRaises(sam.InvalidSAM):
            sam.record_from_line(b'r1\t0\tchr1\t100')
        with self.assertRaises(sam.InvalidSAM):
            sam.record_from_line(sam_line('r1').replace(b'\t0\t', b'\tx\t', 1))
        with self.assertRaises(sam.InvalidSAM):
            sam.record_from_line(b'*' + sam_line('r1')[2:])
