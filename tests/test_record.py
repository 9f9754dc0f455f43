from unittest import TestCase

from biojtools.record import AlignmentRecord, IlluminaName, SequenceRecord, parse_read_name


class TestReadName(TestCase):
    def test_casava_18(self):
        self.assertEqual(parse_read_name('EAS139:136:FC706VJ:2:2104:15343:197393'), IlluminaName('EAS139', 'FC706VJ'))

    def test_casava_pre_18(self):
        self.assertEqual(parse_read_name('HWUSI-EAS100R:6:73:941:1973#0/1'), IlluminaName('HWUSI-EAS100R', None))

    def test_other(self):
        self.assertIsNone(parse_read_name('SRR001666.1'))
        self.assertIsNone(parse_read_name('a:b:c'))
        self.assertIsNone(parse_read_name(':1:2:3:4'))


class TestRecord(TestCase):
    def test_sequence(self):
        record = SequenceRecord('EAS139:136:FC706VJ:2:2104:15343:197393', 150, True)
        self.assertEqual(len(record), 150)
        self.assertEqual(record.instrument, 'EAS139')
        self.assertTrue(record.has_quality)

    def test_immutable(self):
        record = SequenceRecord('r1', 4)
        with self.assertRaises(AttributeError):
            record._length = 5
        with self.assertRaises(AttributeError):
            del record._name
        self.assertEqual(record.length, 4)

    def test_invalid(self):
        with self.assertRaises(ValueError):
            SequenceRecord('', 4)
        with self.assertRaises(ValueError):
            SequenceRecord('r1', -1)

    def test_alignment(self):
        mapped = AlignmentRecord('r1', 0, 'chr1', 99, b'raw')
        self.assertTrue(mapped.mapped)
        self.assertEqual(mapped.position, 99)
        self.assertEqual(bytes(mapped), b'raw')

        unmapped = AlignmentRecord('r2', 4, None, 10)
        self.assertFalse(unmapped.mapped)
        self.assertIsNone(unmapped.reference)
        self.assertIsNone(unmapped.position)
        self.assertIsNone(unmapped.instrument)
