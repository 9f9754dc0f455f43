from unittest import TestCase
import contextlib
import io
import json
import os
import tempfile

from biojtools.cli import main

from . import data
from .test_jaccard import A, B, bed


class TestCLI(TestCase):
    def setUp(self):
        self._directory = tempfile.TemporaryDirectory()
        self.directory = self._directory.name

    def tearDown(self):
        self._directory.cleanup()

    def run_main(self, *argv):
        stdout, stderr = io.StringIO(), io.StringIO()
        with contextlib.redirect_stdout(stdout), contextlib.redirect_stderr(stderr):
            status = main(list(argv))
        return status, stdout.getvalue(), stderr.getvalue()

    def test_info(self):
        path = data.write(self.directory, 'reads.fastq', data.FASTQ)
        status, stdout, _ = self.run_main('info', '-l', '-f', 'json', path)
        self.assertEqual(status, 0)
        report = json.loads(stdout)
        self.assertEqual(report['records'], 4)
        self.assertEqual(report['bases'], sum(data.FASTQ_LENGTHS))

    def test_info_unsupported(self):
        path = data.write(self.directory, 'notes.txt', b'just text\n')
        status, _, stderr = self.run_main('info', path)
        self.assertEqual(status, 1)
        self.assertIn(path, stderr)

    def test_info_bad_format(self):
        path = data.write(self.directory, 'reads.fastq', data.FASTQ)
        status, _, _ = self.run_main('info', '-f', 'xml', path)
        self.assertEqual(status, 2)

    def test_jaccard(self):
        a = data.write(self.directory, 'a.bed', bed(A))
        b = data.write(self.directory, 'b.bed', bed(B))
        status, stdout, _ = self.run_main('jaccard', '-n', 'A,B', a, b)
        self.assertEqual(status, 0)
        self.assertEqual(stdout.splitlines(), ['collectionA\tcollectionB\tintersection\tunion\tratio', 'A\tB\t50\t250\t0.2'])

        output = os.path.join(self.directory, 'jaccard.csv')
        status, _, _ = self.run_main('jaccard', '-o', output, '-@', '2', a, b)
        self.assertEqual(status, 0)
        with open(output) as table:
            self.assertEqual(len(table.readlines()), 2)

    def test_jaccard_single(self):
        a = data.write(self.directory, 'a.bed', bed(A))
        status, stdout, _ = self.run_main('jaccard', a)
        self.assertEqual(status, 0)
        self.assertIn('self-similar', stdout)

    def test_jaccard_parse_error(self):
        a = data.write(self.directory, 'a.bed', bed(A))
        bad = data.write(self.directory, 'bad.bed', "chr1\t100\tabc\n")
        output = os.path.join(self.directory, 'jaccard.csv')
        status, _, stderr = self.run_main('jaccard', '-o', output, a, bad)
        self.assertEqual(status, 1)
        self.assertIn('line 1', stderr)
        self.assertFalse(os.path.exists(output))

    def test_filter(self):
        path = data.write(self.directory, 'in.sam', data.sam())
        ids = data.write(self.directory, 'ids.txt', "read4\nread5\n")
        output = os.path.join(self.directory, 'out.sam')
        status, _, _ = self.run_main('filter', '-k', '-i', ids, '-o', output, path)
        self.assertEqual(status, 0)
        with open(output, 'rb') as filtered:
            self.assertEqual(filtered.read(), data.sam(data.ALIGNMENTS[3:]))

    def test_filter_usage(self):
        path = data.write(self.directory, 'in.sam', data.sam())
        self.assertEqual(self.run_main('filter', path)[0], 2)
        self.assertEqual(self.run_main('filter', '-o', 'out.sam', path)[0], 2)
        self.assertEqual(self.run_main('filter', '-r', '(', '-o', 'out.sam', path)[0], 2)

    def test_usage(self):
        self.assertEqual(self.run_main()[0], 2)
        self.assertEqual(self.run_main('-h')[0], 0)
        self.assertEqual(self.run_main('sort')[0], 2)
        self.assertEqual(self.run_main('info', '-x')[0], 2)
