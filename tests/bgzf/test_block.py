from unittest import TestCase
import io
import os
import zlib

from biojtools.bgzf import Block, EMPTY_BLOCK, InvalidBGZF, MAX_BLOCK_SIZE, MAX_DATA_SIZE, is_bgzf, is_gzip


class TestBlock(TestCase):
    def test_from_buffer(self):
        # Empty Block
        block, cdata = Block.from_buffer(bytearray(EMPTY_BLOCK))
        self.assertEqual(len(cdata), 2, "EMPTY: CDATA expected to be length 2")
        self.assertEqual(block.size, 28, "EMPTY: Incorrect block size")
        self.assertEqual(block.uncompressed_size, 0)

        # Valid block w. data
        data = Block.deflate(b'test123')
        block, cdata = Block.from_buffer(data)
        self.assertEqual(block.size, len(data), "VALID: Incorrect block size")
        self.assertEqual(block.inflate(cdata), b'test123', "VALID: Incorrect data")

        # Block following other data
        block, cdata = Block.from_buffer(b'xx' + data, 2)
        self.assertEqual(block.inflate(cdata), b'test123')

    def test_from_stream(self):
        # Empty Block
        block, cdata = Block.from_stream(io.BytesIO(EMPTY_BLOCK))
        self.assertEqual(len(cdata), 2, "EMPTY: CDATA expected to be length 2")
        self.assertEqual(block.size, 28, "EMPTY: Incorrect block size")

        # Valid block w. data
        stream = io.BytesIO(Block.deflate(b'test123') + EMPTY_BLOCK)
        block, cdata = Block.from_stream(stream)
        self.assertEqual(block.inflate(cdata), b'test123', "VALID: Incorrect data")
        block, cdata = Block.from_stream(stream)
        self.assertEqual(block.inflate(cdata), b'', "VALID: Extra data found")

        # End of stream
        with self.assertRaises(EOFError):
            Block.from_stream(stream)

    def test_peeked_magic(self):
        stream = io.BytesIO(Block.deflate(b'test123'))
        magic = stream.read(4)
        block, cdata = Block.from_stream(stream, magic)
        self.assertEqual(block.inflate(cdata), b'test123')

    def test_invalid_magic(self):
        data = bytearray(EMPTY_BLOCK)
        data[1] = 0
        with self.assertRaises(InvalidBGZF):
            Block.from_buffer(data)
        with self.assertRaises(InvalidBGZF):
            Block.from_stream(io.BytesIO(data))

    def test_missing_extra_flag(self):
        data = bytearray(EMPTY_BLOCK)
        data[3] = 0
        with self.assertRaises(InvalidBGZF):
            Block.from_buffer(data)
        with self.assertRaises(InvalidBGZF):
            Block.from_stream(io.BytesIO(data))

    def test_missing_bc(self):
        data = bytearray(EMPTY_BLOCK)
        data[12:14] = b'XY'
        with self.assertRaises(InvalidBGZF):
            Block.from_buffer(data)

    def test_truncated(self):
        data = Block.deflate(b'test123')
        with self.assertRaises(InvalidBGZF):
            Block.from_stream(io.BytesIO(data[:-3]))
        with self.assertRaises(InvalidBGZF):
            Block.from_buffer(data[:-3])
        with self.assertRaises(InvalidBGZF):
            Block.from_stream(io.BytesIO(data[:10]))

    def test_crc_mismatch(self):
        data = bytearray(Block.deflate(b'test123'))
        data[-8] ^= 0xff
        block, cdata = Block.from_buffer(data)
        with self.assertRaises(InvalidBGZF):
            block.inflate(cdata)

    def test_deflate(self):
        data = b'ACGT' * 1000
        block = Block.deflate(data)
        self.assertTrue(is_bgzf(block))
        self.assertEqual(zlib.decompress(block, 31), data, "Block must be a valid GZIP member")

    def test_deflate_incompressible(self):
        data = os.urandom(MAX_DATA_SIZE)
        block = Block.deflate(data)
        self.assertLessEqual(len(block), MAX_BLOCK_SIZE)
        parsed, cdata = Block.from_buffer(block)
        self.assertEqual(parsed.inflate(cdata), data)

    def test_deflate_too_large(self):
        with self.assertRaises(ValueError):
            Block.deflate(bytes(MAX_DATA_SIZE + 1))

    def test_detection(self):
        self.assertTrue(is_bgzf(EMPTY_BLOCK))
        self.assertTrue(is_gzip(EMPTY_BLOCK))
        plain = zlib.compressobj(wbits=31)
        plain = plain.compress(b'test') + plain.flush()
        self.assertTrue(is_gzip(plain))
        self.assertFalse(is_bgzf(plain))
        self.assertFalse(is_gzip(b'BAM\x01'))
