# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

import unittest
import io
import os
import random
import tempfile
import threading

from id3probe.fileutil import *

class BufferSourceTestCase(unittest.TestCase):
    def testReadAt(self):
        source = BufferSource(b"0123456789")
        self.assertEqual(source.read_at(0, 4), b"0123")
        self.assertEqual(source.read_at(6, 4), b"6789")
        # Short read
        self.assertEqual(source.read_at(8, 4), b"89")
        # End of data
        self.assertEqual(source.read_at(10, 4), b"")
        self.assertEqual(source.read_at(100, 4), b"")
        self.assertEqual(source.read_at(3, 0), b"")
        self.assertRaises(ValueError, source.read_at, -1, 4)

    def testLiveBuffer(self):
        buf = bytearray(b"abcdef")
        source = BufferSource(buf)
        self.assertEqual(source.read_at(0, 3), b"abc")
        buf[1] = ord("X")
        self.assertEqual(source.read_at(0, 3), b"aXc")

    def testResultIsBytes(self):
        for buf in (bytearray(b"abc"), memoryview(b"abc")):
            self.assertIsInstance(BufferSource(buf).read_at(0, 2), bytes)

class FileSourceTestCase(unittest.TestCase):
    def setUp(self):
        self.data = bytes(random.randint(0, 255) for i in range(4096))
        file = tempfile.NamedTemporaryFile(prefix="id3probetest-", suffix=".tmp", delete=False)
        try:
            file.write(self.data)
        finally:
            file.close()
        self.filename = file.name

    def tearDown(self):
        os.unlink(self.filename)

    def testReadAt(self):
        with open(self.filename, "rb") as file:
            source = FileSource(file)
            self.assertEqual(source.read_at(0, 10), self.data[0:10])
            self.assertEqual(source.read_at(4000, 200), self.data[4000:])
            self.assertEqual(source.read_at(4096, 10), b"")
            self.assertEqual(source.read_at(10, 0), b"")

    def testPositionIndependence(self):
        with open(self.filename, "rb") as file:
            source = FileSource(file)
            file.seek(1000)
            self.assertEqual(source.read_at(5, 5), self.data[5:10])
            self.assertEqual(source.read_at(2000, 3), self.data[2000:2003])

    def testBytesIO(self):
        source = FileSource(io.BytesIO(self.data))
        self.assertEqual(source.read_at(100, 10), self.data[100:110])
        self.assertEqual(source.read_at(4090, 10), self.data[4090:])
        self.assertEqual(source.read_at(5000, 10), b"")

    def testConcurrentReads(self):
        errors = []
        def reader(source, seed):
            rnd = random.Random(seed)
            for i in range(200):
                offset = rnd.randint(0, 4096)
                length = rnd.randint(0, 64)
                if source.read_at(offset, length) != self.data[offset:offset + length]:
                    errors.append((offset, length))
        with open(self.filename, "rb") as file:
            for source in (FileSource(file), FileSource(io.BytesIO(self.data))):
                threads = [threading.Thread(target=reader, args=(source, i))
                           for i in range(4)]
                for t in threads:
                    t.start()
                for t in threads:
                    t.join()
        self.assertEqual(errors, [])

class HelperTestCase(unittest.TestCase):
    def testAsSource(self):
        source = BufferSource(b"abc")
        self.assertIs(as_source(source), source)
        self.assertIsInstance(as_source(b"abc"), BufferSource)
        self.assertIsInstance(as_source(bytearray(b"abc")), BufferSource)
        self.assertIsInstance(as_source(io.BytesIO(b"abc")), FileSource)
        self.assertRaises(TypeError, as_source, "filename.mp3")
        self.assertRaises(TypeError, as_source, 42)

    def testXreadAt(self):
        source = BufferSource(b"0123456789")
        self.assertEqual(xread_at(source, 2, 3), b"234")
        self.assertRaises(EOFError, xread_at, source, 8, 3)
        self.assertRaises(EOFError, xread_at, source, 10, 1)

    def testOpened(self):
        file = io.BytesIO(b"abc")
        with opened(file, "rb") as f:
            self.assertIs(f, file)
        self.assertFalse(file.closed)

suite = unittest.TestSuite()
suite.addTest(unittest.TestLoader().loadTestsFromTestCase(BufferSourceTestCase))
suite.addTest(unittest.TestLoader().loadTestsFromTestCase(FileSourceTestCase))
suite.addTest(unittest.TestLoader().loadTestsFromTestCase(HelperTestCase))

if __name__ == "__main__":
    unittest.main(defaultTest="suite")
