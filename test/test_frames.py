# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

import unittest

import id3probe.frames as Frames
from id3probe.id3 import *
from id3probe.errors import *

class FrameTestCase(unittest.TestCase):
    def testTextFrame(self):
        frame = TPE1._from_data("TPE1", b"\x00Foo\x00Bar", tag_version=4)
        self.assertEqual(frame.kind, Frames.TEXT)
        self.assertEqual(frame.encoding, 0)
        self.assertEqual(frame.text, ("Foo", "Bar"))
        self.assertEqual(frame.value, "Foo / Bar")
        self.assertEqual(frame.payload, b"\x00Foo\x00Bar")

    def testTextFrameEncodings(self):
        for enc, codec in enumerate(("iso-8859-1", "utf-16", "utf-16-be", "utf-8")):
            frame = TIT2._from_data("TIT2", bytes([enc]) + "Árvíztűrő"[0:3].encode(codec),
                                    tag_version=4)
            self.assertEqual(frame.value, "Árv")

    def testUserURLFrame(self):
        frame = WXXX._from_data("WXXX", b"\x01" + "Desc".encode("utf-16") + b"\x00\x00"
                                + b"http://example.com/", tag_version=3)
        self.assertEqual(frame.kind, Frames.USER_URL)
        self.assertEqual(frame.description, "Desc")
        self.assertEqual(frame.url, "http://example.com/")

    def testURLFrame(self):
        frame = WOAR._from_data("WOAR", b"http://example.com/artist", tag_version=3)
        self.assertEqual(frame.kind, Frames.URL)
        self.assertEqual(frame.url, "http://example.com/artist")

    def testCommentFrame(self):
        frame = COMM._from_data("COMM", b"\x00hunLe\xedr\xe1s\x00Sz\xf6veg\x00", tag_version=3)
        self.assertEqual(frame.kind, Frames.COMMENT)
        self.assertEqual(frame.lang, "hun")
        self.assertEqual(frame.desc, "Leírás")
        self.assertEqual(frame.text, "Szöveg")

    def testPictureFrame(self):
        image = b"\xff\xd8\xff\xe0" + bytes(100)
        frame = APIC._from_data("APIC", b"\x00image/jpeg\x00\x03Cover\x00" + image, tag_version=3)
        self.assertEqual(frame.kind, Frames.PICTURE)
        self.assertEqual(frame.mime, "image/jpeg")
        self.assertEqual(frame.type, 3)
        self.assertEqual(picture_types[frame.type], "Front Cover")
        self.assertEqual(frame.desc, "Cover")
        self.assertEqual(frame.data, image)

    def testPictureFrame22(self):
        frame = PIC._from_data("PIC", b"\x00PNG\x00\x00\x89PNG", tag_version=2)
        self.assertEqual(frame.kind, Frames.PICTURE)
        self.assertEqual(frame.format, "PNG")
        self.assertEqual(frame.mime, "image/png")
        self.assertEqual(frame.type, 0)
        self.assertEqual(frame.data, b"\x89PNG")
        frame = PIC._from_data("PIC", b"\x00JPG\x03\x00", tag_version=2)
        self.assertEqual(frame.mime, "image/jpeg")
        self.assertEqual(frame.data, b"")

    def testReadOnly(self):
        frame = TIT2._from_data("TIT2", b"\x00Title", tag_version=3)
        def assign():
            frame.text = ("Other",)
        def delete():
            del frame.payload
        self.assertRaises(AttributeError, assign)
        self.assertRaises(AttributeError, delete)
        self.assertEqual(frame.text, ("Title",))

    def testEquality(self):
        a = TIT2._from_data("TIT2", b"\x00Title", tag_version=3)
        b = TIT2._from_data("TIT2", b"\x00Title", tag_version=3)
        c = TIT2._from_data("TIT2", b"\x00Other", tag_version=3)
        self.assertEqual(a, b)
        self.assertEqual(hash(a), hash(b))
        self.assertNotEqual(a, c)

class RegistryTestCase(unittest.TestCase):
    def testKnownFrames(self):
        self.assertIs(Frames.frame_class("TIT2"), TIT2)
        self.assertIs(Frames.frame_class("TT2"), TT2)
        self.assertIs(Frames.frame_class("COMM"), COMM)
        self.assertIs(Frames.frame_class("APIC"), APIC)
        self.assertIs(Frames.frame_class("PIC"), PIC)

    def testUnknownFrames(self):
        self.assertIs(Frames.frame_class("TXYZ"), Frames.TextFrame)
        self.assertIs(Frames.frame_class("WXYZ"), Frames.URLFrame)
        self.assertIs(Frames.frame_class("PRIV"), Frames.UnknownFrame)
        self.assertIs(Frames.frame_class("XYZ"), Frames.UnknownFrame)

    def testVersions(self):
        self.assertIs(TIT2._v2_frame, TT2)
        self.assertIs(COMM._v2_frame, COM)
        self.assertIs(APIC._v2_frame, PIC)
        self.assertTrue(TIT2._in_version(3, 4))
        self.assertTrue(TT2._in_version(2))
        self.assertFalse(TT2._in_version(3, 4))
        self.assertTrue(TYER._in_version(3))
        self.assertFalse(TYER._in_version(4))
        self.assertTrue(TDRC._in_version(4))
        self.assertEqual(TT2.frameid, "TT2")
        self.assertEqual(TIT2.frameid, "TIT2")

    def testUnknownFrame(self):
        frame = Frames.UnknownFrame._from_data("PRIV", b"owner\x00\x01\x02", tag_version=3)
        self.assertEqual(frame.kind, Frames.UNKNOWN)
        self.assertEqual(frame.payload, b"owner\x00\x01\x02")
        self.assertEqual(str(frame), "?PRIV(8 bytes)")

    def testErrorFrame(self):
        frame = Frames.ErrorFrame("TIT2", b"\x07abc", FrameError("Invalid encoding 0x7"))
        self.assertEqual(frame.kind, Frames.UNKNOWN)
        self.assertEqual(frame.payload, b"\x07abc")
        self.assertIsInstance(frame.exception, FrameError)
        self.assertTrue(str(frame).startswith("!TIT2(ERROR"))
        self.assertRaises(FrameError, TIT2._from_data, "TIT2", b"\x07abc")

suite = unittest.TestSuite()
suite.addTest(unittest.TestLoader().loadTestsFromTestCase(FrameTestCase))
suite.addTest(unittest.TestLoader().loadTestsFromTestCase(RegistryTestCase))

if __name__ == "__main__":
    unittest.main(defaultTest="suite")
