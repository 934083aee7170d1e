# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

import abc

from abc import abstractmethod
from warnings import warn

from id3probe.errors import *

# The idea for the Spec system comes from Mutagen.

class Spec(metaclass=abc.ABCMeta):
    def __init__(self, name):
        self.name = name

    @abstractmethod
    def read(self, frame, data):
        "Decode a value from the start of data; return (value, rest of data)."

    def to_str(self, value):
        return "{0}={1}".format(self.name, repr(value))

class ByteSpec(Spec):
    def read(self, frame, data):
        if len(data) < 1:
            raise EOFError()
        return data[0], data[1:]

class BinaryDataSpec(Spec):
    def read(self, frame, data):
        return bytes(data), bytes()
    def to_str(self, value):
        return '{0}={1}{2}'.format(self.name, value[0:16], "..." if len(value) > 16 else "")

class SimpleStringSpec(Spec):
    def __init__(self, name, length):
        super().__init__(name)
        self.length = length
    def read(self, frame, data):
        if len(data) < self.length:
            raise EOFError()
        return data[:self.length].decode('iso-8859-1'), data[self.length:]

class LanguageSpec(SimpleStringSpec):
    def __init__(self, name):
        super().__init__(name, 3)

class NullTerminatedStringSpec(Spec):
    def read(self, frame, data):
        rawstr, sep, data = data.partition(b"\x00")
        return rawstr.decode('iso-8859-1'), data

class URLStringSpec(Spec):
    "URLs are always ISO-8859-1, whatever the frame's encoding byte says."
    def read(self, frame, data):
        rawstr, sep, data = data.partition(b"\x00")
        if len(rawstr) == 0 and len(data) > 0:
            # iTunes prepends an extra null byte to WFED frames (encoding spec?)
            rawstr, sep, data = data.partition(b"\x00")
        return rawstr.decode('iso-8859-1').strip(), data

class EncodingSpec(ByteSpec):
    "EncodingSpec must be the first spec."
    def read(self, frame, data):
        enc, data = super().read(frame, data)
        if enc & 0xFC:
            raise FrameError("Invalid encoding 0x{0:X}".format(enc))
        if enc >= 2 and frame.tag_version is not None and frame.tag_version < 4:
            warn("{0} frame in ID3v2.{1} tag uses {2} encoding"
                 .format(frame.frameid, frame.tag_version,
                         EncodedStringSpec._encodings[enc][0]), FrameWarning)
        return enc, data
    def to_str(self, value):
        return EncodedStringSpec._encodings[value][0]

class EncodedStringSpec(Spec):
    "A string in the frame's encoding, ended by a terminator or the end of data."
    _encodings = (('iso-8859-1', b"\x00"),
                  ('utf-16', b"\x00\x00"),
                  ('utf-16-be', b"\x00\x00"),
                  ('utf-8', b"\x00"))

    def read(self, frame, data):
        enc, term = self._encodings[frame.encoding]
        if len(term) == 1:
            rawstr, sep, data = data.partition(term)
        else:
            index = len(data)
            for i in range(0, len(data), 2):
                if data[i:i+2] == term:
                    index = i
                    break
            if index & 1:
                raise EOFError("Odd number of bytes in UTF-16 string")
            rawstr = data[:index]
            data = data[index+2:]
        return rawstr.decode(enc), data

class EncodedFullTextSpec(EncodedStringSpec):
    "Text running to the end of data; trailing terminators are dropped."
    def read(self, frame, data):
        enc, term = self._encodings[frame.encoding]
        end = len(data)
        if len(term) == 2 and end & 1 and data[-1] == 0:
            end -= 1
        while end >= len(term) and data[end - len(term):end] == term:
            end -= len(term)
        return data[:end].decode(enc), bytes()

class TextSpec(EncodedStringSpec):
    """A sequence of terminated strings filling the rest of the data.
    Fixed-width fields are often padded with nulls or spaces; the padding
    is removed from the end of the sequence.

    Multiple strings are an ID3v2.4 feature; in earlier versions anything
    after the first terminator is ignored."""
    def read(self, frame, data):
        seq = []
        while data:
            elem, data = super().read(frame, data)
            seq.append(elem)
            if frame.tag_version is not None and frame.tag_version < 4:
                data = bytes()
                break
        while seq and not seq[-1].strip(" \x00"):
            seq.pop()
        if seq:
            seq[-1] = seq[-1].rstrip(" \x00")
        return tuple(seq), data
