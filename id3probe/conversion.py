# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

from id3probe.errors import *

class Syncsafe:
    """Conversion from syncsafe integers.
    Syncsafe integers are big-endian 7-bit byte sequences.
    """
    @staticmethod
    def decode(data):
        "Decodes a syncsafe integer"
        value = 0
        for b in data:
            if b > 127:  # iTunes bug
                raise SyncsafeError("Invalid syncsafe integer: {0!r}"
                                    .format(bytes(data)))
            value <<= 7
            value += b
        return value

class Int8:
    """Conversion from binary integer values of any length."""

    @staticmethod
    def decode(data):
        "Decodes an 8-bit big-endian integer of any length"
        value = 0
        for b in data:
            value <<= 8
            value += b
        return value
