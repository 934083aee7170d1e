# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

"""Builders for binary ID3v2 test data."""

def syncsafe(value, width=4):
    return bytes((value >> (7 * (width - 1 - i))) & 0x7F for i in range(width))

def int8(value, width):
    return value.to_bytes(width, "big")

def header(version, size, flags=0, minor=0, magic=b"ID3"):
    return magic + bytes([version, minor, flags]) + syncsafe(size)

def frame22(frameid, payload):
    return frameid.encode("ASCII") + int8(len(payload), 3) + payload

def frame23(frameid, payload, flags=0, size=None):
    if size is None:
        size = len(payload)
    return frameid.encode("ASCII") + int8(size, 4) + int8(flags, 2) + payload

def frame24(frameid, payload, flags=0, size=None):
    if size is None:
        size = len(payload)
    return frameid.encode("ASCII") + syncsafe(size) + int8(flags, 2) + payload

_frame_builders = { 2: frame22, 3: frame23, 4: frame24 }

def frame(version, frameid, payload, **kwargs):
    return _frame_builders[version](frameid, payload, **kwargs)

def tag(version, frames, padding=0, flags=0, data_length=None, footer=False):
    """Build a complete tag.  data_length defaults to the size of the
    frames plus padding; if given, padding is computed to reach it."""
    data = b"".join(frames)
    if data_length is not None:
        padding = data_length - len(data)
        assert padding >= 0
    data += bytes(padding)
    if footer:
        flags |= 0x10
    result = header(version, len(data), flags=flags) + data
    if footer:
        result += header(version, len(data), flags=flags, magic=b"3DI")
    return result

def text(value, encoding=0):
    codecs = ("iso-8859-1", "utf-16", "utf-16-be", "utf-8")
    return bytes([encoding]) + value.encode(codecs[encoding])

# An ID3v2.3 tag with the same set of frames as a tag written by a typical
# encoder into the first 1099 bytes of an MP3 file.
V23_FIELDS = [
    ("TENC", text("ENCODER234567890123456789012345")),
    ("WXXX", b"\x00\x00URL2345678901234567890123456789"),
    ("TCOP", text("COPYRIGHT2345678901234567890123")),
    ("TOPE", text("ORIGARTIST234567890123456789012")),
    ("TCOM", text("COMPOSER23456789012345678901234")),
    ("COMM", b"\x00eng\x00COMMENT123456789012345678901"),
    ("TPE1", text("ARTIST123456789012345678901234")),
    ("TALB", text("ALBUM1234567890123456789012345")),
    ("TRCK", text("1")),
    ("TYER", text("2001")),
    ("TCON", text("(13)")),
    ("TIT2", text("TITLE1234567890123456789012345")),
    ("COMM", b"\x00engiTunNORM\x00 0000021A 000002A4 00001A11 00002105"),
    ]

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"

def png_image(size=1885):
    return PNG_SIGNATURE + bytes(i & 0xFF for i in range(size - len(PNG_SIGNATURE)))

def apic(image, mime="image/png", picture_type=3, desc=b""):
    return b"\x00" + mime.encode("ASCII") + b"\x00" + bytes([picture_type]) + desc + b"\x00" + image

def v23_tag(with_image=False):
    frames = [frame23(frameid, payload) for (frameid, payload) in V23_FIELDS]
    if with_image:
        frames.append(frame23("APIC", apic(png_image())))
        return tag(3, frames, padding=100)
    return tag(3, frames, data_length=0x44b - 10)

def v24_tag_with_footer():
    frames = [frame24(frameid, payload) for (frameid, payload) in V23_FIELDS
              if frameid != "TYER"]
    frames.append(frame24("TDRC", text("2001-05-03")))
    return tag(4, frames, data_length=0x44b - 20, footer=True)
