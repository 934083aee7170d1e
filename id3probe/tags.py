# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

import abc
import collections
import collections.abc
import re
import types
import zlib

from abc import abstractmethod
from warnings import warn

from id3probe.errors import *
from id3probe.conversion import *

import id3probe.frames as Frames
import id3probe.fileutil as fileutil
import id3probe.id3 as id3

_TAG_UNSYNCHRONISED = 0x80
_TAG_EXTENDED_HEADER = 0x40
_TAG_EXPERIMENTAL = 0x20
_TAG24_FOOTER = 0x10

_FRAME23_FORMAT_COMPRESSED = 0x0080
_FRAME23_FORMAT_ENCRYPTED = 0x0040
_FRAME23_FORMAT_GROUP = 0x0020
_FRAME23_FORMAT_UNKNOWN_MASK = 0x001F

_FRAME23_STATUS_DISCARD_ON_TAG_ALTER = 0x8000
_FRAME23_STATUS_DISCARD_ON_FILE_ALTER = 0x4000
_FRAME23_STATUS_READ_ONLY = 0x2000
_FRAME23_STATUS_UNKNOWN_MASK = 0x1F00

_FRAME24_FORMAT_GROUP = 0x0040
_FRAME24_FORMAT_COMPRESSED = 0x0008
_FRAME24_FORMAT_ENCRYPTED = 0x0004
_FRAME24_FORMAT_UNSYNCHRONISED = 0x0002
_FRAME24_FORMAT_DATA_LENGTH_INDICATOR = 0x0001
_FRAME24_FORMAT_UNKNOWN_MASK = 0x00B0

_FRAME24_STATUS_DISCARD_ON_TAG_ALTER = 0x4000
_FRAME24_STATUS_DISCARD_ON_FILE_ALTER = 0x2000
_FRAME24_STATUS_READ_ONLY = 0x1000
_FRAME24_STATUS_UNKNOWN_MASK = 0x8F00

HEADER_SIZE = 10
FOOTER_SIZE = 10

_frame_id_pattern = re.compile(b"[A-Z][A-Z0-9]{2}[A-Z0-9 ]?")


class TagHeader(collections.namedtuple(
        "TagHeader", "major_version minor_version flags data_length")):
    """The fixed 10-byte header at the start of an ID3v2 tag."""
    __slots__ = ()

    @property
    def version(self):
        return "{0}.0".format(self.major_version)

    @property
    def unsynchronisation(self):
        return bool(self.flags & _TAG_UNSYNCHRONISED)

    @property
    def extended_header(self):
        return bool(self.flags & _TAG_EXTENDED_HEADER)

    @property
    def experimental(self):
        return bool(self.flags & _TAG_EXPERIMENTAL)

    @property
    def footer(self):
        "True if a footer follows the frame data (ID3v2.4 only)."
        return self.major_version == 4 and bool(self.flags & _TAG24_FOOTER)

    @property
    def length(self):
        "Total size of the tag, including header and footer."
        return (HEADER_SIZE + self.data_length
                + (FOOTER_SIZE if self.footer else 0))


def read_header(source, offset=0):
    """Read and validate the tag header at offset.

    Raises NoTagError if there is no ID3v2 tag there, and a TagError
    subclass if the header is unusable."""
    source = fileutil.as_source(source)
    header = source.read_at(offset, HEADER_SIZE)
    if len(header) == 0 or header[0:3] != b"ID3"[0:len(header)]:
        raise NoTagError("ID3v2 tag not found")
    if len(header) < HEADER_SIZE:
        raise TruncatedHeaderError("ID3v2 header truncated after {0} bytes"
                                   .format(len(header)))
    if header[3] not in _tag_versions:
        raise UnsupportedVersionError("Unknown ID3 version: 2.{0}.{1}"
                                      .format(*header[3:5]))
    return TagHeader(major_version=header[3],
                     minor_version=header[4],
                     flags=header[5],
                     data_length=Syncsafe.decode(header[6:10]))

def detect_tag(source):
    """Return type and position of ID3v2 tag in source.
    Returns (tag_class, offset, length), where tag_class
    is either Tag22, Tag23, or Tag24, and (offset, length)
    is the position of the tag in the file.
    """
    header = read_header(source)
    return (_tag_versions[header.major_version], 0, header.length)

def extract_tag(source, *, strict=None):
    """Read the ID3v2 tag at the start of source.

    source may be a ByteSource, a bytes-like object or a seekable binary
    file.  strict overrides Tag.strict: when true, a malformed frame
    raises MalformedFrameError instead of ending the frame list early.
    """
    source = fileutil.as_source(source)
    header = read_header(source)
    return _tag_versions[header.major_version].read(source, header, strict=strict)

def read_tag(filename, *, strict=None):
    with fileutil.opened(filename, "rb") as file:
        return extract_tag(file, strict=strict)

def decode_tag(data, *, strict=None):
    return extract_tag(fileutil.BufferSource(data), strict=strict)


def _friendly_text(cls):
    "Property returning the text of the first frame of class cls."
    def getter(self):
        frame = self._first(cls)
        if isinstance(frame, Frames.TextFrame):
            return frame.value
        return ""
    return property(getter, doc="Text of the first {0} frame.".format(cls.frameid))

def _friendly_url(cls):
    "Property returning the URL in the first frame of class cls."
    def getter(self):
        frame = self._first(cls)
        return getattr(frame, "url", None) or ""
    return property(getter, doc="URL in the first {0} frame.".format(cls.frameid))


class Tag(collections.abc.Mapping, metaclass=abc.ABCMeta):
    """An ID3v2 tag read from a file.

    A Tag maps frame ids to the tuple of frames with that id, in the order
    they appear in the file.  It is immutable; named properties (title,
    artist, album, ...) give the decoded value of the relevant frame, or
    an empty value if the tag doesn't have one.
    """
    major_version = None

    # Raise MalformedFrameError instead of keeping the frames read so far.
    strict = False

    def __init__(self, header, frames=(), error=None):
        assert header.major_version == self.major_version
        self._header = header
        self._frame_list = tuple(frames)
        self._error = error
        frame_sets = collections.OrderedDict()
        for frame in self._frame_list:
            frame_sets.setdefault(frame.frameid, []).append(frame)
        self._frames = collections.OrderedDict(
            (frameid, tuple(fs)) for (frameid, fs) in frame_sets.items())

    # Mapping methods
    def __getitem__(self, key):
        if Frames.is_frame_class(key):
            key = self._frameid(key)
        return self._frames[key]

    def __iter__(self):
        return iter(self._frames)

    def __len__(self):
        return len(self._frames)

    def __repr__(self):
        return "<{0}: ID3v2.{1} tag{2} with {3} frames>".format(
            type(self).__name__,
            self.major_version,
            ("({0})".format(", ".join(sorted(self.flags)))
             if len(self.flags) > 0 else ""),
            len(self._frame_list))

    # Header information
    @property
    def header(self):
        return self._header

    @property
    def version(self):
        return self._header.version

    @property
    def minor_version(self):
        return self._header.minor_version

    @property
    def data_length(self):
        return self._header.data_length

    @property
    def length(self):
        return self._header.length

    @property
    def flags(self):
        flags = set()
        if self._header.unsynchronisation:
            flags.add("unsynchronisation")
        if self._header.extended_header:
            flags.add(self._flag40)
        if self._header.experimental:
            flags.add("experimental")
        if self._header.footer:
            flags.add("footer")
        return frozenset(flags)

    _flag40 = "extended_header"

    @property
    def error(self):
        "The error that ended frame parsing early, or None."
        return self._error

    # Frames
    @property
    def frame_sets(self):
        "Read-only ordered mapping of frame ids to tuples of frames."
        return types.MappingProxyType(self._frames)

    def frames(self):
        "Return a list of all frames in the order they appear in the tag."
        return list(self._frame_list)

    def _frameid(self, cls):
        "Return the frame id this tag version uses for frame class cls."
        return cls.frameid

    def _first(self, cls):
        fs = self._frames.get(self._frameid(cls))
        return fs[0] if fs else None

    # Named fields
    title = _friendly_text(id3.TIT2)
    artist = _friendly_text(id3.TPE1)
    album = _friendly_text(id3.TALB)
    album_artist = _friendly_text(id3.TPE2)
    track = _friendly_text(id3.TRCK)
    part_of_set = _friendly_text(id3.TPOS)
    grouping = _friendly_text(id3.TIT1)
    composer = _friendly_text(id3.TCOM)
    original_artist = _friendly_text(id3.TOPE)
    copyright = _friendly_text(id3.TCOP)
    publisher = _friendly_text(id3.TPUB)
    encoder = _friendly_text(id3.TENC)

    url = _friendly_url(id3.WXXX)
    artist_url = _friendly_url(id3.WOAR)
    audio_file_url = _friendly_url(id3.WOAF)
    audio_source_url = _friendly_url(id3.WOAS)
    commercial_url = _friendly_url(id3.WCOM)
    copyright_url = _friendly_url(id3.WCOP)
    payment_url = _friendly_url(id3.WPAY)
    publisher_url = _friendly_url(id3.WPUB)
    radio_station_url = _friendly_url(id3.WORS)

    @property
    def year(self):
        frame = self._first(id3.TYER)
        if isinstance(frame, Frames.TextFrame):
            return frame.value
        return ""

    def _genre_text(self):
        frame = self._first(id3.TCON)
        if isinstance(frame, Frames.TextFrame) and frame.text:
            return frame.text[0]
        return None

    @property
    def genre(self):
        "Numeric ID3v1 genre code, or -1."
        text = self._genre_text()
        if text is None:
            return -1
        return id3.parse_genre(text)[0]

    @property
    def genre_description(self):
        text = self._genre_text()
        if text is None:
            return ""
        return id3.genre_description(text)

    @property
    def comment(self):
        # iTunes stores volume normalization data in COMM frames
        for frame in self.get(self._frameid(id3.COMM), ()):
            if isinstance(frame, Frames.CommentFrame) and frame.desc != "iTunNORM":
                return frame.text
        return ""

    @property
    def lyrics(self):
        frame = self._first(id3.USLT)
        if isinstance(frame, Frames.CommentFrame):
            return frame.text
        return ""

    def _album_image_frame(self):
        frame = self._first(id3.APIC)
        if isinstance(frame, Frames.PictureFrame):
            return frame
        return None

    @property
    def album_image(self):
        frame = self._album_image_frame()
        return frame.data if frame is not None else b""

    @property
    def album_image_mime_type(self):
        frame = self._album_image_frame()
        return frame.mime if frame is not None else ""

    # Reading tags
    @classmethod
    def read(cls, source, header, *, strict=None):
        """Read the frames of the tag described by header from source.

        By default a malformed frame ends the frame list: the frames read
        up to that point are kept, the error is stored in Tag.error and a
        TagWarning is issued.  With strict set, the error is raised."""
        if strict is None:
            strict = cls.strict
        start = HEADER_SIZE
        end = HEADER_SIZE + header.data_length
        if header.extended_header:
            start += cls._extended_header_size(source, header)
            if start > end:
                raise TagError("Extended header overruns tag data")
        frames = []
        error = None
        try:
            for (offset, frameid, bflags, data) in cls._read_frames(source, start, end):
                frames.append(cls._frame_from_data(frameid, bflags, data))
        except MalformedFrameError as e:
            if strict:
                raise
            warn("{0}; keeping {1} frames read so far".format(e, len(frames)),
                 TagWarning)
            error = e
        return cls(header, frames, error)

    @classmethod
    def _read_frames(cls, source, start, end):
        """Walk the frame area [start, end) of source.
        Yields (offset, frameid, bflags, data) for each frame; stops at padding."""
        pos = start
        while pos < end:
            wanted = min(cls._frame_header_size, end - pos)
            header = source.read_at(pos, wanted)
            frameid_bytes = header[0:cls._frame_id_size]
            if len(frameid_bytes) > 0 and not any(frameid_bytes):
                break # Padding
            if len(header) < wanted:
                raise TruncatedFrameError("Tag data ends prematurely at offset {0}"
                                          .format(pos + len(header)))
            if wanted < cls._frame_header_size:
                raise MalformedFrameError("Frame header at offset {0} overruns tag data"
                                          .format(pos))
            if not cls._is_frame_id(frameid_bytes):
                raise MalformedFrameError("Invalid frame id {0!r} at offset {1}"
                                          .format(bytes(frameid_bytes), pos))
            frameid = frameid_bytes.decode("ASCII")
            try:
                size = cls._decode_frame_size(header[cls._frame_id_size:cls._frame_id_size + cls._frame_size_width])
            except SyncsafeError as e:
                raise MalformedFrameError("Invalid size in {0} frame at offset {1}"
                                          .format(frameid, pos)) from e
            bflags = Int8.decode(header[cls._frame_id_size + cls._frame_size_width:])
            offset = pos
            pos += cls._frame_header_size
            if size > end - pos:
                raise MalformedFrameError(
                    "{0} frame at offset {1} is {2} bytes long, but only {3} bytes of tag data remain"
                    .format(frameid, offset, size, end - pos))
            data = source.read_at(pos, size)
            if len(data) < size:
                raise TruncatedFrameError("{0} frame at offset {1} is truncated"
                                          .format(frameid, offset))
            pos += size
            yield (offset, frameid, bflags, data)

    @classmethod
    def _frame_from_data(cls, frameid, bflags, data):
        payload = data
        flags = None
        try:
            (flags, data) = cls._interpret_frame_flags(frameid, bflags, data)
            return Frames.frame_class(frameid)._from_data(
                frameid, data, flags, payload=payload, tag_version=cls.major_version)
        except (FrameError, ValueError, EOFError, zlib.error) as e:
            warn("Can't decode {0} frame: {1}".format(frameid, e), ErrorFrameWarning)
            return Frames.ErrorFrame(frameid, payload, e, flags=flags,
                                     tag_version=cls.major_version)

    @staticmethod
    def _is_frame_id(data):
        # Allow a single space at end of four-character ids
        # Some programs (e.g. iTunes 8.2) generate such frames when converting
        # from 2.2 to 2.3/2.4 tags.
        return _frame_id_pattern.fullmatch(data)

    @classmethod
    def _extended_header_size(cls, source, header):
        return 0

    @classmethod
    @abstractmethod
    def _decode_frame_size(cls, data): pass

    @classmethod
    def _interpret_frame_flags(cls, frameid, bflags, data):
        return (None, data)


class Tag22(Tag):
    major_version = 2
    _frame_id_size = 3
    _frame_size_width = 3
    _frame_header_size = 6

    # Bit 6 of the ID3v2.2 header flags compression, not an extended header.
    _flag40 = "compression"

    @classmethod
    def _is_frame_id(cls, data):
        return len(data) == 3 and super()._is_frame_id(data)

    @classmethod
    def _decode_frame_size(cls, data):
        return Int8.decode(data)

    def _frameid(self, cls):
        v2 = getattr(cls, "_v2_frame", None)
        if v2 is not None:
            return v2.frameid
        return cls.frameid


class Tag23(Tag):
    major_version = 3
    _frame_id_size = 4
    _frame_size_width = 4
    _frame_header_size = 10

    @classmethod
    def _is_frame_id(cls, data):
        return len(data) == 4 and super()._is_frame_id(data)

    @classmethod
    def _extended_header_size(cls, source, header):
        try:
            size = Int8.decode(fileutil.xread_at(source, HEADER_SIZE, 4))
        except EOFError as e:
            raise TruncatedHeaderError("ID3v2.3 extended header truncated") from e
        if size != 6 and size != 10:
            warn("Unexpected size of ID3v2.3 extended header: {0}".format(size),
                 TagWarning)
        return size + 4

    @classmethod
    def _decode_frame_size(cls, data):
        return Int8.decode(data)

    @classmethod
    def _interpret_frame_flags(cls, frameid, bflags, data):
        flags = set()
        # Frame encoding flags
        if bflags & _FRAME23_FORMAT_UNKNOWN_MASK:
            warn("Unknown ID3v2.3 frame encoding flags on {0} frame: 0x{1:X}"
                 .format(frameid, bflags), FrameWarning)
        if bflags & _FRAME23_FORMAT_COMPRESSED:
            flags.add("compressed")
        if bflags & _FRAME23_FORMAT_ENCRYPTED:
            flags.add("encrypted")
        if bflags & _FRAME23_FORMAT_GROUP:
            flags.add("group")
        # Frame status messages
        if bflags & _FRAME23_STATUS_DISCARD_ON_TAG_ALTER:
            flags.add("discard_on_tag_alter")
        if bflags & _FRAME23_STATUS_DISCARD_ON_FILE_ALTER:
            flags.add("discard_on_file_alter")
        if bflags & _FRAME23_STATUS_READ_ONLY:
            flags.add("read_only")
        if bflags & _FRAME23_STATUS_UNKNOWN_MASK:
            warn("Unexpected ID3v2.3 frame status flags on {0} frame: 0x{1:X}"
                 .format(frameid, bflags), FrameWarning)

        # Format info precedes the frame data in this order.
        if "compressed" in flags:
            # Decompressed size; zlib doesn't need it.
            if len(data) < 4:
                raise EOFError("Missing decompressed size")
            data = data[4:]
        if "encrypted" in flags:
            raise FrameError("Can't read ID3v2.3 encrypted frames")
        if "group" in flags:
            if len(data) < 1:
                raise EOFError("Missing group id")
            data = data[1:]
        if "compressed" in flags:
            data = zlib.decompress(data)
        return (flags, data)


class Tag24(Tag):
    major_version = 4
    _frame_id_size = 4
    _frame_size_width = 4
    _frame_header_size = 10

    # Work around iTunes frame size encoding bug.
    # Older versions of iTunes stored frame sizes as
    # straight 8bit integers, not syncsafe.
    # (This is known to be fixed in iTunes 8.2.)
    ITUNES_WORKAROUND = False

    @classmethod
    def _is_frame_id(cls, data):
        return len(data) == 4 and super()._is_frame_id(data)

    @classmethod
    def _extended_header_size(cls, source, header):
        try:
            size = Syncsafe.decode(fileutil.xread_at(source, HEADER_SIZE, 4))
        except EOFError as e:
            raise TruncatedHeaderError("ID3v2.4 extended header truncated") from e
        if size < 6:
            warn("Unexpected size of ID3v2.4 extended header: {0}".format(size),
                 TagWarning)
        return size

    @classmethod
    def _decode_frame_size(cls, data):
        if cls.ITUNES_WORKAROUND:
            return Int8.decode(data)
        return Syncsafe.decode(data)

    @classmethod
    def _interpret_frame_flags(cls, frameid, bflags, data):
        flags = set()
        # Frame format flags
        if bflags & _FRAME24_FORMAT_UNKNOWN_MASK:
            warn("Unknown ID3v2.4 frame encoding flags on {0} frame: 0x{1:X}"
                 .format(frameid, bflags), FrameWarning)
        if bflags & _FRAME24_FORMAT_GROUP:
            flags.add("group")
        if bflags & _FRAME24_FORMAT_COMPRESSED:
            flags.add("compressed")
        if bflags & _FRAME24_FORMAT_ENCRYPTED:
            flags.add("encrypted")
        if bflags & _FRAME24_FORMAT_UNSYNCHRONISED:
            flags.add("unsynchronised")
        if bflags & _FRAME24_FORMAT_DATA_LENGTH_INDICATOR:
            flags.add("data_length_indicator")
        # Frame status flags
        if bflags & _FRAME24_STATUS_DISCARD_ON_TAG_ALTER:
            flags.add("discard_on_tag_alter")
        if bflags & _FRAME24_STATUS_DISCARD_ON_FILE_ALTER:
            flags.add("discard_on_file_alter")
        if bflags & _FRAME24_STATUS_READ_ONLY:
            flags.add("read_only")
        if bflags & _FRAME24_STATUS_UNKNOWN_MASK:
            warn("Unexpected ID3v2.4 frame status flags on {0} frame: 0x{1:X}"
                 .format(frameid, bflags), FrameWarning)

        # Format info precedes the frame data in this order.
        if "group" in flags:
            if len(data) < 1:
                raise EOFError("Missing group id")
            data = data[1:]
        if "data_length_indicator" in flags:
            if len(data) < 4:
                raise EOFError("Missing data length indicator")
            data = data[4:]
        if "encrypted" in flags:
            raise FrameError("Can't read ID3v2.4 encrypted frames")
        if "compressed" in flags:
            data = zlib.decompress(data)
        return (flags, data)

    @property
    def year(self):
        frame = self._first(id3.TDRC)
        if isinstance(frame, Frames.TextFrame) and frame.value:
            return frame.value[0:4]
        return super().year


_tag_versions = {
    2: Tag22,
    3: Tag23,
    4: Tag24,
    }
