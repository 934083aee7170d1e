# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

"""Class definitions for ID3v2 frames."""

import abc
import collections.abc

from id3probe.errors import *
from id3probe.specs import *

TEXT = "text"
USER_URL = "user_url"
URL = "url"
COMMENT = "comment"
PICTURE = "picture"
UNKNOWN = "unknown"

# Frame classes by frame id, filled in by id3probe.id3.
known_frames = {}

class Frame(metaclass=abc.ABCMeta):
    """A single frame read from a tag.

    frameid is the 3 or 4 character frame id, payload is the frame body
    exactly as stored in the file, flags is a frozenset of flag names,
    tag_version is the major version of the tag the frame came from.
    The fields named in _framespec hold the decoded content.

    Frames are read-only once created.
    """
    _framespec = tuple()
    _version = tuple()
    kind = UNKNOWN

    def __init__(self, frameid=None, payload=b"", flags=None, tag_version=None):
        self.frameid = frameid if frameid else type(self).__name__
        self.payload = bytes(payload)
        self.flags = frozenset(flags) if flags else frozenset()
        self.tag_version = tag_version
        for spec in self._framespec:
            setattr(self, spec.name, None)

    def __setattr__(self, name, value):
        if getattr(self, "_frozen", False):
            raise AttributeError("{0} frame is read-only".format(self.frameid))
        super().__setattr__(name, value)

    def __delattr__(self, name):
        raise AttributeError("{0} frame is read-only".format(self.frameid))

    def __eq__(self, other):
        return (isinstance(other, type(self))
                and self.frameid == other.frameid
                and self.flags == other.flags
                and self.payload == other.payload)

    def __hash__(self):
        return hash((type(self), self.frameid, self.payload))

    @classmethod
    def _from_data(cls, frameid, data, flags=None, payload=None, tag_version=None):
        """Decode a frame from data.  payload defaults to data; it differs
        when data had to be decompressed or stripped of format info first."""
        frame = cls(frameid=frameid,
                    payload=data if payload is None else payload,
                    flags=flags, tag_version=tag_version)
        for spec in frame._framespec:
            val, data = spec.read(frame, data)
            setattr(frame, spec.name, val)
        frame._frozen = True
        return frame

    @classmethod
    def _in_version(self, *versions):
        "Returns true if this frame is defined in any of the specified versions of ID3."
        for version in versions:
            if (self._version == version
                or (isinstance(self._version, collections.abc.Container)
                    and version in self._version)):
                return True
        return False

    def __repr__(self):
        stype = type(self).__name__
        args = []
        if stype != self.frameid:
            args.append("frameid={0!r}".format(self.frameid))
        if self.flags:
            args.append("flags={0!r}".format(set(self.flags)))
        for spec in self._framespec:
            if isinstance(spec, BinaryDataSpec):
                data = getattr(self, spec.name)
                args.append("{0}=<{1} bytes of binary data {2!r}{3}>".format(
                        spec.name, len(data),
                        data[:20], "..." if len(data) > 20 else ""))
            else:
                args.append("{0}={1!r}".format(spec.name, getattr(self, spec.name)))
        return "{0}({1})".format(stype, ", ".join(args))

    def _str_fields(self):
        fields = []
        for spec in self._framespec:
            fields.append(spec.to_str(getattr(self, spec.name, None)))
        return ", ".join(fields)

    def __str__(self):
        flag = " "
        if type(self).__name__ != self.frameid or isinstance(self, UnknownFrame):
            flag = "?"
        if isinstance(self, ErrorFrame): flag = "!"
        return "{0}{1}({2})".format(flag, self.frameid, self._str_fields())

class UnknownFrame(Frame):
    "A frame with an id we have no decoder for; only the payload is kept."
    def _str_fields(self):
        return "{0} bytes".format(len(self.payload))

class ErrorFrame(Frame):
    "A frame whose content could not be decoded."
    def __init__(self, frameid, payload, exception, flags=None, tag_version=None):
        super().__init__(frameid=frameid, payload=payload, flags=flags,
                         tag_version=tag_version)
        self.exception = exception
        self._frozen = True

    def _str_fields(self):
        strs = ["ERROR"]
        if self.exception:
            strs.append(str(self.exception))
        strs.append(repr(self.payload[:20]))
        return ", ".join(strs)

class TextFrame(Frame):
    _framespec = (EncodingSpec("encoding"), TextSpec("text"))
    kind = TEXT

    @property
    def value(self):
        return " / ".join(self.text)

    def _str_fields(self):
        return "{0} {1}".format(EncodedStringSpec._encodings[self.encoding][0],
                                ", ".join(repr(t) for t in self.text))

class URLFrame(Frame):
    _framespec = (URLStringSpec("url"), )
    kind = URL

    def _str_fields(self):
        return repr(self.url)

class UserURLFrame(Frame):
    _framespec = (EncodingSpec("encoding"),
                  EncodedStringSpec("description"),
                  URLStringSpec("url"))
    kind = USER_URL

class CommentFrame(Frame):
    _framespec = (EncodingSpec("encoding"), LanguageSpec("lang"),
                  EncodedStringSpec("desc"), EncodedFullTextSpec("text"))
    kind = COMMENT

class PictureFrame(Frame):
    _framespec = (EncodingSpec("encoding"),
                  NullTerminatedStringSpec("mime"),
                  ByteSpec("type"),
                  EncodedStringSpec("desc"),
                  BinaryDataSpec("data"))
    kind = PICTURE

    def _str_fields(self):
        return "type={0}, desc={1!r}, mime={2!r}: {3} bytes".format(
            self.type, self.desc, self.mime, len(self.data))

def frame_class(frameid):
    "Return the frame class used to decode frames with the given id."
    if frameid in known_frames:
        return known_frames[frameid]
    if frameid.startswith('T'): # Unknown text frame
        return TextFrame
    if frameid.startswith('W'): # Unknown URL frame
        return URLFrame
    return UnknownFrame

def register_frame(cls):
    """Register cls as the class representing its frame id.

    Sets cls.frameid and cls._version if not present.  Three-letter
    subclasses of v2.3/v2.4 frames are their v2.2 counterparts; the base
    gets a _v2_frame reference to them.
    """
    assert is_frame_class(cls)
    if len(cls.__name__) == 3:
        base = cls.__bases__[0]
        if is_frame_class(base) and base._in_version(3, 4):
            assert "_v2_frame" not in base.__dict__
            base._v2_frame = cls
    if "frameid" not in cls.__dict__:
        cls.frameid = cls.__name__
    if len(cls.frameid) == 3:
        cls._version = 2
    if len(cls.frameid) == 4 and not cls._version:
        cls._version = (3, 4)
    assert cls.frameid not in known_frames
    known_frames[cls.frameid] = cls
    return cls

def is_frame_class(cls):
    return (isinstance(cls, type)
            and issubclass(cls, Frame)
            and 3 <= len(cls.__name__) <= 4
            and cls.__name__ == cls.__name__.upper())
