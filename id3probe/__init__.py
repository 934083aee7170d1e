# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

import id3probe.frames
import id3probe.tags
import id3probe.id3

from id3probe.errors import *
from id3probe.fileutil import ByteSource, BufferSource, FileSource
from id3probe.frames import (Frame, ErrorFrame, UnknownFrame, TextFrame, URLFrame,
                             UserURLFrame, CommentFrame, PictureFrame)
from id3probe.tags import (extract_tag, read_tag, decode_tag, detect_tag, read_header,
                           Tag, TagHeader, Tag22, Tag23, Tag24)
from id3probe.id3 import genres, parse_genre, genre_description

version = (0, 1, 0)
versionstr = ".".join((str(v) for v in version))
