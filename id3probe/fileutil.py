# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

"""Random-access byte sources.

Tags are read exclusively through positional reads (read `length` bytes
starting at absolute `offset`), so that extraction never depends on a
shared file position.  A source signals end of data by returning an
empty byte string; a short read returns fewer bytes than requested.
"""

import abc
import os
import threading

from abc import abstractmethod
from contextlib import contextmanager

class ByteSource(metaclass=abc.ABCMeta):
    @abstractmethod
    def read_at(self, offset, length):
        """Return up to length bytes starting at offset.
        Returns an empty byte string if offset is at or past the end of data.
        """

class BufferSource(ByteSource):
    "A byte source over an in-memory buffer (bytes, bytearray, memoryview)."
    def __init__(self, buffer):
        # Not copied: mutations of a bytearray are visible to later reads.
        self.buffer = buffer

    def read_at(self, offset, length):
        if offset < 0 or length < 0:
            raise ValueError("Negative offset or length")
        return bytes(self.buffer[offset:offset + length])

    def __len__(self):
        return len(self.buffer)

    def __repr__(self):
        return "<BufferSource: {0} bytes>".format(len(self.buffer))

class FileSource(ByteSource):
    """A byte source over a binary file object.

    Uses os.pread on the underlying descriptor when possible; the file
    position is then left untouched.  Other file objects (e.g. io.BytesIO)
    are read with seek/read under a lock.
    """
    def __init__(self, file):
        self.file = file
        self._lock = threading.Lock()
        self._fd = None
        if hasattr(os, "pread"):
            try:
                self._fd = file.fileno()
            except (AttributeError, OSError):
                # io.UnsupportedOperation is an OSError
                self._fd = None

    def read_at(self, offset, length):
        if offset < 0 or length < 0:
            raise ValueError("Negative offset or length")
        if self._fd is not None:
            return self._pread(offset, length)
        with self._lock:
            self.file.seek(offset)
            return self.file.read(length)

    def _pread(self, offset, length):
        chunks = []
        while length > 0:
            chunk = os.pread(self._fd, length, offset)
            if not chunk:
                break
            chunks.append(chunk)
            offset += len(chunk)
            length -= len(chunk)
        return b"".join(chunks)

    def __repr__(self):
        return "<FileSource: {0!r}>".format(getattr(self.file, "name", self.file))

def as_source(obj):
    "Wrap obj in a ByteSource, unless it is one already."
    if isinstance(obj, ByteSource):
        return obj
    if isinstance(obj, (bytes, bytearray, memoryview)):
        return BufferSource(obj)
    if hasattr(obj, "read") and hasattr(obj, "seek"):
        return FileSource(obj)
    raise TypeError("Not a byte source: {0!r}".format(obj))

def xread_at(source, offset, length):
    """Read exactly length bytes at offset from source;
    raise EOFError if the source ends sooner."""
    data = source.read_at(offset, length)
    if len(data) != length:
        raise EOFError("Expected {0} bytes at offset {1}, got {2}"
                       .format(length, offset, len(data)))
    return data

@contextmanager
def opened(filename, mode):
    "Open filename, or do nothing if filename is already an open file object"
    if isinstance(filename, (str, os.PathLike)):
        file = open(filename, mode)
        try:
            yield file
        finally:
            if not file.closed:
                file.close()
    else:
        yield filename
