# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

class Error(Exception): pass

class Warning(Error, UserWarning): pass

class FrameWarning(Warning): pass
class ErrorFrameWarning(FrameWarning): pass

class TagWarning(Warning): pass

class NoTagError(Error): pass

class TagError(Error, ValueError): pass
class UnsupportedVersionError(TagError): pass
class SyncsafeError(TagError): pass
class TruncatedHeaderError(TagError, EOFError): pass
class MalformedFrameError(TagError): pass
class TruncatedFrameError(MalformedFrameError, EOFError): pass

class FrameError(Error): pass
