# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

"""List of frames defined in the various ID3 versions, and the ID3v1
genre table.

Frames not listed here are still read: ids starting with T or W are
decoded as generic text or URL frames, everything else is kept as an
UnknownFrame.
"""

import re

import id3probe.frames as Frames
from id3probe.specs import *


# ID3v2.4

# 4.2.1. Identification frames
class TIT1(Frames.TextFrame): "Content group description"
class TIT2(Frames.TextFrame): "Title/songname/content description"
class TIT3(Frames.TextFrame): "Subtitle/Description refinement"
class TALB(Frames.TextFrame): "Album/Movie/Show title"
class TOAL(Frames.TextFrame): "Original album/movie/show title"

class TRCK(Frames.TextFrame):
    "Track number/Position in set"
    # #/#

class TPOS(Frames.TextFrame):
    "Part of a set"
    # #/#

class TSST(Frames.TextFrame):
    "Set subtitle"
    _version = 4

class TSRC(Frames.TextFrame): "ISRC (international standard recording code)"


# 4.2.2. Involved persons frames
class TPE1(Frames.TextFrame): "Lead performer(s)/Soloist(s)"
class TPE2(Frames.TextFrame): "Band/orchestra/accompaniment"
class TPE3(Frames.TextFrame): "Conductor/performer refinement"
class TPE4(Frames.TextFrame): "Interpreted, remixed, or otherwise modified by"
class TOPE(Frames.TextFrame): "Original artist(s)/performer(s)"
class TEXT(Frames.TextFrame): "Lyricist/Text writer"
class TOLY(Frames.TextFrame): "Original lyricist(s)/text writer(s)"
class TCOM(Frames.TextFrame): "Composer"
class TENC(Frames.TextFrame): "Encoded by"


# 4.2.3. Derived and subjective properties frames
class TBPM(Frames.TextFrame): "BPM (beats per minute)"
class TLEN(Frames.TextFrame): "Length"
class TKEY(Frames.TextFrame): "Initial key"
class TLAN(Frames.TextFrame): "Language(s)"

class TCON(Frames.TextFrame):
    "Content type"
    # integer  - ID3v1
    # RX - Remix
    # CR - Cover
    # Freeform text
    # id3v2.3: (number),

class TFLT(Frames.TextFrame): "File type"
class TMED(Frames.TextFrame): "Media type"

class TMOO(Frames.TextFrame):
    "Mood"
    _version = 4


# 4.2.4. Rights and license frames
class TCOP(Frames.TextFrame): "Copyright message"

class TPRO(Frames.TextFrame):
    "Produced notice"
    _version = 4

class TPUB(Frames.TextFrame): "Publisher"
class TOWN(Frames.TextFrame): "File owner/licensee"
class TRSN(Frames.TextFrame): "Internet radio station name"
class TRSO(Frames.TextFrame): "Internet radio station owner"


# 4.2.5. Other text frames
class TOFN(Frames.TextFrame): "Original filename"
class TDLY(Frames.TextFrame): "Playlist delay"

class TDEN(Frames.TextFrame):
    "Encoding time"
    _version = 4

class TDOR(Frames.TextFrame):
    "Original release time"
    _version = 4

class TDRC(Frames.TextFrame):
    "Recording time"
    _version = 4

class TDRL(Frames.TextFrame):
    "Release time"
    _version = 4

class TDTG(Frames.TextFrame):
    "Tagging time"
    _version = 4

class TSSE(Frames.TextFrame): "Software/Hardware and settings used for encoding"


# 4.3. URL link frames
class WCOM(Frames.URLFrame): "Commercial information"
class WCOP(Frames.URLFrame): "Copyright/Legal information"
class WOAF(Frames.URLFrame): "Official audio file webpage"
class WOAR(Frames.URLFrame): "Official artist/performer webpage"
class WOAS(Frames.URLFrame): "Official audio source webpage"
class WORS(Frames.URLFrame): "Official Internet radio station homepage"
class WPAY(Frames.URLFrame): "Payment"
class WPUB(Frames.URLFrame): "Publishers official webpage"
class WXXX(Frames.UserURLFrame): "User defined URL link frame"


# 4.8. - 4.10.
class USLT(Frames.CommentFrame): "Unsynchronised lyric/text transcription"
class COMM(Frames.CommentFrame): "Comments"


# 4.14.
class APIC(Frames.PictureFrame): "Attached picture"


# ID3v2.3
class TYER(Frames.TextFrame):
    """Year
    A numerical string with the year of the recording.
    Replaced by TDRC in id3v2.4
    """
    _version = 3

class TDAT(Frames.TextFrame):
    """Date
    A numerical string in DDMM format containing the date for the recording.
    Replaced by TDRC in id3v2.4
    """
    _version = 3

class TIME(Frames.TextFrame):
    """Time
    A numerical string in HHMM format containing the time for the recording.
    Replaced by TDRC in id3v2.4
    """
    _version = 3

class TORY(Frames.TextFrame):
    """Original release year
    Replaced by TDOR in id3v2.4
    """
    _version = 3

class TRDA(Frames.TextFrame):
    """Recording dates
    Replaced by TDRC in id3v2.4
    """
    _version = 3

class TSIZ(Frames.TextFrame):
    """Size
    Size of the audio file in bytes, excluding the ID3v2 tag.
    Removed in id3v2.4
    """
    _version = 3


# ID3v2.2
class TT1(TIT1): pass
class TT2(TIT2): pass
class TT3(TIT3): pass
class TP1(TPE1): pass
class TP2(TPE2): pass
class TP3(TPE3): pass
class TP4(TPE4): pass
class TCM(TCOM): pass
class TXT(TEXT): pass
class TLA(TLAN): pass
class TCO(TCON): pass
class TAL(TALB): pass
class TPA(TPOS): pass
class TRK(TRCK): pass
class TRC(TSRC): pass
class TYE(TYER): pass
class TDA(TDAT): pass
class TIM(TIME): pass
class TRD(TRDA): pass
class TMT(TMED): pass
class TFT(TFLT): pass
class TBP(TBPM): pass
class TCR(TCOP): pass
class TPB(TPUB): pass
class TEN(TENC): pass
class TSS(TSSE): pass
class TOF(TOFN): pass
class TLE(TLEN): pass
class TSI(TSIZ): pass
class TDY(TDLY): pass
class TKE(TKEY): pass
class TOT(TOAL): pass
class TOA(TOPE): pass
class TOL(TOLY): pass
class TOR(TORY): pass
class WAF(WOAF): pass
class WAR(WOAR): pass
class WAS(WOAS): pass
class WCM(WCOM): pass
class WCP(WCOP): pass
class WPB(WPUB): pass
class WXX(WXXX): pass
class ULT(USLT): pass
class COM(COMM): pass

class PIC(Frames.PictureFrame):
    "Attached picture"
    _framespec = (EncodingSpec("encoding"),
                  SimpleStringSpec("format", 3),
                  ByteSpec("type"),
                  EncodedStringSpec("desc"),
                  BinaryDataSpec("data"))
    _version = 2

    @property
    def mime(self):
        if self.format.upper() == "PNG":
            return "image/png"
        if self.format.upper() == "JPG":
            return "image/jpeg"
        return "image/" + self.format.lower()


# Attached picture (APIC & PIC) types
picture_types = ("Other", "32x32 icon", "Other icon", "Front Cover",
                 "Back Cover", "Leaflet", "Media", "Lead artist", "Artist",
                 "Conductor", "Band/Orchestra", "Composer",
                 "Lyricist/text writer", "Recording Location", "Recording",
                 "Performance", "Screen capture", "A bright coloured fish",
                 "Illustration", "Band/artist", "Publisher/Studio")

# ID3v1 genre list
genres = ( "Blues", "Classic Rock", "Country", "Dance", "Disco", "Funk",
           "Grunge", "Hip-Hop", "Jazz", "Metal", "New Age", "Oldies",
           "Other", "Pop", "R&B", "Rap", "Reggae", "Rock", "Techno",
           "Industrial", "Alternative", "Ska", "Death Metal", "Pranks",
           "Soundtrack", "Euro-Techno", "Ambient", "Trip-Hop", "Vocal",
           "Jazz+Funk", "Fusion", "Trance", "Classical", "Instrumental",
           "Acid", "House", "Game", "Sound Clip","Gospel", "Noise",
           "AlternRock", "Bass", "Soul", "Punk", "Space", "Meditative",
           "Instrumental Pop", "Instrumental Rock", "Ethnic", "Gothic",
           "Darkwave", "Techno-Industrial", "Electronic", "Pop-Folk",
           "Eurodance", "Dream", "Southern Rock", "Comedy", "Cult",
           "Gangsta", "Top 40", "Christian Rap", "Pop/Funk", "Jungle",
           "Native American", "Cabaret", "New Wave", "Psychadelic",
           "Rave", "Showtunes", "Trailer", "Lo-Fi", "Tribal", "Acid Punk",
           "Acid Jazz", "Polka", "Retro", "Musical", "Rock & Roll",
           "Hard Rock",
           # Winamp extensions
           "Folk", "Folk-Rock", "National Folk", "Swing", "Fast Fusion",
           "Bebob", "Latin", "Revival", "Celtic", "Bluegrass", "Avantgarde",
           "Gothic Rock", "Progressive Rock", "Psychedelic Rock",
           "Symphonic Rock", "Slow Rock", "Big Band", "Chorus",
           "Easy Listening", "Acoustic", "Humour", "Speech", "Chanson",
           "Opera", "Chamber Music", "Sonata", "Symphony", "Booty Bass",
           "Primus", "Porn Groove", "Satire", "Slow Jam", "Club", "Tango",
           "Samba", "Folklore", "Ballad", "Power Ballad", "Rhythmic Soul",
           "Freestyle", "Duet", "Punk Rock", "Drum Solo", "A capella",
           "Euro-House", "Dance Hall", "Goa", "Drum & Bass", "Club-House",
           "Hardcore", "Terror", "Indie", "BritPop", "Afro-Punk",
           "Polsk Punk", "Beat", "Christian Gangsta Rap", "Heavy Metal",
           "Black Metal", "Crossover", "Contemporary Christian",
           "Christian Rock", "Merengue", "Salsa", "Thrash Metal", "Anime",
           "JPop", "Synthpop", "Abstract", "Art Rock", "Baroque", "Bhangra",
           "Big Beat", "Breakbeat", "Chillout", "Downtempo", "Dub", "EBM",
           "Eclectic", "Electro", "Electroclash", "Emo", "Experimental",
           "Garage", "Global", "IDM", "Illbient", "Industro-Goth",
           "Jam Band", "Krautrock", "Leftfield", "Lounge", "Math Rock",
           "New Romantic", "Nu-Breakz", "Post-Punk", "Post-Rock",
           "Psytrance", "Shoegaze", "Space Rock", "Trop Rock", "World Music",
           "Neoclassical", "Audiobook", "Audio Theatre",
           "Neue Deutsche Welle", "Podcast", "Indie Rock", "G-Funk",
           "Dubstep", "Garage Rock", "Psybient" )

# Refinements allowed in place of a genre number in ID3v2.3 TCON frames
genre_refinements = { "RX": "Remix", "CR": "Cover" }

_genre_pattern = re.compile(r"^\((\d+|RX|CR)\)(.*)$", re.DOTALL | re.ASCII)
_genre_number = re.compile(r"^\d+$", re.ASCII)

def parse_genre(text):
    """Split TCON content into a numeric genre code and the rest of the text.

    >>> parse_genre("13")
    (13, '')
    >>> parse_genre("(13)Pop")
    (13, 'Pop')
    >>> parse_genre("Darkcore")
    (-1, 'Darkcore')

    The code is -1 when the text does not start with a genre number.
    """
    text = text.strip()
    m = _genre_pattern.match(text)
    if m:
        if m.group(1) in genre_refinements:
            return -1, m.group(2) or genre_refinements[m.group(1)]
        return int(m.group(1)), m.group(2)
    if _genre_number.match(text):
        return int(text), ""
    return -1, text

def genre_description(text):
    "Return a human-readable genre name for TCON content."
    code, rest = parse_genre(text)
    if 0 <= code < len(genres):
        return genres[code]
    return rest or text.strip()


def _register_builtin_frames():
    for obj in list(globals().values()):
        if Frames.is_frame_class(obj) and obj.__module__ == __name__:
            Frames.register_frame(obj)
    APIC._v2_frame = PIC

_register_builtin_frames()
