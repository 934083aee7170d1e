#!/usr/bin/env python

from setuptools import setup

setup(
    name="id3probe",
    version="0.1.0",
    packages=["id3probe"],
    python_requires=">=3.6",
    description="Read-only ID3v2 tag extraction package in pure Python 3",
    long_description="""
Id3probe reads the ID3v2.2, ID3v2.3 and ID3v2.4 tag at the start of an
MP3 file and exposes its frames and the common metadata fields (title,
artist, album, track, genre, comments, album art) without decoding any
audio.  Slightly corrupt tags are read up to the first malformed frame.
""",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Programming Language :: Python :: 3",
        "Topic :: Multimedia :: Sound/Audio"
        ],
    )
