"""
Ingestion of dive computer log exports.

Currently supports Shearwater XML exports, producing a divelog.Dive.
"""

from ingest.shearwater import ShearwaterParser, LogParseError, load_shearwater_log

__all__ = [
    "ShearwaterParser",
    "LogParseError",
    "load_shearwater_log",
]
