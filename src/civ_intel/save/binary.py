"""Low-level readers for the .Civ6Save container.

The file starts with the ``CIV6`` magic followed by an uncompressed header
full of tag-value records. Somewhere past the header sits one zlib stream
that was written in 64KB chunks, each followed by a 4-byte spacer.
"""

from __future__ import annotations

import logging
import struct
import zlib

from civ_intel.save.models import MarkerType, MarkerValue

log = logging.getLogger(__name__)

MAGIC = b"CIV6"

# Tag-value markers in the header
GAME_TURN = b"\x9d\x2c\xe6\xbd"
GAME_SPEED = b"\x99\xb0\xd9\x05"
MAP_SIZE = b"\x40\x5c\x83\x0b"
MAP_FILE = b"\x5a\x87\xd8\x63"

ZLIB_HEADER = b"\x78\x9c"
COMPRESSED_DATA_END = b"\x00\x00\xff\xff"
ZLIB_SEARCH_START = 200_000
CHUNK_SIZE = 64 * 1024
CHUNK_SPACER = 4


class SaveFormatError(ValueError):
    """The buffer is not a readable .Civ6Save."""


def check_magic(buffer: bytes) -> None:
    magic = buffer[:4]
    if magic != MAGIC:
        found = magic.decode("ascii", errors="replace")
        raise SaveFormatError(
            f"Invalid Civ6 save file: expected CIV6 magic bytes, got {found!r}"
        )


def _unpack(fmt: str, buffer: bytes, offset: int) -> int:
    try:
        return struct.unpack_from(fmt, buffer, offset)[0]
    except struct.error as e:
        raise SaveFormatError(f"Read past end of buffer at offset {offset}") from e


def read_marker_value(buffer: bytes, marker: bytes) -> MarkerValue | None:
    """Decode the tag-value record that starts at the first ``marker``.

    Layout relative to the marker: u32 type at +4; for strings a u16
    length (including the terminator) at +8; payload at +16.
    Unknown types and missing markers return None.
    """
    pos = buffer.find(marker)
    if pos < 0:
        return None

    type_code = _unpack("<I", buffer, pos + 4)
    if type_code == MarkerType.BOOL:
        return MarkerValue(MarkerType.BOOL, _unpack("<I", buffer, pos + 16) != 0)
    if type_code == MarkerType.INT:
        return MarkerValue(MarkerType.INT, _unpack("<I", buffer, pos + 16))
    if type_code == MarkerType.STRING:
        length = _unpack("<H", buffer, pos + 8)
        start = pos + 16
        end = start + max(length - 1, 0)
        if end > len(buffer):
            raise SaveFormatError(f"String at offset {start} runs past end of buffer")
        return MarkerValue(
            MarkerType.STRING, buffer[start:end].decode("utf-8", errors="replace")
        )
    return None


def strip_chunk_spacers(segment: bytes) -> bytes:
    """Keep the first 64KB of every 64KB+4 stride; a short tail is kept whole."""
    stride = CHUNK_SIZE + CHUNK_SPACER
    return b"".join(
        segment[pos : pos + CHUNK_SIZE] for pos in range(0, len(segment), stride)
    )


def decompress_game_data(buffer: bytes) -> bytes | None:
    """Locate, de-chunk and inflate the game-data segment.

    Returns None when the segment can't be found or doesn't inflate.
    """
    start = buffer.find(ZLIB_HEADER, ZLIB_SEARCH_START)
    if start < 0:
        log.debug("No zlib header past offset %d", ZLIB_SEARCH_START)
        return None
    end = buffer.find(COMPRESSED_DATA_END, start)
    if end < 0:
        log.debug("No end-of-data sentinel after offset %d", start)
        return None

    combined = strip_chunk_spacers(buffer[start : end + len(COMPRESSED_DATA_END)])
    d = zlib.decompressobj()
    try:
        decompressed = d.decompress(combined)
        decompressed += d.flush()
    except zlib.error as e:
        log.debug("Game data failed to inflate: %s", e)
        return None
    return decompressed
