"""Chunk and item grammar of the vault container.

A decoded vault is a sequence of chunks. Each chunk is a 4-byte id,
a big endian 4-byte size and a payload of exactly that size:

    0000: 'ACCT'
    0004: 0x00 0x00 0x00 0x04
    0008: 0xDE 0xAD 0xBE 0xEF
    000C: --- next chunk ---

Some chunk payloads are itemized: a sequence of items, each a big
endian 4-byte size followed by a payload of that size:

    0000: 0x00 0x00 0x00 0x04
    0004: 0xDE 0xAD 0xBE 0xEF
    0008: --- next item ---

All parsing uses Python's struct module for binary operations. Read
position is tracked by a ByteCursor owned by a single parse, so
independent parses over the same bytes never interfere.
"""

from __future__ import annotations

import struct
from collections.abc import Iterator
from dataclasses import dataclass

from lpvault.exceptions import FormatError

CHUNK_ID_SIZE = 4
SIZE_FIELD = struct.Struct(">I")


@dataclass(frozen=True, slots=True)
class Chunk:
    """A tagged region of the container.

    Attributes:
        id: 4-byte chunk tag (e.g. b"ACCT")
        payload: Raw chunk payload
    """

    id: bytes
    payload: bytes


class ByteCursor:
    """Read cursor over an owned bytes buffer."""

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._offset = 0

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def remaining(self) -> int:
        return len(self._data) - self._offset

    @property
    def at_end(self) -> bool:
        return self._offset >= len(self._data)

    def read(self, n: int) -> bytes:
        """Read exactly n bytes.

        Raises:
            FormatError: If fewer than n bytes remain
        """
        if n > self.remaining:
            raise FormatError(
                f"Unexpected end of data at offset {self._offset}: "
                f"need {n} bytes, have {self.remaining}"
            )
        result = self._data[self._offset : self._offset + n]
        self._offset += n
        return result

    def read_uint32(self) -> int:
        """Read a big endian unsigned 32-bit integer."""
        return SIZE_FIELD.unpack(self.read(SIZE_FIELD.size))[0]

    def read_rest(self) -> bytes:
        """Read everything that is left."""
        return self.read(self.remaining)


def read_chunk(cursor: ByteCursor) -> Chunk:
    """Read one chunk at the cursor.

    Raises:
        FormatError: If the header or payload is truncated
    """
    chunk_id = cursor.read(CHUNK_ID_SIZE)
    size = cursor.read_uint32()
    return Chunk(chunk_id, cursor.read(size))


def iter_chunks(data: bytes) -> Iterator[Chunk]:
    """Yield chunks in order until the buffer is exhausted."""
    cursor = ByteCursor(data)
    while not cursor.at_end:
        yield read_chunk(cursor)


def extract_chunks(data: bytes) -> dict[bytes, list[Chunk]]:
    """Group all chunks of a decoded vault by id.

    Order within one id is the order in the buffer.

    Raises:
        FormatError: If any chunk is truncated
    """
    chunks: dict[bytes, list[Chunk]] = {}
    for chunk in iter_chunks(data):
        chunks.setdefault(chunk.id, []).append(chunk)
    return chunks


def read_item(cursor: ByteCursor) -> bytes:
    """Read one item payload at the cursor.

    Raises:
        FormatError: If there is no complete item left
    """
    return cursor.read(cursor.read_uint32())


def skip_item(cursor: ByteCursor) -> None:
    read_item(cursor)


def pack_chunk(chunk_id: bytes, payload: bytes) -> bytes:
    """Encode one chunk.

    Raises:
        ValueError: If chunk_id is not 4 bytes
    """
    if len(chunk_id) != CHUNK_ID_SIZE:
        raise ValueError(f"Chunk id must be {CHUNK_ID_SIZE} bytes, got {len(chunk_id)}")
    return chunk_id + SIZE_FIELD.pack(len(payload)) + payload


def pack_item(payload: bytes) -> bytes:
    """Encode one item."""
    return SIZE_FIELD.pack(len(payload)) + payload
