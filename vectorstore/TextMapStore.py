# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-11
# Description: TextMapStore
# -----------------------------------------------------------------------------
"""
Binary persistence for the ordered text map.

Layout (all integers little endian):

    b"DSTM" | version: u8 | count: u64 | (length: u64 | utf-8 bytes) * count

Row ids are implicit: record i is the text that produced matrix row i.
"""
import os
import struct
from pathlib import Path
from typing import List, Sequence, Union

from errors.DenseSearchErrors import ArtifactIOError, DecodeError

MAGIC = b"DSTM"
FORMAT_VERSION = 1

_HEADER = struct.Struct("<4sBQ")
_LENGTH = struct.Struct("<Q")


class TextMapStore:

    @staticmethod
    def encode(text_map: Sequence[str]) -> bytes:
        parts = [_HEADER.pack(MAGIC, FORMAT_VERSION, len(text_map))]
        for i, text in enumerate(text_map):
            if not isinstance(text, str):
                raise TypeError(f"Text map entry {i} is {type(text).__name__}, expected str")
            data = text.encode("utf-8")
            parts.append(_LENGTH.pack(len(data)))
            parts.append(data)
        return b"".join(parts)

    @staticmethod
    def decode(data: bytes, *, source: str = "<bytes>") -> List[str]:
        if len(data) < _HEADER.size:
            raise DecodeError(f"Text map {source} is truncated (no header)", path=source)

        magic, version, count = _HEADER.unpack_from(data, 0)
        if magic != MAGIC:
            raise DecodeError(f"Text map {source} has bad magic {magic!r}", path=source)
        if version != FORMAT_VERSION:
            raise DecodeError(f"Text map {source} has unsupported version {version}", path=source)

        offset = _HEADER.size
        texts: List[str] = []
        for i in range(count):
            if offset + _LENGTH.size > len(data):
                raise DecodeError(f"Text map {source} truncated at record {i} of {count}", path=source)
            (length,) = _LENGTH.unpack_from(data, offset)
            offset += _LENGTH.size
            end = offset + length
            if end > len(data):
                raise DecodeError(f"Text map {source} truncated inside record {i}", path=source)
            try:
                texts.append(data[offset:end].decode("utf-8"))
            except UnicodeDecodeError as e:
                raise DecodeError(f"Text map {source} record {i} is not valid UTF-8: {e}", path=source) from e
            offset = end

        if offset != len(data):
            raise DecodeError(
                f"Text map {source} has {len(data) - offset} trailing bytes after {count} records",
                path=source,
            )
        return texts

    @classmethod
    def save(cls, path: Union[str, Path], text_map: Sequence[str]) -> None:
        """Write atomically: a temp sibling is renamed over the target."""
        path = Path(path)
        payload = cls.encode(text_map)
        tmp = path.with_name(path.name + ".tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with tmp.open("wb") as f:
                f.write(payload)
            os.replace(tmp, path)
        except OSError as e:
            tmp.unlink(missing_ok=True)
            raise ArtifactIOError(f"Cannot write text map {path}: {e}", path=str(path)) from e

    @classmethod
    def load(cls, path: Union[str, Path]) -> List[str]:
        path = Path(path)
        try:
            data = path.read_bytes()
        except OSError as e:
            raise ArtifactIOError(f"Cannot read text map {path}: {e}", path=str(path)) from e
        return cls.decode(data, source=str(path))
