# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-19
# Description: test_text_map_store.py
# -----------------------------------------------------------------------------
import struct

import pytest

from errors.DenseSearchErrors import ArtifactIOError, DecodeError
from vectorstore.TextMapStore import TextMapStore


@pytest.mark.parametrize(
    "text_map",
    [
        [],
        ["only one"],
        ["cat", "dog", "car"],
        ["", "  padded  ", "line\nbreak", "tab\tsep"],
        ["ünïcödé", "日本語のタイトル", "emoji 🚀 rocket"],
        ["x" * 100_000],
    ],
)
def test_save_then_load_returns_same_text_map(tmp_path, text_map):
    path = tmp_path / "text_map.bin"
    TextMapStore.save(path, text_map)
    assert TextMapStore.load(path) == text_map


def test_save_creates_parent_dirs_and_leaves_no_temp_file(tmp_path):
    path = tmp_path / "nested" / "dir" / "text_map.bin"
    TextMapStore.save(path, ["a"])
    assert path.is_file()
    assert list(path.parent.iterdir()) == [path]


def test_encoding_is_length_prefixed_utf8():
    data = TextMapStore.encode(["é"])
    assert data[:4] == b"DSTM"
    assert data[4] == 1
    assert struct.unpack_from("<Q", data, 5)[0] == 1
    assert struct.unpack_from("<Q", data, 13)[0] == 2
    assert data[21:] == "é".encode("utf-8")


def test_load_missing_file_is_io_error(tmp_path):
    with pytest.raises(ArtifactIOError):
        TextMapStore.load(tmp_path / "nope.bin")


@pytest.mark.parametrize(
    "mutate",
    [
        lambda d: d[:3],                      # no header
        lambda d: b"XXXX" + d[4:],            # bad magic
        lambda d: d[:4] + b"\x09" + d[5:],    # unknown version
        lambda d: d[:-1],                     # truncated last record
        lambda d: d + b"\x00",                # trailing garbage
    ],
)
def test_corrupt_payload_is_decode_error(mutate):
    data = TextMapStore.encode(["alpha", "beta"])
    with pytest.raises(DecodeError):
        TextMapStore.decode(mutate(data))


def test_invalid_utf8_is_decode_error():
    bad = b"DSTM" + bytes([1]) + struct.pack("<Q", 1) + struct.pack("<Q", 2) + b"\xff\xfe"
    with pytest.raises(DecodeError):
        TextMapStore.decode(bad)


def test_non_string_entry_rejected():
    with pytest.raises(TypeError):
        TextMapStore.encode(["ok", 3])
