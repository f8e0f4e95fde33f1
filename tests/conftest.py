"""Shared fixtures: synthesized image headers, random stubs and sample blocks."""

import base64
import struct
import zlib

import pytest

from ticketgen.models import Block, Question


def _png_chunk(chunk_type: bytes, payload: bytes) -> bytes:
    crc = zlib.crc32(chunk_type + payload) & 0xFFFFFFFF
    return struct.pack('>I', len(payload)) + chunk_type + payload + struct.pack('>I', crc)


def build_png(width: int, height: int) -> bytes:
    """A complete, valid grayscale PNG."""
    ihdr = struct.pack('>IIBBBBB', width, height, 8, 0, 0, 0, 0)
    raw = b''.join(b'\x00' + b'\x80' * width for _ in range(height))
    return (
        b'\x89PNG\r\n\x1a\n'
        + _png_chunk(b'IHDR', ihdr)
        + _png_chunk(b'IDAT', zlib.compress(raw))
        + _png_chunk(b'IEND', b'')
    )


def build_gif(width: int, height: int, version: bytes = b'GIF89a') -> bytes:
    return version + struct.pack('<HH', width, height) + b'\x00\x00\x00' + b'\x3b'


def build_bmp(width: int, height: int) -> bytes:
    file_header = b'BM' + struct.pack('<IHHI', 54, 0, 0, 54)
    info_header = struct.pack('<IiiHHIIiiII', 40, width, height, 1, 24, 0, 0, 0, 0, 0, 0)
    return file_header + info_header


def build_jpeg(width: int, height: int, sof_marker: int = 0xC0, fill_bytes: int = 0) -> bytes:
    app0 = b'\xff\xe0' + struct.pack('>H', 16) + b'JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00'
    sof = (
        b'\xff' * (1 + fill_bytes) + bytes([sof_marker])
        + struct.pack('>HBHHB', 17, 8, height, width, 3)
        + b'\x01\x22\x00\x02\x11\x01\x03\x11\x01'
    )
    return b'\xff\xd8' + app0 + sof + b'\xff\xd9'


def to_data_uri(data: bytes, content_type: str = 'image/png') -> str:
    return f"data:{content_type};base64,{base64.b64encode(data).decode('ascii')}"


class MaxRandom:
    """randint stub that always returns the upper bound: shuffling becomes a no-op."""

    def __init__(self):
        self.calls = []

    def randint(self, a, b):
        self.calls.append((a, b))
        return b


class SequenceRandom:
    """randint stub that replays a fixed sequence of values."""

    def __init__(self, values):
        self.values = list(values)

    def randint(self, a, b):
        value = self.values.pop(0)
        assert a <= value <= b
        return value


@pytest.fixture
def png_bytes():
    return build_png


@pytest.fixture
def gif_bytes():
    return build_gif


@pytest.fixture
def bmp_bytes():
    return build_bmp


@pytest.fixture
def jpeg_bytes():
    return build_jpeg


@pytest.fixture
def data_uri():
    return to_data_uri


@pytest.fixture
def max_random():
    return MaxRandom()


@pytest.fixture
def sequence_random():
    return SequenceRandom


@pytest.fixture
def make_block():
    def _make(name: str, size: int) -> Block:
        return Block(name=name, questions=[Question(text=f"{name} question {i + 1}") for i in range(size)])
    return _make
