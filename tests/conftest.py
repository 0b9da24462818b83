"""Shared test fixtures."""

import struct

import pytest

from glyphgrid import Canvas, CanvasConfig


def build_bmp(rows, bpp=24, raw_size=None, compression=0, tag=b"BM"):
    """
    Assemble a minimal BMP from bottom-up rows.

    For 24/32 bpp each pixel is an (r, g, b) tuple; for 1 bpp each pixel is
    0 or 1. Rows are padded to a 4-byte boundary.
    """
    height = len(rows)
    width = len(rows[0]) if rows else 0

    payload = b""
    for row in rows:
        if bpp == 1:
            bits = "".join(str(p) for p in row).ljust(((width + 7) // 8) * 8, "0")
            data = bytes(int(bits[i:i + 8], 2) for i in range(0, len(bits), 8))
        else:
            data = b"".join(
                bytes((b, g, r)) + (b"\x00" if bpp == 32 else b"")
                for (r, g, b) in row
            )
        payload += data + b"\x00" * (-len(data) % 4)

    offset = 54
    if raw_size is None:
        raw_size = len(payload)
    header = tag + struct.pack(
        "<IIIIiiHHII",
        offset + len(payload), 0, offset, 40,
        width, height, 1, bpp, compression, raw_size,
    )
    header += b"\x00" * (offset - len(header))
    return header + payload


@pytest.fixture
def bmp_builder():
    """Factory for synthetic BMP bytes."""
    return build_bmp


@pytest.fixture
def white_bmp():
    """2x2 all-white 24-bit BMP."""
    white = (255, 255, 255)
    return build_bmp([[white, white], [white, white]])


@pytest.fixture
def fixed_terminal():
    """Terminal size provider reporting 80x25."""
    return lambda: (80, 25)


@pytest.fixture
def canvas():
    """Blank 10x5 canvas with default glyphs."""
    return Canvas(10, 5)


@pytest.fixture
def config():
    return CanvasConfig()
