"""Tiles, tile maps, palettes and the screen buffer."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import ClassVar

NUM_SCANLINES = 144
PIXELS_PER_LINE = 160

_TILE_BYTES = 16
_TILE_BLOCK_BYTES = 0x800
_TILE_MAP_ENTRIES = 0x400
_TILE_MAP_WIDTH = 32


@dataclass(frozen=True)
class Tile:
    """An 8x8 tile of two bits per pixel, two bytes per row."""

    data: bytes

    def __post_init__(self) -> None:
        if len(self.data) != _TILE_BYTES:
            raise ValueError(f"a tile holds {_TILE_BYTES} bytes, got {len(self.data)}")

    def pixel(self, x: int, y: int) -> int:
        """The palette index of the pixel at (x, y)."""
        low_byte = self.data[y * 2]
        high_byte = self.data[y * 2 + 1]
        low_bit = (low_byte >> (7 - x)) & 0b1
        high_bit = (high_byte >> (7 - x)) & 0b1
        return (high_bit << 1) | low_bit


@dataclass
class TileBlock:
    """One 2 KiB block of tile data: 128 tiles."""

    data: bytearray = field(default_factory=lambda: bytearray(_TILE_BLOCK_BYTES))

    def tile(self, index: int) -> Tile:
        if not 0 <= index < _TILE_BLOCK_BYTES // _TILE_BYTES:
            raise IndexError(f"tile index out of range: {index}")
        offset = index * _TILE_BYTES
        return Tile(bytes(self.data[offset : offset + _TILE_BYTES]))


class TileAddressMode(enum.Enum):
    """How tile indices 0-127 select a tile block."""

    BLOCK2_BLOCK1 = "Blocks 2 & 1"
    BLOCK0_BLOCK1 = "Blocks 0 & 1"

    def tile(self, index: int) -> tuple[int, int]:
        """The tile block and the index within it for a tile index."""
        if index >= 128:
            return 1, index - 128
        if self is TileAddressMode.BLOCK2_BLOCK1:
            return 2, index
        return 0, index

    def __str__(self) -> str:
        return self.value


@dataclass
class TileMap:
    """A 32x32 grid of tile indices."""

    data: list[int] = field(default_factory=lambda: [0] * _TILE_MAP_ENTRIES)

    def get_tile(self, x: int, y: int) -> int:
        return self.data[y * _TILE_MAP_WIDTH + x]


@dataclass(frozen=True)
class Palette:
    """Four RGB colours, indexed 0 to 3."""

    colors: tuple[tuple[int, int, int], ...]

    MONOCHROME_GREEN: ClassVar[Palette]

    def color(self, index: int) -> tuple[int, int, int]:
        return self.colors[index]


Palette.MONOCHROME_GREEN = Palette(
    (
        (0x7B, 0x82, 0x10),
        (0x5A, 0x79, 0x42),
        (0x39, 0x59, 0x4A),
        (0x2F, 0x41, 0x39),
    )
)


@dataclass(frozen=True)
class PaletteMap:
    """A palette register: two bits per index select a palette colour."""

    value: int

    def map(self, index: int) -> int:
        return (self.value >> (index * 2)) & 0b11

    def color(self, index: int, palette: Palette) -> tuple[int, int, int]:
        return palette.color(self.map(index))


@dataclass
class Palettes:
    background: PaletteMap = field(default_factory=lambda: PaletteMap(0xFC))
    sprite0: PaletteMap = field(default_factory=lambda: PaletteMap(0))
    sprite1: PaletteMap = field(default_factory=lambda: PaletteMap(0))


def _blank_lines() -> list[bytearray]:
    return [bytearray(PIXELS_PER_LINE) for _ in range(NUM_SCANLINES)]


@dataclass
class Screen:
    """A frame of palette indices, one per pixel."""

    lines: list[bytearray] = field(default_factory=_blank_lines)

    @staticmethod
    def _check(x: int, y: int) -> None:
        if not (0 <= x < PIXELS_PER_LINE and 0 <= y < NUM_SCANLINES):
            raise IndexError(f"pixel out of range: ({x}, {y})")

    def pixel(self, x: int, y: int) -> int:
        self._check(x, y)
        return self.lines[y][x]

    def set_pixel(self, x: int, y: int, pixel: int) -> None:
        self._check(x, y)
        self.lines[y][x] = pixel