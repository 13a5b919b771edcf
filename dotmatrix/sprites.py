"""Sprite attributes, positions and sizes."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field


class SpriteSize(enum.Enum):
    SINGLE = "Single (8 x 8)"
    DOUBLE = "Double (8 x 16)"

    def height(self) -> int:
        return 8 if self is SpriteSize.SINGLE else 16

    def __str__(self) -> str:
        return self.value


class Priority(enum.Enum):
    SPRITE = enum.auto()
    BACKGROUND = enum.auto()


class SpritePalette(enum.Enum):
    PALETTE0 = enum.auto()
    PALETTE1 = enum.auto()


class SpriteAttributes(enum.IntFlag):
    """The attribute byte of a sprite."""

    PRIORITY = 0b1000_0000
    FLIP_Y = 0b0100_0000
    FLIP_X = 0b0010_0000
    PALETTE = 0b0001_0000
    REST = 0b0000_1111

    def priority(self) -> Priority:
        if self & SpriteAttributes.PRIORITY:
            return Priority.BACKGROUND
        return Priority.SPRITE

    def flip_y(self) -> bool:
        return bool(self & SpriteAttributes.FLIP_Y)

    def flip_x(self) -> bool:
        return bool(self & SpriteAttributes.FLIP_X)

    def palette(self) -> SpritePalette:
        if self & SpriteAttributes.PALETTE:
            return SpritePalette.PALETTE1
        return SpritePalette.PALETTE0


@dataclass
class SpritePosition:
    """A sprite's position, stored offset as the hardware keeps it."""

    x_plus_8: int = 0
    y_plus_16: int = 0

    def on_screen_x(self) -> bool:
        return 1 <= self.x_plus_8 < 168

    def on_screen_y(self, size: SpriteSize) -> bool:
        minimum = 9 if size is SpriteSize.SINGLE else 1
        return minimum <= self.y_plus_16 < 160

    def on_line(self, line: int, size: SpriteSize) -> bool:
        """Whether the sprite covers the given scanline."""
        first_line = self.y_plus_16 - 16
        return first_line <= line < first_line + size.height()


@dataclass
class Sprite:
    position: SpritePosition = field(default_factory=SpritePosition)
    tile: int = 0
    attributes: SpriteAttributes = SpriteAttributes(0)