"""The video control register."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from dotmatrix.sprites import SpriteSize
from dotmatrix.video_tiles import TileAddressMode


class ControlFlags(enum.IntFlag):
    """The bits of the video control register."""

    VIDEO_ENABLE = 0b1000_0000
    WINDOW_TILE_MAP = 0b0100_0000
    WINDOW_ENABLE = 0b0010_0000
    TILE_ADDRESS_MODE = 0b0001_0000
    BACKGROUND_TILE_MAP = 0b0000_1000
    SPRITE_SIZE = 0b0000_0100
    SPRITE_ENABLE = 0b0000_0010
    BACKGROUND_AND_WINDOW_ENABLE = 0b0000_0001


@dataclass(frozen=True)
class VideoControl:
    """The decoded video control register; every flag is clear by default."""

    flags: ControlFlags = ControlFlags(0)

    def __post_init__(self) -> None:
        object.__setattr__(self, "flags", ControlFlags(int(self.flags) & 0xFF))

    @property
    def bits(self) -> int:
        return int(self.flags)

    def _has(self, flag: ControlFlags) -> bool:
        return bool(self.flags & flag)

    def video_enabled(self) -> bool:
        return self._has(ControlFlags.VIDEO_ENABLE)

    def tile_address_mode(self) -> TileAddressMode:
        if self._has(ControlFlags.TILE_ADDRESS_MODE):
            return TileAddressMode.BLOCK0_BLOCK1
        return TileAddressMode.BLOCK2_BLOCK1

    def background_and_window_enabled(self) -> bool:
        return self._has(ControlFlags.BACKGROUND_AND_WINDOW_ENABLE)

    def background_tile_map(self) -> int:
        """The id of the tile map used for the background."""
        return 1 if self._has(ControlFlags.BACKGROUND_TILE_MAP) else 0

    def window_enabled(self) -> bool:
        return self._has(ControlFlags.WINDOW_ENABLE)

    def window_tile_map(self) -> int:
        """The id of the tile map used for the window."""
        return 1 if self._has(ControlFlags.WINDOW_TILE_MAP) else 0

    def sprites_enabled(self) -> bool:
        return self._has(ControlFlags.SPRITE_ENABLE)

    def sprite_size(self) -> SpriteSize:
        if self._has(ControlFlags.SPRITE_SIZE):
            return SpriteSize.DOUBLE
        return SpriteSize.SINGLE