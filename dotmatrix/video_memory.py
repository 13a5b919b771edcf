"""Video memory: tile data, tile maps and sprite attributes."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Union

from dotmatrix.sprites import Sprite, SpriteAttributes
from dotmatrix.video_tiles import TileBlock, TileMap

_TILE_DATA_START = 0x8000
_TILE_MAP_START = 0x9800
_TILE_MAP_END = 0xA000
_OAM_START = 0xFE00
_OAM_END = 0xFEA0
_TILE_BLOCK_BYTES = 0x800
_TILE_MAP_BYTES = 0x400
_SPRITE_BYTES = 4
_NUM_SPRITES = 40


class SpriteByte(enum.Enum):
    """The byte of a sprite's four-byte attribute entry."""

    POSITION_Y = 0
    POSITION_X = 1
    TILE = 2
    ATTRIBUTES = 3


@dataclass(frozen=True)
class TileAddress:
    block: int
    offset: int


@dataclass(frozen=True)
class TileMapAddress:
    map_id: int
    offset: int


@dataclass(frozen=True)
class SpriteAddress:
    sprite: int
    byte: SpriteByte


VideoAddress = Union[TileAddress, TileMapAddress, SpriteAddress]


def map_video_address(address: int) -> VideoAddress:
    """Map a bus address in video RAM or sprite attribute memory."""
    if _TILE_DATA_START <= address < _TILE_MAP_START:
        block, offset = divmod(address - _TILE_DATA_START, _TILE_BLOCK_BYTES)
        return TileAddress(block, offset)
    if _TILE_MAP_START <= address < _TILE_MAP_END:
        map_id, offset = divmod(address - _TILE_MAP_START, _TILE_MAP_BYTES)
        return TileMapAddress(map_id, offset)
    if _OAM_START <= address < _OAM_END:
        sprite, byte = divmod(address - _OAM_START, _SPRITE_BYTES)
        return SpriteAddress(sprite, SpriteByte(byte))
    raise ValueError(f"not a video address: {address:#06x}")


class VideoMemory:
    """Three tile blocks, two tile maps and forty sprites."""

    def __init__(self) -> None:
        self._tiles = [TileBlock() for _ in range(3)]
        self._tile_maps = [TileMap() for _ in range(2)]
        self._sprites = [Sprite() for _ in range(_NUM_SPRITES)]

    def read(self, address: VideoAddress) -> int:
        match address:
            case TileAddress(block, offset):
                return self._tiles[block].data[offset]
            case TileMapAddress(map_id, offset):
                return self._tile_maps[map_id].data[offset]
            case SpriteAddress(index, byte):
                sprite = self._sprites[index]
                match byte:
                    case SpriteByte.POSITION_Y:
                        return sprite.position.y_plus_16
                    case SpriteByte.POSITION_X:
                        return sprite.position.x_plus_8
                    case SpriteByte.TILE:
                        return sprite.tile
                    case SpriteByte.ATTRIBUTES:
                        return int(sprite.attributes)
        raise ValueError(f"not a video address: {address!r}")

    def write(self, address: VideoAddress, value: int) -> None:
        value &= 0xFF
        match address:
            case TileAddress(block, offset):
                self._tiles[block].data[offset] = value
            case TileMapAddress(map_id, offset):
                self._tile_maps[map_id].data[offset] = value
            case SpriteAddress(index, byte):
                sprite = self._sprites[index]
                match byte:
                    case SpriteByte.POSITION_Y:
                        sprite.position.y_plus_16 = value
                    case SpriteByte.POSITION_X:
                        sprite.position.x_plus_8 = value
                    case SpriteByte.TILE:
                        sprite.tile = value
                    case SpriteByte.ATTRIBUTES:
                        sprite.attributes = SpriteAttributes(value)
            case _:
                raise ValueError(f"not a video address: {address!r}")

    def tile_block(self, block: int) -> TileBlock:
        return self._tiles[block]

    def tile_map(self, map_id: int) -> TileMap:
        return self._tile_maps[map_id]

    def sprites(self) -> tuple[Sprite, ...]:
        return tuple(self._sprites)

    def sprite(self, sprite_id: int) -> Sprite:
        return self._sprites[sprite_id]