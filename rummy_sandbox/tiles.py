from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Iterable, List, Tuple

if TYPE_CHECKING:
    from .rules import Ruleset

JOKER_RANK = -1


class Color(str, Enum):
    RED = "red"
    BLUE = "blue"
    YELLOW = "yellow"
    BLACK = "black"
    NONE = "none"


SUIT_COLORS: Tuple[Color, ...] = (Color.RED, Color.BLUE, Color.YELLOW, Color.BLACK)


@dataclass(frozen=True)
class Tile:
    id: int
    color: Color
    rank: int

    def __post_init__(self) -> None:
        if self.id < 1:
            raise ValueError("tile id must be >= 1")
        if self.rank == JOKER_RANK:
            if self.color != Color.NONE:
                raise ValueError("joker cannot carry a color")
        elif self.color == Color.NONE:
            raise ValueError("numbered tile needs a color")
        elif self.rank < 1:
            raise ValueError(f"invalid rank {self.rank}")

    @classmethod
    def joker(cls, tile_id: int) -> "Tile":
        return cls(tile_id, Color.NONE, JOKER_RANK)

    def is_joker(self) -> bool:
        return self.rank == JOKER_RANK

    def label(self) -> str:
        return "J" if self.is_joker() else f"{self.color.value[0]}{self.rank}"

    def to_dict(self) -> dict:
        return {"id": self.id, "color": self.color.value, "rank": self.rank}

    @classmethod
    def from_dict(cls, data: dict) -> "Tile":
        return cls(int(data["id"]), Color(data["color"]), int(data["rank"]))


def iter_full_deck(colors: int, values: int, copies: int, num_jokers: int) -> Iterable[Tuple[Color, int]]:
    """Yield (color, rank) pairs in creation order, jokers last."""
    for color in SUIT_COLORS[:colors]:
        for value in range(1, values + 1):
            for _ in range(copies):
                yield color, value
    for _ in range(num_jokers):
        yield Color.NONE, JOKER_RANK


def build_deck(ruleset: "Ruleset", first_id: int = 1) -> Tuple[List[Tile], int]:
    """Create every tile of a fresh game and return it with the next free id."""
    if ruleset.colors > len(SUIT_COLORS):
        raise ValueError(f"at most {len(SUIT_COLORS)} colors are supported")
    next_id = first_id
    tiles: List[Tile] = []
    for color, rank in iter_full_deck(ruleset.colors, ruleset.values, ruleset.copies_per_tiletype, ruleset.num_jokers):
        tiles.append(Tile(next_id, color, rank))
        next_id += 1
    return tiles, next_id
