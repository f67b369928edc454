from __future__ import annotations

from typing import Iterable, Sequence

from .tiles import Tile


def tile_value(tile: Tile, group: Sequence[Tile]) -> int:
    """Meld points of ``tile`` inside ``group``.

    A joker takes the rank of the first numbered tile of its group, or 0 when
    the group holds nothing but jokers.
    """
    if not tile.is_joker():
        return tile.rank
    for other in group:
        if not other.is_joker():
            return other.rank
    return 0


def group_points(group: Sequence[Tile]) -> int:
    return sum(tile_value(t, group) for t in group)


def ledger_points(groups: Iterable[Sequence[Tile]], ledger: Iterable[int]) -> int:
    played = set(ledger)
    points = 0
    for group in groups:
        for tile in group:
            if tile.id in played:
                points += tile_value(tile, group)
    return points
