from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence

from .rules import Ruleset
from .tiles import Tile

_DEFAULT_RULES = Ruleset()


class GroupKind(str, Enum):
    RUN = "RUN"
    SET = "SET"


@dataclass(frozen=True)
class Classification:
    """Outcome of classifying one board group.

    ``kind`` is set for a legal group; ``reason`` explains an illegal one.
    """

    kind: Optional[GroupKind] = None
    reason: str = ""

    @property
    def valid(self) -> bool:
        return self.kind is not None

    def __bool__(self) -> bool:
        return self.valid

    @classmethod
    def invalid(cls, reason: str) -> "Classification":
        return cls(None, reason)


def feasible_run_starts(tiles: Sequence[Tile], ruleset: Ruleset = _DEFAULT_RULES) -> List[int]:
    """Return every start rank whose window of ``len(tiles)`` ranks covers all numbered tiles.

    Jokers fill whatever ranks of the window the numbered tiles leave open.
    Duplicate ranks never fit a window, so they yield an empty list.
    """
    size = len(tiles)
    ranks = sorted(t.rank for t in tiles if not t.is_joker())
    if len(set(ranks)) != len(ranks):
        return []
    starts = []
    for start in range(1, ruleset.values - size + 2):
        end = start + size - 1
        if all(start <= r <= end for r in ranks):
            starts.append(start)
    return starts


def classify(tiles: Sequence[Tile], ruleset: Ruleset = _DEFAULT_RULES) -> Classification:
    if len(tiles) < ruleset.min_group_size:
        return Classification.invalid("group too small")

    non_jokers = [t for t in tiles if not t.is_joker()]

    if non_jokers and all(t.rank == non_jokers[0].rank for t in non_jokers):
        colors = {t.color for t in non_jokers}
        if len(colors) != len(non_jokers):
            return Classification.invalid("set colors must be distinct")
        if len(tiles) > ruleset.max_set_size:
            return Classification.invalid(f"set cannot exceed {ruleset.max_set_size} tiles")
        return Classification(GroupKind.SET)

    if len({t.color for t in non_jokers}) > 1:
        return Classification.invalid("run must have same color")
    if len(tiles) > ruleset.values:
        return Classification.invalid(f"run cannot exceed {ruleset.values} tiles")
    if not feasible_run_starts(tiles, ruleset):
        return Classification.invalid("run must be consecutive")
    return Classification(GroupKind.RUN)
