from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List


@dataclass
class TurnLedger:
    """Ids of the tiles moved from hand to board since the last commit.

    Membership is idempotent and insertion-ordered; the ledger only shrinks
    through ``clear``.
    """

    _ids: Dict[int, None] = field(default_factory=dict)

    @classmethod
    def from_iterable(cls, ids: Iterable[int]) -> "TurnLedger":
        return cls(dict.fromkeys(int(i) for i in ids))

    def add(self, tile_id: int) -> None:
        self._ids.setdefault(tile_id, None)

    def clear(self) -> None:
        self._ids.clear()

    def copy(self) -> "TurnLedger":
        return TurnLedger(dict(self._ids))

    def to_list(self) -> List[int]:
        return list(self._ids)

    def __contains__(self, tile_id: object) -> bool:
        return tile_id in self._ids

    def __iter__(self) -> Iterator[int]:
        return iter(self._ids)

    def __len__(self) -> int:
        return len(self._ids)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, TurnLedger) and self.to_list() == other.to_list()
