from __future__ import annotations

import hashlib
import random
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from .ledger import TurnLedger
from .rules import Ruleset
from .tiles import Tile, build_deck, iter_full_deck


class TurnPhase(str, Enum):
    IDLE = "IDLE"
    BUILDING = "BUILDING"


@dataclass
class GameState:
    ruleset: Ruleset
    pool: List[Tile]
    hand: List[Tile] = field(default_factory=list)
    groups: List[List[Tile]] = field(default_factory=list)
    ledger: TurnLedger = field(default_factory=TurnLedger)
    initial_meld_done: bool = False
    next_id: int = 1
    rng_seed: Optional[int] = None
    board_rearranged: bool = False

    @classmethod
    def from_pool(
        cls, pool: Sequence[Tile], ruleset: Ruleset | None = None, next_id: Optional[int] = None, deal: bool = True
    ) -> "GameState":
        """Start a game from an externally generated pool ordering."""
        ruleset = ruleset or Ruleset()
        if next_id is None:
            next_id = max((t.id for t in pool), default=0) + 1
        state = cls(ruleset=ruleset, pool=list(pool), next_id=next_id)
        if deal:
            _deal_initial_hand(state)
        return state

    @property
    def phase(self) -> TurnPhase:
        if len(self.ledger) or self.board_rearranged:
            return TurnPhase.BUILDING
        return TurnPhase.IDLE

    def copy(self) -> "GameState":
        return GameState(
            ruleset=self.ruleset,
            pool=list(self.pool),
            hand=list(self.hand),
            groups=[list(g) for g in self.groups],
            ledger=self.ledger.copy(),
            initial_meld_done=self.initial_meld_done,
            next_id=self.next_id,
            rng_seed=self.rng_seed,
            board_rearranged=self.board_rearranged,
        )

    def all_tiles(self) -> List[Tile]:
        tiles = list(self.pool) + list(self.hand)
        for group in self.groups:
            tiles.extend(group)
        return tiles

    def tile_count(self) -> int:
        return len(self.pool) + len(self.hand) + sum(len(g) for g in self.groups)

    def locate(self, tile_id: int) -> Optional[Tuple[str, int]]:
        """Return where a tile lives: ("pool"|"hand", position) or ("group", group index)."""
        for idx, tile in enumerate(self.hand):
            if tile.id == tile_id:
                return "hand", idx
        for gi, group in enumerate(self.groups):
            if any(t.id == tile_id for t in group):
                return "group", gi
        for idx, tile in enumerate(self.pool):
            if tile.id == tile_id:
                return "pool", idx
        return None

    def check_conservation(self) -> None:
        """Raise ValueError unless every tile of the ruleset's deck sits in exactly one place."""
        rules = self.ruleset
        tiles = self.all_tiles()
        ids = Counter(t.id for t in tiles)
        duplicated = sorted(i for i, n in ids.items() if n > 1)
        if duplicated:
            raise ValueError(f"tiles present in more than one place: {duplicated}")
        if len(tiles) != rules.deck_size():
            raise ValueError(f"expected {rules.deck_size()} tiles, found {len(tiles)}")
        if any(i >= self.next_id for i in ids):
            raise ValueError("tile id at or above the identity counter")
        expected = Counter(iter_full_deck(rules.colors, rules.values, rules.copies_per_tiletype, rules.num_jokers))
        if Counter((t.color, t.rank) for t in tiles) != expected:
            raise ValueError("tiles do not match the ruleset's deck")
        off_board = {t.id for t in self.pool}
        stray = [i for i in self.ledger if i not in ids or i in off_board]
        if stray:
            raise ValueError(f"ledger holds tiles outside hand and board: {stray}")

    def state_key(self) -> Tuple:
        return (
            tuple(t.id for t in self.pool),
            tuple(t.id for t in self.hand),
            tuple(tuple(t.id for t in g) for g in self.groups),
            tuple(self.ledger.to_list()),
            self.initial_meld_done,
            self.next_id,
            self.board_rearranged,
        )

    def stable_hash(self) -> str:
        return hashlib.sha256(repr(self.state_key()).encode("utf-8")).hexdigest()

    def to_dict(self) -> dict:
        return {
            "ruleset": self.ruleset.to_dict(),
            "pool": [t.to_dict() for t in self.pool],
            "hand": [t.to_dict() for t in self.hand],
            "groups": [[t.to_dict() for t in g] for g in self.groups],
            "ledger": self.ledger.to_list(),
            "initial_meld_done": self.initial_meld_done,
            "next_id": self.next_id,
            "rng_seed": self.rng_seed,
            "board_rearranged": self.board_rearranged,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "GameState":
        """Rebuild a state from a snapshot; raises ValueError/KeyError/TypeError on a bad snapshot."""
        if not isinstance(data, dict):
            raise ValueError(f"snapshot must be an object, not {type(data).__name__}")
        rules_data = data.get("ruleset", {})
        if not isinstance(rules_data, dict):
            raise ValueError("snapshot ruleset must be an object")
        ruleset = Ruleset.from_dict(rules_data)
        state = cls(
            ruleset=ruleset,
            pool=[Tile.from_dict(t) for t in data["pool"]],
            hand=[Tile.from_dict(t) for t in data["hand"]],
            groups=[[Tile.from_dict(t) for t in g] for g in data["groups"]],
            ledger=TurnLedger.from_iterable(data["ledger"]),
            initial_meld_done=bool(data["initial_meld_done"]),
            next_id=int(data["next_id"]),
            rng_seed=data.get("rng_seed"),
            board_rearranged=bool(data.get("board_rearranged", False)),
        )
        state.check_conservation()
        return state


def _deal_initial_hand(state: GameState) -> None:
    for _ in range(min(state.ruleset.initial_hand_size, len(state.pool))):
        state.hand.append(state.pool.pop())


def new_game(ruleset: Ruleset | None = None, rng_seed: Optional[int] = None, deal: bool = True) -> GameState:
    ruleset = ruleset or Ruleset()
    rng = random.Random(rng_seed)
    deck, next_id = build_deck(ruleset, first_id=1)
    rng.shuffle(deck)
    state = GameState.from_pool(deck, ruleset=ruleset, next_id=next_id, deal=deal)
    state.rng_seed = rng_seed
    return state
