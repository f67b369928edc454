from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Tuple

from .classify import classify
from .errors import (
    EmptyPool,
    GroupTooSmall,
    InitialMeldTooLow,
    InvalidGroup,
    NoSuchGroup,
    NotInHand,
    NotOnBoard,
    RummyError,
    TileLocked,
)
from .scoring import ledger_points
from .state import GameState
from .tiles import Tile

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TurnResult:
    points: int
    melded: bool
    tiles_played: int


def _hand_index(state: GameState, tile_id: int) -> int:
    for idx, tile in enumerate(state.hand):
        if tile.id == tile_id:
            return idx
    raise NotInHand(f"tile {tile_id} is not in hand")


def _board_position(state: GameState, tile_id: int) -> Tuple[int, int]:
    for gi, group in enumerate(state.groups):
        for si, tile in enumerate(group):
            if tile.id == tile_id:
                return gi, si
    raise NotOnBoard(f"tile {tile_id} is not on the board")


def _check_group_index(state: GameState, group_index: int) -> None:
    if not 0 <= group_index < len(state.groups):
        raise NoSuchGroup(f"group {group_index} does not exist", group_index=group_index)


def draw(state: GameState) -> Tile:
    if not state.pool:
        raise EmptyPool("the pool is empty")
    tile = state.pool.pop()
    state.hand.append(tile)
    return tile


def new_group(state: GameState) -> int:
    state.groups.append([])
    return len(state.groups) - 1


def move_tile_to_group(state: GameState, tile_id: int, group_index: int) -> None:
    hand_idx = _hand_index(state, tile_id)
    _check_group_index(state, group_index)
    tile = state.hand.pop(hand_idx)
    state.groups[group_index].append(tile)
    state.ledger.add(tile.id)


def return_tile_to_hand(state: GameState, tile_id: int) -> None:
    """Take back a tile played this turn; its id stays in the ledger."""
    gi, si = _board_position(state, tile_id)
    if tile_id not in state.ledger:
        raise TileLocked(f"tile {tile_id} was committed in an earlier turn", group_index=gi)
    state.hand.append(state.groups[gi].pop(si))


def move_board_tile(state: GameState, tile_id: int, group_index: int) -> None:
    gi, si = _board_position(state, tile_id)
    _check_group_index(state, group_index)
    if tile_id not in state.ledger:
        if not (state.initial_meld_done and state.ruleset.allow_rearranging_after_meld):
            raise TileLocked(f"tile {tile_id} cannot be rearranged yet", group_index=gi)
        state.board_rearranged = True
    tile = state.groups[gi].pop(si)
    state.groups[group_index].append(tile)


def check_end_turn(state: GameState) -> TurnResult:
    """Validate the board and the opening threshold without touching the state."""
    rules = state.ruleset
    for gi, group in enumerate(state.groups):
        if not group:
            continue
        if len(group) < rules.min_group_size:
            raise GroupTooSmall(f"group {gi} has {len(group)} tiles", group_index=gi)
        result = classify(group, rules)
        if not result.valid:
            raise InvalidGroup(f"group {gi}: {result.reason}", group_index=gi)

    points = ledger_points(state.groups, state.ledger)
    if not state.initial_meld_done and points < rules.initial_meld_min_points:
        raise InitialMeldTooLow(
            f"initial meld must score at least {rules.initial_meld_min_points} (got {points})"
        )
    played = sum(1 for group in state.groups for t in group if t.id in state.ledger)
    return TurnResult(points=points, melded=not state.initial_meld_done, tiles_played=played)


def is_legal_end_turn(state: GameState) -> Tuple[bool, str]:
    try:
        check_end_turn(state)
    except RummyError as exc:
        return False, str(exc)
    return True, ""


def end_turn(state: GameState) -> TurnResult:
    try:
        result = check_end_turn(state)
    except RummyError as exc:
        logger.debug("turn rejected: %s", exc)
        raise
    if result.melded:
        state.initial_meld_done = True
    state.ledger.clear()
    state.board_rearranged = False
    logger.info("turn accepted: %d tiles, %d points, melded=%s", result.tiles_played, result.points, result.melded)
    return result


def group_summaries(state: GameState) -> List[Tuple[int, List[Tile], str]]:
    """(index, tiles, status) per group, status being RUN/SET/empty or the rejection reason."""
    rows = []
    for gi, group in enumerate(state.groups):
        if not group:
            status = "empty"
        else:
            result = classify(group, state.ruleset)
            status = result.kind.value if result.valid else result.reason
        rows.append((gi, list(group), status))
    return rows
