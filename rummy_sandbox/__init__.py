"""Single-player tile-rummy rule sandbox."""

from .rules import Ruleset
from .tiles import Color, Tile, JOKER_RANK
from .classify import Classification, GroupKind, classify, feasible_run_starts
from .scoring import tile_value, group_points, ledger_points
from .ledger import TurnLedger
from .errors import ErrorKind, RummyError
from .state import GameState, TurnPhase, new_game
from .engine import (
    TurnResult,
    draw,
    end_turn,
    is_legal_end_turn,
    move_board_tile,
    move_tile_to_group,
    new_group,
    return_tile_to_hand,
)
from .storage import JsonFileStore, MemoryStore, load_game, save_game

__all__ = [
    "Ruleset",
    "Color",
    "Tile",
    "JOKER_RANK",
    "Classification",
    "GroupKind",
    "classify",
    "feasible_run_starts",
    "tile_value",
    "group_points",
    "ledger_points",
    "TurnLedger",
    "ErrorKind",
    "RummyError",
    "GameState",
    "TurnPhase",
    "new_game",
    "TurnResult",
    "draw",
    "end_turn",
    "is_legal_end_turn",
    "move_board_tile",
    "move_tile_to_group",
    "new_group",
    "return_tile_to_hand",
    "JsonFileStore",
    "MemoryStore",
    "load_game",
    "save_game",
]
