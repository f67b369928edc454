from __future__ import annotations

import argparse
import logging
import shlex
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from .engine import (
    draw,
    end_turn,
    group_summaries,
    move_board_tile,
    move_tile_to_group,
    new_group,
    return_tile_to_hand,
)
from .state import GameState, new_game
from .storage import JsonFileStore, KeyValueStore, MemoryStore, load_game, save_game

logger = logging.getLogger(__name__)

HELP = """\
draw                 draw a tile from the pool
new                  open an empty group
play <tile> <group>  move a hand tile (by id) into a group
back <tile>          return a tile played this turn to the hand
shift <tile> <group> move a board tile into another group
end                  end the turn
save / load          save or restore the game
show                 print hand and board
quit                 leave"""


@dataclass
class Session:
    state: GameState
    store: KeyValueStore


def render(state: GameState) -> str:
    lines = [f"Pool: {len(state.pool)} tiles   Initial meld: {'done' if state.initial_meld_done else 'pending'}"]
    lines.append("Hand: " + " ".join(f"{t.label()}#{t.id}" for t in state.hand))
    for gi, tiles, status in group_summaries(state):
        marks = " ".join(f"{t.label()}{'*' if t.id in state.ledger else ''}" for t in tiles)
        lines.append(f"Group {gi}: {marks} [{status}]")
    return "\n".join(lines)


def _int_args(args: List[str], count: int, usage: str) -> List[int]:
    if len(args) != count:
        raise ValueError(f"usage: {usage}")
    try:
        return [int(a) for a in args]
    except ValueError:
        raise ValueError(f"usage: {usage}") from None


def _cmd_draw(session: Session, args: List[str]) -> str:
    tile = draw(session.state)
    return f"Drew {tile.label()}#{tile.id}"


def _cmd_new(session: Session, args: List[str]) -> str:
    return f"Group {new_group(session.state)} created"


def _cmd_play(session: Session, args: List[str]) -> str:
    tile_id, group_index = _int_args(args, 2, "play <tile> <group>")
    move_tile_to_group(session.state, tile_id, group_index)
    return render(session.state)


def _cmd_back(session: Session, args: List[str]) -> str:
    (tile_id,) = _int_args(args, 1, "back <tile>")
    return_tile_to_hand(session.state, tile_id)
    return render(session.state)


def _cmd_shift(session: Session, args: List[str]) -> str:
    tile_id, group_index = _int_args(args, 2, "shift <tile> <group>")
    move_board_tile(session.state, tile_id, group_index)
    return render(session.state)


def _cmd_end(session: Session, args: List[str]) -> str:
    result = end_turn(session.state)
    suffix = " Initial meld done." if result.melded else ""
    return f"Turn accepted ({result.points} points).{suffix}"


def _cmd_save(session: Session, args: List[str]) -> str:
    save_game(session.state, session.store)
    return "Game saved"


def _cmd_load(session: Session, args: List[str]) -> str:
    session.state = load_game(session.store)
    return "Game loaded\n" + render(session.state)


def _cmd_show(session: Session, args: List[str]) -> str:
    return render(session.state)


COMMANDS: Dict[str, Callable[[Session, List[str]], str]] = {
    "draw": _cmd_draw,
    "new": _cmd_new,
    "play": _cmd_play,
    "back": _cmd_back,
    "shift": _cmd_shift,
    "end": _cmd_end,
    "save": _cmd_save,
    "load": _cmd_load,
    "show": _cmd_show,
}


def run_command(session: Session, line: str) -> str:
    """Execute one command line and return the text to show the player."""
    try:
        parts = shlex.split(line)
    except ValueError as exc:
        return str(exc)
    if not parts:
        return ""
    name, args = parts[0].lower(), parts[1:]
    if name == "help":
        return HELP
    handler = COMMANDS.get(name)
    if handler is None:
        return f"Unknown command {name!r} (try 'help')"
    try:
        return handler(session, args)
    except ValueError as exc:  # RummyError included
        return str(exc)


def play(
    session: Session,
    input_fn: Optional[Callable[[str], str]] = None,
    output_fn: Optional[Callable[[str], None]] = None,
) -> None:
    input_fn = input_fn or input
    output_fn = output_fn or print
    output_fn(render(session.state))
    while True:
        try:
            line = input_fn("> ")
        except EOFError:
            break
        if line.strip().lower() in ("quit", "exit", "q"):
            break
        out = run_command(session, line)
        if out:
            output_fn(out)


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Practice tile-rummy rule legality in a single-player sandbox.")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducible pool order.")
    parser.add_argument("--save-file", default=None, help="JSON file used by save/load (in-memory when omitted).")
    parser.add_argument("--gui", action="store_true", help="Open the pygame window instead of the text prompt.")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (DEBUG, INFO, ...).")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    store: KeyValueStore = JsonFileStore(args.save_file) if args.save_file else MemoryStore()

    if args.gui:
        from .gui import launch_gui

        launch_gui(seed=args.seed, store=store)
        return

    logger.info("starting game with seed %s", args.seed)
    play(Session(state=new_game(rng_seed=args.seed), store=store))


if __name__ == "__main__":
    main()
