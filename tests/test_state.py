import pathlib
import sys

import pytest

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from rummy_sandbox.ledger import TurnLedger
from rummy_sandbox.rules import Ruleset
from rummy_sandbox.state import GameState, TurnPhase, new_game
from rummy_sandbox.tiles import Color, build_deck


def test_deck_has_two_of_each_tile_and_two_jokers():
    tiles, next_id = build_deck(Ruleset())
    assert len(tiles) == 106
    assert next_id == 107
    assert [t.id for t in tiles] == list(range(1, 107))
    assert sum(1 for t in tiles if t.is_joker()) == 2
    assert sum(1 for t in tiles if t.color == Color.RED and t.rank == 5) == 2


def test_new_game_deals_fourteen_tiles():
    state = new_game(rng_seed=3)
    assert len(state.hand) == 14
    assert len(state.pool) == 92
    assert state.groups == []
    assert len(state.ledger) == 0
    assert state.initial_meld_done is False
    assert state.next_id == 107
    assert state.phase == TurnPhase.IDLE
    state.check_conservation()


def test_new_game_is_reproducible_per_seed():
    assert new_game(rng_seed=5).state_key() == new_game(rng_seed=5).state_key()
    assert new_game(rng_seed=5).stable_hash() != new_game(rng_seed=6).stable_hash()


def test_independent_games_do_not_share_state():
    a = new_game(rng_seed=1)
    b = new_game(rng_seed=1)
    a.hand.append(a.pool.pop())
    assert len(b.hand) == 14


def test_from_pool_uses_given_ordering():
    tiles, _ = build_deck(Ruleset())
    state = GameState.from_pool(tiles, deal=False)
    assert state.pool == tiles
    assert state.next_id == 107
    state = GameState.from_pool(tiles)
    assert [t.id for t in state.hand] == list(range(106, 92, -1))


def test_locate_reports_each_area():
    state = new_game(rng_seed=2)
    state.groups.append([state.hand.pop()])
    assert state.locate(state.hand[0].id) == ("hand", 0)
    assert state.locate(state.groups[0][0].id) == ("group", 0)
    assert state.locate(state.pool[-1].id) == ("pool", len(state.pool) - 1)
    assert state.locate(9999) is None


def test_conservation_check_catches_duplicates_and_drops():
    state = new_game(rng_seed=4)
    state.hand.append(state.hand[0])
    with pytest.raises(ValueError):
        state.check_conservation()

    state = new_game(rng_seed=4)
    state.pool.pop()
    with pytest.raises(ValueError):
        state.check_conservation()


def test_snapshot_round_trip():
    state = new_game(rng_seed=8)
    state.groups.append([state.hand.pop(), state.hand.pop()])
    state.ledger = TurnLedger.from_iterable(t.id for t in state.groups[0])
    state.initial_meld_done = True

    restored = GameState.from_dict(state.to_dict())
    assert restored.state_key() == state.state_key()
    assert restored.ruleset == state.ruleset
    assert restored.rng_seed == 8
    assert restored.phase == TurnPhase.BUILDING


def test_snapshot_rejects_missing_tiles():
    data = new_game(rng_seed=8).to_dict()
    data["pool"].pop()
    with pytest.raises(ValueError):
        GameState.from_dict(data)


def test_snapshot_rejects_non_object_payloads():
    for payload in ([], None, 5):
        with pytest.raises(ValueError):
            GameState.from_dict(payload)
    data = new_game(rng_seed=8).to_dict()
    data["ruleset"] = None
    with pytest.raises(ValueError):
        GameState.from_dict(data)


def test_snapshot_rejects_ledger_ids_outside_hand_and_board():
    data = new_game(rng_seed=8).to_dict()
    data["ledger"] = [data["pool"][0]["id"]]
    with pytest.raises(ValueError):
        GameState.from_dict(data)
    data["ledger"] = [5000]
    with pytest.raises(ValueError):
        GameState.from_dict(data)


def test_snapshot_rejects_deck_not_matching_ruleset():
    data = new_game(rng_seed=8).to_dict()
    victim = next(t for t in data["pool"] if not (t["color"] == "red" and t["rank"] == 5) and t["rank"] != -1)
    victim["color"], victim["rank"] = "red", 5
    with pytest.raises(ValueError):
        GameState.from_dict(data)

    data = new_game(rng_seed=8).to_dict()
    victim = next(t for t in data["pool"] if t["rank"] != -1)
    victim["rank"] = 14
    with pytest.raises(ValueError):
        GameState.from_dict(data)


def test_ledger_membership_is_idempotent():
    ledger = TurnLedger()
    ledger.add(4)
    ledger.add(9)
    ledger.add(4)
    assert ledger.to_list() == [4, 9]
    assert 9 in ledger
    copy = ledger.copy()
    ledger.clear()
    assert len(ledger) == 0
    assert copy == TurnLedger.from_iterable([4, 9])
