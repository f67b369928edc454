import pathlib
import sys

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from rummy_sandbox.classify import GroupKind, classify, feasible_run_starts
from rummy_sandbox.rules import Ruleset
from rummy_sandbox.tiles import Color, Tile

_COLORS = {"r": Color.RED, "b": Color.BLUE, "y": Color.YELLOW, "k": Color.BLACK}


def _tiles(*labels):
    out = []
    for i, label in enumerate(labels, start=1):
        if label == "J":
            out.append(Tile.joker(i))
        else:
            out.append(Tile(i, _COLORS[label[0]], int(label[1:])))
    return out


def test_plain_run_and_set():
    assert classify(_tiles("r5", "r6", "r7")).kind == GroupKind.RUN
    assert classify(_tiles("r5", "b5", "y5")).kind == GroupKind.SET


def test_run_order_does_not_matter():
    assert classify(_tiles("r7", "r5", "r6")).kind == GroupKind.RUN


def test_groups_below_three_tiles_are_invalid():
    result = classify(_tiles("r5", "r5"))
    assert not result.valid
    assert "too small" in result.reason
    assert not classify(_tiles("r5", "r6"))
    assert not classify(_tiles("J"))


def test_set_with_duplicate_color_is_invalid():
    result = classify(_tiles("r5", "b5", "r5"))
    assert not result.valid
    assert "distinct" in result.reason


def test_set_never_exceeds_four_tiles():
    assert classify(_tiles("r5", "b5", "y5", "k5")).kind == GroupKind.SET
    assert classify(_tiles("r5", "b5", "y5", "J")).kind == GroupKind.SET
    assert not classify(_tiles("r5", "b5", "y5", "k5", "J"))


def test_uniform_rank_never_falls_through_to_run():
    # one numbered tile plus four jokers is a set candidate, too large for a set
    assert not classify(_tiles("r5", "J", "J", "J", "J"))


def test_joker_fills_gap_in_run():
    tiles = _tiles("r5", "J", "r7")
    assert classify(tiles).kind == GroupKind.RUN
    assert feasible_run_starts(tiles) == [5]


def test_joker_completes_set():
    assert classify(_tiles("r9", "J", "b9")).kind == GroupKind.SET


def test_mixed_colors_without_shared_rank_are_invalid():
    result = classify(_tiles("r5", "b6", "r7"))
    assert not result.valid
    assert "same color" in result.reason


def test_duplicate_rank_in_run_is_invalid():
    tiles = _tiles("r5", "r5", "r6")
    assert feasible_run_starts(tiles) == []
    assert not classify(tiles)


def test_non_consecutive_run_is_invalid():
    assert not classify(_tiles("r2", "r3", "r7"))
    assert not classify(_tiles("r1", "J", "r5"))


def test_run_cannot_wrap_past_thirteen():
    assert not classify(_tiles("r12", "r13", "r1"))


def test_top_end_run_has_exactly_one_window():
    tiles = _tiles("r11", "r12", "r13", "J")
    assert feasible_run_starts(tiles) == [10]
    assert classify(tiles).kind == GroupKind.RUN

    tiles = _tiles("r12", "r13", "J", "J")
    assert feasible_run_starts(tiles) == [10]
    assert classify(tiles).kind == GroupKind.RUN


def test_bottom_end_run_windows():
    tiles = _tiles("J", "b1", "b2")
    assert feasible_run_starts(tiles) == [1]
    assert classify(tiles).kind == GroupKind.RUN


def test_long_run():
    tiles = _tiles(*[f"k{r}" for r in range(1, 14)])
    assert feasible_run_starts(tiles) == [1]
    assert classify(tiles).kind == GroupKind.RUN


def test_all_joker_groups_are_runs_up_to_thirteen():
    assert classify(_tiles("J", "J", "J")).kind == GroupKind.RUN
    assert classify(_tiles(*["J"] * 6)).kind == GroupKind.RUN
    assert not classify(_tiles(*["J"] * 14))


def test_ruleset_limits_are_honoured():
    rules = Ruleset(min_group_size=2, max_set_size=3)
    assert classify(_tiles("r5", "r6"), rules).kind == GroupKind.RUN
    assert not classify(_tiles("r5", "b5", "y5", "k5"), rules)
