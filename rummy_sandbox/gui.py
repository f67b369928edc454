from __future__ import annotations

"""
Sandbox GUI — hand along the bottom, board groups stacked above it.

Interaction model:
- Click a tile in the HAND to select it (click again to drop the selection).
- Click a GROUP box to send the selected hand tile into it.
- Right-click a tile on the board to take it back to the hand (this turn only).
- Buttons / keys: New group (N), Draw (D), End turn (Enter), Save (S), Load (L).

Layout helpers work on plain (x, y, w, h) tuples so they can be exercised
without a display.
"""

from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from .engine import (
    draw,
    end_turn,
    group_summaries,
    move_tile_to_group,
    new_group,
    return_tile_to_hand,
)
from .errors import RummyError
from .state import GameState, new_game
from .storage import KeyValueStore, MemoryStore, load_game, save_game
from .tiles import Color, Tile

try:
    import pygame  # type: ignore
except ImportError:  # pragma: no cover
    pygame = None  # type: ignore

Box = Tuple[int, int, int, int]

# --- Theme --------------------------------------------------------------------

BG = (22, 27, 34)
PANEL = (30, 36, 46)
PANEL_LINE = (54, 63, 77)
TEXT = (220, 226, 235)
SUB = (164, 174, 187)
ACCENT = (88, 138, 255)
ERR = (235, 87, 87)
OK = (66, 171, 119)

COLOR_PALETTE = {
    Color.RED: (220, 80, 80),
    Color.BLUE: (86, 148, 227),
    Color.YELLOW: (218, 165, 32),  # goldenrod, readable on white
    Color.BLACK: (30, 30, 30),
    Color.NONE: (30, 30, 30),
}

TILE_W = 40
TILE_H = 54
GAP = 6
GROUP_H = TILE_H + 16
BUTTONS = [("New group (N)", "new"), ("Draw (D)", "draw"), ("End turn (Enter)", "end"), ("Save (S)", "save"), ("Load (L)", "load")]


def tile_color_rgb(tile: Tile) -> Tuple[int, int, int]:
    return COLOR_PALETTE.get(tile.color, COLOR_PALETTE[Color.NONE])


# --- Layout / hit testing -----------------------------------------------------

@dataclass
class TileHit:
    box: Box
    tile_id: int
    group_index: Optional[int]  # None for hand tiles


@dataclass
class GroupHit:
    box: Box
    group_index: int


@dataclass
class ButtonHit:
    box: Box
    action: str


def contains(box: Box, pos: Tuple[int, int]) -> bool:
    x, y, w, h = box
    return x <= pos[0] < x + w and y <= pos[1] < y + h


def layout_tiles(tiles: List[Tile], origin: Tuple[int, int], width: int, group_index: Optional[int] = None) -> List[TileHit]:
    """Place tiles left to right, wrapping to a new row when ``width`` is exhausted."""
    per_row = max(1, (width + GAP) // (TILE_W + GAP))
    hits = []
    for i, tile in enumerate(tiles):
        row, col = divmod(i, per_row)
        x = origin[0] + col * (TILE_W + GAP)
        y = origin[1] + row * (TILE_H + GAP)
        hits.append(TileHit((x, y, TILE_W, TILE_H), tile.id, group_index))
    return hits


def layout_groups(state: GameState, origin: Tuple[int, int], width: int) -> Tuple[List[GroupHit], List[TileHit]]:
    group_hits: List[GroupHit] = []
    tile_hits: List[TileHit] = []
    y = origin[1]
    for gi, group in enumerate(state.groups):
        box = (origin[0], y, width, GROUP_H)
        group_hits.append(GroupHit(box, gi))
        tile_hits.extend(layout_tiles(group, (origin[0] + 110, y + 8), width - 120, group_index=gi))
        y += GROUP_H + GAP
    return group_hits, tile_hits


def layout_buttons(origin: Tuple[int, int]) -> List[ButtonHit]:
    hits = []
    x = origin[0]
    for label, action in BUTTONS:
        w = 14 + 9 * len(label)
        hits.append(ButtonHit((x, origin[1], w, 36), action))
        x += w + 10
    return hits


def hit_test(hits: List, pos: Tuple[int, int]):
    for hit in hits:
        if contains(hit.box, pos):
            return hit
    return None


# --- Controller ---------------------------------------------------------------

class SandboxController:
    """Turns clicks into engine calls and keeps the last message for the status bar."""

    def __init__(self, state: GameState, store: KeyValueStore) -> None:
        self.state = state
        self.store = store
        self.selected: Optional[int] = None
        self.message = "Click a hand tile, then a group."
        self.failed = False

    def _run(self, fn: Callable[[], str]) -> bool:
        try:
            self.message = fn()
        except RummyError as exc:
            self.message = str(exc)
            self.failed = True
            return False
        self.failed = False
        return True

    def select(self, tile_id: int) -> None:
        self.selected = None if self.selected == tile_id else tile_id

    def place(self, group_index: int) -> bool:
        if self.selected is None:
            self.message = "No tile selected."
            return False
        tile_id = self.selected
        self.selected = None

        def _place() -> str:
            move_tile_to_group(self.state, tile_id, group_index)
            return f"Tile {tile_id} -> group {group_index}"

        return self._run(_place)

    def take_back(self, tile_id: int) -> bool:
        def _take_back() -> str:
            return_tile_to_hand(self.state, tile_id)
            return f"Tile {tile_id} back in hand"

        return self._run(_take_back)

    def action(self, name: str) -> bool:
        if name == "new":
            return self._run(lambda: f"Group {new_group(self.state)} created")
        if name == "draw":
            return self._run(lambda: f"Drew {draw(self.state).label()}")
        if name == "end":
            return self._run(lambda: f"Turn accepted ({end_turn(self.state).points} points)")
        if name == "save":
            return self._run(self._save)
        if name == "load":
            return self._run(self._load)
        raise ValueError(f"unknown action {name!r}")

    def _save(self) -> str:
        save_game(self.state, self.store)
        return "Game saved"

    def _load(self) -> str:
        self.state = load_game(self.store)
        self.selected = None
        return "Game loaded"


# --- Drawing ------------------------------------------------------------------

def _rect(box: Box):
    return pygame.Rect(*box)


def draw_tile(surface, box: Box, tile: Tile, font, highlight: bool = False, played: bool = False) -> None:
    rect = _rect(box)
    border = ACCENT if highlight else (OK if played else (60, 70, 85))
    pygame.draw.rect(surface, (245, 245, 245), rect, border_radius=6)
    pygame.draw.rect(surface, border, rect, width=3 if highlight else 2, border_radius=6)
    label = "J" if tile.is_joker() else str(tile.rank)
    txt = font.render(label, True, tile_color_rgb(tile))
    surface.blit(txt, txt.get_rect(center=rect.center))


def draw_button(surface, box: Box, label: str, font) -> None:
    rect = _rect(box)
    pygame.draw.rect(surface, (46, 56, 69), rect, border_radius=10)
    pygame.draw.rect(surface, ACCENT, rect, width=2, border_radius=10)
    txt = font.render(label, True, TEXT)
    surface.blit(txt, txt.get_rect(center=rect.center))


def launch_gui(seed: Optional[int] = None, store: Optional[KeyValueStore] = None) -> None:  # pragma: no cover
    if pygame is None:
        raise ImportError("pygame is required for the GUI. Install it with `pip install pygame`.")

    pygame.init()
    pygame.display.set_caption("Rummikub — Sandbox")
    screen = pygame.display.set_mode((1100, 760), pygame.RESIZABLE)
    clock = pygame.time.Clock()
    font = pygame.font.SysFont("arial", 18)
    tile_font = pygame.font.SysFont("arial", 26, bold=True)

    ctl = SandboxController(new_game(rng_seed=seed), store or MemoryStore())
    margin = 10

    running = True
    while running:
        W, H = screen.get_size()
        screen.fill(BG)
        state = ctl.state

        buttons = layout_buttons((margin, margin))
        for (label, _), hit in zip(BUTTONS, buttons):
            draw_button(screen, hit.box, label, font)

        info = f"Pool {len(state.pool)}   Meld {'done' if state.initial_meld_done else 'pending'}"
        screen.blit(font.render(info, True, SUB), (W - 260, margin + 8))

        hand_top = H - 2 * (TILE_H + GAP) - 60
        group_hits, board_tiles = layout_groups(state, (margin, 60), W - 2 * margin)
        summaries = {gi: status for gi, _, status in group_summaries(state)}
        for hit in group_hits:
            rect = _rect(hit.box)
            pygame.draw.rect(screen, PANEL, rect, border_radius=10)
            pygame.draw.rect(screen, PANEL_LINE, rect, width=2, border_radius=10)
            screen.blit(font.render(f"Group {hit.group_index}", True, TEXT), (rect.x + 10, rect.y + 10))
            screen.blit(font.render(summaries[hit.group_index], True, SUB), (rect.x + 10, rect.y + 36))
        by_id = {t.id: t for t in state.all_tiles()}
        for hit in board_tiles:
            draw_tile(screen, hit.box, by_id[hit.tile_id], tile_font, played=hit.tile_id in state.ledger)

        screen.blit(font.render("Hand", True, SUB), (margin, hand_top - 24))
        hand_tiles = layout_tiles(state.hand, (margin, hand_top), W - 2 * margin)
        for hit in hand_tiles:
            draw_tile(screen, hit.box, by_id[hit.tile_id], tile_font, highlight=hit.tile_id == ctl.selected)

        status = pygame.Rect(margin, H - 40, W - 2 * margin, 30)
        pygame.draw.rect(screen, PANEL, status, border_radius=10)
        screen.blit(font.render(ctl.message, True, ERR if ctl.failed else SUB), (status.x + 10, status.y + 5))

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.VIDEORESIZE:
                screen = pygame.display.set_mode(event.size, pygame.RESIZABLE)
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_RETURN:
                    ctl.action("end")
                elif event.key == pygame.K_d:
                    ctl.action("draw")
                elif event.key == pygame.K_n:
                    ctl.action("new")
                elif event.key == pygame.K_s:
                    ctl.action("save")
                elif event.key == pygame.K_l:
                    ctl.action("load")
            elif event.type == pygame.MOUSEBUTTONDOWN:
                if event.button == 3:
                    hit = hit_test(board_tiles, event.pos)
                    if hit is not None:
                        ctl.take_back(hit.tile_id)
                    continue
                if event.button != 1:
                    continue
                button = hit_test(buttons, event.pos)
                if button is not None:
                    ctl.action(button.action)
                    continue
                tile_hit = hit_test(hand_tiles, event.pos)
                if tile_hit is not None:
                    ctl.select(tile_hit.tile_id)
                    continue
                group_hit = hit_test(group_hits, event.pos)
                if group_hit is not None:
                    ctl.place(group_hit.group_index)

        pygame.display.flip()
        clock.tick(30)

    pygame.quit()
