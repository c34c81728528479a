#!/usr/bin/env python3
"""
Yahtzee TUI — Terminal front-end using Textual.

Keyboard-driven: mark dice with 1-5, reroll with Space, move through the
scorecard with Tab or the arrow keys and score with Enter. All rules live in
the core; this module only renders a Game and feeds it parsed input.
"""
from __future__ import annotations

import logging

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.widgets import Footer, Header, Static

from errors import YahtzeeError
from game_coordinator import NUM_ROUNDS, Game
from scoring import SELECTABLE_CATEGORIES, UPPER_BONUS_THRESHOLD, Category, format_score
from turn_engine import MAX_REROLLS

logger = logging.getLogger(__name__)

CATEGORY_TOOLTIPS = {
    Category.ACES: "Sum of all dice showing 1",
    Category.TWOS: "Sum of all dice showing 2",
    Category.THREES: "Sum of all dice showing 3",
    Category.FOURS: "Sum of all dice showing 4",
    Category.FIVES: "Sum of all dice showing 5",
    Category.SIXES: "Sum of all dice showing 6",
    Category.THREE_OF_A_KIND: "3 of the same, score = sum of all dice",
    Category.FOUR_OF_A_KIND: "4 of the same, score = sum of all dice",
    Category.FULL_HOUSE: "3 of one + 2 of another = 25",
    Category.SMALL_STRAIGHT: "4 consecutive dice = 30",
    Category.LARGE_STRAIGHT: "5 consecutive dice = 40",
    Category.CHANCE: "Sum of all dice, no pattern needed",
    Category.YAHTZEE: "All 5 dice the same = 50, a repeat adds 150",
}

# Pip cells (row, column) on a 3x3 grid for each face
PIPS = {
    1: {(1, 1)},
    2: {(0, 0), (2, 2)},
    3: {(0, 0), (1, 1), (2, 2)},
    4: {(0, 0), (0, 2), (2, 0), (2, 2)},
    5: {(0, 0), (0, 2), (1, 1), (2, 0), (2, 2)},
    6: {(0, 0), (0, 2), (1, 0), (1, 2), (2, 0), (2, 2)},
}


def die_face_lines(value, marked=False):
    """Box art for one die; marked dice get a double border."""
    h, v, tl, tr, bl, br = ("═", "║", "╔", "╗", "╚", "╝") if marked else ("─", "│", "┌", "┐", "└", "┘")
    lines = [tl + h * 7 + tr]
    for row in range(3):
        cells = " ".join("●" if (row, col) in PIPS[value] else " " for col in range(3))
        lines.append(f"{v} {cells} {v}")
    lines.append(bl + h * 7 + br)
    return lines


def render_dice(dice, marked=frozenset()):
    """Render the five dice side by side with their position labels."""
    if not dice:
        return "[dim]No dice rolled yet[/dim]"
    faces = [die_face_lines(value, i in marked) for i, value in enumerate(dice)]
    lines = ["  ".join(face[row] for face in faces) for row in range(len(faces[0]))]
    labels = []
    for i in range(len(dice)):
        tag = " R" if i in marked else ""
        labels.append(f"  [{i + 1}]{tag}".ljust(11))
    lines.append("".join(labels))
    return "\n".join(lines)


def render_status(game, message=""):
    """Roll count and the last message for the current player."""
    if game.game_over:
        return "[bold]GAME OVER![/bold]"
    lines = [f"[bold]Round {game.current_round}/{NUM_ROUNDS} — {game.current_player.name}'s turn[/bold]"]
    turn = game.turn
    if turn is not None and not turn.is_over:
        if turn.can_reroll:
            lines.append(f"Rerolls left: {MAX_REROLLS - turn.rerolls_used}")
        else:
            lines.append("Choose a category")
    if message:
        lines.append(f"[yellow]{message}[/yellow]")
    return "\n".join(lines)


def _format_row(category, player, offers, selected):
    marker = ">>" if selected else "  "
    award = player.award_for(category)
    if award is not None:
        return f"{marker}{category.value:<18} {award:>3}"
    potential = offers.get(category)
    if potential is None:
        return f"{marker}[dim]{category.value:<18}  — [/dim]"
    if selected:
        return f"{marker}[bold]{category.value:<18} ({potential:>3})[/bold]"
    if potential > 0:
        return f"{marker}[green]{category.value:<18} ({potential:>3})[/green]"
    return f"{marker}[dim]{category.value:<18} ({potential:>3})[/dim]"


def render_scorecard(player, offers=(), cursor=None):
    """Render a player's scorecard with the current offers in parentheses."""
    offers = dict(offers)
    lines = [f"[bold]{player.name}'s Scorecard[/bold]", "[bold]── UPPER SECTION ──[/bold]"]
    for index, category in enumerate(SELECTABLE_CATEGORIES):
        if category == Category.THREE_OF_A_KIND:
            upper = player.upper_section_total()
            bonus = player.award_for(Category.UPPER_SECTION_BONUS)
            bonus_text = bonus if bonus is not None else f"{upper}/{UPPER_BONUS_THRESHOLD}"
            lines.append(f"  Total: {upper}  Bonus: {bonus_text}")
            lines.append("[bold]── LOWER SECTION ──[/bold]")
        lines.append(_format_row(category, player, offers, cursor == index))
    yahtzee_bonus = player.award_for(Category.YAHTZEE_BONUS)
    if yahtzee_bonus:
        lines.append(f"  Yahtzee Bonus: {yahtzee_bonus}")
    lines.append(f"[bold]  GRAND TOTAL: {player.total}[/bold]")
    if cursor is not None and SELECTABLE_CATEGORIES[cursor] in offers:
        lines.append(f"\n[dim]{CATEGORY_TOOLTIPS[SELECTABLE_CATEGORIES[cursor]]}[/dim]")
    return "\n".join(lines)


def render_standings(game):
    """Player bar while playing; final results once the game is over."""
    if not game.game_over:
        parts = []
        for i, player in enumerate(game.players):
            marker = "▸" if i == game.current_player_index else " "
            parts.append(f"{marker}{player.name}:{player.total}")
        return "  ".join(parts)
    lines = ["[bold]═══ GAME OVER ═══[/bold]", ""]
    winner = game.winner
    if game.num_players > 1:
        lines.append(f"[bold]{winner.name} wins![/bold]")
    for player in game.standings():
        marker = " *" if player is winner and game.num_players > 1 else ""
        lines.append(f"  {player.name}: {player.total}{marker}")
    lines.append("")
    lines.append("[dim]Press N for new game, Esc to quit[/dim]")
    return "\n".join(lines)


def render_history(game):
    """Every claim and bonus of the game, per player, from the game log."""
    log = game.game_log
    lines = ["[bold]── SCORE HISTORY ──[/bold]"]
    for index, player in enumerate(game.players):
        lines.append(f"[bold]{player.name}[/bold]")
        for entry in log.get_score_entries(index):
            text = format_score((entry.category, entry.score))
            if entry.event_type == "bonus":
                lines.append(f"  R{entry.turn:>2}  [green]+ {text}[/green]")
                continue
            rolls = sum(1 for e in log.get_turn_entries(entry.turn, index)
                        if e.event_type in ("roll", "reroll"))
            dice = " ".join(str(v) for v in entry.dice_values)
            lines.append(f"  R{entry.turn:>2}  {text:<22} [dim]{dice}  ({rolls} roll{'s' if rolls != 1 else ''})[/dim]")
    return "\n".join(lines)


def next_open_index(player, cursor, direction):
    """Move the cursor to the next unclaimed category, wrapping around."""
    open_indices = [i for i, cat in enumerate(SELECTABLE_CATEGORIES) if not player.is_claimed(cat)]
    if not open_indices:
        return None
    if cursor is None:
        return open_indices[0] if direction > 0 else open_indices[-1]
    count = len(SELECTABLE_CATEGORIES)
    for step in range(1, count + 1):
        candidate = (cursor + direction * step) % count
        if candidate in open_indices:
            return candidate
    return None


# ── Main App ─────────────────────────────────────────────────────────────────

class YahtzeeApp(App):
    """Yahtzee terminal UI application."""

    CSS = """
    Screen {
        layout: vertical;
    }

    #game-area {
        layout: horizontal;
        height: 1fr;
    }

    #dice-panel {
        width: 60;
        padding: 1 2;
    }

    #scorecard-panel {
        width: 1fr;
        padding: 1 2;
    }

    #standings, #status, #dice {
        height: auto;
    }

    #status {
        margin-top: 1;
    }
    """

    BINDINGS = [
        Binding("1", "mark(0)", "Mark 1"),
        Binding("2", "mark(1)", "Mark 2"),
        Binding("3", "mark(2)", "Mark 3"),
        Binding("4", "mark(3)", "Mark 4"),
        Binding("5", "mark(4)", "Mark 5"),
        Binding("space", "reroll", "Reroll", show=True),
        Binding("tab", "move(1)", "Next category", show=True),
        Binding("shift+tab", "move(-1)", "Prev category"),
        Binding("down", "move(1)", "Next"),
        Binding("up", "move(-1)", "Prev"),
        Binding("enter", "score", "Score", show=True),
        Binding("n", "new_game", "New game"),
        Binding("escape", "quit", "Quit"),
    ]

    def __init__(self, game: Game):
        super().__init__()
        self.game = game
        self.marked: set[int] = set()
        self.cursor: int | None = None
        self.message = ""

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static("", id="standings")
        with Horizontal(id="game-area"):
            with Vertical(id="dice-panel"):
                yield Static("", id="dice")
                yield Static("", id="status")
            with Vertical(id="scorecard-panel"):
                yield Static("", id="scorecard")
        yield Footer()

    def on_mount(self):
        self.title = "Yahtzee"
        self._begin_turn()

    def _begin_turn(self):
        self.marked = set()
        if not self.game.game_over:
            self.game.start_turn()
            self.cursor = next_open_index(self.game.current_player, None, +1)
        self._refresh_display()

    def _refresh_display(self):
        game = self.game
        player = game.winner if game.game_over else game.current_player
        self.query_one("#standings", Static).update(render_standings(game))
        dice_text = render_history(game) if game.game_over else render_dice(game.dice, self.marked)
        self.query_one("#dice", Static).update(dice_text)
        self.query_one("#status", Static).update(render_status(game, self.message))
        cursor = None if game.game_over else self.cursor
        self.query_one("#scorecard", Static).update(render_scorecard(player, game.offers, cursor))

    def _attempt(self, action):
        """Run a game action, turning rule violations into a status message."""
        try:
            action()
        except YahtzeeError as exc:
            logger.info("Rejected input: %s", exc)
            self.message = str(exc)
            self._refresh_display()
            return False
        self.message = ""
        return True

    # ── Actions ──────────────────────────────────────────────────────────

    def action_mark(self, index: int):
        turn = self.game.turn
        if self.game.game_over or turn is None or not turn.can_reroll:
            return
        self.marked ^= {index}
        self._refresh_display()

    def action_reroll(self):
        if self.game.game_over:
            return
        if self._attempt(lambda: self.game.reroll(self.marked)):
            self.marked = set()
            self._refresh_display()

    def action_move(self, direction: int):
        if self.game.game_over:
            return
        self.cursor = next_open_index(self.game.current_player, self.cursor, direction)
        self._refresh_display()

    def action_score(self):
        if self.game.game_over or self.cursor is None:
            return
        category = SELECTABLE_CATEGORIES[self.cursor]
        if self._attempt(lambda: self.game.select_category(category)):
            self._begin_turn()

    def action_new_game(self):
        if self.game.game_over:
            self.game.reset()
            self._begin_turn()


def main(game: Game):
    """Run the TUI for an already configured game."""
    YahtzeeApp(game).run()
