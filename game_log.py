"""Game log for Yahtzee — records every roll, reroll and score of a game.

Pure Python, no UI dependency. The terminal front-end reads it to show the
turn history once the game is over.
"""
from __future__ import annotations

from dataclasses import dataclass

from scoring import Category


@dataclass
class LogEntry:
    """A single logged game event."""
    turn: int                                   # 1-13
    player_index: int
    event_type: str                             # "roll", "reroll", "score", "bonus"
    dice_values: tuple[int, ...]
    rerolled_positions: tuple[int, ...] | None = None
    category: Category | None = None
    score: int | None = None
    roll_number: int = 0                        # 1-3 for rolls and rerolls


class GameLog:
    """Accumulates LogEntry records during a game."""

    def __init__(self) -> None:
        self.entries: list[LogEntry] = []

    def log_roll(self, turn: int, player_index: int, dice_values) -> None:
        """Record the opening roll of a turn."""
        self.entries.append(LogEntry(
            turn=turn,
            player_index=player_index,
            event_type="roll",
            dice_values=tuple(dice_values),
            roll_number=1,
        ))

    def log_reroll(self, turn: int, player_index: int, roll_number: int, positions, dice_values) -> None:
        """Record a selective reroll and the dice it produced."""
        self.entries.append(LogEntry(
            turn=turn,
            player_index=player_index,
            event_type="reroll",
            dice_values=tuple(dice_values),
            rerolled_positions=tuple(sorted(positions)),
            roll_number=roll_number,
        ))

    def log_score(self, turn: int, player_index: int, category: Category, score: int, dice_values) -> None:
        """Record a scoring decision."""
        self.entries.append(LogEntry(
            turn=turn,
            player_index=player_index,
            event_type="score",
            dice_values=tuple(dice_values),
            category=category,
            score=score,
        ))

    def log_bonus(self, turn: int, player_index: int, category: Category, score: int, dice_values=()) -> None:
        """Record an automatically awarded bonus."""
        self.entries.append(LogEntry(
            turn=turn,
            player_index=player_index,
            event_type="bonus",
            dice_values=tuple(dice_values),
            category=category,
            score=score,
        ))

    def get_turn_entries(self, turn: int, player_index: int = 0) -> list[LogEntry]:
        """Return all entries for a specific turn and player."""
        return [e for e in self.entries
                if e.turn == turn and e.player_index == player_index]

    def get_score_entries(self, player_index: int = 0) -> list[LogEntry]:
        """Return scoring and bonus entries for a player."""
        return [e for e in self.entries
                if e.event_type in ("score", "bonus") and e.player_index == player_index]

    def clear(self) -> None:
        """Remove all entries."""
        self.entries = []
