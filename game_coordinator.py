"""
Game — interleaves players through thirteen rounds of turns.

Owns the players' ledgers, the current turn, the shared random generator and
the game log. Front-ends call the action methods with already-parsed input
and read the properties to decide what to show.
"""
from __future__ import annotations

import argparse
import logging
import random

from errors import GameOver
from game_log import GameLog
from player_ledger import Player, finalize
from scoring import Category
from turn_engine import (
    CategorySelection,
    RerollRequest,
    TurnState,
    advance_turn,
    start_turn,
)

logger = logging.getLogger(__name__)

NUM_ROUNDS = 13
MAX_PLAYERS = 4


class Game:
    """A complete game for one to four players, seated in a fixed order."""

    def __init__(self, names: list[str], rng: random.Random | None = None, log: GameLog | None = None) -> None:
        """Initialize the game.

        Args:
            names: Player names in turn order.
            rng: Random generator for every die roll. A fresh unseeded one if None.
            log: Optional GameLog to record into.
        """
        if not 1 <= len(names) <= MAX_PLAYERS:
            raise ValueError(f"A game needs 1-{MAX_PLAYERS} players, got {len(names)}")
        self.players = [Player(name) for name in names]
        self.rng = rng if rng is not None else random.Random()
        self.game_log = log if log is not None else GameLog()
        self.current_round = 1
        self.current_player_index = 0
        self.turn: TurnState | None = None
        self.game_over = False
        self.final_bonuses = {}

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def current_player(self) -> Player:
        return self.players[self.current_player_index]

    @property
    def num_players(self) -> int:
        return len(self.players)

    @property
    def offers(self) -> tuple[tuple[Category, int], ...]:
        """Categories the current player may claim with the current dice."""
        if self.turn is None or self.turn.is_over:
            return ()
        return self.turn.offers

    @property
    def dice(self) -> tuple[int, ...]:
        return self.turn.dice if self.turn is not None else ()

    @property
    def winner(self) -> Player | None:
        """Highest-scoring player once the game is over (first seat wins ties)."""
        if not self.game_over:
            return None
        return self.standings()[0]

    def standings(self) -> list[Player]:
        """Players sorted by total, highest first; ties keep seat order."""
        return sorted(self.players, key=lambda p: p.total, reverse=True)

    # ── Actions ──────────────────────────────────────────────────────────

    def _check_active(self) -> None:
        if self.game_over:
            raise GameOver("The game is over")

    def start_turn(self) -> TurnState:
        """Roll the opening dice for the current player."""
        self._check_active()
        if self.turn is not None and not self.turn.is_over:
            return self.turn
        self.turn = start_turn(self.current_player, self.rng)
        self.game_log.log_roll(self.current_round, self.current_player_index, self.turn.dice)
        logger.debug("Round %d: %s rolls %s", self.current_round, self.current_player.name, self.turn.dice)
        return self.turn

    def reroll(self, positions) -> TurnState:
        """Reroll the given dice positions of the current turn."""
        turn = self.start_turn()
        positions = frozenset(positions)
        self.turn = advance_turn(turn, RerollRequest(positions))
        if positions:
            self.game_log.log_reroll(self.current_round, self.current_player_index,
                                     self.turn.rolls_used, positions, self.turn.dice)
        return self.turn

    def stop_rerolling(self) -> TurnState:
        """Keep the current dice and move on to choosing a category."""
        turn = self.start_turn()
        self.turn = advance_turn(turn, None)
        return self.turn

    def select_category(self, category: Category | None) -> TurnState:
        """Score the current turn and pass play to the next player.

        Raises InvalidSelection (and leaves the turn untouched) if the category
        is not on offer.
        """
        turn = self.start_turn()
        scored = advance_turn(turn, CategorySelection(category))
        self.turn = scored
        player_index = self.current_player_index
        self.game_log.log_score(self.current_round, player_index,
                                scored.scored.category, scored.scored.award, scored.dice)
        if scored.bonus is not None:
            self.game_log.log_bonus(self.current_round, player_index,
                                    scored.bonus.category, scored.bonus.award, scored.dice)
        self._advance()
        return scored

    def _advance(self) -> None:
        """Move to the next seat; after the last seat of round 13 end the game."""
        next_index = (self.current_player_index + 1) % self.num_players
        if next_index == 0:
            if self.current_round == NUM_ROUNDS:
                self._finish()
                return
            self.current_round += 1
        self.current_player_index = next_index

    def _finish(self) -> None:
        self.game_over = True
        for index, player in enumerate(self.players):
            bonus = finalize(player)
            self.final_bonuses[player.name] = bonus
            if bonus is not None:
                self.game_log.log_bonus(self.current_round, index, bonus.category, bonus.award)
        logger.info("Game over: %s", ", ".join(f"{p.name} {p.total}" for p in self.standings()))

    def reset(self) -> None:
        """Start a new game with the same players and generator."""
        self.players = [Player(p.name) for p in self.players]
        self.current_round = 1
        self.current_player_index = 0
        self.turn = None
        self.game_over = False
        self.final_bonuses = {}
        self.game_log.clear()


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        argv: Optional list of args (for testing). None uses sys.argv.

    Returns:
        Parsed argparse.Namespace.
    """
    parser = argparse.ArgumentParser(description="Yahtzee Game")
    parser.add_argument("--names", nargs="+", metavar="NAME",
                        help=f"Player names in turn order (1-{MAX_PLAYERS})")
    parser.add_argument("--seed", type=int, default=None,
                        help="Seed for the dice, for a repeatable game")
    parser.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"], default=None,
                        help="Logging level (default: from settings, else WARNING)")
    args = parser.parse_args(argv)
    if args.names is not None and len(args.names) > MAX_PLAYERS:
        parser.error(f"--names supports at most {MAX_PLAYERS} players")
    return args
