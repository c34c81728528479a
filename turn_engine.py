"""
Turn state machine - one player's roll, reroll, reroll, score cycle.

A turn starts with all five dice rolled and waits for a decision. The caller
may reroll a chosen subset of dice up to twice, then must pick one of the
offered categories. Invalid requests raise and leave the turn where it was.

TurnState is immutable apart from the DiceHand it owns for the turn; every
accepted action returns a new TurnState.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from enum import Enum

from dice_hand import DiceHand
from errors import InvalidSelection
from player_ledger import Player, award_yahtzee_bonus, commit
from scoring import Category, ClaimedScore, offered_categories, yahtzee_bonus

logger = logging.getLogger(__name__)

MAX_REROLLS = 2


class TurnPhase(Enum):
    ROLLED = "rolled"
    AWAITING_DECISION = "awaiting decision"
    REROLLED = "rerolled"
    SCORED = "scored"


@dataclass(frozen=True)
class RerollRequest:
    """Reroll the dice at these positions; an empty set means stop rerolling"""
    positions: frozenset[int] = frozenset()

    def __post_init__(self):
        object.__setattr__(self, "positions", frozenset(self.positions))


@dataclass(frozen=True)
class CategorySelection:
    """Score the turn in this category"""
    category: Category | None


@dataclass(frozen=True)
class TurnState:
    """Snapshot of a turn in progress"""
    player: Player
    dice: tuple[int, ...]
    rng: object = field(repr=False)
    phase: TurnPhase = TurnPhase.ROLLED
    rerolls_used: int = 0
    rerolls_closed: bool = False
    offers: tuple[tuple[Category, int], ...] = ()
    scored: ClaimedScore | None = None
    bonus: ClaimedScore | None = None

    @property
    def rolls_used(self) -> int:
        """Roll phases so far, the initial roll included (1-3)"""
        return 1 + self.rerolls_used

    @property
    def can_reroll(self) -> bool:
        return (self.phase == TurnPhase.AWAITING_DECISION
                and not self.rerolls_closed
                and self.rerolls_used < MAX_REROLLS)

    @property
    def is_over(self) -> bool:
        return self.phase == TurnPhase.SCORED

    def award_for(self, category: Category) -> int | None:
        """Award currently offered for category, or None if not offered"""
        for offered, award in self.offers:
            if offered == category:
                return award
        return None


def _await_decision(state: TurnState) -> TurnState:
    offers = tuple(offered_categories(state.dice, state.player.claimed))
    logger.debug("%s: %s -> awaiting decision with dice %s",
                 state.player.name, state.phase.value, state.dice)
    return replace(state, phase=TurnPhase.AWAITING_DECISION, offers=offers)


def start_turn(player: Player, rng, hand: DiceHand | None = None) -> TurnState:
    """
    Begin a turn: roll all five dice and wait for the first decision.

    Args:
        player: Ledger of the player taking the turn
        rng: random.Random supplying the dice
        hand: Dice already rolled by the caller (physical dice); rolled here if None

    Returns:
        TurnState in the AWAITING_DECISION phase
    """
    if player.is_complete():
        raise InvalidSelection(f"{player.name} has no open categories left")
    if hand is None:
        hand = DiceHand()
        hand.roll_all(rng)
    return _await_decision(TurnState(player=player, dice=hand.values, rng=rng))


def advance_turn(state: TurnState, action) -> TurnState:
    """
    Apply one caller decision to the turn.

    Args:
        state: Current turn
        action: RerollRequest, CategorySelection, or None (stop rerolling)

    Returns:
        The next TurnState

    Raises:
        InvalidDieIndex: a reroll position outside 0-4
        InvalidSelection: the action is not allowed in this state
    """
    if state.is_over:
        raise InvalidSelection("This turn has already been scored")

    if action is None or isinstance(action, RerollRequest):
        return _reroll(state, action)
    if isinstance(action, CategorySelection):
        return _select(state, action.category)
    raise TypeError(f"Unknown turn action: {action!r}")


def _reroll(state: TurnState, request: RerollRequest | None) -> TurnState:
    if request is None or not request.positions:
        if state.rerolls_closed:
            return state
        logger.debug("%s stops rerolling after %d reroll(s)", state.player.name, state.rerolls_used)
        return replace(state, rerolls_closed=True)

    if not state.can_reroll:
        logger.warning("%s asked for a reroll with none remaining", state.player.name)
        raise InvalidSelection("No rerolls remaining, choose a category")

    # Reroll a copy so earlier snapshots keep the dice their offers were built from
    hand = DiceHand.from_values(state.dice)
    hand.reroll(request.positions, state.rng)
    rerolled = replace(state, dice=hand.values, phase=TurnPhase.REROLLED,
                       rerolls_used=state.rerolls_used + 1)
    return _await_decision(rerolled)


def _select(state: TurnState, category: Category | None) -> TurnState:
    if category is None:
        raise InvalidSelection("A category must be chosen to end the turn")
    if category.is_bonus:
        raise InvalidSelection(f"{category.value} is awarded automatically")
    award = state.award_for(category)
    if award is None:
        raise InvalidSelection(f"{category.value} is not available")

    # Bonus eligibility depends on the claims made before this turn
    bonus = yahtzee_bonus(state.dice, state.player.claimed)
    scored = commit(state.player, category, award)
    if bonus is not None:
        award_yahtzee_bonus(state.player, bonus)
    logger.debug("%s scored %s for %d", state.player.name, category.value, award)
    return replace(state, phase=TurnPhase.SCORED, scored=scored, bonus=bonus)
