"""
Player ledger - claimed categories and the running total for one player.

The ledger is only mutated through commit(), award_yahtzee_bonus() and
finalize(); after each of them total equals the sum of every claimed award.
"""
import logging

from errors import AlreadyFinalized, CategoryAlreadyClaimed, InvalidSelection
from scoring import (
    Category,
    ClaimedScore,
    SELECTABLE_CATEGORIES,
    upper_section_bonus,
    upper_section_total,
)

logger = logging.getLogger(__name__)


class Player:
    """One player's scorecard"""

    def __init__(self, name):
        self.name = name
        self.claimed = {}
        self.total = 0
        self.finalized = False

    def __repr__(self):
        return f"Player({self.name!r}, total={self.total})"

    def is_claimed(self, category):
        """Check if a category has been claimed"""
        return category in self.claimed

    def open_categories(self):
        """Selectable categories not yet claimed, in scorecard order"""
        return [cat for cat in SELECTABLE_CATEGORIES if cat not in self.claimed]

    def is_complete(self):
        """True once all thirteen selectable categories are claimed"""
        return not self.open_categories()

    def award_for(self, category):
        """Award claimed for category, or None if it is still open"""
        entry = self.claimed.get(category)
        return entry.award if entry is not None else None

    def upper_section_total(self):
        return upper_section_total(self.claimed)

    def _add(self, score):
        self.claimed[score.category] = score
        self.total = sum(entry.award for entry in self.claimed.values())


def _check_open(player):
    if player.finalized:
        logger.warning("%s's scorecard is final, change rejected", player.name)
        raise AlreadyFinalized(f"{player.name}'s scorecard is already final")


def commit(player: Player, category: Category, award: int) -> ClaimedScore:
    """
    Record a category claim for the player.

    Args:
        player: Ledger to update
        category: A selectable category
        award: Points for the claim, 0 allowed

    Returns:
        The new ClaimedScore

    Raises:
        InvalidSelection: category is a bonus pseudo-category
        CategoryAlreadyClaimed: category is already in the ledger
        AlreadyFinalized: the scorecard was finalized
    """
    _check_open(player)
    if category.is_bonus:
        raise InvalidSelection(f"{category.value} cannot be chosen")
    if player.is_claimed(category):
        logger.warning("%s tried to claim %s twice", player.name, category.value)
        raise CategoryAlreadyClaimed(category)
    score = ClaimedScore(category, award)
    player._add(score)
    logger.debug("%s claimed %s for %d (total %d)", player.name, category.value, award, player.total)
    return score


def award_yahtzee_bonus(player: Player, bonus: ClaimedScore) -> ClaimedScore:
    """Add a repeat-Yahtzee bonus; repeated bonuses stack into one entry."""
    _check_open(player)
    if bonus.category != Category.YAHTZEE_BONUS:
        raise InvalidSelection(f"{bonus.category.value} is not a Yahtzee bonus")
    previous = player.award_for(Category.YAHTZEE_BONUS) or 0
    score = ClaimedScore(Category.YAHTZEE_BONUS, previous + bonus.award)
    player._add(score)
    logger.info("%s earned a Yahtzee bonus of %d", player.name, bonus.award)
    return score


def finalize(player: Player):
    """
    Evaluate end-of-game bonuses once.

    Returns:
        The UpperSectionBonus ClaimedScore if earned, else None

    Raises:
        AlreadyFinalized: on a second call
    """
    if player.finalized:
        raise AlreadyFinalized(f"{player.name}'s scorecard is already final")
    player.finalized = True
    bonus = upper_section_bonus(player.claimed)
    if bonus is not None:
        player._add(bonus)
        logger.info("%s earned the upper section bonus", player.name)
    return bonus
