"""
Yahtzee Scoring Rules - pure functions from a hand to category awards

Nothing here mutates state or performs I/O. Every function takes the hand
(anything iterable of die values, usually a DiceHand) and, where the rule
depends on history, the player's claimed categories.
"""
from collections import Counter
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum


class Category(Enum):
    """Yahtzee score categories, in scorecard order"""
    ACES = "Aces"
    TWOS = "Twos"
    THREES = "Threes"
    FOURS = "Fours"
    FIVES = "Fives"
    SIXES = "Sixes"
    THREE_OF_A_KIND = "Three of a Kind"
    FOUR_OF_A_KIND = "Four of a Kind"
    FULL_HOUSE = "Full House"
    SMALL_STRAIGHT = "Small Straight"
    LARGE_STRAIGHT = "Large Straight"
    CHANCE = "Chance"
    YAHTZEE = "Yahtzee"
    # Awarded automatically, never chosen by the player
    UPPER_SECTION_BONUS = "Upper Section Bonus"
    YAHTZEE_BONUS = "Yahtzee Bonus"

    @property
    def is_bonus(self):
        return self in BONUS_CATEGORIES


UPPER_CATEGORIES = (
    Category.ACES, Category.TWOS, Category.THREES,
    Category.FOURS, Category.FIVES, Category.SIXES,
)

LOWER_CATEGORIES = (
    Category.THREE_OF_A_KIND, Category.FOUR_OF_A_KIND, Category.FULL_HOUSE,
    Category.SMALL_STRAIGHT, Category.LARGE_STRAIGHT, Category.CHANCE,
    Category.YAHTZEE,
)

SELECTABLE_CATEGORIES = UPPER_CATEGORIES + LOWER_CATEGORIES

BONUS_CATEGORIES = frozenset({Category.UPPER_SECTION_BONUS, Category.YAHTZEE_BONUS})

_UPPER_FACE = {cat: face for face, cat in enumerate(UPPER_CATEGORIES, start=1)}

FULL_HOUSE_AWARD = 25
SMALL_STRAIGHT_AWARD = 30
LARGE_STRAIGHT_AWARD = 40
YAHTZEE_AWARD = 50
REPEAT_YAHTZEE_AWARD = 150
UPPER_BONUS_THRESHOLD = 63
UPPER_BONUS_AWARD = 35


@dataclass(frozen=True)
class ClaimedScore:
    """A category together with the points it was claimed for"""
    category: Category
    award: int


def count_values(dice):
    """
    Count occurrences of each die value

    Args:
        dice: Iterable of die values (DiceHand or plain ints)

    Returns:
        Counter object with die values as keys
    """
    return Counter(dice)


def has_n_of_kind(dice, n):
    """True if at least n dice show the same face"""
    counts = count_values(dice)
    return max(counts.values()) >= n


def has_full_house(dice):
    """True if the face counts are exactly three of one and two of another"""
    counts = count_values(dice)
    return sorted(counts.values(), reverse=True) == [3, 2]


def longest_run(dice):
    """
    Length of the longest run of consecutive distinct values

    Duplicates are dropped before scanning, so [1, 2, 2, 3, 4] has a run of 4.
    """
    faces = sorted(set(dice))
    best = 0
    run = 0
    previous = None
    for face in faces:
        if previous is not None and face == previous + 1:
            run += 1
        else:
            run = 1
        best = max(best, run)
        previous = face
    return best


def has_small_straight(dice):
    """True if four consecutive values are present"""
    return longest_run(dice) >= 4


def has_large_straight(dice):
    """True if all five dice form one consecutive run (1-5 or 2-6)"""
    return longest_run(dice) == 5


def has_yahtzee(dice):
    """True if all dice show the same face"""
    return len(set(dice)) == 1


def _claimed_award(claimed, category):
    """Award already recorded for category, or None if unclaimed.

    A bare set of categories carries no awards; its claims count as zero.
    """
    if isinstance(claimed, Mapping):
        entry = claimed.get(category)
        if entry is None:
            return None
        return entry.award if isinstance(entry, ClaimedScore) else entry
    return 0 if category in claimed else None


def has_scored_yahtzee(claimed):
    """True if a non-zero Yahtzee has already been claimed"""
    award = _claimed_award(claimed, Category.YAHTZEE)
    return award is not None and award > 0


def calculate_score(category, dice, claimed=()):
    """
    Calculate the award for a category given the dice

    Args:
        category: Category enum value (selectable categories only)
        dice: Iterable of five die values
        claimed: The player's claimed categories, used by the Yahtzee rule

    Returns:
        Integer award (0 if the dice don't qualify)
    """
    values = list(dice)
    total = sum(values)
    counts = count_values(values)

    if category in _UPPER_FACE:
        face = _UPPER_FACE[category]
        return face * counts[face]
    elif category == Category.THREE_OF_A_KIND:
        return total if has_n_of_kind(values, 3) else 0
    elif category == Category.FOUR_OF_A_KIND:
        return total if has_n_of_kind(values, 4) else 0
    elif category == Category.FULL_HOUSE:
        return FULL_HOUSE_AWARD if has_full_house(values) else 0
    elif category == Category.SMALL_STRAIGHT:
        return SMALL_STRAIGHT_AWARD if has_small_straight(values) else 0
    elif category == Category.LARGE_STRAIGHT:
        return LARGE_STRAIGHT_AWARD if has_large_straight(values) else 0
    elif category == Category.CHANCE:
        return total
    elif category == Category.YAHTZEE:
        if not has_yahtzee(values):
            return 0
        return REPEAT_YAHTZEE_AWARD if has_scored_yahtzee(claimed) else YAHTZEE_AWARD

    raise ValueError(f"{category.value} is awarded automatically and has no dice rule")


def offered_categories(dice, claimed):
    """
    Every category the player may still claim, with its award

    Categories already in ``claimed`` are left out; a 0 award is still offered.
    The order is the fixed scorecard order, Aces through Yahtzee.

    Args:
        dice: Iterable of five die values
        claimed: Mapping of Category to ClaimedScore, or a set of Category

    Returns:
        List of (Category, award) tuples
    """
    values = list(dice)
    return [(category, calculate_score(category, values, claimed))
            for category in SELECTABLE_CATEGORIES
            if category not in claimed]


def yahtzee_bonus(dice, claimed):
    """Repeat-Yahtzee bonus earned by this hand, or None.

    Only a Yahtzee already claimed for a non-zero award unlocks the bonus.
    """
    if has_yahtzee(dice) and has_scored_yahtzee(claimed):
        return ClaimedScore(Category.YAHTZEE_BONUS, REPEAT_YAHTZEE_AWARD)
    return None


def upper_section_total(claimed):
    """Sum of the awards claimed in the six upper categories"""
    total = 0
    for category in UPPER_CATEGORIES:
        award = _claimed_award(claimed, category)
        if award is not None:
            total += award
    return total


def upper_section_bonus(claimed):
    """UpperSectionBonus(35) if the upper awards reach 63, else None"""
    if upper_section_total(claimed) >= UPPER_BONUS_THRESHOLD:
        return ClaimedScore(Category.UPPER_SECTION_BONUS, UPPER_BONUS_AWARD)
    return None


def format_score(score):
    """Render a ClaimedScore (or (category, award) pair) as 'Label: award'"""
    category, award = (score.category, score.award) if isinstance(score, ClaimedScore) else score
    return f"{category.value}: {award}"
