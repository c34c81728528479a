"""Error types raised by the Yahtzee scoring core.

Every error is local and caller-correctable: the front-end catches
YahtzeeError, shows the message and asks again.
"""


class YahtzeeError(Exception):
    """Base class for all rule violations reported by the core."""


class InvalidDieIndex(YahtzeeError, IndexError):
    """A reroll targeted a position outside 0-4."""

    def __init__(self, index):
        super().__init__(f"Die position {index} is out of range (0-4)")
        self.index = index


class InvalidDieValue(YahtzeeError, ValueError):
    """A hand was built from values that are not five dice in 1-6."""


class InvalidSelection(YahtzeeError):
    """The chosen action or category is not available right now."""


class GameOver(InvalidSelection):
    """An action was attempted after the final round was scored."""


class CategoryAlreadyClaimed(YahtzeeError):
    """A category was committed a second time."""

    def __init__(self, category):
        super().__init__(f"{category.value} has already been scored")
        self.category = category


class AlreadyFinalized(YahtzeeError):
    """The scorecard is final: no second evaluation, claim or bonus."""
