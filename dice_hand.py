"""
Dice hand - five positional dice with full and selective rerolls.

Scoring never cares about order, but rerolls address dice by their stable
position (0-4). All randomness comes from a caller-supplied random.Random so
games can be replayed from a seed.
"""
import random

from errors import InvalidDieIndex, InvalidDieValue

NUM_DICE = 5
MIN_FACE = 1
MAX_FACE = 6


class DiceHand:
    """Ordered hand of exactly five die values"""

    def __init__(self):
        """Create an unrolled hand; call roll_all() before scoring it"""
        self._values = [MIN_FACE] * NUM_DICE

    @classmethod
    def from_values(cls, values):
        """Build a hand from explicit die values.

        Args:
            values: Iterable of exactly five integers in 1-6

        Returns:
            New DiceHand holding those values in order

        Raises:
            InvalidDieValue: wrong number of dice or a face outside 1-6
        """
        values = list(values)
        if len(values) != NUM_DICE:
            raise InvalidDieValue(f"A hand needs {NUM_DICE} dice, got {len(values)}")
        for value in values:
            if not isinstance(value, int) or not MIN_FACE <= value <= MAX_FACE:
                raise InvalidDieValue(f"Die value {value!r} is not between {MIN_FACE} and {MAX_FACE}")
        hand = cls()
        hand._values = values
        return hand

    @property
    def values(self):
        """Current die values as a tuple, in position order"""
        return tuple(self._values)

    def __getitem__(self, index):
        return self._values[index]

    def __iter__(self):
        return iter(self._values)

    def __len__(self):
        return len(self._values)

    def __eq__(self, other):
        if not isinstance(other, DiceHand):
            return NotImplemented
        return self._values == other._values

    def __repr__(self):
        return f"DiceHand({self._values!r})"

    def roll_all(self, rng):
        """Give every position a fresh uniform value in 1-6"""
        self._values = [rng.randint(MIN_FACE, MAX_FACE) for _ in range(NUM_DICE)]

    def reroll(self, positions, rng):
        """
        Re-roll the dice at the given positions only.

        Every index is validated before any die changes, so a bad request
        leaves the hand untouched.

        Args:
            positions: Iterable of die positions (0-4)
            rng: random.Random used for the new values

        Raises:
            InvalidDieIndex: if any position is outside 0-4
        """
        positions = sorted(set(positions))
        for index in positions:
            if not isinstance(index, int) or not 0 <= index < NUM_DICE:
                raise InvalidDieIndex(index)
        for index in positions:
            self._values[index] = rng.randint(MIN_FACE, MAX_FACE)


def _rng_or_default(rng):
    return rng if rng is not None else random.Random()


def new_hand(rng=None) -> DiceHand:
    """Return a hand with all five dice already rolled."""
    hand = DiceHand()
    hand.roll_all(_rng_or_default(rng))
    return hand


def roll_all(hand: DiceHand, rng=None) -> None:
    """Roll every die in the hand."""
    hand.roll_all(_rng_or_default(rng))


def reroll(hand: DiceHand, positions, rng=None) -> None:
    """Roll only the dice at ``positions``; see DiceHand.reroll."""
    hand.reroll(positions, _rng_or_default(rng))
