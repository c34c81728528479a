"""
Dice Hand Test Suite

Sections:
    1. Construction — explicit values, validation
    2. Rolling — all five dice, values in range, determinism
    3. Rerolling — only chosen positions change, bad indices rejected
"""
import random

import pytest

from dice_hand import DiceHand, new_hand, reroll, roll_all
from errors import InvalidDieIndex, InvalidDieValue, YahtzeeError


# ═══════════════════════════════════════════════════════════════════════════════
# 1. CONSTRUCTION
# ═══════════════════════════════════════════════════════════════════════════════

class TestConstruction:

    def test_from_values_keeps_order(self):
        hand = DiceHand.from_values([3, 1, 6, 6, 2])
        assert hand.values == (3, 1, 6, 6, 2)
        assert hand[2] == 6

    def test_hand_always_has_five_dice(self):
        assert len(DiceHand()) == 5
        assert len(new_hand(random.Random(1))) == 5

    def test_too_few_dice_rejected(self):
        with pytest.raises(InvalidDieValue):
            DiceHand.from_values([1, 2, 3, 4])

    def test_too_many_dice_rejected(self):
        with pytest.raises(InvalidDieValue):
            DiceHand.from_values([1, 2, 3, 4, 5, 6])

    @pytest.mark.parametrize("bad", [0, 7, -1])
    def test_face_out_of_range_rejected(self, bad):
        with pytest.raises(InvalidDieValue):
            DiceHand.from_values([1, 2, 3, 4, bad])

    def test_invalid_value_is_a_value_error(self):
        with pytest.raises(ValueError):
            DiceHand.from_values([1, 2, 3, 4, 9])

    def test_equality_compares_values(self):
        assert DiceHand.from_values([1, 2, 3, 4, 5]) == DiceHand.from_values([1, 2, 3, 4, 5])
        assert DiceHand.from_values([1, 2, 3, 4, 5]) != DiceHand.from_values([5, 4, 3, 2, 1])


# ═══════════════════════════════════════════════════════════════════════════════
# 2. ROLLING
# ═══════════════════════════════════════════════════════════════════════════════

class TestRolling:

    def test_roll_all_produces_values_1_through_6(self):
        rng = random.Random(0)
        hand = DiceHand()
        seen = set()
        for _ in range(200):
            roll_all(hand, rng)
            assert len(hand) == 5
            seen.update(hand.values)
        assert seen == {1, 2, 3, 4, 5, 6}

    def test_same_seed_same_dice(self):
        a = new_hand(random.Random(42))
        b = new_hand(random.Random(42))
        assert a.values == b.values

    def test_roll_all_uses_supplied_generator(self):
        reference = random.Random(7)
        expected = tuple(reference.randint(1, 6) for _ in range(5))
        hand = DiceHand()
        hand.roll_all(random.Random(7))
        assert hand.values == expected


# ═══════════════════════════════════════════════════════════════════════════════
# 3. REROLLING
# ═══════════════════════════════════════════════════════════════════════════════

class TestReroll:

    def test_reroll_leaves_other_positions_alone(self):
        rng = random.Random(3)
        for _ in range(50):
            hand = DiceHand.from_values([1, 2, 3, 4, 5])
            reroll(hand, {1, 3}, rng)
            assert hand[0] == 1
            assert hand[2] == 3
            assert hand[4] == 5

    def test_rerolled_positions_stay_in_range(self):
        rng = random.Random(9)
        hand = DiceHand.from_values([6, 6, 6, 6, 6])
        for _ in range(100):
            reroll(hand, {0, 1, 2, 3, 4}, rng)
            assert all(1 <= v <= 6 for v in hand)

    def test_empty_reroll_changes_nothing(self):
        hand = DiceHand.from_values([2, 2, 2, 2, 2])
        reroll(hand, set(), random.Random(1))
        assert hand.values == (2, 2, 2, 2, 2)

    @pytest.mark.parametrize("bad", [5, -1, 10])
    def test_out_of_range_index_raises(self, bad):
        hand = DiceHand.from_values([1, 2, 3, 4, 5])
        with pytest.raises(InvalidDieIndex) as excinfo:
            reroll(hand, {bad}, random.Random(1))
        assert excinfo.value.index == bad

    def test_bad_index_leaves_hand_untouched(self):
        hand = DiceHand.from_values([1, 2, 3, 4, 5])
        with pytest.raises(InvalidDieIndex):
            reroll(hand, {0, 1, 5}, random.Random(1))
        assert hand.values == (1, 2, 3, 4, 5)

    def test_invalid_index_is_catchable_as_base_error(self):
        hand = DiceHand.from_values([1, 2, 3, 4, 5])
        with pytest.raises(YahtzeeError):
            reroll(hand, [6], random.Random(1))
