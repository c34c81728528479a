"""
Player Ledger Test Suite

Sections:
    1. Commit — totals, zero awards, double commits
    2. Yahtzee bonus — stacking into one entry, wrong category rejected
    3. Finalize — upper section bonus, single evaluation, ledger locked after
"""
import pytest

from errors import AlreadyFinalized, CategoryAlreadyClaimed, InvalidSelection
from player_ledger import Player, award_yahtzee_bonus, commit, finalize
from scoring import Category, ClaimedScore, SELECTABLE_CATEGORIES


def ledger_sum(player):
    return sum(entry.award for entry in player.claimed.values())


# ═══════════════════════════════════════════════════════════════════════════════
# 1. COMMIT
# ═══════════════════════════════════════════════════════════════════════════════

class TestCommit:

    def test_new_player_is_empty(self):
        player = Player("Ann")
        assert player.claimed == {}
        assert player.total == 0
        assert player.open_categories() == list(SELECTABLE_CATEGORIES)

    def test_commit_adds_award(self):
        player = Player("Ann")
        score = commit(player, Category.CHANCE, 22)
        assert score == ClaimedScore(Category.CHANCE, 22)
        assert player.total == 22
        assert player.is_claimed(Category.CHANCE)

    def test_zero_award_still_claims(self):
        player = Player("Ann")
        commit(player, Category.LARGE_STRAIGHT, 0)
        assert player.is_claimed(Category.LARGE_STRAIGHT)
        assert Category.LARGE_STRAIGHT not in player.open_categories()
        assert player.total == 0

    def test_double_commit_fails_and_keeps_total(self):
        player = Player("Ann")
        commit(player, Category.SIXES, 18)
        with pytest.raises(CategoryAlreadyClaimed) as excinfo:
            commit(player, Category.SIXES, 24)
        assert excinfo.value.category == Category.SIXES
        assert player.total == 18
        assert player.award_for(Category.SIXES) == 18

    def test_bonus_category_cannot_be_committed(self):
        player = Player("Ann")
        with pytest.raises(InvalidSelection):
            commit(player, Category.UPPER_SECTION_BONUS, 35)
        assert player.total == 0

    def test_total_matches_claims_after_every_commit(self):
        player = Player("Ann")
        for award, category in enumerate(SELECTABLE_CATEGORIES):
            commit(player, category, award)
            assert player.total == ledger_sum(player)
        assert player.is_complete()


# ═══════════════════════════════════════════════════════════════════════════════
# 2. YAHTZEE BONUS
# ═══════════════════════════════════════════════════════════════════════════════

class TestYahtzeeBonus:

    def test_bonuses_stack_into_one_entry(self):
        player = Player("Ann")
        commit(player, Category.YAHTZEE, 50)
        bonus = ClaimedScore(Category.YAHTZEE_BONUS, 150)
        award_yahtzee_bonus(player, bonus)
        award_yahtzee_bonus(player, bonus)
        assert player.award_for(Category.YAHTZEE_BONUS) == 300
        assert player.total == 350
        assert player.total == ledger_sum(player)

    def test_wrong_bonus_category_rejected(self):
        player = Player("Ann")
        commit(player, Category.YAHTZEE, 50)
        with pytest.raises(InvalidSelection):
            award_yahtzee_bonus(player, ClaimedScore(Category.UPPER_SECTION_BONUS, 35))
        assert not player.is_claimed(Category.YAHTZEE_BONUS)
        assert player.total == 50


# ═══════════════════════════════════════════════════════════════════════════════
# 3. FINALIZE
# ═══════════════════════════════════════════════════════════════════════════════

def _fill_upper(player, awards):
    for category, award in zip(SELECTABLE_CATEGORIES[:6], awards):
        commit(player, category, award)


class TestFinalize:

    def test_upper_total_63_earns_bonus(self):
        player = Player("Ann")
        _fill_upper(player, [3, 6, 9, 12, 15, 18])
        bonus = finalize(player)
        assert bonus == ClaimedScore(Category.UPPER_SECTION_BONUS, 35)
        assert player.total == 98
        assert player.total == ledger_sum(player)

    def test_upper_total_62_earns_nothing(self):
        player = Player("Ann")
        _fill_upper(player, [2, 6, 9, 12, 15, 18])
        assert finalize(player) is None
        assert player.total == 62
        assert not player.is_claimed(Category.UPPER_SECTION_BONUS)

    def test_second_finalize_fails(self):
        player = Player("Ann")
        _fill_upper(player, [3, 6, 9, 12, 15, 18])
        finalize(player)
        with pytest.raises(AlreadyFinalized):
            finalize(player)
        assert player.total == 98

    def test_commit_after_finalize_fails(self):
        player = Player("Ann")
        commit(player, Category.SIXES, 30)
        commit(player, Category.FIVES, 25)
        assert finalize(player) is None
        with pytest.raises(AlreadyFinalized):
            commit(player, Category.FOURS, 16)
        assert not player.is_claimed(Category.FOURS)
        assert player.total == 55

    def test_bonus_after_finalize_fails(self):
        player = Player("Ann")
        commit(player, Category.YAHTZEE, 50)
        finalize(player)
        with pytest.raises(AlreadyFinalized):
            award_yahtzee_bonus(player, ClaimedScore(Category.YAHTZEE_BONUS, 150))
        assert player.total == 50
