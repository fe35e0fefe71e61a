"""Lottery draw tests."""
import pytest

from pachislo.errors import ProbabilityError
from pachislo.logic.lottery import Lottery
from pachislo.logic.models import Lose, LoseResult, SlotProbability, Win, WinResult
from pachislo.logic.rng import SeededRNG
from tests.conftest import ScriptedRNG, make_config


SAMPLES = 2000


def _lottery(rng=None, **overrides) -> Lottery:
    return Lottery(make_config(**overrides).probability, rng or SeededRNG(seed=99))


class TestDraw:
    """Single draw against a probability triple."""

    def test_below_win_threshold_wins(self):
        lottery = _lottery(ScriptedRNG([0.49, 0.9]))
        result = lottery.draw(SlotProbability(win=0.5, fake_win=0.3, fake_lose=0.2))
        assert result == WinResult(kind=Win.DEFAULT)
        assert result.is_win

    def test_second_draw_below_fake_win_gives_fake_win(self):
        lottery = _lottery(ScriptedRNG([0.49, 0.29]))
        result = lottery.draw(SlotProbability(win=0.5, fake_win=0.3, fake_lose=0.2))
        assert result == WinResult(kind=Win.FAKE_WIN)

    def test_at_win_threshold_loses(self):
        lottery = _lottery(ScriptedRNG([0.5, 0.9]))
        result = lottery.draw(SlotProbability(win=0.5, fake_win=0.3, fake_lose=0.2))
        assert result == LoseResult(kind=Lose.DEFAULT)
        assert not result.is_win

    def test_second_draw_below_fake_lose_gives_fake_lose(self):
        lottery = _lottery(ScriptedRNG([0.5, 0.1]))
        result = lottery.draw(SlotProbability(win=0.5, fake_win=0.3, fake_lose=0.2))
        assert result == LoseResult(kind=Lose.FAKE_LOSE)


class TestProbabilityLimits:
    """Certain outcomes stay certain over many samples."""

    def test_win_probability_one_always_wins(self):
        lottery = _lottery(normal=(1.0, 0.3, 0.15))
        assert all(lottery.lottery_normal().is_win for _ in range(SAMPLES))

    def test_win_probability_zero_always_loses(self):
        lottery = _lottery(rush=(0.0, 0.3, 0.15))
        assert not any(lottery.lottery_rush().is_win for _ in range(SAMPLES))

    def test_fake_win_one_always_fake(self):
        lottery = _lottery(normal=(1.0, 1.0, 0.0))
        results = {lottery.lottery_normal() for _ in range(200)}
        assert results == {WinResult(kind=Win.FAKE_WIN)}

    def test_fake_lose_one_always_fake(self):
        lottery = _lottery(normal=(0.0, 0.0, 1.0))
        results = {lottery.lottery_normal() for _ in range(200)}
        assert results == {LoseResult(kind=Lose.FAKE_LOSE)}

    @pytest.mark.slow
    def test_win_rate_tracks_probability(self):
        lottery = _lottery(normal=(0.16, 0.3, 0.15))
        wins = sum(lottery.lottery_normal().is_win for _ in range(20000))
        assert 0.14 < wins / 20000 < 0.18


class TestRushContinue:
    """Continuation probability scaled by the streak function."""

    def test_uses_scaled_probability(self):
        # 0.8 * 0.6 ** 2 = 0.288: a draw of 0.3 must lose
        lottery = _lottery(ScriptedRNG([0.3, 0.9]))
        assert lottery.lottery_rush_continue(3) == LoseResult(kind=Lose.DEFAULT)

    def test_first_continuation_uses_base_probability(self):
        lottery = _lottery(ScriptedRNG([0.79, 0.9]))
        assert lottery.lottery_rush_continue(1) == WinResult(kind=Win.DEFAULT)

    def test_keeps_fake_probabilities(self):
        lottery = _lottery(
            ScriptedRNG([0.0, 0.24]),
            rush_continue=(0.8, 0.25, 0.1),
        )
        assert lottery.lottery_rush_continue(5) == WinResult(kind=Win.FAKE_WIN)

    def test_default_decay_never_overflows(self):
        lottery = _lottery()
        for n in range(1, 50):
            lottery.lottery_rush_continue(n)

    def test_exactly_one_is_allowed(self):
        lottery = _lottery(rush_continue=(0.5, 0.0, 0.0), rush_continue_fn=lambda n: 2.0)
        assert lottery.lottery_rush_continue(1).is_win

    def test_misbehaving_decay_raises(self):
        lottery = _lottery(rush_continue_fn=lambda n: 2.0)
        with pytest.raises(ProbabilityError) as exc_info:
            lottery.lottery_rush_continue(1)
        assert exc_info.value.value == pytest.approx(1.6)


class TestIntoRush:
    def test_not_configured_always_wins(self):
        lottery = _lottery(ScriptedRNG([]))
        assert lottery.lottery_into_rush() == WinResult(kind=Win.DEFAULT)

    def test_configured_draws(self):
        lottery = _lottery(into_rush=(0.0, 0.0, 0.0))
        assert lottery.lottery_into_rush() == LoseResult(kind=Lose.DEFAULT)
