"""Lottery draws for normal play, rush entry, rush play and rush continuation."""
from pachislo.errors import ProbabilityError
from pachislo.logic.models import (
    Lose,
    LoseResult,
    LotteryResult,
    Probability,
    SlotProbability,
    Win,
    WinResult,
)
from pachislo.logic.rng import ProductionRNG, RNGBase


class Lottery:
    """
    Stateless evaluator over the configured probabilities.

    Every draw is an independent uniform sample on [0, 1): the first decides
    win or lose, the second decides whether the reels show a near miss.
    """

    def __init__(self, probability: Probability, rng: RNGBase | None = None):
        self.probability = probability
        self.rng = rng or ProductionRNG()

    def draw(self, slot_probability: SlotProbability) -> LotteryResult:
        if self.rng.random() < slot_probability.win:
            if self.rng.random() < slot_probability.fake_win:
                return WinResult(kind=Win.FAKE_WIN)
            return WinResult(kind=Win.DEFAULT)
        if self.rng.random() < slot_probability.fake_lose:
            return LoseResult(kind=Lose.FAKE_LOSE)
        return LoseResult(kind=Lose.DEFAULT)

    def lottery_normal(self) -> LotteryResult:
        return self.draw(self.probability.normal)

    def lottery_rush(self) -> LotteryResult:
        return self.draw(self.probability.rush)

    def lottery_into_rush(self) -> LotteryResult:
        """Draw for entering rush after a normal win; a win if not configured."""
        if self.probability.into_rush is None:
            return WinResult(kind=Win.DEFAULT)
        return self.draw(self.probability.into_rush)

    def lottery_rush_continue(self, n: int) -> LotteryResult:
        """
        Draw whether rush streak n continues.

        Raises ProbabilityError if rush_continue_fn pushes the win
        probability above 1.0.
        """
        base = self.probability.rush_continue
        adjusted_win = base.win * self.probability.rush_continue_fn(n)
        if adjusted_win > 1.0:
            raise ProbabilityError(adjusted_win)
        return self.draw(
            SlotProbability(
                win=adjusted_win,
                fake_win=base.fake_win,
                fake_lose=base.fake_lose,
            )
        )
