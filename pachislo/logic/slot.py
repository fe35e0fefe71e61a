"""Reel symbol rendering for lottery results."""
import logging

from pachislo.logic.models import (
    Lose,
    LoseResult,
    LotteryResult,
    SlotOutput,
    Win,
    WinResult,
)
from pachislo.logic.rng import ProductionRNG, RNGBase
from pachislo.validators import validate_reels


logger = logging.getLogger(__name__)


class SlotProducer:
    """
    Turns a lottery result into visible reel symbols.

    Implements:
    - Winning line (all positions share one symbol)
    - Losing line (two disjoint symbol groups, never all matching)
    - Near miss (outer symbols match, middle one is a neighbour)
    """

    def __init__(self, length: int, symbols: list[int], rng: RNGBase | None = None):
        validate_reels(length, symbols)
        self.length = length
        self.symbols = list(symbols)
        self.rng = rng or ProductionRNG()

    def produce_win(self) -> list[int]:
        symbol = self.rng.choice(self.symbols)
        return [symbol] * self.length

    def produce_lose(self) -> list[int]:
        choices = list(self.symbols)
        self.rng.shuffle(choices)

        # Cut the catalog into two non-empty disjoint groups
        partition = self.rng.randint(1, len(choices) - 1)
        group1 = choices[:partition]
        group2 = choices[partition:]

        # Each group fills at least one position
        cnt1 = self.rng.randint(1, self.length - 1)
        cnt2 = self.length - cnt1

        reel = [self.rng.choice(group1) for _ in range(cnt1)]
        reel.extend(self.rng.choice(group2) for _ in range(cnt2))
        self.rng.shuffle(reel)
        return reel

    def produce_fake_lose(self) -> list[int]:
        """Near miss: always three symbols regardless of reel length."""
        size = len(self.symbols)
        index = self.rng.randint(0, size - 1)
        step = -1 if self.rng.random() < 0.5 else 1
        shifted = (index + step) % size
        reel = [self.symbols[index], self.symbols[shifted], self.symbols[index]]
        logger.debug("Fake lose: index=%d shifted=%d reel=%s", index, shifted, reel)
        return reel

    def produce(self, result: LotteryResult) -> SlotOutput:
        """Render a lottery result into a primary reel and optional bonus reel."""
        if isinstance(result, WinResult):
            if result.kind == Win.DEFAULT:
                return SlotOutput(reel=self.produce_win())
            if result.kind == Win.FAKE_WIN:
                return SlotOutput(
                    reel=self.produce_fake_lose(),
                    bonus_reel=self.produce_win(),
                )
            raise TypeError(f"Unknown win type: {result.kind!r}")
        if isinstance(result, LoseResult):
            if result.kind == Lose.DEFAULT:
                return SlotOutput(reel=self.produce_lose())
            if result.kind == Lose.FAKE_LOSE:
                return SlotOutput(reel=self.produce_fake_lose())
            raise TypeError(f"Unknown lose type: {result.kind!r}")
        raise TypeError(f"Unknown lottery result type: {type(result).__name__}")
