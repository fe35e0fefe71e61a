"""Player and game commands executed by the Game orchestrator."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from pachislo.logic.rng import ProductionRNG, RNGBase
from pachislo.validators import validate_start_hole_probability

if TYPE_CHECKING:
    from pachislo.logic.game import Game


class GameCommand(ABC):
    """A single action applied to the Game."""

    @abstractmethod
    def execute(self, game: Game) -> None:
        pass

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other) and vars(self) == vars(other)

    def __repr__(self) -> str:
        fields = ", ".join(f"{k}={v!r}" for k, v in vars(self).items())
        return f"{type(self).__name__}({fields})"


class StartGame(GameCommand):
    def execute(self, game: Game) -> None:
        game.start()


class LaunchBall(GameCommand):
    def execute(self, game: Game) -> None:
        game.launch_ball()


class CauseLottery(GameCommand):
    def execute(self, game: Game) -> None:
        game.cause_lottery()


class FinishGame(GameCommand):
    """Ends the current session; the dispatch loop keeps running."""

    def execute(self, game: Game) -> None:
        game.finish()


class LaunchBallFlow(GameCommand):
    """
    Launch a ball, then spin the reels if it landed in the start hole.

    When the launch spent the last ball the session is over and there is
    nothing left to spin.
    """

    def __init__(self, is_lottery: bool):
        self.is_lottery = is_lottery

    def execute(self, game: Game) -> None:
        game.launch_ball()
        if self.is_lottery and game.is_game_started():
            game.cause_lottery()


class LaunchBallFlowProducer:
    """Draws, once per launch, whether the ball lands in the start hole."""

    def __init__(self, start_hole_probability: float, rng: RNGBase | None = None):
        validate_start_hole_probability(start_hole_probability)
        self.start_hole_probability = start_hole_probability
        self.rng = rng or ProductionRNG()

    def produce(self) -> LaunchBallFlow:
        return LaunchBallFlow(self.rng.random() < self.start_hole_probability)


class Terminate:
    """Sentinel that stops the dispatch loop itself (not just the session)."""

    def __repr__(self) -> str:
        return "TERMINATE"


TERMINATE = Terminate()

# String mnemonics accepted by the dispatch loop
COMMAND_MNEMONICS: dict[str, type[GameCommand]] = {
    "StartGame": StartGame,
    "LaunchBall": LaunchBall,
    "CauseLottery": CauseLottery,
    "FinishGame": FinishGame,
}

Command = GameCommand | Terminate | str
