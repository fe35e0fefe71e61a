"""Configuration, game state and lottery models."""
from collections.abc import Callable
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


# === Configuration ===


class BallsConfig(BaseModel):
    """Balls economy: starting stake and per-win payouts."""

    model_config = ConfigDict(frozen=True)

    init_balls: int
    incremental_balls: int
    incremental_rush: int


class SlotProbability(BaseModel):
    """Win / fake win / fake lose probabilities for one kind of draw."""

    model_config = ConfigDict(frozen=True)

    win: float
    fake_win: float
    fake_lose: float


class Probability(BaseModel):
    """
    All lottery probabilities.

    rush_continue_fn maps the current rush streak n (>= 1) to a multiplier
    applied to rush_continue.win. into_rush is optional: when set, a normal
    win goes through one more draw before rush is entered.
    """

    model_config = ConfigDict(frozen=True)

    normal: SlotProbability
    rush: SlotProbability
    rush_continue: SlotProbability
    rush_continue_fn: Callable[[int], float]
    into_rush: SlotProbability | None = None


class Config(BaseModel):
    """Complete game configuration, validated as a unit by the Game."""

    model_config = ConfigDict(frozen=True)

    balls: BallsConfig
    probability: Probability


# === Game state ===


class Uninitialized(BaseModel):
    """No active session."""

    model_config = ConfigDict(frozen=True)

    type: Literal["Uninitialized"] = "Uninitialized"


class Normal(BaseModel):
    """Regular play."""

    model_config = ConfigDict(frozen=True)

    type: Literal["Normal"] = "Normal"
    balls: int = Field(ge=1)


class Rush(BaseModel):
    """
    Bonus mode.

    rush_balls is the bonus pool consumed by launches during rush; n is the
    1-based count of rush entries/continuations won in this streak.
    """

    model_config = ConfigDict(frozen=True)

    type: Literal["Rush"] = "Rush"
    balls: int = Field(ge=1)
    rush_balls: int = Field(ge=1)
    n: int = Field(ge=1)


GameState = Uninitialized | Normal | Rush


class Transition(BaseModel):
    """State pair emitted after every executed command."""

    model_config = ConfigDict(frozen=True)

    before: Uninitialized | Normal | Rush | None
    after: Uninitialized | Normal | Rush


# === Lottery ===


class Win(str, Enum):
    """Presentation of a winning draw."""

    DEFAULT = "Default"
    FAKE_WIN = "FakeWin"


class Lose(str, Enum):
    """Presentation of a losing draw."""

    DEFAULT = "Default"
    FAKE_LOSE = "FakeLose"


class WinResult(BaseModel):
    """Winning draw; FAKE_WIN shows a near miss before revealing the win."""

    model_config = ConfigDict(frozen=True)

    type: Literal["Win"] = "Win"
    kind: Win = Win.DEFAULT

    @property
    def is_win(self) -> bool:
        return True


class LoseResult(BaseModel):
    """Losing draw; FAKE_LOSE shows a near miss with no follow-up."""

    model_config = ConfigDict(frozen=True)

    type: Literal["Lose"] = "Lose"
    kind: Lose = Lose.DEFAULT

    @property
    def is_win(self) -> bool:
        return False


LotteryResult = WinResult | LoseResult


class SlotOutput(BaseModel):
    """Rendered reels for one draw; bonus_reel is only set for a fake win."""

    model_config = ConfigDict(frozen=True)

    reel: list[int] = Field(default_factory=list)
    bonus_reel: list[int] | None = None
