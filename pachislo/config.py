"""Application configuration derived from the environment."""
from functools import partial

from pydantic import ConfigDict
from pydantic_settings import BaseSettings

from pachislo.logic.models import BallsConfig, Config, Probability, SlotProbability


START_HOLE_PROBABILITY_EXAMPLE = 0.12


class Settings(BaseSettings):
    """Simulator settings; every field can be overridden with PACHISLO_<NAME>."""

    model_config = ConfigDict(env_prefix="PACHISLO_")

    debug: bool = False
    log_level: str = "INFO"

    # HTTP bridge
    protocol_version: str = "1.0"

    # Reels
    reel_length: int = 3
    reel_symbols: list[int] = [1, 2, 3, 4, 5, 6, 7, 8, 9]

    # Chance that a launched ball lands in the start hole and spins the reels
    start_hole_probability: float = START_HOLE_PROBABILITY_EXAMPLE

    # Balls economy
    init_balls: int = 1000
    incremental_balls: int = 15
    incremental_rush: int = 300

    # Lottery probabilities (win, fake win, fake lose)
    normal_win: float = 0.16
    normal_fake_win: float = 0.3
    normal_fake_lose: float = 0.15
    rush_win: float = 0.48
    rush_fake_win: float = 0.2
    rush_fake_lose: float = 0.05
    rush_continue_win: float = 0.8
    rush_continue_fake_win: float = 0.25
    rush_continue_fake_lose: float = 0.1
    rush_continue_decay: float = 0.6

    # Extra draw between a normal win and entering rush
    enable_into_rush: bool = False
    into_rush_win: float = 0.48
    into_rush_fake_win: float = 0.2
    into_rush_fake_lose: float = 0.05


def geometric_decay(base: float, n: int) -> float:
    """Continuation multiplier ``base ** (n - 1)`` for streak ``n``."""
    return base ** (n - 1)


def build_config(source: Settings | None = None) -> Config:
    """Build a game Config from settings (defaults to the process settings)."""
    source = source or settings
    into_rush = None
    if source.enable_into_rush:
        into_rush = SlotProbability(
            win=source.into_rush_win,
            fake_win=source.into_rush_fake_win,
            fake_lose=source.into_rush_fake_lose,
        )
    return Config(
        balls=BallsConfig(
            init_balls=source.init_balls,
            incremental_balls=source.incremental_balls,
            incremental_rush=source.incremental_rush,
        ),
        probability=Probability(
            normal=SlotProbability(
                win=source.normal_win,
                fake_win=source.normal_fake_win,
                fake_lose=source.normal_fake_lose,
            ),
            rush=SlotProbability(
                win=source.rush_win,
                fake_win=source.rush_fake_win,
                fake_lose=source.rush_fake_lose,
            ),
            rush_continue=SlotProbability(
                win=source.rush_continue_win,
                fake_win=source.rush_continue_fake_win,
                fake_lose=source.rush_continue_fake_lose,
            ),
            rush_continue_fn=partial(geometric_decay, source.rush_continue_decay),
            into_rush=into_rush,
        ),
    )


def example_config() -> Config:
    """Reference configuration; a fresh instance on every call."""
    return Config(
        balls=BallsConfig(init_balls=1000, incremental_balls=15, incremental_rush=300),
        probability=Probability(
            normal=SlotProbability(win=0.16, fake_win=0.3, fake_lose=0.15),
            rush=SlotProbability(win=0.48, fake_win=0.2, fake_lose=0.05),
            rush_continue=SlotProbability(win=0.8, fake_win=0.25, fake_lose=0.1),
            rush_continue_fn=partial(geometric_decay, 0.6),
        ),
    )


settings = Settings()
