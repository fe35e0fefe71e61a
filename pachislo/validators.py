"""Configuration validators; every failure is collected into one ConfigError."""
from pachislo.errors import ConfigError
from pachislo.logic.models import BallsConfig, Config, Probability, SlotProbability


def _in_unit_range(value: float) -> bool:
    return 0.0 <= value <= 1.0


def check_balls(balls: BallsConfig) -> list[str]:
    """Return validation messages for the balls economy."""
    errors: list[str] = []
    if balls.init_balls < 1:
        errors.append("initial balls must be greater than 0")
    if balls.incremental_balls < 0:
        errors.append("incremental balls must not be negative")
    if balls.incremental_rush < 1:
        errors.append("incremental rush balls must be greater than 0")
    return errors


def check_slot_probability(probability: SlotProbability, name: str) -> list[str]:
    """Return validation messages for one probability triple."""
    errors: list[str] = []
    if not _in_unit_range(probability.win):
        errors.append(f"{name}: win probability must be between 0.0 and 1.0")
    if not _in_unit_range(probability.fake_win):
        errors.append(f"{name}: fake_win probability must be between 0.0 and 1.0")
    if not _in_unit_range(probability.fake_lose):
        errors.append(f"{name}: fake_lose probability must be between 0.0 and 1.0")
    return errors


def check_probability(probability: Probability) -> list[str]:
    """Return validation messages for every configured draw."""
    errors: list[str] = []
    errors.extend(check_slot_probability(probability.normal, "normal"))
    errors.extend(check_slot_probability(probability.rush, "rush"))
    errors.extend(check_slot_probability(probability.rush_continue, "rush_continue"))
    if probability.into_rush is not None:
        errors.extend(check_slot_probability(probability.into_rush, "into_rush"))
    return errors


def check_start_hole_probability(value: float) -> list[str]:
    """Return validation messages for the start-hole probability."""
    if not _in_unit_range(value):
        return ["start_hole_probability must be between 0.0 and 1.0"]
    return []


def check_reels(length: int, symbols: list[int]) -> list[str]:
    """
    Return validation messages for the reel geometry.

    A losing reel splits its positions between two disjoint symbol groups,
    so both the length and the number of distinct symbols must be at least 2.
    """
    errors: list[str] = []
    if length < 2:
        errors.append("reel length must be at least 2")
    if len(set(symbols)) < 2:
        errors.append("choices must have at least two distinct symbols")
    if len(set(symbols)) != len(symbols):
        errors.append("choices must not contain duplicate symbols")
    return errors


def validate_config(config: Config) -> None:
    """
    Validate a whole Config.

    Raises ConfigError listing every problem found.
    """
    errors = check_balls(config.balls) + check_probability(config.probability)
    if errors:
        raise ConfigError(errors)


def validate_setup(
    config: Config,
    reel_length: int | None = None,
    reel_symbols: list[int] | None = None,
    start_hole_probability: float | None = None,
) -> None:
    """
    Validate a config together with the reel and start-hole settings.

    Parts passed as None are skipped. Raises one ConfigError listing every
    problem found across all of them.
    """
    errors = check_balls(config.balls) + check_probability(config.probability)
    if reel_length is not None and reel_symbols is not None:
        errors.extend(check_reels(reel_length, reel_symbols))
    if start_hole_probability is not None:
        errors.extend(check_start_hole_probability(start_hole_probability))
    if errors:
        raise ConfigError(errors)


def validate_start_hole_probability(value: float) -> None:
    """Raises ConfigError if the start-hole probability is outside [0, 1]."""
    errors = check_start_hole_probability(value)
    if errors:
        raise ConfigError(errors)


def validate_reels(length: int, symbols: list[int]) -> None:
    """Raises ConfigError if the reel geometry is unusable."""
    errors = check_reels(length, symbols)
    if errors:
        raise ConfigError(errors)
