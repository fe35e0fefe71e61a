"""Pytest fixtures and test doubles for the simulator tests."""
from collections import deque
from collections.abc import Callable
from typing import Any, Generator

import pytest
from fastapi.testclient import TestClient

from pachislo.config import geometric_decay
from pachislo.logic.models import (
    BallsConfig,
    Config,
    GameState,
    LotteryResult,
    Probability,
    SlotOutput,
    SlotProbability,
    Transition,
)
from pachislo.logic.rng import RNGBase, SeededRNG


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (large statistical samples)"
    )


class ScriptedRNG(RNGBase):
    """RNG that replays fixed values; fails loudly when it runs dry."""

    def __init__(self, values: list[float], randints: list[int] | None = None):
        self._values = deque(values)
        self._randints = deque(randints or [])

    def random(self) -> float:
        if not self._values:
            raise AssertionError("ScriptedRNG ran out of random() values")
        return self._values.popleft()

    def randint(self, a: int, b: int) -> int:
        if not self._randints:
            raise AssertionError("ScriptedRNG ran out of randint() values")
        value = self._randints.popleft()
        assert a <= value <= b, f"scripted randint {value} outside [{a}, {b}]"
        return value


class RecordingOutput:
    """Game output that records every notification in order."""

    def __init__(self):
        self.calls: list[tuple[str, tuple[Any, ...]]] = []

    def transition(self, transition: Transition) -> None:
        self.calls.append(("transition", (transition,)))

    def start_game(self, state: GameState) -> None:
        self.calls.append(("start_game", (state,)))

    def finish_game(self, state: GameState) -> None:
        self.calls.append(("finish_game", (state,)))

    def lottery_normal(self, result: LotteryResult, slot: SlotOutput) -> None:
        self.calls.append(("lottery_normal", (result, slot)))

    def lottery_into_rush(self, result: LotteryResult, slot: SlotOutput) -> None:
        self.calls.append(("lottery_into_rush", (result, slot)))

    def lottery_rush(self, result: LotteryResult, slot: SlotOutput) -> None:
        self.calls.append(("lottery_rush", (result, slot)))

    def lottery_rush_continue(self, result: LotteryResult, slot: SlotOutput) -> None:
        self.calls.append(("lottery_rush_continue", (result, slot)))

    def names(self) -> list[str]:
        return [name for name, _ in self.calls]

    def of(self, name: str) -> list[tuple[Any, ...]]:
        return [args for call_name, args in self.calls if call_name == name]

    def transitions(self) -> list[Transition]:
        return [args[0] for args in self.of("transition")]


def make_config(
    balls: tuple[int, int, int] = (1000, 15, 300),
    normal: tuple[float, float, float] = (0.16, 0.3, 0.15),
    rush: tuple[float, float, float] = (0.48, 0.2, 0.05),
    rush_continue: tuple[float, float, float] = (0.8, 0.25, 0.1),
    rush_continue_fn: Callable[[int], float] | None = None,
    into_rush: tuple[float, float, float] | None = None,
) -> Config:
    """Build a Config from plain tuples; defaults match the example config."""

    def triple(values: tuple[float, float, float]) -> SlotProbability:
        return SlotProbability(win=values[0], fake_win=values[1], fake_lose=values[2])

    return Config(
        balls=BallsConfig(
            init_balls=balls[0],
            incremental_balls=balls[1],
            incremental_rush=balls[2],
        ),
        probability=Probability(
            normal=triple(normal),
            rush=triple(rush),
            rush_continue=triple(rush_continue),
            rush_continue_fn=rush_continue_fn or (lambda n: geometric_decay(0.6, n)),
            into_rush=triple(into_rush) if into_rush is not None else None,
        ),
    )


@pytest.fixture
def recording_output() -> RecordingOutput:
    """Fresh recording output for each test."""
    return RecordingOutput()


@pytest.fixture
def seeded_rng() -> SeededRNG:
    return SeededRNG(seed=20250101)


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    """TestClient over a freshly reset, seeded HTTP session."""
    from pachislo.main import app, session

    session.reset(SeededRNG(seed=7))
    with TestClient(app) as test_client:
        yield test_client
    session.reset()
