#!/usr/bin/env python3
"""
Console front end for the simulator.

Usage:
    python -m pachislo.cli
    python -m pachislo.cli --seed 42 --commands s l l l l l q

Keys: s = start, l (or empty line) = launch a ball, q = finish the game,
q! = quit.
"""
import argparse
import logging
import sys
from collections.abc import Iterable, Iterator

from pachislo.config import build_config, settings
from pachislo.errors import GameError
from pachislo.logic.commands import (
    TERMINATE,
    Command,
    FinishGame,
    LaunchBallFlowProducer,
    StartGame,
)
from pachislo.logic.game import Game, StepResult
from pachislo.logic.models import GameState, LotteryResult, Normal, Rush, SlotOutput, Transition
from pachislo.logic.rng import ProductionRNG, RNGBase, SeededRNG
from pachislo.validators import validate_setup


logger = logging.getLogger(__name__)


def _read_stdin() -> Iterator[str]:
    while True:
        try:
            yield input("> ")
        except EOFError:
            return


class ConsoleInput:
    """Maps console keys to commands; unknown keys are skipped."""

    def __init__(
        self,
        start_hole_probability: float,
        lines: Iterable[str] | None = None,
        rng: RNGBase | None = None,
    ):
        self.launch_flow_producer = LaunchBallFlowProducer(start_hole_probability, rng)
        self._lines = iter(lines) if lines is not None else _read_stdin()

    def next_command(self) -> Command:
        for line in self._lines:
            key = line.strip()
            if key == "s":
                return StartGame()
            if key in ("l", ""):
                return self.launch_flow_producer.produce()
            if key == "q":
                return FinishGame()
            if key == "q!":
                return TERMINATE
            logger.debug("Skipping unknown key %r", key)
        return TERMINATE


class ConsoleOutput:
    """Prints notifications and keeps every printed line."""

    def __init__(self, stream=None):
        self.stream = stream or sys.stdout
        self.logs: list[str] = []

    def log(self, message: str) -> None:
        self.logs.append(message)
        print(message, file=self.stream)

    def transition(self, transition: Transition) -> None:
        before, after = transition.before, transition.after
        if isinstance(before, Rush) and isinstance(after, Normal):
            self.log(f"RUSH finished!, Number of RUSH times: {before.n}")
        self.log(f"Current state: {after.model_dump_json()}")
        self.log("")

    def start_game(self, state: GameState) -> None:
        self.log("Game started!")
        self.log(f"Initial state: {state.model_dump_json()}")
        self.log("")

    def finish_game(self, state: GameState) -> None:
        self.log("Game finished!")
        self.log(f"Final state: {state.model_dump_json()}")

    def lottery_normal(self, result: LotteryResult, slot: SlotOutput) -> None:
        self._print_slot(slot)
        self.log(f"Lottery result: {result.model_dump_json()}")

    def lottery_into_rush(self, result: LotteryResult, slot: SlotOutput) -> None:
        self._print_slot(slot)
        self.log(f"Lottery result into rush: {result.model_dump_json()}")

    def lottery_rush(self, result: LotteryResult, slot: SlotOutput) -> None:
        self._print_slot(slot)
        self.log(f"Lottery result in rush mode: {result.model_dump_json()}")

    def lottery_rush_continue(self, result: LotteryResult, slot: SlotOutput) -> None:
        self._print_slot(slot)
        self.log(f"Lottery result in rush continue: {result.model_dump_json()}")

    def _print_slot(self, slot: SlotOutput) -> None:
        self.log(f"Slot: {slot.reel}")
        if slot.bonus_reel is not None:
            self.log(f"But: {slot.bonus_reel}")


def run_console(game: Game, output: ConsoleOutput) -> None:
    """
    Drive the game until the input terminates.

    The console has no reel animation, so the spinning flag is cleared as
    soon as each step completes. Game errors are reported and the loop goes
    on with the next command.
    """
    output.log("Welcome to Pachislo!")
    output.log("")
    while True:
        try:
            step = game.run_step()
        except GameError as e:
            output.log(f"Error: {e.message}")
            step = StepResult.CONTINUE
        game.set_slot_spinning(False)
        if step is StepResult.BREAK:
            break


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Pachislot game simulator")
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for reproducible runs (default: secure random source)",
    )
    parser.add_argument(
        "--commands",
        nargs="*",
        default=None,
        help="Scripted keys instead of reading stdin, e.g. s l l l q",
    )
    parser.add_argument(
        "--start-hole-probability",
        type=float,
        default=settings.start_hole_probability,
        help="Chance a launched ball spins the reels",
    )
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        help="Logging level",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    rng = SeededRNG(seed=args.seed) if args.seed is not None else ProductionRNG()
    output = ConsoleOutput()
    try:
        config = build_config()
        validate_setup(
            config,
            settings.reel_length,
            settings.reel_symbols,
            args.start_hole_probability,
        )
        game_input = ConsoleInput(args.start_hole_probability, args.commands, rng)
        game = Game(config, game_input, output, rng=rng)
    except GameError as e:
        print(e.message, file=sys.stderr)
        return 1

    run_console(game, output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
