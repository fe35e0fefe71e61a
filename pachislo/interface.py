"""Input and output collaborators of the Game orchestrator."""
import logging
from collections import deque
from typing import Any, Protocol

from pachislo.logic.commands import Command
from pachislo.logic.models import GameState, LotteryResult, SlotOutput, Transition


logger = logging.getLogger(__name__)


class GameInput(Protocol):
    """Supplies the next command, or None when nothing is pending."""

    def next_command(self) -> Command | None:
        ...


class GameOutput(Protocol):
    """Receives state and lottery notifications from the Game."""

    def transition(self, transition: Transition) -> None:
        """Called once after every executed command."""
        ...

    def start_game(self, state: GameState) -> None:
        ...

    def finish_game(self, state: GameState) -> None:
        ...

    def lottery_normal(self, result: LotteryResult, slot: SlotOutput) -> None:
        ...

    def lottery_into_rush(self, result: LotteryResult, slot: SlotOutput) -> None:
        ...

    def lottery_rush(self, result: LotteryResult, slot: SlotOutput) -> None:
        ...

    def lottery_rush_continue(self, result: LotteryResult, slot: SlotOutput) -> None:
        ...


class ScriptedInput:
    """Queue-backed input; returns None once drained."""

    def __init__(self, commands: list[Command] | None = None):
        self._commands: deque[Command] = deque(commands or [])

    def add_command(self, command: Command) -> None:
        self._commands.append(command)

    def next_command(self) -> Command | None:
        if self._commands:
            return self._commands.popleft()
        return None

    def reset(self) -> None:
        self._commands.clear()

    def __len__(self) -> int:
        return len(self._commands)


class BufferedGameOutput:
    """Collects notifications as event dicts until drained."""

    def __init__(self):
        self._events: list[dict[str, Any]] = []

    def _lottery(self, event_type: str, result: LotteryResult, slot: SlotOutput) -> None:
        self._events.append({
            "type": event_type,
            "result": result.model_dump(mode="json"),
            "slot": slot.model_dump(mode="json"),
        })

    def transition(self, transition: Transition) -> None:
        self._events.append({"type": "transition", **transition.model_dump(mode="json")})

    def start_game(self, state: GameState) -> None:
        self._events.append({"type": "startGame", "state": state.model_dump(mode="json")})

    def finish_game(self, state: GameState) -> None:
        self._events.append({"type": "finishGame", "state": state.model_dump(mode="json")})

    def lottery_normal(self, result: LotteryResult, slot: SlotOutput) -> None:
        self._lottery("lotteryNormal", result, slot)

    def lottery_into_rush(self, result: LotteryResult, slot: SlotOutput) -> None:
        self._lottery("lotteryIntoRush", result, slot)

    def lottery_rush(self, result: LotteryResult, slot: SlotOutput) -> None:
        self._lottery("lotteryRush", result, slot)

    def lottery_rush_continue(self, result: LotteryResult, slot: SlotOutput) -> None:
        self._lottery("lotteryRushContinue", result, slot)

    def drain(self) -> list[dict[str, Any]]:
        """Return collected events in emission order and clear the buffer."""
        events, self._events = self._events, []
        return events


class LoggingGameOutput:
    """Logs every notification; the Game falls back to it when given no output."""

    def transition(self, transition: Transition) -> None:
        logger.info("TRANSITION %s -> %s", transition.before, transition.after)

    def start_game(self, state: GameState) -> None:
        logger.info("GAME STARTED: %s", state)

    def finish_game(self, state: GameState) -> None:
        logger.info("GAME FINISHED: %s", state)

    def lottery_normal(self, result: LotteryResult, slot: SlotOutput) -> None:
        logger.info("LOTTERY normal: %s %s", result, slot)

    def lottery_into_rush(self, result: LotteryResult, slot: SlotOutput) -> None:
        logger.info("LOTTERY into_rush: %s %s", result, slot)

    def lottery_rush(self, result: LotteryResult, slot: SlotOutput) -> None:
        logger.info("LOTTERY rush: %s %s", result, slot)

    def lottery_rush_continue(self, result: LotteryResult, slot: SlotOutput) -> None:
        logger.info("LOTTERY rush_continue: %s %s", result, slot)
