"""Game orchestrator: command dispatch, lottery resolution and notifications."""
import logging
from enum import Enum

from pachislo.config import settings
from pachislo.errors import InvalidCommandError, ProbabilityError, SlotSpinningError, UninitializedError
from pachislo.interface import GameInput, GameOutput, LoggingGameOutput
from pachislo.logic import state as transitions
from pachislo.logic.commands import COMMAND_MNEMONICS, Command, GameCommand, Terminate
from pachislo.logic.lottery import Lottery
from pachislo.logic.models import Config, GameState, Rush, Transition, Uninitialized
from pachislo.logic.rng import ProductionRNG, RNGBase
from pachislo.logic.slot import SlotProducer
from pachislo.validators import validate_config, validate_setup


logger = logging.getLogger(__name__)


class StepResult(str, Enum):
    """Outcome of one dispatch step."""

    CONTINUE = "continue"
    BREAK = "break"


class Game:
    """
    Owns the session state and drives the command loop.

    Implements:
    - Command normalization and dispatch
    - Ball launches guarded by the slot spinning flag
    - Lottery resolution (normal, into rush, rush, rush continuation)
    - Transition and lottery notifications to the output

    The spinning flag is set when a lottery starts and is never cleared
    here: the presentation layer calls set_slot_spinning(False) once the
    reels have stopped. Without an explicit output, notifications are logged.
    """

    def __init__(
        self,
        config: Config,
        game_input: GameInput,
        game_output: GameOutput | None = None,
        rng: RNGBase | None = None,
        slot_producer: SlotProducer | None = None,
    ):
        if slot_producer is None:
            validate_setup(config, settings.reel_length, settings.reel_symbols)
        else:
            validate_config(config)
        self.config = config
        self.rng = rng or ProductionRNG()
        self.lottery = Lottery(config.probability, self.rng)
        self.slot_producer = slot_producer or SlotProducer(
            settings.reel_length, settings.reel_symbols, self.rng
        )
        self._input = game_input
        self._output = game_output if game_output is not None else LoggingGameOutput()
        self._state: GameState = Uninitialized()
        self._slot_spinning = False
        # True until the first notification of a session has been sent
        self._fresh_session = True

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def output(self) -> GameOutput:
        return self._output

    def is_game_started(self) -> bool:
        return transitions.is_started(self._state)

    def set_slot_spinning(self, spinning: bool) -> None:
        previous = self._slot_spinning
        self._slot_spinning = spinning
        logger.debug("Slot spinning state changed: %s -> %s", previous, spinning)

    def is_slot_spinning(self) -> bool:
        return self._slot_spinning

    # === Dispatch loop ===

    def run(self) -> None:
        """Run steps until the terminate sentinel is received."""
        while self.run_step() is not StepResult.BREAK:
            pass

    def run_step(self) -> StepResult:
        """Pull one command from the input and execute it."""
        return self.run_step_with_command(self._input.next_command())

    def run_step_with_command(self, command: Command | None) -> StepResult:
        """
        Execute one externally supplied command.

        None is a no-op, the terminate sentinel stops the loop, anything
        else is executed and followed by a transition notification.
        """
        if command is None:
            return StepResult.CONTINUE
        if isinstance(command, Terminate):
            return StepResult.BREAK

        game_command = self._normalize(command)
        before = None if self._fresh_session else self._state
        game_command.execute(self)
        self._output.transition(Transition(before=before, after=self._state))
        self._fresh_session = not self.is_game_started()
        return StepResult.CONTINUE

    def _normalize(self, command: Command) -> GameCommand:
        if isinstance(command, GameCommand):
            return command
        if isinstance(command, str) and command in COMMAND_MNEMONICS:
            return COMMAND_MNEMONICS[command]()
        raise InvalidCommandError(command)

    # === Commands ===

    def start(self) -> None:
        self._state = transitions.init(self._state, self.config.balls)
        self._output.start_game(self._state)

    def finish(self) -> None:
        if not self.is_game_started():
            raise UninitializedError()
        self._output.finish_game(self._state)
        self._state = Uninitialized()

    def launch_ball(self) -> None:
        # Uninitialized is rejected by the transition itself
        if self._slot_spinning:
            logger.info("Attempted to launch ball while slot is spinning - blocking action")
            raise SlotSpinningError()
        self._state = transitions.launch_ball(self._state)

    def cause_lottery(self) -> None:
        """
        Spin the reels and resolve the draw.

        A lose leaves the state alone. A win outside rush enters rush; a win
        inside rush draws for continuation, extending the streak on a win
        and paying out balls on a lose.
        """
        if not self.is_game_started():
            raise UninitializedError()
        self.set_slot_spinning(True)

        if isinstance(self._state, Rush):
            result = self.lottery.lottery_rush()
            self._output.lottery_rush(result, self.slot_producer.produce(result))
        else:
            result = self.lottery.lottery_normal()
            self._output.lottery_normal(result, self.slot_producer.produce(result))

        if not result.is_win:
            return

        if not isinstance(self._state, Rush):
            self._enter_rush()
            return

        try:
            continue_result = self.lottery.lottery_rush_continue(self._state.n)
        except ProbabilityError as e:
            logger.warning("Skipping rush continuation draw: %s", e.message)
            return

        self._output.lottery_rush_continue(
            continue_result, self.slot_producer.produce(continue_result)
        )
        if continue_result.is_win:
            self._state = transitions.trigger_rush(self._state, self.config.balls)
        else:
            self._state = transitions.increment_balls(self._state, self.config.balls)

    def _enter_rush(self) -> None:
        if self.config.probability.into_rush is None:
            self._state = transitions.trigger_rush(self._state, self.config.balls)
            return

        result = self.lottery.lottery_into_rush()
        self._output.lottery_into_rush(result, self.slot_producer.produce(result))
        if result.is_win:
            self._state = transitions.trigger_rush(self._state, self.config.balls)
        else:
            self._state = transitions.increment_balls(self._state, self.config.balls)
