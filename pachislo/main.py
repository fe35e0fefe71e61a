"""Pachislo HTTP bridge: one in-process game session driven by a browser UI."""
from fastapi import FastAPI

from pachislo.config import build_config, settings
from pachislo.config_hash import get_config_hash
from pachislo.interface import BufferedGameOutput, ScriptedInput
from pachislo.logic.commands import LaunchBallFlowProducer
from pachislo.logic.game import Game
from pachislo.logic.rng import ProductionRNG, RNGBase
from pachislo.middleware import ErrorHandlerMiddleware
from pachislo.protocol import CommandRequest, CommandResponse, Configuration, InitResponse
from pachislo.validators import validate_setup


class GameSession:
    """
    The single game driven over HTTP.

    The UI plays the reel animation and reports back through
    /spin/complete, which clears the spinning flag.
    """

    def __init__(self, rng: RNGBase | None = None):
        self.reset(rng)

    def reset(self, rng: RNGBase | None = None) -> None:
        """Replace the game with a fresh, unstarted one."""
        self.rng = rng or ProductionRNG()
        self.output = BufferedGameOutput()
        config = build_config()
        validate_setup(
            config,
            settings.reel_length,
            settings.reel_symbols,
            settings.start_hole_probability,
        )
        self.game = Game(config, ScriptedInput(), self.output, rng=self.rng)
        self.launch_flow_producer = LaunchBallFlowProducer(
            settings.start_hole_probability, self.rng
        )

    def snapshot(self) -> CommandResponse:
        return CommandResponse(
            state=self.game.state,
            spinning=self.game.is_slot_spinning(),
            events=self.output.drain(),
        )


app = FastAPI(
    title="Pachislo",
    version="0.1.0",
    description="HTTP bridge for the pachislot game simulator",
)

app.add_middleware(ErrorHandlerMiddleware)

session = GameSession()


@app.get("/health")
async def health() -> dict:
    """Health check endpoint."""
    return {"status": "ok"}


@app.get("/init")
async def init() -> dict:
    """Return configuration and the current session state."""
    response = InitResponse(
        configuration=Configuration(configHash=get_config_hash()),
        state=session.game.state,
        spinning=session.game.is_slot_spinning(),
    )
    return response.model_dump()


@app.post("/command")
async def command(body: CommandRequest) -> dict:
    """
    Execute one command against the session.

    Returns the resulting state, the spinning flag and every notification
    the command produced, in emission order.
    """
    # Discard notifications left over from a command that failed midway
    session.output.drain()

    if body.command == "LaunchBallFlow":
        session.game.run_step_with_command(session.launch_flow_producer.produce())
    else:
        session.game.run_step_with_command(body.command)

    return session.snapshot().model_dump()


@app.post("/spin/complete")
async def spin_complete() -> dict:
    """Reel animation finished: allow the next launch."""
    session.game.set_slot_spinning(False)
    return session.snapshot().model_dump()
