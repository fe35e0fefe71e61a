"""
Game state transitions.

Pure functions over immutable states: no side effects, no randomness. Every
function handles each GameState variant explicitly; anything else is a
programming error and raises TypeError.
"""
from pachislo.errors import AlreadyStartedError, UninitializedError
from pachislo.logic.models import BallsConfig, GameState, Normal, Rush, Uninitialized


def _unknown_state(state: object) -> TypeError:
    return TypeError(f"Unknown state type: {type(state).__name__}")


def init(state: GameState, balls: BallsConfig) -> GameState:
    """Start a session: Uninitialized -> Normal(init_balls)."""
    if isinstance(state, Uninitialized):
        return Normal(balls=balls.init_balls)
    if isinstance(state, (Normal, Rush)):
        raise AlreadyStartedError()
    raise _unknown_state(state)


def launch_ball(state: GameState) -> GameState:
    """
    Spend one ball.

    Normal spends from balls and ends the session when they run out. Rush
    spends from the rush pool and falls back to Normal (balls kept) when the
    pool is empty.
    """
    if isinstance(state, Uninitialized):
        raise UninitializedError()
    if isinstance(state, Normal):
        balls = state.balls - 1
        if balls == 0:
            return Uninitialized()
        return Normal(balls=balls)
    if isinstance(state, Rush):
        rush_balls = state.rush_balls - 1
        if rush_balls == 0:
            return Normal(balls=state.balls)
        return Rush(balls=state.balls, rush_balls=rush_balls, n=state.n)
    raise _unknown_state(state)


def increment_balls(state: GameState, balls: BallsConfig) -> GameState:
    """Pay out incremental_balls without touching the rush pool or streak."""
    if isinstance(state, Uninitialized):
        raise UninitializedError("Cannot increment balls in uninitialized state.")
    if isinstance(state, Normal):
        return Normal(balls=state.balls + balls.incremental_balls)
    if isinstance(state, Rush):
        return Rush(
            balls=state.balls + balls.incremental_balls,
            rush_balls=state.rush_balls,
            n=state.n,
        )
    raise _unknown_state(state)


def trigger_rush(state: GameState, balls: BallsConfig) -> GameState:
    """Enter rush (n=1) from Normal, or extend it (n+1) from Rush."""
    if isinstance(state, Uninitialized):
        raise UninitializedError("Cannot trigger rush in uninitialized state.")
    if isinstance(state, Normal):
        return Rush(
            balls=state.balls + balls.incremental_balls,
            rush_balls=balls.incremental_rush,
            n=1,
        )
    if isinstance(state, Rush):
        return Rush(
            balls=state.balls + balls.incremental_balls,
            rush_balls=state.rush_balls + balls.incremental_rush,
            n=state.n + 1,
        )
    raise _unknown_state(state)


def is_started(state: GameState) -> bool:
    return not isinstance(state, Uninitialized)
