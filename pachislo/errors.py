"""Error codes and exceptions for the pachislo engine and its HTTP bridge."""
from enum import Enum

from fastapi.responses import JSONResponse
from pydantic import BaseModel

from pachislo.config import settings


class ErrorCode(str, Enum):
    """Error codes raised by the engine."""

    CONFIG_INVALID = "CONFIG_INVALID"
    UNINITIALIZED = "UNINITIALIZED"
    ALREADY_STARTED = "ALREADY_STARTED"
    PROBABILITY_OUT_OF_RANGE = "PROBABILITY_OUT_OF_RANGE"
    INVALID_COMMAND = "INVALID_COMMAND"
    SLOT_SPINNING = "SLOT_SPINNING"
    INVALID_REQUEST = "INVALID_REQUEST"
    INTERNAL_ERROR = "INTERNAL_ERROR"


ERROR_HTTP_STATUS: dict[ErrorCode, int] = {
    ErrorCode.CONFIG_INVALID: 500,
    ErrorCode.UNINITIALIZED: 409,
    ErrorCode.ALREADY_STARTED: 409,
    ErrorCode.PROBABILITY_OUT_OF_RANGE: 500,
    ErrorCode.INVALID_COMMAND: 400,
    ErrorCode.SLOT_SPINNING: 409,
    ErrorCode.INVALID_REQUEST: 400,
    ErrorCode.INTERNAL_ERROR: 500,
}

# Recoverable means the client can retry after changing session state
# (start a game, wait for the reels to stop).
ERROR_RECOVERABLE: dict[ErrorCode, bool] = {
    ErrorCode.CONFIG_INVALID: False,
    ErrorCode.UNINITIALIZED: True,
    ErrorCode.ALREADY_STARTED: True,
    ErrorCode.PROBABILITY_OUT_OF_RANGE: False,
    ErrorCode.INVALID_COMMAND: False,
    ErrorCode.SLOT_SPINNING: True,
    ErrorCode.INVALID_REQUEST: False,
    ErrorCode.INTERNAL_ERROR: True,
}


class ErrorBody(BaseModel):
    """Error body shape returned by the HTTP bridge."""

    code: str
    message: str
    recoverable: bool


class ErrorResponse(BaseModel):
    """Full error response returned by the HTTP bridge."""

    protocolVersion: str = settings.protocol_version
    error: ErrorBody


class GameError(Exception):
    """Base game error that maps to a protocol error response."""

    def __init__(self, code: ErrorCode, message: str | None = None):
        self.code = code
        self.message = message or f"Error: {code.value}"
        self.status_code = ERROR_HTTP_STATUS[code]
        self.recoverable = ERROR_RECOVERABLE[code]
        super().__init__(self.message)

    def to_response(self) -> JSONResponse:
        """Convert to JSONResponse."""
        return JSONResponse(
            status_code=self.status_code,
            content=ErrorResponse(
                error=ErrorBody(
                    code=self.code.value,
                    message=self.message,
                    recoverable=self.recoverable,
                )
            ).model_dump(),
        )


class ConfigError(GameError):
    """
    Aggregated configuration validation failure.

    Every problem found is kept in ``errors`` so the caller sees the whole
    batch at once instead of fixing one parameter per run.
    """

    def __init__(self, errors: list[str] | None = None):
        self.errors = list(errors or [])
        super().__init__(
            ErrorCode.CONFIG_INVALID,
            "ConfigError: " + "\n".join(self.errors),
        )


class UninitializedError(GameError):
    """Operation requires an active session but none exists."""

    def __init__(self, message: str = "Game has not been started."):
        super().__init__(ErrorCode.UNINITIALIZED, message)


class AlreadyStartedError(GameError):
    """Start requested while a session is already active."""

    def __init__(self):
        super().__init__(ErrorCode.ALREADY_STARTED, "Game has already been started.")


class ProbabilityError(GameError):
    """Computed rush-continuation probability is outside [0.0, 1.0]."""

    def __init__(self, value: float):
        self.value = value
        super().__init__(
            ErrorCode.PROBABILITY_OUT_OF_RANGE,
            f"Invalid probability value {value}. "
            "rush_continue_fn must keep the continuation probability "
            "within [0.0, 1.0].",
        )


class InvalidCommandError(GameError):
    """Unrecognized command token."""

    def __init__(self, command: object):
        self.command = command
        super().__init__(ErrorCode.INVALID_COMMAND, f"Unknown command: {command!r}")


class SlotSpinningError(GameError):
    """A ball was launched before the current spin resolved."""

    def __init__(self):
        super().__init__(
            ErrorCode.SLOT_SPINNING,
            "Cannot launch ball while slot is spinning.",
        )
