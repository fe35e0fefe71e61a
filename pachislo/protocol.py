"""Request and response models for the HTTP bridge."""
from typing import Any

from pydantic import BaseModel, Field

from pachislo.config import settings
from pachislo.logic.models import Normal, Rush, Uninitialized


# === Request Models ===


class CommandRequest(BaseModel):
    """POST /command request body."""

    command: str = Field(
        ...,
        description="StartGame | LaunchBall | CauseLottery | FinishGame | LaunchBallFlow",
    )


# === Response Models ===


class Configuration(BaseModel):
    """Configuration object in /init response."""

    reelLength: int = settings.reel_length
    reelSymbols: list[int] = settings.reel_symbols
    startHoleProbability: float = settings.start_hole_probability
    initBalls: int = settings.init_balls
    incrementalBalls: int = settings.incremental_balls
    incrementalRush: int = settings.incremental_rush
    intoRushEnabled: bool = settings.enable_into_rush
    configHash: str


class InitResponse(BaseModel):
    """GET /init response."""

    protocolVersion: str = settings.protocol_version
    configuration: Configuration
    state: Uninitialized | Normal | Rush = Field(discriminator="type")
    spinning: bool = False


class CommandResponse(BaseModel):
    """POST /command and POST /spin/complete response."""

    protocolVersion: str = settings.protocol_version
    state: Uninitialized | Normal | Rush = Field(discriminator="type")
    spinning: bool = False
    events: list[dict[str, Any]] = Field(default_factory=list)
