"""Config hash computation for reproducible simulations.

This module provides a shared config_hash function used by:
- scripts/simulate.py (CSV report)
- the HTTP bridge /init response

The hash MUST be computed identically in both locations.
"""
import hashlib
import json

from pachislo.config import Settings, settings


def get_config_hash(source: Settings | None = None) -> str:
    """
    Generate hash of the game-relevant settings.

    Returns 16-char hex hash of the config snapshot. Logging and protocol
    fields are excluded since they do not change game outcomes.
    """
    source = source or settings
    config_snapshot = source.model_dump(exclude={"debug", "log_level", "protocol_version"})
    canonical = json.dumps(config_snapshot, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(canonical.encode()).hexdigest()[:16]
