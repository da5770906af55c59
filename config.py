# config.py

import json
import logging
import os
from typing import Any, Dict, Optional, Tuple

logger = logging.getLogger(__name__)

ENV_VAR = "SORT_VISUALIZER_CONFIG"


class Config:
    """Global configuration, optionally overridden from a JSON file.

    Attributes
    ----------
    min_length, max_length:
        Bounds for the array size control (the engine itself accepts any
        length).
    default_length:
        Array size shown on first load.
    value_range:
        Inclusive ``(low, high)`` range for randomly generated values.
    default_algorithm:
        Registry key selected on first load.
    default_view:
        ``"bar"`` or ``"circle"``.  Purely presentational.
    default_speed:
        Name of a ``SPEED_PRESETS`` entry used for browser playback.
    delay_scale:
        Multiplier applied by :class:`engine.SortEngine` to every frame's
        delay when pacing a live stream.  ``0`` disables waiting.
    log_level:
        Level passed to ``logging.basicConfig`` when the app runs as a
        script.
    secret_key:
        Flask session key.  A random key is generated when unset.
    max_stored_runs:
        How many recorded runs the web app keeps in memory.  The least
        recently used run is evicted first.
    """

    min_length: int = 5
    max_length: int = 30
    default_length: int = 10
    value_range: Tuple[int, int] = (1, 100)
    default_algorithm: str = "bubble"
    default_view: str = "circle"
    default_speed: str = "medium"
    delay_scale: float = 1.0
    log_level: str = "INFO"
    secret_key: Optional[str] = None
    max_stored_runs: int = 64

    _KEYS = (
        "min_length",
        "max_length",
        "default_length",
        "value_range",
        "default_algorithm",
        "default_view",
        "default_speed",
        "delay_scale",
        "log_level",
        "secret_key",
        "max_stored_runs",
    )

    @classmethod
    def load_from_file(cls, path: str) -> Dict[str, Any]:
        """Merge known keys from the JSON file at ``path`` into the class.

        Unknown keys are ignored with a warning.  Returns the applied
        values.
        """
        with open(path, "r", encoding="utf-8") as fh:
            data = json.load(fh)
        if not isinstance(data, dict):
            raise ValueError(f"{path}: expected a JSON object, got {type(data).__name__}")

        applied: Dict[str, Any] = {}
        for key, value in data.items():
            if key not in cls._KEYS:
                logger.warning("Ignoring unknown config key %r in %s", key, path)
                continue
            if key == "value_range":
                value = tuple(value)
            setattr(cls, key, value)
            applied[key] = value

        if cls.min_length > cls.max_length:
            raise ValueError(
                f"min_length ({cls.min_length}) is greater than max_length ({cls.max_length})"
            )
        logger.info("Loaded configuration from %s: %s", path, sorted(applied))
        return applied

    @classmethod
    def load_from_env(cls) -> Optional[Dict[str, Any]]:
        """Load the file named by ``$SORT_VISUALIZER_CONFIG`` if it is set."""
        path = os.environ.get(ENV_VAR)
        if not path:
            return None
        return cls.load_from_file(path)

    @classmethod
    def clamp_length(cls, length: int) -> int:
        return max(cls.min_length, min(cls.max_length, int(length)))
