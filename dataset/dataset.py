"""
dataset.py — Array Container & Generator
=========================================
The array the user sees before (and between) sort runs.  The engine
never touches a Dataset directly: it is handed `dataset.values` and
sorts its own copy.

Responsibilities:
  1. Random generation within the UI bounds     (generate_random)
  2. Import from text                           (from_text)
  3. Serialisation round-trip                   (to_dict / from_dict)

Bounds come from Config: length in [min_length, max_length],
values in value_range.  Out-of-range lengths are clamped on generation
and rejected on import.
"""

import random
import re
from typing import Any, Dict, List, Optional

from config import Config


_SEPARATORS = re.compile(r"[\s,;]+")


class Dataset:
    """
    Attributes:
        values : The integers, in display order.
    """

    def __init__(self, values: Optional[List[int]] = None):
        self.values: List[int] = list(values or [])

    # ==================================================================
    # SERIALISATION
    # ==================================================================
    def to_dict(self) -> Dict[str, Any]:
        return {"values": list(self.values)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Dataset":
        return cls(values=[int(v) for v in data.get("values", [])])

    # ==================================================================
    # GENERATORS — Factory class-methods
    # ==================================================================
    @classmethod
    def generate_random(
        cls,
        length: Optional[int] = None,
        low: Optional[int] = None,
        high: Optional[int] = None,
        seed: Optional[int] = None,
    ) -> "Dataset":
        """
        Uniform random integers in [low, high] (default Config.value_range).
        `length` is clamped to the configured bounds.
        """
        length = Config.clamp_length(Config.default_length if length is None else length)
        lo, hi = Config.value_range
        low  = lo if low is None else low
        high = hi if high is None else high
        if low > high:
            raise ValueError(f"low ({low}) must not exceed high ({high})")

        rng = random.Random(seed)
        return cls(values=[rng.randint(low, high) for _ in range(length)])

    @classmethod
    def from_text(cls, text: str, enforce_bounds: bool = True) -> "Dataset":
        """
        Parse integers separated by commas, semicolons or whitespace:

            "5, 3, 8, 1"     → [5, 3, 8, 1]
            "5 3\\n8;1"       → [5, 3, 8, 1]

        Raises ValueError on a non-integer token, or (with enforce_bounds)
        on a length outside [min_length, max_length].
        """
        values: List[int] = []
        for token in _SEPARATORS.split(text.strip()):
            if not token:
                continue
            try:
                values.append(int(token))
            except ValueError:
                raise ValueError(f"Not an integer: {token!r}") from None

        if enforce_bounds and not (Config.min_length <= len(values) <= Config.max_length):
            raise ValueError(
                f"Array must have between {Config.min_length} and {Config.max_length} "
                f"values, got {len(values)}"
            )
        return cls(values=values)

    # ==================================================================
    # UTILITY
    # ==================================================================
    def is_sorted(self) -> bool:
        return all(a <= b for a, b in zip(self.values, self.values[1:]))

    def __len__(self) -> int:
        return len(self.values)

    def __repr__(self) -> str:
        return f"Dataset({self.values!r})"
