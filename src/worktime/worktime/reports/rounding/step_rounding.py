from __future__ import annotations

from .base import RoundingPolicy


class StepRounding(RoundingPolicy):
    """Nearest multiple of ``step``, halves rounded up (7.5 -> 10 for step 5)."""

    def __init__(self, step: int):
        if int(step) <= 0:
            raise ValueError("step must be positive")
        self.step = int(step)

    def apply(self, minutes: int) -> int:
        # Integer form of floor(minutes / step + 0.5); avoids round()'s half-to-even.
        return (2 * int(minutes) + self.step) // (2 * self.step) * self.step
