from __future__ import annotations

from .base import RoundingPolicy


class NoRounding(RoundingPolicy):
    def apply(self, minutes: int) -> int:
        return int(minutes)
