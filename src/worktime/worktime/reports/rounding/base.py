from __future__ import annotations

from abc import ABC, abstractmethod


class RoundingPolicy(ABC):
    """Strategy Pattern: how worked minutes are rounded for reporting."""

    @abstractmethod
    def apply(self, minutes: int) -> int:
        raise NotImplementedError
