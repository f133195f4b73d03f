from __future__ import annotations

from abc import ABC, abstractmethod

from ..day import DayContext


class DayClassifier(ABC):
    """Strategy Pattern: one report's rules for counting a user's days."""

    @abstractmethod
    def visit(self, ctx: DayContext) -> None:
        raise NotImplementedError

    @abstractmethod
    def result(self) -> dict:
        raise NotImplementedError
