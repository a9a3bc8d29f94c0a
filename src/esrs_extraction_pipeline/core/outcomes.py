"""
Per-item outcomes for batch steps.

Reading documents and embedding chunks work item by item; an item that fails
must not abort the batch. Each step returns a Success or a Failure for every
item, and the caller collects them into a BatchReport.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    """An item that was processed."""

    item_id: str
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    """An item that failed, with the error that caused it."""

    item_id: str
    error_type: str
    error_message: str

    @property
    def ok(self) -> bool:
        return False

    @classmethod
    def from_exception(cls, item_id: str, exc: BaseException) -> "Failure":
        return cls(item_id=item_id, error_type=type(exc).__name__, error_message=str(exc))


Outcome = Union[Success[T], Failure]


@dataclass
class BatchReport(Generic[T]):
    """All outcomes of one batch step, in input order."""

    outcomes: list[Outcome] = field(default_factory=list)

    def add(self, outcome: Outcome) -> None:
        self.outcomes.append(outcome)

    @property
    def succeeded(self) -> list[T]:
        return [o.value for o in self.outcomes if isinstance(o, Success)]

    @property
    def failed(self) -> list[Failure]:
        return [o for o in self.outcomes if isinstance(o, Failure)]

    @property
    def total(self) -> int:
        return len(self.outcomes)

    @property
    def failure_count(self) -> int:
        return len(self.failed)

    @property
    def all_succeeded(self) -> bool:
        return self.failure_count == 0
