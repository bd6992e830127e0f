"""Result-or-error values for inventory queries and the fallback combinator.

Every query the collector makes is wrapped by attempt(), which turns the
three things a query can do (return data, return nothing, raise) into a
QueryOutcome. Fallback chains are then plain data: a sequence of
zero-argument queries handed to first_success().
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any

Query = Callable[[], Any]


class OutcomeStatus(str, Enum):
    OK = "ok"
    EMPTY = "empty"
    FAULT = "fault"


@dataclass(frozen=True)
class QueryOutcome:
    status: OutcomeStatus
    value: Any = None
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.status is OutcomeStatus.OK

    @classmethod
    def ok(cls, value: Any) -> QueryOutcome:
        return cls(OutcomeStatus.OK, value=value)

    @classmethod
    def empty(cls) -> QueryOutcome:
        return cls(OutcomeStatus.EMPTY)

    @classmethod
    def fault(cls, error: str) -> QueryOutcome:
        return cls(OutcomeStatus.FAULT, error=error)


def is_blank(value: Any) -> bool:
    """True for None, whitespace-only strings, and empty containers."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict)):
        return len(value) == 0
    return False


def describe_exception(exc: BaseException) -> str:
    message = str(exc)
    return f"{type(exc).__name__}: {message}" if message else type(exc).__name__


def attempt(query: Query, keep_falsy: bool = False) -> QueryOutcome:
    """Run one query and classify what happened.

    Args:
        query: Zero-argument callable.
        keep_falsy: Report False/0 results as OK instead of blank. Used for
            boolean capability checks where False is a real answer.
    """
    try:
        value = query()
    except Exception as exc:
        return QueryOutcome.fault(describe_exception(exc))
    if value is None or (not keep_falsy and is_blank(value)):
        return QueryOutcome.empty()
    return QueryOutcome.ok(value)


def first_success(queries: Iterable[Query], default: Any = None) -> tuple[Any, list[QueryOutcome]]:
    """Try each query in order, returning the first successful value.

    Returns:
        (value, outcomes): the first OK value, or ``default`` when every
        query faulted or came back empty, plus the outcome of every query
        that was actually run.
    """
    outcomes: list[QueryOutcome] = []
    for query in queries:
        outcome = attempt(query)
        outcomes.append(outcome)
        if outcome.succeeded:
            return outcome.value, outcomes
    return default, outcomes
