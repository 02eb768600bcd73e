"""Outcome of a secondary resolution."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from spotmeta.exceptions import SpotMetaError
from spotmeta.models.reference import Reference

T = TypeVar("T")


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Result of resolving one nested reference.

    Exactly one of ``value`` and ``error`` is set. Failed outcomes are
    omitted from the parent's lists and their URI recorded in ``omitted``.
    """

    reference: Reference
    value: T | None = None
    error: SpotMetaError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.value is not None


def collect(outcomes: list[Outcome[T]], omitted: list[str]) -> list[T]:
    """Keep successful values in order and record the URIs of failures."""
    values: list[T] = []
    for outcome in outcomes:
        if outcome.ok:
            values.append(outcome.value)  # type: ignore[arg-type]
        else:
            omitted.append(outcome.reference.uri)
    return values
