"""Outcome values returned by store operations."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class ResultKind(str, Enum):
    APPLIED = "applied"
    NOT_FOUND = "not_found"
    INVARIANT_VIOLATION = "invariant_violation"


@dataclass(frozen=True)
class OperationResult(Generic[T]):
    """What a mutating store operation did, with a message for the user."""

    kind: ResultKind
    message: str
    value: Optional[T] = None

    @property
    def ok(self) -> bool:
        return self.kind == ResultKind.APPLIED

    @classmethod
    def applied(cls, message: str, value: Optional[T] = None) -> "OperationResult[T]":
        return cls(ResultKind.APPLIED, message, value)

    @classmethod
    def not_found(cls, entity: str, entity_id: str) -> "OperationResult[T]":
        return cls(ResultKind.NOT_FOUND, f"{entity} {entity_id} was not found.")

    @classmethod
    def violation(cls, reason: str) -> "OperationResult[T]":
        return cls(ResultKind.INVARIANT_VIOLATION, reason)
