"""Specification Pattern for complex queries.

This module implements the Specification pattern for building
complex, reusable query conditions.
"""

from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

from sqlalchemy import and_, not_, true

from app.infra.database import Base

T = TypeVar("T", bound=Base)


class Specification(ABC, Generic[T]):
    """Abstract base class for specifications.

    Specifications encapsulate query conditions in reusable,
    composable objects following the Specification pattern.

    Example:
        class PublicItinerarySpec(Specification[Itinerary]):
            def to_expression(self):
                return Itinerary.is_public.is_(True)

        visible = PublicItinerarySpec() & ~ItineraryByUserSpec(user_id)
        rows = await repo.find_many(visible.to_expression())
    """

    @abstractmethod
    def to_expression(self) -> Any:
        """Convert specification to SQLAlchemy expression."""
        ...

    def __and__(self, other: "Specification[T]") -> "AndSpecification[T]":
        """Combine with AND."""
        return AndSpecification(self, other)

    def __invert__(self) -> "NotSpecification[T]":
        """Negate the specification."""
        return NotSpecification(self)


class AndSpecification(Specification[T]):
    """Combines two specifications with AND."""

    def __init__(self, left: Specification[T], right: Specification[T]) -> None:
        self.left = left
        self.right = right

    def to_expression(self) -> Any:
        """Return AND of both specifications."""
        return and_(self.left.to_expression(), self.right.to_expression())


class NotSpecification(Specification[T]):
    """Negates a specification."""

    def __init__(self, spec: Specification[T]) -> None:
        self.spec = spec

    def to_expression(self) -> Any:
        """Return negation of the specification."""
        return not_(self.spec.to_expression())


class TrueSpecification(Specification[T]):
    """A specification that matches every row."""

    def to_expression(self) -> Any:
        return true()


def all_of(*specs: Specification[T] | None) -> Specification[T]:
    """AND together the given specifications, skipping ``None`` entries."""
    combined: Specification[T] | None = None
    for spec in specs:
        if spec is None:
            continue
        combined = spec if combined is None else combined & spec
    return combined if combined is not None else TrueSpecification()
