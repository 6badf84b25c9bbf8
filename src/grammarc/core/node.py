"""
Annotated tree nodes.

A Node owns one value plus a set of annotations keyed by annotation class,
so later passes can attach metadata to a tree without changing the shape
of the types stored in it.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields, is_dataclass
from types import MappingProxyType
from typing import Any, Generic, TypeVar, cast

T = TypeVar("T")
A = TypeVar("A", bound="Annotation")


class Annotation:
    """
    Base class for node annotations.

    Each subclass is one annotation kind; a node holds at most one
    annotation per kind.
    """


@dataclass(frozen=True)
class SourceSpan(Annotation):
    """Position of the first token a parse production looked at (0-indexed)."""

    row: int
    col: int


class Node(Generic[T]):
    """
    Wrapper owning a value and its annotations.

    Annotations can be added or replaced but never removed, and live
    exactly as long as the node.
    """

    def __init__(self, value: T):
        self.value = value
        self._annotations: dict[type[Annotation], Annotation] = {}

    def add_annotation(self, annotation: Annotation) -> None:
        """Store an annotation, replacing any earlier one of the same kind."""
        self._annotations[type(annotation)] = annotation

    def get_annotation(self, kind: type[A]) -> A | None:
        """Return the annotation of the given kind, or None."""
        return cast("A | None", self._annotations.get(kind))

    def has_annotation(self, kind: type[Annotation]) -> bool:
        return kind in self._annotations

    @property
    def annotations(self) -> Mapping[type[Annotation], Annotation]:
        """Read-only view of all annotations."""
        return MappingProxyType(self._annotations)

    def __eq__(self, other: Any) -> bool:
        """
        Compare values and annotations.

        Dataclass values are compared field by field, and Node fields are
        queued rather than compared recursively, so arbitrarily deep trees
        compare without exhausting the stack.
        """
        if not isinstance(other, Node):
            return NotImplemented
        pending: list[tuple[Node, Node]] = [(self, other)]
        while pending:
            left, right = pending.pop()
            if left._annotations != right._annotations:
                return False
            a, b = left.value, right.value
            if not (is_dataclass(a) and not isinstance(a, type) and type(a) is type(b)):
                if a != b:
                    return False
                continue
            for f in fields(a):
                x, y = getattr(a, f.name), getattr(b, f.name)
                if isinstance(x, Node) and isinstance(y, Node):
                    pending.append((x, y))
                elif x != y:
                    return False
        return True

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Node({self.value!r})"
