"""Classified entities referenced by execution events."""

from dataclasses import dataclass
from typing import Literal, Protocol, runtime_checkable


@runtime_checkable
class ClassifiedEntity(Protocol):
    """Anything the engine reports events for.

    An entity is either a container or a test, never both. Identity is by
    reference: two entities with equal attributes are still distinct.
    """

    def is_container(self) -> bool:
        """Return True if the entity groups other entities."""
        ...

    def is_test(self) -> bool:
        """Return True if the entity is an executable test."""
        ...


@dataclass(frozen=True, kw_only=True, eq=False)
class TestDescriptor:
    """Minimal concrete entity for engines without their own descriptor type."""

    __test__ = False

    unique_id: str
    display_name: str
    type: Literal["container", "test"] = "test"

    def is_container(self) -> bool:
        return self.type == "container"

    def is_test(self) -> bool:
        return self.type == "test"
