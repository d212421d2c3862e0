"""Entity capability interface.

Architecture:
    Every paginated collection of the API is addressed by an entity name
    (``item``, ``category``, ...). Instead of subclassing a list type per
    collection, the name is supplied by a small object implementing the
    ``Entity`` protocol and injected into the single pagination engine.

See Also:
    - EntityList: Consumes an Entity to build lane requests
    - simaland.api.entities: Catalogue of known collections
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@runtime_checkable
class Entity(Protocol):
    """Anything that can name an API collection."""

    @property
    def entity(self) -> str:
        """Entity name used to build the request path."""
        ...


@dataclass(frozen=True)
class NamedEntity:
    """Entity identified by a fixed name."""

    name: str

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("Entity name must be a non-empty string")

    @property
    def entity(self) -> str:
        return self.name


def resolve_entity(entity: Entity | str) -> str:
    """Return the entity name for an Entity implementation or a bare string."""
    if isinstance(entity, str):
        return NamedEntity(entity).entity
    if isinstance(entity, Entity):
        return entity.entity
    raise TypeError(f"Expected Entity or str, got {type(entity).__name__}")
