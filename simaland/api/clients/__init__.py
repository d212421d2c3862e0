"""High-level clients."""

from .entity_list import EntityCursor, EntityList

__all__ = ["EntityCursor", "EntityList"]
