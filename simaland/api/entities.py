"""Catalogue of known API collections.

Each constant is an Entity that can be passed straight to EntityList:

    >>> EntityList(transport, CATEGORY, query_params={"level": 1})
"""

from __future__ import annotations

from .core.entity import NamedEntity

ITEM = NamedEntity("item")
CATEGORY = NamedEntity("category")
ATTRIBUTE = NamedEntity("attribute")
ITEM_ATTRIBUTE = NamedEntity("item-attribute")
OPTION = NamedEntity("option")
DATATYPE = NamedEntity("datatype")
COUNTRY = NamedEntity("country")
MATERIAL = NamedEntity("material")
SERIES = NamedEntity("series")
TRADEMARK = NamedEntity("trademark")

ALL_ENTITIES: dict[str, NamedEntity] = {
    entity.name: entity
    for entity in (
        ITEM,
        CATEGORY,
        ATTRIBUTE,
        ITEM_ATTRIBUTE,
        OPTION,
        DATATYPE,
        COUNTRY,
        MATERIAL,
        SERIES,
        TRADEMARK,
    )
}


def get_entity(name: str) -> NamedEntity:
    """Look up a catalogued entity by name.

    Raises:
        KeyError: If the name is not catalogued
    """
    try:
        return ALL_ENTITIES[name]
    except KeyError:
        raise KeyError(f"Unknown entity {name!r}") from None
