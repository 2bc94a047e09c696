"""Entity: Author."""

from typing import Any

from pydantic import Field

from library_catalog.entities._base import Entity


class Author(Entity):
    """Book author, identified by a unique name."""

    name: str = Field(min_length=2, max_length=40, description="Name")

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Author):
            return False

        return self.id == other.id and self.name == other.name

    def __hash__(self) -> int:
        return hash((self.id, self.name))
