"""Product entity."""

from dataclasses import dataclass


@dataclass
class Product:
    """A catalog item. The id doubles as display code and document key."""

    id: str
    name: str
    subwarehouse: str
