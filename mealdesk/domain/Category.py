"""Category domain entity: recipe grouping with optional description."""
from typing import Optional


class Category:
    def __init__(self, id: int = 0, name: str = "", description: Optional[str] = None):
        self.id = id
        self.name = name
        self.description = description

    def __str__(self) -> str:
        if self.description:
            return f"{self.name} - {self.description}"
        return self.name

    __repr__ = __str__

    def __eq__(self, other):
        if not isinstance(other, Category):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    @staticmethod
    def from_dict(data):
        '''Creates a Category from an API payload. Ignores unknown keys.'''
        d = dict(data) if isinstance(data, dict) else {}
        return Category(
            id=int(d.get("id", 0) or 0),
            name=d.get("name", "") or "",
            description=d.get("description") or None,
        )

    def to_dict(self):
        return {"id": self.id, "name": self.name, "description": self.description}
