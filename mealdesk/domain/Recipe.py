"""Recipe domain entity: name, instructions, cooking time, category and author."""


class Recipe:
    def __init__(self, id: int = 0, name: str = "", instructions: str = "",
                 cooking_time_minutes: int = 0, category_id: int = 0, author_user_id: int = 0):
        self.id = id
        self.name = name
        self.instructions = instructions
        self.cooking_time_minutes = cooking_time_minutes
        self.category_id = category_id
        self.author_user_id = author_user_id

    def __str__(self) -> str:
        return f"{self.name} - {self.cooking_time_minutes} min - Category: {self.category_id}"

    __repr__ = __str__

    def __eq__(self, other):
        if not isinstance(other, Recipe):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        return Recipe(
            id=int(d.get("id", 0) or 0),
            name=d.get("name", "") or "",
            instructions=d.get("instructions", "") or "",
            cooking_time_minutes=int(d.get("cookingTimeMinutes", 0) or 0),
            category_id=int(d.get("categoryId", 0) or 0),
            author_user_id=int(d.get("authorUserId", 0) or 0),
        )

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "instructions": self.instructions,
            "cookingTimeMinutes": self.cooking_time_minutes,
            "categoryId": self.category_id,
            "authorUserId": self.author_user_id,
        }
