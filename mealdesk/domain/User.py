"""User domain entity as returned by the backend (never carries the password)."""


class User:
    def __init__(self, id: int = 0, username: str = "", email: str = ""):
        self.id = id
        self.username = username
        self.email = email

    def __str__(self) -> str:
        return f"{self.username} <{self.email}>"

    __repr__ = __str__

    def __eq__(self, other):
        if not isinstance(other, User):
            return NotImplemented
        return (self.id, self.username, self.email) == (other.id, other.username, other.email)

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        return User(
            id=int(d.get("id", 0) or 0),
            username=d.get("username", "") or "",
            email=d.get("email", "") or "",
        )

    def to_dict(self):
        return {"id": self.id, "username": self.username, "email": self.email}
