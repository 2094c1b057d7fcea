import logging

from mealdesk.domain.User import User
from mealdesk.infra.Resource_Repository import ResourceRepository

logger = logging.getLogger(__name__)


class UserRepository(ResourceRepository):
    resource = "users"
    entity = User

    def login(self, username: str, password: str) -> User:
        """Check credentials with the backend; raises ApiError when rejected."""
        data = self.client.post(f"{self.path}/login", {"username": username, "password": password})
        user = User.from_dict(data)
        logger.info("User %s signed in", user.username)
        return user
