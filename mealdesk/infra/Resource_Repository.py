"""Base CRUD gateway for one backend collection (/api/<name>[/{id}]).

Reads are served through the QueryCache; every write invalidates the
collection key so the next read goes back to the server.
"""
import logging
from typing import Any, Callable, List, Optional

from mealdesk.infra.Api_Client import ApiClient
from mealdesk.infra.Query_Cache import QueryCache

logger = logging.getLogger(__name__)


class ResourceRepository:
    # Subclasses set the collection name (also the cache key) and entity class
    resource: str = ""
    entity: Any = None

    def __init__(self, client: ApiClient, cache: Optional[QueryCache] = None):
        self.client = client
        self.cache = cache or QueryCache()

    @property
    def path(self) -> str:
        return f"/api/{self.resource}"

    def _query(self, key: tuple, loader: Callable[[], Any]) -> Any:
        return self.cache.fetch(key, loader)

    def _invalidate(self, *prefix) -> None:
        self.cache.invalidate(*prefix)

    def _many(self, data) -> List[Any]:
        return [self.entity.from_dict(item) for item in (data or [])]

    def get_all(self) -> List[Any]:
        return self._query((self.resource,), lambda: self._many(self.client.get(self.path)))

    def get_by_id(self, id: int):
        return self._query((self.resource, id),
                           lambda: self.entity.from_dict(self.client.get(f"{self.path}/{id}")))

    def create(self, data: dict):
        created = self.client.post(self.path, data)
        self._invalidate(self.resource)
        logger.info("Created %s: %s", self.resource, data.get("name") or data.get("username", ""))
        return self.entity.from_dict(created) if created is not None else None

    def update(self, id: int, data: dict):
        updated = self.client.put(f"{self.path}/{id}", data)
        self._invalidate(self.resource)
        logger.info("Updated %s #%s", self.resource, id)
        return self.entity.from_dict(updated) if updated is not None else None

    def delete(self, id: int) -> None:
        self.client.delete(f"{self.path}/{id}")
        self._invalidate(self.resource)
        logger.info("Deleted %s #%s", self.resource, id)
