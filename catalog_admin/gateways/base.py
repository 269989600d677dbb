"""Gateway base class shared by the catalog resources."""

import logging
from abc import ABC, abstractmethod
from typing import Any, List, Type, TypeVar

from pydantic import BaseModel

from catalog_admin.core.cancellation import CancellationToken
from catalog_admin.core.http import ApiClient

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


class ResourceGateway(ABC):
    """Abstract base class for catalog resource gateways.

    A gateway translates the list/create intents for one level of the
    series → seasons → episodes hierarchy into requests on the shared
    ``ApiClient``. Gateways hold no state besides the client.
    """

    def __init__(self, client: ApiClient):
        self.client = client

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the resource name, used in log messages."""
        pass

    async def _get_many(
        self, path: str, model: Type[M], token: CancellationToken | None
    ) -> List[M]:
        data = await self.client.request(path, "GET", token=token)
        items = [model.model_validate(item) for item in data or []]
        logger.debug(f"Fetched {len(items)} {self.name} from {path}")
        return items

    async def _post_one(self, path: str, payload: Any, model: Type[M]) -> M:
        logger.debug(f"Creating {self.name} at {path}")
        data = await self.client.request(path, "POST", body=payload)
        return model.model_validate(data)
