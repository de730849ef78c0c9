"""Search collaborator interface."""

from abc import ABC, abstractmethod
from typing import List

from ..models.schemas import ResultRecord, SearchRequest


class SearchService(ABC):
    """Anything that can answer an autocomplete query."""

    name = "abstract"

    @abstractmethod
    async def search(self, request: SearchRequest) -> List[ResultRecord]:
        """
        Run one query against the backend.

        Args:
            request: Keyword, projection, post type filter, size and sort order

        Returns:
            Result records in the order the backend ranked them

        Raises:
            SearchBackendError: transport or server failure
            MalformedResponseError: the response lacks expected fields
        """

    @abstractmethod
    async def is_available(self) -> bool:
        """Check whether the backend is reachable."""

    async def close(self) -> None:
        """Release network resources held by the backend."""
