from typing import Callable, List, Optional, Tuple
import structlog
from ..models.schemas import DEFAULT_RESULT_FIELDS, ResultRecord, SearchRequest
from .base import SearchService
from .errors import SearchBackendError

logger = structlog.get_logger(__name__)


class ResultSet:
    """Records for the current query, fetched from a search service.
    
    Every fetch is tagged with an increasing sequence number. When a response
    arrives and its tag is no longer the latest one issued, it is dropped:
    neither the records nor the callbacks see it. This keeps a slow answer to
    an earlier keyword from overwriting the answer to a later one.
    """
    
    def __init__(
        self,
        search_service: SearchService,
        size: int = 20,
        fields: Optional[List[str]] = None,
        post_types: Optional[List[str]] = None,
    ):
        self.search_service = search_service
        self.size = size
        self.fields = list(fields or DEFAULT_RESULT_FIELDS)
        self.post_types = list(post_types or ["post"])
        self.records: Tuple[ResultRecord, ...] = ()
        self._sequence = 0
    
    @property
    def latest_tag(self) -> int:
        return self._sequence
    
    def invalidate(self) -> int:
        """Make every request issued so far stale"""
        self._sequence += 1
        return self._sequence
    
    def build_request(self, keyword: str) -> SearchRequest:
        return SearchRequest(
            keyword=keyword,
            fields=self.fields,
            post_types=self.post_types,
            size=self.size
        )
    
    async def fetch(
        self,
        keyword: str,
        on_success: Callable[[List[ResultRecord]], None],
        on_failure: Callable[[Exception], None],
    ) -> bool:
        """Query the search service and report the outcome through a callback.
        
        Returns True when the response was accepted, False when it failed or
        was discarded as stale.
        """
        tag = self.invalidate()
        request = self.build_request(keyword)
        
        try:
            records = await self.search_service.search(request)
        except Exception as e:
            if tag != self._sequence:
                logger.debug("Discarding stale search failure", keyword=keyword, tag=tag, latest=self._sequence)
                return False
            if isinstance(e, SearchBackendError):
                logger.warning("Search failed, showing no results", keyword=keyword, error=str(e))
            else:
                logger.exception("Search backend raised unexpectedly, showing no results", keyword=keyword)
            on_failure(e)
            return False
        
        if tag != self._sequence:
            logger.debug("Discarding stale search response", keyword=keyword, tag=tag, latest=self._sequence)
            return False
        
        self.records = tuple(records)
        logger.debug("Search response accepted", keyword=keyword, tag=tag, results_count=len(self.records))
        on_success(list(self.records))
        return True
