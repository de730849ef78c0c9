from typing import Any, Dict, List, Optional, Tuple
import structlog
from elasticsearch import ApiError, AsyncElasticsearch, TransportError
from ..models.schemas import ResultRecord, SearchRequest
from .base import SearchService
from .errors import MalformedResponseError, SearchBackendError
from .hits import parse_hits

logger = structlog.get_logger(__name__)


class ElasticsearchService(SearchService):
    """Search collaborator backed by an Elasticsearch index"""
    
    name = "elasticsearch"
    
    def __init__(
        self,
        url: str,
        index: str,
        match_fields: List[str],
        auth: Optional[Tuple[str, str]] = None,
        timeout: float = 10.0,
        client: Optional[AsyncElasticsearch] = None,
    ):
        self.client = client or AsyncElasticsearch(
            hosts=[url],
            basic_auth=auth,
            request_timeout=timeout,
        )
        self.index = index
        self.match_fields = match_fields
    
    def build_query(self, request: SearchRequest) -> Dict[str, Any]:
        """Build a cross-field full-text query restricted to the requested post types"""
        return {
            "bool": {
                "must": {
                    "multi_match": {
                        "query": request.keyword,
                        # Some fields are boosted
                        "fields": self.match_fields,
                        "operator": "and",
                        "type": "cross_fields"
                    }
                },
                "filter": [
                    {"terms": {"post_type": request.post_types}}
                ]
            }
        }
    
    def build_sort(self, request: SearchRequest) -> List[Dict[str, Any]]:
        return [{item.field: {"order": item.order}} for item in request.sort]
    
    async def search(self, request: SearchRequest) -> List[ResultRecord]:
        """Execute the query and parse hits into result records"""
        try:
            response = await self.client.search(
                index=self.index,
                query=self.build_query(request),
                sort=self.build_sort(request),
                fields=request.fields,
                source=False,
                size=request.size
            )
        except (ApiError, TransportError) as e:
            logger.warning("Elasticsearch search failed", keyword=request.keyword, error=str(e))
            raise SearchBackendError(f"Elasticsearch search error: {e}") from e
        
        try:
            hits = response["hits"]["hits"]
        except (KeyError, TypeError) as e:
            raise MalformedResponseError("Elasticsearch response has no hits.hits") from e
        
        records = parse_hits(hits)
        logger.debug("Elasticsearch search completed", keyword=request.keyword, results_count=len(records))
        return records
    
    async def is_available(self) -> bool:
        """Check that the target index exists"""
        try:
            return bool(await self.client.indices.exists(index=self.index))
        except (ApiError, TransportError) as e:
            logger.warning("Elasticsearch index check failed", index=self.index, error=str(e))
            return False
    
    async def close(self) -> None:
        await self.client.close()
