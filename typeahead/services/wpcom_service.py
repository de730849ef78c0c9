"""WordPress.com REST API search backend."""

from typing import Any, Dict, List

import httpx
import structlog

from ..models.schemas import ResultRecord, SearchRequest
from .base import SearchService
from .errors import MalformedResponseError, SearchBackendError
from .hits import parse_hits

logger = structlog.get_logger(__name__)


class WpcomSearchService(SearchService):
    """Search a WordPress.com site through its hosted search endpoint.

    The endpoint takes a legacy Elasticsearch query in the POST body and
    answers with ``results.hits``, each hit carrying its projected ``fields``.
    """

    name = "wpcom"

    def __init__(self, api_url: str, site_id: str, match_fields: List[str], timeout: float = 10.0):
        self.api_url = api_url.rstrip("/")
        self.site_id = site_id
        self.match_fields = match_fields
        self.timeout = timeout

    @property
    def endpoint(self) -> str:
        return f"{self.api_url}/sites/{self.site_id}/search"

    def build_body(self, request: SearchRequest) -> Dict[str, Any]:
        return {
            "size": request.size,
            "filter": {"and": [{"terms": {"post_type": request.post_types}}]},
            "query": {
                "multi_match": {
                    "query": request.keyword,
                    "fields": self.match_fields,
                    "operator": "and",
                    "type": "cross_fields",
                }
            },
            "sort": [{item.field: {"order": item.order}} for item in request.sort],
            "fields": request.fields,
        }

    async def search(self, request: SearchRequest) -> List[ResultRecord]:
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(self.endpoint, json=self.build_body(request))
                response.raise_for_status()
            payload = response.json()
        except httpx.HTTPError as e:
            logger.warning("WordPress.com search failed", keyword=request.keyword, error=str(e))
            raise SearchBackendError(f"WordPress.com search error: {e}") from e
        except ValueError as e:
            raise MalformedResponseError("WordPress.com search returned invalid JSON") from e

        try:
            hits = payload["results"]["hits"]
        except (KeyError, TypeError) as e:
            raise MalformedResponseError("WordPress.com response has no results.hits") from e

        records = parse_hits(hits)
        logger.debug("WordPress.com search completed", keyword=request.keyword, results_count=len(records))
        return records

    async def is_available(self) -> bool:
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(f"{self.api_url}/sites/{self.site_id}")
            return response.status_code == 200
        except httpx.HTTPError as e:
            logger.warning("WordPress.com site check failed", site_id=self.site_id, error=str(e))
            return False
