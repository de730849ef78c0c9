"""Search backend factory."""

import structlog

from ..config.settings import Settings
from .base import SearchService
from .elasticsearch_service import ElasticsearchService
from .wpcom_service import WpcomSearchService

logger = structlog.get_logger(__name__)


def create_search_service(settings: Settings) -> SearchService:
    """
    Create the search backend named by the configuration.

    Raises:
        ValueError: If the backend name is unknown or its settings are incomplete
    """
    if settings.search_backend == "elasticsearch":
        logger.info("Creating ElasticsearchService", url=settings.elasticsearch_url, index=settings.search_index)
        return ElasticsearchService(
            url=settings.elasticsearch_url,
            index=settings.search_index,
            match_fields=settings.match_fields,
            auth=settings.elasticsearch_auth,
            timeout=settings.search_timeout,
        )

    if settings.search_backend == "wpcom":
        if not settings.wpcom_site_id:
            raise ValueError("WPCOM_SITE_ID is required when using the wpcom search backend")

        logger.info("Creating WpcomSearchService", api_url=settings.wpcom_api_url, site_id=settings.wpcom_site_id)
        return WpcomSearchService(
            api_url=settings.wpcom_api_url,
            site_id=settings.wpcom_site_id,
            match_fields=settings.match_fields,
            timeout=settings.search_timeout,
        )

    raise ValueError(
        f"Unknown search backend: {settings.search_backend}. "
        f"Supported backends: elasticsearch, wpcom"
    )
