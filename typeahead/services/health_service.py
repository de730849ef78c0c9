from datetime import datetime
from ..models.schemas import HealthResponse
from .base import SearchService


class HealthService:
    """Service class for health checks and system status"""
    
    def __init__(self, search_service: SearchService):
        self.search_service = search_service
    
    async def get_health_status(self) -> HealthResponse:
        """Report whether the configured search backend can be reached"""
        available = await self.search_service.is_available()
        return HealthResponse(
            status="OK" if available else "DEGRADED",
            timestamp=datetime.now().isoformat(),
            backend=self.search_service.name,
            available=available
        )
