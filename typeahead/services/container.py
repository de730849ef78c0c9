from ..config.settings import settings
from .base import SearchService
from .factory import create_search_service
from .health_service import HealthService


class ServiceContainer:
    """Dependency injection container for managing service instances"""
    
    def __init__(self):
        self._search_service = create_search_service(settings)
        self._health_service = HealthService(self._search_service)
    
    @property
    def search_service(self) -> SearchService:
        return self._search_service
    
    @property
    def health_service(self) -> HealthService:
        return self._health_service
    
    def override_search_service(self, search_service: SearchService) -> None:
        """Swap the search backend, e.g. for a stub in tests"""
        self._search_service = search_service
        self._health_service = HealthService(search_service)


# Global container instance
container = ServiceContainer()
