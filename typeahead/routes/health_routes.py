from fastapi import APIRouter, HTTPException
from ..models.schemas import HealthResponse
from ..services.container import container

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Health check endpoint to verify system status.
    
    Returns:
    - Status of the application
    - Timestamp
    - Configured search backend and whether it is reachable
    """
    try:
        return await container.health_service.get_health_status()
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Health check error: {str(e)}")
