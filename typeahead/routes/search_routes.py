from fastapi import APIRouter, HTTPException
from ..models.schemas import SearchRequest, SearchResponse
from ..services.container import container
from ..services.errors import SearchBackendError

router = APIRouter()


@router.post("/search", response_model=SearchResponse)
async def search(request: SearchRequest):
    """
    Run one autocomplete query against the configured search backend.
    
    The body names the keyword, the projected fields, the post types to
    include, the result size and the sort order. Records come back in the
    order the backend ranked them.
    """
    try:
        records = await container.search_service.search(request)
    except SearchBackendError as e:
        raise HTTPException(status_code=500, detail=f"Search error: {str(e)}")
    return SearchResponse(keyword=request.keyword, total=len(records), records=records)
