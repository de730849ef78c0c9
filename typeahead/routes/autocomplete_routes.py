from fastapi import APIRouter, WebSocket
from ..config.settings import settings
from ..services.container import container
from ..widgets.live_session import LiveSession

router = APIRouter()


@router.websocket("/autocomplete/ws")
async def autocomplete_session(websocket: WebSocket):
    """
    Live autocomplete session.
    
    Client messages:
    - {"event": "keyup", "value": "<current input text>"}
    - {"event": "keydown", "key": 40 | "ArrowDown" | ...}
    - {"event": "click", "index": <row index>}
    
    Server messages are list snapshots, selections and errors.
    """
    await websocket.accept()
    session = LiveSession(websocket, container.search_service, settings)
    await session.run()
