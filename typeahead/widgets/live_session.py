"""Drive an autocomplete controller from a browser over a websocket.

The browser forwards its key events; every change of the dropdown is pushed
back as a full list snapshot, selections as a separate message.
"""

import asyncio
from contextlib import suppress
from typing import Any, Dict, Optional

import structlog
from fastapi import WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from ..config.settings import Settings
from ..models.schemas import ClientEvent, ListSnapshot, ResultRecord
from ..services.base import SearchService
from ..services.result_set import ResultSet
from .autocomplete_controller import AutocompleteController
from .elements import ListMount, TextField

logger = structlog.get_logger(__name__)


class LiveSession:
    def __init__(self, websocket: WebSocket, search_service: SearchService, settings: Settings):
        self.websocket = websocket
        self.outbox: "asyncio.Queue[Dict[str, Any]]" = asyncio.Queue()
        self.field = TextField()
        self.mount = ListMount(listener=self._publish)
        self._sender: Optional[asyncio.Task] = None
        self.controller = AutocompleteController(
            ResultSet(
                search_service,
                size=settings.search_size,
                fields=settings.result_fields,
                post_types=settings.post_types,
            ),
            input=self.field,
            wrapper=self.mount,
            min_keyword_length=settings.min_keyword_length,
            debounce_ms=settings.debounce_ms,
            on_select=self._selected,
        )

    def _publish(self, snapshot: ListSnapshot) -> None:
        self.outbox.put_nowait({"type": "list", "value": self.field.get_value(), **snapshot.model_dump()})

    def _selected(self, record: ResultRecord) -> None:
        self.outbox.put_nowait({
            "type": "select",
            "record": record.model_dump(),
            "label": record.label(),
            "permalink": record.permalink(),
        })

    def dispatch(self, message: Any) -> None:
        """Apply one client message to the bound field."""
        try:
            event = ClientEvent.model_validate(message)
        except ValidationError as e:
            self.outbox.put_nowait({"type": "error", "detail": f"Invalid event: {e.errors()[0]['msg']}"})
            return

        if event.event == "keyup":
            self.field.type(event.value)
        elif event.event == "keydown":
            if event.key is None:
                self.outbox.put_nowait({"type": "error", "detail": "keydown requires a key"})
                return
            self.field.press(event.key)
        elif event.event == "click":
            rows = self.controller.rows
            if event.index is None or not 0 <= event.index < len(rows):
                self.outbox.put_nowait({"type": "error", "detail": f"No row at index {event.index}"})
                return
            rows[event.index].select()

    async def _drain(self) -> None:
        while True:
            message = await self.outbox.get()
            await self.websocket.send_json(message)

    async def run(self) -> None:
        self.controller.render()
        self._sender = asyncio.create_task(self._drain())
        logger.info("Autocomplete session started")
        try:
            while True:
                try:
                    message = await self.websocket.receive_json()
                except ValueError:
                    self.outbox.put_nowait({"type": "error", "detail": "Messages must be JSON"})
                    continue
                self.dispatch(message)
        except WebSocketDisconnect:
            logger.info("Autocomplete session closed by client")
        finally:
            self.controller.close()
            self._sender.cancel()
            with suppress(asyncio.CancelledError):
                await self._sender
