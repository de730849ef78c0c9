import asyncio
from enum import Enum, IntEnum
from typing import Callable, List, Optional, Set, Union

import structlog
from pydantic import BaseModel, ConfigDict, Field

from ..models.schemas import ListSnapshot, ResultRecord
from ..services.result_set import ResultSet
from .elements import InputElement, MountPoint
from .row_presenter import RowPresenter

logger = structlog.get_logger(__name__)


def _noop(record: ResultRecord) -> None:
    pass


class ControllerOptions(BaseModel):
    """Everything an AutocompleteController can be configured with; nothing else is accepted."""

    model_config = ConfigDict(extra="forbid", arbitrary_types_allowed=True)

    input: InputElement
    wrapper: MountPoint
    min_keyword_length: int = Field(2, ge=0)
    debounce_ms: int = Field(300, ge=0)
    on_select: Callable[[ResultRecord], None] = _noop


class Key(IntEnum):
    ENTER = 13
    ESCAPE = 27
    UP = 38
    DOWN = 40

    @classmethod
    def from_event(cls, key: Union[int, str]) -> Optional["Key"]:
        """Accept a legacy key code or a DOM key name; None for keys we don't handle."""
        if isinstance(key, str):
            return _KEY_NAMES.get(key)
        try:
            return cls(key)
        except ValueError:
            return None


_KEY_NAMES = {
    "Enter": Key.ENTER,
    "Escape": Key.ESCAPE,
    "Esc": Key.ESCAPE,
    "ArrowUp": Key.UP,
    "Up": Key.UP,
    "ArrowDown": Key.DOWN,
    "Down": Key.DOWN,
}


class State(str, Enum):
    IDLE = "idle"
    DEBOUNCING = "debouncing"
    AWAITING = "awaiting"
    SHOWING = "showing"


class AutocompleteController:
    """Search-as-you-type dropdown bound to one input and one mount point.

    Key-up events are validated and debounced into queries; the result set
    answers through callbacks and the rows are rebuilt from its records.
    Key-down handles navigation (no wrap-around), Enter commits the active
    row and Escape dismisses everything.

    Must be driven from inside a running asyncio event loop.
    """

    def __init__(self, result_set: ResultSet, **options):
        self.options = ControllerOptions(**options)
        self.result_set = result_set
        self.input = self.options.input
        self.wrapper = self.options.wrapper
        self.min_keyword_length = self.options.min_keyword_length
        self.debounce = self.options.debounce_ms / 1000
        self.on_select = self.options.on_select

        self.current_text = ""
        self.active_index: Optional[int] = None
        self.visible = False
        self.state = State.IDLE
        self.rows: List[RowPresenter] = []

        self._pending: Optional[asyncio.TimerHandle] = None
        self._inflight: Set[asyncio.Task] = set()

    def render(self) -> "AutocompleteController":
        self.input.disable_native_autocomplete()
        self.input.bind(on_keyup=self.keyup, on_keydown=self.keydown)
        self._refresh()
        return self

    def close(self) -> None:
        """Drop the pending query and cancel fetches still in flight."""
        self.cancel_pending()
        self.result_set.invalidate()
        for task in list(self._inflight):
            task.cancel()

    # Key handlers

    def keyup(self) -> None:
        keyword = self.input.get_value()
        if not self.is_changed(keyword):
            # Back to the text already on screen: drop whatever was queued since
            self.cancel_pending()
            self.result_set.invalidate()
            self.state = State.SHOWING if self.visible else State.IDLE
            return
        if self.is_valid(keyword):
            self.schedule(keyword)
        else:
            self._dismiss()

    def keydown(self, key: Union[int, str]) -> bool:
        """Handle navigation keys. Returns True when the key was consumed."""
        key = Key.from_event(key)
        if key is None:
            return False

        if key is Key.UP:
            self.move(-1)
        elif key is Key.DOWN:
            self.move(+1)
        elif key is Key.ENTER:
            self.on_enter()
        elif key is Key.ESCAPE:
            self.input.set_value("")
            self._dismiss()
        return True

    def is_valid(self, keyword: str) -> bool:
        return len(keyword) > self.min_keyword_length

    def is_changed(self, keyword: str) -> bool:
        return self.current_text != keyword

    # Query pipeline

    def schedule(self, keyword: str) -> None:
        """Replace any pending query with one for ``keyword`` after the quiet period."""
        self.cancel_pending()
        loop = asyncio.get_running_loop()
        self._pending = loop.call_later(self.debounce, self._dispatch, keyword)
        self.state = State.DEBOUNCING

    def cancel_pending(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def _dispatch(self, keyword: str) -> None:
        self._pending = None
        self.state = State.AWAITING
        logger.debug("Dispatching autocomplete query", keyword=keyword)
        task = asyncio.ensure_future(
            self.result_set.fetch(
                keyword,
                on_success=lambda records: self.load_result(records, keyword),
                on_failure=self._on_failure,
            )
        )
        self._inflight.add(task)
        task.add_done_callback(self._inflight.discard)

    def _on_failure(self, error: Exception) -> None:
        self.hide()

    def load_result(self, records: List[ResultRecord], keyword: str) -> None:
        self.current_text = keyword
        self.rows = [RowPresenter(record, parent=self) for record in records]
        self.active_index = None
        if self.rows:
            self.show()
        else:
            self.hide()

    # Navigation and selection

    def move(self, delta: int) -> None:
        current = -1 if self.active_index is None else self.active_index
        index = current + delta
        if 0 <= index < len(self.rows):
            self.active_index = index
            self._refresh()

    def on_enter(self) -> None:
        if self.active_index is not None:
            self.rows[self.active_index].select()

    def select(self, record: ResultRecord) -> None:
        label = record.label()
        self.input.set_value(label)
        # The key-up that follows sees an unchanged value and does not re-query
        self.current_text = label
        self.cancel_pending()
        self.result_set.invalidate()
        self.hide()
        self.on_select(record)

    # Visibility

    def show(self) -> "AutocompleteController":
        self.visible = True
        self.state = State.SHOWING
        self._refresh()
        return self

    def hide(self) -> "AutocompleteController":
        self.visible = False
        self.state = State.IDLE
        self.rows = []
        self.active_index = None
        self._refresh()
        return self

    def reset(self) -> "AutocompleteController":
        self.rows = []
        self.active_index = None
        self._refresh()
        return self

    def snapshot(self) -> ListSnapshot:
        return ListSnapshot(
            visible=self.visible,
            active_index=self.active_index,
            rows=[row.render() for row in self.rows],
        )

    def _dismiss(self) -> None:
        self.cancel_pending()
        self.result_set.invalidate()
        self.current_text = ""
        self.hide()

    def _refresh(self) -> None:
        self.wrapper.refresh(self.snapshot())
