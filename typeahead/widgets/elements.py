"""Page elements the autocomplete controller is bound to.

The controller never looks elements up itself; it receives an input and a
mount point at construction. ``TextField`` and ``ListMount`` are in-memory
elements used by live websocket sessions and by tests.
"""

from abc import ABC, abstractmethod
from typing import Callable, Dict, List, Optional, Union

from ..models.schemas import ListSnapshot

KeyUpHandler = Callable[[], None]
KeyDownHandler = Callable[[Union[int, str]], bool]


class InputElement(ABC):
    """A text field that reports key-up and key-down events."""

    @abstractmethod
    def get_value(self) -> str: ...

    @abstractmethod
    def set_value(self, value: str) -> None: ...

    @abstractmethod
    def bind(self, on_keyup: KeyUpHandler, on_keydown: KeyDownHandler) -> None: ...

    def disable_native_autocomplete(self) -> None:
        pass


class MountPoint(ABC):
    """Where the dropdown is shown. Receives the full list state on every change."""

    @abstractmethod
    def refresh(self, snapshot: ListSnapshot) -> None: ...


class TextField(InputElement):
    def __init__(self, value: str = ""):
        self.value = value
        self.attributes: Dict[str, str] = {}
        self._on_keyup: Optional[KeyUpHandler] = None
        self._on_keydown: Optional[KeyDownHandler] = None

    def get_value(self) -> str:
        return self.value

    def set_value(self, value: str) -> None:
        # Programmatic writes do not fire key events
        self.value = value

    def bind(self, on_keyup: KeyUpHandler, on_keydown: KeyDownHandler) -> None:
        self._on_keyup = on_keyup
        self._on_keydown = on_keydown

    def disable_native_autocomplete(self) -> None:
        self.attributes["autocomplete"] = "off"

    def type(self, value: str) -> None:
        """Replace the text as a user would, then fire key-up."""
        self.value = value
        if self._on_keyup is not None:
            self._on_keyup()

    def press(self, key: Union[int, str]) -> bool:
        """Fire key-down; True when the bound handler consumed the key."""
        if self._on_keydown is None:
            return False
        return self._on_keydown(key)


class ListMount(MountPoint):
    def __init__(self, listener: Optional[Callable[[ListSnapshot], None]] = None):
        self.snapshot = ListSnapshot(visible=False)
        self.refresh_count = 0
        self._listener = listener

    def refresh(self, snapshot: ListSnapshot) -> None:
        self.snapshot = snapshot
        self.refresh_count += 1
        if self._listener is not None:
            self._listener(snapshot)

    @property
    def visible(self) -> bool:
        return self.snapshot.visible

    @property
    def labels(self) -> List[str]:
        return [row.label for row in self.snapshot.rows]

    @property
    def active_label(self) -> Optional[str]:
        if self.snapshot.active_index is None:
            return None
        return self.snapshot.rows[self.snapshot.active_index].label
