import logging
from dataclasses import dataclass
from typing import Callable, Literal

logger = logging.getLogger(__name__)

Level = Literal["success", "error"]

@dataclass(frozen=True)
class Notification:
    level: Level
    message: str

class Notifier:
    """Transient user notifications (toasts). Keeps a history and fans out to listeners."""

    def __init__(self):
        self.history: list[Notification] = []
        self._listeners: list[Callable[[Notification], None]] = []

    def subscribe(self, fn: Callable[[Notification], None]) -> None:
        self._listeners.append(fn)

    def _emit(self, n: Notification) -> None:
        self.history.append(n)
        for fn in list(self._listeners):
            fn(n)

    def success(self, message: str) -> None:
        logger.info(message)
        self._emit(Notification("success", message))

    def error(self, message: str, exc: Exception | None = None) -> None:
        if exc is not None:
            logger.warning("%s: %s", message, exc)
        else:
            logger.warning(message)
        self._emit(Notification("error", message))

    @property
    def last(self) -> Notification | None:
        return self.history[-1] if self.history else None
