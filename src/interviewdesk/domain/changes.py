"""Commit notifications for observers of the local store."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from interviewdesk.domain.model import utcnow

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import datetime

log = logging.getLogger(__name__)

type ChangeListener = Callable[[StoreChanges], None]


@dataclass(slots=True)
class StoreChanges:
    """Monotonic change counter bumped on every successful commit.

    Observers either poll ``version``/``last_modified`` or subscribe a callback.
    """

    version: int = 0
    last_modified: datetime | None = None
    _listeners: list[ChangeListener] = field(default_factory=list["ChangeListener"], repr=False)

    def subscribe(self, listener: ChangeListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def record_commit(self) -> None:
        self.version += 1
        self.last_modified = utcnow()
        for listener in tuple(self._listeners):
            listener(self)
