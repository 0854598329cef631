from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Union

from dvach.navigation import NavigationStack, PostsFrame

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FilterEdited:
    """New full text of the filter input."""

    text: str


@dataclass(frozen=True)
class CursorMoved:
    delta: int


@dataclass(frozen=True)
class Confirm:
    pass


@dataclass(frozen=True)
class Cancel:
    pass


@dataclass(frozen=True)
class Quit:
    pass


Event = Union[FilterEdited, CursorMoved, Confirm, Cancel, Quit]


class Dispatcher:
    """Applies one input event at a time to the top frame of the stack."""

    def __init__(self, stack: NavigationStack):
        self.stack = stack

    def dispatch(self, event: Event) -> bool:
        """
        Fully process `event`.

        Returns:
            True while the session keeps running.
        """
        frame = self.stack.top

        if isinstance(event, Quit):
            self.stack.quit()
        elif isinstance(event, Cancel):
            self.stack.cancel()
        elif isinstance(event, Confirm):
            self.stack.confirm()
        elif isinstance(event, CursorMoved):
            if isinstance(frame, PostsFrame):
                frame.scroll_by(event.delta)
            else:
                frame.entries.move(event.delta)
        elif isinstance(event, FilterEdited):
            # Posts are not filterable
            if not isinstance(frame, PostsFrame):
                frame.entries.set_filter(event.text)
        else:
            raise TypeError(f"Unknown event: {event!r}")

        logger.debug("Dispatched: event=%s depth=%s running=%s", event, self.stack.depth, self.stack.running)
        return self.stack.running
