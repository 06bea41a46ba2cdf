"""
Collision-free identifier source for repeatable list items.

Identifiers are issued from a monotonic counter that also skips past any
identifier already present in the list, so an item created after a record
was loaded with existing cast members can never collide with them.
"""

import logging
from typing import Iterable

logger = logging.getLogger(__name__)


class IdentifierSource:
    """Monotonic integer identifier generator.

    Each call to next_id() returns a value strictly greater than every value
    it issued before and every identifier passed in as already existing.
    Issued values are never reused, even after the item is deleted.
    """

    def __init__(self, start: int = 1):
        self._next = start

    @property
    def peek(self) -> int:
        """Value the next call would return if no larger id exists."""
        return self._next

    def next_id(self, existing_ids: Iterable[int] = ()) -> int:
        highest = max(existing_ids, default=None)
        if highest is not None and highest >= self._next:
            logger.debug(f"IdentifierSource: skipping past existing id {highest}")
            self._next = highest + 1
        issued = self._next
        self._next += 1
        return issued
