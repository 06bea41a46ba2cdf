"""
Field bindings: the callbacks a presentation widget is wired to.

FieldBinder.bind(field_id, iterable) picks one of two variants:

    ScalarBinding (iterable=False):
        on_change(value) → apply {field_id: value}
        on_blur()        → publish(False), the only autosave path

    ListBinding (iterable=True):
        on_create(attributes) → append with a fresh identifier
        on_update(item)       → replace the element with the same identifier
        on_delete(identifier) → drop every element with that identifier

Every handler reads the field's current value from the store at call time,
computes a new value, and feeds it back as a delta. Nothing here holds state
of its own apart from the list identifier source.
"""

import asyncio
import logging
from typing import Any, Mapping, Optional, Tuple, Union

from recordform.errors import FieldKindError, UnknownFieldError
from recordform.identifiers import IdentifierSource
from recordform.publish_model import PublishOutcome
from recordform.record_model import CastMember, Record, as_cast_member
from recordform.record_store import RecordStore

logger = logging.getLogger(__name__)

ItemInput = Union[CastMember, Mapping[str, Any]]


class ScalarBinding:
    """Change/blur handlers for a single-valued field."""

    iterable = False

    def __init__(self, store: RecordStore, field_id: str):
        self.store = store
        self.field_id = field_id

    @property
    def value(self) -> Any:
        return getattr(self.store.current(), self.field_id)

    def on_change(self, value: Any) -> Record:
        """Apply the widget's new raw value immediately."""
        return self.store.apply({self.field_id: value})

    def on_blur(self) -> 'asyncio.Task[PublishOutcome]':
        """Implicit, non-publishing save when the widget loses focus."""
        logger.debug(f"Field {self.field_id!r} lost focus, saving")
        return self.store.publish(False)


class ListBinding:
    """Create/update/delete handlers for a repeatable field."""

    iterable = True

    def __init__(self, store: RecordStore, field_id: str, identifiers: Optional[IdentifierSource] = None):
        self.store = store
        self.field_id = field_id
        self.identifiers = identifiers if identifiers is not None else IdentifierSource()

    @property
    def value(self) -> Tuple[CastMember, ...]:
        return tuple(getattr(self.store.current(), self.field_id))

    def _commit(self, items: Tuple[CastMember, ...]) -> Tuple[CastMember, ...]:
        self.store.apply({self.field_id: items})
        return items

    def on_create(self, attributes: Mapping[str, Any]) -> Tuple[CastMember, ...]:
        """Append a new item at the tail with a freshly issued identifier.

        Any ``id`` key in attributes is discarded; identifiers are assigned
        here only.
        """
        current = self.value
        new_id = self.identifiers.next_id(item.id for item in current)
        fields = {k: v for k, v in attributes.items() if k != 'id'}
        item = CastMember(id=new_id, attributes=fields)
        logger.debug(f"{self.field_id}: created item id={new_id}")
        return self._commit(current + (item,))

    def on_update(self, item: ItemInput) -> Tuple[CastMember, ...]:
        """Replace the element whose identifier matches item's, in place.

        Replace-only: when nothing matches, the sequence is left as it was
        and the item is dropped.
        """
        replacement = as_cast_member(item)
        current = self.value
        updated = tuple(replacement if prev.id == replacement.id else prev for prev in current)
        if updated == current:
            logger.debug(f"{self.field_id}: update for id={replacement.id} changed nothing")
        return self._commit(updated)

    def on_delete(self, identifier: int) -> Tuple[CastMember, ...]:
        """Remove every element carrying identifier (no-op when absent)."""
        remaining = tuple(prev for prev in self.value if prev.id != identifier)
        return self._commit(remaining)


Binding = Union[ScalarBinding, ListBinding]


class FieldBinder:
    """Factory producing bindings closed over one RecordStore.

    List bindings for the same field share one IdentifierSource, so
    re-binding on every render never restarts the identifier sequence.
    Passing identifiers makes every repeatable field draw from that one source.
    """

    def __init__(self, store: RecordStore, identifiers: Optional[IdentifierSource] = None):
        self.store = store
        self.identifiers = identifiers
        self._identifier_sources = {}

    def identifiers_for(self, field_id: str) -> IdentifierSource:
        if self.identifiers is not None:
            return self.identifiers
        if field_id not in self._identifier_sources:
            self._identifier_sources[field_id] = IdentifierSource()
        return self._identifier_sources[field_id]

    def bind(self, field_id: str, iterable: bool = False) -> Binding:
        """Build the binding for one field.

        Args:
            field_id: Record field name
            iterable: True for repeatable fields (create/update/delete handlers)

        Raises:
            UnknownFieldError: field_id is not a Record field
            FieldKindError: iterable does not match the field's kind
        """
        if field_id not in Record.field_names():
            raise UnknownFieldError(field_id)
        repeatable = field_id in Record.repeatable_fields()
        if iterable != repeatable:
            kind = "repeatable" if repeatable else "scalar"
            raise FieldKindError(f"Field {field_id!r} is {kind}; cannot bind with iterable={iterable}")
        if iterable:
            return ListBinding(self.store, field_id, self.identifiers_for(field_id))
        return ScalarBinding(self.store, field_id)
