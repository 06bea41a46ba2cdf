"""
RecordForm: the form shell tying field layout, bindings and publishing together.

Each render asks views() for the props of every field; a presentation
widget receives a FieldView and calls the handlers on its binding. The
Publish button maps to publish(), which always sends publish=True.
"""

import asyncio
from dataclasses import dataclass
import logging
from typing import Any, Dict, List, Optional, Sequence

from recordform.binding import Binding, FieldBinder, ListBinding, ScalarBinding
from recordform.config import FormConfig, get_current_form_config
from recordform.errors import FieldKindError, UnknownFieldError
from recordform.persistence import create_record_api
from recordform.publish_model import PublishOutcome
from recordform.record_model import Record
from recordform.record_store import RecordStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FieldSpec:
    """Layout entry: which Record field a form group edits."""
    id: str
    label: str
    iterable: bool = False


DEFAULT_FIELDS = (
    FieldSpec('title', 'Title'),
    FieldSpec('year', 'Year'),
    FieldSpec('upcoming', 'Upcoming'),
    FieldSpec('description', 'Description'),
    FieldSpec('cast', 'Cast', iterable=True),
)


@dataclass(frozen=True)
class FieldView:
    """Props handed to a presentation widget for one render."""
    id: str
    label: str
    value: Any
    binding: Binding

    @property
    def iterable(self) -> bool:
        return self.binding.iterable


class RecordForm:
    """Single-page editor for one Record."""

    def __init__(self, store: RecordStore, fields: Sequence[FieldSpec] = DEFAULT_FIELDS):
        self.store = store
        self.binder = FieldBinder(store)
        self.fields = tuple(fields)
        self._bindings: Dict[str, Binding] = {}
        for spec in self.fields:
            if spec.id in self._bindings:
                raise ValueError(f"Duplicate field in form layout: {spec.id!r}")
            self._bindings[spec.id] = self.binder.bind(spec.id, iterable=spec.iterable)

    @classmethod
    def from_config(cls, config: Optional[FormConfig] = None, initial: Optional[Record] = None) -> 'RecordForm':
        """Build a form whose store posts through the configured collaborator."""
        config = config or get_current_form_config()
        store = RecordStore(create_record_api(config), initial=initial)
        return cls(store)

    def binding(self, field_id: str) -> Binding:
        try:
            return self._bindings[field_id]
        except KeyError:
            raise UnknownFieldError(field_id) from None

    def scalar(self, field_id: str) -> ScalarBinding:
        binding = self.binding(field_id)
        if not isinstance(binding, ScalarBinding):
            raise FieldKindError(f"Field {field_id!r} is repeatable, not scalar")
        return binding

    def repeatable(self, field_id: str) -> ListBinding:
        binding = self.binding(field_id)
        if not isinstance(binding, ListBinding):
            raise FieldKindError(f"Field {field_id!r} is scalar, not repeatable")
        return binding

    def views(self) -> List[FieldView]:
        """Props for every field, reading values from one snapshot."""
        record = self.store.current()
        return [
            FieldView(id=spec.id, label=spec.label, value=getattr(record, spec.id), binding=self._bindings[spec.id])
            for spec in self.fields
        ]

    def publish(self) -> 'asyncio.Task[PublishOutcome]':
        """The Publish button: send the full current record with publish=True."""
        logger.debug("Publish requested")
        return self.store.publish(True)
