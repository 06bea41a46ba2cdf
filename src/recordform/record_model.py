"""
Record and CastMember dataclasses for the edited entity.

Design Philosophy:
- Immutable snapshots (frozen dataclasses, cast held as a tuple)
- One mutation primitive: merge_delta() builds a NEW Record
- Shallow merge only: nested values such as cast are replaced wholesale
"""

from dataclasses import dataclass, field, fields as dataclass_fields, replace
import logging
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CastMember:
    """One item of the repeatable cast list.

    The identifier is assigned by the application when the item is created
    and never reassigned. Everything else the caller supplied lives in
    ``attributes``.
    """
    id: int
    attributes: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        # Freeze the attribute mapping so snapshots stay read-only
        object.__setattr__(self, 'attributes', MappingProxyType(dict(self.attributes)))

    def __hash__(self):
        # Equal members share an id; attribute values may be unhashable
        return hash(self.id)

    def __eq__(self, other):
        if not isinstance(other, CastMember):
            return NotImplemented
        return self.id == other.id and dict(self.attributes) == dict(other.attributes)

    def __getitem__(self, name: str) -> Any:
        if name == 'id':
            return self.id
        return self.attributes[name]

    def get(self, name: str, default: Any = None) -> Any:
        try:
            return self[name]
        except KeyError:
            return default

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'CastMember':
        """Build from a flat mapping whose ``id`` key carries the identifier."""
        if 'id' not in data:
            raise ValueError(f"Cast member mapping has no 'id': {dict(data)!r}")
        attributes = {k: v for k, v in data.items() if k != 'id'}
        return cls(id=data['id'], attributes=attributes)

    def to_dict(self) -> Dict[str, Any]:
        """Export to a flat JSON-serializable dict (attributes plus ``id``)."""
        return {**self.attributes, 'id': self.id}


def as_cast_member(item: Any) -> CastMember:
    """Normalize a mapping or CastMember into a CastMember."""
    if isinstance(item, CastMember):
        return item
    if isinstance(item, Mapping):
        return CastMember.from_dict(item)
    raise TypeError(f"Expected CastMember or mapping, got {type(item).__name__}")


@dataclass(frozen=True)
class Record:
    """The single edited entity.

    All fields are always present. Defaults match the initial form state:
    empty title and description, rating 0, no year, upcoming, no cast.
    """
    title: str = ""
    rating: float = 0
    year: Optional[int] = None
    description: str = ""
    upcoming: bool = True
    cast: Tuple[CastMember, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, 'cast', tuple(as_cast_member(item) for item in self.cast))

    @classmethod
    def field_names(cls) -> Tuple[str, ...]:
        return tuple(f.name for f in dataclass_fields(cls))

    @classmethod
    def repeatable_fields(cls) -> Tuple[str, ...]:
        """Fields whose value is an ordered sequence of identified items."""
        return ("cast",)

    def to_dict(self) -> Dict[str, Any]:
        """Export to JSON-serializable dict."""
        return {
            'title': self.title,
            'rating': self.rating,
            'year': self.year,
            'description': self.description,
            'upcoming': self.upcoming,
            'cast': [member.to_dict() for member in self.cast],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'Record':
        """Import from dict, applying defaults for missing fields."""
        return merge_delta(cls(), data)


DEFAULT_RECORD_VALUES: Mapping[str, Any] = MappingProxyType(Record().to_dict())


def changed_fields(old: Record, new: Record) -> set:
    """Names of fields whose values differ between two records."""
    return {name for name in Record.field_names() if getattr(old, name) != getattr(new, name)}


def merge_delta(record: Record, delta: Mapping[str, Any]) -> Record:
    """Shallow-merge a delta over a record, returning a NEW Record.

    Only the named fields change. Keys that are not Record fields are
    ignored so a merge can never add or remove a field.
    """
    known = set(Record.field_names())
    overrides = {}
    for name, value in delta.items():
        if name not in known:
            logger.warning(f"Ignoring delta key {name!r}: not a Record field. Available: {sorted(known)}")
            continue
        overrides[name] = value
    if not overrides:
        return record
    return replace(record, **overrides)
