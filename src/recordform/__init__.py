"""
Field-binding and repeatable-list editing model for a single-record form.

A RecordStore owns the edited Record and changes it only through shallow
deltas. A FieldBinder turns widget events into those deltas: scalar fields
get change/blur handlers, repeatable fields get create/update/delete
handlers keyed by application-assigned identifiers. Saving runs as an
asyncio task that resolves to a PublishOutcome.

Quick Start:
    >>> import asyncio
    >>> from recordform import RecordForm, MockRecordApi, RecordStore
    >>>
    >>> async def main():
    ...     form = RecordForm(RecordStore(MockRecordApi()))
    ...     form.scalar('title').on_change('Inception')
    ...     form.repeatable('cast').on_create({'name': 'Leonardo DiCaprio'})
    ...     outcome = await form.publish()
    ...     return outcome.ok
    >>>
    >>> asyncio.run(main())
    True

Modules:
    - record_model: Record / CastMember dataclasses and shallow merge
    - record_store: Owned state container with publish dispatch
    - binding: Scalar and list bindings, FieldBinder factory
    - identifiers: Collision-free identifier source
    - persistence: Mock and HTTP persistence collaborators
    - publish_model: PublishOutcome result type
    - form: Field layout and the form shell
    - config: FormConfig and current-config storage
"""

from recordform.errors import (
    RecordFormError,
    UnknownFieldError,
    FieldKindError,
    PersistenceError,
)

# Model
from recordform.record_model import (
    Record,
    CastMember,
    DEFAULT_RECORD_VALUES,
    merge_delta,
)

# Identifiers
from recordform.identifiers import IdentifierSource

# Outcome
from recordform.publish_model import PublishOutcome

# Persistence
from recordform.persistence import (
    RecordApi,
    MockRecordApi,
    HttpRecordApi,
    create_record_api,
)

# Store
from recordform.record_store import RecordStore

# Binding
from recordform.binding import FieldBinder, ScalarBinding, ListBinding

# Form
from recordform.form import RecordForm, FieldSpec, FieldView, DEFAULT_FIELDS

# Configuration
from recordform.config import (
    FormConfig,
    FormSettings,
    set_current_form_config,
    get_current_form_config,
    clear_current_form_config,
)

__all__ = [
    # Errors
    'RecordFormError',
    'UnknownFieldError',
    'FieldKindError',
    'PersistenceError',
    # Model
    'Record',
    'CastMember',
    'DEFAULT_RECORD_VALUES',
    'merge_delta',
    'IdentifierSource',
    'PublishOutcome',
    # Persistence
    'RecordApi',
    'MockRecordApi',
    'HttpRecordApi',
    'create_record_api',
    # Store and binding
    'RecordStore',
    'FieldBinder',
    'ScalarBinding',
    'ListBinding',
    # Form
    'RecordForm',
    'FieldSpec',
    'FieldView',
    'DEFAULT_FIELDS',
    # Configuration
    'FormConfig',
    'FormSettings',
    'set_current_form_config',
    'get_current_form_config',
    'clear_current_form_config',
]

__version__ = '1.0.0'
__description__ = 'Field-binding and repeatable-list editing model for record forms'
