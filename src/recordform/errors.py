"""Exception hierarchy for recordform."""


class RecordFormError(Exception):
    """Base exception for recordform failures."""


class UnknownFieldError(RecordFormError, KeyError):
    """Raised when a field identifier does not name a Record field."""


class FieldKindError(RecordFormError):
    """Raised when a binding of the wrong kind is requested for a field."""


class PersistenceError(RecordFormError):
    """Raised by a persistence collaborator when a post fails."""
