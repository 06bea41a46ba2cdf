"""
PublishOutcome: typed result of one persistence call.

Every publish resolves to an outcome rather than raising, so a failed save
is a reportable value that observers and callers can inspect.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class PublishOutcome:
    """Immutable result of posting one record snapshot.

    payload is exactly what was handed to the persistence collaborator:
    the record snapshot taken at call time plus the ``publish`` flag.
    """
    payload: Dict[str, Any]
    published: bool
    result: Any = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, payload: Dict[str, Any], result: Any) -> 'PublishOutcome':
        return cls(payload=payload, published=payload['publish'], result=result)

    @classmethod
    def failure(cls, payload: Dict[str, Any], error: BaseException) -> 'PublishOutcome':
        return cls(payload=payload, published=payload['publish'], error=error)

    def to_dict(self) -> Dict[str, Any]:
        """Export to JSON-serializable dict (error rendered as text)."""
        return {
            'payload': self.payload,
            'published': self.published,
            'result': self.result,
            'error': None if self.error is None else f"{type(self.error).__name__}: {self.error}",
        }
