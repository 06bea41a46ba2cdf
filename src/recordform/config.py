"""
Form configuration and its module-level storage.

FormSettings loads RECORDFORM_* environment variables through
pydantic-settings. The resulting FormConfig is held in thread-local storage:
one slot that application startup (or a test) sets, and that factories read
when they are not handed an explicit config.
"""

from dataclasses import dataclass, field
import logging
import threading
from typing import Dict, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class FormSettings(BaseSettings):
    """Environment-derived settings (RECORDFORM_API_URL, ...)."""
    api_url: Optional[str] = Field(default=None)
    request_timeout: float = Field(default=10.0, gt=0)
    mock_latency: float = Field(default=0.0, ge=0)

    model_config = SettingsConfigDict(env_prefix="RECORDFORM_", extra="ignore")

    @field_validator("api_url", mode="before")
    @classmethod
    def _blank_url_is_unset(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


@dataclass(frozen=True)
class FormConfig:
    """Settings for the persistence collaborator.

    api_url: Endpoint the HTTP transport posts records to. None selects the
             in-process mock transport.
    request_timeout: Seconds before an HTTP post is abandoned.
    mock_latency: Seconds the mock transport waits before answering.
    headers: Extra HTTP headers sent with every post.
    """
    api_url: Optional[str] = None
    request_timeout: float = 10.0
    mock_latency: float = 0.0
    headers: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_settings(cls, settings: FormSettings) -> 'FormConfig':
        return cls(
            api_url=settings.api_url,
            request_timeout=settings.request_timeout,
            mock_latency=settings.mock_latency,
        )

    @classmethod
    def from_env(cls) -> 'FormConfig':
        """Build a config from RECORDFORM_* environment variables.

        Raises:
            pydantic.ValidationError: a variable holds an invalid value
        """
        return cls.from_settings(FormSettings())


_form_config_context = threading.local()


def set_current_form_config(config: FormConfig) -> None:
    """Set the config that factories use when none is passed explicitly.

    Called when:
    - App startup loads settings
    - Tests install a specific transport setup
    """
    _form_config_context.value = config
    logger.debug(f"Form config set: api_url={config.api_url!r}")


def get_current_form_config() -> FormConfig:
    """Get the current config, or a default FormConfig if none was set."""
    config = getattr(_form_config_context, 'value', None)
    return config if config is not None else FormConfig()


def clear_current_form_config() -> None:
    """Forget the current config (falls back to defaults)."""
    if hasattr(_form_config_context, 'value'):
        del _form_config_context.value
