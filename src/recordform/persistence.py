"""
Persistence collaborators for record snapshots.

A collaborator exposes one coroutine, post(payload), where payload is the
full record plus a ``publish`` flag. It returns a result on success and
raises on failure; the RecordStore turns either into a PublishOutcome.
"""

from abc import ABC, abstractmethod
import asyncio
import copy
import logging
from typing import Any, Dict, List, Optional

import httpx

from recordform.config import FormConfig, get_current_form_config
from recordform.errors import PersistenceError

logger = logging.getLogger(__name__)


class RecordApi(ABC):
    """Asynchronous sink for record snapshots."""

    @abstractmethod
    async def post(self, payload: Dict[str, Any]) -> Any:
        """Persist one payload and return the collaborator's result."""


class MockRecordApi(RecordApi):
    """In-process stand-in for a record backend.

    Waits ``latency`` seconds, remembers every payload it accepted, and echoes
    it back. Set ``fail_with`` to an exception to make every post fail.
    """

    def __init__(self, latency: float = 0.0, fail_with: Optional[BaseException] = None):
        self.latency = latency
        self.fail_with = fail_with
        self.posted: List[Dict[str, Any]] = []

    async def post(self, payload: Dict[str, Any]) -> Any:
        if self.latency:
            await asyncio.sleep(self.latency)
        else:
            # Always yield once so callers see a real suspension point
            await asyncio.sleep(0)
        if self.fail_with is not None:
            raise self.fail_with
        accepted = copy.deepcopy(payload)
        self.posted.append(accepted)
        logger.debug(f"MockRecordApi accepted payload #{len(self.posted)}: publish={accepted.get('publish')}")
        return {'status': 'ok', 'received': accepted}


class HttpRecordApi(RecordApi):
    """Posts record payloads as JSON to an HTTP endpoint."""

    def __init__(
        self,
        url: str,
        *,
        timeout: float = 10.0,
        headers: Optional[Dict[str, str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.url = url
        self.timeout = timeout
        self.headers = dict(headers or {})
        self._transport = transport

    async def post(self, payload: Dict[str, Any]) -> Any:
        async with httpx.AsyncClient(timeout=self.timeout, headers=self.headers, transport=self._transport) as client:
            try:
                response = await client.post(self.url, json=payload)
                response.raise_for_status()
            except httpx.HTTPStatusError as exc:
                raise PersistenceError(
                    f"Record post to {self.url} failed with status {exc.response.status_code}"
                ) from exc
            except httpx.HTTPError as exc:
                raise PersistenceError(f"Record post to {self.url} failed: {exc}") from exc
        logger.debug(f"HttpRecordApi: {self.url} answered {response.status_code}")
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise PersistenceError(f"Record post to {self.url} returned invalid JSON") from exc


def create_record_api(config: Optional[FormConfig] = None) -> RecordApi:
    """Build the collaborator a config selects (HTTP when api_url is set)."""
    config = config or get_current_form_config()
    if config.api_url:
        logger.debug(f"Using HttpRecordApi for {config.api_url}")
        return HttpRecordApi(config.api_url, timeout=config.request_timeout, headers=config.headers)
    logger.debug("Using MockRecordApi (no api_url configured)")
    return MockRecordApi(latency=config.mock_latency)
