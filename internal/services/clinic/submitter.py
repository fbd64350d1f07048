"""
Clinic Submitter

Sends the resolved clinic address to the health provider registration API.
Submission is fire-and-forget for the UI: nothing is retried and nothing is
raised, the outcome is only logged and returned, dood!
"""

import asyncio
import json
import logging
from collections.abc import MutableSet
from typing import Any, Dict, Optional

import httpx

import lib.utils as utils

from .models import SubmissionOutcome, SubmissionPayload

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT = "https://sandbox.demo.sainahealth.com/api/HealthProviders/CreateHealthProvider"

REQUEST_HEADERS = {
    "Accept": "text/plain",
    "Content-Type": "application/json-patch+json",
}


class SubmissionError(Exception):
    """Base class for submission errors"""


class SubmissionTransportError(SubmissionError):
    """Network or serialization failure while posting clinic"""


class ClinicSubmitter:
    """POSTs SubmissionPayload to clinic registration endpoint, dood!

    Example:
        >>> submitter = ClinicSubmitter()
        >>> outcome = await submitter.submit(store.state.payload)
        >>> submitter.fireAndForget(store.state.payload)  # UI does not wait
    """

    def __init__(self, endpoint: str = DEFAULT_ENDPOINT, requestTimeout: Optional[float] = None):
        """
        Args:
            endpoint: Registration endpoint URL
            requestTimeout: Request timeout in seconds, None keeps httpx default
        """
        self.endpoint = endpoint
        self.requestTimeout = requestTimeout
        self.backgroundTasks: MutableSet[asyncio.Task] = set[asyncio.Task]()

    def _buildBody(self, payload: Optional[SubmissionPayload]) -> str:
        try:
            return utils.jsonDumps(dict(payload) if payload else {})
        except (TypeError, ValueError) as e:
            raise SubmissionTransportError(f"Cannot serialize payload: {e}") from e

    async def _post(self, body: str) -> httpx.Response:
        clientKwargs: Dict[str, Any] = {}
        if self.requestTimeout is not None:
            clientKwargs["timeout"] = self.requestTimeout

        try:
            async with httpx.AsyncClient(**clientKwargs) as session:
                return await session.post(self.endpoint, content=body.encode("utf-8"), headers=REQUEST_HEADERS)
        except httpx.HTTPError as e:
            raise SubmissionTransportError(f"{type(e).__name__}: {e}") from e

    async def submit(self, payload: Optional[SubmissionPayload]) -> SubmissionOutcome:
        """Submit payload once. Never raises.

        Args:
            payload: Clinic address payload, None sends empty object

        Returns:
            SubmissionOutcome describing what happened
        """
        try:
            body = self._buildBody(payload)
            logger.debug(f"Submitting clinic to {self.endpoint}: {body}")
            response = await self._post(body)
        except SubmissionTransportError as e:
            logger.error(f"Clinic submission failed: {e}")
            return SubmissionOutcome(delivered=False, error=str(e))

        try:
            responseBody: Any = response.json()
        except (json.JSONDecodeError, ValueError):
            responseBody = response.text

        delivered = response.is_success
        if delivered:
            logger.info(f"Clinic submitted, status {response.status_code}: {responseBody}")
        else:
            logger.warning(f"Clinic submission rejected, status {response.status_code}: {responseBody}")

        return SubmissionOutcome(delivered=delivered, statusCode=response.status_code, body=responseBody)

    def fireAndForget(self, payload: Optional[SubmissionPayload]) -> asyncio.Task:
        """Schedule submission in background and return immediately"""
        task = asyncio.create_task(self.submit(payload), name="clinic-submit")
        self.backgroundTasks.add(task)
        task.add_done_callback(self.backgroundTasks.discard)
        return task
