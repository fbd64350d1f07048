"""
Clinic registration models, dood!
"""

from dataclasses import dataclass
from typing import Any, Optional, TypedDict


class SubmissionPayload(TypedDict):
    """Clinic registration request body: flat object of six strings"""

    city: str
    country: str
    name: str
    state: str
    streetAddress: str
    zipCode: str


@dataclass(frozen=True)
class SubmissionOutcome:
    """Result of one submission attempt.

    Attributes:
        delivered: Request reached server and got 2xx response
        statusCode: HTTP status, None if no response was received
        body: Parsed JSON response, or raw text if it is not JSON
        error: Error description if request failed
    """

    delivered: bool
    statusCode: Optional[int] = None
    body: Any = None
    error: Optional[str] = None
