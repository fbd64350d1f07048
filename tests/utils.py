"""
Test utility functions and helpers.

Helpers for faking httpx responses and waiting on asyncio timers.
"""

import asyncio
from typing import Any, Optional
from unittest.mock import MagicMock

import httpx

# Short quiet window keeps timing tests fast
TEST_DEBOUNCE_DELAY = 0.05

# ============================================================================
# HTTP Utilities
# ============================================================================


def createHttpResponse(statusCode: int = 200, jsonData: Any = None, text: Optional[str] = None) -> httpx.Response:
    """
    Create a real httpx.Response for mocked clients.

    Args:
        statusCode: HTTP status (default: 200)
        jsonData: JSON body, used when text is None
        text: Raw text body

    Returns:
        httpx.Response: Response instance
    """
    if text is not None:
        return httpx.Response(statusCode, text=text)
    return httpx.Response(statusCode, json=jsonData)


def mockAsyncClientPost(mockClient: MagicMock, response: Any = None, error: Optional[Exception] = None) -> MagicMock:
    """
    Configure patched httpx.AsyncClient so that post() returns response or raises error.

    Returns:
        MagicMock: The session object post() is called on
    """
    session = mockClient.return_value.__aenter__.return_value
    if error is not None:
        session.post.side_effect = error
    else:
        session.post.return_value = response
    return session


# ============================================================================
# Async Utilities
# ============================================================================


async def waitDebounce(delay: float, factor: float = 3.0) -> None:
    """Sleep long enough for debounce window to elapse and lookups to run."""
    await asyncio.sleep(delay * factor)
