"""
Debounce Library

Asyncio debouncer turning a burst of input values into a lazy sequence of
settled, distinct values.

Example:
    >>> from lib.debounce import Debouncer
    >>>
    >>> debouncer = Debouncer[str](0.5)
    >>> debouncer.push("cafe")
    >>> async for query in debouncer:
    ...     await search(query)
"""

from .debouncer import Debouncer

__all__ = [
    "Debouncer",
]
