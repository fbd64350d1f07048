"""
Debounced place search: turns live search text into place lookups, dood!
"""

import asyncio
import logging
from typing import Optional

from lib.debounce import Debouncer

from .errors import PlaceLookupError
from .providers import PlaceLookupProvider
from .store import LocationStore

logger = logging.getLogger(__name__)

DEFAULT_DEBOUNCE_DELAY = 0.5


class PlaceSearch:
    """Search debouncer feeding ``LocationStore.fetchedPlaces``, dood!

    - Text changes restart a quiet window; only settled text is looked up.
    - Settled text equal to previously settled text is ignored.
    - Empty settled text clears results without calling provider.
    - Lookup is done with lower-cased text. A new lookup cancels the previous
      one, and a superseded lookup never touches results (last issued wins).
    - Lookup failures are logged and leave results as they were.
    - After ``close()`` nothing changes state anymore.
    """

    def __init__(
        self,
        provider: PlaceLookupProvider,
        store: LocationStore,
        debounceDelay: float = DEFAULT_DEBOUNCE_DELAY,
    ):
        self.provider = provider
        self.store = store
        self._debouncer = Debouncer[str](debounceDelay, name="place-search")
        self._consumerTask: Optional[asyncio.Task] = None
        self._lookupTask: Optional[asyncio.Task] = None
        self._closed = False

    @property
    def debounceDelay(self) -> float:
        return self._debouncer.delay

    def start(self) -> None:
        """Start consuming settled search text. Idempotent."""
        if self._closed:
            raise RuntimeError("PlaceSearch is closed")
        if self._consumerTask is None:
            self._consumerTask = asyncio.create_task(self._consume(), name="place-search-consumer")

    def setSearchText(self, text: str) -> None:
        """Update search text from the search field"""
        if self._closed:
            logger.debug("Search text change after close ignored")
            return
        self.start()
        self.store.setSearchText(text)
        self._debouncer.push(text)

    async def _consume(self) -> None:
        async for value in self._debouncer:
            self._onSettled(value)

    def _onSettled(self, value: str) -> None:
        if self._lookupTask is not None and not self._lookupTask.done():
            logger.debug("Cancelling superseded place lookup")
            self._lookupTask.cancel()
        self._lookupTask = None

        if value == "":
            self.store.setFetchedPlaces(None)
            return

        self._lookupTask = asyncio.create_task(self._fetchPlaces(value), name=f"place-lookup:{value}")

    async def _fetchPlaces(self, value: str) -> None:
        try:
            places = await self.provider.searchPlaces(value.lower())
        except PlaceLookupError as e:
            logger.warning(f"Place lookup for {value!r} failed: {e}")
            return
        except Exception as e:
            logger.error(f"Unexpected error during place lookup for {value!r}: {e}")
            logger.exception(e)
            return

        if self._closed or asyncio.current_task() is not self._lookupTask:
            logger.debug(f"Discarding results of superseded lookup {value!r}")
            return

        self.store.setFetchedPlaces(places)

    async def waitIdle(self) -> None:
        """Wait until no search text is pending and no lookup is running"""
        while not self._closed:
            task = self._lookupTask
            if task is not None and not task.done():
                await asyncio.wait({task})
            elif not self._debouncer.idle:
                await asyncio.sleep(min(self._debouncer.delay, 0.05) or 0)
            else:
                return

    async def close(self) -> None:
        """Stop watching search text and abandon pending lookup"""
        if self._closed:
            return
        self._closed = True
        self._debouncer.close()

        tasks = [task for task in (self._lookupTask, self._consumerTask) if task is not None]
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self._lookupTask = None
        self._consumerTask = None
        logger.debug("Place search closed")
