"""
Tests for asyncio Debouncer, dood!
"""

import asyncio
from typing import List

import pytest

from lib.debounce import Debouncer

DELAY = 0.05


async def collect(debouncer: Debouncer[str], into: List[str]) -> None:
    async for value in debouncer:
        into.append(value)


@pytest.fixture
async def runningDebouncer():
    """Debouncer with consumer task collecting settled values"""
    debouncer = Debouncer[str](DELAY)
    settled: List[str] = []
    consumer = asyncio.create_task(collect(debouncer, settled))
    yield debouncer, settled
    debouncer.close()
    await asyncio.wait_for(consumer, timeout=1)


class TestDebouncer:
    """Quiet window and duplicate suppression"""

    @pytest.mark.asyncio
    async def testBurstSettlesOnce(self, runningDebouncer):
        debouncer, settled = runningDebouncer

        for text in ("N", "Ne", "New"):
            debouncer.push(text)
            await asyncio.sleep(DELAY / 5)
        assert debouncer.pending
        await asyncio.sleep(DELAY * 3)

        assert settled == ["New"]
        assert debouncer.lastEmitted == "New"
        assert debouncer.idle

    @pytest.mark.asyncio
    async def testSeparatedValuesSettleSeparately(self, runningDebouncer):
        debouncer, settled = runningDebouncer

        debouncer.push("Cafe")
        await asyncio.sleep(DELAY * 3)
        debouncer.push("Clinic")
        await asyncio.sleep(DELAY * 3)

        assert settled == ["Cafe", "Clinic"]

    @pytest.mark.asyncio
    async def testDuplicateAgainstLastEmitted(self, runningDebouncer):
        debouncer, settled = runningDebouncer

        debouncer.push("Cafe")
        await asyncio.sleep(DELAY * 3)
        # Cleared and retyped within one window
        debouncer.push("")
        debouncer.push("Cafe")
        await asyncio.sleep(DELAY * 3)

        assert settled == ["Cafe"]

    @pytest.mark.asyncio
    async def testDuplicatesKeptWhenDisabled(self):
        debouncer = Debouncer[str](DELAY, removeDuplicates=False)
        settled: List[str] = []
        consumer = asyncio.create_task(collect(debouncer, settled))

        debouncer.push("Cafe")
        await asyncio.sleep(DELAY * 3)
        debouncer.push("Cafe")
        await asyncio.sleep(DELAY * 3)
        debouncer.close()
        await asyncio.wait_for(consumer, timeout=1)

        assert settled == ["Cafe", "Cafe"]

    def testNegativeDelay(self):
        with pytest.raises(ValueError):
            Debouncer[str](-1)


class TestDebouncerClose:
    """Teardown behaviour"""

    @pytest.mark.asyncio
    async def testCloseCancelsPendingTimer(self):
        debouncer = Debouncer[str](DELAY)
        settled: List[str] = []
        consumer = asyncio.create_task(collect(debouncer, settled))

        debouncer.push("Austin")
        debouncer.close()
        await asyncio.sleep(DELAY * 3)
        await asyncio.wait_for(consumer, timeout=1)

        assert settled == []
        assert debouncer.closed
        assert not debouncer.pending

    @pytest.mark.asyncio
    async def testPushAfterCloseIgnored(self):
        debouncer = Debouncer[str](DELAY)
        debouncer.close()
        debouncer.push("Austin")

        assert not debouncer.pending
        assert [value async for value in debouncer] == []

    @pytest.mark.asyncio
    async def testCloseDropsUnconsumedValues(self):
        debouncer = Debouncer[str](0)
        debouncer.push("Austin")
        await asyncio.sleep(0.01)
        assert not debouncer.idle

        debouncer.close()

        assert [value async for value in debouncer] == []
