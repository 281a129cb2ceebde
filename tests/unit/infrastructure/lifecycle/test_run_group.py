"""
Unit tests for RunGroup.

Tests first-exit-cancels-all supervision and error selection.
"""

import asyncio
from typing import List, Optional

import pytest

from demoapp.infrastructure.lifecycle import Actor, RunGroup


class FakeActor(Actor):
    """Actor that finishes on demand or when interrupted."""

    def __init__(self, name: str, delay: Optional[float] = None, error=None,
                 interrupt_error=None):
        self.name = name
        self.delay = delay
        self.error = error
        self.interrupt_error = interrupt_error
        self.interrupted_with: List[Optional[BaseException]] = []
        self._stop = asyncio.Event()

    async def execute(self) -> None:
        if self.delay is not None:
            await asyncio.sleep(self.delay)
            if self.error:
                raise self.error
            return
        await self._stop.wait()
        if self.interrupt_error:
            raise self.interrupt_error

    def interrupt(self, error: Optional[BaseException]) -> None:
        self.interrupted_with.append(error)
        self._stop.set()


class TestRunGroup:
    """Unit tests for RunGroup."""

    async def test_empty_group(self):
        """Test an empty group returns immediately."""
        assert await RunGroup().run() is None

    async def test_first_clean_exit_interrupts_all(self):
        """Test every actor is interrupted when one returns."""
        quick = FakeActor("quick", delay=0.01)
        idle_a = FakeActor("idle-a")
        idle_b = FakeActor("idle-b")
        group = RunGroup()
        for actor in (idle_a, quick, idle_b):
            group.add(actor)

        error = await asyncio.wait_for(group.run(), timeout=2.0)

        assert error is None
        for actor in (idle_a, quick, idle_b):
            assert actor.interrupted_with == [None]

    async def test_first_error_is_result(self):
        """Test the first finisher's error is returned and propagated."""
        boom = RuntimeError("boom")
        failing = FakeActor("failing", delay=0.01, error=boom)
        idle = FakeActor("idle")
        group = RunGroup()
        group.add(idle)
        group.add(failing)

        error = await asyncio.wait_for(group.run(), timeout=2.0)

        assert error is boom
        assert idle.interrupted_with == [boom]

    async def test_later_error_reported_when_first_was_clean(self):
        """Test an error raised during interruption is not lost."""
        late = RuntimeError("late")
        quick = FakeActor("quick", delay=0.01)
        noisy = FakeActor("noisy", interrupt_error=late)
        group = RunGroup()
        group.add(quick)
        group.add(noisy)

        error = await asyncio.wait_for(group.run(), timeout=2.0)

        assert error is late

    async def test_cancel_interrupts_and_reraises(self):
        """Test cancelling run() interrupts every actor."""
        idle = FakeActor("idle")
        group = RunGroup()
        group.add(idle)
        task = asyncio.create_task(group.run())
        await asyncio.sleep(0.01)

        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task
        assert idle.interrupted_with == [None]

    def test_actors_listed_in_order(self):
        """Test actors keep their registration order."""
        group = RunGroup()
        first, second = FakeActor("first"), FakeActor("second")
        group.add(first)
        group.add(second)

        assert group.actors == [first, second]
