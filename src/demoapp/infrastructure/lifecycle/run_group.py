"""
Run group supervision.

Runs a fixed set of actors concurrently. The first actor to return (or
fail) ends the group: every actor is interrupted, all are awaited, and
the first error becomes the group's result.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Dict, List, Optional


class Actor(ABC):
    """
    Unit of concurrent work with an execute/interrupt pair.

    ``execute`` runs until the actor's work ends or it is interrupted.
    ``interrupt`` must make a running ``execute`` return promptly and must
    be safe to call before ``execute`` starts, after it finished, and more
    than once.
    """

    name: str = "actor"

    @abstractmethod
    async def execute(self) -> None:
        """Run the actor; raising reports an error to the group."""

    @abstractmethod
    def interrupt(self, error: Optional[BaseException]) -> None:
        """
        Ask the actor to stop.

        Args:
            error: Result of the actor that ended the group
        """


class RunGroup:
    """
    First-exit-cancels-all supervisor.

    Example:
        group = RunGroup()
        group.add(SignalActor(...))
        group.add(ServerActor(...))
        error = await group.run()
    """

    def __init__(self):
        self._actors: List[Actor] = []

    def add(self, actor: Actor) -> None:
        """
        Add an actor; must be called before ``run``.

        Args:
            actor: Actor to supervise
        """
        self._actors.append(actor)

    @property
    def actors(self) -> List[Actor]:
        """Registered actors in insertion order."""
        return list(self._actors)

    async def run(self) -> Optional[BaseException]:
        """
        Run all actors until the first one returns.

        Returns:
            First actor error, or None if the group ended cleanly
        """
        if not self._actors:
            return None

        tasks: Dict[asyncio.Task, Actor] = {
            asyncio.create_task(actor.execute(), name=actor.name): actor
            for actor in self._actors
        }

        try:
            done, _ = await asyncio.wait(
                tasks.keys(), return_when=asyncio.FIRST_COMPLETED
            )
        except asyncio.CancelledError:
            self._interrupt_all(None)
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        first = self._first_finished(done, tasks)
        first_error = self._task_error(first)

        self._interrupt_all(first_error)
        await asyncio.gather(*tasks, return_exceptions=True)

        if first_error is not None:
            return first_error

        for task in tasks:
            error = self._task_error(task)
            if error is not None:
                return error
        return None

    def _interrupt_all(self, error: Optional[BaseException]) -> None:
        for actor in self._actors:
            actor.interrupt(error)

    def _first_finished(self, done, tasks: Dict[asyncio.Task, Actor]) -> asyncio.Task:
        # Several tasks can finish in one iteration; earliest registered wins
        for task in tasks:
            if task in done:
                return task
        raise RuntimeError("no finished task")

    @staticmethod
    def _task_error(task: asyncio.Task) -> Optional[BaseException]:
        if task.cancelled():
            return asyncio.CancelledError()
        return task.exception()
