"""
Base class for asynchronous suggestion providers.

Each ``start`` runs the provider's ``run`` coroutine as its own asyncio task and
``stop`` cancels it. Batches emitted after ``stop`` are dropped, and failures
inside ``run`` are logged instead of propagating, so a broken provider simply
contributes nothing to that query.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from typing import Optional

from omnibox.domain.protocols import ResultsCallback
from omnibox.domain.types import AutocompleteInput, AutocompleteMatch
from omnibox.logger import get_logger

logger = get_logger("providers")


class BaseProvider(ABC):
    """Shared start/stop lifecycle for providers that suspend on lookups."""

    name: str = "BaseProvider"

    def __init__(self) -> None:
        self._task: Optional[asyncio.Task] = None
        self._run_token: Optional[object] = None

    def start(self, input: AutocompleteInput, on_results: ResultsCallback) -> None:
        self.stop()
        token = object()
        self._run_token = token

        def emit(matches: list[AutocompleteMatch]) -> None:
            if self._run_token is not token:
                logger.debug(f"{self.name}: dropping batch emitted after stop")
                return
            on_results(matches)

        self._task = asyncio.create_task(self._run_safely(input, emit), name=f"{self.name}-run")

    def stop(self) -> None:
        self._run_token = None
        if self._task and not self._task.done():
            self._task.cancel()
            logger.debug(f"{self.name}: cancelled in-flight lookup")
        self._task = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def wait(self) -> None:
        """Wait for the lookup started by the latest ``start`` to finish or be cancelled."""
        task = self._task
        if task is not None and not task.done():
            # asyncio.wait leaves the task running if this waiter is cancelled
            await asyncio.wait({task})

    async def _run_safely(self, input: AutocompleteInput, emit: ResultsCallback) -> None:
        try:
            await self.run(input, emit)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.error(f"{self.name} failed for '{input.text}': {e}", exc_info=True)

    def emit_now(self, on_results: ResultsCallback, matches: list[AutocompleteMatch]) -> None:
        """Cancel pending work and deliver ``matches`` synchronously."""
        self.stop()
        on_results(matches)

    @abstractmethod
    async def run(self, input: AutocompleteInput, emit: ResultsCallback) -> None:
        """Produce batches for ``input``; each ``emit`` replaces the previous one."""
        ...
