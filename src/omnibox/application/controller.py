"""
Coordinates one autocomplete query across all providers.

Every new input mints a generation. Provider callbacks are tagged with the
generation they were dispatched for and post their batches onto a channel; the
channel worker applies a batch only if its tag is still the active generation.
``stop()`` on a provider is best-effort, so this tag check is what keeps a
superseded query's late results off the screen.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from omnibox.application.channel import MessageChannel
from omnibox.application.result import DEFAULT_MAX_RESULTS, AutocompleteResult
from omnibox.domain.protocols import AutocompleteProvider, ResultsCallback, UpdateCallback
from omnibox.domain.types import AutocompleteInput, AutocompleteMatch
from omnibox.logger import get_logger
from omnibox.utils import truncate

logger = get_logger("controller")


class QueryState(str, Enum):
    IDLE = "idle"
    QUERYING = "querying"


@dataclass(frozen=True, slots=True)
class ProviderBatch:
    """One provider's batch, tagged with the generation it belongs to."""

    generation: int
    provider_index: int
    provider_name: str
    matches: tuple[AutocompleteMatch, ...]


class AutocompleteController:
    """Fans a query out to providers and merges their batches into snapshots.

    Snapshots of the top matches go to ``on_update`` after every applied batch.
    The list may keep changing after typing stops as slower providers finish,
    but never shows data from an older generation.

    Example:
        ```python
        async with AutocompleteController(providers, render) as controller:
            controller.start(AutocompleteInput(text="git"))
            await controller.wait_until_idle()
        ```
    """

    def __init__(
        self,
        providers: Sequence[AutocompleteProvider],
        on_update: UpdateCallback,
        *,
        max_results: int = DEFAULT_MAX_RESULTS,
        provider_timeout: Optional[float] = 3.0,
    ) -> None:
        """
        Args:
            providers: Suggestion sources queried for every input
            on_update: Receives each top-N snapshot
            max_results: Size of the snapshot
            provider_timeout: Seconds after dispatch during which a provider's
                batches are accepted; later batches are dropped and the provider
                is stopped. None waits indefinitely.
        """
        self._providers = list(providers)
        self._on_update = on_update
        self._provider_timeout = provider_timeout
        self._result = AutocompleteResult(max_results=max_results)
        self._channel: MessageChannel[ProviderBatch] = MessageChannel(self._apply_batch, name="ProviderBatches")

        self._state = QueryState.IDLE
        self._generation = 0
        self._current_input: Optional[AutocompleteInput] = None
        self._contributions: dict[int, tuple[AutocompleteMatch, ...]] = {}
        self._expired: set[int] = set()
        self._deadlines: list[asyncio.TimerHandle] = []

    async def open(self) -> None:
        """Start the batch channel. Must run on the loop that drives the providers."""
        await self._channel.start()

    async def close(self) -> None:
        """Cancel any running query and shut the channel down."""
        self._stop_providers()
        self._cancel_deadlines()
        self._state = QueryState.IDLE
        await self._channel.stop()

    async def __aenter__(self) -> "AutocompleteController":
        await self.open()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    @property
    def state(self) -> QueryState:
        return self._state

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def current_input(self) -> Optional[AutocompleteInput]:
        return self._current_input

    @property
    def providers(self) -> list[AutocompleteProvider]:
        return list(self._providers)

    def start(self, input: AutocompleteInput) -> int:
        """
        Start a new query, superseding any query in flight.

        Returns:
            The generation minted for this input

        Raises:
            RuntimeError: If the controller has not been opened
        """
        if not self._channel.is_running:
            raise RuntimeError("AutocompleteController is not open. Call open() first.")

        self._stop_providers()
        self._cancel_deadlines()
        self._result.clear()
        self._contributions.clear()
        self._expired.clear()

        self._generation += 1
        generation = self._generation
        self._state = QueryState.QUERYING
        self._current_input = input
        logger.debug(
            f"Starting generation {generation} for '{truncate(input.text)}' "
            f"(type={input.type.value}, providers={len(self._providers)})"
        )

        for index, provider in enumerate(self._providers):
            try:
                provider.start(input, self._make_callback(generation, index, provider.name))
            except Exception as e:
                logger.error(f"Provider {provider.name} failed to start: {e}", exc_info=True)
                continue
            self._schedule_deadline(generation, index)

        self._emit(self._result.get_top_matches())
        return generation

    def stop(self) -> None:
        """Cancel the current query, clear results and emit an empty snapshot."""
        if self._state is QueryState.IDLE:
            return

        logger.debug(f"Stopping generation {self._generation}")
        self._stop_providers()
        self._cancel_deadlines()
        self._result.clear()
        self._contributions.clear()
        self._state = QueryState.IDLE
        self._current_input = None
        self._emit([])

    async def wait_until_idle(self, timeout: Optional[float] = None) -> bool:
        """Wait until every batch posted so far has been applied."""
        return await self._channel.wait_until_empty(timeout=timeout)

    async def settle(self, timeout: Optional[float] = None) -> bool:
        """
        Wait until in-flight provider lookups finish and their batches are applied.

        Only providers exposing ``is_running`` and an awaitable ``wait()`` (as
        ``BaseProvider`` does) are waited on; any other provider is treated as finished.

        Returns:
            True once settled, False if the timeout expired first
        """

        async def _settled() -> None:
            while True:
                busy = self._busy_providers()
                if busy:
                    await asyncio.gather(*(provider.wait() for provider in busy))
                await self._channel.wait_until_empty()
                if self._channel.pending == 0 and not self._busy_providers():
                    return

        try:
            await asyncio.wait_for(_settled(), timeout=timeout)
            return True
        except asyncio.TimeoutError:
            logger.warning("Timed out waiting for providers to settle")
            return False

    def _busy_providers(self) -> list[Any]:
        return [
            provider
            for provider in self._providers
            if getattr(provider, "is_running", False) and callable(getattr(provider, "wait", None))
        ]

    def top_matches(self) -> list[AutocompleteMatch]:
        return self._result.get_top_matches()

    def _make_callback(self, generation: int, index: int, provider_name: str) -> ResultsCallback:
        def on_results(matches: list[AutocompleteMatch]) -> None:
            self._channel.post(
                ProviderBatch(
                    generation=generation,
                    provider_index=index,
                    provider_name=provider_name,
                    matches=tuple(matches),
                )
            )

        return on_results

    def _apply_batch(self, batch: ProviderBatch) -> None:
        if self._state is not QueryState.QUERYING or batch.generation != self._generation:
            logger.debug(
                f"Discarding stale batch from {batch.provider_name} "
                f"(generation {batch.generation}, active {self._generation})"
            )
            return

        if batch.provider_index in self._expired:
            logger.debug(f"Discarding batch from {batch.provider_name} after its deadline")
            return

        logger.debug(f"Received {len(batch.matches)} result(s) from {batch.provider_name}")
        self._contributions[batch.provider_index] = batch.matches

        self._result.clear()
        for matches in self._contributions.values():
            self._result.add_matches(matches)
        self._result.deduplicate()
        self._result.sort()
        self._emit(self._result.get_top_matches())

    def _emit(self, matches: list[AutocompleteMatch]) -> None:
        try:
            self._on_update(matches)
        except Exception as e:
            logger.error(f"Error in autocomplete update callback: {e}", exc_info=True)

    def _stop_providers(self) -> None:
        for provider in self._providers:
            try:
                provider.stop()
            except Exception as e:
                logger.error(f"Provider {provider.name} failed to stop: {e}", exc_info=True)

    def _schedule_deadline(self, generation: int, index: int) -> None:
        if self._provider_timeout is None:
            return
        loop = asyncio.get_running_loop()
        self._deadlines.append(loop.call_later(self._provider_timeout, self._expire, generation, index))

    def _expire(self, generation: int, index: int) -> None:
        if generation != self._generation or self._state is not QueryState.QUERYING:
            return
        provider = self._providers[index]
        logger.debug(f"Deadline reached for {provider.name} in generation {generation}; later batches are dropped")
        self._expired.add(index)
        try:
            provider.stop()
        except Exception as e:
            logger.error(f"Provider {provider.name} failed to stop: {e}", exc_info=True)

    def _cancel_deadlines(self) -> None:
        for handle in self._deadlines:
            handle.cancel()
        self._deadlines.clear()
