"""
Message channel served by a single background worker.

Producers post messages from synchronous callbacks; one asyncio task applies
them in arrival order. Because only the worker touches the consumer's state,
that state needs no locking even when messages are posted from other threads.
"""

import asyncio
from dataclasses import dataclass, field
from typing import Any, Callable, Generic, Optional, TypeVar

from omnibox.logger import get_logger

logger = get_logger("channel")

T = TypeVar("T")


@dataclass
class Envelope(Generic[T]):
    """A posted message with optional metadata for debugging."""

    payload: T
    metadata: dict[str, Any] = field(default_factory=dict)


class MessageChannel(Generic[T]):
    """
    FIFO channel with a background consumer.

    Lifecycle:
        1. Create with a synchronous handler
        2. ``await start()`` on the event loop that owns the consumer state
        3. ``post(message)`` from any callback, on or off the loop thread
        4. ``await stop()`` to shut down

    Error Handling:
        - Handler exceptions are logged and don't stop the worker
        - Messages posted while stopped are dropped with a warning
    """

    def __init__(self, handler: Callable[[T], None], *, name: str = "MessageChannel"):
        self._handler = handler
        self._name = name
        self._queue: Optional[asyncio.Queue[Envelope[T]]] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._worker_task: Optional[asyncio.Task] = None
        self._running = False

    async def start(self) -> None:
        """Start the worker on the running event loop."""
        if self._running:
            logger.warning(f"{self._name} already running")
            return

        self._loop = asyncio.get_running_loop()
        self._queue = asyncio.Queue()
        self._running = True
        self._worker_task = asyncio.create_task(self._worker(), name=f"{self._name}-worker")
        logger.debug(f"{self._name} started")

    async def stop(self) -> None:
        """Cancel the worker and wait for it to exit. Pending messages are discarded."""
        if not self._running:
            return

        self._running = False
        if self._worker_task and not self._worker_task.done():
            self._worker_task.cancel()
            try:
                await self._worker_task
            except asyncio.CancelledError:
                logger.debug(f"{self._name} worker cancelled")
        self._worker_task = None
        logger.debug(f"{self._name} stopped")

    def post(self, message: T, **metadata: Any) -> None:
        """
        Post a message for the worker. Safe to call from any thread.

        Args:
            message: Payload handed to the handler
            **metadata: Attached to the envelope, not passed to the handler
        """
        if not self._running or self._queue is None or self._loop is None:
            logger.warning(f"{self._name} is not running; dropping message")
            return

        envelope = Envelope(payload=message, metadata=metadata)
        if self._on_loop_thread():
            self._queue.put_nowait(envelope)
        else:
            self._loop.call_soon_threadsafe(self._queue.put_nowait, envelope)

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def pending(self) -> int:
        return self._queue.qsize() if self._queue else 0

    def _on_loop_thread(self) -> bool:
        try:
            return asyncio.get_running_loop() is self._loop
        except RuntimeError:
            return False

    async def _worker(self) -> None:
        assert self._queue is not None
        while self._running:
            try:
                envelope = await self._queue.get()
            except asyncio.CancelledError:
                break

            try:
                self._handler(envelope.payload)
            except Exception as e:
                logger.error(f"Error in {self._name} handler: {e}", exc_info=True)
            finally:
                self._queue.task_done()

    async def wait_until_empty(self, timeout: Optional[float] = None) -> bool:
        """
        Wait until every posted message has been handled.

        Returns:
            True if the channel drained, False if the timeout expired
        """
        if self._queue is None:
            return True
        try:
            await asyncio.wait_for(self._queue.join(), timeout=timeout)
            return True
        except asyncio.TimeoutError:
            logger.warning(f"{self._name}: timeout waiting for channel to drain")
            return False
