"""A single realtime client connection."""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any

import logfire

from homestead.domain.value import Principal

Sink = Callable[[dict[str, Any]], Awaitable[None]]


class Connection:
    """Authenticated connection with its own outbound queue.

    Events are enqueued without waiting and written to the sink by a
    dedicated writer task, so a slow client only ever delays itself.
    """

    def __init__(
        self, connection_id: int, principal: Principal, sink: Sink, queue_size: int
    ) -> None:
        """Initialize connection.

        Args:
            connection_id: Identifier allocated by the owning broker
            principal: Identity established at handshake
            sink: Coroutine writing one event to the client
            queue_size: Maximum number of undelivered events
        """
        self.id = connection_id
        self.principal = principal
        self.sink = sink
        self.queue: asyncio.Queue[dict[str, Any]] = asyncio.Queue(maxsize=queue_size)
        self._writer: asyncio.Task | None = None

    def __repr__(self) -> str:
        return f"Connection(id={self.id}, user_id={self.principal.user_id})"

    def start(self) -> None:
        """Start the writer task."""
        if self._writer is None:
            self._writer = asyncio.create_task(
                self._drain(), name=f"realtime-writer-{self.id}"
            )

    def offer(self, event: dict[str, Any]) -> bool:
        """Enqueue an event without blocking.

        Returns:
            False if the queue is full and the event was not enqueued
        """
        try:
            self.queue.put_nowait(event)
        except asyncio.QueueFull:
            return False
        return True

    async def _drain(self) -> None:
        while True:
            event = await self.queue.get()
            try:
                await self.sink(event)
            except Exception as e:
                # The transport is gone; the receive loop will disconnect us.
                logfire.warn(
                    "Realtime write failed",
                    connection_id=self.id,
                    user_id=self.principal.user_id,
                    error=str(e),
                )
                return
            finally:
                self.queue.task_done()

    async def close(self) -> None:
        """Stop the writer task. Undelivered events are discarded."""
        if self._writer is None:
            return
        self._writer.cancel()
        try:
            await self._writer
        except asyncio.CancelledError:
            pass
        self._writer = None
