"""In-memory pairing channel for tests and dry runs."""

import asyncio
from dataclasses import dataclass

from loguru import logger

from stockerbot.channels.base import PairingChannel
from stockerbot.pairing.types import Sender, StartCommand, TextMessage


@dataclass
class SentMessage:
    """An outbound message recorded by the in-memory channel."""
    chat_id: int
    text: str


class InMemoryChannel(PairingChannel):
    """
    Synthetic channel that injects events without any network I/O.

    Injected events are queued and drained by a single delivery task, so
    handlers see them sequentially in injection order, like the live
    connector. Events injected after shutdown are dropped.
    """

    name = "memory"

    def __init__(self):
        super().__init__()
        self.sent: list[SentMessage] = []
        self.dropped = 0
        self.shutdown_calls = 0
        self._queue: asyncio.Queue[StartCommand | TextMessage | None] = asyncio.Queue()
        self._delivery_task: asyncio.Task | None = None

    async def start(self) -> None:
        if self._closed:
            raise RuntimeError("Channel already shut down")
        self._running = True
        self._delivery_task = asyncio.create_task(self._deliver())
        logger.debug("In-memory channel started")

    async def send_message(self, chat_id: int, text: str) -> None:
        self.sent.append(SentMessage(chat_id=chat_id, text=text))

    async def shutdown(self) -> None:
        self.shutdown_calls += 1
        await super().shutdown()

    def inject(self, event: StartCommand | TextMessage) -> None:
        """Queue an inbound event for delivery."""
        if self._closed:
            self.dropped += 1
            logger.debug(f"In-memory channel closed, dropping {event!r}")
            return
        self._queue.put_nowait(event)

    def inject_start(
        self,
        user_id: int,
        payload: str | None = None,
        username: str | None = None,
        chat_id: int | None = None,
    ) -> None:
        """Simulate a /start command (a deep link carries the payload)."""
        self.inject(StartCommand(
            sender=Sender(id=user_id, username=username),
            chat_id=chat_id if chat_id is not None else user_id,
            payload=payload,
        ))

    def inject_text(
        self,
        user_id: int,
        text: str,
        username: str | None = None,
        chat_id: int | None = None,
    ) -> None:
        """Simulate a plain text message."""
        self.inject(TextMessage(
            sender=Sender(id=user_id, username=username),
            chat_id=chat_id if chat_id is not None else user_id,
            text=text,
        ))

    async def drain(self) -> None:
        """Wait until every queued event has been handled."""
        await self._queue.join()

    def messages_to(self, chat_id: int) -> list[str]:
        return [m.text for m in self.sent if m.chat_id == chat_id]

    async def _deliver(self) -> None:
        while True:
            event = await self._queue.get()
            try:
                if event is None:
                    return
                await self._dispatch(event)
            except Exception as e:
                logger.error(f"Handler failed for {event!r}: {e}")
            finally:
                self._queue.task_done()

    async def _teardown(self) -> None:
        # Discard whatever is still queued, then stop the delivery task
        while not self._queue.empty():
            self._queue.get_nowait()
            self._queue.task_done()
            self.dropped += 1

        task = self._delivery_task
        self._delivery_task = None
        if task and not task.done():
            self._queue.put_nowait(None)
            if task is not asyncio.current_task():
                await task
