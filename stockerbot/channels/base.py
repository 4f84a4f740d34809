"""Base class for pairing channels."""

from abc import ABC, abstractmethod
from typing import Awaitable, Callable

from loguru import logger

from stockerbot.pairing.types import StartCommand, TextMessage

StartHandler = Callable[[StartCommand], Awaitable[None]]
TextHandler = Callable[[TextMessage], Awaitable[None]]


class PairingChannel(ABC):
    """
    Inbound event stream plus outbound send for one pairing session.

    Implementations must deliver events to handlers one at a time, in
    arrival order, and must make shutdown() idempotent.
    """

    name: str = "base"

    def __init__(self):
        self._start_handlers: list[StartHandler] = []
        self._text_handlers: list[TextHandler] = []
        self._running = False
        self._closed = False

    def on_start(self, handler: StartHandler) -> None:
        """Subscribe to /start commands."""
        self._start_handlers.append(handler)

    def on_text(self, handler: TextHandler) -> None:
        """Subscribe to plain text messages."""
        self._text_handlers.append(handler)

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def is_closed(self) -> bool:
        return self._closed

    @abstractmethod
    async def start(self) -> None:
        """Open the connection and begin delivering events."""
        pass

    @abstractmethod
    async def send_message(self, chat_id: int, text: str) -> None:
        """Send a text message to a chat."""
        pass

    async def shutdown(self) -> None:
        """
        Stop delivering events and release the connection.

        Safe to call any number of times; only the first call tears down.
        """
        if self._closed:
            logger.debug(f"{self.name} channel already shut down")
            return
        self._closed = True
        self._running = False
        self._start_handlers.clear()
        self._text_handlers.clear()
        await self._teardown()

    @abstractmethod
    async def _teardown(self) -> None:
        """Release transport resources. Called at most once."""
        pass

    async def _dispatch(self, event: StartCommand | TextMessage) -> None:
        """Hand one event to its subscribers, unless shut down."""
        if self._closed:
            logger.debug(f"Dropping event after shutdown: {event!r}")
            return

        if isinstance(event, StartCommand):
            handlers = list(self._start_handlers)
        elif isinstance(event, TextMessage):
            handlers = list(self._text_handlers)
        else:
            raise TypeError(f"Unknown inbound event: {type(event).__name__}")

        for handler in handlers:
            await handler(event)
