"""Pairing session state machine."""

import asyncio
import threading
import time
from typing import TYPE_CHECKING

from loguru import logger

from stockerbot.pairing.errors import MalformedCode
from stockerbot.pairing.otp import looks_like_code
from stockerbot.pairing.types import (
    InboundEvent,
    OwnerIdentity,
    PairingStatus,
    StartCommand,
    TextMessage,
)

if TYPE_CHECKING:
    from stockerbot.channels.base import PairingChannel

DEFAULT_TIMEOUT_SECONDS = 60.0

WRONG_CODE_REPLY = "❌ Wrong code. Please re-enter the code shown in your terminal."


class PairingSession:
    """
    One pairing attempt: a single OTP racing a deadline.

    Two producers can end the session: matching events delivered by the
    channel, and the deadline timer. The timer may fire on another thread,
    so the terminal transition is a check-and-set under a lock and the
    waiter is woken through a single-resolution future. Whatever arrives
    after the first terminal transition is counted and discarded.
    """

    def __init__(self, token: str, otp: str, timeout: float = DEFAULT_TIMEOUT_SECONDS):
        self.token = token
        self.otp = otp
        self.timeout = timeout
        self.status = PairingStatus.LISTENING
        self.deadline: float | None = None
        self.result: OwnerIdentity | None = None
        self.chat_id: int | None = None
        self.rejected: list[MalformedCode] = []
        self.discarded = 0

        self._latch = threading.Lock()
        self._loop: asyncio.AbstractEventLoop | None = None
        self._timer: asyncio.TimerHandle | None = None
        self._done: asyncio.Future[PairingStatus] | None = None
        self._channel: "PairingChannel | None" = None

    # ── lifecycle ───────────────────────────────────────────────────

    def begin(self, channel: "PairingChannel") -> None:
        """Enter LISTENING: arm the deadline and subscribe to the channel."""
        if self._done is not None:
            raise RuntimeError("Pairing session already started")

        self._loop = asyncio.get_running_loop()
        self._done = self._loop.create_future()
        self._channel = channel

        self.deadline = time.monotonic() + self.timeout
        self._timer = self._loop.call_later(self.timeout, self.expire)

        channel.on_start(self.handle_start)
        channel.on_text(self.handle_text)
        logger.debug(f"Pairing session listening for {self.timeout:g}s")

    async def wait(self) -> PairingStatus:
        """Block until the session reaches a terminal status."""
        if self._done is None:
            raise RuntimeError("Pairing session not started")
        return await asyncio.shield(self._done)

    def cancel(self) -> None:
        """Disarm the deadline timer without resolving the session."""
        if self._timer:
            self._timer.cancel()
            self._timer = None

    @property
    def remaining(self) -> float:
        """Seconds left before the deadline (0 once it has passed)."""
        if self.deadline is None:
            return self.timeout
        return max(0.0, self.deadline - time.monotonic())

    # ── inbound events ──────────────────────────────────────────────

    async def handle_event(self, event: InboundEvent) -> None:
        if isinstance(event, StartCommand):
            await self.handle_start(event)
        elif isinstance(event, TextMessage):
            await self.handle_text(event)
        else:
            raise TypeError(f"Unknown inbound event: {type(event).__name__}")

    async def handle_start(self, event: StartCommand) -> None:
        """A deep link delivers the OTP as the /start payload."""
        if event.payload is not None and event.payload == self.otp:
            self._complete(event)
            return

        if self.status.is_terminal:
            self._discard(event)
            return

        logger.debug(f"Ignoring /start from {event.sender.id} (payload={event.payload!r})")

    async def handle_text(self, event: TextMessage) -> None:
        """Manual entry: the operator types the code shown in the terminal."""
        text = event.text.strip()
        if text == self.otp:
            self._complete(event)
            return

        if self.status.is_terminal:
            self._discard(event)
            return

        # Only answer things that look like a code attempt
        if looks_like_code(text):
            error = MalformedCode(text)
            self.rejected.append(error)
            logger.info(f"Rejected pairing attempt from {event.sender.id}: {error.message}")
            if self._channel:
                await self._channel.send_message(event.chat_id, WRONG_CODE_REPLY)

    # ── terminal transitions ────────────────────────────────────────

    def expire(self) -> bool:
        """
        Deadline reached. Safe to call from any thread.

        Returns True if this call moved the session to TIMED_OUT.
        """
        with self._latch:
            if self.status.is_terminal:
                self.discarded += 1
                logger.debug(f"Deadline fired after session became {self.status.value}")
                return False
            self.status = PairingStatus.TIMED_OUT

        logger.info("Pairing session timed out")
        self._wake()
        return True

    def _complete(self, event: InboundEvent) -> bool:
        with self._latch:
            if self.status.is_terminal:
                self.discarded += 1
                logger.debug(
                    f"Ignoring matching code from {event.sender.id}, session already {self.status.value}"
                )
                return False
            self.status = PairingStatus.COMPLETED
            self.result = OwnerIdentity(owner_id=event.sender.id, username=event.sender.username)
            self.chat_id = event.chat_id

        # Disarm the deadline before anything else touches the session
        self.cancel()
        logger.info(f"Pairing code matched (owner id: {event.sender.id})")
        self._wake()
        return True

    def _discard(self, event: InboundEvent) -> None:
        self.discarded += 1
        logger.debug(f"Discarding {type(event).__name__} from {event.sender.id}, session {self.status.value}")

    def _wake(self) -> None:
        loop = self._loop
        if loop is None:
            return
        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None

        if running is loop:
            self._resolve_waiter()
        else:
            loop.call_soon_threadsafe(self._resolve_waiter)

    def _resolve_waiter(self) -> None:
        if self._done is not None and not self._done.done():
            self._done.set_result(self.status)
