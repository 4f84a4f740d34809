"""Type definitions for owner pairing."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Union

# Placeholder used when the bot identity could not be probed
UNKNOWN_BOT_USERNAME = "UnknownBot"


class PairingStatus(str, Enum):
    """Pairing session lifecycle states."""
    LISTENING = "listening"
    COMPLETED = "completed"
    TIMED_OUT = "timed_out"

    @property
    def is_terminal(self) -> bool:
        return self is not PairingStatus.LISTENING


@dataclass(frozen=True)
class Sender:
    """The Telegram user behind an inbound event."""
    id: int
    username: str | None = None
    first_name: str | None = None


@dataclass(frozen=True)
class StartCommand:
    """A /start command, optionally carrying a deep-link payload."""
    sender: Sender
    chat_id: int
    payload: str | None = None


@dataclass(frozen=True)
class TextMessage:
    """A plain text message (never a command)."""
    sender: Sender
    chat_id: int
    text: str


InboundEvent = Union[StartCommand, TextMessage]


@dataclass(frozen=True)
class BotIdentity:
    """Bot identity as reported by getMe."""
    username: str = UNKNOWN_BOT_USERNAME
    id: int | None = None
    first_name: str | None = None
    probed: bool = False

    @classmethod
    def placeholder(cls) -> "BotIdentity":
        return cls()


@dataclass(frozen=True)
class OwnerIdentity:
    """The user who proved control of the pairing code."""
    owner_id: int
    username: str | None = None


@dataclass(frozen=True)
class PairingResult:
    """Successful pairing outcome handed back to the caller."""
    token: str
    owner_id: int
    username: str = ""
    bot: BotIdentity = field(default_factory=BotIdentity)

    @property
    def degraded(self) -> bool:
        """True when pairing succeeded but the bot identity probe did not."""
        return not self.bot.probed


@dataclass(frozen=True)
class PairingPrompt:
    """What the operator needs to see to complete pairing."""
    otp: str
    deep_link: str
    bot: BotIdentity
    timeout_seconds: float
