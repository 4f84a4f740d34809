"""Owner pairing handshake over Telegram."""

from stockerbot.pairing.errors import (
    PairingError,
    ProbeFailed,
    PairingTimeout,
    MalformedCode,
    ChannelShutdownError,
)
from stockerbot.pairing.types import (
    PairingStatus,
    Sender,
    StartCommand,
    TextMessage,
    InboundEvent,
    BotIdentity,
    OwnerIdentity,
    PairingResult,
    PairingPrompt,
)
from stockerbot.pairing.otp import generate_otp, looks_like_code
from stockerbot.pairing.probe import fetch_bot_identity, probe_identity
from stockerbot.pairing.session import PairingSession, DEFAULT_TIMEOUT_SECONDS
from stockerbot.pairing.resolver import resolve
from stockerbot.pairing.flow import build_deep_link, start_pairing
from stockerbot.pairing.owner import get_owner, is_owner, bind_owner

__all__ = [
    "PairingError",
    "ProbeFailed",
    "PairingTimeout",
    "MalformedCode",
    "ChannelShutdownError",
    "PairingStatus",
    "Sender",
    "StartCommand",
    "TextMessage",
    "InboundEvent",
    "BotIdentity",
    "OwnerIdentity",
    "PairingResult",
    "PairingPrompt",
    "generate_otp",
    "looks_like_code",
    "fetch_bot_identity",
    "probe_identity",
    "PairingSession",
    "DEFAULT_TIMEOUT_SECONDS",
    "resolve",
    "build_deep_link",
    "start_pairing",
    "get_owner",
    "is_owner",
    "bind_owner",
]
