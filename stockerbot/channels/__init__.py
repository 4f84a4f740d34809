"""Messaging channels used during pairing."""

from stockerbot.channels.base import PairingChannel
from stockerbot.channels.memory import InMemoryChannel, SentMessage
from stockerbot.channels.telegram import TelegramPairingChannel

__all__ = ["PairingChannel", "InMemoryChannel", "SentMessage", "TelegramPairingChannel"]
