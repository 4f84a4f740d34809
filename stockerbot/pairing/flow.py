"""Owner pairing handshake: probe, show code, listen, resolve."""

import asyncio
import random
from typing import TYPE_CHECKING, Awaitable, Callable

from loguru import logger

from stockerbot.pairing.otp import generate_otp
from stockerbot.pairing.probe import probe_identity
from stockerbot.pairing.resolver import resolve, shutdown_channel
from stockerbot.pairing.session import DEFAULT_TIMEOUT_SECONDS, PairingSession
from stockerbot.pairing.types import BotIdentity, PairingPrompt, PairingResult

if TYPE_CHECKING:
    from stockerbot.channels.base import PairingChannel

DEFAULT_DEEP_LINK_HOST = "t.me"

Probe = Callable[[str], Awaitable[BotIdentity]]


def build_deep_link(host: str, bot_username: str, otp: str) -> str:
    """Deep link that opens the bot and sends `/start <otp>`."""
    return f"https://{host}/{bot_username}?start={otp}"


async def start_pairing(
    token: str,
    channel: "PairingChannel | None" = None,
    *,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    deep_link_host: str = DEFAULT_DEEP_LINK_HOST,
    probe: Probe = probe_identity,
    rng: random.Random | None = None,
    on_ready: Callable[[PairingPrompt], None] | None = None,
) -> PairingResult:
    """
    Run one pairing session to completion.

    Args:
        token: Bot token. Already known tokens skip prompting upstream.
        channel: Channel to listen on; defaults to a live Telegram connector.
        timeout: Seconds to wait for the code.
        deep_link_host: Host used to build the deep link.
        probe: Identity probe; failures degrade to a placeholder identity.
        rng: Random source for the OTP.
        on_ready: Called once with the code and deep link to display.

    Returns:
        PairingResult with the owner id and username.

    Raises:
        PairingTimeout: no matching code arrived in time.
    """
    bot = await probe(token)

    otp = generate_otp(rng)
    prompt = PairingPrompt(
        otp=otp,
        deep_link=build_deep_link(deep_link_host, bot.username, otp),
        bot=bot,
        timeout_seconds=timeout,
    )
    if on_ready:
        on_ready(prompt)

    if channel is None:
        from stockerbot.channels.telegram import TelegramPairingChannel
        channel = TelegramPairingChannel(token)

    session = PairingSession(token=token, otp=otp, timeout=timeout)
    session.begin(channel)

    try:
        await channel.start()
        logger.info(f"Waiting for pairing code via @{bot.username} (timeout {timeout:g}s)")
        await session.wait()
    except (Exception, asyncio.CancelledError):
        session.cancel()
        await shutdown_channel(channel)
        raise

    return await resolve(session, channel, bot)
