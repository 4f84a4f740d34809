"""Turn a finished pairing session into a result or a typed failure."""

from typing import TYPE_CHECKING

from loguru import logger

from stockerbot.pairing.errors import ChannelShutdownError, PairingTimeout
from stockerbot.pairing.session import PairingSession
from stockerbot.pairing.types import BotIdentity, PairingResult, PairingStatus

if TYPE_CHECKING:
    from stockerbot.channels.base import PairingChannel

CONFIRMATION_TEXT = "✅ Pairing successful! I'm now your personal assistant."


async def shutdown_channel(channel: "PairingChannel") -> None:
    """Shut a channel down, logging (not raising) teardown failures."""
    try:
        await channel.shutdown()
    except ChannelShutdownError as e:
        logger.error(f"Error shutting down {channel.name} channel: {e.message}")


async def resolve(
    session: PairingSession,
    channel: "PairingChannel",
    bot: BotIdentity | None = None,
) -> PairingResult:
    """
    Finish a terminal session.

    COMPLETED: confirm to the owner's chat, shut down, return the result.
    TIMED_OUT: shut down, raise PairingTimeout.
    Persisting the result is the caller's job.
    """
    if session.status is PairingStatus.COMPLETED:
        owner = session.result
        try:
            await channel.send_message(session.chat_id, CONFIRMATION_TEXT)
        except Exception as e:
            logger.error(f"Failed to send pairing confirmation: {e}")
        finally:
            # Runs on cancellation too
            await shutdown_channel(channel)

        logger.info(f"Paired with owner {owner.owner_id} ({owner.username or 'no username'})")
        return PairingResult(
            token=session.token,
            owner_id=owner.owner_id,
            username=owner.username or "",
            bot=bot or BotIdentity.placeholder(),
        )

    if session.status is PairingStatus.TIMED_OUT:
        await shutdown_channel(channel)
        raise PairingTimeout(
            f"No pairing code received within {session.timeout:g} seconds",
            timeout=session.timeout,
        )

    raise RuntimeError(f"Cannot resolve a session that is still {session.status.value}")
