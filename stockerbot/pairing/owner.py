"""Owner binding stored in the config file."""

from loguru import logger

from stockerbot.config.schema import Config
from stockerbot.pairing.types import OwnerIdentity, PairingResult


def get_owner(config: Config) -> OwnerIdentity | None:
    """Get the paired owner, or None if pairing never completed."""
    telegram = config.telegram
    if telegram.owner_id is None:
        return None
    return OwnerIdentity(owner_id=telegram.owner_id, username=telegram.username or None)


def is_owner(config: Config, user_id: int | str) -> bool:
    """
    Check whether a sender is the paired owner.

    With no owner bound nobody passes; callers decide what to do then.
    """
    owner = get_owner(config)
    if owner is None:
        return False
    try:
        return int(user_id) == owner.owner_id
    except (TypeError, ValueError):
        return False


def bind_owner(config: Config, result: PairingResult) -> Config:
    """Record a pairing result on the config (the caller saves it)."""
    previous = config.telegram.owner_id
    config.telegram.token = result.token
    config.telegram.owner_id = result.owner_id
    config.telegram.username = result.username

    if previous is not None and previous != result.owner_id:
        logger.warning(f"Owner changed from {previous} to {result.owner_id}")
    return config
