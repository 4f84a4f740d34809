"""Best-effort bot identity lookup via the Telegram getMe API."""

import httpx
from loguru import logger

from stockerbot.pairing.errors import ProbeFailed
from stockerbot.pairing.types import BotIdentity, UNKNOWN_BOT_USERNAME

TELEGRAM_API_BASE = "https://api.telegram.org"
PROBE_TIMEOUT_SECONDS = 10.0


async def fetch_bot_identity(
    token: str,
    client: httpx.AsyncClient | None = None,
    timeout: float = PROBE_TIMEOUT_SECONDS,
) -> BotIdentity:
    """
    Call getMe for a bot token.

    Raises ProbeFailed on transport errors, non-200 responses or ok=false.
    """
    url = f"{TELEGRAM_API_BASE}/bot{token}/getMe"
    try:
        if client is None:
            async with httpx.AsyncClient() as own_client:
                response = await own_client.get(url, timeout=timeout)
        else:
            response = await client.get(url, timeout=timeout)
    except httpx.HTTPError as e:
        raise ProbeFailed(f"getMe request failed: {e}") from e

    if response.status_code != 200:
        raise ProbeFailed(f"getMe returned HTTP {response.status_code}", status_code=response.status_code)

    try:
        data = response.json()
    except ValueError as e:
        raise ProbeFailed(f"getMe returned invalid JSON: {e}", status_code=response.status_code) from e

    if not isinstance(data, dict):
        raise ProbeFailed(
            f"getMe returned unexpected payload: {type(data).__name__}",
            status_code=response.status_code,
        )

    if not data.get("ok"):
        raise ProbeFailed(
            f"getMe rejected token: {data.get('description', 'unknown error')}",
            status_code=response.status_code,
        )

    result = data.get("result")
    if not isinstance(result, dict):
        raise ProbeFailed("getMe response has no bot object", status_code=response.status_code)

    return BotIdentity(
        username=result.get("username") or UNKNOWN_BOT_USERNAME,
        id=result.get("id"),
        first_name=result.get("first_name"),
        probed=True,
    )


async def probe_identity(
    token: str,
    client: httpx.AsyncClient | None = None,
    timeout: float = PROBE_TIMEOUT_SECONDS,
) -> BotIdentity:
    """
    Look up the bot identity, degrading to a placeholder on failure.

    The identity is only used for display (deep link, operator messages).
    A token that fails here can still be proven by a successful pairing.
    """
    try:
        identity = await fetch_bot_identity(token, client=client, timeout=timeout)
    except ProbeFailed as e:
        logger.warning(f"Token verification failed ({e.message}), continuing with pairing anyway")
        return BotIdentity.placeholder()

    logger.info(f"Token valid, bot: @{identity.username}")
    return identity
