"""Optimistic concurrency on the ``lastUpdate`` token.

Every mutation names the ``lastUpdate`` value it was based on. The token
must be present and equal to the stored one; the write that follows stamps
a fresh value that is guaranteed to differ from the token it replaces.
"""

import asyncio
import logging
from collections.abc import Callable
from typing import Any

from staffing_api.domain.exceptions import PreconditionFailedError, PreconditionRequiredError
from staffing_api.domain.timestamps import format_last_update

logger = logging.getLogger(__name__)

# One tick of the token's 10 ms resolution.
_CLOCK_TICK_SECONDS = 0.01


def require_token(token: Any) -> str:
    """Return the supplied token or raise when it is absent or empty."""
    if token is None or token == "":
        raise PreconditionRequiredError()
    return token


def check_token(provided: str, actual: str | None) -> None:
    if provided != actual:
        logger.info("Stale lastUpdate token: provided=%r actual=%r", provided, actual)
        raise PreconditionFailedError(provided, actual)


async def fresh_last_update(
    previous: str | None,
    clock: Callable[[], str] = format_last_update,
) -> str:
    """Issue a new token, waiting for the clock to move past ``previous``."""
    stamp = clock()
    while stamp == previous:
        await asyncio.sleep(_CLOCK_TICK_SECONDS)
        stamp = clock()
    return stamp
