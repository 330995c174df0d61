"""
Changeset transaction: open, mutate, close.

A changeset is closed whenever it was opened. A close failure after a failed
mutation is logged and the mutation error is the one raised.
"""

import logging
from typing import Awaitable, Callable

from poisync.services.osm_gateway import BaseOsmGateway

logger = logging.getLogger(__name__)

Mutation = Callable[[str], Awaitable[str]]


async def run_in_changeset(comment: str, gateway: BaseOsmGateway, mutation: Mutation) -> str:
    """
    Run ``mutation`` inside a freshly opened changeset.

    Args:
        comment: Human readable changeset comment
        gateway: Authenticated OSM gateway
        mutation: Coroutine function taking the changeset id and returning the element id

    Returns:
        Id of the created or updated element
    """
    changeset_id = await gateway.open_changeset(comment)
    logger.info(f"Opened changeset {changeset_id}: {comment}")

    try:
        element_id = await mutation(changeset_id)
    except BaseException:
        # includes cancellation of the calling task
        try:
            await gateway.close_changeset(changeset_id)
        except Exception as close_error:
            logger.error(
                f"Failed to close changeset {changeset_id} after a failed mutation: {close_error}",
                extra={"changeset_id": changeset_id},
            )
        raise

    await gateway.close_changeset(changeset_id)
    logger.info(f"Closed changeset {changeset_id}, element {element_id}")
    return element_id
