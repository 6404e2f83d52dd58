"""Maintenance job - purge creators that no item references"""

from datetime import datetime, timezone
from typing import Optional

from ..creators import CreatorService, get_creator_service
from ..observability import logger, track_errors


@track_errors
async def run_creator_purge(service: Optional[CreatorService] = None) -> dict:
    """
    Run creator purge.

    Safe to schedule often: it does nothing unless items lost creators
    since the last run.

    Args:
        service: Creator service (defaults to the process-wide one)

    Returns:
        Stats dict
    """
    service = service or get_creator_service()
    started_at = datetime.now(timezone.utc)

    purged = await service.purge()

    stats = {
        "started_at": started_at.isoformat(),
        "purged": len(purged),
        "creator_ids": purged,
    }
    logger.info(f"Creator purge finished: {len(purged)} removed")
    return stats
