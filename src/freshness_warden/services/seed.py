"""Sample sources for a fresh database (init-db). Only applied when the sources table is empty."""

from __future__ import annotations

import logging
from typing import Tuple

from freshness_warden.freshness import CheckStatus

from .freshness_service import FreshnessService

logger = logging.getLogger(__name__)

SEED_SOURCES: Tuple[Tuple[str, str, int, str], ...] = (
    ("Scholar Application Export", "Scholar Ops", 24, "Daily export from CRM."),
    ("Mentor Availability Sheet", "Mentor Lead", 72, "Updated manually by mentor team."),
    ("Award Disbursement Feed", "Finance", 12, "Bank feed refresh cadence."),
)

SEED_CHECKS: Tuple[Tuple[str, CheckStatus, str], ...] = (
    ("Scholar Application Export", CheckStatus.OK, "Export landed on time."),
    ("Mentor Availability Sheet", CheckStatus.WARNING, "Missing two mentors this week."),
    ("Award Disbursement Feed", CheckStatus.FAILED, "No feed received in 24 hours."),
)


async def seed_if_empty(service: FreshnessService) -> bool:
    """Returns True when sample data was written."""
    if await service.sources.count() > 0:
        logger.info("Sources present; skipping seed")
        return False
    for name, owner, sla_hours, notes in SEED_SOURCES:
        await service.add_source(name, owner, sla_hours, notes)
    for name, status, details in SEED_CHECKS:
        await service.log_check(name, status, details)
    logger.info("Seeded %d sample sources", len(SEED_SOURCES))
    return True
