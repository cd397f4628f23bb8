from __future__ import annotations

import logging
from datetime import datetime, time, timedelta
from typing import Optional

from ..core.constants import MISSED_CLOCK_OUT_THRESHOLD, WORKDAY_CUTOFF
from .model import AttendanceRecord

logger = logging.getLogger(__name__)


def reconcile_missed_clock_out(
    prior: Optional[AttendanceRecord],
    now: datetime,
    *,
    threshold: time = MISSED_CLOCK_OUT_THRESHOLD,
    cutoff: time = WORKDAY_CUTOFF,
) -> Optional[datetime]:
    """Clock-out to write onto yesterday's open record, or None.

    Only yesterday is corrected, and only when the new action happens before
    ``threshold``. Older unclosed days stay as they are.
    """

    if prior is None or not prior.is_open:
        return None
    if prior.work_date != now.date() - timedelta(days=1):
        return None
    if now.time() >= threshold:
        return None

    corrected = datetime.combine(prior.work_date, cutoff)
    logger.info(
        "missed clock-out: user=%s date=%s clock_out set to %s",
        prior.user_id,
        prior.work_date.isoformat(),
        corrected.isoformat(),
    )
    return corrected
