"""
This module runs the daily calendar refresh at a fixed wall-clock time.
"""

import asyncio
import logging
import threading
from datetime import datetime, timedelta, timezone

from waste_calendar.config import REFRESH_HOUR, REFRESH_MINUTE, TIMEZONE
from waste_calendar.dates import get_timezone, localize
from waste_calendar.facade import WasteCollectionFacade

logger = logging.getLogger(__name__)


def seconds_until_next_run(
    now: datetime, hour: int = REFRESH_HOUR, minute: int = REFRESH_MINUTE, tz=TIMEZONE
) -> float:
    """Seconds from now until the next hour:minute in tz (never zero)."""
    zone = get_timezone(tz)
    now = localize(now, zone)
    next_run = now.replace(hour=hour, minute=minute, second=0, microsecond=0)
    if next_run <= now:
        next_run = (next_run.replace(tzinfo=None) + timedelta(days=1)).replace(tzinfo=zone)
    # Elapsed time, not wall-clock time, across DST changes
    return (next_run.astimezone(timezone.utc) - now.astimezone(timezone.utc)).total_seconds()


async def run_scheduler(facade: WasteCollectionFacade, tz=TIMEZONE) -> None:
    """
    Refreshes once at start-up and then daily at REFRESH_HOUR:REFRESH_MINUTE.
    """
    zone = get_timezone(tz)
    logger.info(f"Daily refresh scheduled for {REFRESH_HOUR:02d}:{REFRESH_MINUTE:02d} ({zone.key}).")
    while True:
        try:
            logger.info("Running calendar refresh...")
            facade.refresh()
            logger.info("Calendar refresh finished.")
        except Exception as e:
            logger.exception(f"An error occurred during the calendar refresh: {e}")

        sleep_duration = seconds_until_next_run(datetime.now(zone), tz=zone)
        logger.info(f"Sleeping for {sleep_duration / 3600:.1f} hours...")
        await asyncio.sleep(sleep_duration)


def start_scheduler_thread(facade: WasteCollectionFacade, tz=TIMEZONE) -> threading.Thread:
    """
    Runs run_scheduler() in a daemon thread with its own event loop, so a
    blocking server in the main thread shares the same facade.
    """
    thread = threading.Thread(
        target=asyncio.run, args=(run_scheduler(facade, tz=tz),), name="refresh-scheduler", daemon=True
    )
    thread.start()
    return thread
