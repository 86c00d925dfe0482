"""Background job scheduler for archiving past hangs."""
import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger
from sqlmodel import Session

from lets_hang.core.config import settings
from lets_hang.core.database import engine
from lets_hang.hangs.store import archive_past_hangs

logger = logging.getLogger(__name__)

scheduler = AsyncIOScheduler()


def archive_job():
    """Background archival job."""
    try:
        with Session(engine) as session:
            archived = archive_past_hangs(session)
            logger.info(f"Background archival completed: {archived} hangs moved to past")
    except Exception as e:
        logger.error(f"Background archival failed: {e}")


def start_scheduler():
    """Start the background scheduler."""
    scheduler.add_job(
        archive_job,
        trigger=IntervalTrigger(minutes=settings.archive_interval_minutes),
        id="archive_past_hangs",
        replace_existing=True,
    )
    scheduler.start()
    logger.info(
        f"Scheduler started, archiving past hangs every {settings.archive_interval_minutes} minutes"
    )


def shutdown_scheduler():
    """Graceful shutdown."""
    scheduler.shutdown(wait=False)
    logger.info("Scheduler shut down")
