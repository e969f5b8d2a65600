from apscheduler.schedulers.background import BackgroundScheduler
from django.conf import settings
from django.core.management import call_command
from django.utils import timezone
import logging

from notifications.services.harvest.config import HarvestCheckConfig

logger = logging.getLogger(__name__)

# ============================================================
# GLOBAL SAFETY LOCK
# Prevents scheduler from starting more than once
# ============================================================
_scheduler = None


def start_scheduler():
    """
    Start APScheduler safely.

    - Respects ENABLE_SCHEDULER setting
    - Prevents double start (Django autoreload, imports)
    - Single-process only: one harvest check per tick
    """
    global _scheduler

    # --------------------------------------------
    # DEV / PROD TOGGLE
    # --------------------------------------------
    if not getattr(settings, "ENABLE_SCHEDULER", False):
        logger.info("APScheduler disabled via settings (ENABLE_SCHEDULER=False)")
        return None

    # --------------------------------------------
    # SAFETY LOCK (NO DOUBLE START)
    # --------------------------------------------
    if _scheduler is not None:
        logger.info("APScheduler already running, skipping initialization")
        return _scheduler

    config = HarvestCheckConfig.from_settings()

    logger.info("Starting APScheduler...")

    _scheduler = BackgroundScheduler(
        timezone=config.time_zone
    )

    # --------------------------------------------
    # SCHEDULE: ONCE DAILY
    # --------------------------------------------
    _scheduler.add_job(
        run_harvest_notifications,
        trigger="cron",
        hour=config.run_hour,
        minute=config.run_minute,
        id="check_harvest_notifications",
        replace_existing=True,
        max_instances=1,      # Prevent overlapping runs
        coalesce=True,        # Merge missed runs if server was down
    )

    _scheduler.start()

    logger.info(
        "APScheduler started: harvest check scheduled daily at %02d:%02d",
        config.run_hour,
        config.run_minute,
    )
    return _scheduler


def shutdown_scheduler():
    global _scheduler

    if _scheduler is None:
        return

    _scheduler.shutdown(wait=False)
    _scheduler = None


def run_harvest_notifications():
    """
    Wrapper job that calls the Django management command.
    Keeps all business logic out of the scheduler.
    """
    now = timezone.now()
    logger.info(f"Running scheduled harvest check at {now:%Y-%m-%d %H:%M:%S}")

    config = HarvestCheckConfig.from_settings()

    try:
        call_command(
            "check_harvest_notifications",
            cleanup_days=config.cleanup_after_days,
        )
    except Exception:
        logger.exception("Scheduled harvest check failed")
