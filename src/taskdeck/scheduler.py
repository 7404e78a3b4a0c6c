"""Periodic sweeps on an apscheduler interval."""

import logging

from apscheduler.schedulers.blocking import BlockingScheduler
from apscheduler.triggers.interval import IntervalTrigger

from .config import Config, load_config
from .workflows import get_repository, run_sweep

logger = logging.getLogger(__name__)


def sweep_job(config: Config) -> None:
    """One scheduled sweep. Errors are logged so the next run still happens."""
    logger.info("Running scheduled sweep")
    try:
        result = run_sweep(get_repository(config), config.user_id)
    except Exception as e:
        logger.error(f"Sweep failed: {e}")
        return
    logger.info(f"Sweep done: {len(result.rejected)} rejected, {len(result.missed)} missed")


def setup_scheduler(config: Config | None = None) -> BlockingScheduler:
    """Set up the sweep job."""
    if config is None:
        config = load_config()

    if config.sweep_interval_minutes <= 0:
        raise ValueError(f"Invalid sweep interval: {config.sweep_interval_minutes} minutes")

    scheduler = BlockingScheduler(timezone=config.timezone or "UTC")
    scheduler.add_job(
        sweep_job,
        IntervalTrigger(minutes=config.sweep_interval_minutes),
        args=[config],
        id="lifecycle_sweep",
    )
    logger.info(f"Scheduled sweep every {config.sweep_interval_minutes} minutes")
    return scheduler


def run_scheduler() -> None:
    """Run the sweep scheduler until interrupted."""
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging.INFO,
    )

    config = load_config()
    scheduler = setup_scheduler(config)
    logger.info("Starting taskdeck scheduler...")
    scheduler.start()
