"""
Broadcast Scheduler
===================

Posts "find events for today" to the configured channel on a cron
schedule (weekdays at 8am by default).

Scheduling is handled by APScheduler's AsyncIOScheduler, so the job runs
on the bot's own event loop next to the webhook or Socket Mode handler.
Each run is independent: a failed run is logged and the next one
happens on schedule.
"""

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from seafoodtruck_bot.foodtruck.days import TODAY
from seafoodtruck_bot.slack.responder import Responder
from seafoodtruck_bot.utils.config import Config, DEFAULT_BROADCAST_CRON
from seafoodtruck_bot.utils.logger import Logger

logger = Logger("Scheduler")

BROADCAST_JOB_ID = "find_events_broadcast"


def build_trigger(cron: str, timezone: str | None = None) -> CronTrigger:
    """
    Build a CronTrigger from a five-field cron expression.

    Fields are: minute hour day month day_of_week. Anything that is not
    five valid fields falls back to the default weekday morning schedule.
    """
    kwargs = {}
    if timezone:
        kwargs["timezone"] = timezone

    parts = cron.split()
    if len(parts) == 5:
        try:
            return _cron_trigger(parts, kwargs)
        except ValueError as e:
            logger.debug(f"CronTrigger rejected {cron!r}: {e}")

    logger.warning(f"Invalid cron expression {cron!r}, using {DEFAULT_BROADCAST_CRON!r}")
    return _cron_trigger(DEFAULT_BROADCAST_CRON.split(), kwargs)


def _cron_trigger(parts: list[str], kwargs: dict) -> CronTrigger:
    minute, hour, day, month, day_of_week = parts
    return CronTrigger(
        minute=minute,
        hour=hour,
        day=day,
        month=month,
        day_of_week=day_of_week,
        **kwargs
    )


class BroadcastScheduler:
    """
    Runs the weekday broadcast.

    Example:
        scheduler = BroadcastScheduler(config, responder)
        scheduler.start()    # no-op with a warning if not configured
        ...
        scheduler.stop()
    """

    def __init__(
        self,
        config: Config,
        responder: Responder,
        scheduler: AsyncIOScheduler | None = None
    ):
        """
        Args:
            config: Provides the channel, location ids and cron expression
            responder: Posts the broadcast
            scheduler: APScheduler instance, created when omitted
        """
        self.config = config
        self.responder = responder
        self.scheduler = scheduler or AsyncIOScheduler()

    async def run_broadcast(self) -> None:
        """One broadcast run; errors are logged, never raised into APScheduler."""
        channel = self.config.slack.channel
        if not channel:
            logger.warning("No broadcast channel configured, skipping run")
            return
        try:
            await self.responder.broadcast(channel, TODAY)
        except Exception as e:
            logger.error(f"Broadcast to {channel} failed", e)

    def schedule(self) -> bool:
        """
        Add the broadcast job if the configuration allows it.

        Returns:
            True if the job was added
        """
        if not self.config.broadcast_enabled:
            logger.warning(
                "Cannot start broadcast job due to missing config values",
                {
                    "channel": bool(self.config.slack.channel),
                    "location_ids": len(self.config.broadcast.location_ids),
                },
            )
            return False

        trigger = build_trigger(self.config.broadcast.cron, self.config.broadcast.timezone)
        self.scheduler.add_job(
            self.run_broadcast,
            trigger=trigger,
            id=BROADCAST_JOB_ID,
            replace_existing=True
        )
        logger.info(f"Scheduled broadcast with cron: {self.config.broadcast.cron}")
        return True

    def start(self) -> bool:
        """Schedule the job and start the scheduler; False if nothing was scheduled."""
        if not self.schedule():
            return False
        if not self.scheduler.running:
            self.scheduler.start()
            logger.info("Scheduler started")
        return True

    def stop(self) -> None:
        """Stop the scheduler."""
        if self.scheduler.running:
            self.scheduler.shutdown(wait=False)
            logger.info("Scheduler stopped")
