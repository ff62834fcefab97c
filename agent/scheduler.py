"""
Bot Scheduler
cron 스케줄로 포스팅 사이클 + 자정 카운터 리셋
"""
import signal
from datetime import datetime
from typing import Optional

from apscheduler.executors.pool import ThreadPoolExecutor
from apscheduler.schedulers.blocking import BlockingScheduler
from apscheduler.triggers.cron import CronTrigger

from config.settings import settings as default_settings
from agent.core.logger import get_logger

logger = get_logger("scheduler")

POST_JOB_ID = "trend_post"
RESET_JOB_ID = "daily_reset"


class BotScheduler:
    """
    Runs the bot's jobs on a single worker thread, so a posting cycle and the
    daily reset never execute at the same time.
    """

    def __init__(self, bot, settings=None, timezone=None):
        self.bot = bot
        self.settings = settings or default_settings
        self.scheduler = BlockingScheduler(
            executors={'default': ThreadPoolExecutor(1)},
            timezone=timezone,
        )
        self.post_trigger = CronTrigger.from_crontab(self.settings.POSTING_SCHEDULE, timezone=timezone)
        self.reset_trigger = CronTrigger.from_crontab(self.settings.DAILY_RESET_SCHEDULE, timezone=timezone)
        self._setup_jobs()
        bot.scheduler = self

    def _setup_jobs(self):
        self.scheduler.add_job(
            func=self.bot.on_schedule_tick,
            trigger=self.post_trigger,
            id=POST_JOB_ID,
            name='Crypto Trend Post',
            replace_existing=True,
            max_instances=1,
            coalesce=True,
            misfire_grace_time=60
        )
        self.scheduler.add_job(
            func=self.bot.reset_daily_counter,
            trigger=self.reset_trigger,
            id=RESET_JOB_ID,
            name='Daily Post Counter Reset',
            replace_existing=True,
            max_instances=1,
            coalesce=True
        )
        logger.info(f"[SCHEDULER] Posts scheduled with cron: {self.settings.POSTING_SCHEDULE}")
        logger.info(f"[SCHEDULER] Daily counter reset with cron: {self.settings.DAILY_RESET_SCHEDULE}")

    def get_next_post_time(self, now: Optional[datetime] = None) -> Optional[str]:
        now = now or datetime.now(self.post_trigger.timezone)
        next_time = self.post_trigger.get_next_fire_time(None, now)
        return next_time.isoformat() if next_time else None

    def start(self):
        """블로킹 - shutdown() 될 때까지 반환하지 않음"""
        self._install_signal_handlers()
        logger.info(f"[SCHEDULER] Next scheduled post: {self.get_next_post_time()}")
        self.scheduler.start()

    def stop(self):
        if self.scheduler.running:
            self.scheduler.shutdown(wait=False)
            logger.info("[SCHEDULER] Stopped")

    def _install_signal_handlers(self):
        def signal_handler(signum, frame):
            logger.info(f"[SCHEDULER] Signal {signum} received, shutting down gracefully...")
            self.bot.stop()
            self.stop()

        signal.signal(signal.SIGINT, signal_handler)
        signal.signal(signal.SIGTERM, signal_handler)
