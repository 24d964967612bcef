import asyncio
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional, Set
import logging

from interfaces.repository_interface import IAccountRepository
from models.tracked_account import LiveNotification, Platform, TrackedAccount
from platforms.base_platform import BasePlatform
from services.live_status_tracker import LiveStatusTracker, Transition
from services.logging_service import LoggingService
from services.webhook_service import WebhookNotifier

logger = logging.getLogger(__name__)


class ServiceStatus(Enum):
    IDLE = "Idle"
    RUNNING = "Running"


class NotificationService:
    """Polls every tracked account and announces offline to live transitions.

    ``start_checking`` runs one cycle right away and then one per
    ``check_interval`` seconds. A cycle walks the accounts one at a time; a
    failing account is logged and the cycle moves on. A cycle triggered while
    the previous one is still running is skipped.

    The first cycle after construction only records a baseline, so streams
    that were already live before a restart are not announced again.
    """

    DEFAULT_CHECK_INTERVAL = 300

    def __init__(self, repository: IAccountRepository,
                 tracker: LiveStatusTracker,
                 platforms: Dict[Platform, BasePlatform],
                 notifier: WebhookNotifier,
                 logging_service: LoggingService,
                 check_interval: float = DEFAULT_CHECK_INTERVAL,
                 announce_first_cycle: bool = False):
        self.repository = repository
        self.tracker = tracker
        self.platforms = platforms
        self.notifier = notifier
        self.logging_service = logging_service
        self.check_interval = check_interval
        self.service_status = ServiceStatus.IDLE
        self.start_time: Optional[datetime] = None
        self.last_cycle: Optional[datetime] = None
        self.main_task: Optional[asyncio.Task] = None
        self._cycle_tasks: Set[asyncio.Task] = set()
        self._cycle_lock = asyncio.Lock()
        self._baseline_pending = not announce_first_cycle

    @property
    def is_running(self) -> bool:
        return self.service_status is ServiceStatus.RUNNING

    async def start_checking(self):
        """Start checking all stream statuses"""
        if self.is_running:
            return

        self.service_status = ServiceStatus.RUNNING
        self.start_time = datetime.now()
        logger.info(f"Starting stream monitoring (every {self.check_interval:.0f}s)...")
        self._launch_cycle()
        self.main_task = asyncio.create_task(self._timer_loop())

    async def stop_checking(self):
        """Cancel the timer; a cycle already in progress is left to finish"""
        self.service_status = ServiceStatus.IDLE

        if self.main_task and not self.main_task.done():
            self.main_task.cancel()
            try:
                await self.main_task
            except asyncio.CancelledError:
                pass
        self.main_task = None
        logger.info("Stream monitoring stopped")

    async def wait_until_idle(self):
        """Wait for cycles that are still running"""
        if self._cycle_tasks:
            await asyncio.gather(*list(self._cycle_tasks), return_exceptions=True)

    async def _timer_loop(self):
        while True:
            await asyncio.sleep(self.check_interval)
            self._launch_cycle()

    def _launch_cycle(self) -> asyncio.Task:
        task = asyncio.create_task(self.check_all_streams())
        self._cycle_tasks.add(task)
        task.add_done_callback(self._cycle_tasks.discard)
        return task

    async def check_all_streams(self) -> bool:
        """Run one cycle over every tracked account; False if it was skipped"""
        if self._cycle_lock.locked():
            await self.logging_service.log_warning("Previous check cycle is still running, skipping this one")
            return False

        async with self._cycle_lock:
            started = datetime.now()
            try:
                accounts = await self.repository.get_all()
            except Exception as e:
                await self.logging_service.log_error(e, "Error loading tracked accounts")
                return False

            logger.info(f"Checking {len(accounts)} streams...")
            baseline = self._baseline_pending
            for account in accounts:
                await self._check_account(account, baseline)

            self._baseline_pending = False
            self.last_cycle = started
            duration = (datetime.now() - started).total_seconds()
            logger.info(f"Finished checking all streams in {duration:.1f}s")
            return True

    async def _check_account(self, account: TrackedAccount, baseline: bool = False):
        try:
            platform = self.platforms.get(account.platform)
            if not platform:
                raise ValueError(f"Unsupported platform: {account.platform}")

            is_live = await platform.is_stream_live(account.identity)

            # removed while its check was in flight
            if await self.repository.get(account.platform, account.username) is None:
                return

            if baseline:
                self.tracker.record(account.key, is_live)
                logger.debug(f"Baseline for {account.key}: {'Live' if is_live else 'Offline'}")
                return

            transition = self.tracker.evaluate(account.key, is_live)
            if transition is Transition.WENT_LIVE:
                await self.notifier.send_live_notification(LiveNotification.for_account(account))
                await self.logging_service.log_info(
                    f"{account.display_name} went live on {account.platform.label}!"
                )
            elif transition is Transition.WENT_OFFLINE:
                await self.logging_service.log_info(
                    f"{account.display_name} went offline on {account.platform.label}"
                )

        except Exception as e:
            await self.logging_service.log_error(
                e,
                f"Error checking {account.username} on {account.platform.value}"
            )

    def get_service_status(self) -> Dict[str, Any]:
        return {
            "status": self.service_status.value,
            "uptime": str(datetime.now() - self.start_time) if self.start_time else "Not started",
            "last_cycle": self.last_cycle.isoformat() if self.last_cycle else None,
            "live": self.tracker.live_keys(),
        }
