"""Polling loop - runs the fetch, filter, print cycle on an interval."""

import logging
import signal
from enum import Enum

from apscheduler.schedulers.base import BaseScheduler
from apscheduler.schedulers.blocking import BlockingScheduler
from apscheduler.triggers.interval import IntervalTrigger

from .adapters.phabricator_api import FetchError
from .core.tasks import select_sprint_tasks
from .core.tickets import format_task
from .dispatcher import PrintDispatcher
from .ports import TaskRepository

logger = logging.getLogger(__name__)

POLL_JOB_ID = "poll_and_print"


class SchedulerState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    STOPPED = "stopped"


class PollCycle:
    """One poll: fetch assigned tasks, keep sprint ones, print new ones."""

    def __init__(
        self,
        repository: TaskRepository,
        dispatcher: PrintDispatcher,
        sprint_keywords: list[str],
        base_url: str,
        delay_ms: int = 1000,
    ):
        self.repository = repository
        self.dispatcher = dispatcher
        self.sprint_keywords = sprint_keywords
        self.base_url = base_url
        self.delay_ms = delay_ms

    def __call__(self) -> int:
        """Run the cycle. Never raises; returns the number of tickets printed."""
        logger.info("[POLL] Checking for new sprint tasks...")

        try:
            tasks = self.repository.fetch_assigned_tasks()
        except FetchError as e:
            logger.error(f"Poll failed: {e}")
            return 0
        except Exception:
            logger.exception("Poll failed while fetching tasks")
            return 0

        try:
            sprint_tasks = select_sprint_tasks(tasks, self.sprint_keywords)
            logger.info(f"Found {len(sprint_tasks)} tasks in sprint columns")

            if not sprint_tasks:
                logger.info("No tasks to print")
                return 0

            tickets = [format_task(t, self.base_url) for t in sprint_tasks]
            printed = self.dispatcher.dispatch(tickets, self.delay_ms)
        except Exception:
            logger.exception("Poll failed while printing tasks")
            return 0

        logger.info(f"[DONE] Printed {printed} new task(s)")
        return printed


class PollScheduler:
    """
    Drives PollCycle: Idle -> Running -> Stopped.

    The first cycle runs immediately on the calling thread. In continuous
    mode a single interval job is then armed; it never overlaps itself.
    """

    def __init__(
        self,
        cycle,
        interval_seconds: float,
        scheduler: BaseScheduler | None = None,
    ):
        self.cycle = cycle
        self.interval_seconds = interval_seconds
        self._scheduler = scheduler or BlockingScheduler()
        self.state = SchedulerState.IDLE
        self._stop_requested = False

    @property
    def stop_requested(self) -> bool:
        return self._stop_requested

    def start(self, once: bool = False) -> None:
        """Run one cycle now, then exit (once) or keep polling until stopped."""
        if self.state is not SchedulerState.IDLE:
            raise RuntimeError(f"Scheduler cannot start from state '{self.state.value}'")

        self.state = SchedulerState.RUNNING
        self.cycle()

        if once:
            logger.info("One-shot mode, exiting...")
            self.state = SchedulerState.STOPPED
            return

        if self._stop_requested:
            self.state = SchedulerState.STOPPED
            return

        self._scheduler.add_job(
            self.cycle,
            IntervalTrigger(seconds=self.interval_seconds),
            id=POLL_JOB_ID,
            max_instances=1,
            coalesce=True,
            replace_existing=True,
        )
        logger.info(f"Starting polling loop (every {self.interval_seconds / 60:g} minutes)")

        # Blocks for BlockingScheduler; returns immediately for background ones
        self._scheduler.start()

        if isinstance(self._scheduler, BlockingScheduler):
            self.state = SchedulerState.STOPPED

    def stop(self) -> None:
        """Cancel future cycles. Any cycle in progress finishes on its own."""
        if self._stop_requested:
            return

        self._stop_requested = True
        if self.state is SchedulerState.IDLE:
            self.state = SchedulerState.STOPPED
            return

        logger.info("Shutting down...")
        if self._scheduler.running:
            self._scheduler.shutdown(wait=False)
        self.state = SchedulerState.STOPPED

    def install_signal_handlers(self) -> None:
        """Stop gracefully on SIGINT/SIGTERM."""

        def _handle(signum, frame):
            logger.info(f"Received signal {signal.Signals(signum).name}")
            self.stop()

        signal.signal(signal.SIGINT, _handle)
        signal.signal(signal.SIGTERM, _handle)
