"""Shared wiring between the CLI and the polling loop.

Each build_* function turns a Config into ready-to-use components.
"""

import logging

from .adapters.console_printer import ConsolePrinter
from .adapters.escpos_printer import EscposPrinter, PrinterConfig
from .adapters.file_cache import FilePrintCache
from .adapters.phabricator_api import PhabricatorAdapter
from .config import Config
from .dispatcher import PrintDispatcher
from .ports import TicketPrinter
from .scheduler import PollCycle, PollScheduler

logger = logging.getLogger(__name__)


def get_cache(config: Config) -> FilePrintCache:
    """Open the dedup cache and load what was printed before."""
    cache = FilePrintCache(config.cache_file)
    cache.load()
    return cache


def get_printer(config: Config, dry_run: bool = False) -> TicketPrinter:
    if dry_run:
        return ConsolePrinter(paper_width=config.paper_width)
    return EscposPrinter(PrinterConfig.from_config(config))


def build_dispatcher(config: Config, dry_run: bool = False) -> PrintDispatcher:
    return PrintDispatcher(
        printer=get_printer(config, dry_run),
        cache=get_cache(config),
        dry_run=dry_run,
    )


def build_cycle(config: Config, dry_run: bool = False) -> PollCycle:
    return PollCycle(
        repository=PhabricatorAdapter.from_config(config),
        dispatcher=build_dispatcher(config, dry_run),
        sprint_keywords=config.sprint_columns,
        base_url=config.phab_url,
        delay_ms=config.print_delay_ms,
    )


def build_scheduler(config: Config, dry_run: bool = False) -> PollScheduler:
    return PollScheduler(build_cycle(config, dry_run), config.poll_interval_seconds)


def log_config_summary(config: Config) -> None:
    logger.info(f"[CONFIG] Phabricator URL: {config.phab_url}")
    logger.info(f"[CONFIG] User PHID: {config.user_phid}")
    logger.info(f"[CONFIG] Poll interval: {config.poll_interval_seconds:g} seconds")
    logger.info(f"[CONFIG] Sprint columns: {', '.join(config.sprint_columns)}")
