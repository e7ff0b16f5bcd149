"""Print dispatch - dedup, print, remember."""

import logging
import time
from typing import Callable

from .core.tickets import SAMPLE_TICKET, Ticket, truncate
from .ports import PrintCache, TicketPrinter

logger = logging.getLogger(__name__)


class PrintDispatcher:
    """
    Prints tickets that have not been printed before.

    A ticket is marked in the cache only after its print succeeded. In
    dry-run mode nothing is ever marked.
    """

    def __init__(
        self,
        printer: TicketPrinter,
        cache: PrintCache,
        dry_run: bool = False,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.printer = printer
        self.cache = cache
        self.dry_run = dry_run
        self._sleep = sleep

    def dispatch(self, tickets: list[Ticket], delay_ms: int = 1000) -> int:
        """Print every ticket not already in the cache. Returns the count printed."""
        printed = 0

        for index, ticket in enumerate(tickets):
            if self.cache.has(ticket.id):
                logger.info(f"[SKIP] {ticket.id} already printed")
                continue

            if self._print_one(ticket):
                printed += 1

            # Pause between physical prints, not after the last ticket
            if delay_ms > 0 and index < len(tickets) - 1:
                self._sleep(delay_ms / 1000)

        return printed

    def _print_one(self, ticket: Ticket) -> bool:
        if self.dry_run:
            logger.info(f"[DRY-RUN] Simulating print for {ticket.id}")

        try:
            self.printer.print_ticket(ticket)
        except Exception as e:
            logger.error(f"Failed to print {ticket.id}: {e}")
            return False

        if not self.dry_run:
            self.cache.mark_printed(ticket.id)
            logger.info(f"[PRINT] {ticket.id}: {truncate(ticket.title, 40)}")
        return True

    def print_test(self) -> Ticket:
        """Print the sample ticket, bypassing the cache. Errors propagate."""
        logger.info(f"Printing test ticket {SAMPLE_TICKET.id}")
        self.printer.print_ticket(SAMPLE_TICKET)
        return SAMPLE_TICKET
