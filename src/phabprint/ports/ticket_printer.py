"""Ticket printer interface."""

from typing import Protocol

from phabprint.core.tickets import Ticket


class TicketPrinter(Protocol):
    """Interface for producing a physical (or previewed) ticket."""

    def print_ticket(self, ticket: Ticket) -> None:
        """Print one ticket. Raises on failure."""
        ...
