"""Console preview adapter - renders tickets to the terminal for dry runs."""

import click

from phabprint.core.tickets import Ticket, line_width, truncate


def render_preview(ticket: Ticket, paper_width: int = 58) -> list[str]:
    """Render a ticket as boxed text lines matching the printed layout."""
    width = line_width(paper_width)
    inner = width + 2
    separator = "─" * width

    def row(text: str) -> str:
        return f"│ {text[:width].ljust(width)} │"

    def centered(text: str) -> str:
        return f"│{text.center(inner)}│"

    blank = f"│{' ' * inner}│"
    return [
        f"┌{'─' * inner}┐",
        centered(ticket.id),
        centered(separator),
        row(truncate(ticket.title, width)),
        blank,
        row(f"Priority: {ticket.priority}"),
        row(f"Points:   {ticket.points}"),
        row(f"Status:   {ticket.status}"),
        blank,
        row(f"Column: {ticket.column_label}"),
        blank,
        centered(truncate(ticket.url, width)),
        f"└{'─' * inner}┘",
    ]


class ConsolePrinter:
    """
    Dry-run printer.

    Implements TicketPrinter protocol by echoing a preview instead of
    touching the device.
    """

    def __init__(self, paper_width: int = 58, echo=click.echo):
        self.paper_width = paper_width
        self._echo = echo

    def print_ticket(self, ticket: Ticket) -> None:
        self._echo("")
        for line in render_preview(ticket, self.paper_width):
            self._echo(line)
        self._echo("")
