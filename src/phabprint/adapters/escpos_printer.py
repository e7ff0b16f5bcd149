"""
Thermal printer adapter for printing task tickets via ESC/POS.

Each ticket is printed on its own slip and auto-cut so it can be pinned to a
physical kanban board.
"""

import logging
from dataclasses import dataclass

from escpos.printer import Network, Usb

from phabprint.config import Config
from phabprint.core.tickets import Ticket, line_width, truncate

logger = logging.getLogger(__name__)


USB_PRINTER_CLASS = 7


def is_printer_device(device) -> bool:
    """True if any interface of the USB device is printer class."""
    if getattr(device, "bDeviceClass", None) == USB_PRINTER_CLASS:
        return True
    for usb_config in device:
        for interface in usb_config:
            if interface.bInterfaceClass == USB_PRINTER_CLASS:
                return True
    return False


class PrintError(Exception):
    """Raised when the printer cannot be opened or a write fails."""

    pass


@dataclass
class PrinterConfig:
    """Configuration for thermal printer connection."""

    connection_type: str = "usb"
    host: str = ""
    port: int = 9100
    timeout: int = 60
    paper_width: int = 58
    usb_vendor_id: int | None = None
    usb_product_id: int | None = None

    def __post_init__(self):
        self.connection_type = self.connection_type.lower()
        if self.connection_type not in ("network", "usb"):
            raise ValueError(
                f"Invalid connection_type: {self.connection_type}. Must be 'network' or 'usb'"
            )

    @classmethod
    def from_config(cls, config: Config) -> "PrinterConfig":
        return cls(
            connection_type=config.printer_type,
            host=config.printer_host,
            port=config.printer_port,
            paper_width=config.paper_width,
            usb_vendor_id=config.printer_usb_vendor_id,
            usb_product_id=config.printer_usb_product_id,
        )

    @property
    def line_width(self) -> int:
        return line_width(self.paper_width)

    def describe(self) -> str:
        if self.connection_type == "network":
            return f"network printer at {self.host}:{self.port}"
        return "USB printer"


class EscposPrinter:
    """
    ESC/POS ticket printer.

    Implements TicketPrinter protocol. Opens a fresh device connection for
    every ticket and closes it once the slip is cut.
    """

    def __init__(self, config: PrinterConfig):
        self.config = config
        logger.info(f"EscposPrinter initialized for {config.describe()}, paper={config.paper_width}mm")

    def _open_device(self):
        if self.config.connection_type == "network":
            device = Network(self.config.host, port=self.config.port, timeout=self.config.timeout)
        elif self.config.usb_vendor_id is not None and self.config.usb_product_id is not None:
            device = Usb(self.config.usb_vendor_id, self.config.usb_product_id)
        else:
            device = Usb(usb_args={"custom_match": is_printer_device})
        device.open()
        return device

    def print_ticket(self, ticket: Ticket) -> None:
        try:
            device = self._open_device()
        except Exception as e:
            logger.error(f"Could not open {self.config.describe()}: {e}")
            raise PrintError(f"Could not open printer: {e}") from e

        try:
            self._render(device, ticket)
        except Exception as e:
            raise PrintError(f"Print failed for {ticket.id}: {e}") from e
        finally:
            try:
                device.close()
            except Exception as e:
                logger.debug(f"Error closing printer: {e}")

        logger.info(f"Printed {ticket.id}: {truncate(ticket.title, 40)}")

    def _render(self, device, ticket: Ticket) -> None:
        """
        Write one ticket.

        Layout: big bold id header, title, metadata, board columns, and the
        task URL in the small font, then feed and cut.
        """
        width = self.config.line_width
        separator = "-" * width

        # Header
        device.set(align="center", font="a", bold=True, double_height=True, double_width=True)
        device.textln(ticket.id)
        device.set(align="center", font="a", bold=False, normal_textsize=True)
        device.textln(separator)

        # Title
        device.set(align="left", bold=True)
        device.textln(truncate(ticket.title, width))
        device.set(align="left", bold=False)
        device.ln()

        device.textln(f"Priority: {ticket.priority}")
        device.textln(f"Points:   {ticket.points}")
        device.textln(f"Status:   {ticket.status}")
        device.ln()

        device.textln(f"Column: {ticket.column_label}")
        device.ln()
        device.textln(separator)

        # Footer
        device.set(align="center", font="b")
        device.textln(ticket.url)

        device.ln(4)
        device.cut()
