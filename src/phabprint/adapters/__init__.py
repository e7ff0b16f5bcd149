"""Adapters - I/O implementations of ports."""

from .phabricator_api import PhabricatorAdapter, FetchError
from .escpos_printer import EscposPrinter, PrinterConfig, PrintError
from .console_printer import ConsolePrinter
from .file_cache import FilePrintCache

__all__ = [
    "PhabricatorAdapter",
    "FetchError",
    "EscposPrinter",
    "PrinterConfig",
    "PrintError",
    "ConsolePrinter",
    "FilePrintCache",
]
