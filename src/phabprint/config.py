"""Configuration management for PhabPrint."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

PHABPRINT_HOME = Path(os.environ.get("PHABPRINT_HOME", Path.home() / ".phabprint"))
CONFIG_FILE = PHABPRINT_HOME / "config" / "phabprint.conf"
DATA_DIR = PHABPRINT_HOME / "data"

DEFAULT_SPRINT_COLUMNS = ["sprint", "to do", "in progress", "doing"]

KNOWN_KEYS = (
    "phab_url",
    "phab_api_token",
    "your_user_phid",
    "poll_interval_ms",
    "print_delay_ms",
    "printer_type",
    "printer_host",
    "printer_port",
    "printer_usb_vendor_id",
    "printer_usb_product_id",
    "paper_width",
    "sprint_columns",
    "task_statuses",
    "cache_file",
)


@dataclass
class Config:
    """PhabPrint configuration."""

    phab_url: str = ""
    phab_api_token: str = ""
    user_phid: str = ""
    poll_interval_ms: int = 15 * 60 * 1000
    print_delay_ms: int = 1000
    printer_type: str = "usb"
    printer_host: str = ""
    printer_port: int = 9100
    printer_usb_vendor_id: int | None = None
    printer_usb_product_id: int | None = None
    paper_width: int = 58
    sprint_columns: list[str] = field(default_factory=lambda: list(DEFAULT_SPRINT_COLUMNS))
    task_statuses: list[str] = field(default_factory=lambda: ["open"])
    cache_file: Path = field(default_factory=lambda: DATA_DIR / "printed-tasks.json")

    @property
    def poll_interval_seconds(self) -> float:
        return self.poll_interval_ms / 1000

    def validate(self) -> list[str]:
        """Return a list of configuration problems (empty if valid)."""
        errors = []
        if not self.phab_url:
            errors.append("PHAB_URL is required")
        if not self.phab_api_token:
            errors.append("PHAB_API_TOKEN is required")
        if not self.user_phid:
            errors.append("YOUR_USER_PHID is required")
        if self.printer_type not in ("usb", "network"):
            errors.append(f"PRINTER_TYPE must be 'usb' or 'network', got '{self.printer_type}'")
        elif self.printer_type == "network" and not self.printer_host:
            errors.append("PRINTER_HOST is required for network printers")
        if self.poll_interval_ms <= 0:
            errors.append("POLL_INTERVAL_MS must be positive")
        return errors


def _split_list(value: str, lower: bool = False) -> list[str]:
    items = [v.strip() for v in value.split(",") if v.strip()]
    return [v.lower() for v in items] if lower else items


def _parse_int(key: str, value: str, default: int) -> int:
    try:
        return int(value)
    except ValueError:
        logger.warning(f"Invalid integer for {key.upper()}: '{value}', using {default}")
        return default


def _parse_usb_id(key: str, value: str) -> int | None:
    """Parse a USB id such as 0x04b8 or 04b8 (always hex)."""
    try:
        return int(value, 16)
    except ValueError:
        logger.warning(f"Invalid USB id for {key.upper()}: '{value}', ignoring")
        return None


def _unquote(value: str) -> str:
    """Strip surrounding quotes, or an inline comment from an unquoted value."""
    if value.startswith('"') or value.startswith("'"):
        quote = value[0]
        end_quote = value.find(quote, 1)
        return value[1:end_quote] if end_quote != -1 else value[1:]
    if "#" in value:
        value = value.split("#")[0].strip()
    return value


def _read_config_file(path: Path) -> dict[str, str]:
    values: dict[str, str] = {}
    if not path.exists():
        return values

    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        values[key.strip().lower()] = _unquote(value.strip())

    return values


def _apply(config: Config, key: str, value: str) -> None:
    match key:
        case "phab_url":
            config.phab_url = value.rstrip("/")
        case "phab_api_token":
            config.phab_api_token = value
        case "your_user_phid":
            config.user_phid = value
        case "poll_interval_ms":
            config.poll_interval_ms = _parse_int(key, value, config.poll_interval_ms)
        case "print_delay_ms":
            config.print_delay_ms = _parse_int(key, value, config.print_delay_ms)
        case "printer_type":
            config.printer_type = value.lower()
        case "printer_host":
            config.printer_host = value
        case "printer_port":
            config.printer_port = _parse_int(key, value, config.printer_port)
        case "printer_usb_vendor_id":
            config.printer_usb_vendor_id = _parse_usb_id(key, value)
        case "printer_usb_product_id":
            config.printer_usb_product_id = _parse_usb_id(key, value)
        case "paper_width":
            config.paper_width = _parse_int(key, value, config.paper_width)
        case "sprint_columns":
            config.sprint_columns = _split_list(value, lower=True)
        case "task_statuses":
            config.task_statuses = _split_list(value)
        case "cache_file":
            config.cache_file = Path(value).expanduser()


def load_config(environ: dict[str, str] | None = None) -> Config:
    """Load configuration from phabprint.conf, then environment overrides."""
    environ = os.environ if environ is None else environ
    config = Config()

    for key, value in _read_config_file(CONFIG_FILE).items():
        _apply(config, key, value)

    for key in KNOWN_KEYS:
        value = environ.get(key.upper())
        if value is not None and value.strip():
            _apply(config, key, value.strip())

    return config
