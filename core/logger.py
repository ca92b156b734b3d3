"""
================================================================================
LOGGER.PY - LOGGING & CONSOLE OUTPUT
================================================================================
PURPOSE: Centralized logging for handlers and the local CLI.
         Handles different log levels (INFO, OK, ERROR, SEARCH, AUTH, API)

FEATURES:
  - Color-coded messages based on log tag
  - Timestamp formatting (UTC)
  - Plain text output on CI and serverless hosts (function logs)
  - Rich console formatting for local development
  - All log output goes to stderr; stdout is reserved for command output
================================================================================
"""

import sys
from datetime import datetime, timezone
from colorama import init as colorama_init
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from config import Config

# Initialize colorama for Windows compatibility
colorama_init(autoreset=True)

# Rich console for fancy formatting (stderr)
console = Console(stderr=True)

# Tag -> rich style, checked in order
LEVEL_STYLES = [
    ("[OK]", "green"),
    ("[ERROR]", "red"),
    ("FATAL", "red"),
    ("[SEARCH]", "cyan"),
    ("[AUTH]", "magenta"),
    ("[API]", "blue"),
    ("[WARN]", "yellow"),
]

# ==================== TIME UTILITIES ====================

def get_utc_time():
    """
    PURPOSE: Get current time in UTC (naive, for display)

    RETURNS:
      datetime: Current UTC time
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def get_timestamp_short():
    """
    PURPOSE: Get short timestamp format (HH:MM:SS)

    RETURNS:
      str: Formatted time string
    """
    return get_utc_time().strftime('%H:%M:%S')

# ==================== LOGGING FUNCTIONS ====================

def detect_style(text: str):
    """Return the rich style for a message based on its tag (None if untagged)."""
    upper = text.upper()
    for tag, style in LEVEL_STYLES:
        if tag in upper:
            return style
    return None


def log_msg(message: str, style: str = None):
    """
    PURPOSE: Log a message with automatic level detection and formatting

    LOGIC:
      - Parse message for log level tags ([OK], [ERROR], etc.)
      - Assign color based on level
      - Output plain text on CI/serverless hosts, rich text locally

    ARGS:
      message (str): Message to log
      style (str, optional): Rich style override

    RETURNS:
      None
    """
    ts = get_timestamp_short()
    text = str(message)

    if Config.IS_CI:
        # Plain text for function logs
        print(f"[{ts}] {text}", file=sys.stderr)
        sys.stderr.flush()
    else:
        line = Text(f"{ts}  ", style="bold")
        line.append(text, style=style or detect_style(text))
        console.print(line)


def print_header(title: str, data: dict = None):
    """
    PURPOSE: Print a formatted header panel with configuration/status info

    ARGS:
      title (str): Header title
      data (dict, optional): Key-value pairs to display (None shows "(missing)")

    RETURNS:
      None
    """
    rows = [(key, "(missing)" if value is None else str(value)) for key, value in (data or {}).items()]

    if Config.IS_CI:
        print(f"\n{'=' * 70}", file=sys.stderr)
        print(f"  {title}", file=sys.stderr)
        print(f"{'=' * 70}", file=sys.stderr)
        for key, value in rows:
            print(f"  {key}: {value}", file=sys.stderr)
        return

    header = Table.grid(padding=(0, 2))
    header.add_column(justify="left")
    for key, value in rows:
        header.add_row(Text(f"{key}: {value}"))

    console.print(Panel(header, title=escape(title), border_style="magenta"))


def print_separator(char: str = "="):
    """Print a separator line for visual clarity."""
    print(char * 70, file=sys.stderr)


def print_success(message: str):
    log_msg(f"[OK] {message}")


def print_error(message: str):
    log_msg(f"[ERROR] {message}")


def print_info(message: str):
    log_msg(f"[INFO] {message}")
