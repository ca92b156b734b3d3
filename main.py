#!/usr/bin/env python3
"""
================================================================================
MAIN.PY - LOCAL COMMAND LINE ENTRY POINT
================================================================================
PURPOSE: Operator tool for the block search backend. Runs the same code paths
         as the serverless functions against the live spreadsheet.

COMMANDS:
  check    Validate configuration
  search   Search the Data tab and print the matching records
  login    Check credentials against the User tab and print a token

USAGE:
  python main.py check
  python main.py search --block-no B12                  # All parts of block B12
  python main.py search --block-no B12 --part-no P3 --json
  python main.py login --username alice --password secret
================================================================================
"""

import sys
import json
import argparse

from config import Config
from core import (
    AppError,
    SearchQuery, run_search,
    open_sheets, authenticate,
    label_for,
    log_msg, print_header, print_separator, print_success, print_error,
)

from rich.console import Console
from rich.table import Table
from rich.text import Text

# Command output; logs go to stderr
stdout = Console()

# ==================== COMMANDS ====================

def cmd_check(args):
    """Validate configuration; returns exit code."""
    problems = Config.validate()

    print_header("Block Search - Configuration", {
        "Spreadsheet": Config.GOOGLE_SHEETS_ID or Config.GOOGLE_SHEET_URL or "(missing)",
        "Credentials": "GOOGLE_SERVICE_ACCOUNT" if Config.GOOGLE_SERVICE_ACCOUNT else Config.get_credentials_path(),
        "Data Range": Config.DATA_RANGE,
        "Auth Required": Config.REQUIRE_AUTH,
    })

    if problems:
        for problem in problems:
            print_error(problem)
        return 1

    print_success("Configuration valid")
    return 0


def render_results(results):
    """Print results as a table whose columns are the active fields."""
    if not results:
        log_msg("[INFO] No matching records")
        return

    table = Table(show_lines=False)
    fields = list(results[0].keys())
    for name in fields:
        table.add_column(label_for(name))
    for record in results:
        table.add_row(*(Text(record[name]) for name in fields))

    stdout.print(table)


def cmd_search(args):
    query = SearchQuery.from_params({
        "blockNo": args.block_no,
        "partNo": args.part_no,
        "thickness": args.thickness,
    })

    results = run_search(open_sheets(), query, args.range or Config.DATA_RANGE)

    if args.json:
        print(json.dumps(results, indent=2))
    else:
        render_results(results)
        print_separator()
        log_msg(f"[OK] {len(results)} record(s)")
    return 0


def cmd_login(args):
    result = authenticate(open_sheets(), args.username, args.password)
    print(result["token"])
    return 0

# ==================== ARGUMENTS ====================

def build_parser():
    parser = argparse.ArgumentParser(
        description="Block Search - spreadsheet-backed block/part lookup",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py check
  python main.py search --block-no B12
  python main.py search --block-no B12 --thickness 20 --json
        """
    )
    sub = parser.add_subparsers(dest="command", required=True)

    check = sub.add_parser("check", help="Validate configuration")
    check.set_defaults(func=cmd_check)

    search = sub.add_parser("search", help="Search the Data tab")
    search.add_argument("--block-no", required=True, help="Block number (case-insensitive)")
    search.add_argument("--part-no", default=None, help="Part number filter")
    search.add_argument("--thickness", default=None, help="Thickness filter")
    search.add_argument("--range", default=None, help=f"A1 range (default {Config.DATA_RANGE})")
    search.add_argument("--json", action="store_true", help="Print raw JSON")
    search.set_defaults(func=cmd_search)

    login = sub.add_parser("login", help="Mint a bearer token")
    login.add_argument("--username", required=True)
    login.add_argument("--password", required=True)
    login.set_defaults(func=cmd_login)

    return parser


def main(argv=None):
    """
    PURPOSE: Parse arguments and dispatch to a command.

    RETURNS:
      int: Exit code (0 = success, 1 = error)
    """
    args = build_parser().parse_args(argv)

    try:
        return args.func(args)
    except AppError as e:
        print_error(e.message)
        return 1
    except KeyboardInterrupt:
        log_msg("[INFO] Interrupted by user")
        return 1


if __name__ == "__main__":
    sys.exit(main())
