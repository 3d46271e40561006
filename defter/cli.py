"""Command-line interface for defter.

Usage:
  defter --init --db PATH --password PASS --key PATH
      Store the database location and credentials in ~/.defterrc.json
  defter [search text...]
      Open the database, pick an entry interactively, print it and copy
      its password to the clipboard

Exit codes:
    0 - Success (or selection cancelled)
    1 - Config missing, invalid or not writable
    2 - Database open failed
    3 - Invalid arguments
    4 - Clipboard unavailable
"""

import argparse
import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.text import Text

from defter.config import Config, ConfigStore, default_config_path
from defter.errors import (
    ArgumentMissingError,
    ClipboardError,
    ConfigError,
    ConfigWriteError,
    DatabaseOpenError,
)
from defter.output import OutputPresenter
from defter.projector import EntryIndex
from defter.reader import load_entries
from defter.selector import select

logger = logging.getLogger(__name__)

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)


def _report(summary: str, exc: Exception) -> None:
    """Print the two-line ``Error:`` / ``Cause:`` message on stderr."""
    err_console.print(Text(f"Error: {summary}", style="red"), soft_wrap=True)
    err_console.print(
        Text.assemble(("Cause:", "underline"), " ", str(exc)), soft_wrap=True
    )


def _config_from_args(args) -> Config:
    """Build a Config from the --init flags, checking db, password, key."""
    if not args.db:
        raise ArgumentMissingError("db missing")
    if not args.password:
        raise ArgumentMissingError("password missing")
    if not args.key:
        raise ArgumentMissingError("key missing")
    return Config(
        password=args.password, keyfile_path=args.key, database_path=args.db
    )


# ---------------------------------------------------------------------------
# Flows
# ---------------------------------------------------------------------------


def cmd_init(args, store: ConfigStore) -> int:
    """Handle ``--init``: write a fresh config file."""
    console.print("Setting configuration")
    try:
        config = _config_from_args(args)
    except ArgumentMissingError as exc:
        _report("Could not set config.", exc)
        return 3

    try:
        store.save(config)
    except ConfigWriteError as exc:
        _report("Could not set config.", exc)
        return 1
    return 0


def cmd_search(args, store: ConfigStore) -> int:
    """Handle the default flow: load, select, print and copy."""
    try:
        config = store.load()
    except ConfigError as exc:
        _report("Could not read config file. Config is missing or corrupted.", exc)
        return 1

    try:
        raw_entries = load_entries(
            config.database_path, config.password, config.keyfile_path
        )
    except DatabaseOpenError as exc:
        _report("Could not open database.", exc)
        return 2

    index = EntryIndex.from_raw(raw_entries)
    initial_query = " ".join(args.query) if args.query else None
    chosen = select(index.titles(), initial_query=initial_query)
    if chosen is None:
        logger.debug("Selection cancelled")
        return 0

    entry = index.find(chosen)
    if entry is None:
        return 0

    try:
        OutputPresenter(console).present(entry)
    except ClipboardError as exc:
        _report("Could not copy password to clipboard.", exc)
        return 4
    return 0


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------


EPILOG = """\
set database and credentials:
  defter --init --db /db/path --key /key/path --password pass

open/browse database:
  defter
   type to search or/and use arrow keys to select
   hit enter to print selected item
"""


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="defter",
        description="defter: keepass manager",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {__import__('defter').__version__}",
    )
    parser.add_argument(
        "--init",
        action="store_true",
        help="Store database path and credentials in ~/.defterrc.json",
    )
    parser.add_argument("--db", default=None, help="Path to the .kdbx database")
    parser.add_argument(
        "--password", default=None, help="Master password of the database"
    )
    parser.add_argument("--key", default=None, help="Path to the key file")
    parser.add_argument(
        "--debug", action="store_true", help="Log debug output to stderr"
    )
    parser.add_argument(
        "query",
        nargs="*",
        help="Text to pre-fill the search box with",
    )
    return parser


def _setup_logging() -> None:
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
    )


def main(argv: Optional[list[str]] = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.debug:
        _setup_logging()

    store = ConfigStore(default_config_path())
    if args.init:
        return cmd_init(args, store)
    return cmd_search(args, store)
