"""
Command-line interface for the record browser.

Usage:
    record-browser show [--page 2] [--bulk 15] [--deselect 1] [--select 4]
    record-browser validate-view path/to/view.yaml
    record-browser gui [--page 1]
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from .config import ViewConfig, default_view_config, load_view_config
from .core.bulk import BulkSelectCommand
from .core.ledger import SelectionLedger
from .core.records import PageResult
from .settings import BrowserSettings, get_settings
from .store import FetchError, HttpRecordSource, PageStore

Logger = logging.getLogger(__name__)

CELL_WIDTH = 28


def configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(message)s")


def add_shared_source_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--view-config",
        type=Path,
        default=None,
        help="YAML file listing the record fields to display (defaults to RECORD_BROWSER_VIEW_CONFIG).",
    )
    parser.add_argument(
        "--endpoint",
        type=str,
        default=None,
        help="Override the remote endpoint (defaults to RECORD_BROWSER_ENDPOINT).",
    )
    parser.add_argument(
        "--page-size",
        type=int,
        default=None,
        help="Override the page size the remote source uses (defaults to RECORD_BROWSER_PAGE_SIZE).",
    )
    parser.add_argument(
        "--page",
        type=int,
        default=1,
        help="1-based page to open (default: 1).",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="record-browser",
        description="Browse a paginated remote record list and select rows across pages.",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    show_parser = subparsers.add_parser(
        "show",
        help="Fetch one page and print it with the rows a selection would check.",
    )
    add_shared_source_arguments(show_parser)
    show_parser.add_argument(
        "--bulk",
        type=str,
        default=None,
        help="Select the first N records across all pages before printing.",
    )
    show_parser.add_argument(
        "--deselect",
        type=int,
        action="append",
        default=[],
        metavar="ROW",
        help="0-based row on the shown page to deselect (repeatable).",
    )
    show_parser.add_argument(
        "--select",
        type=int,
        action="append",
        default=[],
        metavar="ROW",
        help="0-based row on the shown page to select (repeatable).",
    )

    validate_parser = subparsers.add_parser(
        "validate-view",
        help="Validate a YAML view configuration and print its columns.",
    )
    validate_parser.add_argument("path", type=Path, help="Path to the view configuration.")

    gui_parser = subparsers.add_parser("gui", help="Launch the record browser window.")
    add_shared_source_arguments(gui_parser)

    return parser


def resolve_settings(args: argparse.Namespace) -> BrowserSettings:
    settings = get_settings()
    overrides = {}
    if getattr(args, "endpoint", None):
        overrides["endpoint"] = args.endpoint
    if getattr(args, "page_size", None) is not None:
        overrides["page_size"] = args.page_size
    if getattr(args, "view_config", None) is not None:
        overrides["view_config"] = args.view_config
    if not overrides:
        return settings
    return BrowserSettings(**{**settings.model_dump(), **overrides})


def resolve_view_config(settings: BrowserSettings) -> ViewConfig:
    if settings.view_config is None:
        return default_view_config()
    return load_view_config(settings.view_config)


def format_page(page: PageResult, selection: Sequence[bool], view_config: ViewConfig) -> str:
    headers = ["", "#", *view_config.headers]
    lines = [" | ".join(headers)]
    for idx, (record, selected) in enumerate(zip(page.records, selection)):
        cells = ["[x]" if selected else "[ ]", str(idx)]
        for name in view_config.field_names:
            value = record.get(name)
            text = "" if value is None else " ".join(str(value).split())
            if len(text) > CELL_WIDTH:
                text = text[: CELL_WIDTH - 1] + "…"
            cells.append(text)
        lines.append(" | ".join(cells))
    return "\n".join(lines)


def show_command(args: argparse.Namespace) -> int:
    if args.page < 1:
        Logger.error("Pages are numbered from 1, got %d", args.page)
        return 2
    try:
        settings = resolve_settings(args)
        view_config = resolve_view_config(settings)
    except Exception as exc:  # noqa: BLE001
        Logger.error("Invalid configuration: %s", exc)
        return 2

    source = HttpRecordSource(
        settings.endpoint,
        timeout_s=settings.request_timeout_s,
        fields=view_config.field_names,
    )
    store = PageStore(source, settings.page_size)
    ledger = SelectionLedger(settings.page_size)
    try:
        page = store.load_page(args.page)
    except FetchError as exc:
        Logger.error("%s", exc)
        if Logger.isEnabledFor(logging.DEBUG):
            Logger.exception("Stack trace")
        return 1
    finally:
        source.close()

    if args.bulk is not None:
        BulkSelectCommand(ledger).submit(args.bulk)

    for row, want_selected in _row_toggles(args):
        if row < 0 or row >= len(page.records):
            Logger.warning("Row %d is not on page %d; ignored", row, page.page_index)
            continue
        ledger.apply_toggle(page.page_index, row, page.records[row].id, want_selected)

    selection = ledger.compute_visible_selection(page.page_index, page.records)
    print(format_page(page, selection, view_config))
    print(
        f"Page {page.page_index} of {store.page_count} | "
        f"{sum(selection)} selected on page | "
        f"{ledger.selected_total(page.total_count)} selected of {page.total_count}"
    )
    return 0


def _row_toggles(args: argparse.Namespace) -> List[tuple]:
    toggles = [(row, False) for row in args.deselect]
    toggles.extend((row, True) for row in args.select)
    return toggles


def validate_view_command(args: argparse.Namespace) -> int:
    try:
        view_config = load_view_config(args.path)
    except Exception as exc:  # pylint: disable=broad-except
        Logger.error("Validation failed: %s", exc)
        return 1
    Logger.info("View config %s", args.path)
    for column in view_config.columns:
        Logger.info("  - %s: %s", column.field, column.title)
    Logger.info("Validation succeeded.")
    return 0


def run_gui_with_args(args: argparse.Namespace) -> int:
    if args.page < 1:
        Logger.error("Pages are numbered from 1, got %d", args.page)
        return 2
    try:
        settings = resolve_settings(args)
        resolve_view_config(settings)
    except Exception as exc:  # noqa: BLE001
        Logger.error("Invalid configuration: %s", exc)
        return 2
    from .gui.app import run as run_gui  # Local import to avoid Qt initialization unless needed

    run_gui(args.page, settings)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    if args.command == "show":
        return show_command(args)
    if args.command == "validate-view":
        return validate_view_command(args)
    if args.command == "gui":
        return run_gui_with_args(args)

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
