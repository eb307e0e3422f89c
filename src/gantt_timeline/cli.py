"""
CLI entry point for gantt-timeline.

PURPOSE: Command-line access to the record store, the engine and the dashboard.
AI CONTEXT: Main entry points for package execution.

USAGE:
    python -m gantt_timeline dataview --sort intensity
    gantt-timeline encode --style fraction --color-mode single
    gantt-timeline summary "Project A"
    gantt-timeline render --output chart.png
    gantt-timeline import records.json
    gantt-timeline clear
    gantt-timeline dashboard --port 8080
    gantt-timeline --data-dir /srv/gantt dataview

EXIT CODES:
    0 success, 1 invalid input (GanttError, unknown label, unreadable file,
    missing optional dependency)
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from functools import lru_cache
from typing import TYPE_CHECKING, Any

from .config import Config, EncodingConfig
from .errors import GanttError
from .sorting import strategy_names

if TYPE_CHECKING:
    from .storage import RecordStore

PROG_NAME = "gantt-timeline"


@lru_cache(maxsize=1)
def _get_logger() -> logging.Logger:
    """Get module logger (cached for thread safety)."""
    logging.basicConfig(level=logging.INFO)
    return logging.getLogger(__name__)


def _log(message: str, *, emoji: str = "") -> None:
    """Log message with optional emoji prefix for CLI output.

    Args:
        message: The message to log.
        emoji: Optional emoji prefix for visual CLI feedback.
    """
    prefix = f"{emoji} " if emoji else ""
    _get_logger().info(f"{prefix}{message}")


def _open_store(data_dir: str | None = None) -> RecordStore:
    from .storage import RecordStore

    return RecordStore(storage_dir=data_dir)


def _print_json(data: Any) -> None:
    # print() keeps stdout pipeable into jq and files
    print(json.dumps(data, indent=2, default=str))


def run_dataview(store: RecordStore | None = None, sort: str | None = None) -> None:
    """
    Print the data view of the stored records as JSON.

    Args:
        store: Optional RecordStore for testability.
        sort: Sort strategy name.

    Raises:
        GanttError: If the sort strategy or stored domain is invalid.
    """
    from .presenters import GanttPresenter

    presenter = GanttPresenter(store or _open_store())
    _print_json(presenter.load_data_view(sort).to_dict())


def run_encode(
    store: RecordStore | None = None,
    encoding_config: EncodingConfig | None = None,
    sort: str | None = None,
) -> None:
    """
    Print the visual model of the stored records as JSON.

    Business context: Lets a separate renderer (a notebook, a static site
    build) consume precomputed cells or gradient stops.

    Args:
        store: Optional RecordStore for testability.
        encoding_config: Style and color settings.
        sort: Sort strategy name.

    Raises:
        GanttError: If the configuration is invalid.
    """
    from .presenters import GanttPresenter

    presenter = GanttPresenter(store or _open_store())
    _print_json(presenter.get_chart(encoding_config, sort).visual.to_dict())


def run_summary(label: str, store: RecordStore | None = None) -> bool:
    """
    Print the digest of one label.

    Args:
        label: Label to summarize.
        store: Optional RecordStore for testability.

    Returns:
        True if the label was found.
    """
    from .presenters import GanttPresenter

    digest = GanttPresenter(store or _open_store()).get_summary(label)
    if digest is None:
        _log(f"Unknown label '{label}'", emoji="❌")
        return False
    print(digest.as_text())
    return True


def run_render(
    output: str,
    store: RecordStore | None = None,
    encoding_config: EncodingConfig | None = None,
    sort: str | None = None,
) -> bool:
    """
    Render the chart to a PNG file.

    Args:
        output: Destination path of the PNG.
        store: Optional RecordStore for testability.
        encoding_config: Style and color settings.
        sort: Sort strategy name.

    Returns:
        True on success, False if matplotlib is not installed.

    Raises:
        GanttError: If the configuration is invalid.
        OSError: If the output file cannot be written.

    Example:
        >>> # gantt-timeline render --output chart.png --style fraction
        >>> run_render("chart.png")
        True
    """
    from .presenters import ChartPresenter, GanttPresenter

    charts = ChartPresenter(GanttPresenter(store or _open_store()))
    try:
        png = charts.render_gantt_chart(encoding_config, sort)
    except ImportError:
        _log(f"matplotlib is required: pip install '{PROG_NAME}[charts]'", emoji="❌")
        return False
    with open(output, "wb") as f:
        f.write(png)
    _log(f"Chart written to {output} ({len(png)} bytes)", emoji="✅")
    return True


def run_import(path: str, store: RecordStore | None = None) -> bool:
    """
    Append the records of a JSON file to the store.

    Args:
        path: Records file, a list or a full records document.
        store: Optional RecordStore for testability.

    Returns:
        True on success, False if the file is missing or not JSON.
    """
    store = store or _open_store()
    try:
        count = store.import_file(path)
    except FileNotFoundError:
        _log(f"File not found: {path}", emoji="❌")
        return False
    except json.JSONDecodeError as e:
        _log(f"Invalid JSON in {path}: {e}", emoji="❌")
        return False
    _log(f"Imported {count} records into {store.records_file}", emoji="✅")
    return True


def run_clear(store: RecordStore | None = None) -> bool:
    """Remove all stored records and the stored domain."""
    store = store or _open_store()
    if not store.clear():
        return False
    _log(f"Cleared {store.records_file}", emoji="🧹")
    return True


def run_dashboard(host: str = Config.DEFAULT_HOST, port: int = Config.DEFAULT_PORT) -> None:
    """
    Launch the web dashboard.

    Args:
        host: Network interface to bind to. Default '127.0.0.1'.
        port: TCP port for the HTTP server. Default 8000.

    Returns:
        None. Blocks until server shutdown (Ctrl+C).

    Raises:
        OSError: If port is already in use.
        ImportError: If FastAPI/uvicorn are not installed.

    Example:
        >>> # gantt-timeline dashboard --port 3000
        >>> run_dashboard(port=3000)
        🚀 Starting dashboard at http://127.0.0.1:3000
    """
    from .web import run_dashboard as start_web

    _log(f"Starting dashboard at http://{host}:{port}", emoji="🚀")
    _log("Press Ctrl+C to stop")
    start_web(host=host, port=port)


def _add_encoding_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--style",
        choices=sorted(Config.STYLES),
        default=Config.DEFAULT_STYLE,
        help=f"Encoding style (default: {Config.DEFAULT_STYLE})",
    )
    parser.add_argument(
        "--color-mode",
        choices=sorted(Config.COLOR_MODES),
        default=Config.DEFAULT_COLOR_MODE,
        help=f"Color mode (default: {Config.DEFAULT_COLOR_MODE})",
    )
    parser.add_argument(
        "--no-labels",
        action="store_true",
        help="Omit bar and cell text",
    )


def _add_sort_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--sort",
        default=None,
        help=f"Sort strategy: {', '.join(strategy_names())} (default: reverse order)",
    )


def _build_parser() -> argparse.ArgumentParser:
    from .__version__ import __version__

    parser = argparse.ArgumentParser(
        prog=PROG_NAME,
        description="Gantt timeline charts from (label, date, value) records",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--data-dir",
        default=None,
        help="Record store directory (default: $GANTT_DATA_DIR or .gantt)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    dataview_parser = subparsers.add_parser("dataview", help="Print the data view as JSON")
    _add_sort_argument(dataview_parser)

    encode_parser = subparsers.add_parser("encode", help="Print the visual model as JSON")
    _add_encoding_arguments(encode_parser)
    _add_sort_argument(encode_parser)

    summary_parser = subparsers.add_parser("summary", help="Print the digest of one label")
    summary_parser.add_argument("label", help="Label to summarize")

    render_parser = subparsers.add_parser("render", help="Render the chart to PNG")
    render_parser.add_argument("--output", "-o", required=True, help="Output PNG path")
    _add_encoding_arguments(render_parser)
    _add_sort_argument(render_parser)

    import_parser = subparsers.add_parser("import", help="Append records from a JSON file")
    import_parser.add_argument("file", help="JSON records file")

    subparsers.add_parser("clear", help="Remove all stored records")

    dashboard_parser = subparsers.add_parser("dashboard", help="Launch web dashboard")
    dashboard_parser.add_argument(
        "--host",
        default=Config.DEFAULT_HOST,
        help=f"Bind address (default: {Config.DEFAULT_HOST})",
    )
    dashboard_parser.add_argument(
        "--port",
        type=int,
        default=Config.DEFAULT_PORT,
        help=f"Port number (default: {Config.DEFAULT_PORT})",
    )
    return parser


def main() -> int:
    """
    Main CLI entry point for gantt-timeline.

    Parses command-line arguments and dispatches to the matching run_*
    handler. Invalid configuration (GanttError) is logged, not raised.

    Business context: Installed as the 'gantt-timeline' console script,
    it covers the whole workflow: import records, inspect them, render
    a PNG or serve the dashboard.

    Returns:
        Exit code: 0 on success, 1 on invalid input or a failed command.

    Raises:
        SystemExit: On --help, --version or argument parsing errors.

    Example:
        >>> # gantt-timeline encode --style fraction
        >>> sys.exit(main())
    """
    parser = _build_parser()
    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        return 0

    try:
        if args.command == "dashboard":
            if args.data_dir:
                # The dashboard builds its store inside the uvicorn app factory
                os.environ["GANTT_DATA_DIR"] = args.data_dir
            run_dashboard(host=args.host, port=args.port)
            return 0

        store = _open_store(args.data_dir)
        if args.command == "dataview":
            run_dataview(store, sort=args.sort)
            ok = True
        elif args.command == "encode":
            config = EncodingConfig(
                style=args.style, color_mode=args.color_mode, labels=not args.no_labels
            )
            run_encode(store, config, sort=args.sort)
            ok = True
        elif args.command == "summary":
            ok = run_summary(args.label, store)
        elif args.command == "render":
            config = EncodingConfig(
                style=args.style, color_mode=args.color_mode, labels=not args.no_labels
            )
            ok = run_render(args.output, store, config, sort=args.sort)
        elif args.command == "import":
            ok = run_import(args.file, store)
        else:
            ok = run_clear(store)
    except GanttError as e:
        _log(str(e), emoji="❌")
        return 1

    return 0 if ok else 1


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
