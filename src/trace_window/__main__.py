"""Entry point for the trace-window command.

Shows the context window around a line of a source file, the way a fault
at that line would be reported. It handles:
- Configuration loading
- Logging setup with secret sanitization
- Plain or pre-highlighted HTML sources
- Text, HTML or JSON output
"""

import argparse
import sys
from pathlib import Path

import structlog

from trace_window._version import __version__

log = structlog.get_logger()


def setup_logging(debug: bool = False, log_format: str = "console") -> None:
    """Configure structured logging with secret sanitization.

    Args:
        debug: Enable debug logging if True
        log_format: Output format ("json" or "console")
    """
    from trace_window.utils.logging import LogFormat, LogLevel, configure_logging

    level = LogLevel.DEBUG if debug else LogLevel.WARNING
    configure_logging(level=level, log_format=LogFormat(log_format.lower()))


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Returns:
        Parsed argument namespace
    """
    parser = argparse.ArgumentParser(
        prog="trace-window",
        description="Show the context window around a line of a source file",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument("file", type=Path, help="Source file to show")
    parser.add_argument("line", type=int, help="1-based line number of the fault")

    parser.add_argument(
        "-m",
        "--message",
        default="",
        help="Fault message shown in the report heading",
    )

    parser.add_argument(
        "--html-markup",
        action="store_true",
        help="The file is a pre-highlighted HTML dump with color spans",
    )

    parser.add_argument(
        "-f",
        "--format",
        choices=["text", "html", "json"],
        default="text",
        help="Report output format (default: text)",
    )

    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file",
    )

    parser.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    parser.add_argument(
        "--log-format",
        choices=["json", "console"],
        default="console",
        help="Log output format (default: console)",
    )

    return parser.parse_args(argv)


def run(args: argparse.Namespace) -> int:
    """Build and print the report described by the arguments.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    from trace_window.adapters.span_markup import html_file_loader, load_plain_source
    from trace_window.config.loader import load_config
    from trace_window.config.schema import TraceWindowConfig
    from trace_window.core.fault_report import create_reporter
    from trace_window.models.report import Fault
    from trace_window.renderers import RENDERERS
    from trace_window.utils.logging import configure_logging

    try:
        if args.config:
            config = load_config(args.config)
            # Reconfigure logging from config file settings, --debug still wins
            configure_logging(
                level="DEBUG" if args.debug else config.logging.level,
                log_format=config.logging.format,
                file_path=config.logging.file.path if config.logging.file.enabled else None,
                file_enabled=config.logging.file.enabled,
            )
        else:
            config = TraceWindowConfig()

        loader = html_file_loader if args.html_markup else load_plain_source
        reporter = create_reporter(config, loader)
        report = reporter.capture(
            Fault(file=str(args.file), line=args.line, message=args.message)
        )
    except FileNotFoundError as e:
        log.error("configuration_file_not_found", path=str(args.config), error=str(e))
        return 1
    except ValueError as e:
        # Invalid configuration values and non-positive line numbers
        log.error("invalid_arguments", error=str(e))
        return 1
    except Exception as e:
        log.exception("fatal_error", error=str(e))
        return 1

    sys.stdout.write(RENDERERS[args.format](report))
    return 0 if report.source_available else 1


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    setup_logging(debug=args.debug, log_format=args.log_format)
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
