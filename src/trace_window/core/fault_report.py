"""Composition of captured faults into display reports.

This module implements the FaultReporter class that an error or exception
hook calls with a raised fault. It loads the highlighted source through an
injected loader, extracts the context window, groups the backtrace and
returns a FaultReport. Producing a report never aborts execution, so callers
can choose to render, log or re-raise.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

import structlog

from trace_window.core.backtrace import BacktraceGrouper
from trace_window.core.source_window import SourceWindowExtractor
from trace_window.models.markup import HighlightedLine, RepairedLine
from trace_window.models.report import Fault, FaultReport
from trace_window.utils.errors import InvalidArgumentError, SourceUnavailableError
from trace_window.utils.logging import LogEventNames
from trace_window.utils.security import SecretRedactor

if TYPE_CHECKING:
    from trace_window.config.schema import TraceWindowConfig

log = structlog.get_logger()

# Returns the highlighted lines of the file at the given path.
SourceLoader = Callable[[str], Sequence[HighlightedLine]]


class FaultReporter:
    """Builds FaultReports from captured faults.

    The reporter holds no per-fault state, one instance can serve any number
    of threads or tasks.

    Example:
        reporter = FaultReporter(load_plain_source)
        report = reporter.capture(fault_from_exception(exc))
        print(render_text(report))
    """

    def __init__(
        self,
        source_loader: SourceLoader,
        extractor: SourceWindowExtractor | None = None,
        grouper: BacktraceGrouper | None = None,
    ) -> None:
        """Initialize the FaultReporter.

        Args:
            source_loader: Loads highlighted lines for a file path
            extractor: Window extractor (default context sizes if omitted)
            grouper: Backtrace grouper (no redaction if omitted)
        """
        self._source_loader = source_loader
        self._extractor = extractor or SourceWindowExtractor()
        self._grouper = grouper or BacktraceGrouper()

    def capture(self, fault: Fault) -> FaultReport:
        """Build the report for a fault.

        Args:
            fault: The captured fault

        Returns:
            FaultReport with the context window and call blocks. The window
            is empty when the source could not be loaded.

        Raises:
            InvalidArgumentError: If the fault line is not positive
        """
        if fault.line <= 0:
            raise InvalidArgumentError(f"Fault line must be positive, got {fault.line}")

        blocks = self._grouper.group(fault.frames)

        window: tuple[RepairedLine, ...] = ()
        source_available = True
        try:
            lines = self._load(fault.file)
        except SourceUnavailableError as e:
            log.warning(
                LogEventNames.SOURCE_UNAVAILABLE,
                file=fault.file,
                error=str(e),
            )
            source_available = False
        else:
            window = self._extractor.extract(lines, fault.line)

        report = FaultReport(
            file=fault.file,
            line=fault.line,
            message=fault.message,
            window=window,
            blocks=blocks,
            exception_type=fault.exception_type,
            source_available=source_available,
        )

        log.info(
            LogEventNames.FAULT_CAPTURED,
            file=fault.file,
            line=fault.line,
            exception_type=fault.exception_type,
            window_lines=len(window),
            call_blocks=len(blocks),
        )

        return report

    def _load(self, path: str) -> Sequence[HighlightedLine]:
        """Call the loader, reporting any failure as SourceUnavailableError."""
        try:
            return self._source_loader(path)
        except SourceUnavailableError:
            raise
        except Exception as e:
            raise SourceUnavailableError(f"Could not load source of {path}: {e}", path) from e


def capture(source_loader: SourceLoader, fault: Fault) -> FaultReport:
    """Build a report for a fault with default settings.

    Args:
        source_loader: Loads highlighted lines for a file path
        fault: The captured fault

    Returns:
        FaultReport for the fault
    """
    return FaultReporter(source_loader).capture(fault)


def create_reporter(config: TraceWindowConfig, source_loader: SourceLoader) -> FaultReporter:
    """Create a FaultReporter from configuration.

    Args:
        config: Loaded configuration
        source_loader: Loads highlighted lines for a file path

    Returns:
        Configured FaultReporter
    """
    extractor = SourceWindowExtractor(
        context_before=config.window.context_before,
        context_after=config.window.context_after,
    )
    redactor = SecretRedactor() if config.backtrace.redact_args else None

    return FaultReporter(source_loader, extractor, BacktraceGrouper(redactor))
