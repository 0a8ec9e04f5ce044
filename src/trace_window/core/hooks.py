"""Exception hook and warning collection.

FaultHook renders uncaught exceptions as FaultReports. It only touches
sys.excepthook when install() is called and never terminates the process.
WarningCollector gathers non-fatal warnings for later display instead of
printing them as they happen.
"""

from __future__ import annotations

import sys
import warnings
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from enum import StrEnum
from types import TracebackType
from typing import TYPE_CHECKING, TextIO

import structlog

from trace_window.adapters.python_runtime import DEFAULT_MAX_ARG_LENGTH, fault_from_exception
from trace_window.core.fault_report import FaultReporter, SourceLoader, create_reporter
from trace_window.models.report import FaultReport
from trace_window.renderers import render_text
from trace_window.utils.logging import LogEventNames

if TYPE_CHECKING:
    from trace_window.config.schema import TraceWindowConfig

log = structlog.get_logger()

Renderer = Callable[[FaultReport], str]


class FaultHook:
    """Uncaught exception handler producing rendered FaultReports.

    Example:
        hook = FaultHook(FaultReporter(load_plain_source))
        hook.install()
    """

    def __init__(
        self,
        reporter: FaultReporter,
        renderer: Renderer = render_text,
        stream: TextIO | None = None,
        max_arg_length: int = DEFAULT_MAX_ARG_LENGTH,
    ) -> None:
        """Initialize the FaultHook.

        Args:
            reporter: Builds the report for each exception
            renderer: Turns the report into text
            stream: Output stream (sys.stderr at call time if omitted)
            max_arg_length: Longest stringified argument value
        """
        self._reporter = reporter
        self._renderer = renderer
        self._stream = stream
        self._max_arg_length = max_arg_length
        self._previous: Callable[..., object] | None = None

    @property
    def installed(self) -> bool:
        """Whether this hook is the active sys.excepthook."""
        return sys.excepthook is self

    def report(self, exc: BaseException) -> FaultReport:
        """Build the report for a raised exception."""
        fault = fault_from_exception(exc, max_arg_length=self._max_arg_length)
        return self._reporter.capture(fault)

    def __call__(
        self,
        exc_type: type[BaseException],
        exc: BaseException,
        tb: TracebackType | None,
    ) -> None:
        """Handle an uncaught exception with the sys.excepthook signature."""
        if exc.__traceback__ is None and tb is not None:
            exc = exc.with_traceback(tb)

        try:
            rendered = self._renderer(self.report(exc))
        except Exception as e:
            log.exception(LogEventNames.FAULT_HOOK_FAILED, error=str(e))
            fallback = self._previous or sys.__excepthook__
            fallback(exc_type, exc, tb)
            return

        stream = self._stream or sys.stderr
        stream.write(rendered)
        stream.flush()
        log.debug(LogEventNames.FAULT_RENDERED, exception_type=exc_type.__name__)

    def install(self) -> None:
        """Make this hook the active sys.excepthook."""
        if self.installed:
            return
        self._previous = sys.excepthook
        sys.excepthook = self
        log.info(LogEventNames.FAULT_HOOK_INSTALLED)

    def uninstall(self) -> None:
        """Restore the sys.excepthook that was active before install()."""
        if not self.installed:
            return
        sys.excepthook = self._previous or sys.__excepthook__
        self._previous = None
        log.info(LogEventNames.FAULT_HOOK_UNINSTALLED)


def create_fault_hook(
    config: TraceWindowConfig,
    source_loader: SourceLoader,
    renderer: Renderer = render_text,
    stream: TextIO | None = None,
) -> FaultHook:
    """Create a FaultHook from configuration.

    Context sizes, argument redaction and the argument length limit are
    taken from the config.

    Args:
        config: Loaded configuration
        source_loader: Loads highlighted lines for a file path
        renderer: Turns the report into text
        stream: Output stream (sys.stderr at call time if omitted)

    Returns:
        FaultHook, not yet installed
    """
    return FaultHook(
        create_reporter(config, source_loader),
        renderer=renderer,
        stream=stream,
        max_arg_length=config.backtrace.max_arg_length,
    )


class Severity(StrEnum):
    """Readable severity of a collected warning."""

    DEPRECATED = "DEPRECATED"
    PARSE = "PARSE"
    WARNING = "WARNING"
    NOTICE = "NOTICE"
    UNKNOWN = "UNKNOWN"


# Checked in order, the first matching base class wins
_SEVERITIES: tuple[tuple[type[Warning], Severity], ...] = (
    (DeprecationWarning, Severity.DEPRECATED),
    (PendingDeprecationWarning, Severity.DEPRECATED),
    (FutureWarning, Severity.DEPRECATED),
    (SyntaxWarning, Severity.PARSE),
    (ImportWarning, Severity.NOTICE),
    (ResourceWarning, Severity.NOTICE),
    (RuntimeWarning, Severity.WARNING),
    (UserWarning, Severity.WARNING),
    (BytesWarning, Severity.WARNING),
    (UnicodeWarning, Severity.WARNING),
)


def severity_of(category: type[Warning]) -> Severity:
    """Map a warning category to its severity."""
    for base, severity in _SEVERITIES:
        if issubclass(category, base):
            return severity
    return Severity.UNKNOWN


@dataclass(frozen=True)
class CollectedWarning:
    """A warning recorded by a WarningCollector."""

    severity: Severity
    message: str
    file: str
    line: int
    category: str


class WarningCollector:
    """Collects warnings for display after the fact.

    Example:
        collector = WarningCollector()
        with collector.capture():
            run_job()
        for warning in collector.drain():
            print(warning.severity, warning.message)
    """

    def __init__(self) -> None:
        self._records: list[CollectedWarning] = []

    def __len__(self) -> int:
        return len(self._records)

    def record(
        self,
        message: Warning | str,
        category: type[Warning],
        filename: str,
        lineno: int,
    ) -> CollectedWarning:
        """Store a warning.

        Args:
            message: Warning instance or text
            category: Warning class
            filename: File the warning was issued from
            lineno: Line the warning was issued from

        Returns:
            The stored record
        """
        collected = CollectedWarning(
            severity=severity_of(category),
            message=str(message),
            file=filename,
            line=lineno,
            category=category.__name__,
        )
        self._records.append(collected)

        log.debug(
            LogEventNames.WARNING_COLLECTED,
            severity=collected.severity.value,
            category=collected.category,
            file=filename,
            line=lineno,
        )

        return collected

    def drain(self) -> tuple[CollectedWarning, ...]:
        """Return all stored warnings and forget them."""
        records = tuple(self._records)
        self._records.clear()
        return records

    @contextmanager
    def capture(self, action: str = "always") -> Iterator[WarningCollector]:
        """Route warnings issued inside the block into this collector.

        Args:
            action: Warning filter action applied inside the block
        """
        with warnings.catch_warnings():
            warnings.simplefilter(action)  # type: ignore[arg-type]
            warnings.showwarning = self._show_warning
            yield self

    def _show_warning(
        self,
        message: Warning | str,
        category: type[Warning],
        filename: str,
        lineno: int,
        file: TextIO | None = None,
        line: str | None = None,
    ) -> None:
        self.record(message, category, filename, lineno)
