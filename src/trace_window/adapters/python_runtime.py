"""Capture of faults from Python exceptions.

A Python traceback lists, for every frame, the function that ran and the
line it was executing. Call frames here describe calls instead: the called
function together with the file and line the call was made from. Each
traceback frame after the outermost one therefore becomes one CallFrame,
attributed to the location of its caller.
"""

from __future__ import annotations

import inspect
import reprlib
import traceback
from types import FrameType, TracebackType

from trace_window.models.frames import CallFrame
from trace_window.models.report import Fault
from trace_window.utils.errors import InvalidArgumentError

DEFAULT_MAX_ARG_LENGTH = 80


def _make_repr(max_arg_length: int) -> reprlib.Repr:
    arg_repr = reprlib.Repr()
    arg_repr.maxstring = max_arg_length
    arg_repr.maxother = max_arg_length
    arg_repr.maxlong = max_arg_length
    return arg_repr


def _class_name(frame: FrameType) -> str | None:
    """Class owning the frame's function, taken from its qualified name."""
    parts = frame.f_code.co_qualname.split(".")
    if len(parts) > 1 and parts[-2] != "<locals>":
        return parts[-2]
    return None


def _stringify_args(frame: FrameType, is_method: bool, arg_repr: reprlib.Repr) -> tuple[str, ...]:
    """Stringify the arguments the frame's function was called with.

    The bound instance or class of a method is left out. Static methods have
    neither, so their first argument is kept.
    """
    info = inspect.getargvalues(frame)
    names = info.args
    if is_method and names[:1] in (["self"], ["cls"]):
        names = names[1:]

    args = [arg_repr.repr(info.locals.get(name)) for name in names]
    if info.varargs:
        args.extend(arg_repr.repr(value) for value in info.locals.get(info.varargs, ()))
    if info.keywords:
        args.extend(
            f"{key}={arg_repr.repr(value)}"
            for key, value in info.locals.get(info.keywords, {}).items()
        )
    return tuple(args)


def frames_from_traceback(
    tb: TracebackType | None,
    *,
    max_arg_length: int = DEFAULT_MAX_ARG_LENGTH,
) -> tuple[CallFrame, ...]:
    """Convert a Python traceback into call frames.

    Args:
        tb: Traceback of a raised exception
        max_arg_length: Longest stringified argument value

    Returns:
        Call frames, innermost call first
    """
    arg_repr = _make_repr(max_arg_length)
    entries = list(traceback.walk_tb(tb))
    calls: list[CallFrame] = []

    for (caller, caller_line), (frame, _) in zip(entries, entries[1:], strict=False):
        class_name = _class_name(frame)
        calls.append(
            CallFrame(
                function_name=frame.f_code.co_name,
                file=caller.f_code.co_filename,
                line=caller_line,
                class_name=class_name,
                args=_stringify_args(frame, class_name is not None, arg_repr),
            )
        )

    return tuple(reversed(calls))


def fault_from_exception(
    exc: BaseException,
    *,
    max_arg_length: int = DEFAULT_MAX_ARG_LENGTH,
) -> Fault:
    """Describe a raised exception as a Fault.

    Args:
        exc: An exception that has been raised
        max_arg_length: Longest stringified argument value

    Returns:
        Fault located at the innermost traceback frame

    Raises:
        InvalidArgumentError: If the exception was never raised
    """
    entries = list(traceback.walk_tb(exc.__traceback__))
    if not entries:
        raise InvalidArgumentError(f"{type(exc).__name__} has no traceback")

    frame, line = entries[-1]

    return Fault(
        file=frame.f_code.co_filename,
        line=line,
        message=str(exc),
        frames=frames_from_traceback(exc.__traceback__, max_arg_length=max_arg_length),
        exception_type=type(exc).__name__,
    )
