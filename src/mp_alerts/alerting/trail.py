"""Alerting – source-location trail extraction.

A :class:`Trail` attributes a log call to the code that made it.  Frames
are taken either from a textual stack (a Python traceback or a V8-style
``at scope (file:line:column)`` listing) or from live interpreter frames.
Frame lists are always ordered innermost-first.
"""
from __future__ import annotations

import dataclasses
import itertools
import os
import re
import sys
from types import CodeType, FrameType, TracebackType
from typing import Any, NamedTuple, Sequence

_PY_FRAME_RE = re.compile(
    r'^[ \t]*File "(?P<file>[^"]+)", line (?P<line>\d+)(?:, in (?P<scope>.+?))?[ \t\r]*$',
    re.MULTILINE,
)
_V8_FRAME_RE = re.compile(
    r"^[ \t]*at[ \t]+(?:(?P<scope>.+?)[ \t]+)?\(?(?P<file>[^\s()]+):(?P<line>\d+):(?P<column>\d+)\)?[ \t\r]*$",
    re.MULTILINE,
)

_LIBRARY_DIR = os.path.normcase(os.path.dirname(os.path.abspath(__file__)))


class TrailFrame(NamedTuple):
    """A single parsed stack frame.  ``column`` is 1-based, ``0`` if unknown."""

    scope: str | None
    file: str
    line: int
    column: int


@dataclasses.dataclass(frozen=True)
class Trail:
    """Source attribution of a log call.

    Either empty, or ``file``/``line``/``column`` set together with an
    optional ``scope``.
    """

    scope: str | None = None
    file: str | None = None
    line: int | None = None
    column: int | None = None

    def __bool__(self) -> bool:
        return self.file is not None

    def as_dict(self) -> dict[str, Any]:
        """Return only the fields that are present (``{}`` when empty)."""
        return {k: v for k, v in dataclasses.asdict(self).items() if v is not None}


def parse_stack(text: str) -> list[TrailFrame]:
    """Parse a textual stack into frames, innermost first.

    Python tracebacks list the most recent call last, so their frames are
    reversed.  V8-style listings are already innermost first.
    """
    py_frames = [
        TrailFrame(m["scope"], m["file"], int(m["line"]), 0)
        for m in _PY_FRAME_RE.finditer(text)
    ]
    if py_frames:
        py_frames.reverse()
        return py_frames
    return [
        TrailFrame(m["scope"], m["file"], int(m["line"]), int(m["column"]))
        for m in _V8_FRAME_RE.finditer(text)
    ]


def _column(code: CodeType, lasti: int) -> int:
    if lasti < 0:
        return 0
    # one position entry per 2-byte code unit
    position = next(itertools.islice(code.co_positions(), lasti // 2, None), None)
    if position is None or position[2] is None:
        return 0
    return position[2] + 1


def _frame(frame: FrameType, lineno: int | None, lasti: int) -> TrailFrame:
    code = frame.f_code
    return TrailFrame(code.co_qualname, code.co_filename, lineno or 0, _column(code, lasti))


def capture_frames() -> list[TrailFrame]:
    """Capture the caller's live stack, innermost first."""
    frames: list[TrailFrame] = []
    frame: FrameType | None = sys._getframe(1)
    while frame is not None:
        frames.append(_frame(frame, frame.f_lineno, frame.f_lasti))
        frame = frame.f_back
    return frames


def frames_from_traceback(tb: TracebackType | None) -> list[TrailFrame]:
    """Return the frames of an exception traceback, innermost (raise site) first."""
    frames: list[TrailFrame] = []
    while tb is not None:
        frames.append(_frame(tb.tb_frame, tb.tb_lineno, tb.tb_lasti))
        tb = tb.tb_next
    frames.reverse()
    return frames


def is_library_file(path: str) -> bool:
    """Return True if *path* belongs to the alerting package itself."""
    return os.path.normcase(os.path.abspath(path)).startswith(_LIBRARY_DIR + os.sep)


def main_dir() -> str:
    """Directory of the ``__main__`` module, or the working directory without one."""
    main_file = getattr(sys.modules.get("__main__"), "__file__", None)
    if main_file:
        return os.path.dirname(os.path.abspath(main_file))
    return os.getcwd()


def relative_path(path: str, root: str | None = None) -> str:
    if path.startswith("<"):
        # synthetic filenames such as <stdin> or <string>
        return path
    try:
        return os.path.relpath(path, root if root is not None else main_dir())
    except ValueError:
        # no relative path across drives
        return path


def extract_trail(
    stack: str | Sequence[TrailFrame] | None,
    exclude_self: bool = False,
    *,
    root: str | None = None,
) -> Trail:
    """Return the :class:`Trail` of the first relevant frame in *stack*.

    With *exclude_self*, frames inside the alerting package are skipped until
    the first frame outside it.  Returns an empty :class:`Trail` when nothing
    matches; never raises.
    """
    if not stack:
        return Trail()
    frames = parse_stack(stack) if isinstance(stack, str) else stack
    for frame in frames:
        if exclude_self and is_library_file(frame.file):
            continue
        return Trail(
            scope=frame.scope or None,
            file=relative_path(frame.file, root),
            line=frame.line,
            column=frame.column,
        )
    return Trail()


__all__ = [
    "Trail",
    "TrailFrame",
    "capture_frames",
    "extract_trail",
    "frames_from_traceback",
    "is_library_file",
    "main_dir",
    "parse_stack",
    "relative_path",
]
