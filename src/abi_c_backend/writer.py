from __future__ import annotations

import io
from contextlib import contextmanager
from typing import Iterator, Protocol

from .errors import WriteFailureError


class TextSink(Protocol):
    def write(self, text: str) -> object: ...


class IndentWriter:
    """Ordered, line-based output sink with an explicit indentation depth.

    ``separator()`` requests a blank line before the next content line.
    Requests collapse, and are dropped at the start and end of the
    output, so optional sections never stack up empty lines.
    """

    def __init__(self, target: TextSink | None = None, indent: str = "  ") -> None:
        self._target: TextSink = target if target is not None else io.StringIO()
        self._indent = indent
        self._depth = 0
        self._lines = 0
        self._pending_separator = False

    @property
    def depth(self) -> int:
        return self._depth

    @property
    def lines_written(self) -> int:
        return self._lines

    def indent(self) -> None:
        self._depth += 1

    def unindent(self) -> None:
        if self._depth == 0:
            raise ValueError("unindent() called at depth 0")
        self._depth -= 1

    @contextmanager
    def indented_block(self) -> Iterator[None]:
        self.indent()
        try:
            yield
        finally:
            self.unindent()

    def indented(self, text: str) -> None:
        self._flush_separator()
        prefix = self._indent * self._depth if text else ""
        self._emit(f"{prefix}{text}\n")

    def lines(self, block: str) -> None:
        """Write a verbatim text block line by line at the current depth."""
        for line in block.rstrip("\n").splitlines():
            self.indented(line)

    def newline(self) -> None:
        self._flush_separator()
        self._emit("\n")

    def separator(self) -> None:
        if self._lines:
            self._pending_separator = True

    def getvalue(self) -> str:
        getvalue = getattr(self._target, "getvalue", None)
        if getvalue is None:
            raise TypeError("Underlying sink does not retain its content")
        return getvalue()

    def _flush_separator(self) -> None:
        if self._pending_separator:
            self._pending_separator = False
            self._emit("\n")

    def _emit(self, text: str) -> None:
        try:
            self._target.write(text)
        except (OSError, TypeError, ValueError) as exc:
            raise WriteFailureError(f"Output sink rejected write: {exc}") from exc
        self._lines += 1
