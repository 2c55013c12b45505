"""Minimal token stream for the bracketed text forms of engines and distributions.

A reader behaves like an input stream with a fail bit: once any read fails the
reader stays failed and every later read is a no-op.  Nothing here raises on
malformed input.
"""

import re
from typing import Optional

_UINT = re.compile(r"[0-9]+")
_INT = re.compile(r"[+-]?[0-9]+")
_FLOAT = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


class TextReader:
    __slots__ = ("text", "pos", "failed")

    def __init__(self, text: str):
        self.text = text
        self.pos = 0
        self.failed = False

    def __bool__(self):
        return not self.failed

    def __repr__(self):
        state = "failed" if self.failed else "ok"
        return f"TextReader(pos={self.pos}, {state})"

    def fail(self) -> None:
        self.failed = True

    def skip_spaces(self) -> None:
        if self.failed:
            return
        while self.pos < len(self.text) and self.text[self.pos].isspace():
            self.pos += 1

    def at_end(self) -> bool:
        return not self.text[self.pos:].strip()

    def expect(self, literal: str) -> bool:
        """Consume ``literal`` exactly, or fail."""
        if self.failed:
            return False
        if not self.text.startswith(literal, self.pos):
            self.fail()
            return False
        self.pos += len(literal)
        return True

    def _match(self, pattern) -> Optional[str]:
        if self.failed:
            return None
        match = pattern.match(self.text, self.pos)
        if match is None:
            self.fail()
            return None
        self.pos = match.end()
        return match.group()

    def read_uint(self) -> Optional[int]:
        token = self._match(_UINT)
        return None if token is None else int(token)

    def read_int(self) -> Optional[int]:
        token = self._match(_INT)
        return None if token is None else int(token)

    def read_float(self) -> Optional[float]:
        token = self._match(_FLOAT)
        return None if token is None else float(token)
