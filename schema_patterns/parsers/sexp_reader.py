# Copyright 2026 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Strict reader for the s-expression subset used by schema-pattern files.

Only data is read: lists, double-quoted strings, numbers and bare symbols.
Nothing is evaluated, so untrusted config files cannot execute code. Every
list remembers the 1-based line and column of its opening parenthesis.
"""

from __future__ import annotations

import re
from typing import Any, List, Optional, Union


_WHITESPACE = {" ", "\t", "\r", "\n", "\f", "\v"}
_DELIMITERS = _WHITESPACE | {"(", ")", '"', ";"}
MAX_DEPTH = 256
_STRING_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "a": "\a",
    "f": "\f",
    "e": "\x1b",
    "s": " ",
    "\\": "\\",
    '"': '"',
}
_INT_RE = re.compile(r"[+-]?\d+\.?$")
_FLOAT_RE = re.compile(r"[+-]?(\d+\.\d*|\.\d+|\d+)([eE][+-]?\d+)?$")


class SExpressionError(ValueError):
    """Raised when text is not a well-formed s-expression."""

    def __init__(self, message: str, line: int, column: int):
        super().__init__(f"{message} at line {line}, column {column}")
        self.message = message
        self.line = line
        self.column = column


class Symbol(str):
    """A bare atom such as ``schema-patterns``; compares equal to its name."""

    def __repr__(self) -> str:
        return f"Symbol({str.__repr__(self)})"


class SList(list):
    """A parsed list with the position of its opening parenthesis."""

    def __init__(self, items=(), line: Optional[int] = None, column: Optional[int] = None):
        super().__init__(items)
        self.line = line
        self.column = column


SExpression = Union[SList, str, Symbol, int, float]


class _Reader:
    def __init__(self, text: str):
        self.text = text
        self.length = len(text)
        self.pos = 0
        self.line = 1
        self.column = 1

    # Public API -------------------------------------------------------
    def read_one(self) -> SExpression:
        self._skip_ws()
        if self.pos >= self.length:
            self._fail("Expected an expression but found end of input")
        value = self._read_value()
        self._skip_ws()
        if self.pos != self.length:
            self._fail("Unexpected trailing data after expression")
        return value

    # Position helpers -------------------------------------------------
    def _fail(self, message: str, line: Optional[int] = None, column: Optional[int] = None):
        raise SExpressionError(
            message,
            self.line if line is None else line,
            self.column if column is None else column,
        )

    def _advance(self) -> str:
        ch = self.text[self.pos]
        self.pos += 1
        if ch == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        return ch

    def _peek(self) -> Optional[str]:
        if self.pos >= self.length:
            return None
        return self.text[self.pos]

    def _skip_ws(self) -> None:
        while self.pos < self.length:
            ch = self.text[self.pos]
            if ch in _WHITESPACE:
                self._advance()
            elif ch == ";":
                while self.pos < self.length and self.text[self.pos] != "\n":
                    self._advance()
            else:
                break

    # Value parsing ----------------------------------------------------
    def _read_value(self) -> SExpression:
        ch = self._peek()
        if ch == "(":
            return self._read_list()
        if ch == ")":
            self._fail("Unexpected ')'")
        if ch == '"':
            return self._read_string()
        return self._read_atom()

    def _read_list(self) -> SList:
        # Open lists are kept on an explicit stack so nesting depth never
        # reaches the interpreter's recursion limit.
        stack: List[SList] = [SList(line=self.line, column=self.column)]
        self._advance()
        while True:
            self._skip_ws()
            ch = self._peek()
            current = stack[-1]
            if ch is None:
                self._fail("Unterminated list", current.line, current.column)
            if ch == "(":
                if len(stack) >= MAX_DEPTH:
                    self._fail(f"Nesting too deep (more than {MAX_DEPTH} levels)")
                stack.append(SList(line=self.line, column=self.column))
                self._advance()
                continue
            if ch == ")":
                self._advance()
                finished = stack.pop()
                if not stack:
                    return finished
                stack[-1].append(finished)
                continue
            if ch == '"':
                current.append(self._read_string())
            else:
                current.append(self._read_atom())

    def _read_string(self) -> str:
        line, column = self.line, self.column
        self._advance()
        out: List[str] = []
        while True:
            if self.pos >= self.length:
                self._fail("Unterminated string", line, column)
            ch = self._advance()
            if ch == '"':
                return "".join(out)
            if ch != "\\":
                out.append(ch)
                continue
            if self.pos >= self.length:
                self._fail("Unterminated string", line, column)
            esc = self._advance()
            if esc == "\n":
                # backslash-newline is a line continuation
                continue
            out.append(_STRING_ESCAPES.get(esc, esc))

    def _read_atom(self) -> Union[Symbol, int, float]:
        start = self.pos
        while self.pos < self.length and self.text[self.pos] not in _DELIMITERS:
            self._advance()
        token = self.text[start:self.pos]
        if not token:
            self._fail("Expected an expression")
        if _INT_RE.match(token):
            return int(token.rstrip("."))
        if _FLOAT_RE.match(token):
            return float(token)
        return Symbol(token)


def read_sexp(text: str) -> SExpression:
    """Parse ``text`` as exactly one s-expression.

    Raises:
        SExpressionError: If the text is empty, malformed or has trailing data
    """
    return _Reader(text).read_one()
