"""
Text Format for Recursive Multisets

Reads and writes the brace notation:

    {apple, banana, apple, {a, b}}

Grammar (whitespace between tokens is ignored):
    multiset := '{' [ element (',' element)* ] '}'
    element  := multiset | atom
    atom     := run of characters up to the next ',' or '}',
                leading/trailing whitespace trimmed

Syntax Notes:
    - A key with count 3 is written three times, never as "key:3"
    - "{}" is the empty multiset
    - An empty atom between separators ("{a,,b}") is the atom ""
    - The reader consumes one character at a time and never backtracks;
      after an error the stream is left consumed up to the failure
    - Reading and hashing handle any nesting depth; equality and
      formatting recurse, so they are bounded by sys.getrecursionlimit()
"""

from __future__ import annotations

import warnings
from io import StringIO
from typing import List, TextIO

from rmultiset.elements import Atom, Element, Nested
from rmultiset.multiset import RecursiveMultiset


class MultisetParseError(ValueError):
    """Raised when text does not follow the multiset grammar."""

    def __init__(self, message: str, position: int) -> None:
        super().__init__(f"{message} at position {position}")
        self.position = position


class _CharReader:
    """Forward-only character reader over a text stream."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream
        self.position = 0

    def next_char(self) -> str:
        """Return the next character, or '' at end of input."""
        ch = self._stream.read(1)
        if ch:
            self.position += 1
        return ch

    def next_non_space(self) -> str:
        ch = self.next_char()
        while ch and ch.isspace():
            ch = self.next_char()
        return ch


def _describe(ch: str) -> str:
    return repr(ch) if ch else "end of input"


def _read_body(reader: _CharReader) -> RecursiveMultiset:
    """
    Parse everything after an opening '{' up to its matching '}'.

    Open multisets are kept on an explicit stack, so nesting depth is
    not limited by the interpreter's recursion limit.
    """
    stack: List[RecursiveMultiset] = [RecursiveMultiset()]

    ch = reader.next_non_space()
    while True:
        if ch == "{":
            stack.append(RecursiveMultiset())
            ch = reader.next_non_space()
            continue

        # A '}' straight after '{' closes an empty multiset; anything
        # else starts an atom, possibly the empty atom.
        if not (ch == "}" and stack[-1].is_empty()):
            chars: List[str] = []
            while ch not in (",", "}", ""):
                chars.append(ch)
                ch = reader.next_char()
            if ch:
                stack[-1].add_element(Atom("".join(chars).strip()))

        while ch == "}":
            finished = stack.pop()
            if not stack:
                return finished
            stack[-1].add_element(Nested(finished))
            ch = reader.next_non_space()

        if ch == "":
            raise MultisetParseError("Unexpected end of input inside multiset", reader.position)
        if ch != ",":
            raise MultisetParseError(f"Expected ',' or '}}', got {_describe(ch)}", reader.position - 1)

        ch = reader.next_non_space()


def read_multiset(stream: TextIO) -> RecursiveMultiset:
    """
    Read one multiset from a text stream.

    Consumes characters up to and including the closing '}' of the
    top-level multiset; anything after it is left in the stream.

    Args:
        stream: Readable text stream

    Returns:
        The parsed RecursiveMultiset

    Raises:
        MultisetParseError: If the input violates the grammar
    """
    reader = _CharReader(stream)
    ch = reader.next_non_space()
    if ch != "{":
        position = reader.position - 1 if ch else reader.position
        raise MultisetParseError(f"Expected '{{', got {_describe(ch)}", position)
    return _read_body(reader)


def parse_multiset(text: str) -> RecursiveMultiset:
    """
    Parse a complete multiset from a string.

    Unlike read_multiset(), trailing non-whitespace is an error.

    Raises:
        MultisetParseError: If the text violates the grammar
    """
    stream = StringIO(text)
    result = read_multiset(stream)
    rest = stream.read()
    if rest.strip():
        position = len(text) - len(rest) + (len(rest) - len(rest.lstrip()))
        raise MultisetParseError("Unexpected trailing input", position)
    return result


def _atom_round_trips(text: str) -> bool:
    if text != text.strip():
        return False
    if "," in text or "}" in text:
        return False
    return not text.startswith("{")


def _format_element(element: Element, separator: str) -> str:
    if isinstance(element, Atom):
        if not _atom_round_trips(element.text):
            warnings.warn(f"Atom {element.text!r} will not survive a parse round-trip", UserWarning)
        return element.text
    if isinstance(element, Nested):
        return format_multiset(element.multiset, separator=separator)
    raise TypeError(f"Unsupported Element type: {type(element)}")


def format_multiset(multiset: RecursiveMultiset, separator: str = ", ") -> str:
    """
    Render a multiset in brace notation.

    Each key is repeated count times; nested multisets are rendered
    recursively. Output order follows the multiset's insertion order,
    so it is deterministic for a given multiset.

    Args:
        multiset: Multiset to render
        separator: Text placed between occurrences (must contain ',')

    Raises:
        ValueError: If the separator does not contain ','

    Returns:
        Text such as "{element1}" or "{a, a, {b, c}}"
    """
    if "," not in separator:
        raise ValueError(f"Separator must contain ',', got {separator!r}")
    if multiset.size() == 1 and multiset.is_contains(Atom("")):
        warnings.warn("A multiset holding one empty atom is written as '{}' and reads back empty", UserWarning)
    return "{" + separator.join(_format_element(element, separator) for element in multiset) + "}"


def write_multiset(multiset: RecursiveMultiset, stream: TextIO, separator: str = ", ") -> None:
    """Write a multiset in brace notation to a text stream."""
    stream.write(format_multiset(multiset, separator=separator))
