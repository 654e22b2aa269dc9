"""
Hack Assembly Language Lexer
============================

This module turns raw Hack assembly source into normalized lines and
provides the structural predicates the later passes use to recognise
each kind of line.

Normalization
-------------
Each raw line is cleaned in two steps:

1. Everything from the first ``//`` onward is dropped (comments).
2. Every whitespace character is removed, including interior whitespace.
   Hack assembly gives no meaning to spaces around operators, so
   ``D = M + 1 ; JMP`` and ``D=M+1;JMP`` are the same instruction.

Lines that end up empty are discarded.

Line Forms
----------
| Form        | Shape              | Example       |
|-------------|--------------------|---------------|
| Label       | ``(NAME)``         | ``(LOOP)``    |
| Address     | ``@operand``       | ``@i``, ``@7``|
| Compute     | ``dest=comp;jump`` | ``D=M+1;JMP`` |

In a compute instruction both ``dest=`` and ``;jump`` are optional.

Example
-------
>>> from hack_asm.assembler.lexer import read_lines, split_compute
>>> [line.text for line in read_lines("@i  // counter\\n  M = 1\\n")]
['@i', 'M=1']
>>> split_compute("D=M+1;JMP")
ComputeFields(dest='D', comp='M+1', jump='JMP')
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import NamedTuple, Optional

from hack_asm.errors import SourceLocation


COMMENT_MARKER = "//"


# =============================================================================
# Line Kind Enumeration
# =============================================================================

class LineKind(Enum):
    """Structural classification of a normalized line."""
    LABEL = auto()      # (NAME)
    ADDRESS = auto()    # @operand
    COMPUTE = auto()    # dest=comp;jump
    UNKNOWN = auto()    # none of the above


# =============================================================================
# Source Line Data Class
# =============================================================================

@dataclass(frozen=True)
class SourceLine:
    """
    A normalized line together with where it came from.

    Attributes:
        text: Normalized text (no comments, no whitespace)
        line_number: Line number in the original source (1-indexed)
        source: The original, unmodified source line
        filename: Name of the source file
    """
    text: str
    line_number: int
    source: str = ""
    filename: str = "<input>"

    @property
    def location(self) -> SourceLocation:
        """Location of this line for error messages."""
        return SourceLocation(self.filename, self.line_number)

    def with_text(self, text: str) -> "SourceLine":
        """Return a copy carrying new text but the same origin."""
        return SourceLine(text, self.line_number, self.source, self.filename)


class ComputeFields(NamedTuple):
    """The three syntactic groups of a compute instruction."""
    dest: str
    comp: str
    jump: str


# =============================================================================
# Normalization
# =============================================================================

def normalize_line(line: str) -> str:
    """
    Strip the comment and all whitespace from a single source line.

    Args:
        line: Raw source line

    Returns:
        The cleaned line, or "" for blank and comment-only lines
    """
    code = line.split(COMMENT_MARKER, 1)[0]
    return "".join(code.split())


def read_lines(source: str, filename: str = "<input>") -> list[SourceLine]:
    """
    Normalize a whole source text into instruction and label lines.

    Args:
        source: Complete assembly source
        filename: Name used in error locations

    Returns:
        Non-empty normalized lines in source order
    """
    lines = []
    for number, raw in enumerate(source.split("\n"), start=1):
        text = normalize_line(raw)
        if text:
            lines.append(SourceLine(text, number, raw, filename))
    return lines


# =============================================================================
# Structural Predicates
# =============================================================================

def parse_label(text: str) -> Optional[str]:
    """
    Return the label name if ``text`` is a label definition.

    A label definition is exactly ``(``, a non-empty name, ``)``.
    """
    if len(text) > 2 and text.startswith("(") and text.endswith(")"):
        return text[1:-1]
    return None


def parse_address(text: str) -> Optional[str]:
    """Return the operand if ``text`` is an address instruction."""
    if len(text) > 1 and text.startswith("@"):
        return text[1:]
    return None


def is_number(token: str) -> bool:
    """True if ``token`` is a non-empty run of ASCII decimal digits."""
    return bool(token) and token.isascii() and token.isdigit()


def split_compute(text: str) -> Optional[ComputeFields]:
    """
    Split a compute instruction into its destination, computation and jump.

    The destination is everything before ``=`` and the jump is everything
    after ``;``. Absent or empty groups come back as "", so ``=D`` and
    ``D;`` are the same as ``D``. The groups are not checked against the
    mnemonic tables here.

    Returns:
        The three fields, or None when the text cannot be a compute
        instruction (empty computation, repeated separators, ``;`` before
        ``=``, or address/label punctuation)
    """
    if text.startswith(("@", "(")) or ")" in text:
        return None
    if text.count("=") > 1 or text.count(";") > 1:
        return None

    dest, comp, jump = "", text, ""

    if ";" in comp:
        comp, jump = comp.split(";")

    if "=" in comp:
        dest, comp = comp.split("=")
    elif "=" in jump:
        return None

    if not comp:
        return None

    return ComputeFields(dest, comp, jump)


def classify(text: str) -> LineKind:
    """Classify a normalized line by its structure."""
    if parse_label(text) is not None:
        return LineKind.LABEL
    if parse_address(text) is not None:
        return LineKind.ADDRESS
    if split_compute(text) is not None:
        return LineKind.COMPUTE
    return LineKind.UNKNOWN
