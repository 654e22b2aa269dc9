"""
Hack Assembler Error Hierarchy
==============================

This module defines the exception hierarchy for the Hack assembler.
All exceptions inherit from HackError, allowing callers to catch every
assembler-related error with a single except clause if desired.

Exception Hierarchy
-------------------
HackError (base)
└── AssemblerError (assembler-related)
    ├── MalformedValueError - address operand is not a valid unsigned value
    ├── UnrecognizedMnemonicError - unknown computation/destination/jump
    ├── UnrecognizedInstructionError - line is neither @ nor compute form
    ├── ResolutionError - symbol still unbound after both passes
    ├── AssemblyFailed - several errors collected in one run
    └── TooManyErrors - error collection limit reached

Error messages follow this format:
    filename:line: error: description
        original source line
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class HackError(Exception):
    """
    Base exception for all Hack assembler errors.

        try:
            assembler.assemble_file("Prog.asm")
        except HackError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Location of a source line, used for error reporting.

    Hack assembly has no meaningful columns once whitespace is stripped,
    so only the file and 1-indexed line number are tracked.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
    """
    filename: str
    line: int

    def __str__(self) -> str:
        """Format as 'filename:line' for error messages."""
        return f"{self.filename}:{self.line}"


# =============================================================================
# Assembler Exceptions
# =============================================================================

class AssemblerError(HackError):
    """
    Base exception for all assembly errors.

    Attributes:
        message: The error description
        location: Where in the source the error occurred (optional)
        hint: A suggestion for fixing the error (optional)
        source_line: The original source text of the offending line (optional)
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

        Example output:
            Max.asm:12: error: unrecognized computation 'D^A' in 'D=D^A'
                D=D^A   // combine
            hint: valid computations include D&A, D|A
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line.strip()}")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


class MalformedValueError(AssemblerError):
    """
    Address instruction operand is not a valid unsigned value.

    Raised by the encoder when the operand of an @ instruction cannot be
    parsed as a decimal integer, or does not fit in the address width.

    Examples:
        @70000   (does not fit in 16 bits)
        @-1      (negative literal)
    """

    def __init__(
        self,
        line: str,
        reason: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.line = line
        self.reason = reason
        super().__init__(
            f"'{line}' has an invalid value: {reason}",
            location=location,
            source_line=source_line,
        )


class UnrecognizedMnemonicError(AssemblerError):
    """
    Compute instruction field not present in its lookup table.

    Attributes:
        group: Which field failed ("computation", "destination" or "jump")
        token: The offending token text
        line: The whole normalized instruction
    """

    def __init__(
        self,
        group: str,
        token: str,
        line: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        valid_tokens: Optional[list[str]] = None,
    ):
        self.group = group
        self.token = token
        self.line = line
        self.valid_tokens = valid_tokens or []

        hint = None
        if self.valid_tokens:
            hint = f"valid {group} values: {', '.join(self.valid_tokens)}"

        super().__init__(
            f"unrecognized {group} '{token}' in '{line}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class UnrecognizedInstructionError(AssemblerError):
    """
    Line is neither an address instruction nor a compute instruction.

    Example:
        D=M;JMP;JEQ   (two jump separators)
    """

    def __init__(
        self,
        line: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.line = line
        super().__init__(
            f"'{line}' is not recognized as a valid instruction",
            location=location,
            source_line=source_line,
        )


class ResolutionError(AssemblerError):
    """
    Symbolic address operand has no binding after both passes.

    Label collection and variable allocation together bind every symbolic
    operand, so this error means the passes were run out of order or on
    different line lists. It is never caused by user input alone.
    """

    def __init__(
        self,
        symbol: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.symbol = symbol
        super().__init__(
            f"could not find symbol '{symbol}'",
            location=location,
            source_line=source_line,
        )


class AssemblyFailed(AssemblerError):
    """
    Several errors were collected during a single run.

    Only raised when error collection is enabled; the individual errors
    are available in the ``errors`` attribute in source order.
    """

    def __init__(self, errors: list[AssemblerError]):
        self.errors = list(errors)
        count = len(self.errors)
        word = "error" if count == 1 else "errors"
        details = "\n".join(str(e) for e in self.errors)
        super().__init__(f"assembly failed with {count} {word}\n{details}")


class TooManyErrors(AssemblerError):
    """
    Raised when too many errors have been encountered.

    This stops error collection on badly broken sources.
    """

    def __init__(self, message: str = "Too many errors"):
        super().__init__(message)


# =============================================================================
# Error Collection for Multiple Error Reporting
# =============================================================================

class ErrorCollector:
    """
    Collects multiple errors for batch reporting.

    The encoder uses this to continue past a bad line, collecting all
    errors before reporting them together.

    Example:
        collector = ErrorCollector(max_errors=100)
        try:
            for line in lines:
                try:
                    encode(line)
                except AssemblerError as e:
                    collector.add(e)
        except TooManyErrors:
            pass

        if collector.has_errors():
            raise AssemblyFailed(collector.errors)
    """

    def __init__(self, max_errors: int = 100):
        """
        Initialize the error collector.

        Args:
            max_errors: Maximum errors to collect before raising TooManyErrors
        """
        self.errors: list[AssemblerError] = []
        self.max_errors = max_errors

    def add(self, error: AssemblerError) -> None:
        """
        Add an error to the collection.

        Raises:
            TooManyErrors: If max_errors has been reached
        """
        self.errors.append(error)
        if len(self.errors) >= self.max_errors:
            raise TooManyErrors(f"Too many errors ({self.max_errors}), stopping")

    def has_errors(self) -> bool:
        """Return True if any errors have been collected."""
        return len(self.errors) > 0

    def error_count(self) -> int:
        """Return the number of collected errors."""
        return len(self.errors)
