"""
Hack Code Generator
===================

Encodes resolved Hack instructions into 16-character binary strings.

A-instruction
-------------
``@value`` becomes the value zero-padded to 16 binary digits::

    @21   ->  0000000000010101

The widest accepted value depends on the address width: 65535 for the
classic 16-bit behaviour, 32767 when bit 15 is reserved.

C-instruction
-------------
``dest=comp;jump`` becomes ``111`` followed by the computation, destination
and jump codes from :mod:`hack_asm.assembler.opcodes`::

    D=M+1;JMP  ->  111 1110111 010 111  ->  1111110111010111
"""

import logging
from typing import Optional

from hack_asm.assembler.lexer import (
    SourceLine,
    is_number,
    parse_address,
    split_compute,
)
from hack_asm.assembler.opcodes import COMPUTE_PREFIX, FIELD_TABLES, WORD_BITS
from hack_asm.errors import (
    AssemblerError,
    AssemblyFailed,
    ErrorCollector,
    MalformedValueError,
    TooManyErrors,
    UnrecognizedInstructionError,
    UnrecognizedMnemonicError,
)

logger = logging.getLogger(__name__)


def encode_address(text: str, operand: str, address_bits: int = WORD_BITS,
                   line: Optional[SourceLine] = None) -> str:
    """
    Encode a numeric A-instruction.

    Args:
        text: The whole instruction, for error messages
        operand: The text after ``@``
        address_bits: Width the value must fit in (15 or 16)
        line: Originating source line, for error locations

    Raises:
        MalformedValueError: Operand is not an unsigned decimal, or too large
    """
    location = line.location if line else None
    source = line.source if line else None

    if not is_number(operand):
        raise MalformedValueError(
            text, "not an unsigned decimal number",
            location=location, source_line=source,
        )

    value = int(operand)
    limit = (1 << address_bits) - 1
    if value > limit:
        raise MalformedValueError(
            text, f"{value} does not fit in {address_bits} bits (max {limit})",
            location=location, source_line=source,
        )

    return format(value, f"0{WORD_BITS}b")


def encode_compute(text: str, line: Optional[SourceLine] = None) -> Optional[str]:
    """
    Encode a C-instruction.

    Returns:
        The 16-bit encoding, or None if ``text`` is not shaped like a
        C-instruction at all

    Raises:
        UnrecognizedMnemonicError: A field is not in its table
    """
    fields = split_compute(text)
    if fields is None:
        return None

    tokens = {
        "computation": fields.comp,
        "destination": fields.dest,
        "jump": fields.jump,
    }

    out = COMPUTE_PREFIX
    for group, table in FIELD_TABLES.items():
        token = tokens[group]
        code = table.get(token)
        if code is None:
            raise UnrecognizedMnemonicError(
                group, token, text,
                location=line.location if line else None,
                source_line=line.source if line else None,
                valid_tokens=[t for t in table if t],
            )
        out += code

    # Table widths are fixed, so this only fires if a table is edited badly
    assert len(out) == WORD_BITS, f"encoding of {text!r} is {len(out)} bits"
    return out


def encode_instruction(text: str, address_bits: int = WORD_BITS,
                       line: Optional[SourceLine] = None) -> str:
    """
    Encode one normalized, resolved instruction.

    Args:
        text: Instruction text with no symbols left in @ operands
        address_bits: Width A-instruction values must fit in
        line: Originating source line, for error locations

    Returns:
        Exactly 16 characters of '0' and '1'

    Raises:
        MalformedValueError: Bad A-instruction value
        UnrecognizedMnemonicError: Unknown comp/dest/jump
        UnrecognizedInstructionError: Neither an A- nor a C-instruction
    """
    operand = parse_address(text)
    if operand is not None:
        return encode_address(text, operand, address_bits, line)

    code = encode_compute(text, line)
    if code is not None:
        return code

    raise UnrecognizedInstructionError(
        text,
        location=line.location if line else None,
        source_line=line.source if line else None,
    )


class CodeGenerator:
    """
    Encodes a whole resolved program.

    By default the first bad line aborts with its own exception. With
    ``collect_errors`` every line is tried and the failures are raised
    together as one AssemblyFailed. Either way nothing is returned for a
    program that contains an error.
    """

    def __init__(self, address_bits: int = WORD_BITS,
                 collect_errors: bool = False, max_errors: int = 100):
        self.address_bits = address_bits
        self.collect_errors = collect_errors
        self.max_errors = max_errors

    def generate(self, lines: list[SourceLine]) -> list[str]:
        """
        Encode every line in order.

        Args:
            lines: Resolved program lines

        Returns:
            One 16-character binary string per line

        Raises:
            AssemblerError: First encoding error (default mode)
            AssemblyFailed: All collected errors (collect mode)
        """
        if not self.collect_errors:
            code = [encode_instruction(l.text, self.address_bits, l) for l in lines]
            logger.debug(f"Encoded {len(code)} instructions")
            return code

        collector = ErrorCollector(max_errors=self.max_errors)
        code = []
        try:
            for line in lines:
                try:
                    code.append(encode_instruction(line.text, self.address_bits, line))
                except AssemblerError as e:
                    collector.add(e)
        except TooManyErrors:
            logger.warning(f"Stopped after {self.max_errors} errors")

        if collector.has_errors():
            logger.debug(f"Encoding failed with {collector.error_count()} errors")
            raise AssemblyFailed(collector.errors)

        logger.debug(f"Encoded {len(code)} instructions")
        return code


def encode_lines(lines: list[SourceLine], address_bits: int = WORD_BITS,
                 collect_errors: bool = False, max_errors: int = 100) -> list[str]:
    """Convenience wrapper around CodeGenerator.generate."""
    generator = CodeGenerator(address_bits, collect_errors, max_errors)
    return generator.generate(lines)
