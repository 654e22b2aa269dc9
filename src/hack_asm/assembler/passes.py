"""
Hack Assembler - Symbol Passes
==============================

The three stages between normalization and encoding:

1. **collect_labels** (pass 1): record ``(NAME)`` definitions and strip them
   from the program. A label's value is the index of the next real
   instruction.
2. **allocate_variables** (pass 2): give every still-unknown symbolic ``@``
   operand the next free RAM address, starting at 16.
3. **resolve_symbols**: rewrite each symbolic ``@name`` as ``@<address>``.

Each stage needs the complete output of the one before it: label
addresses are only known once pass 1 has seen the whole program, and a
forward-referenced label must not be mistaken for a variable.
"""

import logging

from hack_asm.assembler.lexer import SourceLine, is_number, parse_address, parse_label
from hack_asm.assembler.symbols import SymbolTable
from hack_asm.config import DEFAULT_VARIABLE_BASE
from hack_asm.errors import ResolutionError

logger = logging.getLogger(__name__)


def collect_labels(lines: list[SourceLine], symbols: SymbolTable) -> list[SourceLine]:
    """
    Bind every label to the address of the instruction that follows it.

    Args:
        lines: Normalized program lines, labels included
        symbols: Table to receive the label bindings

    Returns:
        The program with label definitions removed, order preserved
    """
    instructions: list[SourceLine] = []
    defined = 0

    for line in lines:
        name = parse_label(line.text)
        if name is None:
            instructions.append(line)
            continue

        # Only the first definition of a name sticks
        if symbols.add_label(name, len(instructions)):
            defined += 1
        else:
            logger.debug(f"{line.location}: label '{name}' already bound, ignored")

    logger.debug(f"Pass 1: {defined} labels, {len(instructions)} instructions")
    return instructions


def allocate_variables(
    lines: list[SourceLine],
    symbols: SymbolTable,
    base: int = DEFAULT_VARIABLE_BASE,
) -> int:
    """
    Assign RAM addresses to symbolic operands that are not yet bound.

    Addresses are handed out in order of first appearance. The lines
    themselves are left untouched.

    Args:
        lines: Label-free program lines
        symbols: Table already holding every label
        base: First address to allocate

    Returns:
        Number of variables allocated
    """
    next_address = base

    for line in lines:
        operand = parse_address(line.text)
        if operand is None or is_number(operand):
            continue
        if symbols.add_variable(operand, next_address):
            next_address += 1

    allocated = next_address - base
    logger.debug(f"Pass 2: {allocated} variables from RAM[{base}]")
    return allocated


def resolve_symbols(lines: list[SourceLine], symbols: SymbolTable) -> list[SourceLine]:
    """
    Replace symbolic address operands with their numeric values.

    Args:
        lines: Label-free program lines
        symbols: Completed symbol table

    Returns:
        Lines in which every address instruction is numeric

    Raises:
        ResolutionError: If an operand has no binding (passes skipped or
            run on a different program)
    """
    resolved = []

    for line in lines:
        operand = parse_address(line.text)
        if operand is None or is_number(operand):
            resolved.append(line)
            continue

        value = symbols.get(operand)
        if value is None:
            raise ResolutionError(
                operand,
                location=line.location,
                source_line=line.source,
            )
        resolved.append(line.with_text(f"@{value}"))

    return resolved
