"""
Hack Assembler
==============

This module provides a complete assembler for the Hack platform, the
16-bit computer built in "The Elements of Computing Systems" (nand2tetris).

The assembler converts Hack assembly source (.asm) into the .hack text
format: one 16-character binary instruction per line.

Main Components
---------------
- **Assembler**: Main assembler class that orchestrates the assembly process
- **lexer**: Normalizes lines and recognises label, A- and C-instruction forms
- **SymbolTable**: Predefined symbols, labels and variables
- **passes**: Label collection, variable allocation and symbol resolution
- **CodeGenerator**: Encodes resolved instructions into binary

Assembly Process
----------------
1. **Normalization**: strip ``//`` comments and all whitespace, drop blank lines
2. **Pass 1**: bind each ``(LABEL)`` to the index of the next instruction
3. **Pass 2**: bind each unknown ``@symbol`` to the next free RAM address (16+)
4. **Resolution**: rewrite ``@symbol`` as ``@address``
5. **Encoding**: A-instructions as 16-bit values, C-instructions via tables

Example Usage
-------------
>>> from hack_asm.assembler import assemble
>>> assemble("@R3\\nD=M+1;JMP\\n")
['0000000000000011', '1111110111010111']
"""

from hack_asm.assembler.assembler import Assembler, assemble, assemble_file
from hack_asm.assembler.lexer import (
    ComputeFields,
    LineKind,
    SourceLine,
    classify,
    is_number,
    normalize_line,
    parse_address,
    parse_label,
    read_lines,
    split_compute,
)
from hack_asm.assembler.symbols import (
    PREDEFINED_SYMBOLS,
    Symbol,
    SymbolKind,
    SymbolTable,
)
from hack_asm.assembler.passes import allocate_variables, collect_labels, resolve_symbols
from hack_asm.assembler.codegen import CodeGenerator, encode_instruction, encode_lines
from hack_asm.assembler.opcodes import COMP_TABLE, DEST_TABLE, JUMP_TABLE, MNEMONICS

__all__ = [
    # Main class and functions
    "Assembler",
    "assemble",
    "assemble_file",
    # Lexer
    "ComputeFields",
    "LineKind",
    "SourceLine",
    "classify",
    "is_number",
    "normalize_line",
    "parse_address",
    "parse_label",
    "read_lines",
    "split_compute",
    # Symbols
    "PREDEFINED_SYMBOLS",
    "Symbol",
    "SymbolKind",
    "SymbolTable",
    # Passes
    "allocate_variables",
    "collect_labels",
    "resolve_symbols",
    # Code generator
    "CodeGenerator",
    "encode_instruction",
    "encode_lines",
    # Opcodes
    "COMP_TABLE",
    "DEST_TABLE",
    "JUMP_TABLE",
    "MNEMONICS",
]
