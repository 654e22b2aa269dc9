"""
Hack Assembler - Toolchain for the nand2tetris Hack Computer
============================================================

This package assembles programs for the Hack computer, the 16-bit machine
from "The Elements of Computing Systems" (Nisan & Schocken).

Hack assembly source (.asm) is translated into a .hack file: a text file
with one 16-character binary instruction per line, ready to be loaded into
the CPU emulator or the hardware simulator.

Main Components
---------------
- **assembler**: Two-pass Hack assembler (hackasm)
- **config**: Assembly settings
- **errors**: Exception hierarchy

Quick Start
-----------
Assemble a program:
    >>> from hack_asm import Assembler
    >>> asm = Assembler()
    >>> code = asm.assemble_file("Max.asm")
    >>> asm.write_hack("Max.hack")

Or use the command-line tool:
    $ hackasm Max.asm -o Max.hack
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from hack_asm.assembler import Assembler, SymbolTable, assemble, assemble_file
from hack_asm.config import AssemblerConfig
from hack_asm.errors import (
    HackError,
    AssemblerError,
    AssemblyFailed,
    MalformedValueError,
    ResolutionError,
    SourceLocation,
    UnrecognizedInstructionError,
    UnrecognizedMnemonicError,
)

__all__ = [
    # Version info
    "__version__",
    # Assembler
    "Assembler",
    "AssemblerConfig",
    "SymbolTable",
    "assemble",
    "assemble_file",
    # Exception hierarchy
    "HackError",
    "AssemblerError",
    "AssemblyFailed",
    "MalformedValueError",
    "ResolutionError",
    "SourceLocation",
    "UnrecognizedInstructionError",
    "UnrecognizedMnemonicError",
]
