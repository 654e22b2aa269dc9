"""
Hack Assembler - Main Interface
===============================

This module provides the Assembler class, the primary interface for
assembling Hack source code. It runs the lexer, the symbol passes and the
code generator in order and keeps the results of the last run.

Example Usage
-------------
>>> from hack_asm.assembler import Assembler
>>>
>>> asm = Assembler()
>>> asm.assemble_string('''
... // Adds 2 and 3, stores the result in RAM[0]
...     @2
...     D=A
...     @3
...     D=D+A
...     @0
...     M=D
... ''')
>>>
>>> code = asm.get_code()
>>> print(f"Generated {len(code)} instructions")
>>>
>>> asm.write_hack("Add.hack")

Command-Line Usage
------------------
    $ hackasm Add.asm -o Add.hack -s Add.sym -l Add.lst

Options:
    -o, --output FILE      Output .hack file
    -s, --symbols FILE     Generate symbol file
    -l, --listing FILE     Generate listing file
    --strict-addresses     Reject @ values above 32767
    --all-errors           Report every error, not just the first
    -v, --verbose          Verbose output
"""

import logging
from pathlib import Path
from typing import Optional

from hack_asm.assembler.codegen import CodeGenerator
from hack_asm.assembler.lexer import SourceLine, read_lines
from hack_asm.assembler.passes import allocate_variables, collect_labels, resolve_symbols
from hack_asm.assembler.symbols import SymbolKind, SymbolTable
from hack_asm.config import AssemblerConfig

logger = logging.getLogger(__name__)


class Assembler:
    """
    Main Hack assembler class.

    Each call to ``assemble_string`` or ``assemble_file`` is a complete,
    independent run with a fresh symbol table. If a run fails, its partial
    results are discarded: ``get_code()`` is empty and the exception
    propagates to the caller.

    Attributes:
        config: Settings for variable allocation, address width and
            error collection
    """

    def __init__(self, config: Optional[AssemblerConfig] = None, verbose: bool = False):
        """
        Initialize the assembler.

        Args:
            config: Assembly settings (defaults to AssemblerConfig())
            verbose: Log progress at INFO instead of DEBUG
        """
        self.config = config or AssemblerConfig()
        self._verbose = verbose
        self._symbols = SymbolTable()
        self._lines: list[SourceLine] = []
        self._code: list[str] = []

    def _log(self, message: str) -> None:
        logger.log(logging.INFO if self._verbose else logging.DEBUG, message)

    # =========================================================================
    # Assembly Methods
    # =========================================================================

    def assemble_string(self, source: str, filename: str = "<input>") -> list[str]:
        """
        Assemble source code from a string.

        The assembly pipeline is:
        1. Normalize lines (strip comments and whitespace)
        2. Pass 1: collect labels
        3. Pass 2: allocate variables
        4. Resolve symbols to addresses
        5. Encode instructions

        Args:
            source: Hack assembly source
            filename: Virtual filename for error messages

        Returns:
            One 16-character binary string per instruction

        Raises:
            AssemblerError: If assembly fails
        """
        self._symbols = SymbolTable()
        self._lines = []
        self._code = []

        lines = read_lines(source, filename)
        self._log(f"Read {len(lines)} lines from {filename}")

        symbols = SymbolTable()
        lines = collect_labels(lines, symbols)
        allocate_variables(lines, symbols, base=self.config.variable_base)
        lines = resolve_symbols(lines, symbols)

        generator = CodeGenerator(
            address_bits=self.config.address_bits,
            collect_errors=self.config.collect_errors,
            max_errors=self.config.max_errors,
        )
        code = generator.generate(lines)

        # Only publish results from a run that got all the way through
        self._symbols = symbols
        self._lines = lines
        self._code = code

        self._log(f"Generated {len(code)} instructions")
        return list(code)

    def assemble_file(self, filepath: str | Path) -> list[str]:
        """
        Assemble source code from a file.

        Args:
            filepath: Path to a .asm source file

        Returns:
            One 16-character binary string per instruction

        Raises:
            AssemblerError: If assembly fails
            FileNotFoundError: If source file not found
        """
        filepath = Path(filepath)
        self._log(f"Assembling {filepath}...")

        source = filepath.read_text()
        return self.assemble_string(source, str(filepath))

    # =========================================================================
    # Output Methods
    # =========================================================================

    def get_code(self) -> list[str]:
        """Get the binary instructions from the last successful run."""
        return list(self._code)

    def get_symbols(self) -> dict[str, int]:
        """Get the complete symbol table, predefined symbols included."""
        return self._symbols.as_dict()

    def get_user_symbols(self) -> dict[str, int]:
        """Get the labels and variables defined by the program."""
        return {
            s.name: s.value
            for s in self._symbols.symbols()
            if s.kind is not SymbolKind.PREDEFINED
        }

    def get_listing(self) -> str:
        """
        Get the assembly listing as a string.

        One line per instruction: ROM address, binary code, source text.
        """
        rows = []
        for address, (line, code) in enumerate(zip(self._lines, self._code)):
            rows.append(f"{address:05d}  {code}  {line.source.strip()}")
        return "\n".join(rows) + ("\n" if rows else "")

    def write_hack(self, filepath: str | Path) -> None:
        """
        Write the .hack executable: one binary instruction per line.

        Args:
            filepath: Output file path
        """
        with open(filepath, "w") as f:
            for code in self._code:
                f.write(code + "\n")

        self._log(f"Wrote {len(self._code)} instructions to {filepath}")

    def write_symbols(self, filepath: str | Path) -> None:
        """
        Write the symbol table file.

        Format: name value kind (one per line), user symbols only,
        ordered by value then name.
        """
        user = [
            s for s in self._symbols.symbols()
            if s.kind is not SymbolKind.PREDEFINED
        ]
        with open(filepath, "w") as f:
            f.write("# Symbol table\n")
            f.write("# Generated by hackasm\n")
            for sym in sorted(user, key=lambda s: (s.value, s.name)):
                f.write(f"{sym.name} {sym.value} {sym.kind}\n")

        self._log(f"Wrote symbols to {filepath}")

    def write_listing(self, filepath: str | Path) -> None:
        """Write the assembly listing file."""
        Path(filepath).write_text(self.get_listing())

        self._log(f"Wrote listing to {filepath}")


# =============================================================================
# Convenience Functions
# =============================================================================

def assemble(source: str, filename: str = "<input>",
             config: Optional[AssemblerConfig] = None) -> list[str]:
    """
    Convenience function to assemble source code.

    Raises:
        AssemblerError: If assembly fails
    """
    asm = Assembler(config=config)
    return asm.assemble_string(source, filename)


def assemble_file(filepath: str | Path,
                  config: Optional[AssemblerConfig] = None) -> list[str]:
    """
    Convenience function to assemble a file.

    Raises:
        AssemblerError: If assembly fails
        FileNotFoundError: If source file not found
    """
    asm = Assembler(config=config)
    return asm.assemble_file(filepath)
