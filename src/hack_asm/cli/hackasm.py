"""
hackasm - Hack Assembler Command-Line Interface
================================================

This module implements the command-line interface for the Hack assembler.

Usage Examples
--------------
Basic assembly:
    $ hackasm Max.asm

With output file:
    $ hackasm Max.asm -o build/Max.hack

Generate all output files:
    $ hackasm Max.asm -o Max.hack -s Max.sym -l Max.lst

Report every bad line instead of stopping at the first:
    $ hackasm --all-errors Broken.asm

Verbose mode:
    $ hackasm -v Max.asm
"""

import logging
from pathlib import Path
from typing import Optional

import click

from hack_asm import __version__
from hack_asm.assembler import Assembler
from hack_asm.cli.errors import handle_cli_exception
from hack_asm.config import AssemblerConfig


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output .hack file (default: input.hack)",
)
@click.option(
    "-s", "--symbols",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Generate symbol file",
)
@click.option(
    "-l", "--listing",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Generate listing file",
)
@click.option(
    "--strict-addresses",
    is_flag=True,
    help="Limit @ values to 15 bits (0-32767) so bit 15 always marks "
         "A-instructions. Default: accept any 16-bit value.",
)
@click.option(
    "--all-errors",
    is_flag=True,
    help="Report every invalid instruction instead of stopping at the first.",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="hackasm")
def main(
    input_file: Path,
    output: Optional[Path],
    symbols: Optional[Path],
    listing: Optional[Path],
    strict_addresses: bool,
    all_errors: bool,
    verbose: bool,
) -> None:
    """
    Assemble Hack assembly source into a .hack executable.

    INPUT_FILE is the assembly source file (.asm) to assemble.

    \b
    Examples:
        hackasm Max.asm              # Outputs Max.hack
        hackasm Max.asm -o out.hack  # Specify output file
        hackasm Max.asm -s Max.sym   # Also write the symbol table
    """
    setup_logging(verbose)
    output_file = output if output is not None else input_file.with_suffix(".hack")

    try:
        config = AssemblerConfig.from_env()
        if strict_addresses:
            config.address_bits = 15
        if all_errors:
            config.collect_errors = True

        asm = Assembler(config=config, verbose=verbose)

        # Nothing is written unless the whole program assembled
        code = asm.assemble_file(input_file)
        asm.write_hack(output_file)

        if symbols:
            asm.write_symbols(symbols)
        if listing:
            asm.write_listing(listing)

        if verbose:
            click.echo(f"Wrote {len(code)} instructions to {output_file}")
            click.echo(f"Defined {len(asm.get_user_symbols())} symbols")

    except Exception as e:
        handle_cli_exception(e, verbose=verbose, error_type="Assembly")


if __name__ == "__main__":
    main()
