"""
Hack Assembler - Configuration
==============================

Assembler settings. Configuration can come from:
- Default values (defined here)
- Environment variables (``AssemblerConfig.from_env``)
- Command-line flags (applied by hackasm on top of the above)

The defaults reproduce the classic Hack assembler exactly: user variables
start at RAM[16], and address instructions are written as the full 16-bit
zero-padded value.
"""

from dataclasses import dataclass
import logging
import os

logger = logging.getLogger(__name__)

# RAM[0..15] hold the virtual registers R0-R15
DEFAULT_VARIABLE_BASE = 16

# Supported widths for the value of an address instruction
ADDRESS_WIDTHS = (15, 16)


@dataclass
class AssemblerConfig:
    """
    Configuration for a Hack assembly run.

    Attributes:
        variable_base: First RAM address handed out to user variables
        address_bits: Largest address width accepted by @ instructions.
            16 accepts 0..65535 (classic behaviour); 15 accepts 0..32767 and
            keeps bit 15 clear so it can distinguish A- from C-instructions.
        collect_errors: Keep encoding after a bad line and report every
            error at the end instead of stopping at the first one
        max_errors: Stop collecting once this many errors were seen
    """

    variable_base: int = DEFAULT_VARIABLE_BASE
    address_bits: int = 16
    collect_errors: bool = False
    max_errors: int = 100

    def __post_init__(self) -> None:
        if self.address_bits not in ADDRESS_WIDTHS:
            raise ValueError(
                f"address_bits must be one of {ADDRESS_WIDTHS}, got {self.address_bits}"
            )
        if self.variable_base < 0:
            raise ValueError(f"variable_base must be >= 0, got {self.variable_base}")
        if self.max_errors < 1:
            raise ValueError(f"max_errors must be >= 1, got {self.max_errors}")

    # =========================================================================
    # Factory Methods
    # =========================================================================

    @classmethod
    def from_env(cls) -> "AssemblerConfig":
        """
        Create an AssemblerConfig from environment variables.

        Environment variables (all optional):
            HACKASM_ADDRESS_BITS: 15 or 16
            HACKASM_COLLECT_ERRORS: 1/true/yes to collect all errors
            HACKASM_MAX_ERRORS: Error collection limit (integer)

        Invalid values are logged and ignored.
        """
        config = cls()

        if bits := os.environ.get("HACKASM_ADDRESS_BITS"):
            try:
                value = int(bits)
            except ValueError:
                value = None
            if value in ADDRESS_WIDTHS:
                config.address_bits = value
            else:
                logger.warning(f"Ignoring invalid HACKASM_ADDRESS_BITS={bits!r}")

        if collect := os.environ.get("HACKASM_COLLECT_ERRORS"):
            config.collect_errors = collect.strip().lower() in ("1", "true", "yes", "on")

        if max_errors := os.environ.get("HACKASM_MAX_ERRORS"):
            try:
                value = int(max_errors)
            except ValueError:
                value = 0
            if value >= 1:
                config.max_errors = value
            else:
                logger.warning(f"Ignoring invalid HACKASM_MAX_ERRORS={max_errors!r}")

        return config
