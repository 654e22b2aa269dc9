"""
Hack Instruction Set Definition
===============================

Lookup tables for encoding Hack compute instructions (C-instructions).

A C-instruction is 16 bits wide::

    1 1 1 a c1 c2 c3 c4 c5 c6 d1 d2 d3 j1 j2 j3
    \\___/ \\_______________/ \\______/ \\______/
    prefix   computation       dest      jump

The computation field includes the ``a`` bit, which selects the A
register (a=0) or the memory operand M = RAM[A] (a=1) as the ALU's
second input.

All tables are read-only mappings built once at import time.

Reference
---------
- Nisan & Schocken, "The Elements of Computing Systems", chapter 6
"""

from types import MappingProxyType
from typing import Mapping


# Leading bits of every C-instruction
COMPUTE_PREFIX = "111"

# Width of every encoded instruction
WORD_BITS = 16


# =============================================================================
# Computation Codes (a + c1..c6)
# =============================================================================

COMP_TABLE: Mapping[str, str] = MappingProxyType({
    # a=0: constants, D and A
    "0":   "0101010",
    "1":   "0111111",
    "-1":  "0111010",
    "D":   "0001100",
    "A":   "0110000",
    "!D":  "0001101",
    "!A":  "0110001",
    "D+1": "0011111",
    "A+1": "0110111",
    "D-1": "0001110",
    "A-1": "0110010",
    "D+A": "0000010",
    "D-A": "0010011",
    "A-D": "0000111",
    "D&A": "0000000",
    "D|A": "0010101",

    # a=1: M = RAM[A]
    "M":   "1110000",
    "!M":  "1110001",
    "M+1": "1110111",
    "M-1": "1110010",
    "D+M": "1000010",
    "D-M": "1010011",
    "M-D": "1000111",
    "D&M": "1000000",
    "D|M": "1010101",
})


# =============================================================================
# Destination Codes (d1 d2 d3 = A D M)
# =============================================================================

DEST_TABLE: Mapping[str, str] = MappingProxyType({
    "":    "000",
    "M":   "001",
    "D":   "010",
    "MD":  "011",
    "A":   "100",
    "AM":  "101",
    "AD":  "110",
    "AMD": "111",
})


# =============================================================================
# Jump Codes (j1 j2 j3 = <0 =0 >0)
# =============================================================================

JUMP_TABLE: Mapping[str, str] = MappingProxyType({
    "":    "000",
    "JGT": "001",
    "JEQ": "010",
    "JGE": "011",
    "JLT": "100",
    "JNE": "101",
    "JLE": "110",
    "JMP": "111",
})


# Tables in the order their fields are checked, keyed by field name
FIELD_TABLES: Mapping[str, Mapping[str, str]] = MappingProxyType({
    "computation": COMP_TABLE,
    "destination": DEST_TABLE,
    "jump": JUMP_TABLE,
})

# Every mnemonic accepted in a compute instruction
MNEMONICS = frozenset(
    token for table in FIELD_TABLES.values() for token in table if token
)
