"""
Hack Symbol Table
=================

Maps symbol names to unsigned addresses. Every table starts out seeded
with the predefined Hack symbols and grows with user labels (pass 1) and
user variables (pass 2).

Predefined Symbols
------------------
| Symbol       | Value         |
|--------------|---------------|
| R0 .. R15    | 0 .. 15       |
| SP           | 0             |
| LCL          | 1             |
| ARG          | 2             |
| THIS         | 3             |
| THAT         | 4             |
| SCREEN       | 16384 ($4000) |
| KBD          | 24576 ($6000) |

Names are unique across the three kinds. A name is only ever inserted
while absent, so the first definition wins: a label called ``SP`` keeps
the value 0 and a label defined twice keeps its first address.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Iterator, Mapping, Optional


# =============================================================================
# Predefined Symbols
# =============================================================================

SCREEN_ADDRESS = 0x4000
KEYBOARD_ADDRESS = 0x6000

PREDEFINED_SYMBOLS: Mapping[str, int] = MappingProxyType({
    # Virtual registers
    **{f"R{n}": n for n in range(16)},

    # VM pointers
    "SP": 0,
    "LCL": 1,
    "ARG": 2,
    "THIS": 3,
    "THAT": 4,

    # Memory-mapped I/O
    "SCREEN": SCREEN_ADDRESS,
    "KBD": KEYBOARD_ADDRESS,
})


class SymbolKind(Enum):
    """Where a symbol's binding came from."""
    PREDEFINED = "predefined"
    LABEL = "label"
    VARIABLE = "variable"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Symbol:
    """A single symbol table entry."""
    name: str
    value: int
    kind: SymbolKind


# =============================================================================
# Symbol Table
# =============================================================================

class SymbolTable:
    """
    Symbol name to address mapping with first-writer-wins insertion.

    Supports ``in``, ``len()``, iteration over names and ``table[name]``
    lookups. Entries are never overwritten or removed.
    """

    def __init__(self, predefined: Optional[Mapping[str, int]] = None):
        """
        Create a table seeded with the predefined symbols.

        Args:
            predefined: Symbols to seed instead of PREDEFINED_SYMBOLS
        """
        self._symbols: dict[str, Symbol] = {}
        seed = PREDEFINED_SYMBOLS if predefined is None else predefined
        for name, value in seed.items():
            self._symbols[name] = Symbol(name, value, SymbolKind.PREDEFINED)

    def __contains__(self, name: object) -> bool:
        return name in self._symbols

    def __getitem__(self, name: str) -> int:
        return self._symbols[name].value

    def __len__(self) -> int:
        return len(self._symbols)

    def __iter__(self) -> Iterator[str]:
        return iter(self._symbols)

    def get(self, name: str, default: Optional[int] = None) -> Optional[int]:
        """Return the value bound to ``name``, or ``default``."""
        symbol = self._symbols.get(name)
        return symbol.value if symbol is not None else default

    def lookup(self, name: str) -> Optional[Symbol]:
        """Return the full entry for ``name``, or None."""
        return self._symbols.get(name)

    def add_if_absent(self, name: str, value: int, kind: SymbolKind) -> bool:
        """
        Bind ``name`` to ``value`` unless it is already bound.

        Args:
            name: Symbol name
            value: Unsigned address or value
            kind: LABEL or VARIABLE

        Returns:
            True if the symbol was inserted, False if it already existed
        """
        if name in self._symbols:
            return False
        if value < 0:
            raise ValueError(f"symbol '{name}' must be unsigned, got {value}")
        self._symbols[name] = Symbol(name, value, kind)
        return True

    def add_label(self, name: str, address: int) -> bool:
        """Bind a label to an instruction address if not already bound."""
        return self.add_if_absent(name, address, SymbolKind.LABEL)

    def add_variable(self, name: str, address: int) -> bool:
        """Bind a variable to a RAM address if not already bound."""
        return self.add_if_absent(name, address, SymbolKind.VARIABLE)

    def symbols(self, kind: Optional[SymbolKind] = None) -> list[Symbol]:
        """
        Return entries in insertion order, optionally filtered by kind.
        """
        entries = self._symbols.values()
        if kind is None:
            return list(entries)
        return [s for s in entries if s.kind is kind]

    def as_dict(self) -> dict[str, int]:
        """Return a plain name -> value copy of the table."""
        return {name: s.value for name, s in self._symbols.items()}
