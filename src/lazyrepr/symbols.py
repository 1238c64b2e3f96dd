"""
Symbol interning.

Attribute names and lambda names are stored as Symbols, small integers that
index into a SymbolTable. Comparing symbols is an integer compare; the
printer resolves them back to text before sorting.
"""

from dataclasses import dataclass
from typing import Dict, List


@dataclass(frozen=True)
class Symbol:
    """An interned name. Only meaningful together with its SymbolTable."""
    id: int

    def __bool__(self) -> bool:
        return self.id != 0


NO_SYMBOL = Symbol(0)


class SymbolTable:
    """Maps names to Symbols and back."""

    def __init__(self):
        self._names: List[str] = [""]
        self._index: Dict[str, Symbol] = {}

    def create(self, name: str) -> Symbol:
        """Intern a name, returning the existing symbol if already known."""
        symbol = self._index.get(name)
        if symbol is None:
            symbol = Symbol(len(self._names))
            self._names.append(name)
            self._index[name] = symbol
        return symbol

    def __getitem__(self, symbol: Symbol) -> str:
        return self._names[symbol.id]

    def __contains__(self, name: str) -> bool:
        return name in self._index

    def __len__(self) -> int:
        return len(self._names) - 1
