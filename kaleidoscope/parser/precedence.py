"""
Binary operator precedence for the Kaleidoscope parser.

Instead of one grammar rule per precedence level, the parser looks operators
up in this table while climbing. Higher numbers bind tighter. A symbol that is
missing from the table, or mapped to a value <= 0, is not a binary operator.

Author: xwest
"""

from collections.abc import MutableMapping
from typing import Dict, Iterator, Optional


# Precedence of the builtin operators
DEFAULT_PRECEDENCE: Dict[str, int] = {
    "<": 10,
    "+": 20,
    "-": 20,
    "*": 40,
}

# Returned for anything that isn't a binary operator
NOT_AN_OPERATOR = -1


class PrecedenceTable(MutableMapping):
    """
    Mutable mapping from single-character operator to precedence.

    Seeded with DEFAULT_PRECEDENCE. New operators can be installed at any
    time and take effect for the next expression parsed.
    """

    def __init__(self, entries: Optional[Dict[str, int]] = None, defaults: bool = True):
        self._table: Dict[str, int] = dict(DEFAULT_PRECEDENCE) if defaults else {}
        if entries:
            for op, precedence in entries.items():
                self.install(op, precedence)

    def precedence_of(self, op: Optional[str]) -> int:
        """Precedence of ``op`` if it is a binary operator, NOT_AN_OPERATOR otherwise."""
        if op is None:
            return NOT_AN_OPERATOR
        precedence = self._table.get(op, 0)
        if precedence <= 0:
            return NOT_AN_OPERATOR
        return precedence

    def install(self, op: str, precedence: int):
        """Add or replace the precedence of a binary operator."""
        if not isinstance(op, str) or len(op) != 1:
            raise ValueError(f"Operator must be a single character, got {op!r}")
        if not isinstance(precedence, int) or isinstance(precedence, bool):
            raise TypeError(f"Precedence must be an int, got {precedence!r}")
        self._table[op] = precedence

    def is_binary_operator(self, op: Optional[str]) -> bool:
        return self.precedence_of(op) != NOT_AN_OPERATOR

    def copy(self) -> "PrecedenceTable":
        return PrecedenceTable(dict(self._table), defaults=False)

    # MutableMapping interface

    def __getitem__(self, op: str) -> int:
        return self._table[op]

    def __setitem__(self, op: str, precedence: int):
        self.install(op, precedence)

    def __delitem__(self, op: str):
        del self._table[op]

    def __iter__(self) -> Iterator[str]:
        return iter(self._table)

    def __len__(self) -> int:
        return len(self._table)

    def __repr__(self) -> str:
        return f"PrecedenceTable({self._table!r})"
