from __future__ import annotations
import sys


class Symbol:
    """A case-sensitive name. Two symbols are the same symbol when their names match."""

    __slots__ = ("name",)

    def __init__(self, name: str):
        self.name = sys.intern(name)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Symbol):
            return self.name is other.name or self.name == other.name
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.name)

    def __repr__(self):
        return f"Symbol({self.name!r})"

    def __str__(self):
        return self.name
