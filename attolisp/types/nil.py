from __future__ import annotations


class NilType:
    """The empty value. Falsy, and distinct from Boolean false."""

    _instance: NilType | None = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self): return "nil"
    def __bool__(self): return False

    def __eq__(self, other):
        return isinstance(other, NilType)

    def __hash__(self):
        return hash(NilType)

    # Ordering: Nil sorts below every other value and is not below itself
    def __lt__(self, other):
        return not isinstance(other, NilType)

    def __gt__(self, other):
        return False


Nil = NilType()
