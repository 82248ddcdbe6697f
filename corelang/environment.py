from typing import Dict, List, Optional

from corelang.errors import NoMoreDeclarationsError, RedeclaredError, UndeclaredError


class SymbolTable:
    """Maps declared variable names to their value, or None while unset.

    The parser declares names as it consumes them and checks every later
    use against the table. The interpreter reads and stores values.
    """
    MAX_CAPACITY = 20

    def __init__(self, capacity: int = MAX_CAPACITY):
        self.capacity = capacity
        self.values: Dict[str, Optional[int]] = {}

    def __contains__(self, name: str) -> bool:
        return name in self.values

    def __len__(self) -> int:
        return len(self.values)

    def contains(self, name: str) -> bool:
        return name in self.values

    @property
    def names(self) -> List[str]:
        return list(self.values.keys())

    def declare(self, name: str, line: Optional[int] = None):
        if name in self.values:
            raise RedeclaredError(f"{name} already declared", line)
        if len(self.values) >= self.capacity:
            raise NoMoreDeclarationsError(
                f"Cannot declare {name}: at most {self.capacity} variables allowed", line)
        self.values[name] = None

    def get(self, name: str, line: Optional[int] = None) -> Optional[int]:
        if name not in self.values:
            raise UndeclaredError(f"Using undeclared variable {name}", line)
        return self.values[name]

    def set(self, name: str, value: int, line: Optional[int] = None):
        if name not in self.values:
            raise UndeclaredError(f"Using undeclared variable {name}", line)
        self.values[name] = value
