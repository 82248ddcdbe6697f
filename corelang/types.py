"""Integer helpers for CORE.

CORE has a single value type: a signed 32-bit integer. Arithmetic is done
on Python integers and the result is range-checked before it is stored.
"""

from __future__ import annotations

import re
from typing import Callable, Optional

from .errors import IntegerOverflowError, IntegerUnderflowError, InvalidInputError

INT_MIN = -2 ** 31
INT_MAX = 2 ** 31 - 1

_INTEGER_RE = re.compile(r'[+-]?[0-9]+')


def in_range(value: int) -> bool:
    return INT_MIN <= value <= INT_MAX


def check_int32(value: int, line: Optional[int], render: Callable[[], str]) -> int:
    """Return ``value`` unchanged or raise if it does not fit in 32 bits.

    ``render`` returns the source text of the expression that produced the
    value. It is only called when an error message has to be built.
    """
    if in_range(value):
        return value
    if value > INT_MAX:
        raise IntegerOverflowError(
            f"Integer overflow evaluating {render()}: {value} > {INT_MAX}", line)
    raise IntegerUnderflowError(
        f"Integer underflow evaluating {render()}: {value} < {INT_MIN}", line)


def parse_int32(text: str) -> int:
    """Parse console input into a 32-bit integer.

    Surrounding whitespace is ignored. Raises ``InvalidInputError`` for
    anything that is not an optionally signed decimal integer in range.
    """
    stripped = text.strip()
    if not _INTEGER_RE.fullmatch(stripped):
        raise InvalidInputError(
            f"Invalid input {stripped!r}: expected an integer in [{INT_MIN}, {INT_MAX}]")
    value = int(stripped)
    if not in_range(value):
        raise InvalidInputError(
            f"Invalid input {stripped!r}: expected an integer in [{INT_MIN}, {INT_MAX}]")
    return value
