import builtins
from typing import Any, Callable, Optional

from corelang.errors import EndOfInputError, InvalidInputError
from corelang.types import parse_int32


class Console:
    """Line-oriented console used by ``read`` and ``write`` statements."""

    def __init__(self, input_fn: Optional[Callable[[str], str]] = None,
                 output_fn: Optional[Callable[..., Any]] = None):
        self.input_fn = input_fn if input_fn is not None else builtins.input
        self.output_fn = output_fn if output_fn is not None else builtins.print

    def read_int(self, name: str, line: Optional[int] = None) -> int:
        # Malformed input is reported and the prompt repeated until a valid
        # 32-bit integer arrives.
        while True:
            try:
                text = self.input_fn(f"{name} =? ")
            except EOFError:
                raise EndOfInputError(f"Input closed while reading {name}", line)
            try:
                return parse_int32(text)
            except InvalidInputError as e:
                self.output_fn(e.message)

    def write(self, name: str, value: int):
        self.output_fn(f"{name} = {value}")
