"""
Host error types

The failure values raised by the runtime. Each carries a single message.
"""

from dataclasses import dataclass


@dataclass
class JSError(Exception):
    """Error value with one message"""
    message: str

    def __str__(self) -> str:
        return self.message

    def __hash__(self):
        return hash((type(self), self.message))


@dataclass
class JSTypeError(Exception):
    """Type error value with one message"""
    message: str

    def __str__(self) -> str:
        return self.message

    def __hash__(self):
        return hash((type(self), self.message))


class ArityError(JSError):
    """Raised when a call supplies an argument count with no entry"""

    def __init__(self, count: int):
        super().__init__(f"Invalid arity: {count}")
        self.count = count
