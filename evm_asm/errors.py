from __future__ import annotations

from dataclasses import dataclass


class ParseError(ValueError):
    """Base class of everything `parse_asm` raises. The first error aborts the whole parse."""


@dataclass(eq=False)
class LexerError(ParseError):
    line: int
    column: int
    context: str = ""

    def __str__(self):
        msg = f"syntax error at line {self.line}, column {self.column}"
        if self.context:
            msg += "\n" + self.context.rstrip("\n")
        return msg


@dataclass(eq=False)
class ImmediateTooLarge(ParseError):
    width: int
    got: int | None = None  # None: the literal doesn't even fit in 128 bits

    def __str__(self):
        if self.got is None:
            return f"immediate value too large for {self.width} byte(s)"
        return f"immediate value needs {self.got} byte(s), but only {self.width} are available"


@dataclass(eq=False)
class ExtraArgument(ParseError):
    expected: int

    def __str__(self):
        return f"too many arguments, expected {self.expected}"


@dataclass(eq=False)
class MissingArgument(ParseError):
    got: int
    expected: int

    def __str__(self):
        return f"missing argument(s), got {self.got} but expected {self.expected}"


@dataclass(eq=False)
class ArgumentType(ParseError):
    position: int
    expected: str
    got: str

    def __str__(self):
        return f"argument {self.position + 1} must be a {self.expected}, got {self.got}"
