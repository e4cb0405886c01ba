from dataclasses import dataclass
from pathlib import PurePath

from evm_asm.ops import AbstractOp


@dataclass(frozen=True)
class Import:
    """Assemble another file separately and splice in its bytecode."""
    path: PurePath

    def __str__(self):
        return f'%import("{self.path}")'


@dataclass(frozen=True)
class Include:
    """Insert another file as source text."""
    path: PurePath

    def __str__(self):
        return f'%include("{self.path}")'


@dataclass(frozen=True)
class IncludeHex:
    """Insert the raw bytes of a hex-encoded file."""
    path: PurePath

    def __str__(self):
        return f'%include_hex("{self.path}")'


Node = AbstractOp | Import | Include | IncludeHex
