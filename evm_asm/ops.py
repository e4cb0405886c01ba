from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from frozendict import frozendict

json_data = json.loads(Path(__file__).with_name("opcodes.json").read_text("utf-8"))

PUSH_FAMILY = "push"


@dataclass(frozen=True)
class Specifier:
    """One instruction class: mnemonic, opcode and how many immediate bytes follow the opcode."""
    mnemonic: str
    opcode: int
    immediate_size: int = 0

    @property
    def size(self) -> int:
        """Total encoded size, opcode byte included."""
        return 1 + self.immediate_size

    @property
    def is_push(self) -> bool:
        return self.immediate_size > 0

    @classmethod
    def from_mnemonic(cls, text: str) -> Specifier:
        try:
            return SPECIFIERS[text]
        except KeyError:
            raise KeyError(f"Unknown mnemonic {text!r}") from None

    @classmethod
    def push(cls, size: int) -> Specifier:
        if not 1 <= size <= 32:
            raise ValueError(f"push width must be between 1 and 32, got {size}")
        return SPECIFIERS[f"{PUSH_FAMILY}{size}"]

    def __str__(self):
        return self.mnemonic


def _build_specifiers() -> frozendict[str, Specifier]:
    specs = {name: Specifier(name, int(code, 16)) for name, code in json_data["ops"].items()}
    for family, d in json_data["families"].items():
        base = int(d["base"], 16)
        for n in range(d["first"], d["last"] + 1):
            name = f"{family}{n}"
            specs[name] = Specifier(name, base + n - d["first"], n if family == PUSH_FAMILY else 0)
    return frozendict(specs)


SPECIFIERS = _build_specifiers()


@dataclass(frozen=True)
class Constant:
    value: bytes

    def __str__(self):
        return "0x" + self.value.hex()


@dataclass(frozen=True)
class Reference:
    label: str

    def __str__(self):
        return self.label


Imm = Constant | Reference


@dataclass(frozen=True)
class Op:
    """A concrete instruction. Push instructions carry an immediate, everything else doesn't."""
    specifier: Specifier
    immediate: Imm | None = None

    def __post_init__(self):
        if not self.specifier.is_push:
            if self.immediate is not None:
                raise ValueError(f"{self.specifier} takes no immediate")
        elif self.immediate is None:
            raise ValueError(f"{self.specifier} requires an immediate")
        elif isinstance(self.immediate, Constant) and len(self.immediate.value) != self.specifier.immediate_size:
            raise ValueError(f"{self.specifier} requires exactly {self.specifier.immediate_size} immediate bytes, "
                             f"got {len(self.immediate.value)}")

    @classmethod
    def new(cls, specifier: Specifier) -> Op:
        return cls(specifier)

    @classmethod
    def with_immediate(cls, specifier: Specifier, value: bytes) -> Op:
        return cls(specifier, Constant(bytes(value)))

    @classmethod
    def with_label(cls, specifier: Specifier, label: str) -> Op:
        return cls(specifier, Reference(label))

    @property
    def size(self) -> int:
        return self.specifier.size

    def __str__(self):
        if self.immediate is None:
            return self.specifier.mnemonic
        return f"{self.specifier.mnemonic} {self.immediate}"


@dataclass(frozen=True)
class Label:
    """Marks the offset of the next instruction. Resolved downstream."""
    name: str

    @property
    def size(self) -> int:
        return 0

    def __str__(self):
        return f"{self.name}:"


@dataclass(frozen=True)
class Push:
    """Push of a value whose width isn't known yet, produced by the %push macro."""
    immediate: Imm

    @property
    def size(self) -> None:
        return None

    def __str__(self):
        return f"%push({self.immediate})"


AbstractOp = Op | Label | Push
