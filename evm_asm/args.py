from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePath
from typing import Any, Callable, Sequence

from frozendict import frozendict
from lark import Token

from evm_asm.errors import ArgumentType, ExtraArgument, MissingArgument

# Names used in diagnostics for the lexical forms an argument can take.
TOKEN_KINDS = frozendict({
    "STRING": "string",
    "IDENT": "identifier",
    "BINARY": "binary literal",
    "OCTAL": "octal literal",
    "DECIMAL": "decimal literal",
    "HEX": "hex literal",
    "SELECTOR": "selector",
})


def _unquote(raw: str) -> str:
    return raw[1:-1]


@dataclass(frozen=True)
class ArgumentKind:
    name: str
    token_type: str
    convert: Callable[[str], Any]

    def __repr__(self):
        return self.name


PATH = ArgumentKind("path", "STRING", lambda raw: PurePath(_unquote(raw)))
LABEL = ArgumentKind("label", "IDENT", str)
SIGNATURE = ArgumentKind("signature", "STRING", _unquote)

Signature = tuple[ArgumentKind, ...]


def parse_arguments(tokens: Sequence[Token], signature: Signature) -> tuple:
    """Check `tokens` against `signature` and convert each of them.

    The arity is checked before any of the types, so `%import()` and `%import(1, 2)` report the count
    even though the literals would also fail the type check.
    """
    if len(tokens) < len(signature):
        raise MissingArgument(len(tokens), len(signature))
    if len(tokens) > len(signature):
        raise ExtraArgument(len(signature))
    out = []
    for position, (token, kind) in enumerate(zip(tokens, signature)):
        if token.type != kind.token_type:
            raise ArgumentType(position, kind.name, TOKEN_KINDS.get(token.type, token.type))
        out.append(kind.convert(token.value))
    return tuple(out)
