from __future__ import annotations

import logging

from frozendict import frozendict
from lark import Lark, Token, v_args
from lark.exceptions import UnexpectedInput
from lark.visitors import Interpreter

from evm_asm.args import LABEL, PATH, Signature, parse_arguments
from evm_asm.errors import LexerError
from evm_asm.immediate import hex_immediate, numeric_immediate, selector_immediate
from evm_asm.nodes import Import, Include, IncludeHex, Node
from evm_asm.ops import Label, Op, Push, Reference, SPECIFIERS, Specifier

logger = logging.getLogger(__name__)

# Longest first, so that alternatives sharing a prefix (dup1/dup16) can't shadow each other.
_MNEMONICS = "|".join(sorted((s.mnemonic for s in SPECIFIERS.values() if not s.is_push), key=len, reverse=True))

parser = Lark(rf"""
start: _stmt? (_SEP _stmt?)*

_stmt: label_defn
     | push
     | op
     | import_macro
     | include_macro
     | include_hex_macro
     | push_macro

label_defn: LABEL_DEFN
op: OP
push: PUSH _operand
_operand: BINARY | OCTAL | HEX | DECIMAL | SELECTOR | IDENT

import_macro: "%import(" _arguments ")"
include_macro: "%include(" _arguments ")"
include_hex_macro: "%include_hex(" _arguments ")"
push_macro: "%push(" _arguments ")"
_arguments: (_argument ("," _argument)*)?
_argument: STRING | IDENT | BINARY | OCTAL | HEX | DECIMAL | SELECTOR

LABEL_DEFN.3: /[A-Za-z_][A-Za-z0-9_]*:/
PUSH.2: /push(?:3[0-2]|[12][0-9]|[1-9])(?![A-Za-z0-9_])/
OP.2: /(?:{_MNEMONICS})(?![A-Za-z0-9_])/
SELECTOR.2: /selector\("[A-Za-z_][A-Za-z0-9_]*\([A-Za-z0-9_,\[\]()]*\)"\)/
BINARY.2: /0b[01]+/
OCTAL.2: /0o[0-7]+/
HEX.2: /0x(?:[0-9a-fA-F][0-9a-fA-F])+/
DECIMAL: /[0-9]+/
IDENT: /[A-Za-z_][A-Za-z0-9_]*/
STRING: /"[^"\n]*"/

_SEP: /\r?\n|;/
COMMENT: /#[^\n]*/
%ignore COMMENT
%ignore /[ \t]+/
""", parser="lalr", lexer="contextual")

DIRECTIVES: frozendict[str, Signature] = frozendict({
    "import": (PATH,),
    "include": (PATH,),
    "include_hex": (PATH,),
    "push": (LABEL,),
})


class BuildProgram(Interpreter):
    """Turns the parse tree into the list of nodes, in source order."""

    def __default__(self, tree):
        raise NotImplementedError(tree.data)

    def start(self, tree) -> list[Node]:
        return [self.visit(c) for c in tree.children]

    @v_args(inline=True)
    def label_defn(self, defn: Token):
        return Label(defn.value[:-1])

    @v_args(inline=True)
    def op(self, mnemonic: Token):
        return Op.new(Specifier.from_mnemonic(mnemonic.value))

    @v_args(inline=True)
    def push(self, mnemonic: Token, operand: Token):
        spec = Specifier.from_mnemonic(mnemonic.value)
        width = spec.size - 1
        match operand.type:
            case "BINARY":
                imm = numeric_immediate(operand.value[2:], 2, width)
            case "OCTAL":
                imm = numeric_immediate(operand.value[2:], 8, width)
            case "DECIMAL":
                imm = numeric_immediate(operand.value, 10, width)
            case "HEX":
                imm = hex_immediate(operand.value[2:], width)
            case "SELECTOR":
                imm = selector_immediate(operand.value[len('selector("'):-len('")')], width)
            case "IDENT":
                return Op.with_label(spec, operand.value)
            case t:
                raise NotImplementedError(t)
        return Op.with_immediate(spec, imm)

    def import_macro(self, tree):
        path, = parse_arguments(tree.children, DIRECTIVES["import"])
        return Import(path)

    def include_macro(self, tree):
        path, = parse_arguments(tree.children, DIRECTIVES["include"])
        return Include(path)

    def include_hex_macro(self, tree):
        path, = parse_arguments(tree.children, DIRECTIVES["include_hex"])
        return IncludeHex(path)

    def push_macro(self, tree):
        # Only labels for now. Literals would need a width, which %push leaves to the assembler.
        label, = parse_arguments(tree.children, DIRECTIVES["push"])
        return Push(Reference(label))


def parse_asm(text: str) -> list[Node]:
    try:
        tree = parser.parse(text)
    except UnexpectedInput as e:
        raise LexerError(e.line, e.column, e.get_context(text)) from e
    program = BuildProgram().visit(tree)
    logger.debug("parsed %d node(s)", len(program))
    return program
