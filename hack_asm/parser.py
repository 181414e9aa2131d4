import logging
import os
from typing import Any, Dict, Iterable, List, Optional, Tuple, cast

from lark import Lark, Token, Transformer, v_args
from lark.exceptions import UnexpectedCharacters, UnexpectedEOF, UnexpectedInput
from lark.tree import Meta

from .nodes import (
    AtInstruction,
    Binary,
    BinaryOp,
    CInstruction,
    Computation,
    Constant,
    Instruction,
    JumpCondition,
    Label,
    Literal,
    Operand,
    Plain,
    Program,
    Register,
    Symbol,
    Unary,
)

logger = logging.getLogger(__name__)

grammar_path = os.path.join(os.path.dirname(__file__), "hack.lark")
with open(grammar_path, "r") as f:
    hack_grammar = f.read()

hack_parser = Lark(
    hack_grammar,
    parser="lalr",
    lexer="contextual",
    propagate_positions=True,
    maybe_placeholders=True,
)

# Terminal names as they should read in a diagnostic.
TERMINAL_DESCRIPTIONS: Dict[str, str] = {
    "REGISTER": "register",
    "JUMP": "jump mnemonic",
    "SYMBOL": "symbol",
    "LITERAL": "literal",
    "ONE": "'1'",
    "ZERO": "'0'",
    "MINUS": "'-'",
    "PLUS": "'+'",
    "BANG": "'!'",
    "VBAR": "'|'",
    "AMPERSAND": "'&'",
    "_LPAR": "'('",
    "_RPAR": "')'",
    "_AT": "'@'",
    "_EQUAL": "'='",
    "_SEMICOLON": "';'",
    "_NEWLINE": "end of line",
    "$END": "end of input",
}


def describe_terminals(names: Iterable[str]) -> Tuple[str, ...]:
    return tuple(sorted({TERMINAL_DESCRIPTIONS.get(name, name) for name in names}))


class ParseError(Exception):
    """Raised when the source text does not match the grammar.

    ``line`` and ``column`` are 1-based; ``pos`` is the 0-based offset into
    the text handed to :func:`parse`.
    """

    def __init__(
        self,
        line: int,
        column: int,
        pos: int,
        expected: Tuple[str, ...] = (),
        found: str = "",
    ) -> None:
        self.line = line
        self.column = column
        self.pos = pos
        self.expected = expected
        self.found = found
        super().__init__(self._message())

    def _message(self) -> str:
        msg = f"line {self.line}, column {self.column}: unexpected {self.found}"
        if self.expected:
            msg += f" (expected {', '.join(self.expected)})"
        return msg

    def context(self, text: str) -> str:
        """The offending source line with a caret under the error column."""
        lines = text.splitlines()
        if not 1 <= self.line <= len(lines):
            return ""
        source_line = lines[self.line - 1].expandtabs(1)
        return f"{source_line}\n{' ' * (self.column - 1)}^"

    @classmethod
    def from_lark(cls, exc: UnexpectedInput, text: str) -> "ParseError":
        if isinstance(exc, UnexpectedEOF) or exc.pos_in_stream is None or exc.pos_in_stream < 0:
            pos = len(text)
            line = text.count("\n", 0, pos) + 1
            column = pos - (text.rfind("\n", 0, pos) + 1) + 1
            return cls(line, column, pos, describe_terminals(exc.expected), "end of input")

        pos = min(exc.pos_in_stream, len(text))
        if isinstance(exc, UnexpectedCharacters):
            expected = describe_terminals(exc.allowed or ())
            found = repr(text[pos]) if pos < len(text) else "end of input"
        else:
            expected = describe_terminals(getattr(exc, "expected", ()) or ())
            token = cast(Optional[Token], getattr(exc, "token", None))
            if token is None or token.type == "$END" or pos >= len(text):
                found = "end of input"
            elif token.type == "_NEWLINE":
                found = "end of line"
            else:
                found = repr(str(token))
        return cls(exc.line, exc.column, pos, expected, found)


class HackTransformer(Transformer):
    def start(self, items: List[Tuple[int, Instruction]]) -> Program:
        return Program(
            instructions=tuple(instr for _, instr in items),
            line_numbers=tuple(line for line, _ in items),
        )

    @v_args(meta=True)
    def instruction(self, meta: Meta, items: List[Instruction]) -> Tuple[int, Instruction]:
        return meta.line, items[0]

    # --- Instructions ---
    def label(self, items: List[Symbol]) -> Label:
        return Label(items[0])

    def at_instruction(self, items: List[Operand]) -> AtInstruction:
        return AtInstruction(items[0])

    def c_instruction(self, items: List[Any]) -> CInstruction:
        dest, comp, jump = items
        return CInstruction(
            comp=cast(Computation, comp),
            dest=tuple(dest) if dest is not None else (),
            jump=jump,
        )

    def destination(self, items: List[Register]) -> Tuple[Register, ...]:
        return tuple(items)

    def computation(self, items: List[Any]) -> Computation:
        (comp,) = items
        if isinstance(comp, str):
            # a bare register
            return Plain(cast(Register, comp))
        return cast(Computation, comp)

    # --- Computations ---
    def one(self, _: List[Token]) -> Constant:
        return Constant(1)

    def zero(self, _: List[Token]) -> Constant:
        return Constant(0)

    def neg_one(self, _: List[Token]) -> Constant:
        return Constant(-1)

    def not_(self, items: List[Any]) -> Unary:
        return Unary("not", items[1])

    def neg(self, items: List[Any]) -> Unary:
        return Unary("neg", items[1])

    def inc(self, items: List[Any]) -> Unary:
        return Unary("inc", items[0])

    def dec(self, items: List[Any]) -> Unary:
        return Unary("dec", items[0])

    def binary(self, items: List[Any]) -> Binary:
        left, op, right = items
        return Binary(left, cast(BinaryOp, str(op)), right)

    # --- Leaves ---
    def register(self, items: List[Token]) -> Register:
        return cast(Register, str(items[0]).upper())

    def jump(self, items: List[Token]) -> JumpCondition:
        return cast(JumpCondition, str(items[0]).upper())

    def symbol(self, items: List[Token]) -> Symbol:
        return Symbol(str(items[0]))

    def literal(self, items: List[Token]) -> Literal:
        text = str(items[0])
        return Literal(int(text), text)


def parse(text: str) -> Program:
    """Parses a whole source file.

    Raises :class:`ParseError` on the first syntax error; no partial result
    is returned.
    """
    source = text if text.endswith("\n") else text + "\n"
    try:
        tree = hack_parser.parse(source)
    except UnexpectedInput as e:
        error = ParseError.from_lark(e, text)
        logger.debug("Parse failed at %d:%d", error.line, error.column)
        raise error from e

    program = cast(Program, HackTransformer().transform(tree))
    logger.debug("Parsed %d instructions", len(program))
    return program


def parse_instruction(text: str) -> Instruction:
    """Parses a single instruction, e.g. ``"D=D+1"``."""
    program = parse(text)
    if len(program) != 1:
        raise ValueError(
            f"Expected exactly one instruction, found {len(program)}: {text!r}"
        )
    return program[0]
