"""Parser for Hack machine assembly."""

from .nodes import (
    AtInstruction,
    Binary,
    CInstruction,
    Computation,
    Constant,
    Instruction,
    JumpCondition,
    Label,
    Literal,
    Plain,
    Program,
    Register,
    Symbol,
    Unary,
)
from .parser import ParseError, parse, parse_instruction
from .printer import format_instruction, format_program

__all__ = [
    "AtInstruction",
    "Binary",
    "CInstruction",
    "Computation",
    "Constant",
    "Instruction",
    "JumpCondition",
    "Label",
    "Literal",
    "Plain",
    "Program",
    "Register",
    "Symbol",
    "Unary",
    "ParseError",
    "parse",
    "parse_instruction",
    "format_instruction",
    "format_program",
]
