from __future__ import annotations

from typing import Optional

from .config import FormatConfig
from .nodes import (
    AtInstruction,
    Binary,
    CInstruction,
    Computation,
    Constant,
    Instruction,
    Label,
    Plain,
    Program,
    Unary,
)

_DEFAULT_CONFIG = FormatConfig()


def format_computation(comp: Computation, config: Optional[FormatConfig] = None) -> str:
    config = config or _DEFAULT_CONFIG
    if isinstance(comp, Constant):
        return str(comp.value)
    if isinstance(comp, Plain):
        return comp.register
    if isinstance(comp, Unary):
        if comp.op == "not":
            return f"!{comp.register}"
        if comp.op == "neg":
            return f"-{comp.register}"
        op = "+" if comp.op == "inc" else "-"
        sep = " " if config.operator_spacing else ""
        return f"{comp.register}{sep}{op}{sep}1"
    if isinstance(comp, Binary):
        sep = " " if config.operator_spacing else ""
        return f"{comp.left}{sep}{comp.op}{sep}{comp.right}"
    raise TypeError(f"Unsupported computation: {comp!r}")


def format_instruction(instr: Instruction, config: Optional[FormatConfig] = None) -> str:
    config = config or _DEFAULT_CONFIG
    if isinstance(instr, Label):
        return " " * config.label_indent + f"({instr.name})"

    pad = " " * config.indent
    if isinstance(instr, AtInstruction):
        return f"{pad}@{instr.operand}"
    if isinstance(instr, CInstruction):
        sep = " " if config.operator_spacing else ""
        text = format_computation(instr.comp, config)
        if instr.dest:
            text = f"{''.join(instr.dest)}{sep}={sep}{text}"
        if instr.jump is not None:
            text = f"{text}{sep};{sep}{instr.jump}"
        return pad + text
    raise TypeError(f"Unsupported instruction: {instr!r}")


def format_program(program: Program, config: Optional[FormatConfig] = None) -> str:
    if not program.instructions:
        return ""
    return "\n".join(format_instruction(i, config) for i in program) + "\n"
