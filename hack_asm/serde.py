from __future__ import annotations

import json
from typing import Any, Dict, List

from .nodes import (
    AtInstruction,
    Binary,
    CInstruction,
    Computation,
    Constant,
    Instruction,
    Label,
    Literal,
    Plain,
    Program,
    Symbol,
    Unary,
)

_KIND = "type"


def computation_to_dict(comp: Computation) -> Dict[str, Any]:
    if isinstance(comp, Constant):
        return {_KIND: "constant", "value": comp.value}
    if isinstance(comp, Plain):
        return {_KIND: "register", "register": comp.register}
    if isinstance(comp, Unary):
        return {_KIND: "unary", "op": comp.op, "register": comp.register}
    if isinstance(comp, Binary):
        return {
            _KIND: "binary",
            "left": comp.left,
            "op": comp.op,
            "right": comp.right,
        }
    raise TypeError(f"Unsupported computation: {comp!r}")


def computation_from_dict(data: Dict[str, Any]) -> Computation:
    kind = data[_KIND]
    if kind == "constant":
        return Constant(data["value"])
    if kind == "register":
        return Plain(data["register"])
    if kind == "unary":
        return Unary(data["op"], data["register"])
    if kind == "binary":
        return Binary(data["left"], data["op"], data["right"])
    raise ValueError(f"Unknown computation type: {kind}")


def instruction_to_dict(instr: Instruction) -> Dict[str, Any]:
    if isinstance(instr, Label):
        return {_KIND: "label", "symbol": instr.name}
    if isinstance(instr, AtInstruction):
        operand = instr.operand
        if isinstance(operand, Literal):
            return {_KIND: "at", "literal": operand.value}
        return {_KIND: "at", "symbol": operand.name}
    if isinstance(instr, CInstruction):
        return {
            _KIND: "c",
            "dest": list(instr.dest),
            "comp": computation_to_dict(instr.comp),
            "jump": instr.jump,
        }
    raise TypeError(f"Unsupported instruction: {instr!r}")


def instruction_from_dict(data: Dict[str, Any]) -> Instruction:
    kind = data[_KIND]
    if kind == "label":
        return Label(Symbol(data["symbol"]))
    if kind == "at":
        if "literal" in data:
            return AtInstruction(Literal(data["literal"]))
        return AtInstruction(Symbol(data["symbol"]))
    if kind == "c":
        return CInstruction(
            comp=computation_from_dict(data["comp"]),
            dest=tuple(data.get("dest") or ()),
            jump=data.get("jump"),
        )
    raise ValueError(f"Unknown instruction type: {kind}")


def program_to_dict(program: Program) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        _KIND: "program",
        "instructions": [instruction_to_dict(i) for i in program],
    }
    if program.line_numbers:
        data["lines"] = list(program.line_numbers)
    return data


def program_from_dict(data: Dict[str, Any]) -> Program:
    if data.get(_KIND) != "program":
        raise ValueError(f"Not a serialized program: {data.get(_KIND)!r}")
    instructions: List[Instruction] = [
        instruction_from_dict(item) for item in data["instructions"]
    ]
    return Program(tuple(instructions), tuple(data.get("lines", ())))


def program_to_json(program: Program, indent: int | None = 2) -> str:
    return json.dumps(program_to_dict(program), indent=indent)


def program_from_json(payload: str) -> Program:
    return program_from_dict(json.loads(payload))
