import pytest

from . import serde
from .nodes import AtInstruction, CInstruction, Constant, Literal, Program
from .parser import parse

SOURCE = """\
(START)
@R0
D=M
@17
AMD=D&M;JNE
D=!D
M=M-1
0;JMP
"""


def test_round_trip_json_preserves_program() -> None:
    program = parse(SOURCE)
    payload = serde.program_to_json(program, indent=None)
    restored = serde.program_from_json(payload)
    assert restored == program
    assert restored.line_numbers == program.line_numbers
    assert serde.program_to_json(restored, indent=None) == payload


def test_instruction_dict_shapes() -> None:
    assert serde.instruction_to_dict(AtInstruction(Literal(17))) == {
        "type": "at",
        "literal": 17,
    }
    assert serde.instruction_to_dict(CInstruction(comp=Constant(0), jump="JMP")) == {
        "type": "c",
        "dest": [],
        "comp": {"type": "constant", "value": 0},
        "jump": "JMP",
    }


def test_synthesized_program_has_no_lines() -> None:
    data = serde.program_to_dict(Program((AtInstruction(Literal(1)),)))
    assert "lines" not in data
    assert serde.program_from_dict(data).line_numbers == ()


def test_unknown_types_are_rejected() -> None:
    with pytest.raises(ValueError):
        serde.instruction_from_dict({"type": "macro"})
    with pytest.raises(ValueError):
        serde.computation_from_dict({"type": "ternary"})
    with pytest.raises(ValueError):
        serde.program_from_dict({"type": "label", "instructions": []})
