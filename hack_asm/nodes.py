from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Literal as L, Optional, Sequence, Tuple, Union, overload

Register = L["A", "D", "M"]
JumpCondition = L["JMP", "JGT", "JEQ", "JLT", "JGE", "JLE", "JNE"]
UnaryOp = L["not", "neg", "inc", "dec"]
BinaryOp = L["+", "-", "&", "|"]

REGISTERS: Tuple[Register, ...] = ("A", "D", "M")
JUMP_CONDITIONS: Tuple[JumpCondition, ...] = (
    "JMP",
    "JGT",
    "JEQ",
    "JLT",
    "JGE",
    "JLE",
    "JNE",
)
BINARY_OPS: Tuple[BinaryOp, ...] = ("+", "-", "&", "|")

_PREFIX_OPS = ("not", "neg")


@dataclass(frozen=True, slots=True)
class Symbol:
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True, slots=True)
class Literal:
    value: int
    # spelling as written (leading zeros); not part of equality
    text: str = field(default="", compare=False)

    def __str__(self) -> str:
        return str(self.value)


Operand = Union[Literal, Symbol]


@dataclass(frozen=True, slots=True)
class Label:
    symbol: Symbol

    @property
    def name(self) -> str:
        return self.symbol.name


@dataclass(frozen=True, slots=True)
class AtInstruction:
    operand: Operand


@dataclass(frozen=True, slots=True)
class Constant:
    value: int  # -1, 0 or 1

    def __post_init__(self) -> None:
        if self.value not in (-1, 0, 1):
            raise ValueError(f"Invalid constant: {self.value}")


@dataclass(frozen=True, slots=True)
class Unary:
    op: UnaryOp
    register: Register

    @property
    def is_prefix(self) -> bool:
        return self.op in _PREFIX_OPS

    @property
    def is_postfix(self) -> bool:
        return not self.is_prefix


@dataclass(frozen=True, slots=True)
class Binary:
    left: Register
    op: BinaryOp
    right: Register


@dataclass(frozen=True, slots=True)
class Plain:
    """A computation that is just the value of one register."""

    register: Register


Computation = Union[Constant, Unary, Binary, Plain]


@dataclass(frozen=True, slots=True)
class CInstruction:
    comp: Computation
    dest: Tuple[Register, ...] = ()
    jump: Optional[JumpCondition] = None

    def __post_init__(self) -> None:
        if not isinstance(self.dest, tuple):
            object.__setattr__(self, "dest", tuple(self.dest))
        if len(self.dest) > 3:
            raise ValueError(f"Too many destination registers: {self.dest!r}")


Instruction = Union[Label, AtInstruction, CInstruction]


@dataclass(frozen=True, slots=True)
class Program:
    """Instructions of one source file, in source order.

    ``line_numbers`` holds the 1-based source line of each instruction when
    the program came from the parser. It is informational only and is not
    compared.
    """

    instructions: Tuple[Instruction, ...] = ()
    line_numbers: Tuple[int, ...] = field(default=(), compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.instructions, tuple):
            object.__setattr__(self, "instructions", tuple(self.instructions))
        if not isinstance(self.line_numbers, tuple):
            object.__setattr__(self, "line_numbers", tuple(self.line_numbers))
        if self.line_numbers and len(self.line_numbers) != len(self.instructions):
            raise ValueError("line_numbers must match instructions")

    def __len__(self) -> int:
        return len(self.instructions)

    def __iter__(self) -> Iterator[Instruction]:
        return iter(self.instructions)

    @overload
    def __getitem__(self, index: int) -> Instruction: ...

    @overload
    def __getitem__(self, index: slice) -> Sequence[Instruction]: ...

    def __getitem__(
        self, index: Union[int, slice]
    ) -> Union[Instruction, Sequence[Instruction]]:
        return self.instructions[index]

    def located(self) -> Iterator[Tuple[Optional[int], Instruction]]:
        """Yield ``(line, instruction)``; line is None for synthesized programs."""
        if not self.line_numbers:
            for instr in self.instructions:
                yield None, instr
            return
        yield from zip(self.line_numbers, self.instructions)

    def label_positions(self) -> List[Tuple[Label, int]]:
        """Each label with the ROM index of the instruction it marks.

        Labels occupy no ROM, so the index is the number of A- and
        C-instructions that precede the label. Duplicates are reported as
        they appear.
        """
        positions: List[Tuple[Label, int]] = []
        rom_index = 0
        for instr in self.instructions:
            if isinstance(instr, Label):
                positions.append((instr, rom_index))
            else:
                rom_index += 1
        return positions
