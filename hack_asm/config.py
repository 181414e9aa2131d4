"""Formatting configuration for the pretty printer and CLI."""

import json
from dataclasses import asdict, dataclass, fields
from typing import Any, Dict

LOG_LEVEL_ENV = "HACK_ASM_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass
class FormatConfig:
    """Layout options used when re-serialising instructions."""

    indent: int = 0  # spaces before A- and C-instructions
    label_indent: int = 0
    operator_spacing: bool = False  # "D = D + A ; JGT" instead of "D=D+A;JGT"

    def __post_init__(self) -> None:
        if self.indent < 0 or self.label_indent < 0:
            raise ValueError("Indentation must not be negative")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FormatConfig":
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})

    def save(self, path: str) -> None:
        """Save configuration to JSON file."""
        with open(path, "w") as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load(cls, path: str) -> "FormatConfig":
        """Load configuration from JSON file."""
        with open(path, "r") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Expected a JSON object in {path}")
        return cls.from_dict(data)
