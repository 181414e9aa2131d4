#!/usr/bin/env python3
import logging
import os
import sys
from typing import Optional

from plumbum import cli  # type: ignore[import-untyped]

from .config import DEFAULT_LOG_LEVEL, LOG_LEVEL_ENV, FormatConfig
from .parser import ParseError, parse
from .printer import format_program
from .serde import program_to_json

logger = logging.getLogger(__name__)


class HackParseCLI(cli.Application):
    """Parses a Hack assembly file and prints the instructions it contains."""

    PROGNAME = "hack-parse"
    VERSION = "0.1.0"

    as_json = cli.Flag(["--json"], help="Print the parsed program as JSON")
    verbose = cli.Flag(["-v", "--verbose"], help="Enable debug logging")
    output_file = cli.SwitchAttr(
        ["-o", "--output"], str, help="Output file path (default: stdout)"
    )
    config_file = cli.SwitchAttr(
        ["-c", "--config"], cli.ExistingFile, help="FormatConfig JSON file"
    )

    def _setup_logging(self) -> None:
        level = "DEBUG" if self.verbose else os.getenv(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL)
        logging.basicConfig(
            level=level.upper(), format="%(levelname)s %(name)s: %(message)s"
        )

    def main(self, input_file: cli.ExistingFile) -> int:
        """Main entry point for the CLI application."""
        self._setup_logging()

        config: Optional[FormatConfig] = None
        if self.config_file:
            try:
                config = FormatConfig.load(str(self.config_file))
            except (ValueError, TypeError) as e:
                print(f"Invalid config '{self.config_file}': {e}", file=sys.stderr)
                return 2

        with open(input_file, "r") as f:
            source_code = f.read()

        try:
            program = parse(source_code)
        except ParseError as e:
            print(
                f"{input_file}:{e.line}:{e.column}: syntax error: {e}",
                file=sys.stderr,
            )
            context = e.context(source_code)
            if context:
                print(context, file=sys.stderr)
            return 1

        logger.info("Parsed %d instructions from %s", len(program), input_file)
        if self.as_json:
            result = program_to_json(program) + "\n"
        else:
            result = format_program(program, config)

        if self.output_file:
            with open(self.output_file, "w") as f:
                f.write(result)
            logger.info("Output written to %s", self.output_file)
        else:
            sys.stdout.write(result)
        return 0


def main() -> None:
    HackParseCLI.run()


if __name__ == "__main__":
    main()
