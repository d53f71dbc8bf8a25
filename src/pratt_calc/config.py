"""
Calculator Configuration
========================

Settings shared by the tokenizer, parser, and evaluator. Configuration
can come from:
- Default values (defined here)
- Environment variables (CalcConfig.from_env)
- The pcalc command line (--bits)
"""

from dataclasses import dataclass
import os


MIN_INT_BITS = 8
MAX_INT_BITS = 64


@dataclass(frozen=True)
class CalcConfig:
    """
    Configuration for one calculation.

    Instances are immutable so the width is always validated; derive a
    changed copy with dataclasses.replace(), which re-runs __post_init__.

    Attributes:
        int_bits: Width of the signed integer that bitwise, shift and ~
                  operands are truncated to (default: 32)
        filename: Source name used in error locations (default: "<input>")
    """

    int_bits: int = 32
    filename: str = "<input>"

    def __post_init__(self):
        if not MIN_INT_BITS <= self.int_bits <= MAX_INT_BITS:
            raise ValueError(
                f"int_bits must be between {MIN_INT_BITS} and {MAX_INT_BITS}, "
                f"got {self.int_bits}"
            )

    @classmethod
    def from_env(cls) -> "CalcConfig":
        """
        Create CalcConfig from environment variables.

        Environment variables (all optional):
            PRATT_CALC_INT_BITS: Integer width for bitwise operators
            PRATT_CALC_FILENAME: Source name shown in error messages

        Returns:
            CalcConfig with values from environment variables
        """
        settings = {}

        if bits := os.environ.get("PRATT_CALC_INT_BITS"):
            try:
                value = int(bits)
            except ValueError:
                value = None  # Ignore invalid values
            if value is not None and MIN_INT_BITS <= value <= MAX_INT_BITS:
                settings["int_bits"] = value

        if filename := os.environ.get("PRATT_CALC_FILENAME"):
            settings["filename"] = filename

        return cls(**settings)

    @property
    def int_min(self) -> int:
        """Smallest value of the fixed-width integer."""
        return -(1 << (self.int_bits - 1))

    @property
    def int_max(self) -> int:
        """Largest value of the fixed-width integer."""
        return (1 << (self.int_bits - 1)) - 1
