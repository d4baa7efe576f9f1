"""Include Directive data model for shell script includes.

This module provides the IncludeDirective dataclass that represents a single
``#include`` line in a shell script, together with the IncludeQuoteType enum
describing how the referenced path was delimited.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path, PurePosixPath


class IncludeQuoteType(Enum):
    """Delimiter style used around the path of an include directive."""

    ANGLE_BRACKETS = "angle_brackets"  # <path>
    DOUBLE_QUOTES = "double_quotes"  # "path"
    SINGLE_QUOTES = "single_quotes"  # 'path'
    NONE = "none"  # path


@dataclass(frozen=True)
class IncludeDirective:
    """Represents a shell script include directive.

    This immutable dataclass holds the information parsed from one
    ``#include`` line. It lives only as long as it takes the resolver to turn
    it into a canonical path.

    Attributes:
        line_number: Line number of the directive (1-indexed)
        raw_path: The path exactly as written in the directive
        quote_type: The delimiter style used around the path
        source_file: Path of the file containing the directive
    """

    line_number: int
    raw_path: str
    quote_type: IncludeQuoteType
    source_file: Path

    @property
    def is_absolute(self) -> bool:
        """Whether the raw path is written as an absolute path."""
        return PurePosixPath(self.raw_path).is_absolute()
