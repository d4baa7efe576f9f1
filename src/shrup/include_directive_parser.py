"""Include Directive Parser for shell scripts.

This module provides the IncludeDirectiveParser class for recognizing
``#include`` directives in shell script lines and extracting the referenced
path. Four argument forms are supported, tried in this order:

    #include <path>
    #include "path"
    #include 'path'
    #include path
"""

from __future__ import annotations

import io
import re
from pathlib import Path

from shrup.errors import InvalidIncludeDirective
from shrup.include_directive import IncludeDirective, IncludeQuoteType

# Matches the directive keyword: optional indentation, "#include", then either
# whitespace or the end of the line. "#includes" or "#include_guard" do not match.
INCLUDE_PATTERN = re.compile(r"^\s*#include(?:\s+(?P<argument>.*?))?\s*$")

# Opening delimiter -> (closing delimiter, quote type), in precedence order
DELIMITERS: dict[str, tuple[str, IncludeQuoteType]] = {
    "<": (">", IncludeQuoteType.ANGLE_BRACKETS),
    '"': ('"', IncludeQuoteType.DOUBLE_QUOTES),
    "'": ("'", IncludeQuoteType.SINGLE_QUOTES),
}

DELIMITER_CHARACTERS = frozenset('<>"\'')


class IncludeDirectiveParser:
    """Parser for extracting include directives from shell script content.

    The parser is stateless; a single instance can be shared by any number of
    expansions.
    """

    def extract_includes(self, content: str, source_file: Path) -> list[IncludeDirective]:
        """Extract every include directive from a document.

        Args:
            content: The file content to parse.
            source_file: Path of the file being parsed.

        Returns:
            A list of IncludeDirective objects in line order.

        Raises:
            InvalidIncludeDirective: If any directive line is malformed.
        """
        directives: list[IncludeDirective] = []
        # Same line splitting as reading a file with newline=""
        for line_number, line in enumerate(io.StringIO(content, newline=""), start=1):
            directive = self.parse_line(line, line_number, source_file)
            if directive is not None:
                directives.append(directive)
        return directives

    def parse_line(
        self,
        line: str,
        line_number: int,
        source_file: Path,
    ) -> IncludeDirective | None:
        """Parse a single line.

        Args:
            line: The line text, with or without its line terminator.
            line_number: The 1-indexed line number, used for diagnostics.
            source_file: Path of the file containing the line.

        Returns:
            The parsed IncludeDirective, or None if the line is not a directive.

        Raises:
            InvalidIncludeDirective: If the line starts a directive but the
                argument is empty or its delimiters do not match.
        """
        match = INCLUDE_PATTERN.match(line.rstrip("\r\n"))
        if match is None:
            return None

        argument = match.group("argument") or ""
        parsed = self._split_argument(argument)
        if parsed is None:
            raise InvalidIncludeDirective(line_number, line.strip(), source_file)

        raw_path, quote_type = parsed
        return IncludeDirective(
            line_number=line_number,
            raw_path=raw_path,
            quote_type=quote_type,
            source_file=source_file,
        )

    def _split_argument(self, argument: str) -> tuple[str, IncludeQuoteType] | None:
        """Split a directive argument into its path and quote type.

        Args:
            argument: The trimmed text following ``#include``.

        Returns:
            A (path, quote_type) tuple, or None if the argument is malformed.
        """
        if not argument:
            return None

        opener = argument[0]
        if opener in DELIMITERS:
            closer, quote_type = DELIMITERS[opener]
            # The closer must be the last character and must not be the opener itself
            if len(argument) < 2 or argument[-1] != closer:
                return None
            path = argument[1:-1]
            if not path or closer in path:
                return None
            return path, quote_type

        if DELIMITER_CHARACTERS.intersection(argument):
            return None
        return argument, IncludeQuoteType.NONE
