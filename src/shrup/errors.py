"""Error types raised while preprocessing shell scripts.

Every failure in the include-resolution engine is reported with one of the
exceptions below. They all derive from PreprocessorError, so callers can catch
a single type and still inspect the specific kind of failure.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from shrup.include_directive import IncludeDirective


class PreprocessorError(Exception):
    """Base class for all preprocessor errors.

    Attributes:
        include_stack: Canonical paths of the files being expanded when the
            error occurred (outermost first), or None if not recorded yet.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.include_stack: tuple[Path, ...] | None = None


class InvalidIncludeDirective(PreprocessorError):
    """A recognized #include line has malformed syntax."""

    def __init__(self, line_number: int, directive: str, source_file: Path | None = None) -> None:
        self.line_number = line_number
        self.directive = directive
        self.source_file = source_file
        location = f"{source_file}:{line_number}" if source_file is not None else f"line {line_number}"
        super().__init__(f"Invalid include directive at {location}: {directive}")


class FileNotFound(PreprocessorError):
    """The include target does not exist, is not a file, or escapes the base directory."""

    def __init__(self, path: Path, directive: IncludeDirective | None = None) -> None:
        self.path = path
        self.directive = directive
        super().__init__(f"File not found: {path}{_directive_suffix(directive)}")


class PermissionDenied(PreprocessorError):
    """The include target exists but cannot be read."""

    def __init__(self, path: Path, directive: IncludeDirective | None = None) -> None:
        self.path = path
        self.directive = directive
        super().__init__(f"Permission denied: {path}{_directive_suffix(directive)}")


class CircularDependency(PreprocessorError):
    """The include target is already being expanded further up the chain.

    Attributes:
        path: The canonical path that was included a second time.
        chain: The full include chain, ending with the repeated path.
    """

    def __init__(self, path: Path, chain: tuple[Path, ...]) -> None:
        self.path = path
        self.chain = chain
        rendered = " -> ".join(str(item) for item in chain)
        super().__init__(f"Circular dependency detected: {path} (include chain: {rendered})")


class MaxDepthExceeded(PreprocessorError):
    """Including the target would nest deeper than the configured maximum."""

    def __init__(self, path: Path, max_depth: int) -> None:
        self.path = path
        self.max_depth = max_depth
        super().__init__(f"Maximum include depth ({max_depth}) exceeded at: {path}")


class IoError(PreprocessorError):
    """Any other filesystem failure; the original OSError is the __cause__."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"IO error on {path}: {reason}")


def _directive_suffix(directive: IncludeDirective | None) -> str:
    if directive is None:
        return ""
    return f" (included from {directive.source_file}:{directive.line_number})"
