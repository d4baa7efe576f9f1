"""Path Resolver for include directives.

This module provides the PathResolver class, which turns the raw path of an
include directive into a canonical absolute path confined to the base
directory, and validates that the target can be read.
"""

from __future__ import annotations

import logging
import os
import stat
from pathlib import Path

from shrup.errors import FileNotFound, IoError, PermissionDenied
from shrup.include_directive import IncludeDirective

logger = logging.getLogger(__name__)


class PathResolver:
    """Resolves include paths against a sandboxed base directory.

    Resolution rules:
    - Absolute paths ("/lib/x.sh") are rooted at the base directory, not at
      the filesystem root
    - Relative paths are resolved against the directory of the including file
    - The canonical result (symlinks resolved, "." and ".." collapsed) must
      stay inside the base directory
    """

    def __init__(self, base_directory: Path) -> None:
        """Initialize the resolver.

        Args:
            base_directory: The sandbox root. It is canonicalized once here.

        Raises:
            IoError: If the base directory cannot be canonicalized.
        """
        self._base_directory = self._canonicalize(Path(base_directory))

    @property
    def base_directory(self) -> Path:
        return self._base_directory

    def resolve(self, directive: IncludeDirective) -> Path:
        """Resolve an include directive to a canonical, readable file path.

        Args:
            directive: The parsed include directive.

        Returns:
            The canonical absolute path of the included file.

        Raises:
            FileNotFound: If the target is missing, is not a regular file, or
                lies outside the base directory.
            PermissionDenied: If the target exists but is not readable.
            IoError: For any other filesystem failure.
        """
        if directive.is_absolute:
            # Rooted at the sandbox: strip the leading separators
            candidate = self._base_directory / directive.raw_path.lstrip("/")
        else:
            candidate = Path(directive.source_file).parent / directive.raw_path

        canonical = self._canonicalize(candidate, directive)
        if not canonical.is_relative_to(self._base_directory):
            logger.debug(f"Rejected {directive.raw_path!r}: {canonical} is outside {self._base_directory}")
            # Only the raw path is reported; the canonical one lies outside the sandbox
            raise FileNotFound(Path(directive.raw_path), directive)

        self._check_readable(canonical, directive)
        logger.debug(f"Resolved {directive.raw_path!r} from {directive.source_file} to {canonical}")
        return canonical

    def resolve_input(self, path: Path) -> Path:
        """Canonicalize and validate the top-level input file.

        The input is not subject to the sandbox check; the base directory
        normally is the input's own directory.

        Args:
            path: The input file path, relative to the working directory or absolute.

        Returns:
            The canonical absolute path of the input file.
        """
        canonical = self._canonicalize(Path(path))
        self._check_readable(canonical)
        return canonical

    def _canonicalize(self, path: Path, directive: IncludeDirective | None = None) -> Path:
        try:
            return path.resolve()
        except PermissionError as e:
            raise PermissionDenied(path, directive) from e
        except (OSError, RuntimeError) as e:
            # RuntimeError: symlink loop on older interpreters
            raise IoError(path, f"cannot canonicalize: {e}") from e

    def _check_readable(self, path: Path, directive: IncludeDirective | None = None) -> None:
        try:
            st = path.stat()
        except (FileNotFoundError, NotADirectoryError) as e:
            raise FileNotFound(path, directive) from e
        except PermissionError as e:
            raise PermissionDenied(path, directive) from e
        except OSError as e:
            raise IoError(path, f"cannot stat: {e}") from e

        if not stat.S_ISREG(st.st_mode):
            raise FileNotFound(path, directive)
        if not os.access(path, os.R_OK):
            raise PermissionDenied(path, directive)
